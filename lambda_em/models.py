# -*- coding: utf-8 -*-
"""Core data models for EM survey projects.

This module contains the Pydantic models persisted by the survey store:
- CommonParams: per-project survey parameters
- GPSLocation: a cached GPS fix
- StationMeasurement: one frequency reading of one station
- Project: a named survey with its stations

Field aliases match the persisted JSON field names (``transcat``,
``averageResistivity``, ``txCurrent``...). Python code may use either the
snake_case names or the aliases.
"""

from __future__ import annotations

from typing import Annotated
from typing import NamedTuple

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002

from lambda_em.constants import FIRST_STATION_OFFSET
from lambda_em.constants import MAX_TRANSECT
from lambda_em.constants import STATIONS_PER_TRANSECT
from lambda_em.enums import Frequency

FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]


class CommonParams(BaseModel):
    """Survey parameters shared by every station of a project.

    Attributes:
        transcat_number: Transect (line) identifier, ``0 <= n < 100``
        interstation: Meters between consecutive stations
        average_resistivity: Background resistivity (Ω·m) used for depth
        intercoil: Transmitter / receiver coil separation (m)
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    transcat_number: Annotated[
        int,
        Field(
            alias="transcat",
            ge=0,
            lt=MAX_TRANSECT,
            description="Transect number (0-99)",
        ),
    ]

    interstation: Annotated[
        float,
        Field(ge=0, allow_inf_nan=False, description="Station spacing in meters"),
    ]

    average_resistivity: Annotated[
        float,
        Field(
            alias="averageResistivity",
            gt=0,
            allow_inf_nan=False,
            description="Background resistivity in Ω·m",
        ),
    ]

    intercoil: Annotated[
        float,
        Field(gt=0, allow_inf_nan=False, description="Coil separation in meters"),
    ]

    @property
    def starting_station(self) -> int:
        """First station number of the transect (``transcat * 100 + 1``)."""
        return self.transcat_number * STATIONS_PER_TRANSECT + FIRST_STATION_OFFSET

    @property
    def last_station(self) -> int:
        """Last station number reserved for the transect."""
        return (self.transcat_number + 1) * STATIONS_PER_TRANSECT - 1


class GPSLocation(BaseModel):
    """A GPS fix in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: Latitude
    longitude: Longitude


class RawReading(BaseModel):
    """A single instrument response.

    Attributes:
        current: Transmitter current (A)
        voltage: Receiver voltage (V)
    """

    model_config = ConfigDict(frozen=True)

    current: FiniteFloat
    voltage: FiniteFloat


class StationMeasurement(BaseModel):
    """One frequency reading of a committed station.

    ``date`` and ``time`` are the timestamp of the station commit and are
    shared by every measurement of the station.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    frequency: Frequency
    tx_current: float = Field(alias="txCurrent")
    rx_voltage: float = Field(alias="rxVoltage")
    latitude: Latitude = 0.0
    longitude: Longitude = 0.0
    distance: float
    calculated_depth: float = Field(alias="calculatedDepth")
    calculated_conductivity: float = Field(alias="calculatedConductivity")
    calculated_resistivity: float = Field(alias="calculatedResistivity")
    date: str
    time: str

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, value: int | str | Frequency) -> Frequency:
        return Frequency.parse(value)


class ProjectSummary(NamedTuple):
    """Listing entry for a stored project."""

    name: str
    station_count: int
    average_resistivity: float


class Project(BaseModel):
    """A named survey: common parameters plus committed stations.

    ``stations`` maps absolute station numbers (``transcat * 100 + n``) to the
    ordered measurements of that station. Several transects may share one
    project; their station numbers never collide because the transect is
    encoded in the hundreds.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Annotated[str, Field(min_length=1)]
    common: CommonParams
    stations: dict[int, list[StationMeasurement]] = Field(default_factory=dict)
    gps: GPSLocation | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Project name cannot be blank")
        return value

    @property
    def starting_station(self) -> int:
        return self.common.starting_station

    @property
    def station_numbers(self) -> list[int]:
        return list(self.stations)

    @property
    def station_count(self) -> int:
        return len(self.stations)

    @property
    def measurement_count(self) -> int:
        return sum(len(measurements) for measurements in self.stations.values())

    def summary(self) -> ProjectSummary:
        return ProjectSummary(
            name=self.name,
            station_count=self.station_count,
            average_resistivity=self.common.average_resistivity,
        )
