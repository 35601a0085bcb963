# -*- coding: utf-8 -*-
"""Project aggregation and station numbering.

Station numbers are derived, never chosen: transect ``n`` starts at
``n * 100 + 1`` and every committed station advances the cursor by one.
Starting a new transect increments the project's transect number and
jumps the cursor to the new transect's starting station; stations of the
previous transects stay in the project.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from lambda_em.constants import FIRST_STATION_OFFSET
from lambda_em.constants import MAX_TRANSECT
from lambda_em.constants import STATIONS_PER_TRANSECT
from lambda_em.enums import Frequency
from lambda_em.errors import IncompleteStationError
from lambda_em.errors import TransectOverflowError
from lambda_em.models import CommonParams
from lambda_em.models import GPSLocation
from lambda_em.models import Project
from lambda_em.models import StationMeasurement
from lambda_em.validation import validate_common_params
from lambda_em.validation import validate_project_name

logger = logging.getLogger(__name__)


def starting_station(transcat_number: int) -> int:
    """First station number of a transect.

    Examples:
        >>> starting_station(3)
        301
    """
    return transcat_number * STATIONS_PER_TRANSECT + FIRST_STATION_OFFSET


def transect_of(station_number: int) -> int:
    """Transect encoded in the hundreds of a station number."""
    return station_number // STATIONS_PER_TRANSECT


def next_station_from_existing(project: Project) -> int:
    """Derive the next station to survey from persisted stations.

    The project's active transect (``common.transcat``) is continued: the
    result is one past the highest station already committed on that
    transect, or its starting station when it has none yet. Stations of
    earlier transects are ignored.

    Args:
        project: A persisted project

    Returns:
        The next absolute station number
    """
    transcat = project.common.transcat_number
    on_transect = [
        number for number in project.stations if transect_of(number) == transcat
    ]
    if not on_transect:
        return starting_station(transcat)
    return max(on_transect) + 1


class ProjectAggregator:
    """Owns a project and its station cursor for one editing session.

    Not safe for concurrent mutation: one aggregator per open project.
    """

    def __init__(self, project: Project, current_station: int | None = None):
        self._project = project
        self._current_station = (
            next_station_from_existing(project)
            if current_station is None
            else current_station
        )

    @classmethod
    def initialize(
        cls,
        name: str,
        common: Mapping[str, Any] | CommonParams,
        gps: GPSLocation | None = None,
    ) -> ProjectAggregator:
        """Create a new project from setup input.

        Args:
            name: Project name
            common: Raw setup values (strings accepted) or CommonParams
            gps: Cached GPS fix, if any

        Returns:
            Aggregator with its cursor on the transect's starting station

        Raises:
            ValidationError: If any setup field is missing or invalid
        """
        project = Project(
            name=validate_project_name(name),
            common=validate_common_params(common),
            gps=gps,
        )
        logger.info(
            "Initialized project `%s` on transect %s (starting station %s)",
            project.name,
            project.common.transcat_number,
            project.starting_station,
        )
        return cls(project, current_station=project.starting_station)

    @classmethod
    def resume(cls, project: Project) -> ProjectAggregator:
        """Reopen a persisted project, deriving the cursor from its stations."""
        return cls(project)

    @property
    def project(self) -> Project:
        return self._project

    @property
    def current_station(self) -> int:
        return self._current_station

    @property
    def transcat_number(self) -> int:
        return self._project.common.transcat_number

    @property
    def starting_station(self) -> int:
        return self._project.starting_station

    def ensure_cursor_in_transect(self) -> None:
        """Check the cursor still lies within the active transect.

        Raises:
            TransectOverflowError: If the cursor left the transect's range
        """
        station = self._current_station
        last_station = self._project.common.last_station
        if not self.starting_station <= station <= last_station:
            raise TransectOverflowError(
                f"Station {station} is outside transect {self.transcat_number} "
                f"({self.starting_station}-{last_station})",
                fields=("transcat",),
            )

    def commit_station(
        self,
        measurements: Iterable[StationMeasurement],
        persist: Callable[[Project], None] | None = None,
    ) -> Project:
        """Store the measurements under the current station and advance.

        The updated project is built as a copy. When ``persist`` is given it
        is called with that copy first; the aggregator only adopts the copy
        and advances its cursor once ``persist`` returns.

        Args:
            measurements: One measurement per survey frequency
            persist: Optional callback saving the updated project

        Returns:
            The updated project

        Raises:
            IncompleteStationError: If a frequency is missing
            TransectOverflowError: If the cursor left the transect's range
        """
        measurements = list(measurements)

        recorded = {m.frequency for m in measurements}
        if missing := [f for f in Frequency.ordered() if f not in recorded]:
            raise IncompleteStationError(missing)

        self.ensure_cursor_in_transect()
        station = self._current_station
        overwrite = station in self._project.stations

        project = self._project.model_copy(
            update={"stations": {**self._project.stations, station: measurements}}
        )
        if persist is not None:
            persist(project)

        self._project = project
        self._current_station = station + 1

        if overwrite:
            logger.info("Overwrote station %s", station)
        logger.info("Committed station %s of `%s`", station, project.name)
        return project

    def new_transect(self, persist: Callable[[Project], None] | None = None) -> Project:
        """Move the project to the next transect.

        As with :meth:`commit_station`, ``persist`` sees the updated copy
        before the aggregator adopts it.

        Returns:
            The updated project

        Raises:
            TransectOverflowError: If the transect number would reach 100
        """
        next_transcat = self.transcat_number + 1
        if next_transcat >= MAX_TRANSECT:
            raise TransectOverflowError(
                f"Transect number must be lower than {MAX_TRANSECT}",
                fields=("transcat",),
            )

        project = self._project.model_copy(
            update={
                "common": self._project.common.model_copy(
                    update={"transcat_number": next_transcat}
                )
            }
        )
        if persist is not None:
            persist(project)

        self._project = project
        self._current_station = starting_station(next_transcat)

        logger.info(
            "Project `%s` moved to transect %s (starting station %s)",
            project.name,
            next_transcat,
            self._current_station,
        )
        return project
