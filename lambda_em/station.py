# -*- coding: utf-8 -*-
"""Station accumulator.

Buffers the raw ``(txCurrent, rxVoltage)`` pair of every frequency for the
station currently being surveyed, and turns them into
:class:`~lambda_em.models.StationMeasurement` records once every required
frequency is present.
"""

from __future__ import annotations

import datetime
import logging

from lambda_em import formulas
from lambda_em.constants import COORDINATE_PRECISION
from lambda_em.constants import DATE_FORMAT
from lambda_em.constants import TIME_FORMAT
from lambda_em.enums import Frequency
from lambda_em.errors import IncompleteStationError
from lambda_em.errors import MeasurementValidationError
from lambda_em.errors import NonFiniteResultError
from lambda_em.models import CommonParams
from lambda_em.models import GPSLocation
from lambda_em.models import StationMeasurement
from lambda_em.validation import ensure_finite
from lambda_em.validation import validate_tx_current

logger = logging.getLogger(__name__)


class StationAccumulator:
    """In-progress readings of the open station.

    Recording the same frequency twice keeps the last reading. A station can
    only be finalized once every frequency of :class:`Frequency` has a reading;
    finalizing clears the accumulator for the next station.
    """

    def __init__(self) -> None:
        self._readings: dict[Frequency, tuple[float, float]] = {}

    def __len__(self) -> int:
        return len(self._readings)

    def __contains__(self, frequency: object) -> bool:
        try:
            return Frequency.parse(frequency) in self._readings  # type: ignore[arg-type]
        except MeasurementValidationError:
            return False

    @property
    def readings(self) -> dict[Frequency, tuple[float, float]]:
        """Copy of the recorded ``frequency -> (txCurrent, rxVoltage)`` pairs."""
        return dict(self._readings)

    @property
    def recorded_frequencies(self) -> tuple[Frequency, ...]:
        return tuple(freq for freq in Frequency.ordered() if freq in self._readings)

    @property
    def missing_frequencies(self) -> tuple[Frequency, ...]:
        return tuple(
            freq for freq in Frequency.ordered() if freq not in self._readings
        )

    def record(
        self,
        frequency: int | str | Frequency,
        tx_current: float,
        rx_voltage: float,
    ) -> None:
        """Store (or overwrite) the raw reading for a frequency.

        Args:
            frequency: One of the survey frequencies (Hz)
            tx_current: Transmitter current (A)
            rx_voltage: Receiver voltage (mV)

        Raises:
            MeasurementValidationError: If the frequency is not a survey
                frequency or a reading is not numeric. Previously recorded
                frequencies are left untouched.
        """
        freq = Frequency.parse(frequency)
        try:
            pair = (float(tx_current), float(rx_voltage))
        except (TypeError, ValueError) as e:
            raise MeasurementValidationError(
                f"Non-numeric reading at {freq.label}: "
                f"Tx=`{tx_current}` Rx=`{rx_voltage}`",
                fields=("txCurrent", "rxVoltage"),
            ) from e

        if freq in self._readings:
            logger.debug("Overwriting reading at %s", freq.label)
        self._readings[freq] = pair
        logger.debug("Recorded %s: Tx=%s A, Rx=%s mV", freq.label, *pair)

    def is_complete(self) -> bool:
        """True iff every survey frequency has a recorded reading."""
        return not self.missing_frequencies

    def clear(self) -> None:
        self._readings.clear()

    def finalize(
        self,
        station_number: int,
        common: CommonParams,
        gps: GPSLocation | None = None,
        *,
        timestamp: datetime.datetime | None = None,
    ) -> list[StationMeasurement]:
        """Compute the measurements of the open station and clear it.

        See :meth:`measurements`. The accumulator is only cleared when no
        error is raised.
        """
        measurements = self.measurements(
            station_number, common, gps, timestamp=timestamp
        )
        self.clear()
        logger.debug("Finalized station %s", station_number)
        return measurements

    def measurements(
        self,
        station_number: int,
        common: CommonParams,
        gps: GPSLocation | None = None,
        *,
        timestamp: datetime.datetime | None = None,
    ) -> list[StationMeasurement]:
        """Compute the measurements of the open station, keeping the readings.

        Every measurement shares the same ``date`` / ``time`` snapshot and the
        same cached GPS stamp. ``distance`` is the station's signed offset
        from the transect's starting station.

        Args:
            station_number: Absolute station number being committed
            common: Project parameters
            gps: Cached GPS fix (``0.0`` coordinates when None)
            timestamp: Commit time (defaults to now)

        Returns:
            Measurements ordered high-to-low by frequency

        Raises:
            IncompleteStationError: If a frequency is missing
            MeasurementValidationError: If a Tx current is zero
            NonFiniteResultError: If a formula result is NaN / Infinity
        """
        if missing := self.missing_frequencies:
            raise IncompleteStationError(missing)

        timestamp = timestamp or datetime.datetime.now()  # noqa: DTZ005
        date = timestamp.strftime(DATE_FORMAT)
        time = timestamp.strftime(TIME_FORMAT)

        distance = (station_number - common.starting_station) * common.interstation

        latitude = longitude = 0.0
        if gps is not None:
            latitude = round(float(gps.latitude), COORDINATE_PRECISION)
            longitude = round(float(gps.longitude), COORDINATE_PRECISION)

        measurements: list[StationMeasurement] = []
        for freq in Frequency.ordered():
            tx_current, rx_voltage = self._readings[freq]
            validate_tx_current(freq, tx_current)

            try:
                result = formulas.compute(
                    frequency=freq,
                    tx_current=tx_current,
                    rx_voltage=rx_voltage,
                    intercoil=common.intercoil,
                    average_resistivity=common.average_resistivity,
                )
            except ZeroDivisionError as e:
                raise NonFiniteResultError(freq, "resistivity") from e
            ensure_finite(freq, result)

            measurements.append(
                StationMeasurement(
                    frequency=freq,
                    tx_current=tx_current,
                    rx_voltage=rx_voltage,
                    latitude=latitude,
                    longitude=longitude,
                    distance=distance,
                    calculated_depth=result.depth,
                    calculated_conductivity=result.conductivity,
                    calculated_resistivity=result.resistivity,
                    date=date,
                    time=time,
                )
            )

        return measurements
