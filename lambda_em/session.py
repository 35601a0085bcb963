# -*- coding: utf-8 -*-
"""Survey session: one operator editing one project.

A session owns the open station's accumulator, the project aggregator and
the project's index in the store. It is an explicit object created by the
caller, so several projects may be edited side by side and nothing lives in
module-level state.

The project is persisted when it is created, after every committed station
and after every transect increment.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from typing import Any

from lambda_em.acquisition import GPSProvider
from lambda_em.acquisition import Instrument
from lambda_em.acquisition import to_station_reading
from lambda_em.enums import Frequency
from lambda_em.errors import AcquisitionFailure
from lambda_em.models import CommonParams
from lambda_em.models import Project
from lambda_em.models import StationMeasurement
from lambda_em.project import ProjectAggregator
from lambda_em.station import StationAccumulator
from lambda_em.store import SurveyStore

logger = logging.getLogger(__name__)


class SurveySession:
    """Acquire, commit and persist the stations of one project."""

    def __init__(
        self,
        store: SurveyStore,
        index: int,
        aggregator: ProjectAggregator,
        *,
        instrument: Instrument | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.aggregator = aggregator
        self.instrument = instrument
        self.accumulator = StationAccumulator()

    @classmethod
    def create(
        cls,
        store: SurveyStore,
        name: str,
        common: Mapping[str, Any] | CommonParams,
        *,
        gps_provider: GPSProvider | None = None,
        instrument: Instrument | None = None,
    ) -> SurveySession:
        """Validate the setup, fetch GPS once and store the new project.

        Raises:
            ValidationError: If the setup is invalid (nothing is stored)
        """
        gps = None
        if gps_provider is not None:
            gps = gps_provider.locate()
        if gps is None:
            logger.warning("GPS unavailable: stations will be stamped 0.0, 0.0")

        aggregator = ProjectAggregator.initialize(name, common, gps=gps)
        index = store.append(aggregator.project)
        return cls(store, index, aggregator, instrument=instrument)

    @classmethod
    def resume(
        cls,
        store: SurveyStore,
        index: int,
        *,
        instrument: Instrument | None = None,
    ) -> SurveySession:
        """Reopen a stored project; the next station is derived from its data.

        Raises:
            ProjectNotFoundError: If no project is stored at ``index``
        """
        project = store.get(index)
        aggregator = ProjectAggregator.resume(project)
        logger.info(
            "Resumed project `%s` at station %s",
            project.name,
            aggregator.current_station,
        )
        return cls(store, index, aggregator, instrument=instrument)

    @property
    def project(self) -> Project:
        return self.aggregator.project

    @property
    def current_station(self) -> int:
        return self.aggregator.current_station

    @property
    def missing_frequencies(self) -> tuple[Frequency, ...]:
        return self.accumulator.missing_frequencies

    def is_complete(self) -> bool:
        return self.accumulator.is_complete()

    def record(
        self,
        frequency: int | str | Frequency,
        tx_current: float,
        rx_voltage: float,
    ) -> None:
        """Record a manually entered reading (current in A, voltage in mV)."""
        self.accumulator.record(frequency, tx_current, rx_voltage)

    def acquire(self, frequency: int | str | Frequency) -> tuple[float, float]:
        """Read the instrument and record the reading for ``frequency``.

        Returns:
            The recorded ``(txCurrent A, rxVoltage mV)`` pair

        Raises:
            AcquisitionFailure: If the instrument could not be read; the
                accumulator is left untouched
        """
        freq = Frequency.parse(frequency)
        if self.instrument is None:
            raise AcquisitionFailure("No instrument attached to this session")

        try:
            tx_current, rx_voltage = to_station_reading(self.instrument.read())
        except AcquisitionFailure:
            logger.warning("Acquisition failed at %s, retry is possible", freq.label)
            raise

        self.accumulator.record(freq, tx_current, rx_voltage)
        return tx_current, rx_voltage

    def _persist(self, project: Project) -> None:
        self.store.replace_at(self.index, project)

    def complete_station(
        self, timestamp: datetime.datetime | None = None
    ) -> list[StationMeasurement]:
        """Compute the open station, persist the project, then commit it.

        Nothing changes in memory unless the project was persisted: on any
        error the readings, the project and the station cursor are left as
        they were, so the call can simply be retried.

        Returns:
            The committed measurements

        Raises:
            IncompleteStationError: If a frequency is missing
            NonFiniteResultError: If a formula result is not finite
            TransectOverflowError: If the transect has no station left
            StoreError: If the project could not be persisted
        """
        self.aggregator.ensure_cursor_in_transect()
        measurements = self.accumulator.measurements(
            self.current_station,
            self.project.common,
            self.project.gps,
            timestamp=timestamp,
        )
        self.aggregator.commit_station(measurements, persist=self._persist)
        self.accumulator.clear()
        return measurements

    def new_transect(self) -> Project:
        """Continue the project on the next transect and persist it.

        Raises:
            TransectOverflowError: If the project is on the last transect
            StoreError: If the project could not be persisted (the session
                stays on the current transect)
        """
        return self.aggregator.new_transect(persist=self._persist)
