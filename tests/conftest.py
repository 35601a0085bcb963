# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared fixtures: survey parameters, a fixed commit
timestamp, factories for stations and projects, and in-memory stores.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from lambda_em.enums import Frequency
from lambda_em.models import CommonParams
from lambda_em.models import GPSLocation
from lambda_em.models import Project
from lambda_em.models import StationMeasurement
from lambda_em.project import ProjectAggregator
from lambda_em.station import StationAccumulator
from lambda_em.store import MemoryKeyValueStore
from lambda_em.store import SurveyStore

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Constants
# =============================================================================

#: Raw (txCurrent A, rxVoltage mV) per frequency for a typical station
SAMPLE_READINGS: dict[int, tuple[float, float]] = {
    813: (1.0, 50.0),
    559: (1.02, 42.5),
    407: (0.98, 37.25),
    254: (1.01, 30.0),
    203: (0.99, 26.75),
    153: (1.0, 21.5),
    102: (1.0, 15.0),
}

FIXED_TIMESTAMP = datetime.datetime(2025, 3, 14, 9, 26, 53)  # noqa: DTZ001


# =============================================================================
# Parameter Fixtures
# =============================================================================


@pytest.fixture
def common_params() -> CommonParams:
    """Transect 3, 10 m interstation, 100 Ω·m background, 10 m intercoil."""
    return CommonParams(
        transcat=3,
        interstation=10.0,
        averageResistivity=100.0,
        intercoil=10.0,
    )


@pytest.fixture
def raw_common() -> dict[str, str]:
    """Setup values as typed in a form."""
    return {
        "transcat": "3",
        "interstation": "10",
        "averageResistivity": "100",
        "intercoil": "10",
    }


@pytest.fixture
def gps() -> GPSLocation:
    return GPSLocation(latitude=45.1234567, longitude=-73.9876543)


@pytest.fixture
def fixed_timestamp() -> datetime.datetime:
    return FIXED_TIMESTAMP


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def record_all() -> Callable[..., StationAccumulator]:
    """Record every sample reading into an accumulator."""

    def _record_all(
        accumulator: StationAccumulator,
        readings: dict[int, tuple[float, float]] | None = None,
    ) -> StationAccumulator:
        for freq, (tx_current, rx_voltage) in (readings or SAMPLE_READINGS).items():
            accumulator.record(freq, tx_current, rx_voltage)
        return accumulator

    return _record_all


@pytest.fixture
def make_station(record_all) -> Callable[..., list[StationMeasurement]]:
    """Build the finalized measurements of one station."""

    def _make_station(
        station_number: int,
        common: CommonParams,
        gps: GPSLocation | None = None,
    ) -> list[StationMeasurement]:
        accumulator = record_all(StationAccumulator())
        return accumulator.finalize(
            station_number, common, gps, timestamp=FIXED_TIMESTAMP
        )

    return _make_station


@pytest.fixture
def make_project(make_station) -> Callable[..., Project]:
    """Build a project with ``n_stations`` committed stations."""

    def _make_project(
        common: CommonParams,
        n_stations: int = 2,
        name: str = "Line A",
        gps: GPSLocation | None = None,
    ) -> Project:
        aggregator = ProjectAggregator.initialize(name, common, gps=gps)
        for _ in range(n_stations):
            aggregator.commit_station(
                make_station(aggregator.current_station, common, gps)
            )
        return aggregator.project

    return _make_project


@pytest.fixture
def memory_store() -> SurveyStore:
    return SurveyStore(MemoryKeyValueStore())


@pytest.fixture
def all_frequencies() -> tuple[Frequency, ...]:
    return Frequency.ordered()


# =============================================================================
# Environment Fixtures
# =============================================================================

ENV_VARS = (
    "LAMBDA_EM_STORE",
    "LAMBDA_EM_STORE_KEY",
    "LAMBDA_EM_INSTRUMENT_URL",
    "LAMBDA_EM_INSTRUMENT_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset the settings variables, restoring them after the test.

    Each variable is set before being deleted so that the values an env file
    loads during the test are removed on teardown too.
    """
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def env_file(tmp_path, clean_env) -> Callable[..., Path]:
    """Write a `.env` file pointing the store into ``tmp_path``."""

    def _env_file(**overrides: str) -> Path:
        values = {"LAMBDA_EM_STORE": str(tmp_path / "store"), **overrides}
        path = tmp_path / ".env"
        path.write_text(
            "".join(f"{key}={value}\n" for key, value in values.items()),
            encoding="utf-8",
        )
        return path

    return _env_file
