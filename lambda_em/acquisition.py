# -*- coding: utf-8 -*-
"""Instrument and GPS collaborators.

The instrument is queried with a single blocking request per reading and
answers ``{"current": <A>, "voltage": <V>}``. Any failure surfaces as
:class:`~lambda_em.errors.AcquisitionFailure`; the operator may simply
retry the same frequency.
"""

from __future__ import annotations

import logging
from typing import Protocol

import requests
from pydantic import ValidationError as PydanticValidationError

from lambda_em.constants import DEFAULT_INSTRUMENT_TIMEOUT
from lambda_em.constants import DEFAULT_INSTRUMENT_URL
from lambda_em.constants import MILLIVOLTS_PER_VOLT
from lambda_em.constants import READING_PRECISION
from lambda_em.errors import AcquisitionFailure
from lambda_em.errors import ValidationError
from lambda_em.models import GPSLocation
from lambda_em.models import RawReading

logger = logging.getLogger(__name__)


class Instrument(Protocol):
    """Source of raw current / voltage readings."""

    def read(self) -> RawReading:
        """Take one reading.

        Raises:
            AcquisitionFailure: If the instrument could not be read
        """
        ...


class GPSProvider(Protocol):
    """One-shot source of the device position."""

    def locate(self) -> GPSLocation | None:
        """Return the current fix, or None when GPS is unavailable."""
        ...


class FixedGPSProvider:
    """GPS provider answering a position read off a handheld receiver."""

    def __init__(self, latitude: float, longitude: float) -> None:
        try:
            self.location = GPSLocation(latitude=latitude, longitude=longitude)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid GPS position: {latitude}, {longitude}",
                fields=("latitude", "longitude"),
            ) from e

    def locate(self) -> GPSLocation:
        return self.location


class HttpInstrument:
    """Instrument reachable over HTTP (the device's own access point)."""

    def __init__(
        self,
        url: str = DEFAULT_INSTRUMENT_URL,
        timeout: float = DEFAULT_INSTRUMENT_TIMEOUT,
    ) -> None:
        self.url = url
        self.timeout = timeout

    def read(self) -> RawReading:
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.warning("Instrument request to `%s` failed: %s", self.url, e)
            raise AcquisitionFailure(f"Instrument unreachable: {e}") from e
        except ValueError as e:
            raise AcquisitionFailure(f"Instrument sent invalid JSON: {e}") from e

        try:
            return RawReading.model_validate(payload)
        except PydanticValidationError as e:
            raise AcquisitionFailure(f"Unexpected instrument payload: {payload!r}") from e


def to_station_reading(reading: RawReading) -> tuple[float, float]:
    """Convert an instrument reading into ``(txCurrent A, rxVoltage mV)``.

    Both values are rounded to two decimals, as displayed to the operator.
    """
    return (
        round(reading.current, READING_PRECISION),
        round(reading.voltage * MILLIVOLTS_PER_VOLT, READING_PRECISION),
    )
