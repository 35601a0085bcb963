# -*- coding: utf-8 -*-
"""Enumerations for EM survey data.

This module contains the closed set of survey frequencies and the
file-format identifiers used by the exporters and the command line.
"""

from enum import Enum
from enum import IntEnum

from lambda_em.constants import FREQUENCIES_HZ
from lambda_em.errors import MeasurementValidationError


class Frequency(IntEnum):
    """Survey frequencies (Hz) required at every station.

    Members are declared high-to-low, which is also the order in which
    they are acquired and reported.
    """

    F813 = 813
    F559 = 559
    F407 = 407
    F254 = 254
    F203 = 203
    F153 = 153
    F102 = 102

    @classmethod
    def ordered(cls) -> tuple["Frequency", ...]:
        """Return every frequency, high-to-low."""
        return tuple(cls(freq) for freq in FREQUENCIES_HZ)

    @classmethod
    def parse(cls, value: "int | str | Frequency") -> "Frequency":
        """Convert an int, numeric string or member to a Frequency.

        Args:
            value: Frequency in Hz

        Returns:
            Frequency member

        Raises:
            MeasurementValidationError: If the value is not a survey frequency
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(int(str(value).strip()))
        except ValueError as e:
            raise MeasurementValidationError(
                f"Unsupported frequency: `{value}`. "
                f"Expected one of {', '.join(str(f) for f in FREQUENCIES_HZ)}",
                fields=("frequency",),
            ) from e

    @property
    def label(self) -> str:
        return f"{self.value} Hz"


class ReportFormat(str, Enum):
    """Report formats accepted by the exporter.

    Attributes:
        CSV: Comma separated values (spreadsheet friendly)
        JSON: Persisted project JSON
    """

    CSV = "csv"
    JSON = "json"

    @property
    def extension(self) -> str:
        """Get the file extension for this format (with dot)."""
        return {
            ReportFormat.CSV: FileExtension.CSV.value,
            ReportFormat.JSON: FileExtension.JSON.value,
        }[self]


class FileExtension(str, Enum):
    """File extensions for various file formats (with dot)."""

    CSV = ".csv"
    JSON = ".json"
