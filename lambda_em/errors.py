# -*- coding: utf-8 -*-
"""Error handling for EM survey acquisition and persistence.

Every exception raised by lambda_em derives from ``LambdaEMError`` so callers
can catch the whole family at once, while the subclasses also inherit from the
closest builtin (``ValueError``, ``IndexError``...) for generic handlers.
"""

from __future__ import annotations

from collections.abc import Iterable


class LambdaEMError(Exception):
    """Base class for all lambda_em errors."""


class ValidationError(LambdaEMError, ValueError):
    """Malformed or missing project setup fields.

    Attributes:
        message: Human-readable error message
        fields: Names of the offending fields (may be empty)
    """

    def __init__(self, message: str, fields: Iterable[str] = ()):
        self.message = message
        self.fields = tuple(fields)
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        if self.fields:
            return f"{self.message} (fields: {', '.join(self.fields)})"
        return self.message


class MeasurementValidationError(ValidationError):
    """A recorded reading cannot be turned into a measurement."""


class TransectOverflowError(ValidationError):
    """A station number would leave the range reserved for its transect."""


class IncompleteStationError(LambdaEMError):
    """Attempted to finalize a station before every frequency was recorded.

    Attributes:
        missing: Frequencies (Hz) still to be recorded, high-to-low
    """

    def __init__(self, missing: Iterable[int]):
        self.missing = tuple(int(freq) for freq in missing)
        super().__init__(str(self))

    def __str__(self) -> str:
        freqs = ", ".join(f"{freq} Hz" for freq in self.missing)
        return f"Station is incomplete, missing: {freqs}"


class ConfigurationError(LambdaEMError):
    """Runtime settings cannot be loaded (e.g. a missing env file)."""


class AcquisitionFailure(LambdaEMError):  # noqa: N818
    """The instrument call failed. Retrying the same frequency is safe."""


class NonFiniteResultError(LambdaEMError, ArithmeticError):
    """The formula engine produced NaN / Infinity or divided by zero.

    Attributes:
        frequency: Frequency (Hz) of the offending reading
        quantity: Name of the non-finite quantity
    """

    def __init__(self, frequency: int, quantity: str):
        self.frequency = int(frequency)
        self.quantity = quantity
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"Non-finite {self.quantity} computed at {self.frequency} Hz"


class StoreError(LambdaEMError):
    """Base class for persistence faults."""


class CorruptStoreError(StoreError):
    """The persisted collection exists but cannot be parsed."""


class IndexOutOfRangeError(StoreError, IndexError):
    """Attempted to overwrite a position that does not exist."""


class ProjectNotFoundError(StoreError, LookupError):
    """No project is stored at the requested index."""
