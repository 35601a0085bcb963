# -*- coding: utf-8 -*-
"""Validation utilities for EM survey data.

This module validates project setup input (as typed by an operator, so
strings are accepted) and checks formula results before they are stored.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from lambda_em.errors import MeasurementValidationError
from lambda_em.errors import NonFiniteResultError
from lambda_em.errors import ValidationError
from lambda_em.formulas import FormulaResult
from lambda_em.models import CommonParams

#: Setup fields in their persisted spelling
COMMON_FIELDS: tuple[str, ...] = (
    "transcat",
    "interstation",
    "averageResistivity",
    "intercoil",
)

_FIELD_ALIASES: dict[str, str] = {
    "transcat_number": "transcat",
    "average_resistivity": "averageResistivity",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def validate_common_params(values: Mapping[str, Any] | CommonParams) -> CommonParams:
    """Build CommonParams from raw setup values.

    Keys may use the persisted spelling (``transcat``,
    ``averageResistivity``) or the Python one (``transcat_number``,
    ``average_resistivity``). Numeric strings are accepted.

    Args:
        values: Mapping of field name to raw value

    Returns:
        Validated CommonParams

    Raises:
        ValidationError: If a field is missing, empty, non-numeric or out of
            domain (``interstation < 0``, ``intercoil <= 0``,
            ``averageResistivity <= 0``, ``transcat`` not an integer in
            ``[0, 100)``)
    """
    if isinstance(values, CommonParams):
        return values

    normalized = {_FIELD_ALIASES.get(key, key): value for key, value in values.items()}

    if missing := [key for key in COMMON_FIELDS if _is_blank(normalized.get(key))]:
        raise ValidationError("Missing required parameters", fields=missing)

    try:
        return CommonParams.model_validate(
            {key: _clean(normalized[key]) for key in COMMON_FIELDS}
        )
    except PydanticValidationError as e:
        fields = []
        for error in e.errors():
            loc = str(error["loc"][0]) if error["loc"] else "common"
            fields.append(_FIELD_ALIASES.get(loc, loc))
        raise ValidationError("Invalid project parameters", fields=fields) from e


def validate_project_name(name: Any) -> str:
    """Validate a project name and return it stripped.

    Raises:
        ValidationError: If the name is missing or blank
    """
    if _is_blank(name) or not isinstance(name, str):
        raise ValidationError("Project name is required", fields=("name",))
    return name.strip()


def validate_tx_current(frequency: int, tx_current: float) -> None:
    """Reject a zero (or non-finite) transmitter current.

    Raises:
        MeasurementValidationError: If the current is zero, NaN or infinite
    """
    if tx_current == 0 or not math.isfinite(tx_current):
        raise MeasurementValidationError(
            f"Invalid Tx current at {frequency} Hz: {tx_current}",
            fields=("txCurrent",),
        )


def ensure_finite(frequency: int, result: FormulaResult) -> FormulaResult:
    """Return ``result`` unchanged if every quantity is finite.

    Raises:
        NonFiniteResultError: Naming the first non-finite quantity
    """
    for quantity, value in result._asdict().items():
        if not math.isfinite(value):
            raise NonFiniteResultError(frequency, quantity)
    return result
