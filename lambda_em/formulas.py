# -*- coding: utf-8 -*-
"""Formula engine converting raw EM readings into ground properties.

All functions are pure: the same inputs always produce bit-identical outputs.

Apparent conductivity
---------------------

The receiver voltage (mV) is normalized by the intercoil spacing into a
secondary field ratio ``Ht``:

    Ht = (100 * rxVoltage_V) / (4 * intercoil)

from which the primary field term is subtracted before scaling:

    numerator    = 2 * Ht - 0.00000232 * intercoil / intercoil^3
    conductivity = (numerator / 0.0000039478 * f * intercoil^2) / 1e8   [µS/cm]
    resistivity  = (1 / conductivity) * 10000                           [Ω·m]

The primary field term is deliberately evaluated as written (and not as
``0.00000232 / intercoil^2``) so floating point rounding is preserved.

Exploration depth
-----------------

    depth = -(503 / 5) * sqrt(averageResistivity / f)                   [m]

Depth is negative (below the surface).

Division by a zero conductivity is NOT guarded here: it raises
``ZeroDivisionError``. Callers translate it (and NaN / Infinity) into
``NonFiniteResultError``.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from lambda_em.constants import CONDUCTIVITY_DENOMINATOR
from lambda_em.constants import CONDUCTIVITY_SCALE
from lambda_em.constants import DEPTH_COEFFICIENT
from lambda_em.constants import MILLIVOLTS_PER_VOLT
from lambda_em.constants import PRIMARY_FIELD_COEFFICIENT
from lambda_em.constants import RESISTIVITY_FACTOR

logger = logging.getLogger(__name__)


class FormulaResult(NamedTuple):
    """Derived quantities for a single reading."""

    conductivity: float  # µS/cm
    resistivity: float  # Ω·m
    depth: float  # m, negative below surface

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(value) for value in self)


def secondary_field(rx_voltage_mv: float, intercoil: float) -> float:
    """Normalized secondary field ``Ht`` for a receiver voltage in mV."""
    rx_voltage_v = rx_voltage_mv / MILLIVOLTS_PER_VOLT
    return (100 * rx_voltage_v) / (4 * intercoil)


def apparent_conductivity(
    frequency: float,
    rx_voltage_mv: float,
    intercoil: float,
) -> float:
    """Compute the apparent conductivity (µS/cm).

    Args:
        frequency: Frequency in Hz
        rx_voltage_mv: Receiver voltage in millivolts
        intercoil: Transmitter / receiver coil separation in meters

    Returns:
        Apparent conductivity in µS/cm
    """
    term1 = 2 * secondary_field(rx_voltage_mv, intercoil)
    term2 = (PRIMARY_FIELD_COEFFICIENT * intercoil) / math.pow(intercoil, 3)
    numerator = term1 - term2
    return (
        (numerator / CONDUCTIVITY_DENOMINATOR) * frequency * math.pow(intercoil, 2)
    ) / CONDUCTIVITY_SCALE


def apparent_resistivity(conductivity: float) -> float:
    """Convert an apparent conductivity (µS/cm) to resistivity (Ω·m).

    Raises:
        ZeroDivisionError: If ``conductivity`` is zero
    """
    return (1 / conductivity) * RESISTIVITY_FACTOR


def exploration_depth(average_resistivity: float, frequency: float) -> float:
    """Nominal exploration depth (m, negative) for a frequency.

    Examples:
        >>> round(exploration_depth(100.0, 813), 2)
        -35.28
    """
    return -DEPTH_COEFFICIENT * math.sqrt(average_resistivity / frequency)


def compute(
    frequency: float,
    tx_current: float,
    rx_voltage: float,
    intercoil: float,
    average_resistivity: float,
) -> FormulaResult:
    """Evaluate every formula for one reading.

    ``tx_current`` is part of the reading tuple but does not enter the
    formulas: the instrument normalizes the received voltage itself.

    Args:
        frequency: Frequency in Hz
        tx_current: Transmitter current in A
        rx_voltage: Receiver voltage in mV
        intercoil: Coil separation in meters (> 0)
        average_resistivity: Background resistivity in Ω·m (> 0)

    Returns:
        FormulaResult(conductivity, resistivity, depth)

    Raises:
        ZeroDivisionError: If the conductivity is exactly zero
    """
    conductivity = apparent_conductivity(frequency, rx_voltage, intercoil)
    resistivity = apparent_resistivity(conductivity)
    depth = exploration_depth(average_resistivity, frequency)

    logger.debug(
        "%s Hz (Tx=%s A, Rx=%s mV): conductivity=%s resistivity=%s depth=%s",
        frequency,
        tx_current,
        rx_voltage,
        conductivity,
        resistivity,
        depth,
    )
    return FormulaResult(
        conductivity=conductivity, resistivity=resistivity, depth=depth
    )
