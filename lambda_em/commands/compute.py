# -*- coding: utf-8 -*-
"""Compute command: evaluate the formulas for a single reading."""

from __future__ import annotations

import argparse
import logging

from lambda_em import formulas
from lambda_em.enums import Frequency
from lambda_em.errors import LambdaEMError
from lambda_em.errors import NonFiniteResultError
from lambda_em.validation import ensure_finite
from lambda_em.validation import validate_common_params
from lambda_em.validation import validate_tx_current

logger = logging.getLogger(__name__)


def compute(args: list[str]) -> int:
    """Entry point for the compute command."""
    parser = argparse.ArgumentParser(
        prog="lambda-em compute",
        description="Compute conductivity, resistivity and depth for one reading",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lambda-em compute -f 813 -t 1.0 -r 50.0 -c 10 -a 100
""",
    )

    parser.add_argument(
        "-f",
        "--frequency",
        type=int,
        required=True,
        choices=[int(freq) for freq in Frequency.ordered()],
        help="Frequency in Hz",
    )
    parser.add_argument(
        "-t",
        "--tx_current",
        type=float,
        required=True,
        help="Transmitter current (A)",
    )
    parser.add_argument(
        "-r",
        "--rx_voltage",
        type=float,
        required=True,
        help="Receiver voltage (mV)",
    )
    parser.add_argument(
        "-c",
        "--intercoil",
        type=float,
        required=True,
        help="Intercoil spacing (m)",
    )
    parser.add_argument(
        "-a",
        "--average_resistivity",
        type=float,
        required=True,
        help="Average resistivity (Ω·m)",
    )

    parsed_args = parser.parse_args(args)

    try:
        common = validate_common_params(
            {
                "transcat": 0,
                "interstation": 0,
                "averageResistivity": parsed_args.average_resistivity,
                "intercoil": parsed_args.intercoil,
            }
        )
        validate_tx_current(parsed_args.frequency, parsed_args.tx_current)
        try:
            result = formulas.compute(
                frequency=parsed_args.frequency,
                tx_current=parsed_args.tx_current,
                rx_voltage=parsed_args.rx_voltage,
                intercoil=common.intercoil,
                average_resistivity=common.average_resistivity,
            )
        except ZeroDivisionError as e:
            raise NonFiniteResultError(parsed_args.frequency, "resistivity") from e
        ensure_finite(parsed_args.frequency, result)

    except LambdaEMError:
        logger.exception("Unable to compute the reading")
        return 1

    print(f"Conductivity (µS/cm): {result.conductivity:.3f}")  # noqa: T201
    print(f"Resistivity (Ω·m): {result.resistivity:.3f}")  # noqa: T201
    print(f"Depth (m): {result.depth:.3f}")  # noqa: T201
    return 0
