# -*- coding: utf-8 -*-
"""Survey command: acquire stations of a new or stored project."""

from __future__ import annotations

import argparse
import logging

from lambda_em.acquisition import FixedGPSProvider
from lambda_em.acquisition import HttpInstrument
from lambda_em.commands.utils import add_env_file_argument
from lambda_em.commands.utils import store_from_settings
from lambda_em.config import load_settings
from lambda_em.enums import Frequency
from lambda_em.errors import AcquisitionFailure
from lambda_em.errors import LambdaEMError
from lambda_em.errors import MeasurementValidationError
from lambda_em.models import StationMeasurement
from lambda_em.session import SurveySession

logger = logging.getLogger(__name__)


def _acquire(session: SurveySession, frequency: Frequency, retries: int) -> None:
    for attempt in range(retries + 1):
        try:
            session.acquire(frequency)
        except AcquisitionFailure:
            if attempt == retries:
                raise
            logger.info("Retrying %s (%s/%s)", frequency.label, attempt + 1, retries)
        else:
            return


def _record_manual(session: SurveySession, frequency: Frequency) -> None:
    values = input(f"{frequency.label} - Tx (A) Rx (mV): ").split()
    if len(values) != 2:
        raise MeasurementValidationError(
            f"Expected `<Tx> <Rx>` at {frequency.label}, got `{' '.join(values)}`",
            fields=("txCurrent", "rxVoltage"),
        )
    session.record(frequency, *values)


def _print_station(station: int, measurements: list[StationMeasurement]) -> None:
    print(f"Station {station}:")  # noqa: T201
    for m in measurements:
        print(  # noqa: T201
            f"  {m.frequency.label:>6}: Tx={m.tx_current:.2f} A "
            f"Rx={m.rx_voltage:.2f} mV "
            f"conductivity={m.calculated_conductivity:.3f} µS/cm "
            f"resistivity={m.calculated_resistivity:.3f} Ω·m "
            f"depth={m.calculated_depth:.3f} m"
        )


def survey(args: list[str]) -> int:
    """Entry point for the survey command."""
    parser = argparse.ArgumentParser(
        prog="lambda-em survey",
        description="Acquire and save stations of a survey project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # New project on transect 3, two stations read from the instrument
  lambda-em survey -n "Line A" --transcat 3 --interstation 10 \\
      --average_resistivity 100 --intercoil 10 -s 2

  # Continue project 0 on its next transect, typing the readings
  lambda-em survey -i 0 --new_transect --manual
""",
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "-i",
        "--index",
        type=int,
        default=None,
        help="Index of a stored project to continue.",
    )
    target.add_argument(
        "-n",
        "--name",
        type=str,
        default=None,
        help="Name of a new project.",
    )

    setup = parser.add_argument_group("new project parameters")
    setup.add_argument("--transcat", type=str, default=None, help="Transect number.")
    setup.add_argument(
        "--interstation", type=str, default=None, help="Station spacing (m)."
    )
    setup.add_argument(
        "--average_resistivity",
        type=str,
        default=None,
        help="Background resistivity (Ω·m).",
    )
    setup.add_argument(
        "--intercoil", type=str, default=None, help="Coil separation (m)."
    )
    setup.add_argument("--latitude", type=float, default=None, help="GPS latitude.")
    setup.add_argument("--longitude", type=float, default=None, help="GPS longitude.")

    parser.add_argument(
        "-s",
        "--stations",
        type=int,
        default=1,
        help="Number of stations to acquire (default: 1).",
    )
    parser.add_argument(
        "--new_transect",
        action="store_true",
        default=False,
        help="Move the project to its next transect before acquiring.",
    )
    parser.add_argument(
        "-m",
        "--manual",
        action="store_true",
        default=False,
        help="Type the readings instead of querying the instrument.",
    )
    parser.add_argument(
        "-r",
        "--retries",
        type=int,
        default=2,
        help="Extra attempts after a failed instrument reading (default: 2).",
    )
    add_env_file_argument(parser)
    parsed_args = parser.parse_args(args)

    if (parsed_args.latitude is None) != (parsed_args.longitude is None):
        parser.error("--latitude and --longitude must be given together")

    try:
        settings = load_settings(parsed_args.env_file)
        store = store_from_settings(settings)
        instrument = HttpInstrument(
            settings.instrument_url, settings.instrument_timeout
        )

        if parsed_args.index is not None:
            session = SurveySession.resume(
                store, parsed_args.index, instrument=instrument
            )
        else:
            gps_provider = None
            if parsed_args.latitude is not None:
                gps_provider = FixedGPSProvider(
                    parsed_args.latitude, parsed_args.longitude
                )
            session = SurveySession.create(
                store,
                parsed_args.name,
                {
                    "transcat": parsed_args.transcat,
                    "interstation": parsed_args.interstation,
                    "averageResistivity": parsed_args.average_resistivity,
                    "intercoil": parsed_args.intercoil,
                },
                gps_provider=gps_provider,
                instrument=instrument,
            )
            print(f"Created project [{session.index}] {session.project.name}")  # noqa: T201

        if parsed_args.new_transect:
            session.new_transect()
            print(f"Transect {session.aggregator.transcat_number}")  # noqa: T201

        for _ in range(parsed_args.stations):
            station = session.current_station
            for frequency in session.missing_frequencies:
                if parsed_args.manual:
                    _record_manual(session, frequency)
                else:
                    _acquire(session, frequency, parsed_args.retries)
            _print_station(station, session.complete_station())

    except LambdaEMError:
        logger.exception("Survey interrupted")
        return 1
    except EOFError:
        logger.error("Survey interrupted: no more readings on the standard input")
        return 1

    return 0
