# -*- coding: utf-8 -*-
"""Export command: write a stored project as a CSV or JSON report."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from lambda_em.commands.utils import add_env_file_argument
from lambda_em.commands.utils import open_store
from lambda_em.enums import ReportFormat
from lambda_em.errors import LambdaEMError
from lambda_em.export import export_project
from lambda_em.export import report_filename
from lambda_em.export import report_sink

logger = logging.getLogger(__name__)


def export(args: list[str]) -> int:
    """Entry point for the export command."""
    parser = argparse.ArgumentParser(
        prog="lambda-em export",
        description="Export a stored project as a spreadsheet report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lambda-em export -i 0                      # Writes <name>_data.csv
  lambda-em export -i 0 -o line_3.csv -w     # Overwrite an existing report
  lambda-em export -i 0 -f json              # Writes <name>_data.json
""",
    )
    parser.add_argument(
        "-i",
        "--index",
        type=int,
        required=True,
        help="Index of the project in the store.",
    )
    parser.add_argument(
        "-o",
        "--output_file",
        type=Path,
        default=None,
        help="Report path (defaults to `<project name>_data.<format>`).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in ReportFormat],
        default=ReportFormat.CSV.value,
        help="Report format (default: csv).",
    )
    parser.add_argument(
        "-w",
        "--overwrite",
        action="store_true",
        help="Allow overwrite an already existing file.",
        default=False,
    )
    add_env_file_argument(parser)
    parsed_args = parser.parse_args(args)

    try:
        project = open_store(parsed_args.env_file).get(parsed_args.index)
    except LambdaEMError:
        logger.exception("Unable to load project %s", parsed_args.index)
        return 1

    output_file = parsed_args.output_file or Path(
        report_filename(project, parsed_args.format)
    )
    if output_file.exists() and not parsed_args.overwrite:
        logger.error(
            "The file %s already exists. Pass the flag `--overwrite` to ignore.",
            output_file,
        )
        return 1

    report = export_project(project, report_sink(output_file, parsed_args.format))
    logger.info(
        "Exported `%s` (%s rows) to `%s`", project.name, len(report.rows), output_file
    )
    return 0
