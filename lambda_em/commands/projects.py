# -*- coding: utf-8 -*-
"""List and show commands for stored projects."""

from __future__ import annotations

import argparse
import logging
import sys

import orjson

from lambda_em.commands.utils import add_env_file_argument
from lambda_em.commands.utils import open_store
from lambda_em.errors import LambdaEMError

logger = logging.getLogger(__name__)


def list_projects(args: list[str]) -> int:
    """Entry point for the list command."""
    parser = argparse.ArgumentParser(
        prog="lambda-em list",
        description="List the stored survey projects",
    )
    add_env_file_argument(parser)
    parsed_args = parser.parse_args(args)

    try:
        projects = open_store(parsed_args.env_file).load_all()
    except LambdaEMError:
        logger.exception("Unable to read the survey store")
        return 1

    if not projects:
        print("No saved projects found")  # noqa: T201
        return 0

    for index, project in enumerate(projects):
        summary = project.summary()
        print(  # noqa: T201
            f"[{index}] {summary.name}: "
            f"{summary.station_count} station(s), "
            f"resistivity {summary.average_resistivity:g} Ωm"
        )
    return 0


def show_project(args: list[str]) -> int:
    """Entry point for the show command."""
    parser = argparse.ArgumentParser(
        prog="lambda-em show",
        description="Print a stored project as JSON",
    )
    parser.add_argument(
        "-i",
        "--index",
        type=int,
        required=True,
        help="Index of the project in the store.",
    )
    add_env_file_argument(parser)
    parsed_args = parser.parse_args(args)

    try:
        project = open_store(parsed_args.env_file).get(parsed_args.index)
    except LambdaEMError:
        logger.exception("Unable to load project %s", parsed_args.index)
        return 1

    data = project.model_dump(mode="json", by_alias=True, exclude_none=True)
    sys.stdout.write(
        orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS).decode()
    )
    sys.stdout.write("\n")
    return 0
