# -*- coding: utf-8 -*-
"""Helpers shared by the command line actions."""

from __future__ import annotations

import argparse
from pathlib import Path

from lambda_em.config import Settings
from lambda_em.config import load_settings
from lambda_em.store import FileKeyValueStore
from lambda_em.store import SurveyStore


def add_env_file_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-e",
        "--env_file",
        type=Path,
        default=None,
        help="Optional environment file (store location, instrument URL).",
    )


def store_from_settings(settings: Settings) -> SurveyStore:
    return SurveyStore(FileKeyValueStore(settings.store_path), key=settings.store_key)


def open_store(env_file: Path | None) -> SurveyStore:
    """Open the file-backed survey store configured by the environment."""
    return store_from_settings(load_settings(env_file))
