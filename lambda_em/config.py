# -*- coding: utf-8 -*-
"""Runtime settings.

Values come from the environment, optionally populated from a ``.env`` file
first::

    LAMBDA_EM_STORE=~/surveys
    LAMBDA_EM_STORE_KEY=results
    LAMBDA_EM_INSTRUMENT_URL=http://192.168.4.1/start
    LAMBDA_EM_INSTRUMENT_TIMEOUT=10
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from lambda_em.constants import DEFAULT_INSTRUMENT_TIMEOUT
from lambda_em.constants import DEFAULT_INSTRUMENT_URL
from lambda_em.constants import DEFAULT_STORE_KEY
from lambda_em.constants import DEFAULT_STORE_PATH
from lambda_em.errors import ConfigurationError
from lambda_em.errors import ValidationError

logger = logging.getLogger(__name__)

ENV_STORE_PATH = "LAMBDA_EM_STORE"
ENV_STORE_KEY = "LAMBDA_EM_STORE_KEY"
ENV_INSTRUMENT_URL = "LAMBDA_EM_INSTRUMENT_URL"
ENV_INSTRUMENT_TIMEOUT = "LAMBDA_EM_INSTRUMENT_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    store_path: Path = Path(DEFAULT_STORE_PATH).expanduser()
    store_key: str = DEFAULT_STORE_KEY
    instrument_url: str = DEFAULT_INSTRUMENT_URL
    instrument_timeout: float = DEFAULT_INSTRUMENT_TIMEOUT


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        env_file: Optional ``.env`` file loaded (and overriding) first

    Raises:
        ConfigurationError: If ``env_file`` does not exist
        ValidationError: If the instrument timeout is not a positive number
    """
    if env_file is not None:
        if not env_file.exists():
            raise ConfigurationError(f"Impossible to find: `{env_file}`.")
        load_dotenv(env_file, override=True)
        logger.info("Loaded environment variables from: `%s`", env_file)

    timeout_str = os.getenv(ENV_INSTRUMENT_TIMEOUT, str(DEFAULT_INSTRUMENT_TIMEOUT))
    try:
        timeout = float(timeout_str)
    except ValueError as e:
        raise ValidationError(
            f"Invalid instrument timeout: `{timeout_str}`",
            fields=(ENV_INSTRUMENT_TIMEOUT,),
        ) from e
    if not timeout > 0:
        raise ValidationError(
            f"Instrument timeout must be positive, got {timeout}",
            fields=(ENV_INSTRUMENT_TIMEOUT,),
        )

    return Settings(
        store_path=Path(os.getenv(ENV_STORE_PATH, DEFAULT_STORE_PATH)).expanduser(),
        store_key=os.getenv(ENV_STORE_KEY, DEFAULT_STORE_KEY),
        instrument_url=os.getenv(ENV_INSTRUMENT_URL, DEFAULT_INSTRUMENT_URL),
        instrument_timeout=timeout,
    )
