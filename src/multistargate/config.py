"""Configuration utilities for MULTISTARGATE.

This module centralizes small helpers and constants related to configuration
of the simulated chain.
"""

import os
from datetime import datetime, timezone

DB_URL_ENV_VAR = "MULTISTARGATE_DB_URL"  # pragma: no mutate

DEFAULT_CHAIN_PREFIX = "osmo"
DEFAULT_CHAIN_ID = "cosmos-testnet-14002"
DEFAULT_BLOCK_HEIGHT = 12_345
DEFAULT_BLOCK_TIME = datetime.fromtimestamp(1_571_797_419, tz=timezone.utc)
DEFAULT_BLOCK_TIME_SECONDS = 5

# Storage key prefixes of the chain modules
STATE_KEY_PREFIX = "stargate/"
BANK_KEY_PREFIX = "bank/"


class DatabaseUrlNotSetError(Exception):
    """Raised when the MULTISTARGATE_DB_URL environment variable is not set."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `MULTISTARGATE_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `MULTISTARGATE_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR)):
        raise DatabaseUrlNotSetError
    return url
