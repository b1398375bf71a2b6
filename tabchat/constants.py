"""
Configuration constants for the tabchat client

This module contains the tunable constants used throughout the client.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os
import sys


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning to stderr and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}",
                file=sys.stderr,
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}",
                file=sys.stderr,
            )
    return default


# Name of the pseudo-server that hosts the mentions tab
MENTIONS_TAB_NAME = "mentions"

# IRC wire limits
IRC_MAX_LINE_BYTES = _get_env_int("IRC_MAX_LINE_BYTES", 512)
IRC_READ_CHUNK_SIZE = _get_env_int("IRC_READ_CHUNK_SIZE", 4096)

# Connection establishment
IRC_CONNECT_TIMEOUT = _get_env_float("IRC_CONNECT_TIMEOUT", 30.0)
IRC_CONNECT_ATTEMPTS = _get_env_int("IRC_CONNECT_ATTEMPTS", 3)
IRC_BACKOFF_BASE_DELAY = _get_env_float("IRC_BACKOFF_BASE_DELAY", 1.0)
IRC_BACKOFF_MAX_DELAY = _get_env_float("IRC_BACKOFF_MAX_DELAY", 30.0)

# Width of the command name column in /help output
HELP_NAME_WIDTH = 10
HELP_DESCRIPTION_WIDTH = 25
