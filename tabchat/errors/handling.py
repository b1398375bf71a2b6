from __future__ import annotations

from ..logging_config import log_structured_error
from .commands import CommandError
from .internal import InternalError, NetworkError, ParsingError


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error category is derived from the exception type so structured log
    lines can be grouped (network, parsing, command, internal, unknown).

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, NetworkError | OSError):
        error_type = "network"
    elif isinstance(error, ParsingError):
        error_type = "parsing"
    elif isinstance(error, CommandError):
        error_type = "command"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


__all__ = ["log_error"]
