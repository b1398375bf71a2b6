"""Error hierarchy exports."""

from .commands import (  # noqa: F401
    CommandError,
    InvalidSourceForCommand,
    PortParseError,
    TargetUnavailable,
    UnknownCommand,
    UsageError,
)
from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    InternalError,
    MissingConnectionError,
    NetworkError,
    ParsingError,
)

__all__ = [
    "CommandError",
    "InvalidSourceForCommand",
    "PortParseError",
    "TargetUnavailable",
    "UnknownCommand",
    "UsageError",
    "InternalError",
    "MissingConnectionError",
    "NetworkError",
    "ParsingError",
    "log_error",
]
