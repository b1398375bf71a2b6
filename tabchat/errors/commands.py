"""Errors raised by command handlers.

Every command failure is local to one invocation: the router catches
``CommandError`` and posts ``str(err)`` to the current tab.
"""

from __future__ import annotations


class CommandError(Exception):
    """Base class for user-facing command failures."""


class UnknownCommand(CommandError):
    def __init__(self, name: str) -> None:
        super().__init__(f'Unsupported command: "/{name}"')
        self.name = name


class UsageError(CommandError):
    """Wrong argument count or shape; the message is the command's usage."""

    def __init__(self, usage: str) -> None:
        super().__init__(f"Usage: {usage}")
        self.usage = usage


class TargetUnavailable(CommandError):
    """No live connection matches the resolved server."""

    def __init__(self, message: str, serv: str) -> None:
        super().__init__(message)
        self.serv = serv


class PortParseError(CommandError):
    """Malformed ``<host>:<port>`` argument."""


class InvalidSourceForCommand(CommandError):
    """The command cannot run from the current tab."""


__all__ = [
    "CommandError",
    "UnknownCommand",
    "UsageError",
    "TargetUnavailable",
    "PortParseError",
    "InvalidSourceForCommand",
]
