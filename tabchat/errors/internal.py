"""Centralized internal error hierarchy.

These exceptions describe failures inside the client itself, as opposed to
mistakes in what the user typed (see ``errors.commands``).

Classes:
  InternalError           – Base for all internal errors.
  NetworkError            – Transport failures inside the IRC client.
  ParsingError            – A wire line that could not be parsed.
  MissingConnectionError  – A tab refers to a server with no live connection.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for socket, TLS or name resolution failures."""


class ParsingError(InternalError):
    """Exception raised when an inbound IRC line is malformed."""


class MissingConnectionError(InternalError):
    """Raised when a server or channel tab has no matching connection.

    Tabs for a server are only created alongside its connection, so this
    signals a broken invariant rather than a user mistake; it is never
    reported to the user as a command error.
    """

    def __init__(self, serv: str) -> None:
        super().__init__(f"No connection for server {serv}", data={"serv": serv})
        self.serv = serv


__all__ = [
    "InternalError",
    "NetworkError",
    "ParsingError",
    "MissingConnectionError",
]
