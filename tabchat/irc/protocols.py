"""Protocol for the connection handle used by commands and the event pump.

Keeping the router typed against this protocol lets tests drive handlers with
simple fakes instead of live sockets.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from ..common import ChanName


class ConnectionHandle(Protocol):
    """One live server session. Every method returns without awaiting I/O."""

    def get_serv_name(self) -> str:
        """Server name this handle is bound to (the address it was opened with)."""
        ...

    def get_nick(self) -> str:
        ...

    def away(self, msg: str | None) -> None:
        """Set away status with ``msg``, or clear it when ``msg`` is None."""
        ...

    def reconnect(self, port: int | None) -> None:
        """Drop the session and connect again, replacing the stored port if given."""
        ...

    def join(self, chans: Iterable[ChanName]) -> None:
        ...

    def part(self, chan: ChanName, reason: str | None) -> None:
        ...

    def quit(self, reason: str | None) -> None:
        ...

    def nick(self, new_nick: str) -> None:
        ...

    def privmsg(self, target: str, msg: str) -> None:
        ...

    def ctcp_action(self, target: str, msg: str) -> None:
        ...

    def raw_msg(self, line: str) -> None:
        ...

    def get_chan_nicks(self, chan: ChanName) -> list[str]:
        ...

    def split_privmsg(self, extra_len: int, msg: str) -> list[str]:
        ...


__all__ = ["ConnectionHandle"]
