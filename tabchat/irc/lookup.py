"""Linear lookup of a connection by server name.

Lookup is first-match-wins: nothing prevents two handles from sharing a
server name, in which case the later one is unreachable by name.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .protocols import ConnectionHandle

C = TypeVar("C", bound=ConnectionHandle)


def find_client_idx(clients: Sequence[ConnectionHandle], serv_name: str) -> int | None:
    for idx, client in enumerate(clients):
        if client.get_serv_name() == serv_name:
            return idx
    return None


def find_client(clients: Sequence[C], serv_name: str) -> C | None:
    idx = find_client_idx(clients, serv_name)
    return None if idx is None else clients[idx]


__all__ = ["find_client_idx", "find_client"]
