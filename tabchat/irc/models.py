"""Shared IRC data models: settings bundle, connection state and events."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto

from pydantic import BaseModel, ConfigDict, Field

from .parser import IRCMessage


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    REGISTERING = auto()
    READY = auto()
    CLOSED = auto()


class SASLAuth(BaseModel):
    username: str
    password: str


class ServerInfo(BaseModel):
    """Everything needed to open and register one server connection."""

    model_config = ConfigDict(populate_by_name=True)

    addr: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    tls: bool = False
    realname: str
    pass_: str | None = Field(default=None, alias="pass")
    nicks: list[str] = Field(min_length=1)
    auto_join: list[str] = Field(default_factory=list)
    nickserv_ident: str | None = None
    sasl_auth: SASLAuth | None = None


# Events emitted by a client to whoever consumes its event stream.


@dataclass(frozen=True, slots=True)
class Connecting:
    pass


@dataclass(frozen=True, slots=True)
class Connected:
    pass


@dataclass(frozen=True, slots=True)
class Disconnected:
    pass


@dataclass(frozen=True, slots=True)
class IoError:
    error: str


@dataclass(frozen=True, slots=True)
class CantResolveAddr:
    pass


@dataclass(frozen=True, slots=True)
class NickChange:
    new_nick: str


@dataclass(frozen=True, slots=True)
class Msg:
    msg: IRCMessage


@dataclass(frozen=True, slots=True)
class Closed:
    pass


Event = Connecting | Connected | Disconnected | IoError | CantResolveAddr | NickChange | Msg | Closed


class EventStream:
    """Async iterator over a client's events; ends right after ``Closed``."""

    def __init__(self, queue: asyncio.Queue[Event]) -> None:
        self._queue = queue
        self._done = False

    def __aiter__(self) -> EventStream:
        return self

    async def __anext__(self) -> Event:
        if self._done:
            raise StopAsyncIteration
        event = await self._queue.get()
        if isinstance(event, Closed):
            self._done = True
        return event


__all__ = [
    "ConnectionState",
    "SASLAuth",
    "ServerInfo",
    "Connecting",
    "Connected",
    "Disconnected",
    "IoError",
    "CantResolveAddr",
    "NickChange",
    "Msg",
    "Closed",
    "Event",
    "EventStream",
]
