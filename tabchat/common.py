"""Message sources, message targets and tab styles shared by every layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

# RFC 1459 case mapping: these characters are the lowercase forms of []\~
_RFC1459_FOLD = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ[]\\~", "abcdefghijklmnopqrstuvwxyz{}|^")


@dataclass(frozen=True, slots=True)
class ChanName:
    """Channel name that keeps its display form but compares case-insensitively."""

    display: str
    _folded: str = field(init=False, repr=False, compare=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_folded", self.display.translate(_RFC1459_FOLD))

    def __str__(self) -> str:
        return self.display

    def normalized(self) -> str:
        return self._folded

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChanName):
            return self._folded == other._folded
        if isinstance(other, str):
            return self._folded == other.translate(_RFC1459_FOLD)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._folded)


class TabStyle(IntEnum):
    """Tab highlight level; a higher value wins when styles are combined."""

    NORMAL = 0
    JOIN_OR_PART = 1
    NEW_MSG = 2
    HIGHLIGHT = 3


# Message sources: where a command was typed, or where a message goes.


@dataclass(frozen=True, slots=True)
class ServerSource:
    serv: str

    def serv_name(self) -> str:
        return self.serv

    def to_target(self) -> MsgTarget:
        return Server(self.serv)


@dataclass(frozen=True, slots=True)
class ChanSource:
    serv: str
    chan: ChanName

    def serv_name(self) -> str:
        return self.serv

    def to_target(self) -> MsgTarget:
        return Chan(self.serv, self.chan)


@dataclass(frozen=True, slots=True)
class UserSource:
    serv: str
    nick: str

    def serv_name(self) -> str:
        return self.serv

    def to_target(self) -> MsgTarget:
        return User(self.serv, self.nick)


MsgSource = ServerSource | ChanSource | UserSource


# Message targets: which tab(s) a UI message is posted to.


@dataclass(frozen=True, slots=True)
class Server:
    serv: str


@dataclass(frozen=True, slots=True)
class Chan:
    serv: str
    chan: ChanName


@dataclass(frozen=True, slots=True)
class User:
    serv: str
    nick: str


@dataclass(frozen=True, slots=True)
class AllServTabs:
    """Every tab (server, channels, users) belonging to ``serv``."""

    serv: str


@dataclass(frozen=True, slots=True)
class AllUserTabs:
    """Every channel ``nick`` is in plus the private tab with ``nick``."""

    serv: str
    nick: str


@dataclass(frozen=True, slots=True)
class CurrentTab:
    pass


CURRENT_TAB = CurrentTab()

MsgTarget = Server | Chan | User | AllServTabs | AllUserTabs | CurrentTab


__all__ = [
    "ChanName",
    "TabStyle",
    "ServerSource",
    "ChanSource",
    "UserSource",
    "MsgSource",
    "Server",
    "Chan",
    "User",
    "AllServTabs",
    "AllUserTabs",
    "CurrentTab",
    "CURRENT_TAB",
    "MsgTarget",
]
