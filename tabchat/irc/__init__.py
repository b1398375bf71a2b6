"""IRC subsystem package.

Contains the client implementing the connection handle, the inbound line
dispatcher, the wire parser and the event model consumed by the UI pump.
"""

from .client import IRCClient  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .models import (  # noqa: F401
    CantResolveAddr,
    Closed,
    Connected,
    Connecting,
    ConnectionState,
    Disconnected,
    Event,
    EventStream,
    IoError,
    Msg,
    NickChange,
    SASLAuth,
    ServerInfo,
)
from .parser import IRCMessage, PrivMsg, build_privmsg, parse_irc_message  # noqa: F401
from .protocols import ConnectionHandle  # noqa: F401

__all__ = [
    "IRCClient",
    "IRCDispatcher",
    "ConnectionHandle",
    "ConnectionState",
    "ServerInfo",
    "SASLAuth",
    "Event",
    "EventStream",
    "Connecting",
    "Connected",
    "Disconnected",
    "IoError",
    "CantResolveAddr",
    "NickChange",
    "Msg",
    "Closed",
    "IRCMessage",
    "PrivMsg",
    "parse_irc_message",
    "build_privmsg",
]
