"""Types shared by the command parser, the handlers and the router."""

from __future__ import annotations

from collections.abc import AsyncIterable, Callable, Sequence
from dataclasses import dataclass

from ..common import MsgSource
from ..config.model import Defaults
from ..irc.models import Event, ServerInfo
from ..irc.protocols import ConnectionHandle
from ..ui.protocol import UI

ClientFactory = Callable[[ServerInfo], tuple[ConnectionHandle, AsyncIterable[Event]]]


@dataclass
class CmdArgs:
    """Everything a command handler may touch during one invocation."""

    # Rest of the command after the command name, exactly as typed.
    args: str
    defaults: Defaults
    ui: UI
    clients: list[ConnectionHandle]
    src: MsgSource
    client_factory: ClientFactory
    # Registry the command was looked up in; /help lists it.
    cmds: Sequence[Cmd]


@dataclass(frozen=True, slots=True)
class Cmd:
    # If this is "cmd", "/cmd ..." calls this command.
    name: str
    cmd_fn: Callable[[CmdArgs], None]
    # Shown in /help and error messages.
    description: str
    usage: str


__all__ = ["CmdArgs", "Cmd", "ClientFactory"]
