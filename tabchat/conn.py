"""Background task that turns a connection's events into UI updates.

One pump runs per connection opened with ``/connect``. It ends when the
connection's event stream ends (after ``Closed``).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable
from datetime import datetime

from .common import AllServTabs, AllUserTabs, Chan, ChanName, Server, User
from .config.chan import CHAN_PREFIXES
from .irc.models import (
    CantResolveAddr,
    Closed,
    Connected,
    Connecting,
    Disconnected,
    Event,
    IoError,
    Msg,
    NickChange,
)
from .irc.parser import IRCMessage, build_privmsg
from .irc.protocols import ConnectionHandle
from .logs.logger import logger
from .ui.protocol import UI

_NAMES_PREFIXES = "~&@%+"

# Numerics that only carry bookkeeping for the client
_SILENT_NUMERICS = frozenset({"333", "366"})

# Strong references to running pumps; the loop only keeps weak ones
_PUMPS: set[asyncio.Task[None]] = set()


def spawn_task(
    events: AsyncIterable[Event], ui: UI, client: ConnectionHandle
) -> asyncio.Task[None]:
    """Start a pump for ``client`` on the running loop without awaiting it."""
    pump = asyncio.get_running_loop().create_task(
        task(events, ui, client), name=f"pump:{client.get_serv_name()}"
    )
    _PUMPS.add(pump)
    pump.add_done_callback(_PUMPS.discard)
    return pump


async def task(events: AsyncIterable[Event], ui: UI, client: ConnectionHandle) -> None:
    serv = client.get_serv_name()
    logger.log_event("pump", "start", level=logging.DEBUG, server=serv)
    async for event in events:
        try:
            handle_conn_ev(ui, client, event)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "pump",
                "event_error",
                level=logging.ERROR,
                server=serv,
                event=type(event).__name__,
                error=str(e),
                exc_info=True,
            )
    logger.log_event("pump", "stop", level=logging.DEBUG, server=serv)


def handle_conn_ev(ui: UI, client: ConnectionHandle, event: Event) -> None:
    serv = client.get_serv_name()
    all_tabs = AllServTabs(serv)
    match event:
        case Connecting():
            ui.add_client_msg("Connecting...", all_tabs)
        case Connected():
            ui.add_client_msg("Connected.", all_tabs)
        case Disconnected():
            ui.add_client_err_msg("Disconnected. Use /connect to reconnect.", all_tabs)
        case IoError(error=error):
            ui.add_client_err_msg(f"Connection error: {error}", all_tabs)
        case CantResolveAddr():
            ui.add_client_err_msg("Can't resolve address", Server(serv))
        case NickChange(new_nick=new_nick):
            ui.set_nick(serv, new_nick)
        case Msg(msg=msg):
            handle_irc_msg(ui, client, msg)
        case Closed():
            ui.add_client_msg("Connection closed.", all_tabs)


def handle_irc_msg(ui: UI, client: ConnectionHandle, msg: IRCMessage) -> None:  # noqa: C901
    ts = datetime.now()
    serv = client.get_serv_name()
    cmd = msg.command
    params = msg.params

    if cmd in ("PRIVMSG", "NOTICE"):
        _handle_privmsg(ui, client, msg, ts)
    elif cmd == "JOIN" and params and msg.nick:
        chan = ChanName(params[0])
        if msg.nick == client.get_nick():
            ui.new_chan_tab(serv, chan)
            ui.add_nick(msg.nick, None, Chan(serv, chan))
        else:
            ui.add_nick(msg.nick, ts, Chan(serv, chan))
    elif cmd == "PART" and params and msg.nick:
        if msg.nick != client.get_nick():
            ui.remove_nick(msg.nick, ts, Chan(serv, ChanName(params[0])))
    elif cmd == "KICK" and len(params) >= 2:
        chan = ChanName(params[0])
        if params[1] == client.get_nick():
            ui.add_client_err_msg(
                f"Kicked from {chan} by {msg.nick}: {params[-1]}", Chan(serv, chan)
            )
        else:
            ui.remove_nick(params[1], ts, Chan(serv, chan))
    elif cmd == "QUIT" and msg.nick:
        ui.remove_nick(msg.nick, ts, AllUserTabs(serv, msg.nick))
    elif cmd == "NICK" and params and msg.nick:
        ui.rename_nick(msg.nick, params[0], ts, AllUserTabs(serv, msg.nick))
    elif cmd == "353" and len(params) >= 4:
        target = Chan(serv, ChanName(params[2]))
        for entry in params[3].split():
            ui.add_nick(entry.lstrip(_NAMES_PREFIXES), None, target)
    elif cmd == "332" and len(params) >= 3:
        ui.set_topic(params[2], ts, serv, ChanName(params[1]))
    elif cmd == "TOPIC" and len(params) >= 2:
        ui.set_topic(params[1], ts, serv, ChanName(params[0]))
    elif cmd == "ERROR":
        ui.add_client_err_msg(msg.trailing, AllServTabs(serv))
    elif cmd.isdigit() and cmd not in _SILENT_NUMERICS:
        # Drop our own nick, which servers put first in every numeric
        ui.add_msg(" ".join(params[1:]), ts, Server(serv))


def _handle_privmsg(ui: UI, client: ConnectionHandle, msg: IRCMessage, ts: datetime) -> None:
    serv = client.get_serv_name()
    priv = build_privmsg(msg)
    if priv is None:
        return
    if msg.nick is None or priv.target == "*":
        # Server notices and messages before registration
        ui.add_msg(priv.message, ts, Server(serv))
        return
    if priv.target[:1] in CHAN_PREFIXES:
        own_nick = client.get_nick()
        highlight = own_nick.lower() in priv.message.lower()
        target = Chan(serv, ChanName(priv.target))
    else:
        # Private messages are addressed to us; the tab is named after the sender
        highlight = not priv.is_notice
        target = User(serv, priv.sender)
    ui.add_privmsg(priv.sender, priv.message, ts, target, highlight, priv.is_action)


__all__ = ["spawn_task", "task", "handle_conn_ev", "handle_irc_msg"]
