"""Client commands and the registry listing them.

Handlers report user mistakes by raising ``CommandError`` subclasses; the
router turns those into error lines in the current tab. Commands that act on
a connection that doesn't exist are silent no-ops unless documented
otherwise below.
"""

from __future__ import annotations

import logging

from ..common import (
    CURRENT_TAB,
    AllServTabs,
    ChanSource,
    MsgSource,
    Server,
    ServerSource,
    UserSource,
)
from ..config.chan import ChanSpec
from ..constants import HELP_DESCRIPTION_WIDTH, HELP_NAME_WIDTH, MENTIONS_TAB_NAME
from ..conn import spawn_task
from ..errors import (
    InvalidSourceForCommand,
    MissingConnectionError,
    PortParseError,
    TargetUnavailable,
    UsageError,
)
from ..irc.lookup import find_client, find_client_idx
from ..irc.models import ServerInfo
from ..logs.logger import logger
from ..ui.messaging import send_msg
from ..utils.text import is_nick_first_char
from .context import Cmd, CmdArgs


def _log_no_connection(cmd: str, serv: str) -> None:
    logger.log_event(
        "cmd", "no_connection", level=logging.DEBUG, server=serv, cmd=cmd, target=serv
    )


# /away


def away(args: CmdArgs) -> None:
    msg = args.args or None
    serv = args.src.serv_name()
    client = find_client(args.clients, serv)
    if client is None:
        _log_no_connection("away", serv)
        return
    client.away(msg)


AWAY_CMD = Cmd(
    name="away",
    cmd_fn=away,
    description="Sets/removes away message",
    usage="/away [message]",
)


# /close


def close(args: CmdArgs) -> None:
    ui, clients = args.ui, args.clients
    reason = args.args or None
    match args.src:
        case ServerSource(serv=serv) if serv == MENTIONS_TAB_NAME:
            pass
        case ServerSource(serv=serv):
            logger.log_event("cmd", "close_server", server=serv)
            ui.close_server_tab(serv)
            client_idx = find_client_idx(clients, serv)
            if client_idx is None:
                raise MissingConnectionError(serv)
            # TODO: wait for the QUIT to be flushed before the handle is dropped
            client = clients.pop(client_idx)
            client.quit(reason)
        case ChanSource(serv=serv, chan=chan):
            logger.log_event("cmd", "close_chan", server=serv, channel=chan)
            ui.close_chan_tab(serv, chan)
            client_idx = find_client_idx(clients, serv)
            if client_idx is None:
                raise MissingConnectionError(serv)
            clients[client_idx].part(chan, reason)
        case UserSource(serv=serv, nick=nick):
            logger.log_event("cmd", "close_user", level=logging.DEBUG, server=serv, nick=nick)
            ui.close_user_tab(serv, nick)


CLOSE_CMD = Cmd(
    name="close",
    cmd_fn=close,
    description="Closes current tab",
    usage="/close [reason]",
)


# /connect


def parse_port(port: str) -> int:
    """Parse a TCP port number.

    Raises:
        ValueError: with a short description of what is wrong with ``port``.
    """
    if not port:
        raise ValueError("cannot parse integer from empty string")
    if not (port.isascii() and port.isdigit()):
        raise ValueError("invalid digit found in string")
    value = int(port)
    if not 0 < value <= 65535:
        raise ValueError("port must be between 1 and 65535")
    return value


def parse_serv_addr(serv_addr: str) -> tuple[str, int]:
    """Split ``<host>:<port>`` at the first colon.

    Raises:
        PortParseError: when the colon or host is missing or the port is invalid.
    """
    host, sep, port = serv_addr.partition(":")
    if not sep or not host:
        raise PortParseError("connect: Need a <host>:<port>")
    try:
        return host, parse_port(port)
    except ValueError as err:
        raise PortParseError(f"connect: Can't parse port {port}: {err}") from err


def connect(args: CmdArgs) -> None:
    words = args.args.split()
    match len(words):
        case 0:
            _reconnect(args)
        case 1:
            _connect(args, words[0], None)
        case 2:
            _connect(args, words[0], words[1])
        case _:
            raise UsageError(CONNECT_CMD.usage)


def _reconnect(args: CmdArgs) -> None:
    serv = args.src.serv_name()
    client = find_client(args.clients, serv)
    if client is None:
        _log_no_connection("connect", serv)
        return
    logger.log_event("cmd", "reconnect", server=serv)
    args.ui.add_client_msg("Reconnecting...", AllServTabs(serv))
    client.reconnect(None)


def _connect(args: CmdArgs, serv_addr: str, pass_: str | None) -> None:
    ui, defaults = args.ui, args.defaults
    serv_name, serv_port = parse_serv_addr(serv_addr)

    # Already connected to this server: reconnect using the new port
    client = find_client(args.clients, serv_name)
    if client is not None:
        logger.log_event("cmd", "connect_existing", server=serv_name, port=serv_port)
        ui.add_client_msg("Connecting...", AllServTabs(serv_name))
        client.reconnect(serv_port)
        return

    logger.log_event("cmd", "connect_new", server=serv_name, addr=serv_name, port=serv_port)
    ui.new_server_tab(serv_name, None)
    ui.add_client_msg("Connecting...", Server(serv_name))

    client, events = args.client_factory(
        ServerInfo(
            addr=serv_name,
            port=serv_port,
            tls=defaults.tls,
            realname=defaults.realname,
            pass_=pass_,
            nicks=list(defaults.nicks),
            auto_join=list(defaults.join),
            nickserv_ident=None,
            sasl_auth=None,
        )
    )
    spawn_task(events, ui, client)
    args.clients.append(client)


CONNECT_CMD = Cmd(
    name="connect",
    cmd_fn=connect,
    description="Connects to a server",
    usage="/connect <host>:<port> | /connect",
)


# /join


def join(args: CmdArgs) -> None:
    ui, src = args.ui, args.src
    if isinstance(src, ServerSource) and src.serv == MENTIONS_TAB_NAME:
        raise InvalidSourceForCommand("Switch to a server tab to join a channel")

    chans: list[ChanSpec] = []
    for entry in args.args.split(","):
        entry = entry.strip()
        if not entry:
            continue
        try:
            chans.append(ChanSpec.from_cmd_args(entry))
        except ValueError as err:
            logger.log_event(
                "cmd", "join_entry_rejected", level=logging.DEBUG, error=str(err)
            )
            ui.add_client_err_msg(str(err), CURRENT_TAB)

    if not chans:
        match ui.current_tab():
            case None:
                return
            case ChanSource(serv=serv, chan=chan):
                # Rejoin current tab's channel, keeping its settings
                chans = [ChanSpec(chan, ui.get_tab_config(serv, chan))]
            case _:
                raise UsageError(JOIN_CMD.usage)

    serv = src.serv_name()
    client = find_client(args.clients, serv)
    if client is None:
        raise TargetUnavailable(f"Can't join: Not connected to server {serv}", serv)

    # Set tab configs before joining so they exist when the server replies
    # (this creates the tabs)
    for chan in chans:
        config = chan.config if chan.config is not None else ui.get_tab_config(serv, chan.name)
        ui.set_tab_config(serv, chan.name, config)
    client.join(chan.name for chan in chans)


JOIN_CMD = Cmd(
    name="join",
    cmd_fn=join,
    description="Joins a channel",
    usage="/join <chan1> [-ignore] [-notify [off|mentions|messages]],<chan2>... | /join",
)


# /me


def me(args: CmdArgs) -> None:
    if not args.args:
        raise UsageError(ME_CMD.usage)
    send_msg(args.ui, args.clients, args.src, args.args, True)


ME_CMD = Cmd(
    name="me",
    cmd_fn=me,
    description="Sends emote message",
    usage="/me <message>",
)


# /msg


def split_msg_args(args: str) -> tuple[str, str] | None:
    """Split ``<nick> <message>`` at the first whitespace run.

    Only the first character of the nick is validated, enough to keep a
    channel name from being taken for a nick.
    """
    if not args or not is_nick_first_char(args[0]):
        return None
    for i, c in enumerate(args):
        if c.isspace():
            msg_start = i
            while msg_start < len(args) and args[msg_start].isspace():
                msg_start += 1
            return args[:i], args[msg_start:]
    return None


def msg(args: CmdArgs) -> None:
    split = split_msg_args(args.args)
    if split is None or not split[1]:
        raise UsageError(MSG_CMD.usage)
    target, text = split

    dest: MsgSource
    if any(client.get_serv_name() == target for client in args.clients):
        logger.log_event("cmd", "msg_server_target", level=logging.DEBUG, server=target)
        dest = ServerSource(target)
    else:
        dest = UserSource(args.src.serv_name(), target)
    send_msg(args.ui, args.clients, dest, text, False)


MSG_CMD = Cmd(
    name="msg",
    cmd_fn=msg,
    description="Sends a message to a user",
    usage="/msg <nick> <message>",
)


# /names


def names(args: CmdArgs) -> None:
    words = args.args.split()
    src = args.src
    client = find_client(args.clients, src.serv_name())
    if client is None:
        _log_no_connection("names", src.serv_name())
        return
    if not isinstance(src, ChanSource):
        raise InvalidSourceForCommand("/names only supported in chan tabs")

    nicks = client.get_chan_nicks(src.chan)
    target = src.to_target()
    if not words:
        args.ui.add_client_msg(f"{len(nicks)} users: {', '.join(nicks)}", target)
    elif words[0] in nicks:
        args.ui.add_client_msg(f"{words[0]} is online", target)
    else:
        args.ui.add_client_msg(f"{words[0]} is not in the channel", target)


NAMES_CMD = Cmd(
    name="names",
    cmd_fn=names,
    description="Shows users in channel",
    usage="/names [nick]",
)


# /nick


def nick(args: CmdArgs) -> None:
    words = args.args.split()
    if len(words) != 1:
        raise UsageError(NICK_CMD.usage)
    serv = args.src.serv_name()
    client = find_client(args.clients, serv)
    if client is None:
        _log_no_connection("nick", serv)
        return
    client.nick(words[0])


NICK_CMD = Cmd(
    name="nick",
    cmd_fn=nick,
    description="Sets your nick",
    usage="/nick <nick>",
)


# /help


def help_(args: CmdArgs) -> None:
    ui = args.ui
    ui.add_client_msg("Client Commands:", CURRENT_TAB)
    for cmd in args.cmds:
        ui.add_client_msg(
            f"/{cmd.name:<{HELP_NAME_WIDTH}} - {cmd.description:<{HELP_DESCRIPTION_WIDTH}}"
            f" - Usage: {cmd.usage}",
            CURRENT_TAB,
        )


HELP_CMD = Cmd(
    name="help",
    cmd_fn=help_,
    description="Displays this message",
    usage="/help",
)


# Registration order is the /help listing order and the lookup order.
CMDS: tuple[Cmd, ...] = (
    AWAY_CMD,
    CLOSE_CMD,
    CONNECT_CMD,
    JOIN_CMD,
    ME_CMD,
    MSG_CMD,
    NAMES_CMD,
    NICK_CMD,
    HELP_CMD,
)


__all__ = ["CMDS", "split_msg_args", "parse_serv_addr", "parse_port"]
