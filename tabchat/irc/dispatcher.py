"""Inbound line handling: protocol bookkeeping plus event emission."""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING

from ..common import ChanName
from ..errors import ParsingError
from ..logs.logger import logger
from .models import ConnectionState, Msg, NickChange
from .parser import IRCMessage, parse_irc_message

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient

# Membership prefixes in RPL_NAMREPLY entries
_NAMES_PREFIXES = "~&@%+"


class IRCDispatcher:
    def __init__(self, client: IRCClient):
        self.client = client

    def process_incoming_data(self, buffer: str, new_data: str) -> str:
        """Handle every complete line in ``buffer + new_data``; return the remainder."""
        buffer += new_data
        while "\n" in buffer:
            line, buffer = buffer.split("\n", 1)
            line = line.rstrip("\r")
            if line.strip():
                self.handle_line(line)
        return buffer

    def handle_line(self, raw_message: str) -> None:
        client = self.client
        try:
            parsed = parse_irc_message(raw_message)
        except ParsingError:
            logger.log_event(
                "irc",
                "parse_error",
                level=logging.WARNING,
                server=client.serv_name,
                raw=raw_message,
            )
            return

        if parsed.command == "PING":
            client.send_line(f"PONG :{parsed.trailing}")
            return

        logger.log_event(
            "irc", "raw_in", level=logging.DEBUG, server=client.serv_name, raw=raw_message
        )
        handler = getattr(self, f"_on_{parsed.command.lower()}", None)
        if handler is not None:
            handler(parsed)
        if parsed.command not in ("CAP", "AUTHENTICATE"):
            client.emit(Msg(parsed))

    # Registration

    def _on_001(self, msg: IRCMessage) -> None:
        client = self.client
        if msg.params:
            client.current_nick = msg.params[0]
        # The UI learns the registered nick from this event
        client.emit(NickChange(client.current_nick))
        client.set_state(ConnectionState.READY)
        logger.log_event("irc", "registered", server=client.serv_name, nick=client.current_nick)
        if client.info.nickserv_ident:
            client.send_line(f"PRIVMSG NickServ :identify {client.info.nickserv_ident}")
        if client.auto_join:
            client.send_line("JOIN " + ",".join(str(c) for c in client.auto_join))

    def _on_433(self, msg: IRCMessage) -> None:
        """ERR_NICKNAMEINUSE: only acted on while registering."""
        client = self.client
        if client.state is not ConnectionState.REGISTERING:
            return
        next_nick = client.next_nick()
        logger.log_event(
            "irc",
            "nick_in_use",
            level=logging.WARNING,
            server=client.serv_name,
            nick=msg.params[1] if len(msg.params) > 1 else "?",
            next_nick=next_nick,
        )
        client.send_line(f"NICK {next_nick}")

    def _on_cap(self, msg: IRCMessage) -> None:
        sasl = self.client.info.sasl_auth
        if len(msg.params) < 2 or sasl is None:
            return
        sub = msg.params[1].upper()
        if sub == "ACK" and "sasl" in msg.trailing.split():
            self.client.send_line("AUTHENTICATE PLAIN")
        elif sub == "NAK":
            self.client.send_line("CAP END")

    def _on_authenticate(self, msg: IRCMessage) -> None:
        sasl = self.client.info.sasl_auth
        if sasl is None or msg.trailing != "+":
            return
        token = f"{sasl.username}\0{sasl.username}\0{sasl.password}"
        self.client.send_line(
            "AUTHENTICATE " + base64.b64encode(token.encode("utf-8")).decode("ascii")
        )

    def _on_903(self, msg: IRCMessage) -> None:  # RPL_SASLSUCCESS
        self.client.send_line("CAP END")

    def _on_904(self, msg: IRCMessage) -> None:  # ERR_SASLFAIL
        self.client.send_line("CAP END")

    # Membership tracking

    def _on_353(self, msg: IRCMessage) -> None:
        # RPL_NAMREPLY: <me> <symbol> <chan> :<nicks>
        if len(msg.params) < 4:
            return
        nicks = self.client.chans.setdefault(ChanName(msg.params[2]), set())
        for entry in msg.trailing.split():
            nicks.add(entry.lstrip(_NAMES_PREFIXES))

    def _on_join(self, msg: IRCMessage) -> None:
        if not msg.params or msg.nick is None:
            return
        chan = ChanName(msg.params[0])
        if msg.nick == self.client.current_nick:
            self.client.chans[chan] = set()
            if chan not in self.client.auto_join:
                self.client.auto_join.append(chan)
        self.client.chans.setdefault(chan, set()).add(msg.nick)

    def _on_part(self, msg: IRCMessage) -> None:
        if not msg.params or msg.nick is None:
            return
        self._leave(ChanName(msg.params[0]), msg.nick)

    def _on_kick(self, msg: IRCMessage) -> None:
        if len(msg.params) < 2:
            return
        self._leave(ChanName(msg.params[0]), msg.params[1])

    def _on_quit(self, msg: IRCMessage) -> None:
        if msg.nick is None:
            return
        for nicks in self.client.chans.values():
            nicks.discard(msg.nick)

    def _on_nick(self, msg: IRCMessage) -> None:
        if not msg.params or msg.nick is None:
            return
        old, new = msg.nick, msg.params[0]
        for nicks in self.client.chans.values():
            if old in nicks:
                nicks.discard(old)
                nicks.add(new)
        if old == self.client.current_nick:
            self._set_own_nick(new)

    def _leave(self, chan: ChanName, nick: str) -> None:
        if nick == self.client.current_nick:
            self.client.chans.pop(chan, None)
            if chan in self.client.auto_join:
                self.client.auto_join.remove(chan)
        elif chan in self.client.chans:
            self.client.chans[chan].discard(nick)

    def _set_own_nick(self, nick: str) -> None:
        if nick != self.client.current_nick:
            self.client.current_nick = nick
            self.client.emit(NickChange(nick))
