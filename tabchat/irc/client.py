"""Async IRC client implementing the connection handle used by commands."""

from __future__ import annotations

import asyncio
import codecs
import logging
import socket
import ssl
from collections.abc import Iterable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..common import ChanName
from ..constants import (
    IRC_BACKOFF_BASE_DELAY,
    IRC_BACKOFF_MAX_DELAY,
    IRC_CONNECT_ATTEMPTS,
    IRC_CONNECT_TIMEOUT,
    IRC_READ_CHUNK_SIZE,
)
from ..errors import NetworkError, log_error
from ..logs.logger import logger
from ..utils.text import redact_line, split_privmsg
from .dispatcher import IRCDispatcher
from .models import (
    CantResolveAddr,
    Closed,
    Connected,
    Connecting,
    ConnectionState,
    Disconnected,
    Event,
    EventStream,
    IoError,
    ServerInfo,
)

# Room for ":nick!~user@host " the server prepends when relaying our PRIVMSG
_USER_RESERVE = 10
_HOST_RESERVE = 63

_StreamPair = tuple[asyncio.StreamReader, asyncio.StreamWriter]


def _is_retryable(exc: BaseException) -> bool:
    # A name that doesn't resolve won't resolve on the next attempt either
    return isinstance(exc, OSError | TimeoutError) and not isinstance(
        exc, socket.gaierror
    )


def _error_text(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class IRCClient:  # pylint: disable=too-many-instance-attributes
    """One server session.

    Public methods never await: outgoing lines go through a queue drained by
    the session's writer task, so commands can call them from synchronous code.
    """

    def __init__(self, info: ServerInfo, events: asyncio.Queue[Event]) -> None:
        self.info = info
        self.serv_name = info.addr
        self.current_nick = info.nicks[0]
        self.auto_join: list[ChanName] = [ChanName(c) for c in info.auto_join]
        self.chans: dict[ChanName, set[str]] = {}
        self.state = ConnectionState.DISCONNECTED
        self._nick_idx = 0
        self._events = events
        self._outgoing: asyncio.Queue[str | None] = asyncio.Queue()
        self._wake = asyncio.Event()
        self._quitting = False
        self._task: asyncio.Task[None] | None = None
        self.dispatcher = IRCDispatcher(self)

    @classmethod
    def new(cls, info: ServerInfo) -> tuple[IRCClient, EventStream]:
        """Create a client and start connecting. Needs a running event loop."""
        events: asyncio.Queue[Event] = asyncio.Queue()
        client = cls(info, events)
        client._task = asyncio.get_running_loop().create_task(
            client.run(), name=f"irc-client:{info.addr}"
        )
        return client, EventStream(events)

    # State & events

    def set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                server=self.serv_name,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def emit(self, event: Event) -> None:
        self._events.put_nowait(event)

    def send_line(self, line: str) -> None:
        if self.state not in (ConnectionState.REGISTERING, ConnectionState.READY):
            logger.log_event(
                "irc",
                "send_dropped",
                level=logging.DEBUG,
                server=self.serv_name,
                state=self.state.name,
            )
            return
        self._outgoing.put_nowait(line)

    def next_nick(self) -> str:
        """Pick the next configured nick, then keep appending ``_`` to the last one."""
        self._nick_idx += 1
        if self._nick_idx < len(self.info.nicks):
            self.current_nick = self.info.nicks[self._nick_idx]
        else:
            self.current_nick = f"{self.current_nick}_"
        return self.current_nick

    # Connection handle

    def get_serv_name(self) -> str:
        return self.serv_name

    def get_nick(self) -> str:
        return self.current_nick

    def away(self, msg: str | None) -> None:
        self.send_line(f"AWAY :{msg}" if msg else "AWAY")

    def reconnect(self, port: int | None) -> None:
        if port is not None:
            self.info = self.info.model_copy(update={"port": port})
        logger.log_event("irc", "reconnect", server=self.serv_name, port=self.info.port)
        self._wake.set()

    def join(self, chans: Iterable[ChanName]) -> None:
        chans = list(chans)
        for chan in chans:
            if chan not in self.auto_join:
                self.auto_join.append(chan)
        # While registering, the 001 handler joins everything in auto_join
        if chans and self.state is ConnectionState.READY:
            self.send_line("JOIN " + ",".join(str(c) for c in chans))

    def part(self, chan: ChanName, reason: str | None) -> None:
        if chan in self.auto_join:
            self.auto_join.remove(chan)
        self.send_line(f"PART {chan} :{reason}" if reason else f"PART {chan}")

    def quit(self, reason: str | None) -> None:
        logger.log_event("irc", "quit", server=self.serv_name)
        self._quitting = True
        if self.state in (ConnectionState.REGISTERING, ConnectionState.READY):
            self.send_line(f"QUIT :{reason}" if reason else "QUIT")
            self._outgoing.put_nowait(None)
        else:
            self._wake.set()

    def nick(self, new_nick: str) -> None:
        self.send_line(f"NICK {new_nick}")

    def privmsg(self, target: str, msg: str) -> None:
        self.send_line(f"PRIVMSG {target} :{msg}")

    def ctcp_action(self, target: str, msg: str) -> None:
        self.send_line(f"PRIVMSG {target} :\x01ACTION {msg}\x01")

    def raw_msg(self, line: str) -> None:
        self.send_line(line)

    def get_chan_nicks(self, chan: ChanName) -> list[str]:
        return sorted(self.chans.get(chan, ()), key=str.lower)

    def split_privmsg(self, extra_len: int, msg: str) -> list[str]:
        relay_prefix = len(self.current_nick) + _USER_RESERVE + _HOST_RESERVE + 4
        return split_privmsg(extra_len + relay_prefix, msg)

    # Session lifecycle

    async def run(self) -> None:
        try:
            while not self._quitting:
                self._wake.clear()
                streams = await self._connect()
                if streams is not None:
                    if self._quitting:
                        streams[1].close()
                        break
                    await self._session(*streams)
                if self._quitting:
                    break
                if not self._wake.is_set():
                    # Stay down until a reconnect is requested
                    await self._wake.wait()
        finally:
            self.set_state(ConnectionState.CLOSED)
            self.emit(Closed())

    async def _connect(self) -> _StreamPair | None:
        info = self.info
        self.set_state(ConnectionState.CONNECTING)
        self.emit(Connecting())
        logger.log_event(
            "irc", "connect_start", server=self.serv_name, addr=info.addr, port=info.port
        )
        ssl_ctx = ssl.create_default_context() if info.tls else None

        def _log_attempt(retry_state: RetryCallState) -> None:
            exc = retry_state.outcome.exception() if retry_state.outcome else None
            logger.log_event(
                "irc",
                "connect_attempt_failed",
                level=logging.WARNING,
                server=self.serv_name,
                attempt=retry_state.attempt_number,
                error=_error_text(exc) if exc else "?",
            )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(IRC_CONNECT_ATTEMPTS),
                wait=wait_exponential(
                    multiplier=IRC_BACKOFF_BASE_DELAY, max=IRC_BACKOFF_MAX_DELAY
                ),
                retry=retry_if_exception(_is_retryable),
                before_sleep=_log_attempt,
                reraise=True,
            ):
                with attempt:
                    reader, writer = await asyncio.wait_for(
                        asyncio.open_connection(info.addr, info.port, ssl=ssl_ctx),
                        timeout=IRC_CONNECT_TIMEOUT,
                    )
        except socket.gaierror:
            logger.log_event(
                "irc", "cant_resolve", level=logging.ERROR, server=self.serv_name, addr=info.addr
            )
            self.set_state(ConnectionState.DISCONNECTED)
            self.emit(CantResolveAddr())
            return None
        except (OSError, TimeoutError) as e:
            logger.log_event(
                "irc", "io_error", level=logging.ERROR, server=self.serv_name, error=_error_text(e)
            )
            self.set_state(ConnectionState.DISCONNECTED)
            self.emit(IoError(_error_text(e)))
            return None

        logger.log_event("irc", "connected", server=self.serv_name)
        self.emit(Connected())
        return reader, writer

    async def _session(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self.chans.clear()
        self._nick_idx = 0
        self.current_nick = self.info.nicks[0]
        self.set_state(ConnectionState.REGISTERING)
        self._register()

        tasks = [
            asyncio.create_task(self._read_loop(reader)),
            asyncio.create_task(self._write_loop(writer)),
            asyncio.create_task(self._wake.wait()),
        ]
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    err = task.exception()
                    log_error("IRC session failed", err, context={"server": self.serv_name})
                    self.emit(IoError(_error_text(err)))
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as e:
                logger.log_event(
                    "irc", "io_error", level=logging.DEBUG, server=self.serv_name, error=_error_text(e)
                )
            while not self._outgoing.empty():
                self._outgoing.get_nowait()
            self.set_state(ConnectionState.DISCONNECTED)
            logger.log_event("irc", "disconnected", level=logging.WARNING, server=self.serv_name)
            self.emit(Disconnected())

    def _register(self) -> None:
        info = self.info
        if info.sasl_auth is not None:
            self.send_line("CAP REQ :sasl")
        if info.pass_:
            self.send_line(f"PASS {info.pass_}")
        self.send_line(f"NICK {self.current_nick}")
        self.send_line(f"USER {self.current_nick} 0 * :{info.realname}")

    async def _read_loop(self, reader: asyncio.StreamReader) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        buffer = ""
        while True:
            try:
                data = await reader.read(IRC_READ_CHUNK_SIZE)
            except OSError as e:
                raise NetworkError(_error_text(e), data={"server": self.serv_name}) from e
            if not data:
                return
            buffer = self.dispatcher.process_incoming_data(buffer, decoder.decode(data))

    async def _write_loop(self, writer: asyncio.StreamWriter) -> None:
        while True:
            line = await self._outgoing.get()
            if line is None:
                return
            logger.log_event(
                "irc",
                "raw_out",
                level=logging.DEBUG,
                server=self.serv_name,
                raw=redact_line(line),
            )
            writer.write(f"{line}\r\n".encode())
            await writer.drain()


__all__ = ["IRCClient"]
