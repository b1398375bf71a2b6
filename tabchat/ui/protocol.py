"""Protocol for the interface handle used by commands and the event pump."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..common import ChanName, MsgSource, MsgTarget, TabStyle
from ..config.model import TabConfig


class UI(Protocol):
    # Message posting

    def add_client_msg(self, msg: str, target: MsgTarget) -> None:
        ...

    def add_client_err_msg(self, msg: str, target: MsgTarget) -> None:
        ...

    def add_msg(self, msg: str, ts: datetime, target: MsgTarget) -> None:
        """Text that came from the server (MOTD, numerics, notices to the server tab)."""
        ...

    def add_privmsg(
        self,
        sender: str,
        msg: str,
        ts: datetime,
        target: MsgTarget,
        highlight: bool,
        is_action: bool,
    ) -> None:
        ...

    # Tab lifecycle

    def new_server_tab(self, serv: str, alias: str | None) -> None:
        ...

    def new_chan_tab(self, serv: str, chan: ChanName) -> None:
        ...

    def new_user_tab(self, serv: str, nick: str) -> None:
        ...

    def close_server_tab(self, serv: str) -> None:
        ...

    def close_chan_tab(self, serv: str, chan: ChanName) -> None:
        ...

    def close_user_tab(self, serv: str, nick: str) -> None:
        ...

    def current_tab(self) -> MsgSource | None:
        ...

    def set_tab_style(self, style: TabStyle, target: MsgTarget) -> None:
        ...

    # Tab configuration

    def get_tab_config(self, serv: str, chan: ChanName | None) -> TabConfig:
        ...

    def set_tab_config(self, serv: str, chan: ChanName | None, config: TabConfig) -> None:
        """Store ``config``; creates the channel tab when it doesn't exist yet."""
        ...

    # Nick lists & topics

    def add_nick(self, nick: str, ts: datetime | None, target: MsgTarget) -> None:
        ...

    def remove_nick(self, nick: str, ts: datetime | None, target: MsgTarget) -> None:
        ...

    def rename_nick(
        self, old_nick: str, new_nick: str, ts: datetime, target: MsgTarget
    ) -> None:
        ...

    def set_nick(self, serv: str, new_nick: str) -> None:
        ...

    def set_topic(self, topic: str, ts: datetime, serv: str, chan: ChanName) -> None:
        ...


__all__ = ["UI"]
