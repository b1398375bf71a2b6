"""In-memory tabbed interface.

Owns the ordered tab list, per-tab message history and nick lists, and the
tab configurations. Terminal input and message-area rendering live outside
this module; the tab strip is drawn with ``draw_tab_bar``.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto

from ..common import (
    AllServTabs,
    AllUserTabs,
    Chan,
    ChanName,
    ChanSource,
    CurrentTab,
    MsgSource,
    MsgTarget,
    Server,
    ServerSource,
    TabStyle,
    User,
    UserSource,
)
from ..config.model import Colors, Notify, TabConfig
from ..constants import MENTIONS_TAB_NAME
from ..logs.logger import logger
from .surface import Surface
from .tab import Tab


class LineKind(Enum):
    CLIENT = auto()
    ERROR = auto()
    SERVER = auto()
    PRIVMSG = auto()
    ACTION = auto()
    MEMBERSHIP = auto()
    TOPIC = auto()


@dataclass(slots=True)
class Line:
    kind: LineKind
    text: str
    ts: datetime | None = None
    sender: str | None = None
    highlight: bool = False


@dataclass
class MessageLog:
    """Content widget of one tab."""

    lines: list[Line] = field(default_factory=list)
    nicks: set[str] = field(default_factory=set)
    topic: str | None = None

    def add(self, line: Line) -> None:
        self.lines.append(line)

    def texts(self) -> list[str]:
        return [line.text for line in self.lines]


class TabbedUI:  # pylint: disable=too-many-public-methods
    def __init__(
        self, colors: Colors | None = None, default_config: TabConfig | None = None
    ) -> None:
        self.colors = colors or Colors()
        self.tabs: list[Tab] = []
        self.active_idx = 0
        self.nicks: dict[str, str] = {}
        self._configs: dict[tuple[str, ChanName | None], TabConfig] = {}
        self._default_config = default_config or TabConfig(
            ignore=False, notify=Notify.MENTIONS
        )
        self.new_server_tab(MENTIONS_TAB_NAME, None)

    # Lookup

    def find_tab(self, src: MsgSource) -> Tab | None:
        idx = self._find_idx(src)
        return None if idx is None else self.tabs[idx]

    def _find_idx(self, src: MsgSource) -> int | None:
        for idx, tab in enumerate(self.tabs):
            if tab.src == src:
                return idx
        return None

    def _resolve(self, target: MsgTarget) -> list[int]:
        match target:
            case CurrentTab():
                return [self.active_idx] if self.tabs else []
            case Server(serv=serv):
                src: MsgSource = ServerSource(serv)
            case Chan(serv=serv, chan=chan):
                src = ChanSource(serv, chan)
            case User(serv=serv, nick=nick):
                src = UserSource(serv, nick)
            case AllServTabs(serv=serv):
                return [i for i, t in enumerate(self.tabs) if t.src.serv == serv]
            case AllUserTabs(serv=serv, nick=nick):
                return [
                    i
                    for i, t in enumerate(self.tabs)
                    if t.src.serv == serv
                    and (
                        (isinstance(t.src, ChanSource) and nick in t.widget.nicks)
                        or t.src == UserSource(serv, nick)
                    )
                ]
        idx = self._find_idx(src)
        if idx is None:
            logger.log_event("ui", "unknown_target", level=logging.DEBUG, target=target)
            return []
        return [idx]

    def _pick_switch(self, name: str) -> str | None:
        used = {t.switch.lower() for t in self.tabs if t.switch}
        for ch in name:
            if ch.isalnum() and ch.lower() not in used:
                return ch
        return None

    # Tab lifecycle

    def _insert_tab(self, serv: str, visible_name: str, src: MsgSource) -> Tab:
        tab = Tab(
            visible_name=visible_name,
            widget=MessageLog(),
            src=src,
            switch=self._pick_switch(visible_name),
        )
        # Keep a server's tabs grouped after its server tab
        last = max((i for i, t in enumerate(self.tabs) if t.src.serv == serv), default=None)
        if last is None:
            self.tabs.append(tab)
        else:
            self.tabs.insert(last + 1, tab)
            if last + 1 <= self.active_idx:
                self.active_idx += 1
        logger.log_event("ui", "tab_opened", level=logging.DEBUG, server=serv, name=visible_name)
        return tab

    def new_server_tab(self, serv: str, alias: str | None) -> None:
        if self._find_idx(ServerSource(serv)) is None:
            self._insert_tab(serv, alias or serv, ServerSource(serv))

    def new_chan_tab(self, serv: str, chan: ChanName) -> None:
        self.new_server_tab(serv, None)
        if self._find_idx(ChanSource(serv, chan)) is None:
            self._insert_tab(serv, str(chan), ChanSource(serv, chan))

    def new_user_tab(self, serv: str, nick: str) -> None:
        self.new_server_tab(serv, None)
        if self._find_idx(UserSource(serv, nick)) is None:
            self._insert_tab(serv, nick, UserSource(serv, nick))

    def _close_where(self, pred) -> None:  # type: ignore[no-untyped-def]
        active = self.tabs[self.active_idx] if self.tabs else None
        removed = [t for t in self.tabs if pred(t)]
        if not removed:
            return
        first_removed = self.tabs.index(removed[0])
        self.tabs = [t for t in self.tabs if not pred(t)]
        for tab in removed:
            logger.log_event(
                "ui", "tab_closed", level=logging.DEBUG, server=tab.src.serv, name=tab.visible_name
            )
        if active is not None and active in self.tabs:
            self.active_idx = self.tabs.index(active)
        else:
            self.active_idx = max(0, min(first_removed, len(self.tabs)) - 1)

    def close_server_tab(self, serv: str) -> None:
        if serv == MENTIONS_TAB_NAME:
            return
        self._close_where(lambda t: t.src.serv == serv)
        self._configs = {k: v for k, v in self._configs.items() if k[0] != serv}

    def close_chan_tab(self, serv: str, chan: ChanName) -> None:
        self._close_where(lambda t: t.src == ChanSource(serv, chan))

    def close_user_tab(self, serv: str, nick: str) -> None:
        self._close_where(lambda t: t.src == UserSource(serv, nick))

    def current_tab(self) -> MsgSource | None:
        if not self.tabs:
            return None
        return self.tabs[self.active_idx].src

    def select_tab(self, idx: int) -> None:
        self.active_idx = idx % len(self.tabs)
        self.tabs[self.active_idx].set_style(TabStyle.NORMAL)

    def next_tab(self) -> None:
        self.select_tab(self.active_idx + 1)

    def prev_tab(self) -> None:
        self.select_tab(self.active_idx - 1)

    def switch_by_char(self, ch: str) -> bool:
        for idx, tab in enumerate(self.tabs):
            if tab.switch is not None and tab.switch.lower() == ch.lower():
                self.select_tab(idx)
                return True
        return False

    def set_tab_style(self, style: TabStyle, target: MsgTarget) -> None:
        for idx in self._resolve(target):
            tab = self.tabs[idx]
            if idx != self.active_idx and style > tab.style:
                tab.set_style(style)

    # Tab configuration

    def get_tab_config(self, serv: str, chan: ChanName | None) -> TabConfig:
        serv_config = self._configs.get((serv, None), self._default_config)
        if chan is None:
            return serv_config
        chan_config = self._configs.get((serv, chan))
        return serv_config if chan_config is None else chan_config.merge(serv_config)

    def set_tab_config(self, serv: str, chan: ChanName | None, config: TabConfig) -> None:
        self._configs[(serv, chan)] = config
        if chan is None:
            self.new_server_tab(serv, None)
        else:
            self.new_chan_tab(serv, chan)

    # Messages

    def _add_line(self, target: MsgTarget, line: Line) -> list[int]:
        idxs = self._resolve(target)
        for idx in idxs:
            self.tabs[idx].widget.add(line)
        return idxs

    def add_client_msg(self, msg: str, target: MsgTarget) -> None:
        self._add_line(target, Line(LineKind.CLIENT, msg))

    def add_client_err_msg(self, msg: str, target: MsgTarget) -> None:
        self._add_line(target, Line(LineKind.ERROR, msg))

    def add_msg(self, msg: str, ts: datetime, target: MsgTarget) -> None:
        self._add_line(target, Line(LineKind.SERVER, msg, ts))

    def add_privmsg(
        self,
        sender: str,
        msg: str,
        ts: datetime,
        target: MsgTarget,
        highlight: bool,
        is_action: bool,
    ) -> None:
        if isinstance(target, User):
            # Incoming private messages open a tab
            self.new_user_tab(target.serv, target.nick)
        text = f"* {sender} {msg}" if is_action else f"<{sender}> {msg}"
        kind = LineKind.ACTION if is_action else LineKind.PRIVMSG
        idxs = self._add_line(target, Line(kind, text, ts, sender, highlight))
        style = TabStyle.HIGHLIGHT if highlight else TabStyle.NEW_MSG
        for idx in idxs:
            tab = self.tabs[idx]
            if idx != self.active_idx and style > tab.style:
                tab.set_style(style)
            if highlight and tab.src.serv != MENTIONS_TAB_NAME:
                self.add_client_msg(
                    f"{tab.src.serv} {tab.visible_name}: {text}",
                    Server(MENTIONS_TAB_NAME),
                )

    # Nick lists & topics

    def _membership_line(self, idx: int, text: str, ts: datetime | None) -> None:
        tab = self.tabs[idx]
        if ts is None:
            return
        config = (
            self.get_tab_config(tab.src.serv, tab.src.chan)
            if isinstance(tab.src, ChanSource)
            else self.get_tab_config(tab.src.serv, None)
        )
        if config.ignore:
            return
        tab.widget.add(Line(LineKind.MEMBERSHIP, text, ts))
        if idx != self.active_idx and TabStyle.JOIN_OR_PART > tab.style:
            tab.set_style(TabStyle.JOIN_OR_PART)

    def add_nick(self, nick: str, ts: datetime | None, target: MsgTarget) -> None:
        for idx in self._resolve(target):
            self.tabs[idx].widget.nicks.add(nick)
            self._membership_line(idx, f"{nick} joined", ts)

    def remove_nick(self, nick: str, ts: datetime | None, target: MsgTarget) -> None:
        for idx in self._resolve(target):
            self.tabs[idx].widget.nicks.discard(nick)
            self._membership_line(idx, f"{nick} left", ts)

    def rename_nick(
        self, old_nick: str, new_nick: str, ts: datetime, target: MsgTarget
    ) -> None:
        for idx in self._resolve(target):
            tab = self.tabs[idx]
            if isinstance(tab.src, UserSource):
                tab.update_source(lambda src: dataclasses.replace(src, nick=new_nick))
                tab.visible_name = new_nick
            else:
                tab.widget.nicks.discard(old_nick)
                tab.widget.nicks.add(new_nick)
            self._membership_line(idx, f"{old_nick} is now known as {new_nick}", ts)

    def set_nick(self, serv: str, new_nick: str) -> None:
        self.nicks[serv] = new_nick

    def get_nick(self, serv: str) -> str | None:
        return self.nicks.get(serv)

    def set_topic(self, topic: str, ts: datetime, serv: str, chan: ChanName) -> None:
        idx = self._find_idx(ChanSource(serv, chan))
        if idx is None:
            return
        tab = self.tabs[idx]
        tab.widget.topic = topic
        tab.widget.add(Line(LineKind.TOPIC, f"Channel topic: {topic}", ts))

    # Rendering

    def draw_tab_bar(self, surface: Surface, pos_y: int = 0, pos_x: int = 0) -> None:
        for idx, tab in enumerate(self.tabs):
            tab.draw(surface, self.colors, pos_x, pos_y, idx == self.active_idx)
            pos_x += tab.width() + 1


__all__ = ["TabbedUI", "MessageLog", "Line", "LineKind"]
