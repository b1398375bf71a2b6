"""Tab descriptor and tab bar rendering."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from wcwidth import wcwidth

from ..common import MsgSource, TabStyle
from ..config.model import Colors, Style
from .surface import UNDERLINE, Surface


def char_width(ch: str) -> int:
    """Columns ``ch`` takes in the tab bar; every character gets at least one cell."""
    return max(wcwidth(ch), 1)


def tab_style(style: TabStyle, colors: Colors) -> Style:
    return {
        TabStyle.NORMAL: colors.tab_normal,
        TabStyle.JOIN_OR_PART: colors.tab_joinpart,
        TabStyle.NEW_MSG: colors.tab_new_msg,
        TabStyle.HIGHLIGHT: colors.tab_highlight,
    }[style]


@dataclass
class Tab:
    visible_name: str
    widget: Any
    src: MsgSource
    style: TabStyle = TabStyle.NORMAL
    # Alt-character to use to switch to this tab.
    switch: str | None = None

    def set_style(self, style: TabStyle) -> None:
        self.style = style

    def update_source(self, f: Callable[[MsgSource], MsgSource]) -> None:
        self.src = f(self.src)

    def width(self) -> int:
        return sum(char_width(ch) for ch in self.visible_name)

    def draw(
        self, surface: Surface, colors: Colors, pos_x: int, pos_y: int, active: bool
    ) -> None:
        style = colors.tab_active if active else tab_style(self.style, colors)

        switch_drawn = False
        for ch in self.visible_name:
            if ch == self.switch and not switch_drawn:
                surface.change_cell(pos_x, pos_y, ch, style.fg | UNDERLINE, style.bg)
                switch_drawn = True
            else:
                surface.change_cell(pos_x, pos_y, ch, style.fg, style.bg)
            pos_x += char_width(ch)


__all__ = ["Tab", "tab_style", "char_width"]
