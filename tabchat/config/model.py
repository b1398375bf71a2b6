from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Defaults(BaseModel):
    """Connection settings applied to every server opened with ``/connect``.

    Attributes:
        nicks: Nicks to try in order when registering.
        realname: Real name sent with ``USER``.
        tls: Whether new connections use TLS.
        join: Channels joined automatically after registration.
    """

    nicks: list[str] = Field(min_length=1)
    realname: str
    tls: bool = False
    join: list[str] = Field(default_factory=list)

    @field_validator("nicks", "join", mode="before")
    @classmethod
    def strip_entries(cls, v: Any) -> list[str]:
        """Strip whitespace and drop empty entries, keeping order."""
        if not isinstance(v, list):
            raise ValueError("must be a list")
        return [s.strip() for s in v if isinstance(s, str) and s.strip()]


class Style(BaseModel):
    """Foreground/background color pair (terminal color numbers)."""

    model_config = ConfigDict(frozen=True)

    fg: int = Field(ge=0)
    bg: int = Field(ge=0)


class Colors(BaseModel):
    """Color table for the tab bar.

    Only the tab entries are modelled; message area colors belong to the
    widget layer.
    """

    model_config = ConfigDict(frozen=True)

    tab_active: Style = Style(fg=15, bg=0)
    tab_normal: Style = Style(fg=8, bg=0)
    tab_joinpart: Style = Style(fg=2, bg=0)
    tab_new_msg: Style = Style(fg=5, bg=0)
    tab_highlight: Style = Style(fg=9, bg=0)


class Notify(str, Enum):
    OFF = "off"
    MENTIONS = "mentions"
    MESSAGES = "messages"


class TabConfig(BaseModel):
    """Per-tab settings; ``None`` fields inherit from the enclosing server."""

    ignore: bool | None = None
    notify: Notify | None = None

    def merge(self, parent: TabConfig) -> TabConfig:
        """Return a copy with unset fields filled from ``parent``."""
        return TabConfig(
            ignore=self.ignore if self.ignore is not None else parent.ignore,
            notify=self.notify if self.notify is not None else parent.notify,
        )


__all__ = ["Defaults", "Style", "Colors", "Notify", "TabConfig"]
