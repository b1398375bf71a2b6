"""Interface handle: protocol, tabs, tab bar rendering and message sending."""

from .messaging import send_msg
from .protocol import UI
from .surface import UNDERLINE, Cell, CellBuffer, Surface
from .tab import Tab, char_width, tab_style
from .tabbed import Line, LineKind, MessageLog, TabbedUI

__all__ = [
    "UI",
    "send_msg",
    "Surface",
    "Cell",
    "CellBuffer",
    "UNDERLINE",
    "Tab",
    "char_width",
    "tab_style",
    "TabbedUI",
    "MessageLog",
    "Line",
    "LineKind",
]
