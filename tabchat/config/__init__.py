"""Configuration package exports."""

from .chan import ChanSpec
from .model import Colors, Defaults, Notify, Style, TabConfig

__all__ = [
    "ChanSpec",
    "Colors",
    "Defaults",
    "Notify",
    "Style",
    "TabConfig",
]
