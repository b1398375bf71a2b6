"""Project logging package.

Contains internal logging utilities (event catalog + ChatLogger). Avoid
importing stdlib logging through this package name externally.
"""

from .event_catalog import EVENT_TEMPLATES, load_event_templates, reload_event_templates  # noqa: F401
from .logger import ChatLogger, logger  # noqa: F401

__all__ = [
    "ChatLogger",
    "logger",
    "EVENT_TEMPLATES",
    "load_event_templates",
    "reload_event_templates",
]
