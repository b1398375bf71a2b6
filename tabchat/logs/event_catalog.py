"""Human-readable templates for ``log_event`` calls, keyed by (domain, action).

Templates live in ``event_templates.json`` next to this module, one object
per domain (``cmd``, ``irc``, ``ui``, ``pump``).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}
_JSON_FILENAME = "event_templates.json"


class _KeepMissing(dict):
    """format_map mapping that leaves unknown placeholders as typed."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Read the template file into a flat ``{(domain, action): template}`` map.

    Non-string entries are skipped. A missing or unreadable file yields a
    single ``app/load_error`` entry, and every other event then falls back
    to its derived name.
    """
    if path is None:
        path = Path(__file__).with_name(_JSON_FILENAME)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw: Any = json.load(f)
    except FileNotFoundError:
        return {("app", "load_error"): f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}

    templates: dict[tuple[str, str], str] = {}
    if not isinstance(raw, Mapping):
        return templates
    for domain, actions in raw.items():
        if not isinstance(actions, Mapping):
            continue
        for action, template in actions.items():
            if isinstance(template, str):
                templates[(str(domain), str(action))] = template
    return templates


def render_event(domain: str, action: str, context: Mapping[str, object]) -> str | None:
    """Fill the template for ``domain``/``action`` from ``context``.

    Returns None when no template exists. Placeholders absent from
    ``context`` stay in the output as ``{name}``.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return None
    try:
        return template.format_map(_KeepMissing(context))
    except (IndexError, ValueError):
        return template


def reload_event_templates() -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = load_event_templates()


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "load_event_templates", "render_event", "reload_event_templates"]
