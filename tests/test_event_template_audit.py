"""Every log_event call site must have a template, and every template a caller."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

_SCRIPT = Path(__file__).parents[1] / "scripts" / "event_template_audit.py"
_spec = importlib.util.spec_from_file_location("event_template_audit", _SCRIPT)
if not (_spec and _spec.loader):
    raise AssertionError("Could not create spec for event_template_audit")
audit = importlib.util.module_from_spec(_spec)
sys.modules[_spec.name] = audit
_spec.loader.exec_module(audit)


def test_no_missing_or_unused_templates():
    result = audit.diff()
    assert result.missing == set(), f"Missing templates: {sorted(result.missing)}"
    assert result.unused == set(), f"Unused templates: {sorted(result.unused)}"


def test_ternary_actions_are_collected(tmp_path):
    source = tmp_path / "mod.py"
    source.write_text(
        "logger.log_event('irc', 'connected' if ok else 'disconnected', server=s)\n"
        "logger.log_event(domain='ui', action='tab_opened')\n"
        "logger.log_event(dynamic, 'ignored')\n"
    )
    refs = audit.extract_references([source])
    assert refs == {("irc", "connected"), ("irc", "disconnected"), ("ui", "tab_opened")}


def test_main_exit_status(tmp_path, monkeypatch, capsys):
    templates = tmp_path / "templates.json"
    templates.write_text('{"irc": {"quit": "Quitting"}}')
    (tmp_path / "mod.py").write_text("logger.log_event('irc', 'reconnect')\n")
    monkeypatch.setattr(audit, "PACKAGE_ROOT", tmp_path)
    monkeypatch.setattr(audit, "TEMPLATES_JSON", templates)
    assert audit.main([]) == 1
    out = capsys.readouterr().out
    assert "irc:reconnect" in out
    assert "irc:quit" in out
