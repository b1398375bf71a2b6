# Ensure project root is on sys.path so 'tabchat' is importable when running pytest
# from environments that don't automatically include it.
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tabchat.common import ChanName  # noqa: E402
from tabchat.config.model import Defaults  # noqa: E402
from tabchat.ui.tabbed import TabbedUI  # noqa: E402
from tabchat.utils.text import split_privmsg  # noqa: E402


class FakeClient:
    """Connection handle double that records every call it receives."""

    def __init__(self, serv: str, nick: str = "tester", chan_nicks=None) -> None:
        self.serv = serv
        self.current_nick = nick
        self.chan_nicks: dict[ChanName, list[str]] = chan_nicks or {}
        self.calls: list[tuple] = []

    def get_serv_name(self) -> str:
        return self.serv

    def get_nick(self) -> str:
        return self.current_nick

    def away(self, msg):
        self.calls.append(("away", msg))

    def reconnect(self, port):
        self.calls.append(("reconnect", port))

    def join(self, chans):
        self.calls.append(("join", [str(c) for c in chans]))

    def part(self, chan, reason):
        self.calls.append(("part", str(chan), reason))

    def quit(self, reason):
        self.calls.append(("quit", reason))

    def nick(self, new_nick):
        self.calls.append(("nick", new_nick))

    def privmsg(self, target, msg):
        self.calls.append(("privmsg", target, msg))

    def ctcp_action(self, target, msg):
        self.calls.append(("ctcp_action", target, msg))

    def raw_msg(self, line):
        self.calls.append(("raw_msg", line))

    def get_chan_nicks(self, chan):
        return list(self.chan_nicks.get(ChanName(str(chan)), []))

    def split_privmsg(self, extra_len, msg):
        return split_privmsg(extra_len, msg)


@pytest.fixture
def fake_client_cls():
    return FakeClient


@pytest.fixture
def defaults() -> Defaults:
    return Defaults(nicks=["tester", "tester_"], realname="Test User", join=["#home"])


@pytest.fixture
def ui() -> TabbedUI:
    return TabbedUI()
