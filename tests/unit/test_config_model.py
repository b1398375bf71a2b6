import pytest
from pydantic import ValidationError

from tabchat.config.model import Colors, Defaults, Notify, Style
from tabchat.irc.models import ServerInfo


class TestDefaults:
    def test_entries_are_stripped_and_blank_dropped(self):
        d = Defaults(nicks=[" me ", "", "  "], realname="Me", join=["#a ", " "])
        assert d.nicks == ["me"]
        assert d.join == ["#a"]
        assert d.tls is False

    def test_requires_a_nick(self):
        with pytest.raises(ValidationError):
            Defaults(nicks=["  "], realname="Me")


def test_colors_are_frozen():
    colors = Colors()
    with pytest.raises(ValidationError):
        colors.tab_active = Style(fg=1, bg=1)


def test_notify_values():
    assert [n.value for n in Notify] == ["off", "mentions", "messages"]


class TestServerInfo:
    def test_password_alias(self):
        info = ServerInfo.model_validate(
            {"addr": "a", "port": 1, "realname": "r", "nicks": ["n"], "pass": "pw"}
        )
        assert info.pass_ == "pw"

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, port):
        with pytest.raises(ValidationError):
            ServerInfo(addr="a", port=port, realname="r", nicks=["n"])
