import pytest

from tabchat.constants import IRC_MAX_LINE_BYTES
from tabchat.utils.text import (
    is_nick_first_char,
    redact_line,
    split_privmsg,
    split_whitespace_indices,
)

FRAMING = len("PRIVMSG ") + len(" :") + len("\r\n")


def test_whitespace_indices():
    assert list(split_whitespace_indices("  ab c\t d ")) == [2, 5, 8]
    assert list(split_whitespace_indices("")) == []


def test_nick_first_char():
    assert is_nick_first_char("a")
    assert is_nick_first_char("Z")
    assert is_nick_first_char("[")
    assert is_nick_first_char("_")
    assert not is_nick_first_char("#")
    assert not is_nick_first_char("1")
    assert not is_nick_first_char("-")
    assert not is_nick_first_char("é")


class TestSplitPrivmsg:
    def test_short_message_is_one_chunk(self):
        assert split_privmsg(20, "hello") == ["hello"]

    def test_empty_message_has_no_chunks(self):
        assert split_privmsg(20, "") == []

    def test_chunks_fit_the_line_limit(self):
        extra = 100
        budget = IRC_MAX_LINE_BYTES - FRAMING - extra
        msg = "x" * (budget * 2 + 7)
        chunks = split_privmsg(extra, msg)
        assert [len(c) for c in chunks] == [budget, budget, 7]
        assert "".join(chunks) == msg

    def test_never_splits_a_code_point(self):
        extra = IRC_MAX_LINE_BYTES - FRAMING - 5
        chunks = split_privmsg(extra, "ééé")
        # two-byte characters: two fit in five bytes
        assert chunks == ["éé", "é"]
        assert all(len(c.encode("utf-8")) <= 5 for c in chunks)

    def test_tiny_budget_still_makes_progress(self):
        assert split_privmsg(10_000, "ab") == ["a", "b"]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("PASS hunter2", "PASS [REDACTED]"),
        ("AUTHENTICATE dGVzdGVy", "AUTHENTICATE [REDACTED]"),
        ("AUTHENTICATE PLAIN", "AUTHENTICATE PLAIN"),
        ("AUTHENTICATE +", "AUTHENTICATE +"),
        ("PRIVMSG NickServ :identify hunter2", "PRIVMSG NickServ :identify [REDACTED]"),
        ("privmsg nickserv :IDENTIFY me hunter2", "privmsg nickserv :IDENTIFY [REDACTED]"),
        ("PRIVMSG #rust :PASS it on", "PRIVMSG #rust :PASS it on"),
        ("NICK tester", "NICK tester"),
    ],
)
def test_redact_line(line, expected):
    assert redact_line(line) == expected
