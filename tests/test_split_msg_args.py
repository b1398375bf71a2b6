import pytest

from tabchat.cmd.handlers import split_msg_args


@pytest.mark.parametrize(
    "args,expected",
    [
        ("foo,bar", None),
        ("foo bar", ("foo", "bar")),
        ("foo, bar", ("foo,", "bar")),
        ("foo ,bar", ("foo", ",bar")),
        ("#blah blah", None),
        ("foo   bar baz", ("foo", "bar baz")),
        ("[away] back soon", ("[away]", "back soon")),
        ("", None),
        ("1nick hi", None),
    ],
)
def test_split_msg_args(args, expected):
    assert split_msg_args(args) == expected


def test_trailing_whitespace_gives_empty_message():
    assert split_msg_args("foo   ") == ("foo", "")
