"""String helpers for command parsing and outgoing message framing."""

from __future__ import annotations

import re
from collections.abc import Iterator

from ..constants import IRC_MAX_LINE_BYTES

_WORD_RE = re.compile(r"\S+")

# RFC 2812: nickname = ( letter / special ) *8( letter / digit / special / "-" )
_NICK_SPECIALS = frozenset("[]\\`_^{|}")

# "PRIVMSG " + " :" + "\r\n"
_PRIVMSG_FRAMING = len("PRIVMSG ") + len(" :") + len("\r\n")

REDACTED = "[REDACTED]"

# Outgoing lines whose trailing text is a credential
_SECRET_LINE_RE = re.compile(
    r"^(?P<head>PASS |AUTHENTICATE (?!PLAIN$|\+$)|PRIVMSG NickServ :identify )(?P<secret>.+)$",
    re.IGNORECASE,
)


def split_whitespace_indices(s: str) -> Iterator[int]:
    """Yield the start index of every whitespace-separated word in ``s``.

    Slicing ``s`` at one of these indices keeps the rest of the line exactly
    as typed, unlike re-joining ``s.split()``.
    """
    for match in _WORD_RE.finditer(s):
        yield match.start()


def is_nick_first_char(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c in _NICK_SPECIALS


def split_privmsg(extra_len: int, msg: str) -> list[str]:
    """Split ``msg`` into chunks that fit one PRIVMSG line each.

    ``extra_len`` is the number of bytes the rest of the line takes
    (target, sender prefix as relayed by the server, CTCP framing). Chunks
    never split a code point. Returns an empty list for an empty message.
    """
    budget = max(IRC_MAX_LINE_BYTES - _PRIVMSG_FRAMING - extra_len, 1)
    chunks: list[str] = []
    start = 0
    used = 0
    for i, ch in enumerate(msg):
        n = len(ch.encode("utf-8"))
        if used + n > budget and i > start:
            chunks.append(msg[start:i])
            start = i
            used = 0
        used += n
    if start < len(msg):
        chunks.append(msg[start:])
    return chunks


def redact_line(line: str) -> str:
    """Mask passwords and SASL payloads in a raw IRC line before logging."""
    return _SECRET_LINE_RE.sub(lambda m: m.group("head") + REDACTED, line)


__all__ = [
    "REDACTED",
    "split_whitespace_indices",
    "is_nick_first_char",
    "split_privmsg",
    "redact_line",
]
