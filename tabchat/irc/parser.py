"""IRC message parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ParsingError

CTCP_DELIM = "\x01"


@dataclass
class IRCMessage:
    raw: str
    prefix: str | None
    command: str
    params: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def nick(self) -> str | None:
        """Nick part of a ``nick!user@host`` prefix, ``None`` for server prefixes."""
        if not self.prefix:
            return None
        nick, sep, _ = self.prefix.partition("!")
        if not sep and "." in nick:
            return None
        return nick

    @property
    def trailing(self) -> str:
        return self.params[-1] if self.params else ""


def parse_irc_message(raw_line: str) -> IRCMessage:
    """Parse one IRC line (without CRLF).

    Raises:
        ParsingError: if the line carries no command.
    """
    tags: dict[str, str] = {}
    prefix: str | None = None
    trailing: str | None = None

    original = raw_line
    raw_line = raw_line.rstrip("\r\n")

    if raw_line.startswith("@"):
        tags_part, _, raw_line = raw_line.partition(" ")
        tags = _parse_tags(tags_part[1:])

    if raw_line.startswith(":"):
        # Malformed lines may omit the space after the prefix
        prefix, _, raw_line = raw_line[1:].partition(" ")

    if raw_line.startswith(":"):
        raw_line, trailing = "", raw_line[1:]
    elif " :" in raw_line:
        raw_line, trailing = raw_line.split(" :", 1)

    parts = raw_line.split()
    if not parts:
        raise ParsingError("IRC line has no command", data={"raw": original})
    command = parts[0].upper()
    params = parts[1:]
    if trailing is not None:
        params.append(trailing)

    return IRCMessage(
        raw=original, prefix=prefix, command=command, params=params, tags=tags
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if "=" in tag:
            k, v = tag.split("=", 1)
        else:
            k, v = tag, ""
        tags[k] = v
    return tags


@dataclass
class PrivMsg:
    sender: str
    target: str
    message: str
    is_action: bool
    is_notice: bool


def build_privmsg(parsed: IRCMessage) -> PrivMsg | None:
    """Extract a PRIVMSG/NOTICE, unwrapping ``CTCP ACTION``.

    Other CTCP requests are not messages and yield ``None``.
    """
    if parsed.command not in ("PRIVMSG", "NOTICE") or len(parsed.params) < 2:
        return None
    target, message = parsed.params[0], parsed.params[1]
    is_action = False
    if message.startswith(CTCP_DELIM):
        body = message.strip(CTCP_DELIM)
        if not body.startswith("ACTION"):
            return None
        message = body[len("ACTION") :].lstrip(" ")
        is_action = True
    sender = parsed.nick or parsed.prefix or "*"
    return PrivMsg(
        sender=sender,
        target=target,
        message=message,
        is_action=is_action,
        is_notice=parsed.command == "NOTICE",
    )


__all__ = ["IRCMessage", "PrivMsg", "parse_irc_message", "build_privmsg", "CTCP_DELIM"]
