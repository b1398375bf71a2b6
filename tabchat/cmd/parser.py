"""Splitting an input line into a command name and its argument tail."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import UnknownCommand
from ..logs.logger import logger
from ..utils.text import split_whitespace_indices
from .context import Cmd
from .handlers import CMDS


@dataclass(frozen=True, slots=True)
class ParsedCmd:
    cmd: Cmd
    # Rest of the command after extracting command name.
    args: str


def split_cmd(line: str) -> tuple[str, str] | None:
    """Return ``(name, tail)``, or ``None`` when ``line`` has no words.

    The tail starts at the second word and runs to the end of ``line``
    untouched, so spacing inside a message body survives.
    """
    words = line.split(maxsplit=1)
    if not words:
        return None
    ws_idxs = split_whitespace_indices(line)
    next(ws_idxs)  # command name
    rest_idx = next(ws_idxs, None)
    return words[0], "" if rest_idx is None else line[rest_idx:]


def parse_cmd(line: str, cmds: Sequence[Cmd] = CMDS) -> ParsedCmd | None:
    """Look the command name up in ``cmds``.

    Returns ``None`` for empty input. The first command registered under a
    name wins.

    Raises:
        UnknownCommand: when no command has that name.
    """
    split = split_cmd(line)
    if split is None:
        return None
    name, rest = split
    for cmd in cmds:
        if cmd.name == name:
            return ParsedCmd(cmd, rest)
    logger.log_event("cmd", "unknown", level=logging.DEBUG, cmd=name)
    raise UnknownCommand(name)


__all__ = ["ParsedCmd", "parse_cmd", "split_cmd"]
