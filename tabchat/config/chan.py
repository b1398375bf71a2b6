"""Parsing of a single ``/join`` entry with inline tab settings."""

from __future__ import annotations

from dataclasses import dataclass

from ..common import ChanName
from .model import Notify, TabConfig

CHAN_PREFIXES = "#&+!"


@dataclass(frozen=True, slots=True)
class ChanSpec:
    """A channel to join, optionally carrying its tab configuration.

    ``config`` is ``None`` when the entry had no flags; the caller then keeps
    whatever configuration the tab already has.
    """

    name: ChanName
    config: TabConfig | None = None

    @classmethod
    def from_cmd_args(cls, entry: str) -> ChanSpec:
        """Parse ``<chan> [-ignore] [-notify [off|mentions|messages]]``.

        Raises:
            ValueError: with a message suitable for showing to the user.
        """
        words = entry.split()
        if not words:
            raise ValueError("Channel name can't be empty")
        name, flags = words[0], words[1:]
        if name[0] not in CHAN_PREFIXES:
            raise ValueError(
                f"Invalid channel name: {name} (must start with one of {CHAN_PREFIXES})"
            )
        if not flags:
            return cls(ChanName(name))

        ignore: bool | None = None
        notify: Notify | None = None
        i = 0
        while i < len(flags):
            flag = flags[i]
            if flag == "-ignore":
                ignore = True
            elif flag == "-notify":
                # A bare -notify means "notify on every message"
                if i + 1 < len(flags) and not flags[i + 1].startswith("-"):
                    value = flags[i + 1]
                    try:
                        notify = Notify(value)
                    except ValueError:
                        raise ValueError(
                            f"Invalid -notify value for {name}: {value} "
                            "(expected off, mentions or messages)"
                        ) from None
                    i += 1
                else:
                    notify = Notify.MESSAGES
            else:
                raise ValueError(f"Unexpected argument for {name}: {flag}")
            i += 1
        return cls(ChanName(name), TabConfig(ignore=ignore, notify=notify))


__all__ = ["ChanSpec", "CHAN_PREFIXES"]
