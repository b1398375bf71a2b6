"""Entry point for a line typed after ``/``."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..common import CURRENT_TAB, MsgSource
from ..config.model import Defaults
from ..errors import CommandError, UnknownCommand
from ..irc.client import IRCClient
from ..irc.protocols import ConnectionHandle
from ..logs.logger import logger
from ..ui.protocol import UI
from .context import ClientFactory, Cmd, CmdArgs
from .handlers import CMDS
from .parser import parse_cmd


def run_cmd(
    cmd: str,
    src: MsgSource,
    defaults: Defaults,
    ui: UI,
    clients: list[ConnectionHandle],
    *,
    client_factory: ClientFactory = IRCClient.new,
    cmds: Sequence[Cmd] = CMDS,
) -> None:
    """Parse and run ``cmd`` (the text after ``/``) typed in tab ``src``.

    Command failures are reported in the current tab. Empty input is
    reported as an unsupported command with an empty name.
    """
    try:
        parsed = parse_cmd(cmd, cmds)
        if parsed is None:
            raise UnknownCommand("")
        logger.log_event(
            "cmd",
            "dispatch",
            level=logging.DEBUG,
            server=src.serv_name(),
            cmd=parsed.cmd.name,
        )
        parsed.cmd.cmd_fn(
            CmdArgs(
                args=parsed.args,
                defaults=defaults,
                ui=ui,
                clients=clients,
                src=src,
                client_factory=client_factory,
                cmds=cmds,
            )
        )
    except CommandError as err:
        logger.log_event(
            "cmd",
            "error",
            level=logging.DEBUG,
            error_type=type(err).__name__,
            error=str(err),
        )
        ui.add_client_err_msg(str(err), CURRENT_TAB)


__all__ = ["run_cmd"]
