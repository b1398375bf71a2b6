"""Client commands: parsing, handlers and dispatch."""

from .context import ClientFactory, Cmd, CmdArgs  # noqa: F401
from .handlers import CMDS, parse_port, parse_serv_addr, split_msg_args  # noqa: F401
from .parser import ParsedCmd, parse_cmd, split_cmd  # noqa: F401
from .router import run_cmd  # noqa: F401

__all__ = [
    "CMDS",
    "ClientFactory",
    "Cmd",
    "CmdArgs",
    "ParsedCmd",
    "parse_cmd",
    "parse_port",
    "parse_serv_addr",
    "run_cmd",
    "split_cmd",
    "split_msg_args",
]
