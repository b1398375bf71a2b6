"""Sending a user-typed message to the server and echoing it in its tab."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..common import ChanSource, MsgSource, ServerSource
from ..irc.lookup import find_client
from ..irc.protocols import ConnectionHandle
from .protocol import UI

# "\x01ACTION " + "\x01"
_CTCP_ACTION_OVERHEAD = 9


def send_msg(
    ui: UI,
    clients: Sequence[ConnectionHandle],
    src: MsgSource,
    msg: str,
    is_action: bool,
) -> None:
    """Send ``msg`` to ``src``.

    A server source sends ``msg`` as a raw protocol line. Channel and user
    sources send PRIVMSG (or CTCP ACTION), split to fit the line limit, and
    echo each chunk to the tab. Without a connection for the server this is
    a no-op.
    """
    client = find_client(clients, src.serv_name())
    if client is None:
        return

    if isinstance(src, ServerSource):
        # Raw lines are sent as typed, without splitting
        client.raw_msg(msg)
        return

    ui_target = src.to_target()
    msg_target = str(src.chan) if isinstance(src, ChanSource) else src.nick

    ts = datetime.now()
    extra_len = len(msg_target.encode("utf-8")) + (_CTCP_ACTION_OVERHEAD if is_action else 0)
    send_fn = client.ctcp_action if is_action else client.privmsg
    for chunk in client.split_privmsg(extra_len, msg):
        send_fn(msg_target, chunk)
        ui.add_privmsg(client.get_nick(), chunk, ts, ui_target, False, is_action)


__all__ = ["send_msg"]
