# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Welcome door: greets the caller and reports how the session is connected."""

from __future__ import annotations

from bbsdoor import __version__
from bbsdoor.core.session import Session
from bbsdoor.dropfile.models import CommKind

_TITLE = f"bbsdoor {__version__}"
_WIDTH = 40


def _connection_label(session: Session) -> str:
    descriptor = session.descriptor
    if session.effective_comm is CommKind.SOCKET:
        return f"telnet socket {descriptor.socket_handle}"
    if session.effective_comm is CommKind.SERIAL:
        return f"serial {descriptor.com_port}"
    if session.degraded:
        return f"local console (wanted {session.requested_comm.name.lower()})"
    return "local console"


def run(session: Session) -> None:
    """Show the caller who and where they are, then wait for Enter."""
    term = session.terminal
    descriptor = session.descriptor

    term.clear_screen()
    term.write_line("╔" + "═" * (_WIDTH - 2) + "╗", "cyan")
    term.write_line("║" + _TITLE.center(_WIDTH - 2) + "║", "cyan")
    term.write_line("╚" + "═" * (_WIDTH - 2) + "╝", "cyan")
    term.write_line()

    term.write_line(f"Welcome, [bright_yellow]{session.player_name}[/]!")
    if session.is_door:
        bbs = descriptor.bbs_name or "your BBS"
        term.write_line(f"Calling from {descriptor.user_location} on node {descriptor.node_number} of {bbs}.", "gray")
        term.write_line(f"Time left: {descriptor.time_left_minutes} minutes", "gray")
    else:
        term.write_line("Running in local mode.", "gray")
    term.write_line(f"Connection: {_connection_label(session)}", "gray")
    term.write_line(f"Saves: {session.save_directory(create=True)}", "dark_gray")
    term.write_line()
    term.pause()
