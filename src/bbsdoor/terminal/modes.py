# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Output mode selection for the terminal adapter."""

from __future__ import annotations

from enum import Enum

from bbsdoor.dropfile.models import CommKind


class OutputMode(str, Enum):
    NATIVE = "native"
    ESCAPE = "escape"


def select_output_mode(requested: CommKind, force_escape: bool = False) -> OutputMode:
    """Pick native console colors or ANSI escape codes, once per session.

    Native colors only reach a local screen, so they are used only when the
    caller asked for a local session and nothing forces escape codes. A socket
    or serial request that fell back to the console keeps escape codes because
    the caller may still be attached through redirected standard I/O.
    """
    if force_escape or requested is not CommKind.LOCAL:
        return OutputMode.ESCAPE
    return OutputMode.NATIVE
