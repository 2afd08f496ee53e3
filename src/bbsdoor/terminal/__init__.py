# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal abstraction: colored text and line input over any transport."""

from __future__ import annotations

from bbsdoor.terminal.adapter import MenuOption, TerminalAdapter
from bbsdoor.terminal.cp437 import encode_cp437
from bbsdoor.terminal.markup import Segment, has_markup, parse_markup
from bbsdoor.terminal.modes import OutputMode, select_output_mode

__all__ = [
    "MenuOption",
    "OutputMode",
    "Segment",
    "TerminalAdapter",
    "encode_cp437",
    "has_markup",
    "parse_markup",
    "select_output_mode",
]
