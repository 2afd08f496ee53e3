# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Named colors and their ANSI SGR and native console equivalents."""

from __future__ import annotations

DEFAULT_COLOR = "white"

ESC = "\x1b"
CSI = "\x1b["
RESET = "\x1b[0m"
CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"

# SGR foreground codes
ANSI_CODES: dict[str, str] = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "gray": "90",
    "grey": "90",
    "darkgray": "90",
    "dark_gray": "90",
    "darkgrey": "90",
    "bright_black": "90",
    "darkred": "31",
    "dark_red": "31",
    "darkgreen": "32",
    "dark_green": "32",
    "darkyellow": "33",
    "dark_yellow": "33",
    "brown": "33",
    "darkblue": "34",
    "dark_blue": "34",
    "darkmagenta": "35",
    "dark_magenta": "35",
    "darkcyan": "36",
    "dark_cyan": "36",
    "bright_red": "91",
    "bright_green": "92",
    "bright_yellow": "93",
    "bright_blue": "94",
    "bright_magenta": "95",
    "bright_cyan": "96",
    "bright_white": "97",
}

# rich styles matching the console palette the door was written against:
# plain names are the bright console colors, dark_* the dim ones
NATIVE_STYLES: dict[str, str] = {
    "black": "black",
    "darkred": "red",
    "dark_red": "red",
    "darkgreen": "green",
    "dark_green": "green",
    "darkyellow": "yellow",
    "dark_yellow": "yellow",
    "brown": "yellow",
    "darkblue": "blue",
    "dark_blue": "blue",
    "darkmagenta": "magenta",
    "dark_magenta": "magenta",
    "darkcyan": "cyan",
    "dark_cyan": "cyan",
    "gray": "white",
    "grey": "white",
    "darkgray": "bright_black",
    "dark_gray": "bright_black",
    "darkgrey": "bright_black",
    "bright_black": "bright_black",
    "red": "bright_red",
    "bright_red": "bright_red",
    "green": "bright_green",
    "bright_green": "bright_green",
    "yellow": "bright_yellow",
    "bright_yellow": "bright_yellow",
    "blue": "bright_blue",
    "bright_blue": "bright_blue",
    "magenta": "bright_magenta",
    "bright_magenta": "bright_magenta",
    "cyan": "bright_cyan",
    "bright_cyan": "bright_cyan",
    "white": "bright_white",
    "bright_white": "bright_white",
}


def normalize_color(color: str | None) -> str:
    """Lower-case a color name; unknown or empty names become white."""
    name = (color or "").strip().lower()
    return name if name in ANSI_CODES else DEFAULT_COLOR


def is_color(name: str) -> bool:
    return name.strip().lower() in ANSI_CODES


def sgr(color: str | None) -> str:
    """SGR sequence selecting *color* on a cleared attribute set."""
    return f"{CSI}0;{ANSI_CODES[normalize_color(color)]}m"


def native_style(color: str | None) -> str:
    return NATIVE_STYLES[normalize_color(color)]
