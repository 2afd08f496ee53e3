# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Inline color markup: ``"[red]Danger[/] ahead"``.

Only known color names and the closing tags ``[/]`` and ``[/color]`` are
markup; any other bracketed text is printed as-is so menus like ``[Q]uit``
survive.
"""

from __future__ import annotations

from typing import NamedTuple

from bbsdoor.terminal.colors import is_color

_CLOSE_TAGS = ("/", "/color")


class Segment(NamedTuple):
    text: str
    color: str | None


def has_markup(text: str) -> bool:
    return "[" in text and "[/" in text


def parse_markup(text: str) -> list[Segment]:
    """Split *text* into segments; ``color`` is None outside any tag."""
    segments: list[Segment] = []
    current: list[str] = []
    color: str | None = None
    i = 0

    def flush() -> None:
        if current:
            segments.append(Segment("".join(current), color))
            current.clear()

    while i < len(text):
        if text[i] == "[":
            end = text.find("]", i + 1)
            if end > i:
                tag = text[i + 1 : end].strip().lower()
                if tag in _CLOSE_TAGS:
                    flush()
                    color = None
                    i = end + 1
                    continue
                if is_color(tag):
                    flush()
                    color = tag
                    i = end + 1
                    continue
        current.append(text[i])
        i += 1

    flush()
    return segments
