# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Unicode to CP437 conversion for callers on DOS-era terminals."""

from __future__ import annotations

from bbsdoor.constants import CP437

# The cp437 codec treats 0x01-0x1F as control codes; BBS terminals draw
# them as glyphs, so those are mapped explicitly along with a few look-alikes.
GLYPHS: dict[str, int] = {
    "♔": 2,
    "♥": 3,
    "♦": 4,
    "♣": 5,
    "♠": 6,
    "•": 7,
    "◘": 8,
    "○": 9,
    "◙": 10,
    "♂": 11,
    "♀": 12,
    "♪": 13,
    "♫": 14,
    "☼": 15,
    "►": 16,
    "⚑": 16,
    "◄": 17,
    "↕": 18,
    "‼": 19,
    "¶": 20,
    "§": 21,
    "▬": 22,
    "↨": 23,
    "↑": 24,
    "↓": 25,
    "→": 26,
    "←": 27,
    "∟": 28,
    "↔": 29,
    "▲": 30,
    "▼": 31,
    "⛓": 45,
    "✗": 158,
    "†": 197,
    "✝": 197,
    "⚔": 197,
}

REPLACEMENT = b"?"


def encode_cp437(text: str) -> bytes:
    """Encode *text* for a CP437 terminal, replacing anything unmappable with "?"."""
    out = bytearray()
    for char in text:
        glyph = GLYPHS.get(char)
        if glyph is not None:
            out.append(glyph)
            continue
        try:
            out.extend(char.encode(CP437))
        except UnicodeEncodeError:
            out.extend(REPLACEMENT)
    return bytes(out)
