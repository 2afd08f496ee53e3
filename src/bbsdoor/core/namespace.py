# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Save-namespace derivation from the hosting BBS's name."""

from __future__ import annotations

import re

from bbsdoor.constants import DEFAULT_NAMESPACE_MAX_LENGTH, FALLBACK_NAMESPACE

# Characters no common filesystem accepts in a directory name
_INVALID_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')
_TRAILING_RE = re.compile(r"[\s.]+$")

RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{n}" for n in range(1, 10)]
    + [f"LPT{n}" for n in range(1, 10)]
)


def _trim(value: str) -> str:
    return _TRAILING_RE.sub("", value.strip())


def is_reserved_name(value: str) -> bool:
    """True for DOS device names, which cannot be directories on Windows."""
    stem = value.split(".", 1)[0].strip().upper()
    return stem in RESERVED_NAMES


def sanitize_bbs_name(name: str | None, max_length: int = DEFAULT_NAMESPACE_MAX_LENGTH) -> str | None:
    """Turn a BBS name into a directory-safe save namespace.

    Runs of invalid characters split the name and the surviving pieces are
    joined with ``_``. Returns None for a missing or blank name, and
    ``"BBS"`` when nothing usable survives. Applying it twice gives the same
    result as applying it once.
    """
    if name is None or not name.strip():
        return None

    pieces = [piece for piece in _INVALID_RE.split(name) if piece.strip()]
    cleaned = _trim(_trim("_".join(pieces))[:max_length])
    if cleaned and is_reserved_name(cleaned):
        cleaned = _trim(f"_{cleaned}"[:max_length])
    return cleaned or FALLBACK_NAMESPACE[:max_length]
