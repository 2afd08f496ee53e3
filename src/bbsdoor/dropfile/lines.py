# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Positional line access shared by the drop-file parsers."""

from __future__ import annotations

from pathlib import Path

from bbsdoor.constants import CP437
from bbsdoor.errors import DropFileMissingError


def read_lines(path: Path) -> list[str]:
    """Read a drop file as CP437 text, accepting CR, LF and CRLF endings.

    Raises:
        DropFileMissingError: If the file does not exist or cannot be read
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise DropFileMissingError(path) from e
    except OSError as e:
        raise DropFileMissingError(path, detail=e.strerror or type(e).__name__) from e

    # DOS editors leave a trailing Ctrl-Z
    text = raw.decode(CP437, errors="replace").rstrip("\x1a")
    return text.splitlines()


def has_content(lines: list[str]) -> bool:
    return any(line.strip() for line in lines)


def field(lines: list[str], line_number: int) -> str:
    """Return the trimmed value on a 1-based line, or "" when the file is shorter."""
    index = line_number - 1
    if 0 <= index < len(lines):
        return lines[index].strip()
    return ""


def int_field(lines: list[str], line_number: int, default: int) -> int:
    value = field(lines, line_number)
    try:
        return int(value)
    except ValueError:
        return default


def optional_int_field(lines: list[str], line_number: int) -> int | None:
    value = field(lines, line_number)
    try:
        return int(value)
    except ValueError:
        return None
