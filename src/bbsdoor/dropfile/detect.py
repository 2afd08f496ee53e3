# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Drop-file discovery and dialect detection.

BBS door entries are frequently misconfigured (a DOOR.SYS saved as
``door32.sys``, or an arbitrary ``%f`` temp name), so a file's dialect is
decided from its shape first and its name only breaks ties.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from bbsdoor.constants import DEFAULT_PLAYER_NAME, DOOR32_SYS, DOOR_SYS, VERBOSE_DUMP_LINES
from bbsdoor.dropfile.door32 import comm_kind_from_code, parse_door32_lines
from bbsdoor.dropfile.doorsys import looks_like_com_field, parse_doorsys_lines
from bbsdoor.dropfile.lines import field, has_content, read_lines
from bbsdoor.dropfile.models import SessionDescriptor, SourceKind
from bbsdoor.errors import DropFileMissingError, DropFileUnparsableError
from bbsdoor.logging import get_logger

logger = get_logger(__name__)

# DOOR32.SYS is 11 lines plus a few optional extras; DOOR.SYS is 20 or more
MODERN_MAX_LINES = 20

_SEARCH_ORDER = (DOOR32_SYS, DOOR_SYS)


def sniff_dialect(lines: list[str], name: str = "") -> SourceKind | None:
    """Guess the dialect of a drop file from its lines, then its name.

    Returns:
        MODERN or LEGACY, or None when neither shape nor name is conclusive
    """
    first = field(lines, 1)
    if looks_like_com_field(first):
        return SourceKind.LEGACY
    if comm_kind_from_code(first) is not None and len(lines) <= MODERN_MAX_LINES:
        return SourceKind.MODERN
    if len(lines) > MODERN_MAX_LINES:
        return SourceKind.LEGACY

    lowered = name.lower()
    if lowered == DOOR32_SYS:
        return SourceKind.MODERN
    if lowered == DOOR_SYS:
        return SourceKind.LEGACY
    return None


def find_dropfile(directory: Path | str) -> Path:
    """Locate a drop file in a node directory.

    DOOR32.SYS wins over DOOR.SYS; names are matched case-insensitively.

    Raises:
        DropFileMissingError: If the directory does not exist or holds neither file
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DropFileMissingError(directory, detail="node directory not found")

    entries = {entry.name.lower(): entry for entry in sorted(directory.iterdir()) if entry.is_file()}
    for name in _SEARCH_ORDER:
        if name in entries:
            logger.debug("dropfile_found", directory=str(directory), path=str(entries[name]))
            return entries[name]

    raise DropFileMissingError(directory, detail=f"no {DOOR32_SYS} or {DOOR_SYS} in directory")


def parse_dropfile(path: Path | str, player_name: str = DEFAULT_PLAYER_NAME) -> SessionDescriptor:
    """Parse a drop file of either dialect.

    Args:
        path: A drop file, or a node directory to search
        player_name: Name used when the file leaves the real name blank

    Raises:
        DropFileMissingError: If nothing exists at *path*
        DropFileUnparsableError: If the dialect cannot be determined or parsing fails
    """
    path = Path(path)
    if path.is_dir():
        path = find_dropfile(path)

    lines = read_lines(path)
    if not has_content(lines):
        raise DropFileUnparsableError(path, "file is empty")

    dialect = sniff_dialect(lines, path.name)
    logger.debug("dropfile_dialect", path=str(path), dialect=dialect.value if dialect else None, lines=len(lines))

    if dialect is SourceKind.MODERN:
        return parse_door32_lines(lines, path, player_name)
    if dialect is SourceKind.LEGACY:
        return parse_doorsys_lines(lines, path, player_name)
    raise DropFileUnparsableError(path, "not recognizable as DOOR32.SYS or DOOR.SYS")


def dump_dropfile(path: Path | str, limit: int = VERBOSE_DUMP_LINES) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for the first *limit* raw lines of a drop file."""
    path = Path(path)
    if path.is_dir():
        path = find_dropfile(path)
    for index, line in enumerate(read_lines(path)[:limit], start=1):
        yield index, line
