# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""DOOR.SYS parser.

DOOR.SYS (the GAP layout) holds up to 52 positional values and no socket
handle. Only the fields a door needs are read:

    1  COM port ("COM0:" when the caller is local)
    2  baud rate
    4  node number
    10 full name
    11 calling from
    15 security level
    19 minutes remaining
    20 graphics mode (GR, NG or 7E)
    21 page length
    26 user record number
    35 sysop name
    36 alias

The file has no BBS name, so doors cannot isolate saves per BBS from it.
"""

from __future__ import annotations

import re
from pathlib import Path

from bbsdoor.constants import (
    DEFAULT_NODE_NUMBER,
    DEFAULT_PLAYER_NAME,
    DEFAULT_ROWS,
    DEFAULT_TIME_LEFT_MINUTES,
    DOOR_SYS_MAX_LINES,
)
from bbsdoor.dropfile.lines import field, has_content, int_field, read_lines
from bbsdoor.dropfile.models import CommKind, Emulation, SessionDescriptor, SourceKind
from bbsdoor.errors import DropFileUnparsableError
from bbsdoor.logging import get_logger

logger = get_logger(__name__)

COM_PORT_RE = re.compile(r"^COM(\d{1,3}):?$", re.IGNORECASE)


def com_port_from_field(value: str) -> str | None:
    """Return "COMn" for a serial port field, None for COM0 or anything else."""
    match = COM_PORT_RE.match(value.strip())
    if match is None:
        return None
    number = int(match.group(1))
    if number == 0:
        return None
    return f"COM{number}"


def looks_like_com_field(value: str) -> bool:
    return COM_PORT_RE.match(value.strip()) is not None


def parse_doorsys_lines(lines: list[str], path: Path, player_name: str = DEFAULT_PLAYER_NAME) -> SessionDescriptor:
    """Build a descriptor from already-read DOOR.SYS lines."""
    if not has_content(lines):
        raise DropFileUnparsableError(path, "file is empty")

    if len(lines) > DOOR_SYS_MAX_LINES:
        logger.info("doorsys_extra_lines_ignored", path=str(path), lines=len(lines))
        lines = lines[:DOOR_SYS_MAX_LINES]

    com_port = com_port_from_field(field(lines, 1))
    comm_kind = CommKind.SERIAL if com_port else CommKind.LOCAL

    graphics = field(lines, 20).upper()
    graphics_enabled = graphics == "GR" or "GRAPH" in graphics
    page_length = int_field(lines, 21, DEFAULT_ROWS)

    user_name = field(lines, 10) or player_name

    return SessionDescriptor(
        source_kind=SourceKind.LEGACY,
        source_path=path,
        comm_kind=comm_kind,
        com_port=com_port,
        baud_rate=int_field(lines, 2, 0),
        node_number=int_field(lines, 4, DEFAULT_NODE_NUMBER),
        user_name=user_name,
        user_location=field(lines, 11) or "Unknown",
        security_level=int_field(lines, 15, 0),
        time_left_minutes=int_field(lines, 19, DEFAULT_TIME_LEFT_MINUTES),
        graphics_enabled=graphics_enabled,
        emulation=Emulation.ANSI if graphics_enabled else Emulation.ASCII,
        screen_height=page_length if page_length > 0 else DEFAULT_ROWS,
        user_record_number=int_field(lines, 26, 0),
        sysop_name=field(lines, 35) or "Sysop",
        user_alias=field(lines, 36) or user_name,
    )


def parse_doorsys(path: Path | str, player_name: str = DEFAULT_PLAYER_NAME) -> SessionDescriptor:
    """Parse a DOOR.SYS file.

    Raises:
        DropFileMissingError: If the file does not exist
        DropFileUnparsableError: If the file is empty
    """
    path = Path(path)
    descriptor = parse_doorsys_lines(read_lines(path), path, player_name)
    logger.debug(
        "doorsys_parsed",
        path=str(path),
        comm=descriptor.comm_kind.name,
        com_port=descriptor.com_port,
        user=descriptor.display_name,
    )
    return descriptor
