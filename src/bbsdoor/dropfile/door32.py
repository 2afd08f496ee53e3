# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""DOOR32.SYS parser.

DOOR32.SYS is an ordered list of values, one per line, with no keys:

    1  comm type (0=local, 1=serial, 2=telnet)
    2  comm or socket handle
    3  baud rate
    4  BBS id (software name and version)
    5  user record position (1-based)
    6  user's real name
    7  user's handle/alias
    8  security level
    9  minutes remaining
    10 emulation (0=ASCII, 1=ANSI, 2=Avatar, 3=RIP, 4=Max Graphics)
    11 current node number

BBS packages regularly write short files, so every field after the comm type
falls back to a default instead of failing.
"""

from __future__ import annotations

from pathlib import Path

from bbsdoor.constants import DEFAULT_NODE_NUMBER, DEFAULT_PLAYER_NAME, DEFAULT_TIME_LEFT_MINUTES
from bbsdoor.dropfile.lines import field, has_content, int_field, optional_int_field, read_lines
from bbsdoor.dropfile.models import CommKind, Emulation, SessionDescriptor, SourceKind
from bbsdoor.errors import DropFileUnparsableError
from bbsdoor.logging import get_logger

logger = get_logger(__name__)

# Serial handles this small are port numbers rather than OS handles
_MAX_PORT_NUMBER = 64


def comm_kind_from_code(value: str) -> CommKind | None:
    """Map a DOOR32.SYS comm-type field to a CommKind, or None if it is not one."""
    try:
        return CommKind(int(value.strip()))
    except ValueError:
        return None


def parse_door32_lines(lines: list[str], path: Path, player_name: str = DEFAULT_PLAYER_NAME) -> SessionDescriptor:
    """Build a descriptor from already-read DOOR32.SYS lines."""
    if not has_content(lines):
        raise DropFileUnparsableError(path, "file is empty")

    comm_kind = comm_kind_from_code(field(lines, 1))
    if comm_kind is None:
        raise DropFileUnparsableError(path, f"line 1 is not a comm type (0, 1 or 2): {field(lines, 1)!r}")

    if len(lines) < 11:
        logger.info("door32_truncated", path=str(path), lines=len(lines))

    handle = optional_int_field(lines, 2)
    com_port = None
    if comm_kind is CommKind.SERIAL and handle is not None and 0 < handle <= _MAX_PORT_NUMBER:
        com_port = f"COM{handle}"

    emulation_code = int_field(lines, 10, Emulation.ANSI)
    try:
        emulation = Emulation(emulation_code)
    except ValueError:
        emulation = Emulation.ANSI

    user_name = field(lines, 6) or player_name
    bbs_name = field(lines, 4) or None

    return SessionDescriptor(
        source_kind=SourceKind.MODERN,
        source_path=path,
        comm_kind=comm_kind,
        socket_handle=handle,
        com_port=com_port,
        baud_rate=int_field(lines, 3, 0),
        bbs_name=bbs_name,
        user_record_number=int_field(lines, 5, 0),
        user_name=user_name,
        user_alias=field(lines, 7) or user_name,
        security_level=int_field(lines, 8, 0),
        time_left_minutes=int_field(lines, 9, DEFAULT_TIME_LEFT_MINUTES),
        emulation=emulation,
        graphics_enabled=emulation > Emulation.ASCII,
        node_number=int_field(lines, 11, DEFAULT_NODE_NUMBER),
    )


def parse_door32(path: Path | str, player_name: str = DEFAULT_PLAYER_NAME) -> SessionDescriptor:
    """Parse a DOOR32.SYS file.

    Args:
        path: Drop file to read
        player_name: Name used when the file leaves the real name blank

    Raises:
        DropFileMissingError: If the file does not exist
        DropFileUnparsableError: If the file is empty or line 1 is not a comm type
    """
    path = Path(path)
    descriptor = parse_door32_lines(read_lines(path), path, player_name)
    logger.debug(
        "door32_parsed",
        path=str(path),
        comm=descriptor.comm_kind.name,
        handle=descriptor.socket_handle,
        user=descriptor.display_name,
    )
    return descriptor
