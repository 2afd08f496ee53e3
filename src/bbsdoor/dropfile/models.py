# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Normalized session data parsed from BBS drop files."""

from __future__ import annotations

from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator

from bbsdoor.constants import (
    DEFAULT_COLS,
    DEFAULT_NODE_NUMBER,
    DEFAULT_PLAYER_NAME,
    DEFAULT_ROWS,
    DEFAULT_TIME_LEFT_MINUTES,
)


class SourceKind(str, Enum):
    """Which drop-file dialect produced a descriptor."""

    NONE = "none"
    MODERN = "door32.sys"
    LEGACY = "door.sys"


class CommKind(IntEnum):
    """Requested transport. Values are the DOOR32.SYS comm-type codes."""

    LOCAL = 0
    SERIAL = 1
    SOCKET = 2


class Emulation(IntEnum):
    ASCII = 0
    ANSI = 1
    AVATAR = 2
    RIP = 3
    MAX_GRAPHICS = 4


class SessionDescriptor(BaseModel):
    """Caller and connection details, immutable once built.

    When ``source_kind`` is ``NONE`` no BBS controls the process and every
    other field is a placeholder.
    """

    source_kind: SourceKind = SourceKind.NONE
    source_path: Path | None = None

    comm_kind: CommKind = CommKind.LOCAL
    socket_handle: int | None = None
    com_port: str | None = None
    baud_rate: int = 0
    node_number: int = DEFAULT_NODE_NUMBER

    user_name: str = DEFAULT_PLAYER_NAME
    user_alias: str = ""
    user_location: str = "Unknown"
    user_record_number: int = 0
    security_level: int = 0
    time_left_minutes: int = DEFAULT_TIME_LEFT_MINUTES

    emulation: Emulation = Emulation.ANSI
    graphics_enabled: bool = True
    screen_width: int = DEFAULT_COLS
    screen_height: int = DEFAULT_ROWS

    bbs_name: str | None = None
    sysop_name: str = "Sysop"

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_connection_fields(self) -> SessionDescriptor:
        if self.socket_handle is not None and self.source_kind is not SourceKind.MODERN:
            raise ValueError("socket_handle is only carried by DOOR32.SYS descriptors")
        if self.com_port is not None and self.comm_kind is not CommKind.SERIAL:
            raise ValueError("com_port requires comm_kind SERIAL")
        return self

    @property
    def is_door(self) -> bool:
        """True when a BBS launched this process through a drop file."""
        return self.source_kind is not SourceKind.NONE

    @property
    def display_name(self) -> str:
        """Alias preferred for display, real name as fallback."""
        alias = self.user_alias.strip()
        if alias:
            return alias
        return self.user_name.strip() or DEFAULT_PLAYER_NAME

    def with_comm(self, comm_kind: CommKind, com_port: str | None = None) -> SessionDescriptor:
        """Return a copy with a different transport request."""
        if comm_kind is not CommKind.SERIAL:
            com_port = None
        return self.model_validate({**self.model_dump(), "comm_kind": comm_kind, "com_port": com_port})


def local_session(player_name: str = DEFAULT_PLAYER_NAME) -> SessionDescriptor:
    """Offline descriptor for local play; no BBS controls the process."""
    return SessionDescriptor(
        source_kind=SourceKind.NONE,
        comm_kind=CommKind.LOCAL,
        user_name=player_name,
        user_alias=player_name,
        emulation=Emulation.ANSI,
        graphics_enabled=True,
        time_left_minutes=24 * 60,
    )
