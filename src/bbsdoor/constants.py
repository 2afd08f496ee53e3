# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for bbsdoor."""

from __future__ import annotations

# Character encoding used by DOS/BBS systems
CP437 = "cp437"

# Drop file names, in auto-detection priority order
DOOR32_SYS = "door32.sys"
DOOR_SYS = "door.sys"

# DOOR.SYS never carries more than this many positional fields
DOOR_SYS_MAX_LINES = 52

# Default terminal settings
DEFAULT_COLS = 80
DEFAULT_ROWS = 24

# Session defaults used when a drop file omits a field
DEFAULT_PLAYER_NAME = "Player"
DEFAULT_TIME_LEFT_MINUTES = 60
DEFAULT_NODE_NUMBER = 1

# Serial line defaults
DEFAULT_BAUD = 115200
DEFAULT_SERIAL_WRITE_TIMEOUT_S = 5.0

# Save namespace limits
DEFAULT_NAMESPACE_MAX_LENGTH = 32
FALLBACK_NAMESPACE = "BBS"

# Socket receive chunk size
DEFAULT_RECV_BYTES = 1024

# Number of raw drop-file lines shown in verbose mode
VERBOSE_DUMP_LINES = 20
