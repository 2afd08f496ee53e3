# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Drop-file parsing for DOOR32.SYS and DOOR.SYS."""

from __future__ import annotations

from bbsdoor.dropfile.detect import dump_dropfile, find_dropfile, parse_dropfile, sniff_dialect
from bbsdoor.dropfile.door32 import parse_door32
from bbsdoor.dropfile.doorsys import parse_doorsys
from bbsdoor.dropfile.models import CommKind, Emulation, SessionDescriptor, SourceKind, local_session

__all__ = [
    "CommKind",
    "Emulation",
    "SessionDescriptor",
    "SourceKind",
    "dump_dropfile",
    "find_dropfile",
    "local_session",
    "parse_door32",
    "parse_doorsys",
    "parse_dropfile",
    "sniff_dialect",
]
