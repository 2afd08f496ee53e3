# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Session bootstrap and the objects it produces."""

from __future__ import annotations

from bbsdoor.core.bootstrap import SessionBootstrapper
from bbsdoor.core.directives import USAGE, DoorDirectives, SourceDirective, scan_directives
from bbsdoor.core.namespace import sanitize_bbs_name
from bbsdoor.core.session import Session

__all__ = [
    "USAGE",
    "DoorDirectives",
    "Session",
    "SessionBootstrapper",
    "SourceDirective",
    "sanitize_bbs_name",
    "scan_directives",
]
