# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer for door sessions."""

from __future__ import annotations

from bbsdoor.transport.base import DoorTransport, LineEditor, RemoteTransport
from bbsdoor.transport.console import LocalConsoleTransport
from bbsdoor.transport.fallback import TransportFactory, TransportResolution, open_with_fallback, resolve_comm
from bbsdoor.transport.serial import SerialTransport
from bbsdoor.transport.socket import SocketTransport

__all__ = [
    "DoorTransport",
    "LineEditor",
    "LocalConsoleTransport",
    "RemoteTransport",
    "SerialTransport",
    "SocketTransport",
    "TransportFactory",
    "TransportResolution",
    "open_with_fallback",
    "resolve_comm",
]
