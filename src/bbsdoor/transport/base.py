# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base classes for door transports."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bbsdoor.constants import CP437
from bbsdoor.dropfile.models import CommKind
from bbsdoor.errors import CallerDisconnectedError

CR = 0x0D
LF = 0x0A
NUL = 0x00
BS = 0x08
DEL = 0x7F
ESC = 0x1B

ERASE = b"\b \b"
NEWLINE = b"\r\n"


class DoorTransport(ABC):
    """Blocking byte channel between the door and its caller.

    One instance lives for the whole session. ``close`` must be idempotent
    and safe to call even when ``open`` never succeeded.
    """

    kind: CommKind

    @abstractmethod
    def open(self) -> bool:
        """Acquire the underlying handle.

        Returns:
            True when the transport is usable, False otherwise
        """

    @abstractmethod
    def read_line(self) -> str:
        """Block until a full line arrives and return it without the terminator.

        Raises:
            CallerDisconnectedError: If the caller hangs up
        """

    @abstractmethod
    def read_key(self) -> str:
        """Block until one character arrives.

        Raises:
            CallerDisconnectedError: If the caller hangs up
        """

    @abstractmethod
    def write_raw(self, data: bytes) -> None:
        """Send bytes to the caller without translation.

        Raises:
            CallerDisconnectedError: If the caller hangs up
        """

    @abstractmethod
    def close(self) -> None:
        """Release the handle. Safe to call more than once."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True between a successful ``open`` and ``close``."""


class LineEditor:
    """Character-mode line assembly for callers whose terminals send every key.

    Remote terminals do not edit locally, so the door echoes printable
    characters, handles backspace and ESC, and treats CR, LF or CRLF as one
    line terminator.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._after_cr = False

    def feed(self, byte: int) -> tuple[bytes, str | None]:
        """Consume one input byte.

        Returns:
            ``(echo, line)``: bytes to echo back, and the finished line or None
        """
        after_cr = self._after_cr
        self._after_cr = False

        if byte in (LF, NUL) and after_cr:
            return b"", None

        if byte in (CR, LF):
            self._after_cr = byte == CR
            line = self._buffer.decode(CP437)
            self._buffer.clear()
            return NEWLINE, line

        if byte in (BS, DEL):
            if self._buffer:
                del self._buffer[-1]
                return ERASE, None
            return b"", None

        if byte == ESC:
            self._buffer.clear()
            return b"", None

        if byte < 0x20:
            return b"", None

        self._buffer.append(byte)
        return bytes([byte]), None

    def take_key(self, byte: int) -> bool:
        """Track a single keypress outside line mode.

        Returns:
            False when *byte* is the LF/NUL half of a CR pair and should be skipped
        """
        if self._after_cr and byte in (LF, NUL):
            self._after_cr = False
            return False
        self._after_cr = byte == CR
        return True


class RemoteTransport(DoorTransport):
    """Shared line and key reading for transports that carry raw caller keystrokes."""

    def __init__(self) -> None:
        self._editor = LineEditor()

    @abstractmethod
    def _read_byte(self) -> int:
        """Block for the next input byte.

        Raises:
            CallerDisconnectedError: If the caller hangs up
        """

    def _require_open(self) -> None:
        if not self.is_open:
            raise CallerDisconnectedError(f"{self.kind.name.lower()} transport is not open")

    def read_line(self) -> str:
        self._require_open()
        while True:
            echo, line = self._editor.feed(self._read_byte())
            if echo:
                self.write_raw(echo)
            if line is not None:
                return line

    def read_key(self) -> str:
        self._require_open()
        while True:
            byte = self._read_byte()
            if self._editor.take_key(byte):
                return bytes([byte]).decode(CP437)
