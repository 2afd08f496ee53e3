# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Local console transport over the inherited standard streams."""

from __future__ import annotations

import sys
from typing import TextIO

from bbsdoor.dropfile.models import CommKind
from bbsdoor.errors import CallerDisconnectedError
from bbsdoor.logging import get_logger
from bbsdoor.transport.base import DoorTransport

logger = get_logger(__name__)


class LocalConsoleTransport(DoorTransport):
    """Standard input/output of the door process.

    Used for local play, for BBSes that redirect the caller onto stdio, and as
    the fallback when a socket or serial port cannot be opened. Opening always
    succeeds.

    Args:
        stdin: Input stream (defaults to ``sys.stdin``)
        stdout: Output stream (defaults to ``sys.stdout``)
        encoding: When set, bytes are exchanged through the streams' binary
            buffers in this encoding (CP437 for redirected BBS callers);
            otherwise the text streams' own encoding is used
    """

    kind = CommKind.LOCAL

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None, *, encoding: str | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._encoding = encoding
        self._open = False

    @property
    def stdout(self) -> TextIO:
        """Text stream for native console rendering."""
        return self._stdout

    @property
    def encoding(self) -> str | None:
        return self._encoding

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> bool:
        self._open = True
        logger.debug("console_opened", encoding=self._encoding)
        return True

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        try:
            self._stdout.flush()
        except (OSError, ValueError) as e:
            logger.debug("console_flush_error", error=str(e))
        logger.debug("console_closed")

    def write_raw(self, data: bytes) -> None:
        buffer = getattr(self._stdout, "buffer", None)
        try:
            if buffer is not None:
                self._stdout.flush()
                buffer.write(data)
                buffer.flush()
            else:
                self._stdout.write(data.decode(self._encoding or "utf-8", errors="replace"))
                self._stdout.flush()
        except (OSError, ValueError) as e:
            raise CallerDisconnectedError("Standard output closed") from e

    def write_text(self, text: str) -> None:
        """Write text through the stream's own encoding."""
        try:
            self._stdout.write(text)
            self._stdout.flush()
        except (OSError, ValueError) as e:
            raise CallerDisconnectedError("Standard output closed") from e

    def read_line(self) -> str:
        buffer = getattr(self._stdin, "buffer", None)
        if self._encoding and buffer is not None:
            raw = buffer.readline()
            if not raw:
                raise CallerDisconnectedError("Standard input closed")
            return raw.decode(self._encoding, errors="replace").rstrip("\r\n")

        line = self._stdin.readline()
        if not line:
            raise CallerDisconnectedError("Standard input closed")
        return line.rstrip("\r\n")

    def read_key(self) -> str:
        buffer = getattr(self._stdin, "buffer", None)
        if self._encoding and buffer is not None:
            raw = buffer.read(1)
            if not raw:
                raise CallerDisconnectedError("Standard input closed")
            return raw.decode(self._encoding, errors="replace")

        key = self._stdin.read(1)
        if not key:
            raise CallerDisconnectedError("Standard input closed")
        return key
