# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Socket transport over a handle inherited from the BBS."""

from __future__ import annotations

import socket

from bbsdoor.constants import DEFAULT_RECV_BYTES
from bbsdoor.dropfile.models import CommKind
from bbsdoor.errors import CallerDisconnectedError, TransportOpenFailedError
from bbsdoor.logging import get_logger
from bbsdoor.transport.base import RemoteTransport
from bbsdoor.transport.telnet import TelnetFilter, TelnetNegotiator, escape_iac

logger = get_logger(__name__)


class SocketTransport(RemoteTransport):
    """Telnet caller on an already-connected socket.

    The BBS accepted the call and passes the socket handle through DOOR32.SYS;
    the door adopts it instead of creating a connection of its own.
    """

    kind = CommKind.SOCKET

    def __init__(
        self,
        handle: int | None,
        *,
        negotiate: bool = True,
        recv_bytes: int = DEFAULT_RECV_BYTES,
    ) -> None:
        super().__init__()
        self._handle = handle
        self._negotiate = negotiate
        self._recv_bytes = recv_bytes
        self._sock: socket.socket | None = None
        self._filter = TelnetFilter()
        self._negotiator = TelnetNegotiator()
        self._pending = bytearray()

    @property
    def handle(self) -> int | None:
        return self._handle

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def open(self) -> bool:
        """Adopt the inherited socket.

        Returns:
            False when the handle is missing, invalid, closed or not connected
        """
        if self._sock is not None:
            return True
        try:
            self._sock = self._adopt()
        except TransportOpenFailedError as e:
            logger.warning("socket_open_failed", handle=self._handle, reason=e.reason)
            return False

        if self._negotiate:
            try:
                self._sock.sendall(self._negotiator.greeting())
            except OSError as e:
                logger.warning("socket_open_failed", handle=self._handle, reason=str(e))
                self.close()
                return False

        logger.info("socket_opened", handle=self._handle)
        return True

    def _adopt(self) -> socket.socket:
        if self._handle is None or self._handle < 0:
            raise TransportOpenFailedError("socket", f"no usable socket handle ({self._handle})")
        try:
            sock = socket.socket(fileno=self._handle)
        except OSError as e:
            raise TransportOpenFailedError("socket", f"handle {self._handle} is not a socket: {e}") from e

        try:
            sock.getpeername()
            sock.setblocking(True)
        except OSError as e:
            # Not ours to close: the descriptor may belong to something else
            sock.detach()
            raise TransportOpenFailedError("socket", f"handle {self._handle} is not connected: {e}") from e
        return sock

    def close(self) -> None:
        if self._sock is None:
            return
        sock = self._sock
        self._sock = None
        try:
            sock.close()
        except OSError as e:
            logger.debug("socket_close_error", handle=self._handle, error=str(e))
        logger.info("socket_closed", handle=self._handle)

    def write_raw(self, data: bytes) -> None:
        """Send bytes with IAC escaping per RFC 854.

        Raises:
            CallerDisconnectedError: If not open or the caller hung up
        """
        if self._sock is None:
            raise CallerDisconnectedError("socket transport is not open")
        try:
            self._sock.sendall(escape_iac(data))
        except OSError as e:
            self.close()
            raise CallerDisconnectedError("Send failed") from e

    def _read_byte(self) -> int:
        while not self._pending:
            self._fill()
        return self._pending.pop(0)

    def _fill(self) -> None:
        if self._sock is None:
            raise CallerDisconnectedError("socket transport is not open")
        try:
            chunk = self._sock.recv(self._recv_bytes)
        except OSError as e:
            self.close()
            raise CallerDisconnectedError("Connection lost") from e

        if not chunk:
            self.close()
            raise CallerDisconnectedError("Connection closed by remote")

        clean, requests = self._filter.feed(chunk)
        self._pending.extend(clean)
        if requests:
            self._answer(requests)

    def _answer(self, requests: list[tuple[int, int]]) -> None:
        reply = b"".join(self._negotiator.reply(command, opt) for command, opt in requests)
        if not reply or self._sock is None:
            return
        try:
            # Negotiation replies are protocol bytes and must not be IAC-escaped
            self._sock.sendall(reply)
        except OSError as e:
            self.close()
            raise CallerDisconnectedError("Send failed") from e
