# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Serial transport for FOSSIL-style virtual COM ports."""

from __future__ import annotations

import re
import sys

import serial

from bbsdoor.constants import DEFAULT_BAUD, DEFAULT_SERIAL_WRITE_TIMEOUT_S
from bbsdoor.dropfile.models import CommKind
from bbsdoor.errors import CallerDisconnectedError, TransportOpenFailedError
from bbsdoor.logging import get_logger
from bbsdoor.transport.base import RemoteTransport

logger = get_logger(__name__)

_COM_NAME_RE = re.compile(r"^COM(\d+):?$", re.IGNORECASE)


def normalize_com_port(value: str) -> str:
    """Turn a port directive value into a port name ("1" → "COM1", "com2:" → "COM2").

    Device paths are returned unchanged.
    """
    value = value.strip()
    if value.startswith("/") or value.startswith("\\\\"):
        return value
    upper = value.upper().rstrip(":")
    if not upper.startswith("COM"):
        upper = f"COM{upper}"
    return upper


def resolve_device(com_port: str, platform: str | None = None) -> str:
    """Map a DOS port name to the device pyserial should open on this host.

    Windows opens ``COMn`` directly; POSIX hosts map ``COMn`` to ``/dev/ttyS{n-1}``.
    """
    platform = platform or sys.platform
    match = _COM_NAME_RE.match(com_port.strip())
    if match is None:
        return com_port
    number = int(match.group(1))
    if platform.startswith("win"):
        return f"COM{number}"
    return f"/dev/ttyS{max(number - 1, 0)}"


class SerialTransport(RemoteTransport):
    """Caller attached through a serial port the BBS already answered.

    There is no dial or answer handshake; the door only sets 8N1 line
    discipline and keeps DTR raised so the carrier is not dropped.
    """

    kind = CommKind.SERIAL

    def __init__(
        self,
        com_port: str | None,
        baud_rate: int = 0,
        *,
        default_baud: int = DEFAULT_BAUD,
        flow_control: str = "rtscts",
        write_timeout_s: float = DEFAULT_SERIAL_WRITE_TIMEOUT_S,
    ) -> None:
        super().__init__()
        self._com_port = com_port
        self._baud_rate = baud_rate if baud_rate > 0 else default_baud
        self._flow_control = flow_control
        self._write_timeout_s = write_timeout_s
        self._port: serial.Serial | None = None

    @property
    def com_port(self) -> str | None:
        return self._com_port

    @property
    def baud_rate(self) -> int:
        return self._baud_rate

    @property
    def is_open(self) -> bool:
        return self._port is not None

    def open(self) -> bool:
        """Open and configure the port.

        Returns:
            False when no port is named or it cannot be opened
        """
        if self._port is not None:
            return True
        try:
            self._port = self._open_port()
        except TransportOpenFailedError as e:
            logger.warning("serial_open_failed", com_port=self._com_port, reason=e.reason)
            return False
        logger.info("serial_opened", com_port=self._com_port, device=self._port.port, baud=self._baud_rate)
        return True

    def _open_port(self) -> serial.Serial:
        if not self._com_port:
            raise TransportOpenFailedError("serial", "no COM port specified")

        device = resolve_device(self._com_port)
        logger.debug("serial_opening", com_port=self._com_port, device=device, baud=self._baud_rate)
        try:
            port = serial.Serial(
                port=device,
                baudrate=self._baud_rate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                xonxoff=self._flow_control == "xonxoff",
                rtscts=self._flow_control == "rtscts",
                timeout=None,
                write_timeout=self._write_timeout_s,
            )
        except (serial.SerialException, ValueError, OSError) as e:
            raise TransportOpenFailedError("serial", f"{device}: {e}") from e

        try:
            port.dtr = True
        except (serial.SerialException, OSError) as e:
            logger.debug("serial_dtr_unsupported", device=device, error=str(e))
        return port

    def close(self) -> None:
        if self._port is None:
            return
        port = self._port
        self._port = None
        try:
            port.flush()
        except (serial.SerialException, OSError) as e:
            logger.debug("serial_flush_error", com_port=self._com_port, error=str(e))
        try:
            port.close()
        except (serial.SerialException, OSError) as e:
            logger.debug("serial_close_error", com_port=self._com_port, error=str(e))
        logger.info("serial_closed", com_port=self._com_port)

    def write_raw(self, data: bytes) -> None:
        if self._port is None:
            raise CallerDisconnectedError("serial transport is not open")
        try:
            self._port.write(data)
        except (serial.SerialException, OSError) as e:
            self.close()
            raise CallerDisconnectedError("Serial write failed") from e

    def _read_byte(self) -> int:
        if self._port is None:
            raise CallerDisconnectedError("serial transport is not open")
        try:
            data = self._port.read(1)
        except (serial.SerialException, OSError) as e:
            self.close()
            raise CallerDisconnectedError("Serial port lost") from e
        if not data:
            self.close()
            raise CallerDisconnectedError("Serial port closed")
        return data[0]
