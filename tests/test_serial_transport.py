# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the serial transport with a stubbed pyserial port."""

from __future__ import annotations

from typing import Any

import pytest
import serial

from bbsdoor.dropfile.models import CommKind
from bbsdoor.errors import CallerDisconnectedError
from bbsdoor.transport.serial import SerialTransport, normalize_com_port, resolve_device


class FakeSerial:
    """Stands in for serial.Serial; records settings and replays input."""

    instances: list[FakeSerial] = []
    fail_with: Exception | None = None
    incoming = b""

    def __init__(self, **kwargs: Any) -> None:
        if FakeSerial.fail_with is not None:
            raise FakeSerial.fail_with
        self.settings = kwargs
        self.port = kwargs["port"]
        self.dtr = False
        self.written = bytearray()
        self.closed = False
        self.flushed = False
        self._incoming = bytearray(FakeSerial.incoming)
        FakeSerial.instances.append(self)

    def read(self, size: int = 1) -> bytes:
        chunk = bytes(self._incoming[:size])
        del self._incoming[:size]
        return chunk

    def write(self, data: bytes) -> int:
        self.written.extend(data)
        return len(data)

    def flush(self) -> None:
        self.flushed = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def fake_serial(monkeypatch: pytest.MonkeyPatch) -> type[FakeSerial]:
    FakeSerial.instances = []
    FakeSerial.fail_with = None
    FakeSerial.incoming = b""
    monkeypatch.setattr(serial, "Serial", FakeSerial)
    return FakeSerial


def test_open_configures_8n1() -> None:
    transport = SerialTransport("COM1", 38400)

    assert transport.kind is CommKind.SERIAL
    assert transport.open() is True

    port = FakeSerial.instances[0]
    assert port.port == resolve_device("COM1")
    assert port.settings["baudrate"] == 38400
    assert port.settings["bytesize"] == serial.EIGHTBITS
    assert port.settings["parity"] == serial.PARITY_NONE
    assert port.settings["stopbits"] == serial.STOPBITS_ONE
    assert port.settings["rtscts"] is True
    assert port.settings["xonxoff"] is False
    assert port.dtr is True


def test_zero_baud_uses_default() -> None:
    transport = SerialTransport("COM1", 0, default_baud=57600)
    transport.open()

    assert transport.baud_rate == 57600
    assert FakeSerial.instances[0].settings["baudrate"] == 57600


def test_xonxoff_flow_control() -> None:
    SerialTransport("COM1", flow_control="xonxoff").open()

    settings = FakeSerial.instances[0].settings
    assert settings["xonxoff"] is True
    assert settings["rtscts"] is False


def test_open_without_port_fails() -> None:
    transport = SerialTransport(None)

    assert transport.open() is False
    assert FakeSerial.instances == []


def test_open_failure_returns_false() -> None:
    """Test that an unavailable port is reported as a failed open, not an exception."""
    FakeSerial.fail_with = serial.SerialException("could not open port")
    transport = SerialTransport("COM9")

    assert transport.open() is False
    assert not transport.is_open


def test_read_line_echoes_and_edits() -> None:
    FakeSerial.incoming = b"ab\x08c\r\n"
    transport = SerialTransport("COM1")
    transport.open()

    assert transport.read_line() == "ac"
    assert bytes(FakeSerial.instances[0].written) == b"ab\b \bc\r\n"


def test_escape_clears_line() -> None:
    FakeSerial.incoming = b"junk\x1bok\r"
    transport = SerialTransport("COM1")
    transport.open()

    assert transport.read_line() == "ok"


def test_read_key_decodes_cp437() -> None:
    FakeSerial.incoming = b"\x82"
    transport = SerialTransport("COM1")
    transport.open()

    assert transport.read_key() == "é"


def test_port_closed_raises_disconnect() -> None:
    transport = SerialTransport("COM1")
    transport.open()
    port = FakeSerial.instances[0]

    with pytest.raises(CallerDisconnectedError):
        transport.read_line()
    assert port.closed
    assert not transport.is_open


def test_write_raw_is_not_translated() -> None:
    transport = SerialTransport("COM1")
    transport.open()

    transport.write_raw(b"\xff\x1b[0m")

    assert bytes(FakeSerial.instances[0].written) == b"\xff\x1b[0m"


def test_close_flushes_once() -> None:
    transport = SerialTransport("COM1")
    transport.open()
    port = FakeSerial.instances[0]

    transport.close()
    transport.close()

    assert port.flushed
    assert port.closed


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", "COM1"), ("com2", "COM2"), ("COM3:", "COM3"), (" 4 ", "COM4"), ("/dev/ttyUSB0", "/dev/ttyUSB0")],
)
def test_normalize_com_port(value: str, expected: str) -> None:
    assert normalize_com_port(value) == expected


@pytest.mark.parametrize(
    ("com_port", "platform", "expected"),
    [
        ("COM1", "win32", "COM1"),
        ("com3:", "win32", "COM3"),
        ("COM1", "linux", "/dev/ttyS0"),
        ("COM4", "darwin", "/dev/ttyS3"),
        ("/dev/ttyUSB0", "linux", "/dev/ttyUSB0"),
    ],
)
def test_resolve_device(com_port: str, platform: str, expected: str) -> None:
    assert resolve_device(com_port, platform) == expected
