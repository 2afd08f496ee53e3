# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from bbsdoor.dropfile.models import CommKind
from bbsdoor.errors import CallerDisconnectedError
from bbsdoor.transport.base import DoorTransport

DOOR32_SAMPLE = [
    "2",  # comm type: telnet
    "7",  # socket handle
    "38400",
    "Synchronet BBS 3.19",
    "42",
    "John Smith",
    "Johnny",
    "100",
    "45",
    "1",
    "3",
]


def doorsys_sample() -> list[str]:
    """A complete 52-line DOOR.SYS in the GAP layout."""
    lines = [""] * 52
    values = {
        1: "COM2:",
        2: "19200",
        3: "8",
        4: "5",
        5: "19200",
        6: "Y",
        7: "Y",
        8: "Y",
        9: "Y",
        10: "Jane Doe",
        11: "Springfield, IL",
        12: "555-123-4567",
        13: "555-765-4321",
        14: "SECRET",
        15: "50",
        16: "12",
        17: "01/01/26",
        18: "3600",
        19: "60",
        20: "GR",
        21: "23",
        22: "N",
        25: "01/01/27",
        26: "17",
        27: "Y",
        35: "The Sysop",
        36: "JD",
    }
    for number, value in values.items():
        lines[number - 1] = value
    return lines


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any logging configuration a test (or the CLI) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_dropfile(tmp_path: Path) -> Callable[..., Path]:
    """Write drop-file lines to a file in tmp_path and return its path."""

    def _write(lines: list[str], name: str = "door32.sys", newline: str = "\r\n") -> Path:
        path = tmp_path / name
        path.write_bytes(newline.join(lines).encode("cp437") + newline.encode("ascii"))
        return path

    return _write


@pytest.fixture
def door32_file(write_dropfile: Callable[..., Path]) -> Path:
    return write_dropfile(DOOR32_SAMPLE, "door32.sys")


@pytest.fixture
def doorsys_file(write_dropfile: Callable[..., Path]) -> Path:
    return write_dropfile(doorsys_sample(), "door.sys")


class ScriptedTransport(DoorTransport):
    """In-memory transport: replays scripted input lines and records output."""

    def __init__(self, lines: list[str] | None = None, *, kind: CommKind = CommKind.SOCKET, opens: bool = True) -> None:
        self.kind = kind
        self.lines = list(lines or [])
        self.written = bytearray()
        self.opens = opens
        self.open_calls = 0
        self.close_calls = 0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> bool:
        self.open_calls += 1
        self._open = self.opens
        return self.opens

    def close(self) -> None:
        self.close_calls += 1
        self._open = False

    def write_raw(self, data: bytes) -> None:
        self.written.extend(data)

    def read_line(self) -> str:
        if not self.lines:
            raise CallerDisconnectedError("script exhausted")
        return self.lines.pop(0)

    def read_key(self) -> str:
        line = self.read_line()
        return line[:1]


@pytest.fixture
def scripted() -> Callable[..., ScriptedTransport]:
    return ScriptedTransport


@pytest.fixture
def byte_streams() -> tuple[io.TextIOWrapper, io.TextIOWrapper]:
    """Empty text streams backed by binary buffers, like sys.stdin/sys.stdout."""
    stdin = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    return stdin, stdout


@pytest.fixture
def door32_lines() -> list[str]:
    return list(DOOR32_SAMPLE)


@pytest.fixture
def doorsys_lines() -> list[str]:
    return doorsys_sample()
