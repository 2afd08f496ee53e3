# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Server-side telnet handling for inherited caller sockets."""

from __future__ import annotations

from enum import Enum, auto

# Telnet protocol constants
IAC = 255  # Interpret As Command
DONT = 254
DO = 253
WONT = 252
WILL = 251
SB = 250  # Subnegotiation Begin
SE = 240  # Subnegotiation End

# Telnet options
OPT_BINARY = 0
OPT_ECHO = 1
OPT_SGA = 3  # Suppress Go Ahead
OPT_TTYPE = 24  # Terminal Type
OPT_NAWS = 31  # Negotiate About Window Size

# Options the door performs itself: it echoes and never sends Go Ahead
SERVER_WILL = (OPT_ECHO, OPT_SGA, OPT_BINARY)
# Options the door accepts from the caller's client
CLIENT_DO = (OPT_SGA, OPT_BINARY, OPT_NAWS)


def escape_iac(data: bytes) -> bytes:
    """Escape IAC bytes per RFC 854: 0xFF → 0xFF 0xFF."""
    return data.replace(b"\xff", b"\xff\xff")


class _State(Enum):
    DATA = auto()
    IAC = auto()
    OPTION = auto()
    SUB = auto()
    SUB_IAC = auto()


class TelnetFilter:
    """Strip telnet commands from an inbound byte stream.

    Commands may be split across socket reads, so the filter keeps its state
    between calls to ``feed``.
    """

    def __init__(self) -> None:
        self._state = _State.DATA
        self._command = 0
        self._subnegotiation = bytearray()

    def feed(self, data: bytes) -> tuple[bytes, list[tuple[int, int]]]:
        """Process a chunk of socket data.

        Returns:
            ``(clean, requests)``: caller data with commands removed, and the
            ``(command, option)`` negotiation requests seen in this chunk
        """
        clean = bytearray()
        requests: list[tuple[int, int]] = []

        for byte in data:
            if self._state is _State.DATA:
                if byte == IAC:
                    self._state = _State.IAC
                else:
                    clean.append(byte)
            elif self._state is _State.IAC:
                if byte == IAC:
                    # Escaped IAC (0xFF 0xFF) → single 0xFF
                    clean.append(IAC)
                    self._state = _State.DATA
                elif byte in (DO, DONT, WILL, WONT):
                    self._command = byte
                    self._state = _State.OPTION
                elif byte == SB:
                    self._subnegotiation.clear()
                    self._state = _State.SUB
                else:
                    # Two-byte commands (NOP, GA, AYT, ...) carry no data
                    self._state = _State.DATA
            elif self._state is _State.OPTION:
                requests.append((self._command, byte))
                self._state = _State.DATA
            elif self._state is _State.SUB:
                if byte == IAC:
                    self._state = _State.SUB_IAC
                else:
                    self._subnegotiation.append(byte)
            elif self._state is _State.SUB_IAC:
                if byte == SE:
                    self._subnegotiation.clear()
                    self._state = _State.DATA
                else:
                    self._subnegotiation.append(byte)
                    self._state = _State.SUB

        return bytes(clean), requests


class TelnetNegotiator:
    """Decide replies to a caller's option requests, answering each option once."""

    def __init__(self) -> None:
        self._negotiated: dict[str, set[int]] = {
            "do": set(),
            "dont": set(),
            "will": set(),
            "wont": set(),
        }

    def _once(self, verb: str, command: int, opt: int) -> bytes:
        if opt in self._negotiated[verb]:
            return b""
        self._negotiated[verb].add(opt)
        return bytes([IAC, command, opt])

    def will(self, opt: int) -> bytes:
        return self._once("will", WILL, opt)

    def wont(self, opt: int) -> bytes:
        return self._once("wont", WONT, opt)

    def do(self, opt: int) -> bytes:
        return self._once("do", DO, opt)

    def dont(self, opt: int) -> bytes:
        return self._once("dont", DONT, opt)

    def greeting(self) -> bytes:
        """Announce server echo and suppressed Go Ahead so clients switch to character mode."""
        return self.will(OPT_ECHO) + self.will(OPT_SGA)

    def reply(self, command: int, opt: int) -> bytes:
        """Bytes to send in answer to one ``(command, option)`` request."""
        if command == DO:
            return self.will(opt) if opt in SERVER_WILL else self.wont(opt)
        if command == DONT:
            return self.wont(opt)
        if command == WILL:
            return self.do(opt) if opt in CLIENT_DO else self.dont(opt)
        if command == WONT:
            return self.dont(opt)
        return b""
