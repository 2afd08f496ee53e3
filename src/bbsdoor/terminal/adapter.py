# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Uniform text terminal over any door transport.

Game code writes colored text and reads lines through ``TerminalAdapter``
and never learns whether the caller is on a socket, a serial port or the
local console.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from bbsdoor.logging import get_logger
from bbsdoor.terminal.colors import CLEAR_SCREEN, DEFAULT_COLOR, RESET, native_style, normalize_color, sgr
from bbsdoor.terminal.cp437 import encode_cp437
from bbsdoor.terminal.markup import Segment, has_markup, parse_markup
from bbsdoor.terminal.modes import OutputMode
from bbsdoor.transport.base import DoorTransport
from bbsdoor.transport.console import LocalConsoleTransport

logger = get_logger(__name__)

PROMPT_COLOR = "bright_white"
ERROR_COLOR = "red"


@dataclass(frozen=True)
class MenuOption:
    key: str
    text: str
    color: str | None = None


class TerminalAdapter:
    """Colored text output and line input over one transport.

    The output mode is fixed at construction. ``NATIVE`` renders through a
    rich ``Console`` on the local console's stdout and requires a
    ``LocalConsoleTransport``; ``ESCAPE`` writes ANSI SGR sequences and CP437
    text into the transport's byte stream.
    """

    def __init__(self, transport: DoorTransport, output_mode: OutputMode, *, console: Console | None = None) -> None:
        self._transport = transport
        self._mode = output_mode
        self._color = DEFAULT_COLOR
        self._console: Console | None = None

        if output_mode is OutputMode.NATIVE:
            if not isinstance(transport, LocalConsoleTransport):
                raise ValueError("native output mode requires the local console transport")
            self._console = console or Console(
                file=transport.stdout,
                highlight=False,
                markup=False,
                emoji=False,
                soft_wrap=True,
            )

    @property
    def output_mode(self) -> OutputMode:
        return self._mode

    @property
    def current_color(self) -> str:
        return self._color

    def close(self) -> None:
        """Release the transport. Safe to call more than once."""
        try:
            if self._mode is OutputMode.ESCAPE and self._transport.is_open:
                try:
                    self._transport.write_raw(RESET.encode("ascii"))
                except ConnectionError:
                    logger.debug("terminal_reset_skipped")
        finally:
            self._transport.close()

    # Output

    def set_color(self, color: str | None) -> None:
        self._color = normalize_color(color)
        if self._mode is OutputMode.ESCAPE:
            self._transport.write_raw(sgr(self._color).encode("ascii"))

    def write(self, text: str, color: str | None = None) -> None:
        """Write *text* in *color* (the current color when omitted).

        Inline markup such as ``[red]...[/]`` switches color within the text.
        """
        base = normalize_color(color) if color is not None else self._color
        if has_markup(text):
            segments = [Segment(s.text, s.color or base) for s in parse_markup(text)]
        else:
            segments = [Segment(text, base)]

        if self._mode is OutputMode.NATIVE:
            self._write_native(segments)
        else:
            self._write_escape(segments)

    def write_line(self, text: str = "", color: str | None = None) -> None:
        self.write(text, color)
        self._newline()

    def clear_screen(self) -> None:
        if self._console is not None:
            self._console.clear()
        else:
            self._transport.write_raw(CLEAR_SCREEN.encode("ascii"))

    def _write_native(self, segments: list[Segment]) -> None:
        assert self._console is not None
        for segment in segments:
            if segment.text:
                self._console.print(segment.text, style=native_style(segment.color), end="")
        self._console.file.flush()

    def _write_escape(self, segments: list[Segment]) -> None:
        payload = bytearray()
        for segment in segments:
            payload.extend(sgr(segment.color).encode("ascii"))
            payload.extend(encode_cp437(_crlf(segment.text)))
        if payload:
            self._transport.write_raw(bytes(payload))

    def _newline(self) -> None:
        if self._console is not None:
            self._console.print()
        else:
            self._transport.write_raw(b"\r\n")

    # Input

    def read_line(self, prompt: str | None = None) -> str:
        """Optionally write *prompt*, then block for one line of input."""
        if prompt:
            self.write(prompt, PROMPT_COLOR)
        return self._transport.read_line()

    def read_key(self) -> str:
        return self._transport.read_key()

    def confirm(self, message: str, default: bool = False) -> bool:
        hint = " [Y/n] " if default else " [y/N] "
        self.write(message + hint, "yellow")
        answer = self._transport.read_line().strip().upper()
        if not answer:
            return default
        return answer in ("Y", "YES")

    def read_number(self, prompt: str = "", minimum: int = 0, maximum: int | None = None) -> int:
        """Prompt until the caller enters an integer within ``[minimum, maximum]``."""
        while True:
            answer = self.read_line(prompt).strip()
            try:
                value = int(answer)
            except ValueError:
                self.write_line("Please enter a valid number.", ERROR_COLOR)
                continue
            if value < minimum or (maximum is not None and value > maximum):
                upper = maximum if maximum is not None else "any"
                self.write_line(f"Please enter a number between {minimum} and {upper}.", ERROR_COLOR)
                continue
            return value

    def pause(self, message: str = "Press Enter to continue...") -> None:
        self.write_line(message, "gray")
        self._transport.read_line()

    def menu_choice(self, options: list[MenuOption], prompt: str = "> ") -> int:
        """Show *options* and return the index of the one chosen by key or number."""
        self.write_line()
        for option in options:
            self.write(f"[{option.key}] ", "yellow")
            self.write_line(option.text, option.color or DEFAULT_COLOR)
        self.write_line()

        while True:
            answer = self.read_line(prompt).strip().upper()
            for index, option in enumerate(options):
                if option.key.upper() == answer:
                    return index
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            self.write_line("Invalid choice. Please try again.", ERROR_COLOR)


def _crlf(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\n", "\r\n")
