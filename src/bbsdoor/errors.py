# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for door sessions."""

from __future__ import annotations

from pathlib import Path


class DoorError(Exception):
    """Base exception for door bootstrap and I/O."""


class DropFileMissingError(DoorError):
    """The drop file (or node directory) does not exist."""

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        self.path = Path(path)
        message = f"Drop file not found: {self.path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DropFileUnparsableError(DoorError):
    """The drop file exists but could not be parsed at all."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not parse drop file {self.path}: {reason}")


class TransportOpenFailedError(DoorError):
    """A transport could not be opened; recovered by downgrading to the console."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind} transport failed to open: {reason}")


class InvalidDirectiveCombinationError(DoorError):
    """A command-line directive was given without the value it requires."""

    def __init__(self, directive: str, reason: str = "missing value") -> None:
        self.directive = directive
        self.reason = reason
        super().__init__(f"Invalid directive {directive}: {reason}")


class CallerDisconnectedError(DoorError, ConnectionError):
    """The remote caller hung up while the door was reading or writing."""
