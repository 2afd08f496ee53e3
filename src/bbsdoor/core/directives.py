# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Command-line directives understood by the door.

BBS software passes whatever the sysop typed into the door's command line,
often mixed with arguments meant for the game, so the scan is lenient:
unknown tokens are skipped and the first directive of each group wins.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from bbsdoor.errors import InvalidDirectiveCombinationError
from bbsdoor.logging import get_logger

logger = get_logger(__name__)


class SourceDirective(str, Enum):
    """Where the session descriptor comes from."""

    NONE = "none"
    AUTO = "door"
    MODERN = "door32"
    LEGACY = "doorsys"
    NODE = "node"
    LOCAL = "local"
    HELP = "help"


_SOURCE_FLAGS: dict[str, SourceDirective] = {
    "--door": SourceDirective.AUTO,
    "-d": SourceDirective.AUTO,
    "--door32": SourceDirective.MODERN,
    "--doorsys": SourceDirective.LEGACY,
    "--node": SourceDirective.NODE,
    "-n": SourceDirective.NODE,
    "--local": SourceDirective.LOCAL,
    "-l": SourceDirective.LOCAL,
    "--help": SourceDirective.HELP,
    "-h": SourceDirective.HELP,
    "-?": SourceDirective.HELP,
}

_PATH_SOURCES = frozenset({SourceDirective.AUTO, SourceDirective.MODERN, SourceDirective.LEGACY, SourceDirective.NODE})

_STDIO_FLAGS = frozenset({"--stdio"})
_PORT_FLAGS = frozenset({"--fossil", "--com"})
_VERBOSE_FLAGS = frozenset({"--verbose", "-v"})

_ALL_FLAGS = frozenset(_SOURCE_FLAGS) | _STDIO_FLAGS | _PORT_FLAGS | _VERBOSE_FLAGS

USAGE = """\
Usage: bbsdoor [directives]

Drop-file directives:
  --door, -d <path>     Load a drop file, detecting DOOR32.SYS or DOOR.SYS
  --door32 <path>       Load a DOOR32.SYS drop file
  --doorsys <path>      Load a DOOR.SYS drop file
  --node, -n <dir>      Search a node directory for a drop file
  --local, -l           Run locally without a BBS

I/O overrides:
  --stdio               Use standard input/output with ANSI codes
  --fossil, --com <n>   Use serial port n (1 becomes COM1)

Other:
  --verbose, -v         Log diagnostics and dump the drop file to stderr
  --help, -h, -?        Show this message

With no drop-file directive the door runs in local mode.
"""


class DoorDirectives(BaseModel):
    """Result of scanning the command line."""

    source: SourceDirective = SourceDirective.NONE
    path: Path | None = None
    force_stdio: bool = False
    force_port: str | None = None
    verbose: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def show_help(self) -> bool:
        return self.source is SourceDirective.HELP

    @property
    def is_local(self) -> bool:
        return self.source in (SourceDirective.NONE, SourceDirective.LOCAL)


def _peek_value(argv: list[str], index: int) -> str | None:
    if index + 1 >= len(argv) or argv[index + 1].lower() in _ALL_FLAGS:
        return None
    return argv[index + 1]


def scan_directives(argv: list[str]) -> DoorDirectives:
    """Scan *argv* left to right, case-insensitively.

    Raises:
        InvalidDirectiveCombinationError: If a directive that takes effect is missing its value
    """
    source = SourceDirective.NONE
    path: str | None = None
    force_stdio = False
    force_port: str | None = None
    override_seen = False
    verbose = False

    i = 0
    while i < len(argv):
        token = argv[i]
        flag = token.lower()

        if flag in _SOURCE_FLAGS:
            kind = _SOURCE_FLAGS[flag]
            value = None
            if kind in _PATH_SOURCES:
                value = _peek_value(argv, i)
                if value is not None:
                    i += 1
            if source is SourceDirective.NONE:
                if kind in _PATH_SOURCES and value is None:
                    raise InvalidDirectiveCombinationError(token)
                source = kind
                path = value
            else:
                logger.warning("directive_ignored", directive=token, reason=f"--{source.value} already given")
        elif flag in _STDIO_FLAGS:
            if override_seen:
                logger.warning("directive_ignored", directive=token, reason="I/O override already given")
            else:
                force_stdio = override_seen = True
        elif flag in _PORT_FLAGS:
            value = _peek_value(argv, i)
            if value is not None:
                i += 1
            if override_seen:
                logger.warning("directive_ignored", directive=token, reason="I/O override already given")
            elif value is None:
                raise InvalidDirectiveCombinationError(token)
            else:
                force_port = value
                override_seen = True
        elif flag in _VERBOSE_FLAGS:
            verbose = True
        else:
            logger.debug("argument_skipped", argument=token)
        i += 1

    return DoorDirectives(
        source=source,
        path=Path(path) if path is not None else None,
        force_stdio=force_stdio,
        force_port=force_port,
        verbose=verbose,
    )
