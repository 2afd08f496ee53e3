# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Session bootstrap: command line to a ready ``Session``.

Phases run strictly in order: directives, descriptor, transport, namespace.
Only the first two can fail; once a descriptor exists the door always gets a
working terminal, if necessary the local console.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click

from bbsdoor.constants import CP437
from bbsdoor.core.directives import USAGE, DoorDirectives, SourceDirective, scan_directives
from bbsdoor.core.namespace import sanitize_bbs_name
from bbsdoor.core.session import Session
from bbsdoor.dropfile import dump_dropfile, find_dropfile, local_session, parse_door32, parse_doorsys, parse_dropfile
from bbsdoor.dropfile.models import CommKind, SessionDescriptor
from bbsdoor.logging import configure_logging, get_logger
from bbsdoor.settings import Settings
from bbsdoor.terminal.adapter import TerminalAdapter
from bbsdoor.terminal.modes import OutputMode, select_output_mode
from bbsdoor.transport.fallback import TransportFactory, open_with_fallback
from bbsdoor.transport.serial import normalize_com_port

logger = get_logger(__name__)


class SessionBootstrapper:
    """Builds the door session from the process arguments.

    Args:
        settings: Settings instance (will be created if None)
        factory: Transport factory (defaults to the real transports)
    """

    def __init__(self, settings: Settings | None = None, factory: TransportFactory | None = None) -> None:
        self._settings = settings or Settings()
        self._factory = factory or TransportFactory(self._settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    def bootstrap(self, argv: Sequence[str]) -> Session | None:
        """Run every phase and return the session, or None when help was shown.

        Raises:
            InvalidDirectiveCombinationError: If a directive is missing its value
            DropFileMissingError: If the drop file or node directory does not exist
            DropFileUnparsableError: If the drop file cannot be parsed
        """
        directives = scan_directives(list(argv))
        if directives.verbose:
            configure_logging(self._settings, verbose=True)
        logger.debug("directives_scanned", **directives.model_dump(mode="json"))

        if directives.show_help:
            click.echo(USAGE)
            return None

        descriptor = self.resolve_descriptor(directives)
        descriptor = self.apply_overrides(descriptor, directives)
        return self.open_session(descriptor, force_escape=directives.force_stdio)

    def resolve_descriptor(self, directives: DoorDirectives) -> SessionDescriptor:
        """Parse the drop file the directives name, or build a local descriptor."""
        player_name = self._settings.local_player_name
        if directives.is_local:
            logger.info("local_mode", player=player_name)
            return local_session(player_name)

        path = directives.path
        assert path is not None
        if directives.verbose:
            self._dump(path)

        if directives.source is SourceDirective.MODERN:
            descriptor = parse_door32(path, player_name)
        elif directives.source is SourceDirective.LEGACY:
            descriptor = parse_doorsys(path, player_name)
        elif directives.source is SourceDirective.NODE:
            descriptor = parse_dropfile(find_dropfile(path), player_name)
        else:
            descriptor = parse_dropfile(path, player_name)

        logger.info(
            "dropfile_loaded",
            source=descriptor.source_kind.value,
            path=str(descriptor.source_path),
            user=descriptor.display_name,
            node=descriptor.node_number,
            comm=descriptor.comm_kind.name.lower(),
            bbs=descriptor.bbs_name,
        )
        if directives.verbose:
            logger.debug("descriptor_fields", **descriptor.model_dump(mode="json", exclude={"source_path"}))
        return descriptor

    def apply_overrides(self, descriptor: SessionDescriptor, directives: DoorDirectives) -> SessionDescriptor:
        """Apply ``--stdio`` or ``--fossil`` on top of what the drop file asked for."""
        if directives.force_stdio:
            logger.info("override_stdio", was=descriptor.comm_kind.name.lower())
            return descriptor.with_comm(CommKind.LOCAL)
        if directives.force_port:
            com_port = normalize_com_port(directives.force_port)
            logger.info("override_serial", com_port=com_port, was=descriptor.comm_kind.name.lower())
            return descriptor.with_comm(CommKind.SERIAL, com_port)
        return descriptor

    def open_session(self, descriptor: SessionDescriptor, *, force_escape: bool = False) -> Session:
        """Open the transport (falling back to the console) and wrap it in a session."""
        output_mode = select_output_mode(descriptor.comm_kind, force_escape=force_escape)
        console_encoding = CP437 if output_mode is OutputMode.ESCAPE else None

        resolution = open_with_fallback(descriptor, self._factory, console_encoding=console_encoding)
        terminal = TerminalAdapter(resolution.transport, output_mode)
        namespace = self.derive_namespace(descriptor)

        logger.info(
            "session_ready",
            requested=resolution.requested.name.lower(),
            effective=resolution.effective.name.lower(),
            output_mode=output_mode.value,
            save_namespace=namespace,
        )
        return Session(
            descriptor=descriptor,
            terminal=terminal,
            requested_comm=resolution.requested,
            effective_comm=resolution.effective,
            save_namespace=namespace,
            save_root=self._settings.save_root,
        )

    def derive_namespace(self, descriptor: SessionDescriptor) -> str | None:
        """Save namespace for door sessions whose BBS supplied a name."""
        if not descriptor.is_door:
            return None
        return sanitize_bbs_name(descriptor.bbs_name, self._settings.namespace_max_length)

    def _dump(self, path: Path) -> None:
        for number, line in dump_dropfile(path):
            logger.debug("dropfile_line", line_number=number, text=line)
