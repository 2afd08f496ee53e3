# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport selection with downgrade to the local console.

The decision itself is a pure table (``resolve_comm``) so it can be tested
without sockets or serial ports; ``open_with_fallback`` applies it to real
transports built by a ``TransportFactory``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bbsdoor.dropfile.models import CommKind, SessionDescriptor
from bbsdoor.logging import get_logger
from bbsdoor.transport.console import LocalConsoleTransport
from bbsdoor.transport.serial import SerialTransport
from bbsdoor.transport.socket import SocketTransport

if TYPE_CHECKING:
    from bbsdoor.settings import Settings
    from bbsdoor.transport.base import DoorTransport

logger = get_logger(__name__)


def resolve_comm(requested: CommKind, opened: bool) -> CommKind:
    """Effective transport for a requested one and whether it opened.

    ============ ====== =========
    requested    opened effective
    ============ ====== =========
    SERIAL       yes    SERIAL
    SERIAL       no     LOCAL
    SOCKET       yes    SOCKET
    SOCKET       no     LOCAL
    LOCAL        any    LOCAL
    ============ ====== =========
    """
    if requested is CommKind.LOCAL or not opened:
        return CommKind.LOCAL
    return requested


class TransportFactory:
    """Builds the concrete transport for each comm kind."""

    def __init__(self, settings: Settings | None = None) -> None:
        if settings is None:
            from bbsdoor.settings import Settings

            settings = Settings()
        self._settings = settings

    def socket(self, descriptor: SessionDescriptor) -> DoorTransport:
        return SocketTransport(descriptor.socket_handle, negotiate=self._settings.telnet_negotiation)

    def serial(self, descriptor: SessionDescriptor) -> DoorTransport:
        return SerialTransport(
            descriptor.com_port,
            descriptor.baud_rate,
            default_baud=self._settings.default_baud,
            flow_control=self._settings.serial_flow_control,
            write_timeout_s=self._settings.serial_write_timeout_s,
        )

    def console(self, encoding: str | None = None) -> DoorTransport:
        return LocalConsoleTransport(encoding=encoding)


@dataclass(frozen=True)
class TransportResolution:
    transport: DoorTransport
    requested: CommKind
    effective: CommKind

    @property
    def degraded(self) -> bool:
        return self.requested is not self.effective


def open_with_fallback(
    descriptor: SessionDescriptor,
    factory: TransportFactory,
    console_encoding: str | None = None,
) -> TransportResolution:
    """Open the transport *descriptor* asks for, downgrading to the console on failure.

    Never raises for an unusable socket or port; the downgrade is logged so
    operators can correct the door configuration.
    """
    requested = descriptor.comm_kind
    transport: DoorTransport | None = None
    opened = False

    if requested is CommKind.SERIAL:
        logger.info("transport_attempt", kind="serial", com_port=descriptor.com_port, baud=descriptor.baud_rate)
        transport = factory.serial(descriptor)
        opened = transport.open()
    elif requested is CommKind.SOCKET:
        logger.info("transport_attempt", kind="socket", handle=descriptor.socket_handle)
        transport = factory.socket(descriptor)
        opened = transport.open()

    effective = resolve_comm(requested, opened)

    if effective is CommKind.LOCAL:
        if transport is not None:
            transport.close()
            logger.warning(
                "transport_downgraded",
                requested=requested.name.lower(),
                effective="local",
                hint="check the door's I/O settings, or pass --stdio for Standard I/O mode",
            )
        transport = factory.console(console_encoding)
        transport.open()

    assert transport is not None
    return TransportResolution(transport=transport, requested=requested, effective=effective)
