# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The running door session handed to the application."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from pydantic import BaseModel, ConfigDict, PrivateAttr

from bbsdoor.dropfile.models import CommKind, SessionDescriptor
from bbsdoor.logging import get_logger
from bbsdoor.paths import ensure_save_directory, save_directory
from bbsdoor.terminal.adapter import TerminalAdapter

logger = get_logger(__name__)


class Session(BaseModel):
    """Everything the application needs about the caller and the connection.

    Built once by ``SessionBootstrapper`` and used as a context manager;
    leaving the ``with`` block releases the transport exactly once, however
    the session ended.
    """

    descriptor: SessionDescriptor
    terminal: TerminalAdapter
    requested_comm: CommKind
    effective_comm: CommKind
    save_namespace: str | None = None
    save_root: Path | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _closed: bool = PrivateAttr(default=False)

    @property
    def degraded(self) -> bool:
        """True when the requested transport failed and the console took over."""
        return self.requested_comm is not self.effective_comm

    @property
    def is_door(self) -> bool:
        return self.descriptor.is_door

    @property
    def player_name(self) -> str:
        return self.descriptor.display_name

    @property
    def user_record_number(self) -> int:
        return self.descriptor.user_record_number

    @property
    def closed(self) -> bool:
        return self._closed

    def save_directory(self, root: Path | None = None, *, create: bool = False) -> Path:
        """Directory the save subsystem should use for this session.

        With *create* the directory is made if it does not exist yet.
        """
        if create:
            return ensure_save_directory(self.save_namespace, root or self.save_root)
        return save_directory(self.save_namespace, root or self.save_root)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.terminal.close()
        logger.info("session_closed", effective=self.effective_comm.name.lower())

    def __enter__(self) -> Session:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
