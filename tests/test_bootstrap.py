# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for session bootstrap from command line to ready session."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from bbsdoor.core.bootstrap import SessionBootstrapper
from bbsdoor.dropfile.models import CommKind, SessionDescriptor, SourceKind
from bbsdoor.errors import DropFileMissingError, DropFileUnparsableError, InvalidDirectiveCombinationError
from bbsdoor.settings import Settings
from bbsdoor.terminal.modes import OutputMode
from bbsdoor.transport.base import DoorTransport
from bbsdoor.transport.console import LocalConsoleTransport
from bbsdoor.transport.fallback import TransportFactory


class RecordingFactory(TransportFactory):
    """Hands out scripted remote transports and in-memory consoles."""

    def __init__(self, settings: Settings, make: Callable[..., DoorTransport], *, remote_opens: bool) -> None:
        super().__init__(settings)
        self._make = make
        self._remote_opens = remote_opens
        self.requests: list[tuple[CommKind, SessionDescriptor | None]] = []
        self.remotes: list[DoorTransport] = []
        self.consoles: list[LocalConsoleTransport] = []

    def socket(self, descriptor: SessionDescriptor) -> DoorTransport:
        self.requests.append((CommKind.SOCKET, descriptor))
        transport = self._make(kind=CommKind.SOCKET, opens=self._remote_opens)
        self.remotes.append(transport)
        return transport

    def serial(self, descriptor: SessionDescriptor) -> DoorTransport:
        self.requests.append((CommKind.SERIAL, descriptor))
        transport = self._make(kind=CommKind.SERIAL, opens=self._remote_opens)
        self.remotes.append(transport)
        return transport

    def console(self, encoding: str | None = None) -> DoorTransport:
        self.requests.append((CommKind.LOCAL, None))
        transport = LocalConsoleTransport(io.StringIO(), io.StringIO(), encoding=encoding)
        self.consoles.append(transport)
        return transport


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(save_root=tmp_path, local_player_name="Tester", log_level="DEBUG")


@pytest.fixture
def make_bootstrapper(settings: Settings, scripted: Callable[..., DoorTransport]):
    def _make(remote_opens: bool = True) -> tuple[SessionBootstrapper, RecordingFactory]:
        factory = RecordingFactory(settings, scripted, remote_opens=remote_opens)
        return SessionBootstrapper(settings, factory), factory

    return _make


def test_local_directive(make_bootstrapper) -> None:
    """Test that --local gives an offline session on the console in native colors."""
    bootstrapper, factory = make_bootstrapper()

    session = bootstrapper.bootstrap(["--local"])

    assert session is not None
    assert session.descriptor.source_kind is SourceKind.NONE
    assert session.descriptor.comm_kind is CommKind.LOCAL
    assert session.effective_comm is CommKind.LOCAL
    assert session.terminal.output_mode is OutputMode.NATIVE
    assert session.save_namespace is None
    assert session.player_name == "Tester"
    assert not session.is_door
    assert [kind for kind, _ in factory.requests] == [CommKind.LOCAL]
    assert factory.consoles[0].encoding is None


def test_no_directives_runs_locally(make_bootstrapper) -> None:
    bootstrapper, _ = make_bootstrapper()

    session = bootstrapper.bootstrap(["--some-game-flag"])

    assert session is not None
    assert session.descriptor.source_kind is SourceKind.NONE
    assert session.terminal.output_mode is OutputMode.NATIVE


def test_socket_session_opens(make_bootstrapper, door32_file: Path) -> None:
    bootstrapper, factory = make_bootstrapper(remote_opens=True)

    session = bootstrapper.bootstrap(["--door32", str(door32_file)])

    assert session is not None
    assert session.requested_comm is CommKind.SOCKET
    assert session.effective_comm is CommKind.SOCKET
    assert not session.degraded
    assert session.terminal.output_mode is OutputMode.ESCAPE
    assert session.save_namespace == "Synchronet BBS 3.19"
    assert session.save_directory() == session.save_root / "saves" / "Synchronet BBS 3.19"
    assert not session.save_directory().exists()
    assert session.save_directory(create=True).is_dir()
    assert session.user_record_number == 42
    assert factory.requests[0][0] is CommKind.SOCKET
    assert factory.requests[0][1].socket_handle == 7


def test_socket_failure_falls_back_to_console_in_escape_mode(make_bootstrapper, door32_file: Path) -> None:
    """Test that an unusable socket leaves a working escape-mode console session."""
    bootstrapper, factory = make_bootstrapper(remote_opens=False)

    with capture_logs() as logs:
        session = bootstrapper.bootstrap(["--door", str(door32_file)])

    assert session is not None
    assert session.requested_comm is CommKind.SOCKET
    assert session.effective_comm is CommKind.LOCAL
    assert session.degraded
    assert session.terminal.output_mode is OutputMode.ESCAPE
    assert factory.consoles[0].encoding == "cp437"
    assert factory.remotes[0].close_calls == 1
    assert any(entry["event"] == "transport_downgraded" for entry in logs)


def test_serial_failure_still_builds_terminal(make_bootstrapper, doorsys_file: Path) -> None:
    bootstrapper, factory = make_bootstrapper(remote_opens=False)

    session = bootstrapper.bootstrap(["--doorsys", str(doorsys_file)])

    assert session is not None
    assert session.requested_comm is CommKind.SERIAL
    assert session.effective_comm is CommKind.LOCAL
    assert session.terminal is not None
    assert [kind for kind, _ in factory.requests] == [CommKind.SERIAL, CommKind.LOCAL]


def test_legacy_file_has_no_namespace(make_bootstrapper, doorsys_file: Path) -> None:
    bootstrapper, _ = make_bootstrapper()

    session = bootstrapper.bootstrap(["--door", str(doorsys_file)])

    assert session is not None
    assert session.descriptor.source_kind is SourceKind.LEGACY
    assert session.effective_comm is CommKind.SERIAL
    assert session.save_namespace is None
    assert session.save_directory() == session.save_root / "saves"


def test_stdio_forces_escape_mode_on_console(make_bootstrapper, door32_file: Path) -> None:
    """Test that --stdio skips the socket and keeps ANSI output on the console."""
    bootstrapper, factory = make_bootstrapper()

    session = bootstrapper.bootstrap(["--door32", str(door32_file), "--stdio"])

    assert session is not None
    assert session.descriptor.comm_kind is CommKind.LOCAL
    assert session.effective_comm is CommKind.LOCAL
    assert not session.degraded
    assert session.terminal.output_mode is OutputMode.ESCAPE
    assert factory.remotes == []
    assert factory.consoles[0].encoding == "cp437"


def test_stdio_in_local_mode_uses_escape_codes(make_bootstrapper) -> None:
    bootstrapper, _ = make_bootstrapper()

    session = bootstrapper.bootstrap(["--stdio"])

    assert session is not None
    assert session.terminal.output_mode is OutputMode.ESCAPE


def test_fossil_overrides_socket(make_bootstrapper, door32_file: Path) -> None:
    bootstrapper, factory = make_bootstrapper()

    session = bootstrapper.bootstrap(["--door32", str(door32_file), "--fossil", "3"])

    assert session is not None
    assert session.effective_comm is CommKind.SERIAL
    kind, descriptor = factory.requests[0]
    assert kind is CommKind.SERIAL
    assert descriptor.com_port == "COM3"


def test_node_directory(make_bootstrapper, tmp_path: Path, door32_lines: list[str]) -> None:
    node = tmp_path / "node1"
    node.mkdir()
    (node / "DOOR32.SYS").write_text("\r\n".join(door32_lines))
    bootstrapper, _ = make_bootstrapper()

    session = bootstrapper.bootstrap(["-n", str(node)])

    assert session is not None
    assert session.descriptor.source_kind is SourceKind.MODERN


def test_help_returns_no_session(make_bootstrapper, capsys: pytest.CaptureFixture[str]) -> None:
    bootstrapper, factory = make_bootstrapper()

    assert bootstrapper.bootstrap(["--help"]) is None
    assert "Usage: bbsdoor" in capsys.readouterr().out
    assert factory.requests == []


def test_missing_drop_file_is_fatal(make_bootstrapper, tmp_path: Path) -> None:
    bootstrapper, factory = make_bootstrapper()

    with pytest.raises(DropFileMissingError):
        bootstrapper.bootstrap(["--door32", str(tmp_path / "door32.sys")])
    assert factory.requests == []


def test_unparsable_drop_file_is_fatal(make_bootstrapper, write_dropfile: Callable[..., Path]) -> None:
    path = write_dropfile(["garbage"], "door32.sys")
    bootstrapper, _ = make_bootstrapper()

    with pytest.raises(DropFileUnparsableError):
        bootstrapper.bootstrap(["--door32", str(path)])


def test_missing_directive_value_is_fatal(make_bootstrapper) -> None:
    bootstrapper, _ = make_bootstrapper()

    with pytest.raises(InvalidDirectiveCombinationError):
        bootstrapper.bootstrap(["--door"])


def test_verbose_dumps_drop_file(make_bootstrapper, door32_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("bbsdoor.core.bootstrap.configure_logging", lambda *args, **kwargs: None)
    bootstrapper, _ = make_bootstrapper()

    with capture_logs() as logs:
        bootstrapper.bootstrap(["--door32", str(door32_file), "-v"])

    dumped = [entry["text"] for entry in logs if entry["event"] == "dropfile_line"]
    assert dumped[:2] == ["2", "7"]
    assert any(entry["event"] == "descriptor_fields" for entry in logs)


def test_namespace_uses_configured_length(tmp_path: Path, scripted: Callable[..., DoorTransport], write_dropfile) -> None:
    settings = Settings(save_root=tmp_path, namespace_max_length=6)
    lines = ["2", "7", "0", "Mystic/BBS Deluxe", "1", "Sam"]
    path = write_dropfile(lines, "door32.sys")
    bootstrapper = SessionBootstrapper(settings, RecordingFactory(settings, scripted, remote_opens=True))

    session = bootstrapper.bootstrap(["--door32", str(path)])

    assert session is not None
    assert session.save_namespace == "Mystic"


def test_session_closes_transport_once(make_bootstrapper, door32_file: Path) -> None:
    bootstrapper, factory = make_bootstrapper()

    session = bootstrapper.bootstrap(["--door32", str(door32_file)])
    assert session is not None
    with session:
        session.terminal.write("bye")
    session.close()

    assert session.closed
    assert factory.remotes[0].close_calls == 1


def test_session_closes_on_error(make_bootstrapper, door32_file: Path) -> None:
    bootstrapper, factory = make_bootstrapper()
    session = bootstrapper.bootstrap(["--door32", str(door32_file)])
    assert session is not None

    with pytest.raises(RuntimeError), session:
        raise RuntimeError("game crashed")

    assert factory.remotes[0].close_calls == 1
