# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import signal
import sys
from collections.abc import Callable

import click

from bbsdoor.app import run
from bbsdoor.core.bootstrap import SessionBootstrapper
from bbsdoor.core.session import Session
from bbsdoor.errors import CallerDisconnectedError, DoorError
from bbsdoor.logging import configure_logging, get_logger
from bbsdoor.settings import Settings

logger = get_logger(__name__)


def _raise_exit(signum: int, frame: object) -> None:
    raise SystemExit(128 + signum)


def install_signal_handlers() -> None:
    """Turn BBS hangup and kill signals into ``SystemExit`` so cleanup runs."""
    for name in ("SIGTERM", "SIGHUP"):
        signum = getattr(signal, name, None)
        if signum is not None:
            signal.signal(signum, _raise_exit)


def run_door(argv: list[str], app: Callable[[Session], None], settings: Settings | None = None) -> int:
    """Bootstrap a session from *argv*, run *app* in it and return the exit status."""
    settings = settings or Settings()
    try:
        session = SessionBootstrapper(settings).bootstrap(argv)
    except DoorError as e:
        logger.error("bootstrap_failed", error=str(e))
        click.echo(f"Error: {e}", err=True)
        return 1

    if session is None:
        return 0

    with session:
        try:
            app(session)
        except CallerDisconnectedError as e:
            logger.info("caller_disconnected", reason=str(e))
    return 0


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def main(args: tuple[str, ...]) -> None:
    """Run the welcome door under a BBS or locally.

    Directives are read leniently so a BBS command line may mix them with
    other arguments; pass --help for the list.
    """
    settings = Settings()
    configure_logging(settings)
    install_signal_handlers()
    sys.exit(run_door(list(args), run, settings))


if __name__ == "__main__":
    main()
