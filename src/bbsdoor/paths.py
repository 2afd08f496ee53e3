# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filesystem paths and save-root helpers."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir

ENV_SAVE_ROOT = "BBSDOOR_SAVE_ROOT"


def default_save_root() -> Path:
    """Get the default save root directory."""
    env_root = os.getenv(ENV_SAVE_ROOT)
    if env_root:
        return Path(env_root)
    return Path(user_data_dir("bbsdoor", "bbsdoor"))


def save_directory(namespace: str | None, root: Path | None = None) -> Path:
    """Map a save namespace to the directory the save subsystem should use.

    ``None`` selects the shared default directory, so local play and BBSes
    that carry no name keep using ``<root>/saves``.
    """
    base = (root or default_save_root()) / "saves"
    if namespace is None:
        return base
    return base / namespace


def ensure_save_directory(namespace: str | None, root: Path | None = None) -> Path:
    """Create the save directory for *namespace* if needed and return it."""
    directory = save_directory(namespace, root)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
