# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bbsdoor.constants import (
    DEFAULT_BAUD,
    DEFAULT_NAMESPACE_MAX_LENGTH,
    DEFAULT_PLAYER_NAME,
    DEFAULT_SERIAL_WRITE_TIMEOUT_S,
)
from bbsdoor.paths import default_save_root


class Settings(BaseSettings):
    log_level: str = "WARNING"
    local_player_name: str = DEFAULT_PLAYER_NAME
    save_root: Path = Field(default_factory=default_save_root)

    default_baud: int = Field(default=DEFAULT_BAUD, gt=0)
    serial_flow_control: Literal["rtscts", "xonxoff", "none"] = "rtscts"
    serial_write_timeout_s: float = Field(default=DEFAULT_SERIAL_WRITE_TIMEOUT_S, gt=0)

    telnet_negotiation: bool = True
    namespace_max_length: int = Field(default=DEFAULT_NAMESPACE_MAX_LENGTH, ge=1, le=255)

    model_config = SettingsConfigDict(
        env_prefix="BBSDOOR_",
        extra="ignore",
    )
