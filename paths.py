#!/usr/bin/env python3
"""XDG path helpers for ezdp."""

from __future__ import annotations

import os
from pathlib import Path

APP_DIRNAME = "ezdp"
CONFIG_FILENAME = "config.json"


def xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()


def default_config_path() -> Path:
    return xdg_config_home() / APP_DIRNAME / CONFIG_FILENAME


__all__ = ["xdg_config_home", "default_config_path", "APP_DIRNAME", "CONFIG_FILENAME"]
