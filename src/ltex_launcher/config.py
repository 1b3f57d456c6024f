"""Launcher configuration from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import appdirs

from ltex_launcher.binaries.constants import GITHUB_API_BASE

APP_NAME = "ltex-launcher"
DEFAULT_SETTINGS_FILE = ".ltex/settings.json"


@dataclass(frozen=True)
class LauncherConfig:
    """Launcher configuration"""
    work_dir: Path
    settings_file: str = DEFAULT_SETTINGS_FILE
    github_api: str = GITHUB_API_BASE
    github_token: Optional[str] = None
    log_level: str = "INFO"


def load_config(environ: Optional[Mapping[str, str]] = None) -> LauncherConfig:
    """Build configuration from LTEX_LAUNCHER_* environment variables."""
    environ = os.environ if environ is None else environ

    work_dir = environ.get("LTEX_LAUNCHER_WORK_DIR") or appdirs.user_data_dir(APP_NAME)

    return LauncherConfig(
        work_dir=Path(work_dir).expanduser().absolute(),
        settings_file=environ.get("LTEX_LAUNCHER_SETTINGS_FILE", DEFAULT_SETTINGS_FILE),
        github_api=environ.get("LTEX_LAUNCHER_GITHUB_API", GITHUB_API_BASE).rstrip("/"),
        github_token=environ.get("GITHUB_TOKEN") or None,
        log_level=environ.get("LTEX_LAUNCHER_LOG_LEVEL") or "INFO",
    )
