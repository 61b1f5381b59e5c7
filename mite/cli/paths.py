from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "mite"


@dataclass(frozen=True, slots=True)
class CliPaths:
    config_dir: Path
    config_path: Path
    log_dir: Path
    log_file: Path


def get_paths() -> CliPaths:
    """Resolve per-user locations; `MITE_CONFIG_DIR` overrides the config directory."""
    dirs = PlatformDirs(APP_NAME, appauthor=False)
    override = os.getenv("MITE_CONFIG_DIR")
    config_dir = Path(override).expanduser() if override else Path(dirs.user_config_dir)
    log_dir = Path(dirs.user_log_dir)
    return CliPaths(
        config_dir=config_dir,
        config_path=config_dir / "config.toml",
        log_dir=log_dir,
        log_file=log_dir / "mite.log",
    )
