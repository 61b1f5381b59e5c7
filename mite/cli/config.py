from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CLIError


class ProfileConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    account: str | None = None
    api_key: str | None = None
    base_url: str | None = None
    timeout_seconds: float | None = None
    output_format: str | None = None
    # list command name -> comma-separated column keys
    columns: dict[str, str] = Field(default_factory=dict)


class LoadedConfig(BaseModel):
    default: ProfileConfig = Field(default_factory=ProfileConfig)
    profiles: dict[str, ProfileConfig] = Field(default_factory=dict)


def load_config(path: Path) -> LoadedConfig:
    if not path.exists():
        return LoadedConfig()
    try:
        raw: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise CLIError(
            f"Invalid config file {path}: {exc}",
            exit_code=2,
            error_type="config_error",
        ) from exc
    try:
        return LoadedConfig.model_validate(
            {"default": raw.get("default", {}), "profiles": raw.get("profiles", {})}
        )
    except ValidationError as exc:
        raise CLIError(
            f"Invalid config file {path}: {exc.error_count()} invalid value(s)",
            exit_code=2,
            error_type="config_error",
            details={
                "errors": exc.errors(include_url=False, include_context=False, include_input=False)
            },
        ) from exc


def config_file_permission_warnings(path: Path) -> list[str]:
    if os.name != "posix" or not path.exists():
        return []
    mode = path.stat().st_mode
    if mode & (stat.S_IRGRP | stat.S_IROTH):
        return [
            f"Config file {path} is readable by other users; run `chmod 600 {path}` "
            "to protect your API key."
        ]
    return []


def config_init_template() -> str:
    return """\
# mite CLI configuration
#
# Values here are used when neither a command-line flag nor an environment
# variable (MITE_ACCOUNT, MITE_API_KEY, MITE_BASE_URL) is set.

[default]
account = ""          # your account subdomain, e.g. "acme" for acme.mite.de
api_key = ""          # personal API key from your mite account settings
# timeout_seconds = 30
# output_format = "table"   # table | csv | json | text

# Default columns per list command
# [default.columns]
# customers = "id,name,rate"
# services = "id,name,billable,rate"

# Additional profiles, selected with --profile NAME or MITE_PROFILE
# [profiles.work]
# account = "work"
# api_key = ""
"""
