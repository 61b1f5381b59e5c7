from __future__ import annotations

from pathlib import Path

import pytest

_MITE_ENV = (
    "MITE_ACCOUNT",
    "MITE_API_KEY",
    "MITE_BASE_URL",
    "MITE_PROFILE",
    "COMP_LINE",
    "COMP_CWORD",
    "COMP_POINT",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep tests away from the developer's real config and credentials."""
    for name in _MITE_ENV:
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "config"
    monkeypatch.setenv("MITE_CONFIG_DIR", str(config_dir))
    return config_dir
