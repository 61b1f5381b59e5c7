from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

pytest.importorskip("rich")
pytest.importorskip("platformdirs")

from mite.cli.config import config_file_permission_warnings, load_config
from mite.cli.context import CLIContext
from mite.cli.errors import CLIError
from mite.cli.logging import (
    LOGGER_NAME,
    REDACTED,
    configure_logging,
    restore_logging,
    set_redaction_api_key,
)
from mite.cli.paths import get_paths


def _context(**overrides: object) -> CLIContext:
    values: dict[str, object] = {
        "quiet": False,
        "verbosity": 0,
        "profile": None,
        "account": None,
        "api_key_file": None,
        "timeout": None,
        "base_url": None,
        "log_file": None,
        "enable_log_file": False,
    }
    values.update(overrides)
    return CLIContext(**values)  # type: ignore[arg-type]


def _write_config(config_dir: Path, text: str) -> Path:
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_config_file_is_empty(tmp_path: Path) -> None:
    config = load_config(tmp_path / "nope.toml")
    assert config.default.api_key is None
    assert config.profiles == {}


def test_invalid_toml_is_a_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[default\n", encoding="utf-8")
    with pytest.raises(CLIError) as excinfo:
        load_config(path)
    assert excinfo.value.exit_code == 2
    assert excinfo.value.error_type == "config_error"


def test_invalid_value_is_a_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[default]\ntimeout_seconds = "soon"\n', encoding="utf-8")
    with pytest.raises(CLIError, match="invalid value"):
        load_config(path)


def test_profile_values_are_used(_isolated_environment: Path) -> None:
    _write_config(
        _isolated_environment,
        '[default]\naccount = "acme"\napi_key = "default-key"\n\n'
        '[profiles.work]\naccount = "work"\napi_key = "work-key"\ntimeout_seconds = 5\n',
    )
    settings = _context(profile="work").resolve_client_settings(warnings=[])
    assert settings.api_key == "work-key"
    assert settings.base_url == "https://work.mite.de"
    assert settings.timeout == 5

    default = _context().resolve_client_settings(warnings=[])
    assert default.api_key == "default-key"
    assert default.base_url == "https://acme.mite.de"
    assert default.timeout == 30


def test_environment_beats_config(
    monkeypatch: pytest.MonkeyPatch, _isolated_environment: Path
) -> None:
    _write_config(_isolated_environment, '[default]\naccount = "acme"\napi_key = "cfg-key"\n')
    monkeypatch.setenv("MITE_API_KEY", "env-key")
    monkeypatch.setenv("MITE_ACCOUNT", "envco")
    settings = _context().resolve_client_settings(warnings=[])
    assert settings.api_key == "env-key"
    assert settings.base_url == "https://envco.mite.de"


def test_flags_beat_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MITE_API_KEY", "env-key")
    monkeypatch.setenv("MITE_ACCOUNT", "envco")
    key_file = tmp_path / "key"
    key_file.write_text("file-key\n", encoding="utf-8")
    ctx = _context(api_key_file=str(key_file), base_url="https://mite.example.test", timeout=2.5)
    settings = ctx.resolve_client_settings(warnings=[])
    assert settings.api_key == "file-key"
    assert settings.base_url == "https://mite.example.test"
    assert settings.timeout == 2.5


def test_unknown_profile(_isolated_environment: Path) -> None:
    with pytest.raises(CLIError, match="Unknown profile: nope") as excinfo:
        _context(profile="nope").default_output_format()
    assert excinfo.value.exit_code == 2


def test_non_positive_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MITE_API_KEY", "k")
    monkeypatch.setenv("MITE_ACCOUNT", "acme")
    with pytest.raises(CLIError, match="--timeout"):
        _context(timeout=0.0).resolve_client_settings(warnings=[])


@pytest.mark.skipif(os.name != "posix", reason="file modes are POSIX only")
def test_world_readable_config_warns(_isolated_environment: Path) -> None:
    path = _write_config(_isolated_environment, '[default]\napi_key = "k"\naccount = "a"\n')
    path.chmod(0o644)
    assert config_file_permission_warnings(path)
    warnings: list[str] = []
    _context().resolve_api_key(warnings=warnings)
    assert warnings and "chmod 600" in warnings[0]

    path.chmod(0o600)
    assert config_file_permission_warnings(path) == []


def test_config_dir_override(_isolated_environment: Path) -> None:
    paths = get_paths()
    assert paths.config_path == _isolated_environment / "config.toml"
    assert paths.log_file.name == "mite.log"


def test_file_logging_redacts_api_key(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "mite.log"
    previous = configure_logging(verbosity=0, log_file=log_file, enable_file=True)
    try:
        set_redaction_api_key("super-secret")
        logging.getLogger(f"{LOGGER_NAME}.test").debug("sending key %s", "super-secret")
    finally:
        restore_logging(previous)
        set_redaction_api_key(None)

    content = log_file.read_text(encoding="utf-8")
    assert "super-secret" not in content
    assert f"sending key {REDACTED}" in content


def test_restore_logging_puts_back_previous_state() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    before = (list(logger.handlers), logger.level, logger.propagate)
    previous = configure_logging(verbosity=2, log_file=None, enable_file=False)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    restore_logging(previous)
    assert (list(logger.handlers), logger.level, logger.propagate) == before
