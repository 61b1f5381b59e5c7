from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from mite import AsyncMite
from mite.client import base_url_for_account
from mite.exceptions import MiteError

from .config import LoadedConfig, ProfileConfig, config_file_permission_warnings, load_config
from .errors import CLIError, ErrorInfo
from .logging import set_redaction_api_key
from .paths import CliPaths, get_paths

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ClientSettings:
    api_key: str
    base_url: str
    timeout: float
    log_requests: bool


@dataclass
class CLIContext:
    quiet: bool
    verbosity: int
    profile: str | None
    account: str | None
    api_key_file: str | None
    timeout: float | None
    base_url: str | None
    log_file: Path | None
    enable_log_file: bool

    _paths: CliPaths = field(default_factory=get_paths)
    _loaded_config: LoadedConfig | None = None

    @property
    def paths(self) -> CliPaths:
        return self._paths

    def _config_path(self) -> Path:
        return self.paths.config_path

    def load_config(self) -> LoadedConfig:
        if self._loaded_config is None:
            self._loaded_config = load_config(self._config_path())
        return self._loaded_config

    def _effective_profile(self) -> str:
        return self.profile or os.getenv("MITE_PROFILE") or "default"

    def _profile_config(self) -> ProfileConfig:
        cfg = self.load_config()
        name = self._effective_profile()
        if name == "default":
            return cfg.default
        if name not in cfg.profiles:
            raise CLIError(
                f"Unknown profile: {name}",
                exit_code=2,
                error_type="config_error",
                hint=f"Define [profiles.{name}] in {self._config_path()}.",
            )
        return cfg.profiles[name]

    def default_output_format(self) -> str:
        return self._profile_config().output_format or "table"

    def default_columns(self, command: str) -> str | None:
        return self._profile_config().columns.get(command)

    def resolve_api_key(self, *, warnings: list[str]) -> str:
        if self.api_key_file is not None:
            path = Path(self.api_key_file)
            try:
                key = path.read_text(encoding="utf-8").strip()
            except OSError as exc:
                raise CLIError(
                    f"Cannot read API key file: {path} ({exc.strerror})",
                    exit_code=2,
                    error_type="usage_error",
                ) from exc
            if not key:
                raise CLIError(f"Empty API key file: {path}", exit_code=2, error_type="usage_error")
            return key

        env_key = os.getenv("MITE_API_KEY", "").strip()
        if env_key:
            return env_key

        prof = self._profile_config()
        if prof.api_key:
            warnings.extend(config_file_permission_warnings(self._config_path()))
            return prof.api_key.strip()

        raise CLIError(
            "Missing API key. Set MITE_API_KEY, use --api-key-file, or configure a profile.",
            exit_code=2,
            error_type="usage_error",
        )

    def resolve_base_url(self) -> str:
        prof = self._profile_config()
        explicit = self.base_url or os.getenv("MITE_BASE_URL") or prof.base_url
        if explicit:
            return explicit
        account = self.account or os.getenv("MITE_ACCOUNT") or prof.account
        if not account:
            raise CLIError(
                "Missing account. Set MITE_ACCOUNT, use --account, or configure a profile.",
                exit_code=2,
                error_type="usage_error",
            )
        return base_url_for_account(account)

    def resolve_client_settings(self, *, warnings: list[str]) -> ClientSettings:
        api_key = self.resolve_api_key(warnings=warnings)
        set_redaction_api_key(api_key)

        prof = self._profile_config()
        timeout = self.timeout if self.timeout is not None else prof.timeout_seconds
        if timeout is None:
            timeout = DEFAULT_TIMEOUT_SECONDS
        if timeout <= 0:
            raise CLIError("--timeout must be > 0.", exit_code=2, error_type="usage_error")

        return ClientSettings(
            api_key=api_key,
            base_url=self.resolve_base_url(),
            timeout=timeout,
            log_requests=self.verbosity >= 2,
        )

    def create_client(self, *, warnings: list[str]) -> AsyncMite:
        """Build a new client; callers own it and close it inside their event loop."""
        settings = self.resolve_client_settings(warnings=warnings)
        return AsyncMite(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            log_requests=settings.log_requests,
        )


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    return 1


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details
        )
    if isinstance(exc, MiteError):
        return ErrorInfo(type=exc.__class__.__name__, message=str(exc))
    return ErrorInfo(type=exc.__class__.__name__, message=str(exc) or exc.__class__.__name__)
