from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "mite"
REDACTED = "[REDACTED]"

_redaction_api_key: str | None = None


def set_redaction_api_key(api_key: str | None) -> None:
    global _redaction_api_key
    _redaction_api_key = api_key or None


class _RedactApiKeyFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        key = _redaction_api_key
        if not key:
            return True
        message = record.getMessage()
        if key in message:
            record.msg = message.replace(key, REDACTED)
            record.args = None
        return True


@dataclass(frozen=True, slots=True)
class LoggingState:
    level: int
    handlers: list[logging.Handler]
    propagate: bool


def _console_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    *,
    verbosity: int,
    log_file: Path | None,
    enable_file: bool,
    api_key_for_redaction: str | None = None,
) -> LoggingState:
    """Route the `mite` logger to stderr (and optionally a rotating file).

    Returns the previous logger state for `restore_logging`.
    """
    logger = logging.getLogger(LOGGER_NAME)
    previous = LoggingState(
        level=logger.level,
        handlers=list(logger.handlers),
        propagate=logger.propagate,
    )
    if api_key_for_redaction:
        set_redaction_api_key(api_key_for_redaction)

    redact = _RedactApiKeyFilter()
    console_level = _console_level(verbosity)
    console_handler = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=False,
        show_path=verbosity >= 2,
        markup=False,
    )
    console_handler.addFilter(redact)
    handlers: list[logging.Handler] = [console_handler]

    file_error: OSError | None = None
    if enable_file and log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
            )
        except OSError as exc:
            file_error = exc
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            file_handler.addFilter(redact)
            handlers.append(file_handler)

    logger.handlers = handlers
    logger.setLevel(logging.DEBUG if len(handlers) > 1 else console_level)
    logger.propagate = False
    if file_error is not None:
        logger.warning("File logging disabled, cannot open %s: %s", log_file, file_error)
    return previous


def restore_logging(previous: LoggingState) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        if handler not in previous.handlers:
            handler.close()
    logger.handlers = previous.handlers
    logger.setLevel(previous.level)
    logger.propagate = previous.propagate
