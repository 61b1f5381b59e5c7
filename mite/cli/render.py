from __future__ import annotations

import io
import json
import sys
from dataclasses import dataclass
from typing import Any, Literal, cast, get_args

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .csv_utils import write_rows
from .listing.exceptions import ListValidationError
from .listing.formatters import truncate_text
from .listing.models import RenderedTable, WrapPolicy

OutputFormat = Literal["table", "csv", "json", "text"]
FORMATS: tuple[str, ...] = get_args(OutputFormat)

DEFAULT_WIDTH = 80
# columns left for everything but a truncated free-text column
TRUNCATE_MARGIN = 20
MIN_TRUNCATE_WIDTH = 10


@dataclass(frozen=True, slots=True)
class RenderSettings:
    format: OutputFormat = "table"
    width: int = DEFAULT_WIDTH
    color: bool = False

    @property
    def truncate_width(self) -> int:
        return max(self.width - TRUNCATE_MARGIN, MIN_TRUNCATE_WIDTH)


def parse_format(value: str) -> OutputFormat:
    normalized = value.strip().lower()
    if normalized not in FORMATS:
        raise ListValidationError(
            f'Invalid output format: "{value}"',
            hint=f"Valid formats are: {', '.join(FORMATS)}.",
        )
    return cast(OutputFormat, normalized)


def terminal_settings(fmt: OutputFormat, *, stream: Any = None) -> RenderSettings:
    """Width and color for `stream`; fixed defaults when it is not a terminal."""
    stream = stream if stream is not None else sys.stdout
    isatty = bool(getattr(stream, "isatty", lambda: False)())
    if not isatty:
        return RenderSettings(format=fmt, width=DEFAULT_WIDTH, color=False)
    width = Console(file=stream).size.width or DEFAULT_WIDTH
    return RenderSettings(format=fmt, width=width, color=True)


def _rich_table(table: RenderedTable, settings: RenderSettings) -> Table:
    rich_table = Table(show_header=True, header_style="bold")
    for column in table.columns:
        rich_table.add_column(
            column.label,
            justify=column.alignment,
            min_width=column.width,
            no_wrap=column.wrap is WrapPolicy.TRUNCATE,
            overflow="fold" if column.wrap is WrapPolicy.WRAP else "ellipsis",
        )
    truncated = [column.wrap is WrapPolicy.TRUNCATE for column in table.columns]
    for row in table.rows:
        cells = [
            truncate_text(cell, max_len=settings.truncate_width) if cut else cell
            for cell, cut in zip(row.cells, truncated, strict=True)
        ]
        rich_table.add_row(*[Text(cell) for cell in cells], style="dim" if row.archived else None)
    return rich_table


def _render_rich(table: RenderedTable, settings: RenderSettings) -> str:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=settings.width,
        force_terminal=settings.color,
        color_system="standard" if settings.color else None,
        highlight=False,
        legacy_windows=False,
    )
    console.print(_rich_table(table, settings))
    return buffer.getvalue()


def _render_csv(table: RenderedTable) -> str:
    buffer = io.StringIO()
    write_rows(buffer, header=table.header, rows=(row.cells for row in table.rows))
    return buffer.getvalue()


def _render_json(table: RenderedTable) -> str:
    return json.dumps(table.records(), ensure_ascii=False, indent=2) + "\n"


def _render_text(table: RenderedTable) -> str:
    lines = ["\t".join(" ".join(cell.split()) for cell in row.cells) for row in table.rows]
    return "".join(line + "\n" for line in lines)


def render_table(table: RenderedTable, settings: RenderSettings) -> str:
    if settings.format == "table":
        return _render_rich(table, settings)
    if settings.format == "csv":
        return _render_csv(table)
    if settings.format == "json":
        return _render_json(table)
    if settings.format == "text":
        return _render_text(table)
    raise ListValidationError(f'Invalid output format: "{settings.format}"')


def render_panel(title: str, body: str, *, settings: RenderSettings) -> str:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=settings.width,
        force_terminal=settings.color,
        color_system="standard" if settings.color else None,
        highlight=False,
    )
    console.print(Panel.fit(Text(body.strip()), title=title))
    return buffer.getvalue()


def _error_title(error_type: str) -> str:
    normalized = (error_type or "").strip()
    mapping = {
        "usage_error": "Usage error",
        "config_error": "Configuration error",
        "AuthenticationError": "Authentication error",
        "AuthorizationError": "Permission denied",
        "NotFoundError": "Not found",
        "ServerError": "Server error",
        "NetworkError": "Network error",
        "TimeoutError": "Timeout",
        "ApiError": "API error",
    }
    return mapping.get(normalized, "Error")


def render_error(
    *,
    command: str,
    error_type: str,
    message: str,
    hint: str | None,
    details: dict[str, Any] | None,
    quiet: bool,
    verbosity: int,
) -> None:
    stderr = Console(file=sys.stderr, force_terminal=False, highlight=False)
    stderr.print(Text(f"{_error_title(error_type)}: {message}"))
    if quiet:
        return
    if hint:
        stderr.print(Text(f"Hint: {hint}"))
    elif error_type == "usage_error" and "api key" not in message.lower():
        stderr.print(Text(f"Hint: run `mite {command} --help`"))
    if details and verbosity >= 1:
        stderr.print(Panel.fit(Text(json.dumps(details, ensure_ascii=False, indent=2))))
