from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass

from rich.console import Console
from rich.text import Text

from .click_compat import click
from .context import CLIContext, error_info_for_exception, exit_code_for_exception
from .render import render_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOutput:
    text: str = ""
    warnings: list[str] | None = None
    exit_code: int = 0


def _emit_warnings(*, ctx: CLIContext, warnings: list[str]) -> None:
    if ctx.quiet:
        return
    if not warnings:
        return
    stderr = Console(file=sys.stderr, force_terminal=False, highlight=False)
    for w in warnings:
        stderr.print(Text(f"Warning: {w}"))


CommandFn = Callable[[CLIContext, list[str]], CommandOutput]


def run_command(ctx: CLIContext, *, command: str, fn: CommandFn) -> None:
    warnings: list[str] = []
    try:
        out = fn(ctx, warnings)
        if out.text:
            sys.stdout.write(out.text)
            sys.stdout.flush()
        _emit_warnings(ctx=ctx, warnings=(out.warnings or warnings))
        raise click.exceptions.Exit(out.exit_code)
    except click.exceptions.Exit:
        raise
    except Exception as exc:
        logger.debug("command %r failed", command, exc_info=True)
        code = exit_code_for_exception(exc)
        info = error_info_for_exception(exc)
        render_error(
            command=command,
            error_type=info.type,
            message=info.message,
            hint=info.hint,
            details=info.details,
            quiet=ctx.quiet,
            verbosity=ctx.verbosity,
        )
        _emit_warnings(ctx=ctx, warnings=warnings)
        raise click.exceptions.Exit(code) from exc
