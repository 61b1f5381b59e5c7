from __future__ import annotations

import asyncio
import logging
import os

from ..click_compat import RichCommand, click
from ..completion.dispatcher import CompletionContext
from ..completion.grammar import SHELLS, build_dispatcher
from ..completion.shell import (
    LazyClientSource,
    completion_script,
    filter_suggestions,
    format_replies,
    parse_env,
)
from ..context import CLIContext
from ..runner import CommandOutput, run_command

logger = logging.getLogger(__name__)


@click.command(
    name="completion",
    cls=RichCommand,
    epilog="""\
Examples:

  Enable completion for the current bash session
    eval "$(mite completion bash)"

  Install it permanently for zsh
    mite completion zsh >> ~/.zshrc
""",
)
@click.argument("shell", type=click.Choice(SHELLS))
@click.pass_obj
def completion_cmd(ctx: CLIContext, shell: str) -> None:
    """Print the tab-completion script for a shell."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        return CommandOutput(text=completion_script(shell))

    run_command(ctx, command="completion", fn=fn)


async def _complete(ctx: CLIContext, context: CompletionContext, shell: str) -> list[str]:
    warnings: list[str] = []
    source = LazyClientSource(lambda: ctx.create_client(warnings=warnings))
    try:
        suggestions = await build_dispatcher(source)(context)
    finally:
        await source.close()
    return format_replies(filter_suggestions(suggestions, context.last_partial), shell)


@click.command(name="__complete", cls=RichCommand, hidden=True)
@click.argument("shell", type=click.Choice(SHELLS))
@click.pass_obj
def complete_cmd(ctx: CLIContext, shell: str) -> None:
    """Answer a completion request from one of the generated shell scripts."""
    context = parse_env(os.environ)
    if context is None:
        return
    try:
        replies = asyncio.run(_complete(ctx, context, shell))
    except Exception:
        # a failed lookup means no suggestions, never a broken prompt
        logger.debug("completion for %r failed", context.line, exc_info=True)
        return
    if replies:
        click.echo("\n".join(replies))
