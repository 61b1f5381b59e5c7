from __future__ import annotations

import asyncio

from mite.models.entities import Myself

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..render import render_panel, terminal_settings
from ..runner import CommandOutput, run_command

WHOAMI_FORMATS = ("table", "json")


async def _fetch_myself(ctx: CLIContext, warnings: list[str]) -> Myself:
    async with ctx.create_client(warnings=warnings) as client:
        return await client.whoami()


@click.command(name="whoami", cls=RichCommand)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(WHOAMI_FORMATS),
    default=None,
    help="Output format: table or json (default from config, else table).",
)
@click.pass_obj
def whoami_cmd(ctx: CLIContext, *, output_format: str | None) -> None:
    """Show the user the configured API key belongs to."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        fmt = output_format or ctx.default_output_format()
        # list-only defaults from the config (csv, text) fall back to the panel
        if fmt not in WHOAMI_FORMATS:
            fmt = "table"
        who = asyncio.run(_fetch_myself(ctx, warnings))
        if fmt == "json":
            return CommandOutput(text=who.model_dump_json(indent=2) + "\n", warnings=warnings)
        body = "\n".join(
            f"{label}: {value}"
            for label, value in (
                ("id", who.id),
                ("name", who.name),
                ("email", who.email),
                ("role", who.role),
                ("language", who.language),
            )
            if value not in (None, "")
        )
        text = render_panel("mite account", body, settings=terminal_settings("table"))
        return CommandOutput(text=text, warnings=warnings)

    run_command(ctx, command="whoami", fn=fn)
