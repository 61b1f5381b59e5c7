from __future__ import annotations

from pathlib import Path

import mite

from .click_compat import RichGroup, click
from .context import CLIContext
from .logging import configure_logging, restore_logging
from .paths import get_paths


@click.group(
    name="mite",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=RichGroup,
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option("--profile", type=str, default=None, help="Config profile name.")
@click.option(
    "--account",
    type=str,
    default=None,
    help="Account subdomain, e.g. 'acme' for acme.mite.de.",
)
@click.option(
    "--api-key-file",
    type=str,
    default=None,
    help="Read API key from file.",
)
@click.option("--timeout", type=float, default=None, help="Per-request timeout in seconds.")
@click.option("--base-url", type=str, default=None, help="Override the API base URL.")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None)
@click.option("--no-log-file", is_flag=True, help="Disable file logging explicitly.")
@click.version_option(version=mite.__version__, prog_name="mite")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    quiet: bool,
    verbose: int,
    profile: str | None,
    account: str | None,
    api_key_file: str | None,
    timeout: float | None,
    base_url: str | None,
    log_file: str | None,
    no_log_file: bool,
) -> None:
    """Command line client for the mite time tracking service."""
    if click_ctx.invoked_subcommand is None:
        # No args: show help; no network calls.
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    paths = get_paths()
    effective_log_file = Path(log_file) if log_file else paths.log_file
    enable_log_file = not no_log_file

    click_ctx.obj = CLIContext(
        quiet=quiet,
        verbosity=verbose,
        profile=profile,
        account=account,
        api_key_file=api_key_file,
        timeout=timeout,
        base_url=base_url,
        log_file=effective_log_file,
        enable_log_file=enable_log_file,
        _paths=paths,
    )

    previous_logging = configure_logging(
        verbosity=verbose,
        log_file=effective_log_file,
        enable_file=enable_log_file,
        api_key_for_redaction=None,
    )
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.completion_cmd import complete_cmd as _complete_cmd  # noqa: E402
from .commands.completion_cmd import completion_cmd as _completion_cmd  # noqa: E402
from .commands.config_cmds import config_group as _config_group  # noqa: E402
from .commands.list_cmds import customers_cmd as _customers_cmd  # noqa: E402
from .commands.list_cmds import entries_cmd as _entries_cmd  # noqa: E402
from .commands.list_cmds import projects_cmd as _projects_cmd  # noqa: E402
from .commands.list_cmds import services_cmd as _services_cmd  # noqa: E402
from .commands.list_cmds import users_cmd as _users_cmd  # noqa: E402
from .commands.whoami_cmd import whoami_cmd as _whoami_cmd  # noqa: E402

cli.add_command(_customers_cmd)
cli.add_command(_projects_cmd)
cli.add_command(_services_cmd)
cli.add_command(_users_cmd)
cli.add_command(_entries_cmd)
cli.add_command(_whoami_cmd)
cli.add_command(_config_group)
cli.add_command(_completion_cmd)
cli.add_command(_complete_cmd)
