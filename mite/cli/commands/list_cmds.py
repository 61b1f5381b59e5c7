"""`mite customers|projects|services|users|entries`: one command per list kind."""

from __future__ import annotations

import asyncio

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..listing.columns import parse_column_selection
from ..listing.kinds import CUSTOMERS, PROJECTS, SERVICES, TIME_ENTRIES, USERS, ListKind
from ..listing.models import ArchivedFilter, FilterSpec, SortSpec
from ..listing.pipeline import ListPlan, ListRequest, execute_list, prepare_list
from ..options import list_options
from ..render import parse_format, terminal_settings
from ..runner import CommandOutput, run_command

_EXAMPLES: dict[str, str] = {
    "customers": """\
Examples:

  Search for specific customers
    mite customers --search company1

  List customers ordered by their hourly rate
    mite customers --sort hourly_rate

  Export all archived customers
    mite customers --archived=true --format=csv > archived_customers.csv

  Print the ids of matching customers, one per line
    mite customers --search company --columns=id --format=text
""",
    "projects": """\
Examples:

  List the projects of one customer
    mite projects --customer_id 1234

  List projects whose customer name starts with "acme"
    mite projects --customer '^acme' --columns=id,name,budget
""",
    "services": """\
Examples:

  Show all services
    mite services

  Show archived services with custom columns
    mite services --archived=true --columns=name,rate,created_at

  Export all billable services as csv
    mite services --billable=true --format=csv --columns=id,name,rate > services.csv
""",
    "users": """\
Examples:

  List active users with their e-mail address
    mite users --archived=false --columns=name,email
""",
    "entries": """\
Examples:

  Most recent time entries first
    mite entries --sort=-date

  Billable entries mentioning a ticket
    mite entries --billable=true --search JIRA-123 --format=json
""",
}


async def _execute(ctx: CLIContext, plan: ListPlan, warnings: list[str]) -> str:
    async with ctx.create_client(warnings=warnings) as client:
        return await execute_list(client, plan)


def _make_list_command(kind: ListKind) -> click.Command:
    @click.command(
        name=kind.command,
        cls=RichCommand,
        help=kind.description,
        epilog=_EXAMPLES.get(kind.command),
    )
    @list_options(kind)
    @click.pass_obj
    def list_cmd(
        ctx: CLIContext,
        *,
        output_format: str | None,
        columns: str | None,
        search: str | None,
        sort: str,
        archived: ArchivedFilter = ArchivedFilter.ALL,
        billable: bool | None = None,
        customer_id: int | None = None,
        customer: str | None = None,
    ) -> None:
        def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
            fmt = parse_format(output_format or ctx.default_output_format())
            request = ListRequest(
                filter=FilterSpec(
                    archived=archived,
                    billable=billable,
                    search=search,
                    customer_id=customer_id,
                    customer=customer,
                ),
                sort=SortSpec.parse(sort),
                settings=terminal_settings(fmt),
                columns=parse_column_selection(columns or ctx.default_columns(kind.command)),
            )
            plan = prepare_list(kind, request)
            text = asyncio.run(_execute(ctx, plan, warnings))
            return CommandOutput(text=text, warnings=warnings)

        run_command(ctx, command=kind.command, fn=fn)

    return list_cmd


customers_cmd = _make_list_command(CUSTOMERS)
projects_cmd = _make_list_command(PROJECTS)
services_cmd = _make_list_command(SERVICES)
users_cmd = _make_list_command(USERS)
entries_cmd = _make_list_command(TIME_ENTRIES)
