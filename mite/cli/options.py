from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .click_compat import click
from .listing.kinds import (
    FILTER_ARCHIVED,
    FILTER_BILLABLE,
    FILTER_CUSTOMER,
    FILTER_CUSTOMER_ID,
    ListKind,
)
from .listing.models import ArchivedFilter, parse_bool
from .render import FORMATS

F = TypeVar("F", bound=Callable[..., object])


def _parse_archived(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> ArchivedFilter:
    if value is None:
        return ArchivedFilter.ALL
    return ArchivedFilter.parse(value)


def _parse_optional_bool(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> bool | None:
    if value is None:
        return None
    return parse_bool(value)


def list_options(kind: ListKind) -> Callable[[F], F]:
    """Attach the shared list options, plus the filters `kind` supports."""

    def decorator(fn: F) -> F:
        fn = click.option(
            "--sort",
            type=str,
            default=kind.default_sort,
            show_default=True,
            help=(
                "Column the results are case-insensitively ordered by; prefix with '-' "
                f"for descending. Valid values: {', '.join(kind.sort_options)}."
            ),
        )(fn)
        fn = click.option(
            "--search",
            type=str,
            default=None,
            help=f"Only show {kind.command} whose name contains this text (case-insensitive).",
        )(fn)
        fn = click.option(
            "--columns",
            type=str,
            default=None,
            help=(
                "Comma-separated list of columns to show. "
                f"Valid columns: {', '.join(kind.registry.keys())}."
            ),
        )(fn)
        fn = click.option(
            "-f",
            "--format",
            "output_format",
            type=str,
            default=None,
            help=f"Output format: {', '.join(FORMATS)} (default from config, else table).",
        )(fn)
        if kind.supports(FILTER_CUSTOMER):
            fn = click.option(
                "--customer",
                type=str,
                default=None,
                help="Only show projects whose customer name matches this regular expression.",
            )(fn)
        if kind.supports(FILTER_CUSTOMER_ID):
            fn = click.option(
                "--customer_id",
                "customer_id",
                type=int,
                default=None,
                help="Only show projects of this customer id.",
            )(fn)
        if kind.supports(FILTER_BILLABLE):
            fn = click.option(
                "--billable",
                metavar="<true|false>",
                default=None,
                callback=_parse_optional_bool,
                help="Only show billable or non-billable entries; no filter when omitted.",
            )(fn)
        if kind.supports(FILTER_ARCHIVED):
            fn = click.option(
                "-a",
                "--archived",
                metavar="<true|false|all>",
                default=None,
                callback=_parse_archived,
                help=f"Only show archived or not archived {kind.command} (default: all).",
            )(fn)
        return fn

    return decorator
