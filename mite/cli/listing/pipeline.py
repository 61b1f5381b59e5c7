"""Orchestration of one list invocation.

`prepare_list` validates all user input without touching the network;
`execute_list` then retrieves, filters, sorts, projects and renders.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from mite.types import EntitySource, RetrievalOptions

from ..render import RenderSettings, render_table
from .columns import project
from .exceptions import ListValidationError
from .filters import compile_customer_pattern, fetch_and_filter
from .kinds import FILTER_ARCHIVED, FILTER_BILLABLE, FILTER_CUSTOMER, FILTER_CUSTOMER_ID, ListKind
from .models import ArchivedFilter, ColumnDefinition, FilterSpec, RenderedTable, SortSpec
from .sorting import sort_entities

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListRequest:
    filter: FilterSpec
    sort: SortSpec
    settings: RenderSettings
    columns: Sequence[str] | None = None


@dataclass(frozen=True, slots=True)
class ListPlan:
    kind: ListKind
    filter: FilterSpec
    sort: SortSpec
    columns: tuple[ColumnDefinition, ...]
    settings: RenderSettings
    retrieval: RetrievalOptions


def prepare_list(kind: ListKind, request: ListRequest) -> ListPlan:
    """Validate columns, sort and filters for `kind`.

    Raises:
        ListValidationError: on any invalid input; no retrieval has happened yet.
    """
    columns = kind.registry.resolve(request.columns or kind.default_columns)
    sort = kind.resolve_sort(request.sort)
    _check_filters(kind, request.filter)
    return ListPlan(
        kind=kind,
        filter=request.filter,
        sort=sort,
        columns=columns,
        settings=request.settings,
        retrieval=RetrievalOptions(name=request.filter.search or None),
    )


def _check_filters(kind: ListKind, spec: FilterSpec) -> None:
    requested = {
        FILTER_ARCHIVED: spec.archived is not ArchivedFilter.ALL,
        FILTER_BILLABLE: spec.billable is not None,
        FILTER_CUSTOMER_ID: spec.customer_id is not None,
        FILTER_CUSTOMER: spec.customer is not None,
    }
    unsupported = [name for name, used in requested.items() if used and not kind.supports(name)]
    if unsupported:
        raise ListValidationError(
            f"{kind.command} cannot be filtered by: {', '.join(unsupported)}",
        )
    compile_customer_pattern(spec.customer)


async def collect_table(source: EntitySource, plan: ListPlan) -> RenderedTable:
    entities = await fetch_and_filter(source, plan.kind.kind, plan.filter, plan.retrieval)
    ordered = sort_entities(entities, plan.sort.attribute, direction=plan.sort.direction)
    logger.info("listing %d %s sorted by %s", len(ordered), plan.kind.command, plan.sort.attribute)
    return project(ordered, plan.columns)


async def execute_list(source: EntitySource, plan: ListPlan) -> str:
    table = await collect_table(source, plan)
    return render_table(table, plan.settings)


async def run_list_pipeline(source: EntitySource, kind: ListKind, request: ListRequest) -> str:
    plan = prepare_list(kind, request)
    return await execute_list(source, plan)
