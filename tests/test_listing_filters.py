from __future__ import annotations

import asyncio
from collections.abc import Sequence

import pytest

from mite.cli.listing.exceptions import ListValidationError
from mite.cli.listing.filters import fetch_and_filter
from mite.cli.listing.models import ArchivedFilter, FilterSpec
from mite.models import Customer, EntityKind, MiteModel, Project, Service
from mite.types import RetrievalOptions


class StubSource:
    def __init__(
        self,
        active: Sequence[MiteModel],
        archived: Sequence[MiteModel],
        *,
        archived_first: bool = False,
        error: Exception | None = None,
    ) -> None:
        self.active = list(active)
        self.archived = list(archived)
        self.archived_first = archived_first
        self.error = error
        self.calls: list[tuple[str, EntityKind, RetrievalOptions]] = []

    async def get_active(self, kind: EntityKind, options: RetrievalOptions) -> list[MiteModel]:
        self.calls.append(("active", kind, options))
        if self.archived_first:
            await asyncio.sleep(0.01)
        if self.error is not None:
            raise self.error
        return self.active

    async def get_archived(self, kind: EntityKind, options: RetrievalOptions) -> list[MiteModel]:
        self.calls.append(("archived", kind, options))
        return self.archived


def _customers() -> tuple[list[Customer], list[Customer]]:
    active = [
        Customer(id=1, name="Bcorp", archived=False, hourly_rate=0),
        Customer(id=3, name="Ccorp", archived=False),
    ]
    archived = [Customer(id=2, name="Acorp", archived=True, hourly_rate=5000)]
    return active, archived


@pytest.mark.asyncio
async def test_all_returns_active_then_archived() -> None:
    active, archived = _customers()
    source = StubSource(active, archived)
    result = await fetch_and_filter(source, EntityKind.CUSTOMER, FilterSpec())
    assert [c.id for c in result] == [1, 3, 2]


@pytest.mark.asyncio
async def test_merge_order_does_not_depend_on_completion_order() -> None:
    active, archived = _customers()
    source = StubSource(active, archived, archived_first=True)
    result = await fetch_and_filter(source, EntityKind.CUSTOMER, FilterSpec())
    assert [c.id for c in result] == [1, 3, 2]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("archived_filter", "expected"),
    [(ArchivedFilter.TRUE, [2]), (ArchivedFilter.FALSE, [1, 3])],
)
async def test_archived_tri_state(archived_filter: ArchivedFilter, expected: list[int]) -> None:
    active, archived = _customers()
    source = StubSource(active, archived)
    result = await fetch_and_filter(
        source, EntityKind.CUSTOMER, FilterSpec(archived=archived_filter)
    )
    assert [c.id for c in result] == expected
    assert all(c.archived is (archived_filter is ArchivedFilter.TRUE) for c in result)


@pytest.mark.asyncio
async def test_billable_filter_only_applies_when_given() -> None:
    services = [
        Service(id=1, name="Dev", billable=True),
        Service(id=2, name="Support", billable=False),
    ]
    source = StubSource(services, [])

    unfiltered = await fetch_and_filter(source, EntityKind.SERVICE, FilterSpec(billable=None))
    billable = await fetch_and_filter(source, EntityKind.SERVICE, FilterSpec(billable=True))
    non_billable = await fetch_and_filter(source, EntityKind.SERVICE, FilterSpec(billable=False))

    assert [s.id for s in unfiltered] == [1, 2]
    assert [s.id for s in billable] == [1]
    assert [s.id for s in non_billable] == [2]


@pytest.mark.asyncio
async def test_customer_filters_on_projects() -> None:
    projects = [
        Project(id=10, name="Website", customer_id=1, customer_name="ACME Corp"),
        Project(id=11, name="App", customer_id=2, customer_name="Globex"),
        Project(id=12, name="Intranet", customer_id=1, customer_name="ACME Corp"),
    ]
    source = StubSource(projects, [])

    by_id = await fetch_and_filter(source, EntityKind.PROJECT, FilterSpec(customer_id=1))
    by_name = await fetch_and_filter(source, EntityKind.PROJECT, FilterSpec(customer="^acme"))

    assert [p.id for p in by_id] == [10, 12]
    assert [p.id for p in by_name] == [10, 12]


@pytest.mark.asyncio
async def test_search_becomes_retrieval_name_for_both_calls() -> None:
    source = StubSource([], [])
    await fetch_and_filter(source, EntityKind.CUSTOMER, FilterSpec(search="corp"))
    assert sorted(call[0] for call in source.calls) == ["active", "archived"]
    assert {call[2] for call in source.calls} == {RetrievalOptions(name="corp")}
    assert all(call[2].limit == 1000 for call in source.calls)


@pytest.mark.asyncio
async def test_source_errors_propagate_unchanged() -> None:
    error = RuntimeError("connection refused")
    source = StubSource([], [], error=error)
    with pytest.raises(RuntimeError) as excinfo:
        await fetch_and_filter(source, EntityKind.CUSTOMER, FilterSpec())
    assert excinfo.value is error


@pytest.mark.asyncio
async def test_invalid_customer_pattern_fails_before_retrieval() -> None:
    source = StubSource([], [])
    with pytest.raises(ListValidationError):
        await fetch_and_filter(source, EntityKind.PROJECT, FilterSpec(customer="(unclosed"))
    assert source.calls == []


@pytest.mark.asyncio
async def test_filtering_does_not_mutate_source_entities() -> None:
    active, archived = _customers()
    source = StubSource(active, archived)
    await fetch_and_filter(source, EntityKind.CUSTOMER, FilterSpec(archived=ArchivedFilter.TRUE))
    assert [c.id for c in source.active] == [1, 3]
    assert [c.id for c in source.archived] == [2]
