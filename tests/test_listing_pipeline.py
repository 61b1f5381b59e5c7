from __future__ import annotations

import json

import pytest

pytest.importorskip("rich")

from mite.cli.listing.exceptions import ListValidationError
from mite.cli.listing.kinds import CUSTOMERS, TIME_ENTRIES
from mite.cli.listing.models import ArchivedFilter, FilterSpec, SortSpec
from mite.cli.listing.pipeline import ListRequest, prepare_list, run_list_pipeline
from mite.cli.render import RenderSettings
from mite.models import Customer, EntityKind, MiteModel
from mite.types import RetrievalOptions


class SpySource:
    def __init__(self, active: list[MiteModel], archived: list[MiteModel]) -> None:
        self.active = active
        self.archived = archived
        self.calls: list[str] = []

    async def get_active(self, kind: EntityKind, options: RetrievalOptions) -> list[MiteModel]:
        self.calls.append("active")
        return self.active

    async def get_archived(self, kind: EntityKind, options: RetrievalOptions) -> list[MiteModel]:
        self.calls.append("archived")
        return self.archived


def _source() -> SpySource:
    return SpySource(
        [Customer(id=1, name="Bcorp", archived=False, hourly_rate=0)],
        [Customer(id=2, name="Acorp", archived=True, hourly_rate=5000)],
    )


def _request(**overrides: object) -> ListRequest:
    values: dict[str, object] = {
        "filter": FilterSpec(),
        "sort": SortSpec("name"),
        "settings": RenderSettings(format="json"),
        "columns": ("id", "name", "rate"),
    }
    values.update(overrides)
    return ListRequest(**values)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_all_sorted_by_name() -> None:
    output = await run_list_pipeline(_source(), CUSTOMERS, _request())
    assert json.loads(output) == [
        {"id": "2", "name": "Acorp", "rate": "50.00"},
        {"id": "1", "name": "Bcorp", "rate": "-"},
    ]


@pytest.mark.asyncio
async def test_only_active() -> None:
    request = _request(filter=FilterSpec(archived=ArchivedFilter.FALSE))
    output = await run_list_pipeline(_source(), CUSTOMERS, request)
    assert [r["id"] for r in json.loads(output)] == ["1"]


@pytest.mark.asyncio
async def test_unknown_column_fails_without_retrieval() -> None:
    source = _source()
    with pytest.raises(ListValidationError):
        await run_list_pipeline(source, CUSTOMERS, _request(columns=("id", "bogus")))
    assert source.calls == []


@pytest.mark.asyncio
async def test_unknown_sort_fails_without_retrieval() -> None:
    source = _source()
    with pytest.raises(ListValidationError) as excinfo:
        await run_list_pipeline(source, CUSTOMERS, _request(sort=SortSpec("colour")))
    assert excinfo.value.message == 'Invalid value for sort option: "colour"'
    assert source.calls == []


def test_unsupported_filter_is_rejected() -> None:
    request = _request(filter=FilterSpec(archived=ArchivedFilter.TRUE), columns=("id", "note"))
    with pytest.raises(ListValidationError, match="cannot be filtered by: archived"):
        prepare_list(TIME_ENTRIES, request)


def test_plan_uses_default_columns_and_canonical_sort() -> None:
    plan = prepare_list(CUSTOMERS, _request(columns=None, sort=SortSpec("rate")))
    assert tuple(c.key for c in plan.columns) == CUSTOMERS.default_columns
    assert plan.sort.attribute == "hourly_rate"
    assert plan.retrieval == RetrievalOptions()


def test_plan_passes_search_to_retrieval() -> None:
    plan = prepare_list(CUSTOMERS, _request(filter=FilterSpec(search="corp")))
    assert plan.retrieval == RetrievalOptions(name="corp")
