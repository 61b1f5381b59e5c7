from __future__ import annotations

from datetime import date, datetime

import pytest

from mite.cli.listing.columns import ColumnRegistry, parse_column_selection, project
from mite.cli.listing.exceptions import ListValidationError
from mite.cli.listing.formatters import (
    format_budget,
    format_cents,
    format_minutes,
    format_note,
    format_timestamp,
    truncate_text,
)
from mite.cli.listing.kinds import CUSTOMERS, LIST_KINDS, PROJECTS, SERVICES
from mite.cli.listing.models import ColumnDefinition
from mite.models import Customer, Project


def _scenario_customers() -> list[Customer]:
    return [
        Customer(id=1, name="Bcorp", archived=False, hourly_rate=0),
        Customer(id=2, name="Acorp", archived=True, hourly_rate=5000),
    ]


def test_rate_column_converts_cents() -> None:
    columns = CUSTOMERS.registry.resolve(["id", "rate"])
    table = project(_scenario_customers(), columns)
    assert table.header == ("id", "rate")
    assert [row.cells for row in table.rows] == [("1", "-"), ("2", "50.00")]
    assert [row.archived for row in table.rows] == [False, True]


def test_empty_selection_means_all_columns_in_registry_order() -> None:
    columns = SERVICES.registry.resolve(None)
    assert tuple(c.key for c in columns) == SERVICES.registry.keys()
    assert columns[0].key == "billable"


def test_unknown_columns_are_all_reported() -> None:
    with pytest.raises(ListValidationError) as excinfo:
        CUSTOMERS.registry.resolve(["id", "colour", "size"])
    assert excinfo.value.exit_code == 2
    assert '"colour"' in excinfo.value.message
    assert '"size"' in excinfo.value.message
    assert excinfo.value.details is not None
    assert excinfo.value.details["unknown"] == ["colour", "size"]


def test_repeated_columns_are_rejected() -> None:
    with pytest.raises(ListValidationError) as excinfo:
        CUSTOMERS.registry.resolve(["id", "name", "id"])
    assert excinfo.value.exit_code == 2
    assert excinfo.value.message == 'Column selected more than once: "id"'
    assert excinfo.value.details is not None
    assert excinfo.value.details["duplicates"] == ["id"]


def test_projection_is_pure() -> None:
    columns = CUSTOMERS.registry.resolve(["id", "name", "rate"])
    entities = _scenario_customers()
    assert project(entities, columns) == project(entities, columns)


def test_rows_match_header_length() -> None:
    columns = PROJECTS.registry.resolve(None)
    projects = [
        Project(id=1, name="Web", customer_name="ACME", budget=600, budget_type="minutes"),
        Project(id=2, name="App"),
    ]
    table = project(projects, columns)
    assert all(len(row.cells) == len(table.header) for row in table.rows)


def test_several_columns_may_share_an_attribute() -> None:
    registry = ColumnRegistry(
        Customer,
        (
            ColumnDefinition(
                key="rate", label="rate", attribute="hourly_rate", formatter=format_cents
            ),
            ColumnDefinition(key="rate_raw", label="rate (cents)", attribute="hourly_rate"),
        ),
    )
    table = project([Customer(id=1, hourly_rate=1250)], registry.resolve(None))
    assert table.rows[0].cells == ("12.50", "1250")


def test_registry_rejects_unknown_attribute() -> None:
    with pytest.raises(ValueError, match="unknown attribute"):
        ColumnRegistry(Customer, (ColumnDefinition(key="x", label="x", attribute="nope"),))


def test_registry_rejects_duplicate_keys() -> None:
    with pytest.raises(ValueError, match="Duplicate column key"):
        ColumnRegistry(
            Customer,
            (
                ColumnDefinition(key="id", label="id", attribute="id"),
                ColumnDefinition(key="id", label="other", attribute="id"),
            ),
        )


def test_every_kind_has_valid_defaults() -> None:
    for kind in LIST_KINDS.values():
        assert kind.registry.resolve(kind.default_columns)
        assert kind.default_sort in kind.sort_options


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, None), ("", None), ("id, name,,rate ", ("id", "name", "rate"))],
)
def test_parse_column_selection(value: str | None, expected: tuple[str, ...] | None) -> None:
    assert parse_column_selection(value) == expected


def test_formatters() -> None:
    assert format_cents(None) == "-"
    assert format_cents(199) == "1.99"
    assert format_minutes(0) == "0:00"
    assert format_minutes(135) == "2:15"
    assert format_note("first line\n  second\tline") == "first line second line"
    assert format_timestamp(datetime(2024, 3, 1, 9, 5)) == "2024-03-01 09:05"
    assert format_timestamp(date(2024, 3, 1)) == "2024-03-01"
    assert format_timestamp(None) == ""


def test_budget_depends_on_budget_type() -> None:
    hours = Project(id=1, budget=600, budget_type="minutes")
    monthly_money = Project(id=2, budget=150000, budget_type="cents_per_month")
    assert format_budget(hours.budget, hours) == "10:00 h"
    assert format_budget(monthly_money.budget, monthly_money) == "1500.00 /month"
    assert format_budget(0, hours) == "-"


def test_truncate_text() -> None:
    assert truncate_text("short", max_len=10) == "short"
    assert truncate_text("a" * 20, max_len=10) == "a" * 9 + "…"
