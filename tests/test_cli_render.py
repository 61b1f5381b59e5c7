from __future__ import annotations

import csv
import io
import json

import pytest

pytest.importorskip("rich")

from mite.cli.listing.columns import project
from mite.cli.listing.exceptions import ListValidationError
from mite.cli.listing.kinds import CUSTOMERS
from mite.cli.listing.models import RenderedTable
from mite.cli.render import RenderSettings, parse_format, render_table, terminal_settings
from mite.models import Customer


def _table() -> RenderedTable:
    customers = [
        Customer(id=1, name="Bcorp", hourly_rate=0, note='Says "hi", twice'),
        Customer(id=2, name="Acorp, Inc.", archived=True, hourly_rate=5000, note="multi\nline"),
    ]
    return project(customers, CUSTOMERS.registry.resolve(["id", "name", "rate", "note"]))


def test_csv_and_json_agree() -> None:
    table = _table()
    csv_text = render_table(table, RenderSettings(format="csv"))
    json_text = render_table(table, RenderSettings(format="json"))

    reader = csv.reader(io.StringIO(csv_text))
    header, *rows = list(reader)
    records = json.loads(json_text)

    assert header == ["id", "name", "rate", "note"]
    assert [list(r.keys()) for r in records] == [header, header]
    assert [list(r.values()) for r in records] == rows


def test_csv_quotes_commas_and_quotes() -> None:
    csv_text = render_table(_table(), RenderSettings(format="csv"))
    assert '"Acorp, Inc."' in csv_text
    assert '"Says ""hi"", twice"' in csv_text


def test_json_uses_display_values() -> None:
    records = json.loads(render_table(_table(), RenderSettings(format="json")))
    assert records[0] == {"id": "1", "name": "Bcorp", "rate": "-", "note": 'Says "hi", twice'}
    assert records[1]["rate"] == "50.00"


def test_text_has_no_header_and_one_line_per_row() -> None:
    text = render_table(_table(), RenderSettings(format="text"))
    assert text.splitlines() == [
        '1\tBcorp\t-\tSays "hi", twice',
        "2\tAcorp, Inc.\t50.00\tmulti line",
    ]


def test_table_contains_header_and_values() -> None:
    output = render_table(_table(), RenderSettings(format="table", width=80))
    assert "id" in output
    assert "Bcorp" in output
    assert "50.00" in output
    assert all(len(line) <= 80 for line in output.splitlines())


def test_table_truncates_long_notes() -> None:
    long_note = "word " * 60
    table = project(
        [Customer(id=1, name="Acme", note=long_note)],
        CUSTOMERS.registry.resolve(["id", "note"]),
    )
    output = render_table(table, RenderSettings(format="table", width=80))
    assert "…" in output
    assert long_note.strip() not in output
    assert all(len(line) <= 80 for line in output.splitlines())


def test_csv_does_not_truncate() -> None:
    long_note = "word " * 60
    table = project(
        [Customer(id=1, name="Acme", note=long_note)],
        CUSTOMERS.registry.resolve(["note"]),
    )
    output = render_table(table, RenderSettings(format="csv", width=80))
    assert long_note.strip() in output


def test_parse_format_rejects_unknown() -> None:
    assert parse_format("JSON") == "json"
    with pytest.raises(ListValidationError) as excinfo:
        parse_format("xml")
    assert excinfo.value.exit_code == 2
    assert 'Invalid output format: "xml"' in excinfo.value.message


def test_terminal_settings_without_tty_uses_default_width() -> None:
    settings = terminal_settings("table", stream=io.StringIO())
    assert settings == RenderSettings(format="table", width=80, color=False)
    assert settings.truncate_width == 60
