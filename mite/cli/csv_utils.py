from __future__ import annotations

import csv
import json
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any, TextIO


def to_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, list):
        return "; ".join(to_cell(v) for v in value if v is not None)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


def write_rows(
    stream: TextIO,
    *,
    header: Sequence[str],
    rows: Iterable[Sequence[str]],
) -> int:
    """Write header + rows as RFC 4180 CSV; returns the number of body rows."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(header)
    rows_written = 0
    for row in rows:
        writer.writerow(row)
        rows_written += 1
    return rows_written
