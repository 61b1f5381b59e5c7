"""Per-column value formatters.

Every formatter has the signature `(value, entity) -> str` and must be pure.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from mite.models.entities import MiteModel
from mite.models.types import BudgetType

from ..csv_utils import to_cell

PLACEHOLDER = "-"
ELLIPSIS = "…"


def format_cents(value: Any, _entity: MiteModel | None = None) -> str:
    """Integer subunits to a two-decimal amount; falsy amounts render as `-`."""
    if not value:
        return PLACEHOLDER
    return f"{Decimal(int(value)) / 100:.2f}"


def format_bool(value: Any, _entity: MiteModel | None = None) -> str:
    return "yes" if value else "no"


def format_minutes(value: Any, _entity: MiteModel | None = None) -> str:
    """Minutes as `h:mm`."""
    if value is None:
        return ""
    total = int(value)
    sign = "-" if total < 0 else ""
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours}:{minutes:02d}"


def format_budget(value: Any, entity: MiteModel | None = None) -> str:
    """Project budget, in hours or money depending on the entity's `budget_type`."""
    if not value:
        return PLACEHOLDER
    raw_type = entity.get("budget_type") if entity is not None else None
    try:
        budget_type = BudgetType(raw_type) if raw_type else BudgetType.MINUTES
    except ValueError:
        return to_cell(value)
    text = format_cents(value) if budget_type.is_money else f"{format_minutes(value)} h"
    if budget_type.is_monthly:
        text += " /month"
    return text


def format_note(value: Any, _entity: MiteModel | None = None) -> str:
    """Free text on a single line."""
    if value is None:
        return ""
    return " ".join(str(value).split())


def format_timestamp(value: Any, _entity: MiteModel | None = None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return to_cell(value)


def truncate_text(text: str, *, max_len: int) -> str:
    text = " ".join(text.split())
    if len(text) <= max_len:
        return text
    if max_len <= 1:
        return ELLIPSIS[:max_len]
    return text[: max_len - 1].rstrip() + ELLIPSIS
