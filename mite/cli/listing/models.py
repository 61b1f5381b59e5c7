"""Value types of the list pipeline."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from mite.models.entities import MiteModel

TRUTHY_VALUES = frozenset({"true", "yes", "ja", "ok", "1"})

Formatter = Callable[[Any, MiteModel], str]
Alignment = Literal["left", "center", "right"]


def parse_bool(value: str) -> bool:
    """Loose boolean parsing used by every true/false option."""
    return value.strip().lower() in TRUTHY_VALUES


class ArchivedFilter(str, Enum):
    TRUE = "true"
    FALSE = "false"
    ALL = "all"

    @classmethod
    def parse(cls, value: str) -> ArchivedFilter:
        if value.strip().lower() == "all":
            return cls.ALL
        return cls.TRUE if parse_bool(value) else cls.FALSE

    def matches(self, archived: bool) -> bool:
        if self is ArchivedFilter.ALL:
            return True
        return archived is (self is ArchivedFilter.TRUE)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class WrapPolicy(str, Enum):
    NONE = "none"
    WRAP = "wrap"
    TRUNCATE = "truncate"


@dataclass(frozen=True, slots=True)
class FilterSpec:
    archived: ArchivedFilter = ArchivedFilter.ALL
    billable: bool | None = None
    search: str | None = None
    customer_id: int | None = None
    customer: str | None = None


@dataclass(frozen=True, slots=True)
class SortSpec:
    attribute: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, value: str) -> SortSpec:
        """`name` sorts ascending, `-name` descending."""
        raw = value.strip()
        if raw.startswith("-"):
            return cls(attribute=raw[1:], direction=SortDirection.DESC)
        return cls(attribute=raw)


@dataclass(frozen=True, slots=True)
class ColumnDefinition:
    key: str
    label: str
    attribute: str
    formatter: Formatter | None = None
    width: int | None = None
    alignment: Alignment = "left"
    wrap: WrapPolicy = WrapPolicy.NONE


@dataclass(frozen=True, slots=True)
class RenderedRow:
    cells: tuple[str, ...]
    # presentation only: the table renderer dims archived rows
    archived: bool = False


@dataclass(frozen=True, slots=True)
class RenderedTable:
    columns: tuple[ColumnDefinition, ...]
    rows: tuple[RenderedRow, ...]

    @property
    def header(self) -> tuple[str, ...]:
        return tuple(column.label for column in self.columns)

    def records(self) -> list[dict[str, str]]:
        """Rows as label -> display value mappings, in column order."""
        header = self.header
        return [dict(zip(header, row.cells, strict=True)) for row in self.rows]
