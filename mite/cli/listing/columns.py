"""Column registries and projection of entities onto display rows."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from mite.models.entities import MiteModel

from ..csv_utils import to_cell
from .exceptions import ListValidationError
from .models import ColumnDefinition, RenderedRow, RenderedTable


class ColumnRegistry:
    """Ordered, read-only column definitions for one entity model.

    Definitions are checked against the model's declared attributes when the
    registry is built, so a typo in a definition fails at import time rather
    than rendering empty cells.
    """

    def __init__(self, model: type[MiteModel], columns: Iterable[ColumnDefinition]):
        self._model = model
        self._columns: dict[str, ColumnDefinition] = {}
        attributes = model.attributes()
        labels: set[str] = set()
        for column in columns:
            if column.key in self._columns:
                raise ValueError(f"Duplicate column key {column.key!r} for {model.__name__}")
            if column.label in labels:
                raise ValueError(f"Duplicate column label {column.label!r} for {model.__name__}")
            if column.attribute not in attributes:
                raise ValueError(
                    f"Column {column.key!r} reads unknown attribute {column.attribute!r} "
                    f"of {model.__name__}"
                )
            self._columns[column.key] = column
            labels.add(column.label)

    @property
    def model(self) -> type[MiteModel]:
        return self._model

    def keys(self) -> tuple[str, ...]:
        return tuple(self._columns)

    def __iter__(self) -> Iterator[ColumnDefinition]:
        return iter(self._columns.values())

    def __contains__(self, key: object) -> bool:
        return key in self._columns

    def __len__(self) -> int:
        return len(self._columns)

    def resolve(self, selection: Sequence[str] | None) -> tuple[ColumnDefinition, ...]:
        """Map selected keys to definitions; an empty selection means all columns.

        Raises:
            ListValidationError: if any key is unknown (all unknown keys are reported)
                or selected twice.
        """
        if not selection:
            return tuple(self._columns.values())
        unknown = [key for key in selection if key not in self._columns]
        if unknown:
            names = ", ".join(f'"{key}"' for key in unknown)
            noun = "name" if len(unknown) == 1 else "names"
            raise ListValidationError(
                f"Invalid column {noun} {names}",
                hint=f"Valid columns: {', '.join(self._columns)}.",
                details={"unknown": unknown, "valid": list(self._columns)},
            )
        duplicates = sorted({key for key in selection if selection.count(key) > 1})
        if duplicates:
            names = ", ".join(f'"{key}"' for key in duplicates)
            raise ListValidationError(
                f"Column selected more than once: {names}",
                hint="List every column at most once.",
                details={"duplicates": duplicates},
            )
        return tuple(self._columns[key] for key in selection)


def parse_column_selection(value: str | None) -> tuple[str, ...] | None:
    """Split a comma-separated option value, dropping empty items."""
    if value is None:
        return None
    keys = tuple(part.strip() for part in value.split(",") if part.strip())
    return keys or None


def format_cell(column: ColumnDefinition, entity: MiteModel) -> str:
    value = entity.get(column.attribute)
    if column.formatter is not None:
        return column.formatter(value, entity)
    return to_cell(value)


def project(
    entities: Iterable[MiteModel],
    columns: Sequence[ColumnDefinition],
) -> RenderedTable:
    """Build header + body rows; archived entities are flagged for de-emphasis."""
    selected = tuple(columns)
    rows = tuple(
        RenderedRow(
            cells=tuple(format_cell(column, entity) for column in selected),
            archived=bool(entity.get("archived")),
        )
        for entity in entities
    )
    return RenderedTable(columns=selected, rows=rows)
