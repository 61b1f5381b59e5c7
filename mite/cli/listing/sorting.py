"""Case-insensitive, stable, attribute-based ordering.

Values are compared as lowercased strings, so numeric attributes sort
lexicographically ("10" < "9"). Existing scripts depend on this order; it is
kept as is.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from mite.models.entities import MiteModel

from .models import SortDirection

# absent attributes still compare, as this placeholder
MISSING_SORT_VALUE = "undefined"


def resolve_alias(attribute: str, aliases: Mapping[str, str] | None = None) -> str:
    if not aliases:
        return attribute
    return aliases.get(attribute, attribute)


def sort_key(entity: MiteModel, attribute: str) -> str:
    value = entity.get(attribute)
    if value is None:
        return MISSING_SORT_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).lower()


def sort_entities(
    entities: Iterable[MiteModel],
    attribute: str,
    *,
    aliases: Mapping[str, str] | None = None,
    direction: SortDirection = SortDirection.ASC,
) -> list[MiteModel]:
    """Return a new list ordered by `attribute` (or its alias target).

    Ties keep their input order in both directions.
    """
    canonical = resolve_alias(attribute, aliases)
    return sorted(
        entities,
        key=lambda entity: sort_key(entity, canonical),
        reverse=direction is SortDirection.DESC,
    )
