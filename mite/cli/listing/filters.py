"""Merge and filter active + archived records of one entity kind."""

from __future__ import annotations

import asyncio
import logging
import re

from mite.models.entities import MiteModel
from mite.models.types import EntityKind
from mite.types import EntitySource, RetrievalOptions

from .exceptions import ListValidationError
from .models import FilterSpec

logger = logging.getLogger(__name__)


async def fetch_and_filter(
    source: EntitySource,
    kind: EntityKind,
    filter_spec: FilterSpec,
    options: RetrievalOptions | None = None,
) -> list[MiteModel]:
    """Retrieve active and archived records concurrently, merge, then filter.

    The merged order is always active records first, then archived ones, no matter
    which retrieval finishes first. Source errors propagate unchanged.
    """
    if options is None:
        options = RetrievalOptions(name=filter_spec.search or None)
    customer_pattern = compile_customer_pattern(filter_spec.customer)

    active, archived = await asyncio.gather(
        source.get_active(kind, options),
        source.get_archived(kind, options),
    )
    candidates = [*active, *archived]
    logger.debug(
        "fetched %d active and %d archived %s", len(active), len(archived), kind.plural
    )
    return [
        entity
        for entity in candidates
        if _matches(entity, filter_spec, customer_pattern=customer_pattern)
    ]


def compile_customer_pattern(value: str | None) -> re.Pattern[str] | None:
    if value is None:
        return None
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error as exc:
        raise ListValidationError(
            f"Invalid customer pattern: {value!r} ({exc})",
            hint="Pass a regular expression, e.g. --customer '^acme'.",
        ) from exc


def _matches(
    entity: MiteModel,
    filter_spec: FilterSpec,
    *,
    customer_pattern: re.Pattern[str] | None,
) -> bool:
    if not filter_spec.archived.matches(bool(entity.get("archived"))):
        return False
    billable = filter_spec.billable
    if billable is not None and bool(entity.get("billable")) is not billable:
        return False
    customer_id = filter_spec.customer_id
    if customer_id is not None and entity.get("customer_id") != customer_id:
        return False
    if customer_pattern is not None:
        customer_name = entity.get("customer_name")
        if not isinstance(customer_name, str) or not customer_pattern.search(customer_name):
            return False
    return True
