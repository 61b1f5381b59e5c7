"""
Public typing helpers.

`EntitySource` is the capability the list pipeline and the completion providers
consume. `AsyncMite` implements it; tests substitute in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .models.entities import MiteModel
from .models.types import DEFAULT_LIMIT, EntityKind


@dataclass(frozen=True, slots=True)
class RetrievalOptions:
    """Source-side retrieval bounds.

    `name` is a case-insensitive substring filter applied by the API.
    """

    limit: int = DEFAULT_LIMIT
    name: str | None = None


class EntitySource(Protocol):
    async def get_active(
        self, kind: EntityKind, options: RetrievalOptions
    ) -> Sequence[MiteModel]: ...

    async def get_archived(
        self, kind: EntityKind, options: RetrievalOptions
    ) -> Sequence[MiteModel]: ...
