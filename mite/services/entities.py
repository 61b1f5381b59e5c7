"""
Entity service.

One service instance per entity kind. The mite API wraps each record in an
object keyed by the kind (`[{"customer": {...}}, ...]`); services unwrap and
validate the records into the matching model.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any

from ..models.entities import MODEL_FOR_KIND, MiteModel
from ..models.types import DEFAULT_LIMIT, EntityKind

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient


class AsyncEntityService:
    """Read-only access to the active and archived records of one kind."""

    def __init__(self, client: AsyncHTTPClient, kind: EntityKind):
        self._client = client
        self._kind = kind
        self._model = MODEL_FOR_KIND[kind]

    @property
    def kind(self) -> EntityKind:
        return self._kind

    async def list(
        self,
        *,
        name: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> builtins.list[MiteModel]:
        """
        Get active records.

        Args:
            name: Case-insensitive substring the record must contain (the note for
                time entries)
            limit: Maximum number of records

        Returns:
            Validated entity models in API order
        """
        data = await self._client.get(self._kind.path, params=self._params(name, limit))
        return self._parse(data)

    async def archived(
        self,
        *,
        name: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> builtins.list[MiteModel]:
        """
        Get archived records.

        Kinds without an archive (time entries) return an empty list without a
        request.
        """
        path = self._kind.archived_path
        if path is None:
            return []
        data = await self._client.get(path, params=self._params(name, limit))
        return self._parse(data)

    def _params(self, name: str | None, limit: int) -> dict[str, Any]:
        params: dict[str, Any] = {"limit": limit}
        if name:
            params[self._kind.search_param] = name
        return params

    def _parse(self, data: Any) -> builtins.list[MiteModel]:
        if not isinstance(data, builtins.list):
            return []
        items: builtins.list[MiteModel] = []
        for item in data:
            record = item.get(self._kind.value, item) if isinstance(item, dict) else item
            items.append(self._model.model_validate(record))
        return items
