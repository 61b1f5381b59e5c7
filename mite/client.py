"""
Main mite API client.

Provides read access to the listable resources of a mite account.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from .clients.http import AsyncHTTPClient, ClientConfig
from .models.entities import MiteModel, Myself
from .models.types import DEFAULT_BASE_URL_TEMPLATE, EntityKind
from .services.entities import AsyncEntityService
from .types import RetrievalOptions


def base_url_for_account(account: str) -> str:
    return DEFAULT_BASE_URL_TEMPLATE.format(account=account.strip())


class AsyncMite:
    """
    Asynchronous mite API client.

    Implements the `EntitySource` capability used by the CLI list pipeline.

    Example:
        ```python
        from mite import AsyncMite

        async with AsyncMite(account="acme", api_key="your-api-key") as client:
            for customer in await client.customers.list(name="corp"):
                print(customer.name)

            archived = await client.services.archived()
        ```

    Attributes:
        customers: Customer operations
        projects: Project operations
        services: Service operations
        users: User operations
        time_entries: Time entry operations
    """

    def __init__(
        self,
        api_key: str,
        *,
        account: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        log_requests: bool = False,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the mite client.

        Args:
            api_key: Your personal mite API key
            account: Account subdomain, used to build the base URL
            base_url: Explicit base URL (overrides `account`)
            timeout: Request timeout in seconds
            log_requests: Log all HTTP requests (for debugging)
            async_transport: Custom httpx transport (tests, proxies)
        """
        if base_url is None:
            if not account:
                raise ValueError("Either 'account' or 'base_url' is required")
            base_url = base_url_for_account(account)
        config = ClientConfig(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            log_requests=log_requests,
            async_transport=async_transport,
        )
        self._http = AsyncHTTPClient(config)
        self._services: dict[EntityKind, AsyncEntityService] = {}

    async def __aenter__(self) -> AsyncMite:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._http.close()

    # =========================================================================
    # Service Properties (lazy initialization)
    # =========================================================================

    def service_for(self, kind: EntityKind) -> AsyncEntityService:
        if kind not in self._services:
            self._services[kind] = AsyncEntityService(self._http, kind)
        return self._services[kind]

    @property
    def customers(self) -> AsyncEntityService:
        """Customer operations."""
        return self.service_for(EntityKind.CUSTOMER)

    @property
    def projects(self) -> AsyncEntityService:
        """Project operations."""
        return self.service_for(EntityKind.PROJECT)

    @property
    def services(self) -> AsyncEntityService:
        """Service operations."""
        return self.service_for(EntityKind.SERVICE)

    @property
    def users(self) -> AsyncEntityService:
        """User operations."""
        return self.service_for(EntityKind.USER)

    @property
    def time_entries(self) -> AsyncEntityService:
        """Time entry operations."""
        return self.service_for(EntityKind.TIME_ENTRY)

    # =========================================================================
    # EntitySource
    # =========================================================================

    async def get_active(self, kind: EntityKind, options: RetrievalOptions) -> Sequence[MiteModel]:
        return await self.service_for(kind).list(name=options.name, limit=options.limit)

    async def get_archived(
        self, kind: EntityKind, options: RetrievalOptions
    ) -> Sequence[MiteModel]:
        return await self.service_for(kind).archived(name=options.name, limit=options.limit)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    async def whoami(self) -> Myself:
        """Return the user the API key belongs to."""
        data = await self._http.get("/myself.json")
        record = data.get("user", data) if isinstance(data, dict) else {}
        return Myself.model_validate(record)
