"""
Async HTTP client for the mite API.

Wraps `httpx.AsyncClient` behind the middleware pipeline from `pipeline.py`:
auth headers are added first, request logging is optional, and error statuses
are mapped onto `mite.exceptions` before a response reaches a service.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from ..exceptions import NetworkError, TimeoutError, error_for_status
from ..version import __version__
from .pipeline import AsyncPipeline, MiteRequest, MiteResponse, compose_async

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-MiteApiKey"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    api_key: str
    base_url: str
    timeout: float = 30.0
    log_requests: bool = False
    user_agent: str = f"mite-cli/{__version__}"
    async_transport: httpx.AsyncBaseTransport | None = None


class _HeaderMiddleware:
    def __init__(self, headers: Mapping[str, str]):
        self._headers = list(headers.items())

    async def __call__(self, req: MiteRequest, next: AsyncPipeline) -> MiteResponse:
        req.headers.extend(self._headers)
        return await next(req)


class _LoggingMiddleware:
    async def __call__(self, req: MiteRequest, next: AsyncPipeline) -> MiteResponse:
        logger.debug("-> %s %s params=%s", req.method, req.url, list(req.params or ()))
        res = await next(req)
        elapsed = res.context.get("elapsed_seconds")
        if elapsed is None:
            logger.debug("<- %s %s", res.status_code, req.url)
        else:
            logger.debug("<- %s %s (%.0f ms)", res.status_code, req.url, elapsed * 1000)
        return res


class _StatusMiddleware:
    async def __call__(self, req: MiteRequest, next: AsyncPipeline) -> MiteResponse:
        res = await next(req)
        if res.status_code < 400:
            return res
        message = _error_message(res) or f"HTTP {res.status_code} for {req.method} {req.url}"
        raise error_for_status(res.status_code, message, body=res.json)


def _error_message(res: MiteResponse) -> str | None:
    body = res.json
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error.strip():
            return error.strip()
    return None


class AsyncHTTPClient:
    """Thin async transport shared by all services of one `AsyncMite` client."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=config.async_transport,
        )
        middlewares: list[Any] = [
            _HeaderMiddleware(
                {
                    API_KEY_HEADER: config.api_key,
                    "User-Agent": config.user_agent,
                    "Accept": "application/json",
                }
            )
        ]
        if config.log_requests:
            middlewares.append(_LoggingMiddleware())
        middlewares.append(_StatusMiddleware())
        self._pipeline = compose_async(middlewares, self._send)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def _send(self, req: MiteRequest) -> MiteResponse:
        started = time.monotonic()
        try:
            response = await self._client.request(
                req.method,
                req.url,
                headers=req.headers,
                params=list(req.params) if req.params else None,
            )
        except httpx.TimeoutException as exc:
            raise TimeoutError(f"Request timed out: {req.method} {req.url}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Could not reach {self._config.base_url}: {exc}") from exc

        payload: Any | None = None
        if response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = None
        return MiteResponse(
            status_code=response.status_code,
            headers=list(response.headers.items()),
            content=response.content,
            json=payload,
            context={
                "elapsed_seconds": time.monotonic() - started,
                "http_version": response.http_version,
            },
        )

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        query = [(k, str(v)) for k, v in (params or {}).items() if v is not None]
        res = await self._pipeline(MiteRequest(method="GET", url=path, params=query or None))
        return res.json

    async def close(self) -> None:
        await self._client.aclose()
