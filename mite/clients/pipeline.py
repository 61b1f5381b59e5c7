"""
Internal request pipeline primitives.

The client models requests/responses independently of the underlying HTTP transport
so cross-cutting behavior (auth headers, request logging, status mapping) can be
implemented as middleware.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias, TypedDict, cast

Header: TypeAlias = tuple[str, str]


class RequestContext(TypedDict, total=False):
    timeout_seconds: float


class ResponseContext(TypedDict, total=False):
    elapsed_seconds: float
    http_version: str


@dataclass(slots=True)
class MiteRequest:
    method: str
    url: str
    headers: list[Header] = field(default_factory=list)
    params: Sequence[tuple[str, str]] | None = None
    context: RequestContext = field(default_factory=lambda: cast(RequestContext, {}))


@dataclass(slots=True)
class MiteResponse:
    status_code: int
    headers: list[Header]
    content: bytes
    json: Any | None = None
    context: ResponseContext = field(default_factory=lambda: cast(ResponseContext, {}))


AsyncPipeline: TypeAlias = Callable[[MiteRequest], Awaitable[MiteResponse]]


class AsyncMiddleware(Protocol):
    async def __call__(self, req: MiteRequest, next: AsyncPipeline) -> MiteResponse: ...


def compose_async(middlewares: Sequence[AsyncMiddleware], terminal: AsyncPipeline) -> AsyncPipeline:
    pipeline = terminal
    for middleware in reversed(middlewares):
        next_pipeline = pipeline

        async def _wrapped(
            req: MiteRequest,
            *,
            _mw: AsyncMiddleware = middleware,
            _n: AsyncPipeline = next_pipeline,
        ) -> MiteResponse:
            return await _mw(req, _n)

        pipeline = _wrapped
    return pipeline
