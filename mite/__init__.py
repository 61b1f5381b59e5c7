"""
mite API client and command-line tool.
"""

from __future__ import annotations

from .client import AsyncMite
from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    MiteError,
    NetworkError,
    NotFoundError,
    ServerError,
    TimeoutError,
)
from .models import Customer, EntityKind, MiteModel, Myself, Project, Service, TimeEntry, User
from .types import EntitySource, RetrievalOptions
from .version import __version__

__all__ = [
    "ApiError",
    "AsyncMite",
    "AuthenticationError",
    "AuthorizationError",
    "Customer",
    "EntityKind",
    "EntitySource",
    "MiteError",
    "MiteModel",
    "Myself",
    "NetworkError",
    "NotFoundError",
    "Project",
    "RetrievalOptions",
    "ServerError",
    "Service",
    "TimeEntry",
    "TimeoutError",
    "User",
    "__version__",
]
