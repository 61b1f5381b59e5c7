"""
mite data models.

All Pydantic models and type definitions are available from this module.
"""

from __future__ import annotations

from .entities import (
    MODEL_FOR_KIND,
    Customer,
    MiteModel,
    Myself,
    Project,
    Service,
    TimeEntry,
    User,
)
from .types import DEFAULT_BASE_URL_TEMPLATE, DEFAULT_LIMIT, BudgetType, EntityKind

__all__ = [
    "DEFAULT_BASE_URL_TEMPLATE",
    "DEFAULT_LIMIT",
    "MODEL_FOR_KIND",
    "BudgetType",
    "Customer",
    "EntityKind",
    "MiteModel",
    "Myself",
    "Project",
    "Service",
    "TimeEntry",
    "User",
]
