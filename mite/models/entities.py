"""
Entity models returned by the mite API.

Entities are immutable snapshots. Fields the API adds later are kept as extras so
they remain accessible through `MiteModel.get`.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from .types import EntityKind


class MiteModel(BaseModel):
    """Base class for all mite entities."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    kind: ClassVar[EntityKind]

    id: int
    name: str = ""
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def attributes(cls) -> frozenset[str]:
        """The closed set of attribute names declared for this entity kind."""
        return frozenset(cls.model_fields)

    def get(self, attribute: str) -> Any:
        """Mapping-style accessor; absent attributes read as None."""
        if attribute in type(self).model_fields:
            return getattr(self, attribute)
        extra = self.__pydantic_extra__ or {}
        return extra.get(attribute)


class Customer(MiteModel):
    kind: ClassVar[EntityKind] = EntityKind.CUSTOMER

    note: str | None = None
    hourly_rate: int | None = None
    active_hourly_rate: str | None = None


class Project(MiteModel):
    kind: ClassVar[EntityKind] = EntityKind.PROJECT

    note: str | None = None
    customer_id: int | None = None
    customer_name: str | None = None
    budget: int | None = None
    budget_type: str | None = None
    hourly_rate: int | None = None
    active_hourly_rate: str | None = None


class Service(MiteModel):
    kind: ClassVar[EntityKind] = EntityKind.SERVICE

    note: str | None = None
    billable: bool = True
    hourly_rate: int | None = None


class User(MiteModel):
    kind: ClassVar[EntityKind] = EntityKind.USER

    email: str | None = None
    note: str | None = None
    role: str | None = None
    language: str | None = None


class TimeEntry(MiteModel):
    kind: ClassVar[EntityKind] = EntityKind.TIME_ENTRY

    date_at: date | None = None
    minutes: int = 0
    note: str | None = None
    billable: bool = True
    locked: bool = False
    revenue: float | None = None
    hourly_rate: int | None = None
    user_id: int | None = None
    user_name: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    customer_id: int | None = None
    customer_name: str | None = None
    service_id: int | None = None
    service_name: str | None = None


class Myself(BaseModel):
    """The user the API key belongs to."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    email: str | None = None
    role: str | None = None
    language: str | None = None


MODEL_FOR_KIND: dict[EntityKind, type[MiteModel]] = {
    EntityKind.CUSTOMER: Customer,
    EntityKind.PROJECT: Project,
    EntityKind.SERVICE: Service,
    EntityKind.USER: User,
    EntityKind.TIME_ENTRY: TimeEntry,
}
