"""Per-kind list configuration: columns, sort options and supported filters.

Built once at import and treated as read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from mite.models.entities import Customer, Project, Service, TimeEntry, User
from mite.models.types import EntityKind

from .columns import ColumnRegistry
from .exceptions import ListValidationError
from .formatters import (
    format_bool,
    format_budget,
    format_cents,
    format_minutes,
    format_note,
    format_timestamp,
)
from .models import ColumnDefinition, SortSpec, WrapPolicy

FILTER_ARCHIVED = "archived"
FILTER_BILLABLE = "billable"
FILTER_CUSTOMER_ID = "customer_id"
FILTER_CUSTOMER = "customer"


@dataclass(frozen=True, slots=True)
class ListKind:
    command: str
    kind: EntityKind
    registry: ColumnRegistry
    sort_options: tuple[str, ...]
    default_sort: str
    default_columns: tuple[str, ...] = ()
    sort_aliases: Mapping[str, str] = field(default_factory=dict)
    filters: frozenset[str] = frozenset({FILTER_ARCHIVED})
    description: str = ""

    def __post_init__(self) -> None:
        attributes = self.registry.model.attributes()
        for option in self.sort_options:
            target = self.sort_aliases.get(option, option)
            if target not in attributes:
                raise ValueError(f"{self.command}: sort option {option!r} is not an attribute")
        if self.default_sort not in self.sort_options:
            raise ValueError(f"{self.command}: default sort {self.default_sort!r} not allowed")
        self.registry.resolve(self.default_columns)

    def supports(self, filter_name: str) -> bool:
        return filter_name in self.filters

    def resolve_sort(self, spec: SortSpec) -> SortSpec:
        """Validate the requested attribute and replace an alias by its target."""
        if spec.attribute not in self.sort_options:
            raise ListValidationError(
                f'Invalid value for sort option: "{spec.attribute}"',
                hint=f"Valid values are: {', '.join(self.sort_options)}.",
                details={"valid": list(self.sort_options)},
            )
        return SortSpec(
            attribute=self.sort_aliases.get(spec.attribute, spec.attribute),
            direction=spec.direction,
        )


_TIMESTAMP_COLUMNS = (
    ColumnDefinition(
        key="created_at", label="created at", attribute="created_at", formatter=format_timestamp
    ),
    ColumnDefinition(
        key="updated_at", label="updated at", attribute="updated_at", formatter=format_timestamp
    ),
)


def _id_column() -> ColumnDefinition:
    return ColumnDefinition(key="id", label="id", attribute="id", width=10, alignment="right")


def _rate_column() -> ColumnDefinition:
    return ColumnDefinition(
        key="rate",
        label="rate",
        attribute="hourly_rate",
        formatter=format_cents,
        width=10,
        alignment="right",
    )


def _note_column() -> ColumnDefinition:
    return ColumnDefinition(
        key="note",
        label="note",
        attribute="note",
        formatter=format_note,
        wrap=WrapPolicy.TRUNCATE,
    )


def _archived_column() -> ColumnDefinition:
    return ColumnDefinition(
        key="archived", label="archived", attribute="archived", formatter=format_bool
    )


CUSTOMERS = ListKind(
    command="customers",
    kind=EntityKind.CUSTOMER,
    description="List, filter & search for customers.",
    registry=ColumnRegistry(
        Customer,
        (
            _id_column(),
            ColumnDefinition(key="name", label="name", attribute="name", wrap=WrapPolicy.WRAP),
            _rate_column(),
            _note_column(),
            _archived_column(),
            *_TIMESTAMP_COLUMNS,
        ),
    ),
    default_columns=("id", "name", "rate", "note"),
    sort_options=("id", "name", "updated_at", "created_at", "hourly_rate", "rate"),
    sort_aliases=MappingProxyType({"rate": "hourly_rate"}),
    default_sort="name",
)

PROJECTS = ListKind(
    command="projects",
    kind=EntityKind.PROJECT,
    description="List, filter & search for projects.",
    registry=ColumnRegistry(
        Project,
        (
            _id_column(),
            ColumnDefinition(
                key="customer",
                label="customer",
                attribute="customer_name",
                wrap=WrapPolicy.WRAP,
            ),
            ColumnDefinition(
                key="customer_id",
                label="customer id",
                attribute="customer_id",
                width=10,
                alignment="right",
            ),
            ColumnDefinition(key="name", label="name", attribute="name", wrap=WrapPolicy.WRAP),
            ColumnDefinition(
                key="budget",
                label="budget",
                attribute="budget",
                formatter=format_budget,
                alignment="right",
            ),
            _rate_column(),
            _note_column(),
            _archived_column(),
            *_TIMESTAMP_COLUMNS,
        ),
    ),
    default_columns=("id", "customer", "name", "budget", "rate"),
    sort_options=(
        "id",
        "name",
        "customer",
        "customer_name",
        "customer_id",
        "updated_at",
        "created_at",
        "hourly_rate",
        "rate",
        "budget",
    ),
    sort_aliases=MappingProxyType({"rate": "hourly_rate", "customer": "customer_name"}),
    filters=frozenset({FILTER_ARCHIVED, FILTER_CUSTOMER_ID, FILTER_CUSTOMER}),
    default_sort="name",
)

SERVICES = ListKind(
    command="services",
    kind=EntityKind.SERVICE,
    description="List, filter & search for services.",
    registry=ColumnRegistry(
        Service,
        (
            ColumnDefinition(
                key="billable",
                label="billable",
                attribute="billable",
                formatter=format_bool,
                width=10,
                alignment="right",
            ),
            ColumnDefinition(
                key="created_at",
                label="created at",
                attribute="created_at",
                formatter=format_timestamp,
            ),
            _id_column(),
            ColumnDefinition(key="name", label="name", attribute="name"),
            _note_column(),
            _rate_column(),
            ColumnDefinition(
                key="updated_at",
                label="updated at",
                attribute="updated_at",
                formatter=format_timestamp,
            ),
            _archived_column(),
        ),
    ),
    default_columns=("id", "name", "billable", "rate", "note"),
    sort_options=("id", "name", "updated_at", "created_at", "hourly_rate", "rate"),
    sort_aliases=MappingProxyType({"rate": "hourly_rate"}),
    filters=frozenset({FILTER_ARCHIVED, FILTER_BILLABLE}),
    default_sort="name",
)

USERS = ListKind(
    command="users",
    kind=EntityKind.USER,
    description="List, filter & search for users.",
    registry=ColumnRegistry(
        User,
        (
            _id_column(),
            ColumnDefinition(key="name", label="name", attribute="name"),
            ColumnDefinition(key="email", label="email", attribute="email"),
            ColumnDefinition(key="role", label="role", attribute="role"),
            ColumnDefinition(key="language", label="language", attribute="language"),
            _note_column(),
            _archived_column(),
            *_TIMESTAMP_COLUMNS,
        ),
    ),
    default_columns=("id", "name", "email", "role"),
    sort_options=("id", "name", "email", "role", "updated_at", "created_at"),
    default_sort="name",
)

TIME_ENTRIES = ListKind(
    command="entries",
    kind=EntityKind.TIME_ENTRY,
    description="List & search for time entries.",
    registry=ColumnRegistry(
        TimeEntry,
        (
            _id_column(),
            ColumnDefinition(
                key="date", label="date", attribute="date_at", formatter=format_timestamp
            ),
            ColumnDefinition(
                key="duration",
                label="duration",
                attribute="minutes",
                formatter=format_minutes,
                alignment="right",
            ),
            ColumnDefinition(key="user", label="user", attribute="user_name"),
            ColumnDefinition(key="customer", label="customer", attribute="customer_name"),
            ColumnDefinition(key="project", label="project", attribute="project_name"),
            ColumnDefinition(key="service", label="service", attribute="service_name"),
            _note_column(),
            ColumnDefinition(
                key="billable", label="billable", attribute="billable", formatter=format_bool
            ),
            ColumnDefinition(
                key="locked", label="locked", attribute="locked", formatter=format_bool
            ),
            ColumnDefinition(
                key="revenue",
                label="revenue",
                attribute="revenue",
                formatter=format_cents,
                alignment="right",
            ),
            _rate_column(),
            *_TIMESTAMP_COLUMNS,
        ),
    ),
    default_columns=("id", "date", "duration", "customer", "project", "service", "note"),
    sort_options=(
        "id",
        "date_at",
        "date",
        "minutes",
        "duration",
        "user",
        "customer",
        "project",
        "service",
        "note",
        "revenue",
        "created_at",
        "updated_at",
    ),
    sort_aliases=MappingProxyType(
        {
            "date": "date_at",
            "duration": "minutes",
            "user": "user_name",
            "customer": "customer_name",
            "project": "project_name",
            "service": "service_name",
        }
    ),
    filters=frozenset({FILTER_BILLABLE}),
    default_sort="date_at",
)

LIST_KINDS: Mapping[str, ListKind] = MappingProxyType(
    {kind.command: kind for kind in (CUSTOMERS, PROJECTS, SERVICES, USERS, TIME_ENTRIES)}
)
