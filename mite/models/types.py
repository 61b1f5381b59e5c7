"""
Shared enums and constants for the mite API models.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_BASE_URL_TEMPLATE = "https://{account}.mite.de"
DEFAULT_LIMIT = 1000


class EntityKind(str, Enum):
    """A listable resource of the mite API."""

    CUSTOMER = "customer"
    PROJECT = "project"
    SERVICE = "service"
    USER = "user"
    TIME_ENTRY = "time_entry"

    @property
    def plural(self) -> str:
        if self is EntityKind.TIME_ENTRY:
            return "time_entries"
        return f"{self.value}s"

    @property
    def has_archive(self) -> bool:
        """Time entries cannot be archived; every other kind has an archive endpoint."""
        return self is not EntityKind.TIME_ENTRY

    @property
    def path(self) -> str:
        return f"/{self.plural}.json"

    @property
    def archived_path(self) -> str | None:
        if not self.has_archive:
            return None
        return f"/{self.plural}/archived.json"

    @property
    def search_param(self) -> str:
        # time entries are searched by their note, everything else by name
        return "note" if self is EntityKind.TIME_ENTRY else "name"


class BudgetType(str, Enum):
    MINUTES = "minutes"
    MINUTES_PER_MONTH = "minutes_per_month"
    CENTS = "cents"
    CENTS_PER_MONTH = "cents_per_month"

    @property
    def is_monthly(self) -> bool:
        return self.value.endswith("_per_month")

    @property
    def is_money(self) -> bool:
        return self.value.startswith("cents")
