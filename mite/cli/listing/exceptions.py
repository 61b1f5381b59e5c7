from __future__ import annotations

from typing import Any

from ..errors import CLIError


class ListValidationError(CLIError):
    """Invalid list input (column, sort or format), raised before any retrieval."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            exit_code=2,
            error_type="usage_error",
            hint=hint,
            details=details,
        )
