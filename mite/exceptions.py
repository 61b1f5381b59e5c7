"""
Exceptions raised by the mite API client.

Every error raised by the client derives from `MiteError`. HTTP status codes are
mapped onto the subclasses below by the request pipeline.
"""

from __future__ import annotations

from typing import Any


class MiteError(Exception):
    """Base class for all client errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code}] {self.message}"


class AuthenticationError(MiteError):
    """The API key is missing or invalid (401)."""


class AuthorizationError(MiteError):
    """The API key is valid but lacks permission for the resource (403)."""


class NotFoundError(MiteError):
    """The requested resource or account does not exist (404)."""


class ApiError(MiteError):
    """Any other client-side error response (4xx)."""


class ServerError(MiteError):
    """The API failed to process the request (5xx)."""


class NetworkError(MiteError):
    """The request never produced a response (DNS, connection, TLS)."""


class TimeoutError(NetworkError):
    """The request did not complete within the configured timeout."""


def error_for_status(status_code: int, message: str, *, body: Any | None = None) -> MiteError:
    if status_code == 401:
        return AuthenticationError(message, status_code=status_code, response_body=body)
    if status_code == 403:
        return AuthorizationError(message, status_code=status_code, response_body=body)
    if status_code == 404:
        return NotFoundError(message, status_code=status_code, response_body=body)
    if status_code >= 500:
        return ServerError(message, status_code=status_code, response_body=body)
    return ApiError(message, status_code=status_code, response_body=body)
