"""Exceptions raised by the auto-api client."""

from __future__ import annotations


class AutoApiError(Exception):
    """Base auto-api error."""


class AuthError(AutoApiError):
    """Raised when the API rejects the key (HTTP 401 or 403)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"auth error {status_code}: {message}")


class ApiError(AutoApiError):
    """Raised for any other non-2xx status or an unparseable 2xx body.

    The raw response body is kept in ``body`` for diagnostics.
    """

    def __init__(self, status_code: int, message: str, body: str) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"API error {status_code}: {message}")


class NetworkError(AutoApiError):
    """Raised when the request could not be completed at all."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"network error: {message}")
