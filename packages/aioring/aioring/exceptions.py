"""Exceptions for the aioring library."""

from __future__ import annotations


class RingError(Exception):
    """Base exception for all aioring errors."""


class RingInvalidArgumentError(RingError, ValueError):
    """A mandatory argument is missing or invalid (raised before any request)."""

    def __init__(
        self, argument: str, message: str, path: str | None = None
    ) -> None:

        super().__init__(message)
        self.argument = argument
        self.path = path


class RingNotAuthenticatedError(RingError):
    """Operation requires a session token; call async_authenticate first."""

    def __init__(self) -> None:

        super().__init__("Not authenticated — call async_authenticate first")


class RingConnectionError(RingError):
    """Network-level connection failure (DNS, TCP, TLS)."""


class RingRequestTimeout(RingError):
    """HTTP exchange did not complete within the timeout."""

    def __init__(self, endpoint: str, timeout: float) -> None:

        super().__init__(f"Request to {endpoint} timed out after {timeout}s")
        self.endpoint = endpoint
        self.timeout = timeout


class RingTransportError(RingError):
    """Ring API answered with a non-success HTTP status."""

    def __init__(self, status: int, message: str | None = None) -> None:

        super().__init__(message or f"Ring API returned HTTP {status}")
        self.status = status


class RingAuthError(RingTransportError):
    """Credentials or session token rejected by the Ring API (HTTP 401)."""


class RingDecodeError(RingError):
    """Response body missing, not JSON, or not matching the expected schema."""
