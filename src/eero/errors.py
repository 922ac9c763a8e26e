"""Exception hierarchy shared by the eero client, resolver and CLI."""

from __future__ import annotations


class EeroError(RuntimeError):
    """Base class for every failure raised by this package."""


class TransportError(EeroError):
    """Raised when the HTTP call itself fails (connection, DNS, timeout)."""


class RemoteError(EeroError):
    """Raised when the eero API answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DecodeError(EeroError):
    """Raised when a successful response does not match the expected payload."""


class NotFoundError(EeroError):
    """Raised when a query does not resolve to any resource."""

    def __init__(self, kind: str, query: str) -> None:
        super().__init__(f"{kind} not found: {query}")
        self.kind = kind
        self.query = query


class ValidationError(EeroError):
    """Raised for malformed local input before any request is sent."""


class MembershipError(EeroError):
    """Raised when a profile membership change would be a no-op."""


__all__ = [
    "EeroError",
    "TransportError",
    "RemoteError",
    "DecodeError",
    "NotFoundError",
    "ValidationError",
    "MembershipError",
]
