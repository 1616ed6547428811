"""Error types raised by SimpleElastic.

Every failure detected by a request is raised synchronously from the call
that detected it. Running out of results while iterating is not an error.
"""

from __future__ import annotations


class SimpleElasticError(Exception):
    """Base class for all SimpleElastic errors."""


class TransportError(SimpleElasticError):
    """The HTTP round trip itself failed (DNS, connection, timeout, IO)."""


class ResponseParseError(SimpleElasticError):
    """The backend answered with a body that is not the expected JSON."""


class BackendError(SimpleElasticError):
    """The backend answered with an error reason.

    Attributes:
        reason: Literal reason string reported by the backend.
        status_code: HTTP status of the response, when known.
    """

    def __init__(self, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class UsageError(SimpleElasticError, ValueError):
    """The caller asked for something that cannot be sent to the backend."""
