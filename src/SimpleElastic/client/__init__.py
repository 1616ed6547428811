"""HTTP client layer for SimpleElastic.

Provides the connection entry point, requests, paginated results and the
retry wrapper.
"""

from __future__ import annotations

from SimpleElastic.client.connection import Connection, open_connection
from SimpleElastic.client.request import Request
from SimpleElastic.client.result import IterState, Result
from SimpleElastic.client.retry import do_with_retry

__all__ = [
    "Connection",
    "IterState",
    "Request",
    "Result",
    "do_with_retry",
    "open_connection",
]
