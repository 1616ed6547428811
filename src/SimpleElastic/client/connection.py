"""Search backend connection.

Holds the backend base URL, the HTTP session and the optional diagnostic
sinks, and creates `Request` objects for searches and index administration.
"""

from __future__ import annotations

from typing import TextIO

import requests

from SimpleElastic.client.request import Request
from SimpleElastic.client.result import Result
from SimpleElastic.core.errors import UsageError
from SimpleElastic.core.models import Action, Method
from SimpleElastic.utils.log import DiagnosticSinks, log

DEFAULT_TIMEOUT = 30.0

HEADERS = {
    "User-Agent": "simpleelastic/0.1",
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class Connection:
    """Entry point for building and sending requests to one backend.

    The host and sinks are read-only once requests are in flight; separate
    threads may share a connection only if the sinks tolerate concurrent
    writes.
    """

    def __init__(
        self,
        host: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        out_log: TextIO | None = None,
        in_log: TextIO | None = None,
        err_log: TextIO | None = None,
    ) -> None:
        """Initialize the connection.

        Args:
            host: Backend base URL, e.g. "http://localhost:9200".
            timeout: Per-request timeout in seconds.
            session: HTTP session to reuse; a new one is created otherwise.
            out_log: Sink for request lines, bodies and timings.
            in_log: Sink for response bodies.
            err_log: Sink for error text.
        """
        if not host or not host.strip():
            raise UsageError("host must not be empty")
        self.host = host.strip().rstrip("/")
        self.timeout = timeout
        self.sinks = DiagnosticSinks(outbound=out_log, inbound=in_log, errors=err_log)
        self._session = session or requests.Session()

    def __repr__(self) -> str:
        return f"Connection({self.host!r})"

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections."""
        self._session.close()

    def __enter__(self) -> Connection:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def set_out_log(self, sink: TextIO | None) -> None:
        self.sinks.outbound = sink

    def set_in_log(self, sink: TextIO | None) -> None:
        self.sinks.inbound = sink

    def set_err_log(self, sink: TextIO | None) -> None:
        self.sinks.errors = sink

    def search(self) -> Request:
        """Start a search request over all indices."""
        return Request(self, method=Method.GET, action=Action.SEARCH)

    def continuation(
        self,
        scroll_id: str,
        *,
        ttl: str | None,
        method: Method,
        limit: int,
    ) -> Request:
        """Build the request fetching the next page of a scroll.

        Args:
            scroll_id: Cursor token returned with the previous page.
            ttl: Scroll TTL of the first search.
            method: HTTP verb of the first search.
            limit: Result cap of the first search.

        Returns:
            Request targeting the scroll endpoint.
        """
        request = Request(self, method=method, action=Action.SCROLL)
        request.limit(limit)
        if ttl:
            request.root.insert("scroll", ttl)
        request.root.insert("scroll_id", scroll_id)
        return request

    def index_open(self, *names: str) -> Result:
        return self._index_action(Method.POST, Action.INDEX_OPEN, names)

    def index_close(self, *names: str) -> Result:
        return self._index_action(Method.POST, Action.INDEX_CLOSE, names)

    def index_check(self, *names: str) -> Result:
        """Report how many of `names` exist (total) and are open (length)."""
        return self._index_action(Method.GET, Action.INDEX_CHECK, names)

    def _index_action(self, method: Method, action: Action, names: tuple[str, ...]) -> Result:
        cleaned = tuple(name.strip() for name in names if name and name.strip())
        if not cleaned:
            raise UsageError(f"{action.value} needs at least one index name")
        log.debug("Index action %s on %s", action.value, ",".join(cleaned))
        return Request(self, method=method, action=action, indices=cleaned).do()

    def send(self, method: str, url: str, body: str | None) -> requests.Response:
        """Issue one HTTP request.

        Args:
            method: HTTP verb.
            url: Absolute URL.
            body: Encoded JSON body, or None to send none.

        Returns:
            The HTTP response, whatever its status.
        """
        return self._session.request(
            method,
            url,
            data=body.encode("utf-8") if body is not None else None,
            headers=HEADERS,
            timeout=self.timeout,
        )


def open_connection(host: str, **options) -> Connection:
    """Open a connection to the backend at `host`.

    Args:
        host: Backend base URL.
        **options: Forwarded to `Connection`.
    """
    return Connection(host, **options)
