"""Search and administrative requests.

A `Request` owns the root of a query tree plus the transport parameters
(indices, method, action, scroll TTL, result cap). `do()` serializes the
tree, sends it through the owning connection and interprets the response.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any

import requests

from SimpleElastic.client import parser
from SimpleElastic.client.result import Result
from SimpleElastic.client.retry import do_with_retry
from SimpleElastic.core.errors import BackendError, ResponseParseError, TransportError, UsageError
from SimpleElastic.core.models import ALL_INDICES, Action, Method
from SimpleElastic.query import clauses
from SimpleElastic.query.node import QueryNode
from SimpleElastic.query.views import QueryView, SortView
from SimpleElastic.utils.log import log

if TYPE_CHECKING:
    from SimpleElastic.client.connection import Connection

CLUSTER_METADATA_PATH = "/_cluster/state/metadata"

_ACTION_SUFFIX = {
    Action.SEARCH: "/_search",
    Action.SCROLL: "/_search/scroll",
    Action.INDEX_OPEN: "/_open",
    Action.INDEX_CLOSE: "/_close",
}


class Request:
    """One request to the search backend.

    Method and action are fixed at construction. Indices, scroll TTL, limit
    and the body tree may be changed until `do()` is called.
    """

    def __init__(
        self,
        connection: Connection,
        *,
        method: Method,
        action: Action,
        indices: tuple[str, ...] = (ALL_INDICES,),
    ) -> None:
        """Initialize an empty request.

        Args:
            connection: Connection the request is sent through.
            method: HTTP verb.
            action: Endpoint family.
            indices: Target indices.
        """
        self._connection = connection
        self._method = method
        self._action = action
        self._indices = tuple(indices)
        self._scroll_ttl: str | None = None
        self._limit = 0
        self.root = QueryNode.root(self)

    def __repr__(self) -> str:
        return f"Request({self._method.value} {self.url()})"

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def method(self) -> Method:
        return self._method

    @property
    def action(self) -> Action:
        return self._action

    @property
    def indices(self) -> tuple[str, ...]:
        return self._indices

    @property
    def scroll_ttl(self) -> str | None:
        return self._scroll_ttl

    @property
    def cap(self) -> int:
        """Maximum number of hits to iterate over; 0 means unbounded."""
        return self._limit

    def index(self, *names: str) -> Request:
        """Target `names` instead of all indices."""
        if not names:
            raise UsageError("index() needs at least one index name")
        self._indices = tuple(names)
        return self

    def scroll(self, ttl: str, limit: int = 0) -> Request:
        """Keep a scroll cursor alive for `ttl` and iterate up to `limit` hits.

        Args:
            ttl: Backend time string such as "1m".
            limit: Result cap across all pages; 0 means unbounded.
        """
        if not ttl:
            raise UsageError("scroll TTL must not be empty")
        self._scroll_ttl = ttl
        return self.limit(limit)

    def limit(self, limit: int) -> Request:
        if limit < 0:
            raise UsageError("limit must be 0 (unbounded) or positive")
        self._limit = limit
        return self

    def query(self) -> QueryView:
        """Enter the query body builder."""
        return QueryView(self.root).query()

    def size(self, size: int) -> Request:
        """Set the page size without creating a query clause."""
        clauses.set_root_option(self.root, "size", size)
        return self

    def from_(self, offset: int) -> Request:
        clauses.set_root_option(self.root, "from", offset)
        return self

    def source(self, *fields: str) -> Request:
        clauses.set_root_option(self.root, "_source", list(fields))
        return self

    def sort(self, key: str) -> SortView:
        """Append a global sort entry; a request without a query matches all documents."""
        return SortView(clauses.enter_sort(self.root, key))

    def body(self) -> dict[str, Any]:
        return self.root.fragment

    def encode(self, *, pretty: bool = False) -> str:
        """Serialize the request body to JSON text."""
        if pretty:
            return json.dumps(self.root.fragment, indent=2, ensure_ascii=False)
        return json.dumps(self.root.fragment, ensure_ascii=False)

    def url(self) -> str:
        """Build the target URL for this request."""
        host = self._connection.host
        names = ",".join(self._indices)
        if self._action is Action.INDEX_CHECK:
            return f"{host}{CLUSTER_METADATA_PATH}/{names}"
        if self._action is Action.SCROLL:
            return f"{host}{_ACTION_SUFFIX[Action.SCROLL]}"
        url = f"{host}/{names}{_ACTION_SUFFIX[self._action]}"
        if self._action is Action.SEARCH and self._scroll_ttl:
            url += f"?scroll={self._scroll_ttl}"
        return url

    def do(self) -> Result:
        """Send the request and interpret the response.

        Returns:
            Result wrapping the first response page.

        Raises:
            TransportError: If the HTTP round trip failed.
            ResponseParseError: If the body is not the expected JSON.
            BackendError: If the backend reported an error reason.
        """
        sinks = self._connection.sinks
        url = self.url()
        body = None if self.root.is_empty() else self.encode()
        sinks.request(self._method.value, url, body)

        started = time.perf_counter()
        try:
            response = self._connection.send(self._method.value, url, body)
        except requests.RequestException as error:
            sinks.error(str(error))
            raise TransportError(f"{self._method.value} {url} failed: {error}") from error
        finally:
            sinks.timing(time.perf_counter() - started)

        try:
            payload = response.json()
        except ValueError as error:
            sinks.error(str(error))
            raise ResponseParseError(
                f"Invalid JSON from {url} (HTTP {response.status_code}): {error}"
            ) from error
        sinks.response(payload)

        reason = parser.error_reason(payload)
        if reason is not None:
            sinks.error(reason)
            raise BackendError(reason, status_code=response.status_code)

        return self._interpret(payload)

    def do_with_retry(self, count: int, delay: float) -> Result:
        """Send the request, retrying up to `count` times after failures."""
        return do_with_retry(self, count=count, delay=delay)

    def _interpret(self, payload: Any) -> Result:
        if self._action is Action.INDEX_CHECK:
            states = parser.parse_index_states(payload)
            log.debug("Index check: %d indices, %d open", len(states), parser.count_open(states))
            return Result.for_index_check(self, payload, states)
        if self._action in (Action.INDEX_OPEN, Action.INDEX_CLOSE):
            return Result.for_acknowledgement(self, payload)

        total = parser.parse_total(payload)
        hits = parser.parse_hit_list(payload)
        scroll_id = parser.parse_scroll_id(payload)
        log.debug("Search page: total=%s page=%d scroll=%s", total, len(hits), scroll_id is not None)
        return Result(self, payload=payload, total=total, hits=hits, scroll_id=scroll_id)
