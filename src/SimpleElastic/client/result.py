"""Paginated search results with transparent scroll continuation.

A `Result` wraps one response page and iterates hits across pages:

- HAS_LOCAL_ITEM: a hit is left on the current page and the cap is not hit
  -> emit it.
- PAGE_EXHAUSTED_CONTINUABLE: page used up, a scroll id exists and fewer hits
  than both the backend total and the cap were emitted -> fetch the next page
  through the scroll endpoint and splice it in.
- PAGE_EXHAUSTED_TERMINAL: page used up and nothing more may be fetched.
- DONE: terminal; further advances return False.

A failed or empty continuation ends iteration; it is logged, not raised.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from SimpleElastic.client import parser
from SimpleElastic.core.errors import SimpleElasticError
from SimpleElastic.core.models import Hit
from SimpleElastic.utils.log import log

if TYPE_CHECKING:
    from SimpleElastic.client.request import Request


class IterState(Enum):
    HAS_LOCAL_ITEM = "has_local_item"
    PAGE_EXHAUSTED_CONTINUABLE = "page_exhausted_continuable"
    PAGE_EXHAUSTED_TERMINAL = "page_exhausted_terminal"
    DONE = "done"


class Result:
    """Stateful iterator over the hits of a search.

    Not safe for concurrent advancement; advancing mutates page state.

    Attributes:
        total: Backend-reported number of matching documents (or of indices
            for an index check), not the page size. None when the backend
            did not count; only the cap then bounds iteration.
        indices: Index name -> state, filled for index checks only.
    """

    def __init__(
        self,
        request: Request,
        *,
        payload: Any,
        total: int | None,
        hits: list[Mapping[str, Any]],
        scroll_id: str | None = None,
        length: int | None = None,
        indices: Mapping[str, str] | None = None,
    ) -> None:
        """Wrap one parsed response page.

        Args:
            request: Request that produced the page.
            payload: Parsed response body.
            total: Backend-reported total, None when unknown.
            hits: Raw hit objects of this page.
            scroll_id: Cursor token for the next page, if any.
            length: Page length override (index checks report open indices).
            indices: Index states for index checks.
        """
        self._request = request
        self.payload = payload
        self.total = total
        self.indices: dict[str, str] = dict(indices or {})
        self._hits = list(hits)
        self._length = len(self._hits) if length is None else length
        self._scroll_id = scroll_id
        self._count = 0
        self._index = 0
        self._current: Hit | None = None
        self._done = False

    @classmethod
    def for_index_check(cls, request: Request, payload: Any, states: Mapping[str, str]) -> Result:
        """Build the result of an index check: total indices, open count as length."""
        return cls(
            request,
            payload=payload,
            total=len(states),
            hits=[],
            length=parser.count_open(states),
            indices=states,
        )

    @classmethod
    def for_acknowledgement(cls, request: Request, payload: Any) -> Result:
        return cls(request, payload=payload, total=0, hits=[])

    def __repr__(self) -> str:
        return (
            f"Result(total={self.total}, length={self._length}, count={self._count}, "
            f"state={self.state.name})"
        )

    @property
    def request(self) -> Request:
        return self._request

    @property
    def length(self) -> int:
        """Number of items on the current page."""
        return self._length

    @property
    def count(self) -> int:
        """Number of hits emitted so far across all pages."""
        return self._count

    @property
    def scroll_id(self) -> str | None:
        return self._scroll_id

    @property
    def current(self) -> Hit | None:
        return self._current

    @property
    def source(self) -> Mapping[str, Any]:
        """`_source` of the current hit, empty before the first advance."""
        return self._current.source if self._current is not None else {}

    @property
    def acknowledged(self) -> bool:
        return isinstance(self.payload, Mapping) and self.payload.get("acknowledged") is True

    @property
    def state(self) -> IterState:
        if self._done:
            return IterState.DONE
        if self._has_local_item():
            return IterState.HAS_LOCAL_ITEM
        if self._can_continue():
            return IterState.PAGE_EXHAUSTED_CONTINUABLE
        return IterState.PAGE_EXHAUSTED_TERMINAL

    def _under_cap(self) -> bool:
        cap = self._request.cap
        return cap == 0 or self._count < cap

    def _under_total(self) -> bool:
        return self.total is None or self._count < self.total

    def _has_local_item(self) -> bool:
        return self._index < len(self._hits) and self._under_cap() and self._under_total()

    def _can_continue(self) -> bool:
        return self._scroll_id is not None and self._under_total() and self._under_cap()

    def advance(self) -> bool:
        """Move to the next hit, fetching the next page when needed.

        Returns:
            True when `current` holds a new hit, False once iteration is done.
        """
        while True:
            state = self.state
            if state is IterState.HAS_LOCAL_ITEM:
                self._current = parser.parse_hit(self._hits[self._index], self._count)
                self._index += 1
                self._count += 1
                return True
            if state is IterState.PAGE_EXHAUSTED_CONTINUABLE and self._fetch_next_page():
                continue
            self._done = True
            self._current = None
            return False

    def _fetch_next_page(self) -> bool:
        assert self._scroll_id is not None
        origin = self._request
        follow_up = origin.connection.continuation(
            self._scroll_id,
            ttl=origin.scroll_ttl,
            method=origin.method,
            limit=origin.cap,
        )
        try:
            page = follow_up.do()
        except SimpleElasticError as error:
            log.warning("Scroll continuation failed after %d hits; stop: %s", self._count, error)
            return False
        if not page._hits:
            log.debug("Scroll continuation returned an empty page after %d hits; stop", self._count)
            return False

        log.debug("Scroll page fetched: %d hits (emitted %d of %s)", len(page._hits), self._count, self.total)
        self.payload = page.payload
        self._hits = page._hits
        self._length = page._length
        self._scroll_id = page._scroll_id
        self._index = 0
        return True

    def __iter__(self) -> Iterator[Hit]:
        return self

    def __next__(self) -> Hit:
        if not self.advance():
            raise StopIteration
        assert self._current is not None
        return self._current
