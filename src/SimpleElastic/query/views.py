"""Fluent builder views.

Each view wraps a `QueryNode` and exposes only the calls that are legal at
that position of the query grammar:

- `QueryView`: inside `query` (paging, leaf clauses, range, sort, bool)
- `TermView`: after a leaf clause (more clauses at the same position)
- `BoolView`: inside `bool` (must / must_not / should / filter)
- `RangeView`: on a range field (bounds, format, time zone)
- `SortView`: on a sort field (order, mode)

Example:
    conn.search().index("logs").query() \
        .bool().must().term("status", "active") \
        .range("age").gte(18).lte(65) \
        .query().sort("created").order("desc") \
        .do()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from SimpleElastic.core.errors import UsageError
from SimpleElastic.query import clauses
from SimpleElastic.query.node import QueryNode

if TYPE_CHECKING:
    from SimpleElastic.client.request import Request
    from SimpleElastic.client.result import Result


class _View:
    __slots__ = ("_node",)

    def __init__(self, node: QueryNode) -> None:
        self._node = node

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node!r})"

    @property
    def node(self) -> QueryNode:
        return self._node

    @property
    def request(self) -> Request:
        request = self._node.request
        if request is None:
            raise UsageError("view is not attached to a request")
        return request

    def encode(self, *, pretty: bool = False) -> str:
        """Serialize the whole request body this view belongs to."""
        return self.request.encode(pretty=pretty)

    def do(self) -> Result:
        """Send the request this view belongs to."""
        return self.request.do()

    def do_with_retry(self, count: int, delay: float) -> Result:
        """Send the request, retrying failures `count` times."""
        return self.request.do_with_retry(count, delay)


class _Navigation(_View):
    __slots__ = ()

    def query(self) -> QueryView:
        return QueryView(clauses.enter_query(self._node))

    def bool(self) -> BoolView:
        return BoolView(clauses.enter_bool(self._node))

    def bool_nstd(self) -> BoolView:
        """Start a new, independent bool clause at the current position."""
        return BoolView(clauses.enter_bool(self._node, fresh=True))

    def range(self, key: str) -> RangeView:
        return RangeView(clauses.enter_range(self._node, key))

    def sort(self, key: str) -> SortView:
        return SortView(clauses.enter_sort(self._node, key))


class _LeafClauses(_View):
    __slots__ = ()

    def term(self, key: str, *values: Any) -> TermView:
        """Add `term` for one value, `terms` for several."""
        return TermView(clauses.add_leaf(self._node, "term", key, values))

    def fuzzy(self, key: str, value: Any) -> TermView:
        return TermView(clauses.add_leaf(self._node, "fuzzy", key, (value,)))

    def regexp(self, key: str, value: Any) -> TermView:
        return TermView(clauses.add_leaf(self._node, "regexp", key, (value,)))

    def wildcard(self, key: str, value: Any) -> TermView:
        return TermView(clauses.add_leaf(self._node, "wildcard", key, (value,)))

    def exists(self, field: str) -> TermView:
        return TermView(clauses.add_exists(self._node, field))


class TermView(_LeafClauses, _Navigation):
    """Position right after a leaf clause."""

    __slots__ = ()


class QueryView(_LeafClauses, _Navigation):
    """Position inside the query body."""

    __slots__ = ()

    def size(self, size: int) -> QueryView:
        clauses.set_root_option(self._node, "size", size)
        return self

    def from_(self, offset: int) -> QueryView:
        clauses.set_root_option(self._node, "from", offset)
        return self

    def source(self, *fields: str) -> QueryView:
        """Restrict returned `_source` to `fields`."""
        clauses.set_root_option(self._node, "_source", list(fields))
        return self


class BoolView(_View):
    """Position inside a bool clause."""

    __slots__ = ()

    def must(self) -> QueryView:
        return QueryView(clauses.add_condition(self._node, "must"))

    def must_not(self) -> QueryView:
        return QueryView(clauses.add_condition(self._node, "must_not"))

    def should(self) -> QueryView:
        return QueryView(clauses.add_condition(self._node, "should"))

    def filter(self) -> QueryView:  # noqa: A003 - query-language keyword
        return QueryView(clauses.add_condition(self._node, "filter"))

    def bool_nstd(self) -> BoolView:
        return BoolView(clauses.enter_bool(self._node, fresh=True))

    def query(self) -> QueryView:
        return QueryView(clauses.enter_query(self._node))


class RangeView(_View):
    """Position on one field of a range clause."""

    __slots__ = ()

    def _set(self, key: str, value: Any) -> RangeView:
        clauses.set_option(self._node, key, value)
        return self

    def gte(self, value: Any) -> RangeView:
        return self._set("gte", value)

    def lte(self, value: Any) -> RangeView:
        return self._set("lte", value)

    def gt(self, value: Any) -> RangeView:
        return self._set("gt", value)

    def lt(self, value: Any) -> RangeView:
        return self._set("lt", value)

    def format(self, fmt: str) -> RangeView:  # noqa: A003 - query-language keyword
        return self._set("format", fmt)

    def time_zone(self, value: str) -> RangeView:
        return self._set("time_zone", value)

    def range(self, key: str) -> RangeView:
        return RangeView(clauses.enter_range(self._node, key))

    def bool(self) -> BoolView:
        return BoolView(clauses.enter_bool(self._node))

    def query(self) -> QueryView:
        return QueryView(clauses.enter_query(self._node))


class SortView(_View):
    """Position on one field of the sort list."""

    __slots__ = ()

    def order(self, value: str) -> SortView:
        clauses.set_option(self._node, "order", value)
        return self

    def mode(self, value: str) -> SortView:
        clauses.set_option(self._node, "mode", value)
        return self

    def sort(self, key: str) -> SortView:
        return SortView(clauses.enter_sort(self._node, key))

    def query(self) -> QueryView:
        return QueryView(clauses.enter_query(self._node))
