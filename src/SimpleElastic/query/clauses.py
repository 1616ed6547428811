"""Clause operations over the query tree.

Each function encodes one query-language fragment at the position resolved
from the given node and returns the node the caller should continue from.

Resolution rules
- query: one per request, the root's `query` child, reached from anywhere.
- bool: nearest enclosing `bool` by name; when there is none, the `bool` of the
  nearest QUERY / COND context. `fresh=True` always adds a new one.
- must / must_not / should / filter: the clause list of the bool above.
- range: nearest RANGE / COND / QUERY context.
- sort: always global, anchored at the root.
- size / from / _source: always written on the root.
"""

from __future__ import annotations

from typing import Any

from SimpleElastic.core.errors import UsageError
from SimpleElastic.query.node import Group, Mode, QueryNode, by_group, by_name

CONDITION_KINDS = ("must", "must_not", "should", "filter")
LEAF_CLAUSES = ("term", "fuzzy", "regexp", "wildcard")
RANGE_OPTIONS = ("gte", "lte", "gt", "lt", "format", "time_zone")
SORT_OPTIONS = ("order", "mode")
ROOT_OPTIONS = ("size", "from", "_source")


def enter_query(node: QueryNode) -> QueryNode:
    """Return the request's `query` node, creating it under the root once."""
    return node.resolve_or_create(by_group(Group.QUERY, Group.ROOT), "query", Group.QUERY)


def enter_bool(node: QueryNode, *, fresh: bool = False) -> QueryNode:
    """Return the bool context for `node`.

    A range or sort position never receives the bool itself; it goes to the
    enclosing query or condition list.

    Args:
        node: Current builder position.
        fresh: Always insert a new, independent `bool` at `node`.

    Returns:
        A BOOL node.
    """
    if fresh:
        return node.add_child("bool", Group.BOOL)
    found = node.find(by_name("bool"))
    if found is not None:
        return found
    return node.resolve_or_create(by_group(Group.QUERY, Group.COND), "bool", Group.BOOL)


def add_condition(node: QueryNode, kind: str) -> QueryNode:
    """Return the `kind` clause list of the nearest bool context.

    A missing bool context is created rather than producing a condition list
    outside of any `bool`.

    Args:
        node: Current builder position.
        kind: One of must, must_not, should, filter.

    Returns:
        A MULTI node collecting clauses for `kind`.

    Raises:
        UsageError: If `kind` is not a bool condition.
    """
    if kind not in CONDITION_KINDS:
        raise UsageError(f"Unsupported bool condition: {kind}")
    bool_node = enter_bool(node)
    existing = bool_node.child(kind)
    if existing is not None:
        return existing
    return bool_node.add_child(kind, Group.COND, Mode.MULTI)


def add_leaf(node: QueryNode, clause: str, key: str, values: tuple[Any, ...]) -> QueryNode:
    """Insert a one-field leaf clause at `node`.

    `term` with more than one value becomes `terms` with a value list. The
    switch is driven by the argument count only.

    Args:
        node: Node receiving the clause.
        clause: One of term, fuzzy, regexp, wildcard.
        key: Field name, forwarded as is.
        values: Clause values; only `term` accepts more than one.

    Returns:
        `node`, so further clauses land at the same position.

    Raises:
        UsageError: If no value is given, or several for a single-value clause.
    """
    if clause not in LEAF_CLAUSES:
        raise UsageError(f"Unsupported leaf clause: {clause}")
    if not values:
        raise UsageError(f"{clause} on '{key}' needs a value")
    if len(values) > 1:
        if clause != "term":
            raise UsageError(f"{clause} on '{key}' takes a single value")
        node.insert("terms", {key: list(values)})
    else:
        node.insert(clause, {key: values[0]})
    return node


def add_exists(node: QueryNode, field: str) -> QueryNode:
    node.insert("exists", {"field": field})
    return node


def enter_range(node: QueryNode, key: str) -> QueryNode:
    """Return a fresh bound node for `key` inside the nearest range clause.

    Args:
        node: Current builder position.
        key: Field the bounds apply to.

    Returns:
        CHILD node receiving gte/lte/gt/lt/format/time_zone.
    """
    container = node.resolve_or_create(
        by_group(Group.RANGE, Group.COND, Group.QUERY), "range", Group.RANGE
    )
    return container.add_child(key, Group.CHILD)


def enter_sort(node: QueryNode, key: str) -> QueryNode:
    """Append a sort entry for `key` to the request-global sort list.

    Args:
        node: Current builder position.
        key: Field to sort on.

    Returns:
        CHILD node receiving order/mode.
    """
    container = node.resolve_or_create(by_group(Group.SORT, Group.ROOT), "sort", Group.SORT, Mode.MULTI)
    return container.add_child(key, Group.CHILD)


def set_option(node: QueryNode, key: str, value: Any) -> QueryNode:
    """Set one option on a range bound or sort entry node."""
    if key not in RANGE_OPTIONS and key not in SORT_OPTIONS:
        raise UsageError(f"Unsupported option: {key}")
    node.insert(key, value)
    return node


def set_root_option(node: QueryNode, key: str, value: Any) -> QueryNode:
    """Set a paging or projection option on the request root."""
    if key not in ROOT_OPTIONS:
        raise UsageError(f"Unsupported request option: {key}")
    node.top.insert(key, value)
    return node
