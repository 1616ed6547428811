"""Query tree nodes.

A request body is built as a tree of `QueryNode` objects. Each node owns one
JSON fragment (a dict or a list) that is also referenced from its parent's
fragment, so serializing the root fragment always yields the whole tree.

Builder calls never receive explicit node handles. Instead, a call resolves
"the right" node by walking from the current node up through its parents
until one matches, and only creates a new child when nothing matches.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from SimpleElastic.client.request import Request


class Group(Enum):
    """Kind of query-grammar context a node represents."""

    ROOT = "root"
    CHILD = "child"
    QUERY = "query"
    BOOL = "bool"
    COND = "cond"
    RANGE = "range"
    SORT = "sort"


class Mode(Enum):
    """How a node stores what gets inserted into it."""

    SINGLE = "single"
    MULTI = "multi"


NodePredicate = Callable[["QueryNode"], bool]


def by_name(name: str) -> NodePredicate:
    """Match nodes by exact name."""
    return lambda node: node.name == name


def by_group(*groups: Group) -> NodePredicate:
    """Match nodes whose group is one of `groups`."""
    wanted = frozenset(groups)
    return lambda node: node.group in wanted


class QueryNode:
    """One node of the request body tree.

    Attributes:
        name: Key the node was inserted under ("root" for the root).
        group: Grammar context of the node.
        mode: SINGLE nodes hold a dict, MULTI nodes hold a list.
        fragment: JSON fragment owned by this node.
        parent: Enclosing node, None for the root.
        request: Request the tree belongs to.
        children: Child nodes still attached to `fragment`.
    """

    __slots__ = ("name", "group", "mode", "fragment", "parent", "request", "children")

    def __init__(
        self,
        name: str,
        group: Group,
        mode: Mode,
        *,
        request: Request | None,
        parent: QueryNode | None = None,
    ) -> None:
        self.name = name
        self.group = group
        self.mode = mode
        self.fragment: dict[str, Any] | list[Any] = [] if mode is Mode.MULTI else {}
        self.parent = parent
        self.request = request
        self.children: list[QueryNode] = []

    @classmethod
    def root(cls, request: Request | None) -> QueryNode:
        """Create the root node of a request body."""
        return cls("root", Group.ROOT, Mode.SINGLE, request=request)

    def __repr__(self) -> str:
        return f"QueryNode(name={self.name!r}, group={self.group.name}, mode={self.mode.name})"

    @property
    def top(self) -> QueryNode:
        """Return the root of the tree this node belongs to."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def insert(self, key: str, value: Any) -> None:
        """Insert `value` under `key` according to the node mode.

        SINGLE nodes set the key (last write wins). MULTI nodes append a new
        `{key: value}` object, so repeated inserts accumulate.

        Args:
            key: Clause or field name.
            value: JSON-compatible value or a child fragment.
        """
        if self.mode is Mode.MULTI:
            self.fragment.append({key: value})
            return
        if key in self.fragment:
            # The old value is unreachable from now on; drop its node too.
            self.children = [child for child in self.children if child.name != key]
        self.fragment[key] = value

    def add_child(self, name: str, group: Group, mode: Mode = Mode.SINGLE) -> QueryNode:
        """Create a child node and insert its fragment under `name`.

        Args:
            name: Key for the child fragment.
            group: Grammar context of the child.
            mode: Storage mode of the child.

        Returns:
            The new child node.
        """
        child = QueryNode(name, group, mode, request=self.request, parent=self)
        self.insert(name, child.fragment)
        self.children.append(child)
        return child

    def child(self, name: str) -> QueryNode | None:
        """Return the most recently attached child named `name`."""
        for child in reversed(self.children):
            if child.name == name:
                return child
        return None

    def lineage(self) -> Iterator[QueryNode]:
        """Yield this node and then every ancestor up to the root."""
        node: QueryNode | None = self
        while node is not None:
            yield node
            node = node.parent

    def find(self, predicate: NodePredicate) -> QueryNode | None:
        """Return the nearest node in `lineage()` matching `predicate`."""
        for node in self.lineage():
            if predicate(node):
                return node
        return None

    def resolve_or_create(
        self,
        predicate: NodePredicate,
        name: str,
        group: Group,
        mode: Mode = Mode.SINGLE,
    ) -> QueryNode:
        """Resolve the context matching `predicate` and return its `name` node.

        The nearest node in `lineage()` matching `predicate` is the anchor
        (this node when none matches). An anchor already in `group` is
        returned as is. Otherwise a SINGLE anchor's existing `name` child is
        reused and a new child is created only when there is none; a MULTI
        anchor always gets a new child.

        Args:
            predicate: Ancestry matcher, see `by_name` and `by_group`.
            name: Name of the child to reuse or create.
            group: Group of the wanted node.
            mode: Mode of a newly created child.

        Returns:
            The resolved or newly created node.
        """
        anchor = self.find(predicate) or self
        if anchor.group is group:
            return anchor
        if anchor.mode is Mode.SINGLE:
            existing = anchor.child(name)
            if existing is not None:
                return existing
        return anchor.add_child(name, group, mode)

    def is_empty(self) -> bool:
        return not self.fragment
