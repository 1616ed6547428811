"""Command implementations for the SimpleElastic CLI.

Encapsulates the logic of each command, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from SimpleElastic.client.connection import Connection
from SimpleElastic.client.request import Request
from SimpleElastic.config import AppConfig
from SimpleElastic.core.errors import UsageError
from SimpleElastic.utils.log import log


def parse_term_options(values: Sequence[str]) -> dict[str, list[str]]:
    """Group `FIELD=VALUE` options by field, keeping first-seen order.

    Raises:
        UsageError: If an option has no `=` or an empty field name.
    """
    grouped: dict[str, list[str]] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise UsageError(f"--term expects FIELD=VALUE, got {raw!r}")
        grouped.setdefault(key.strip(), []).append(value)
    return grouped


def parse_sort_option(value: str) -> tuple[str, str | None]:
    """Split `FIELD[:ORDER]` into field and optional order."""
    key, _, order = value.partition(":")
    if not key.strip():
        raise UsageError(f"--sort expects FIELD[:ORDER], got {value!r}")
    order = order.strip().lower() or None
    if order not in (None, "asc", "desc"):
        raise UsageError(f"--sort order must be asc or desc, got {order!r}")
    return key.strip(), order


@dataclass(slots=True)
class SearchCommand:
    """Builds one search from CLI options and streams hit sources.

    Terms and exists checks are combined with `bool.must`; sorts are global.
    """

    config: AppConfig
    connection: Connection
    indices: Sequence[str] = ()
    terms: Sequence[str] = ()
    exists: Sequence[str] = ()
    sorts: Sequence[str] = ()
    sources: Sequence[str] = ()
    size: int | None = None
    limit: int | None = None
    emit: Callable[[str], None] = field(default=print)

    def build(self) -> Request:
        """Translate the options into a request.

        Without terms or exists checks no `query` clause is sent, so the
        backend matches all documents.
        """
        search_cfg = self.config.search
        request = self.connection.search().index(*(self.indices or search_cfg.indices))
        limit = search_cfg.limit if self.limit is None else self.limit
        if search_cfg.scroll:
            request.scroll(search_cfg.scroll, limit)
        else:
            request.limit(limit)

        request.size(self.size or search_cfg.size)
        if self.sources:
            request.source(*self.sources)

        grouped = parse_term_options(self.terms)
        if grouped or self.exists:
            must = request.query().bool().must()
            for key, values in grouped.items():
                must.term(key, *values)
            for name in self.exists:
                must.exists(name)

        for raw_sort in self.sorts:
            key, order = parse_sort_option(raw_sort)
            entry = request.sort(key)
            if order:
                entry.order(order)
        return request

    def execute(self) -> int:
        """Run the search and emit one JSON line per hit source.

        Returns:
            Number of hits emitted.
        """
        request = self.build()
        log.debug("Search body: %s", request.encode())
        retry = self.config.retry
        result = request.do_with_retry(retry.count, retry.delay)
        log.info("Matched %s documents (first page %d)", result.total, result.length)

        for hit in result:
            self.emit(json.dumps(dict(hit.source), ensure_ascii=False))
        log.info("Emitted %d hits", result.count)
        return result.count


@dataclass(slots=True)
class IndexCommand:
    """Opens, closes or checks indices."""

    connection: Connection
    action: str
    names: Sequence[str]
    emit: Callable[[str], None] = field(default=print)

    def execute(self) -> None:
        if self.action == "open":
            result = self.connection.index_open(*self.names)
            self.emit(f"open acknowledged={str(result.acknowledged).lower()}")
        elif self.action == "close":
            result = self.connection.index_close(*self.names)
            self.emit(f"close acknowledged={str(result.acknowledged).lower()}")
        elif self.action == "check":
            result = self.connection.index_check(*self.names)
            for name, state in result.indices.items():
                self.emit(f"{name}\t{state or 'unknown'}")
            self.emit(f"open {result.length}/{result.total}")
        else:
            raise UsageError(f"Unsupported index action: {self.action}")
