"""Search domain configuration (default indices, paging and scrolling)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from SimpleElastic.config.common import Section

# Backend time units, e.g. "30s", "1m", "2h".
_TTL_RE = re.compile(r"^\d+(nanos|micros|ms|s|m|h|d)$")


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated defaults for CLI searches.

    Attributes:
        indices: Indices searched when none are given on the command line.
        size: Page size requested from the backend.
        limit: Result cap across pages; 0 means unbounded.
        scroll: Scroll TTL; empty disables scrolling.
    """

    indices: tuple[str, ...]
    size: int
    limit: int
    scroll: str


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = Section.of(raw, "search", required=True)
    return SearchConfig(
        indices=section.names("indices"),
        size=section.integer("size"),
        limit=section.integer("limit", 0),
        scroll=section.text("scroll", "").strip(),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if not config.indices:
        raise ValueError("search.indices must include at least one index")
    if config.size <= 0:
        raise ValueError("search.size must be positive")
    if config.limit < 0:
        raise ValueError("search.limit must be 0 (unbounded) or positive")
    if config.scroll and not _TTL_RE.match(config.scroll):
        raise ValueError(f"search.scroll must be a time value like '1m', got {config.scroll!r}")
