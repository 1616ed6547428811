from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Method(Enum):
    """HTTP verb a request is sent with."""

    GET = "GET"
    POST = "POST"


class Action(Enum):
    """Backend endpoint family a request targets."""

    SEARCH = "search"
    SCROLL = "scroll"
    INDEX_OPEN = "index_open"
    INDEX_CLOSE = "index_close"
    INDEX_CHECK = "index_check"


ALL_INDICES = "_all"


@dataclass(frozen=True, slots=True)
class Hit:
    """One search hit as returned by the backend.

    Attributes:
        position: Zero-based position across all pages of the result.
        id: Document id (`_id`).
        index: Index the document lives in (`_index`).
        score: Relevance score (`_score`), None when sorting disables scoring.
        source: Document body (`_source`), empty when source was filtered out.
        raw: The untouched hit object.
    """

    position: int
    id: Optional[str]
    index: Optional[str]
    score: Optional[float]
    source: Mapping[str, Any] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", MappingProxyType(dict(self.source)))
        object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))
