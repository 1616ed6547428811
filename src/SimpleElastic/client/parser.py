"""Search backend response parser.

Maps parsed JSON response bodies into totals, `Hit` models and index states.
"""

from __future__ import annotations

from typing import Any, Mapping

from SimpleElastic.core.errors import ResponseParseError
from SimpleElastic.core.models import Hit


def error_reason(payload: Any) -> str | None:
    """Extract the backend error reason from a response body.

    Args:
        payload: Parsed response body.

    Returns:
        `error.reason` when present, a plain string `error` for older
        backends, otherwise None.
    """
    if not isinstance(payload, Mapping):
        return None
    error = payload.get("error")
    if isinstance(error, Mapping):
        reason = error.get("reason")
        if isinstance(reason, str):
            return reason
        return None
    if isinstance(error, str) and error:
        return error
    return None


def _hits_section(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ResponseParseError("response body is not a JSON object")
    hits = payload.get("hits", {})
    if not isinstance(hits, Mapping):
        raise ResponseParseError("hits must be an object")
    return hits


def parse_total(payload: Any) -> int | None:
    """Return the backend-reported number of documents matching the query.

    Both the plain integer form and the `{"value": n, "relation": ...}` object
    form of `hits.total` are accepted. None means the backend did not count
    (`track_total_hits: false` omits `hits.total`).
    """
    total = _hits_section(payload).get("total")
    if total is None:
        return None
    if isinstance(total, Mapping):
        total = total.get("value")
    if isinstance(total, bool) or not isinstance(total, int):
        raise ResponseParseError("hits.total must be an integer")
    return total


def parse_hit_list(payload: Any) -> list[Mapping[str, Any]]:
    """Return the raw `hits.hits` array of one response page."""
    items = _hits_section(payload).get("hits", [])
    if not isinstance(items, list):
        raise ResponseParseError("hits.hits must be an array")
    return [item for item in items if isinstance(item, Mapping)]


def parse_scroll_id(payload: Any) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    scroll_id = payload.get("_scroll_id")
    return scroll_id if isinstance(scroll_id, str) and scroll_id else None


def parse_hit(raw: Mapping[str, Any], position: int) -> Hit:
    """Map one raw hit object into a `Hit`.

    Args:
        raw: Raw hit object from `hits.hits`.
        position: Zero-based position across all pages.

    Returns:
        Parsed hit.
    """
    score = raw.get("_score")
    source = raw.get("_source")
    return Hit(
        position=position,
        id=_str_or_none(raw.get("_id")),
        index=_str_or_none(raw.get("_index")),
        score=float(score) if isinstance(score, (int, float)) and not isinstance(score, bool) else None,
        source=source if isinstance(source, Mapping) else {},
        raw=raw,
    )


def parse_index_states(payload: Any) -> dict[str, str]:
    """Return index name -> state from a cluster metadata response.

    Args:
        payload: Parsed `/_cluster/state/metadata` response body.

    Returns:
        Mapping in backend order; indices without a state map to "".
    """
    if not isinstance(payload, Mapping):
        raise ResponseParseError("response body is not a JSON object")
    metadata = payload.get("metadata", {})
    indices = metadata.get("indices", {}) if isinstance(metadata, Mapping) else {}
    if not isinstance(indices, Mapping):
        raise ResponseParseError("metadata.indices must be an object")
    states: dict[str, str] = {}
    for name, info in indices.items():
        state = info.get("state") if isinstance(info, Mapping) else None
        states[str(name)] = state if isinstance(state, str) else ""
    return states


def count_open(states: Mapping[str, str]) -> int:
    return sum(1 for state in states.values() if state == "open")


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
