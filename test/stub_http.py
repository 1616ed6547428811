"""Offline HTTP stand-ins shared by the client tests.

`StubSession` replaces `requests.Session` inside a `Connection`. It answers
from a queue: dicts become JSON bodies, strings are sent as raw text and
exceptions are raised from `request()`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SimpleElastic.client.connection import Connection


class StubResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def json(self) -> Any:
        return json.loads(self.text)


class StubSession:
    def __init__(self, replies: list[Any] | None = None) -> None:
        self.replies = list(replies or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, *, data=None, headers=None, timeout=None) -> StubResponse:
        body = data.decode("utf-8") if isinstance(data, bytes) else data
        self.calls.append({"method": method, "url": url, "body": body, "timeout": timeout})
        if not self.replies:
            raise AssertionError(f"unexpected request: {method} {url}")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, StubResponse):
            return reply
        if isinstance(reply, str):
            return StubResponse(reply)
        return StubResponse(json.dumps(reply))

    def close(self) -> None:
        self.closed = True

    def body_of(self, call_index: int) -> Any:
        body = self.calls[call_index]["body"]
        return None if body is None else json.loads(body)


def make_connection(replies: list[Any] | None = None, **options) -> tuple[Connection, StubSession]:
    session = StubSession(replies)
    return Connection("http://es.local:9200", session=session, **options), session


def search_page(hits: list[dict[str, Any]], *, total: Any, scroll_id: str | None = None) -> dict[str, Any]:
    """Build a search response body."""
    payload: dict[str, Any] = {"took": 1, "hits": {"total": total, "hits": hits}}
    if scroll_id is not None:
        payload["_scroll_id"] = scroll_id
    return payload


def docs(start: int, stop: int) -> list[dict[str, Any]]:
    return [
        {"_index": "logs", "_id": str(n), "_score": 1.0, "_source": {"n": n}}
        for n in range(start, stop)
    ]
