"""Tests for paginated result iteration with scroll continuation."""

import io
import sys
import unittest
from pathlib import Path

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))
sys.path.insert(0, str(REPO_ROOT / "test"))

from SimpleElastic.client.result import IterState
from stub_http import docs, make_connection, search_page


def _scrolled_search(replies, *, limit: int):
    connection, session = make_connection(replies)
    request = connection.search().index("logs").scroll("1m", limit)
    request.query().size(10)
    return request.do(), session


class TestScrollIteration(unittest.TestCase):
    def test_cap_above_total_yields_total(self) -> None:
        result, session = _scrolled_search(
            [
                search_page(docs(0, 10), total=23, scroll_id="s1"),
                search_page(docs(10, 20), total=23, scroll_id="s2"),
                search_page(docs(20, 23), total=23, scroll_id="s3"),
            ],
            limit=25,
        )

        seen = [hit.source["n"] for hit in result]

        self.assertEqual(seen, list(range(23)))
        self.assertEqual(result.count, 23)
        self.assertEqual(len(session.calls), 3)
        self.assertIs(result.state, IterState.DONE)
        self.assertFalse(result.advance())

    def test_continuation_carries_cursor_ttl_and_method(self) -> None:
        result, session = _scrolled_search(
            [
                search_page(docs(0, 10), total=15, scroll_id="s1"),
                search_page(docs(10, 15), total=15, scroll_id="s2"),
            ],
            limit=0,
        )
        list(result)

        follow_up = session.calls[1]
        self.assertEqual(follow_up["method"], "GET")
        self.assertEqual(follow_up["url"], "http://es.local:9200/_search/scroll")
        self.assertEqual(session.body_of(1), {"scroll": "1m", "scroll_id": "s1"})
        self.assertEqual(result.count, 15)

    def test_cap_below_total_stops_at_cap(self) -> None:
        result, session = _scrolled_search(
            [
                search_page(docs(0, 10), total=23, scroll_id="s1"),
                search_page(docs(10, 20), total=23, scroll_id="s2"),
            ],
            limit=15,
        )

        seen = [hit.position for hit in result]

        self.assertEqual(seen, list(range(15)))
        self.assertEqual(len(session.calls), 2)

    def test_failed_continuation_ends_iteration_quietly(self) -> None:
        result, session = _scrolled_search(
            [
                search_page(docs(0, 10), total=30, scroll_id="s1"),
                requests.ConnectionError("connection reset"),
            ],
            limit=25,
        )

        seen = [hit.id for hit in result]

        self.assertEqual(seen, [str(n) for n in range(10)])
        self.assertEqual(len(session.calls), 2)
        self.assertIs(result.state, IterState.DONE)

    def test_backend_error_on_continuation_ends_iteration(self) -> None:
        result, _ = _scrolled_search(
            [
                search_page(docs(0, 10), total=30, scroll_id="s1"),
                {"error": {"reason": "No search context found for id [1]"}},
            ],
            limit=0,
        )
        self.assertEqual(len(list(result)), 10)

    def test_empty_page_ends_iteration(self) -> None:
        result, session = _scrolled_search(
            [
                search_page(docs(0, 10), total=30, scroll_id="s1"),
                search_page([], total=30, scroll_id="s2"),
            ],
            limit=0,
        )
        self.assertEqual(len(list(result)), 10)
        self.assertEqual(len(session.calls), 2)

    def test_no_scroll_id_means_single_page(self) -> None:
        connection, session = make_connection([search_page(docs(0, 10), total=100)])
        result = connection.search().do()
        self.assertIs(result.state, IterState.HAS_LOCAL_ITEM)
        self.assertEqual(len(list(result)), 10)
        self.assertEqual(len(session.calls), 1)

    def test_closed_sink_does_not_break_iteration(self) -> None:
        out = io.StringIO()
        connection, session = make_connection(
            [
                search_page(docs(0, 10), total=15, scroll_id="s1"),
                search_page(docs(10, 15), total=15, scroll_id="s2"),
            ],
            out_log=out,
            in_log=out,
            err_log=out,
        )
        request = connection.search().scroll("1m")
        result = request.do()
        out.close()

        self.assertEqual(len(list(result)), 15)
        self.assertEqual(len(session.calls), 2)

    def test_missing_total_yields_page_hits(self) -> None:
        connection, _ = make_connection([{"hits": {"hits": docs(0, 3)}}])
        result = connection.search().do()
        self.assertIsNone(result.total)
        self.assertEqual(result.length, 3)
        self.assertEqual([hit.id for hit in result], ["0", "1", "2"])

    def test_missing_total_scroll_bounded_by_cap(self) -> None:
        result, session = _scrolled_search(
            [
                {"_scroll_id": "s1", "hits": {"hits": docs(0, 10)}},
                {"_scroll_id": "s2", "hits": {"hits": docs(10, 20)}},
            ],
            limit=12,
        )
        self.assertEqual(len(list(result)), 12)
        self.assertEqual(len(session.calls), 2)

    def test_never_exceeds_reported_total(self) -> None:
        connection, _ = make_connection([search_page(docs(0, 10), total=4)])
        result = connection.search().do()
        self.assertEqual(len(list(result)), 4)


class TestResultAccessors(unittest.TestCase):
    def test_advance_and_current(self) -> None:
        connection, _ = make_connection([search_page(docs(0, 2), total=2)])
        result = connection.search().do()

        self.assertIsNone(result.current)
        self.assertEqual(result.source, {})
        self.assertTrue(result.advance())
        self.assertEqual(result.current.id, "0")
        self.assertEqual(result.current.index, "logs")
        self.assertEqual(result.current.score, 1.0)
        self.assertEqual(result.source, {"n": 0})
        self.assertTrue(result.advance())
        self.assertFalse(result.advance())
        self.assertIsNone(result.current)
        self.assertFalse(result.advance())

    def test_state_before_continuation(self) -> None:
        result, _ = _scrolled_search(
            [
                search_page(docs(0, 1), total=2, scroll_id="s1"),
                search_page(docs(1, 2), total=2),
            ],
            limit=0,
        )
        self.assertTrue(result.advance())
        self.assertIs(result.state, IterState.PAGE_EXHAUSTED_CONTINUABLE)
        self.assertTrue(result.advance())
        self.assertEqual(result.total, 2)
        self.assertEqual(result.length, 1)
        self.assertIs(result.state, IterState.PAGE_EXHAUSTED_TERMINAL)


if __name__ == "__main__":
    unittest.main()
