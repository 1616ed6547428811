"""Tests for index open/close/check actions."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))
sys.path.insert(0, str(REPO_ROOT / "test"))

from SimpleElastic.core.errors import BackendError, UsageError
from stub_http import make_connection


def _metadata(states: dict[str, str]) -> dict:
    return {
        "cluster_name": "test",
        "metadata": {"indices": {name: {"state": state, "settings": {}} for name, state in states.items()}},
    }


class TestIndexCheck(unittest.TestCase):
    def test_counts_open_indices(self) -> None:
        states = {"a": "open", "b": "close", "c": "open", "d": "close", "e": "open"}
        connection, session = make_connection([_metadata(states)])

        result = connection.index_check("a", "b", "c", "d", "e")

        self.assertEqual(result.total, 5)
        self.assertEqual(result.length, 3)
        self.assertEqual(result.indices, states)
        self.assertEqual(list(result), [])
        call = session.calls[0]
        self.assertEqual(call["method"], "GET")
        self.assertEqual(call["url"], "http://es.local:9200/_cluster/state/metadata/a,b,c,d,e")
        self.assertIsNone(call["body"])

    def test_missing_index_surfaces_backend_error(self) -> None:
        connection, _ = make_connection([{"error": {"reason": "no such index [x]"}, "status": 404}])
        with self.assertRaisesRegex(BackendError, "no such index"):
            connection.index_check("x")


class TestIndexOpenClose(unittest.TestCase):
    def test_open_posts_without_body(self) -> None:
        connection, session = make_connection([{"acknowledged": True}])
        result = connection.index_open("logs")
        self.assertTrue(result.acknowledged)
        self.assertEqual(session.calls[0]["method"], "POST")
        self.assertEqual(session.calls[0]["url"], "http://es.local:9200/logs/_open")
        self.assertIsNone(session.calls[0]["body"])

    def test_close_targets_close_endpoint(self) -> None:
        connection, session = make_connection([{"acknowledged": False}])
        result = connection.index_close("logs", "metrics")
        self.assertFalse(result.acknowledged)
        self.assertEqual(session.calls[0]["url"], "http://es.local:9200/logs,metrics/_close")

    def test_empty_names_fail_before_network(self) -> None:
        connection, session = make_connection()
        for action in (connection.index_open, connection.index_close, connection.index_check):
            with self.assertRaises(UsageError):
                action()
        with self.assertRaises(UsageError):
            connection.index_open("  ")
        self.assertEqual(session.calls, [])


if __name__ == "__main__":
    unittest.main()
