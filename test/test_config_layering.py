"""Tests for layered config parsing and validation."""

import os
import sys
import tempfile
import unittest
from copy import deepcopy
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SimpleElastic.config import load_config, load_config_with_defaults, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "info", "to_file": False, "dir": "log"},
        "trace": {"requests": True},
        "connection": {"host": "http://localhost:9200", "host_env": "TEST_ES_HOST", "timeout": 15},
        "retry": {"count": 2, "delay": 0.5},
        "search": {"indices": ["logs"], "size": 10, "limit": 100, "scroll": "1m"},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertTrue(cfg.runtime.trace_requests)
        self.assertFalse(cfg.runtime.trace_responses)
        self.assertEqual(cfg.connection.host, "http://localhost:9200")
        self.assertEqual(cfg.connection.timeout, 15.0)
        self.assertEqual(cfg.retry.count, 2)
        self.assertEqual(cfg.search.indices, ("logs",))
        self.assertEqual(cfg.search.scroll, "1m")

    def test_host_env_overrides_host(self) -> None:
        with patch.dict(os.environ, {"TEST_ES_HOST": "https://search.internal:9243"}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.connection.host, "https://search.internal:9243")

    def test_missing_connection_section(self) -> None:
        raw = _base_raw_config()
        del raw["connection"]
        with self.assertRaisesRegex(ValueError, "connection"):
            parse_config_dict(raw)

    def test_host_must_be_http_url(self) -> None:
        raw = _base_raw_config()
        raw["connection"]["host"] = "localhost:9200"
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaisesRegex(ValueError, "connection\\.host"):
                parse_config_dict(raw)

    def test_timeout_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["connection"]["timeout"] = "15"
        with self.assertRaisesRegex(TypeError, "connection\\.timeout"):
            parse_config_dict(raw)

    def test_retry_defaults_when_section_missing(self) -> None:
        raw = _base_raw_config()
        del raw["retry"]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.retry.count, 0)
        self.assertEqual(cfg.retry.delay, 0.0)

    def test_negative_retry_count(self) -> None:
        raw = _base_raw_config()
        raw["retry"]["count"] = -1
        with self.assertRaisesRegex(ValueError, "retry\\.count"):
            parse_config_dict(raw)

    def test_blank_index_name(self) -> None:
        raw = _base_raw_config()
        raw["search"]["indices"] = ["logs", " "]
        with self.assertRaisesRegex(ValueError, "search\\.indices\\[1\\]"):
            parse_config_dict(raw)

    def test_scroll_ttl_format(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["scroll"] = "one minute"
        with self.assertRaisesRegex(ValueError, "search\\.scroll"):
            parse_config_dict(raw)

    def test_empty_scroll_disables_scrolling(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["scroll"] = ""
        self.assertEqual(parse_config_dict(raw).search.scroll, "")

    def test_unknown_log_level(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "verbose"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_default_file_loads(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.connection.host, "http://localhost:9200")
        self.assertEqual(cfg.search.indices, ("_all",))

    def test_override_merges_over_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override = Path(tmp) / "override.yml"
            override.write_text("search:\n  indices: [a, b]\n  limit: 5\n", encoding="utf-8")
            with patch.dict(os.environ, {}, clear=True):
                cfg = load_config_with_defaults(override, default_path=REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.search.indices, ("a", "b"))
        self.assertEqual(cfg.search.limit, 5)
        self.assertEqual(cfg.search.size, 10)


    def test_load_config_layers_partial_file_over_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            partial = Path(tmp) / "partial.yml"
            partial.write_text("retry:\n  count: 5\n", encoding="utf-8")
            with patch.dict(os.environ, {}, clear=True), patch(
                "SimpleElastic.config.app.DEFAULT_CONFIG_PATH", REPO_ROOT / "config" / "default.yml"
            ):
                cfg = load_config(partial)
        self.assertEqual(cfg.retry.count, 5)
        self.assertEqual(cfg.retry.delay, 1.0)
        self.assertEqual(cfg.connection.host, "http://localhost:9200")

    def test_missing_required_field_names_dotted_key(self) -> None:
        raw = _base_raw_config()
        del raw["search"]["size"]
        with self.assertRaisesRegex(ValueError, "Missing required config: search\\.size"):
            parse_config_dict(raw)


if __name__ == "__main__":
    unittest.main()
