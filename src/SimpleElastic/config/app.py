from __future__ import annotations

"""Application config: one dataclass per YAML section, loaded in layers.

`config/default.yml` is the base layer; a file passed with `--config` is
deep-merged over it, so it only needs the keys it changes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from SimpleElastic.config import connection as connection_cfg
from SimpleElastic.config import runtime as runtime_cfg
from SimpleElastic.config import search as search_cfg
from SimpleElastic.config.connection import ConnectionConfig, RetryConfig
from SimpleElastic.config.runtime import RuntimeConfig
from SimpleElastic.config.search import SearchConfig

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Validated settings for the CLI."""

    runtime: RuntimeConfig
    connection: ConnectionConfig
    retry: RetryConfig
    search: SearchConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Build and validate AppConfig from an already merged mapping.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a value is missing or out of range.
    """
    config = AppConfig(
        runtime=runtime_cfg.load_runtime(raw),
        connection=connection_cfg.load_connection(raw),
        retry=connection_cfg.load_retry(raw),
        search=search_cfg.load_search(raw),
    )
    runtime_cfg.check_runtime(config.runtime)
    connection_cfg.check_connection(config.connection)
    connection_cfg.check_retry(config.retry)
    search_cfg.check_search(config.search)
    return config


def load_config(path: Path) -> AppConfig:
    """Load `path` layered over the default file next to the working directory.

    When `path` is the default file itself, or no default file exists, the
    file is used on its own.
    """
    return load_config_with_defaults(path, default_path=DEFAULT_CONFIG_PATH)


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load `config_path` deep-merged over `default_path`."""
    layers = [config_path]
    if default_path.is_file() and default_path.resolve() != config_path.resolve():
        layers.insert(0, default_path)
    merged: dict[str, Any] = {}
    for layer in layers:
        merged = merge_config_dicts(merged, parse_yaml(layer.read_text(encoding="utf-8")))
    return parse_config_dict(merged)


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text whose top level must be a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge `override` into `base`; nested sections merge, other values replace."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_config_dicts(current, value)
        merged[key] = value
    return merged
