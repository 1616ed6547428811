from __future__ import annotations

"""Public configuration API for SimpleElastic."""

from SimpleElastic.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from SimpleElastic.config.connection import ConnectionConfig, RetryConfig
from SimpleElastic.config.runtime import RuntimeConfig
from SimpleElastic.config.search import SearchConfig

__all__ = [
    "RuntimeConfig",
    "ConnectionConfig",
    "RetryConfig",
    "SearchConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
