"""Logging utilities for Interesting Files Export.

Provides YAML-based logging configuration and a rule-set context adapter.
All loggers are namespaced under 'interestingfiles'.
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "logging.yaml"


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Configure logging from the YAML configuration file.

    Falls back to basicConfig if the YAML file is not found.

    Args:
        config_path: Path to logging.yaml (defaults to config/logging.yaml).
        log_level: Override log level (e.g., "DEBUG", "INFO", "WARNING").
        log_file: Override the log file path.
    """
    if config_path is None:
        config_path = str(_DEFAULT_CONFIG_PATH)

    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)

        if log_file and "handlers" in cfg:
            for handler_cfg in cfg["handlers"].values():
                if handler_cfg.get("class") == "logging.FileHandler":
                    handler_cfg["filename"] = log_file

        if log_level and "loggers" in cfg:
            for logger_cfg in cfg["loggers"].values():
                logger_cfg["level"] = log_level.upper()
            if "root" in cfg:
                cfg["root"]["level"] = log_level.upper()

        logging.config.dictConfig(cfg)
    else:
        logging.basicConfig(
            level=getattr(logging, (log_level or "INFO").upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the 'interestingfiles' namespace.

    Args:
        name: Module or component name (e.g., "export.orchestrator").
    """
    if name.startswith("interestingfiles"):
        return logging.getLogger(name)
    return logging.getLogger(f"interestingfiles.{name}")


class SetContextAdapter(logging.LoggerAdapter):
    """Logger adapter that prefixes every message with the rule-set name.

    Usage:
        logger = get_set_logger(__name__, "Malware Indicators")
        logger.info("exporting 4 hits")
        # Output: ... interestingfiles.export.orchestrator: [Malware Indicators] exporting 4 hits
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        set_name = self.extra.get("set_name", "?")
        return f"[{set_name}] {msg}", kwargs


def get_set_logger(name: str, set_name: str) -> SetContextAdapter:
    """Get a logger adapter bound to one rule-set."""
    return SetContextAdapter(get_logger(name), {"set_name": set_name})
