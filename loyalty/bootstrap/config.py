"""
bootstrap/config.py - Dry test configuration

Settings come from three layers, later ones winning: dataclass defaults,
LOYALTY_* environment variables, then an optional JSON file.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from pathlib import Path
import os
import json
import logging
import threading

logger = logging.getLogger("loyalty.bootstrap.config")

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Searched in order when load_config() is given no path.
CONFIG_SEARCH_PATHS: List[str] = ["./loyalty.json", "./config/loyalty.json"]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class AggregationPolicy(str, Enum):
    """Which node results make up a program's total points."""
    DISTRIBUTIONS = "distributions"  # amounts of fired distributions
    ROOT_NODES = "root_nodes"        # numeric results of nodes with no incoming edges
    ALL_NODES = "all_nodes"          # numeric results of every evaluated node


def _parse_policy(raw: Any) -> AggregationPolicy:
    try:
        return AggregationPolicy(raw)
    except ValueError:
        logger.warning(f"Unknown aggregation policy {raw!r}, using 'distributions'")
        return AggregationPolicy.DISTRIBUTIONS


@dataclass
class LoggingConfig:
    """Handler settings applied by setup_logging_from_config()."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("LOYALTY_LOG_LEVEL", "INFO"),
            format=os.getenv("LOYALTY_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("LOYALTY_LOG_FILE") or None,
            json_logs=_env_flag("LOYALTY_JSON_LOGS", False),
        )

    def update(self, values: Mapping[str, Any]) -> None:
        """Apply known keys from a mapping; unknown keys are ignored."""
        for name in ("level", "format", "log_file", "json_logs"):
            if name in values:
                setattr(self, name, values[name])


@dataclass
class DryTestConfig:
    """
    Defaults for dry test runs.

    Holds no run state: an engine reads it once when constructed.
    """

    environment: str = "development"
    aggregation_policy: AggregationPolicy = AggregationPolicy.DISTRIBUTIONS
    log_dropped_edges: bool = True
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Free-form values for host applications
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "DryTestConfig":
        """Defaults overlaid with LOYALTY_* environment variables."""
        return cls(
            environment=os.getenv("LOYALTY_ENVIRONMENT", "development"),
            aggregation_policy=_parse_policy(
                os.getenv("LOYALTY_AGGREGATION_POLICY", AggregationPolicy.DISTRIBUTIONS.value)
            ),
            log_dropped_edges=_env_flag("LOYALTY_LOG_DROPPED_EDGES", True),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "DryTestConfig":
        """
        Environment config overlaid with a JSON file.

        A missing file is not an error; the environment config is returned.
        """
        path = Path(filepath)
        if not path.is_file():
            logger.warning(f"No config file at {filepath}, using environment only")
            return cls.from_env()

        return cls._from_dict(json.loads(path.read_text()))

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> "DryTestConfig":
        config = cls.from_env()

        if "environment" in data:
            config.environment = str(data["environment"])
        if "aggregation_policy" in data:
            config.aggregation_policy = _parse_policy(data["aggregation_policy"])
        if "log_dropped_edges" in data:
            config.log_dropped_edges = bool(data["log_dropped_edges"])
        config.logging.update(data.get("logging") or {})
        config.settings.update(data.get("settings") or {})

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "aggregation_policy": self.aggregation_policy.value,
            "log_dropped_edges": self.log_dropped_edges,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
            "settings": dict(self.settings),
        }


# =============================================================================
# Process-wide defaults
# =============================================================================
# Opt-in only: EvaluationEngine never reads these unless handed the result.

_config: Optional[DryTestConfig] = None
_config_lock = threading.RLock()


def _find_config_file() -> Optional[Path]:
    for candidate in CONFIG_SEARCH_PATHS:
        path = Path(candidate)
        if path.is_file():
            return path
    return None


def load_config(filepath: Optional[str] = None) -> DryTestConfig:
    """
    (Re)load the process-wide configuration.

    Without ``filepath`` the first existing file in CONFIG_SEARCH_PATHS is
    used, falling back to the environment when there is none.
    """
    global _config

    path = Path(filepath) if filepath else _find_config_file()
    if path is not None:
        logger.info(f"Reading dry test config from {path}")
        config = DryTestConfig.from_file(str(path))
    else:
        config = DryTestConfig.from_env()

    with _config_lock:
        _config = config

    logger.info(
        f"Dry test config ready: environment={config.environment}, "
        f"aggregation_policy={config.aggregation_policy.value}"
    )
    return config


def get_config() -> DryTestConfig:
    """Return the process-wide configuration, loading it once on first use."""
    with _config_lock:
        if _config is None:
            return load_config()
        return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next get_config() reloads it."""
    global _config
    with _config_lock:
        _config = None
