"""
bootstrap/ - Configuration and logging setup.
"""

from .config import (
    AggregationPolicy,
    LoggingConfig,
    DryTestConfig,
    load_config,
    get_config,
    reset_config,
)
from .log_setup import (
    JSONFormatter,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    # Config
    "AggregationPolicy",
    "LoggingConfig",
    "DryTestConfig",
    "load_config",
    "get_config",
    "reset_config",
    # Logging
    "JSONFormatter",
    "setup_logging",
    "setup_logging_from_config",
]
