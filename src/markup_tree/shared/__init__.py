"""Shared utilities for markup tree building.

This module provides the configuration objects, diagnostic types, and logging
helpers used across the tree and API layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
)
from .config import (
    BuilderConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    TreeConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "BuilderConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "TreeConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
