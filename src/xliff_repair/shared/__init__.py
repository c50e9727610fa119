"""Shared utilities for XLIFF repair.

This module provides shared data structures, configuration objects, result types,
and logging used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    RepairConfig,
    StatusPolicy,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    ChangeRecord,
    FileResult,
    FileStatus,
    RepairStats,
)

__all__ = [
    "ChangeRecord",
    "FileResult",
    "FileStatus",
    "RepairStats",
    "ConfigError",
    "ConfigValidationError",
    "RepairConfig",
    "StatusPolicy",
    "CorrelationLogger",
    "get_logger",
]
