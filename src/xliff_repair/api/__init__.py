"""Public repair API for XLIFF repair.

Module-level functions cover the common cases; RepairEngine carries a
configuration for repeated use.
"""

from .engine import (
    CONTENT_ERROR_MESSAGE,
    READ_ERROR_MESSAGE,
    RepairEngine,
    classify_status,
    repair_bytes,
    repair_file,
    repair_files,
    repair_text,
    sort_newest_first,
    summarize,
)

__all__ = [
    "CONTENT_ERROR_MESSAGE",
    "READ_ERROR_MESSAGE",
    "RepairEngine",
    "classify_status",
    "repair_bytes",
    "repair_file",
    "repair_files",
    "repair_text",
    "sort_newest_first",
    "summarize",
]
