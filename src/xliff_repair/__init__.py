"""XLIFF Repair.

Line-by-line repair of malformed XML/XLIFF translation files: illegal control
characters are stripped, a small set of heuristic syntax fixes is applied,
and the result is re-validated for well-formedness with a per-line audit of
every change.

Progressive API Disclosure:
- Level 1: Simple functions - repair_text(), repair_bytes(), repair_file()
- Level 2: Configured engine - RepairEngine with RepairConfig
- Level 3: Batches - repair_files(), summarize(), package_results()
"""

__version__ = "0.1.0"
__author__ = "XLIFF Repair Team"

# Level 1 and 2: repair functions and configured engine
from .api import (
    RepairEngine,
    classify_status,
    repair_bytes,
    repair_file,
    repair_files,
    repair_text,
    summarize,
)

# Output packaging
from .output import PackagingError, build_archive, package_results

# Configuration classes for advanced usage
from .shared.config import RepairConfig, StatusPolicy

# Core result objects for all API levels
from .shared.result import ChangeRecord, FileResult, FileStatus, RepairStats

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple repair functions
    "repair_text",
    "repair_bytes",
    "repair_file",

    # Level 2: Configured engine
    "RepairEngine",
    "classify_status",

    # Level 3: Batches and output
    "repair_files",
    "summarize",
    "package_results",
    "build_archive",
    "PackagingError",

    # Result objects and data structures
    "ChangeRecord",
    "FileResult",
    "FileStatus",
    "RepairStats",

    # Configuration classes
    "RepairConfig",
    "StatusPolicy",
]
