"""Result objects for XLIFF repair.

This module defines the immutable records produced by the repair pipeline:
one ChangeRecord per modified line and one FileResult per input file, plus
aggregate statistics over a batch of results.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple


class FileStatus(Enum):
    """Terminal status of a processed file."""

    PENDING = "PENDING"  # UI-only placeholder, never produced by the engine
    CLEAN = "CLEAN"      # No fixes needed, well-formed
    FIXED = "FIXED"      # Fixes applied
    ERROR = "ERROR"      # Not well-formed, or the file could not be read


@dataclass(frozen=True)
class ChangeRecord:
    """Audit record for a single repaired line.

    Attributes:
        line_number: 1-based line position in the original split
        original_content: Line text before repair
        cleaned_content: Line text after repair
        fix_count: Number of corrections applied to the line (>= 1)
        fix_breakdown: Ordered (stage name, count) pairs for matching stages
    """

    line_number: int
    original_content: str
    cleaned_content: str
    fix_count: int
    fix_breakdown: Tuple[Tuple[str, int], ...] = ()

    def __post_init__(self) -> None:
        """Validate change record."""
        if self.line_number < 1:
            raise ValueError("line_number must be >= 1")
        if self.fix_count < 1:
            raise ValueError("fix_count must be >= 1 for a recorded change")

    @property
    def breakdown(self) -> Dict[str, int]:
        """Per-stage fix counts as a dictionary."""
        return dict(self.fix_breakdown)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "original_content": self.original_content,
            "cleaned_content": self.cleaned_content,
            "fix_count": self.fix_count,
            "fix_breakdown": self.breakdown,
        }


def new_result_id() -> str:
    """Create a process-unique result identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class FileResult:
    """Outcome of repairing and validating one input file.

    Attributes:
        name: Original file name
        byte_size: Size of the raw input in bytes
        cleaned_content: Reassembled text, empty when the read failed
        total_fix_count: Sum of fix counts across all changes
        status: Terminal FileStatus
        error_message: Validation or read diagnostic, None when well-formed
        changes: Per-line change records in line order
        id: Process-unique identifier
        timestamp: Creation time in epoch seconds
    """

    name: str
    byte_size: int
    cleaned_content: str
    total_fix_count: int
    status: FileStatus
    error_message: Optional[str] = None
    changes: Tuple[ChangeRecord, ...] = ()
    id: str = field(default_factory=new_result_id)
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate fix-count aggregation."""
        if self.total_fix_count != sum(change.fix_count for change in self.changes):
            raise ValueError("total_fix_count must equal the sum of change fix counts")
        if self.status is FileStatus.PENDING:
            raise ValueError("A completed FileResult cannot be PENDING")

    @property
    def has_content(self) -> bool:
        """Whether there is cleaned output to save."""
        return len(self.cleaned_content) > 0

    @property
    def changed_line_count(self) -> int:
        """Number of lines that were modified."""
        return len(self.changes)

    def to_dict(self, include_content: bool = False) -> Dict[str, Any]:
        """Convert the result to a JSON-serialisable dictionary.

        Args:
            include_content: Whether to include the full cleaned text

        Returns:
            Dictionary representation of the result
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "byte_size": self.byte_size,
            "status": self.status.value,
            "total_fix_count": self.total_fix_count,
            "error_message": self.error_message,
            "timestamp": self.timestamp,
            "changes": [change.to_dict() for change in self.changes],
        }
        if include_content:
            data["cleaned_content"] = self.cleaned_content
        return data


@dataclass
class RepairStats:
    """Aggregate statistics over a set of file results."""

    total: int = 0
    fixed: int = 0
    clean: int = 0
    error: int = 0
    total_fixes: int = 0

    @classmethod
    def from_results(cls, results: Iterable[FileResult]) -> "RepairStats":
        stats = cls()
        for result in results:
            stats.total += 1
            stats.total_fixes += result.total_fix_count
            if result.status is FileStatus.CLEAN:
                stats.clean += 1
            elif result.status is FileStatus.FIXED:
                stats.fixed += 1
            elif result.status is FileStatus.ERROR:
                stats.error += 1
        return stats

    @property
    def success_rate(self) -> float:
        """Share of files that did not end in ERROR."""
        if self.total == 0:
            return 0.0
        return (self.total - self.error) / self.total

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "fixed": self.fixed,
            "clean": self.clean,
            "error": self.error,
            "total_fixes": self.total_fixes,
        }
