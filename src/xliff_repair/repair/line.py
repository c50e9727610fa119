"""Line repair orchestration.

Runs every repair stage over a single line in the fixed pipeline order and
reports the cleaned text, the total number of corrections and a per-stage
breakdown.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from xliff_repair.repair.fixers import LINE_REPAIR_STAGES, RepairStage


@dataclass(frozen=True)
class LineRepair:
    """Outcome of repairing one line.

    Attributes:
        original: Line text before repair
        cleaned: Line text after all stages ran
        fix_count: Total corrections, at least 1 whenever the text changed
        breakdown: (stage name, count) pairs for stages that matched
    """

    original: str
    cleaned: str
    fix_count: int
    breakdown: Tuple[Tuple[str, int], ...] = ()

    @property
    def changed(self) -> bool:
        """Whether the line must be recorded as a change."""
        return self.fix_count > 0 or self.cleaned != self.original

    @property
    def counts(self) -> Dict[str, int]:
        """Fix count per stage name."""
        return dict(self.breakdown)


def repair_line(
    line: str,
    stages: Sequence[RepairStage] = LINE_REPAIR_STAGES,
) -> LineRepair:
    """Repair a single line of text.

    Args:
        line: Line text without its line terminator
        stages: Ordered repair stages, the standard pipeline by default

    Returns:
        LineRepair with cleaned text and fix counts

    Examples:
        >>> result = repair_line("Value\\x00 is <5 and a & b")
        >>> result.cleaned
        'Value is &lt;5 and a &amp; b'
        >>> result.fix_count
        3
    """
    current = line
    total = 0
    breakdown = []

    for stage in stages:
        current, count = stage.apply(current)
        if count:
            total += count
            breakdown.append((stage.name, count))

    # A change must never be recorded with a zero count
    if current != line and total == 0:
        total = 1

    return LineRepair(
        original=line,
        cleaned=current,
        fix_count=total,
        breakdown=tuple(breakdown),
    )
