"""Document assembly for line-based repair.

Splits decoded text into lines, repairs each line, records every change and
joins the result back into a single document with ``\\n`` line endings.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from xliff_repair.character.decoding import BOM_CHAR
from xliff_repair.repair.line import repair_line
from xliff_repair.shared.logging import CorrelationLogger, get_logger
from xliff_repair.shared.result import ChangeRecord

# str.splitlines() is not usable: it also breaks on \x0b, \x0c and \x1c-\x1e,
# which the control character stage must see as part of the line.
LINE_BREAK = re.compile(r"\r\n|\n|\r")


@dataclass(frozen=True)
class AssembledDocument:
    """Reassembled document with its change records.

    Attributes:
        content: Cleaned text joined with '\\n'
        changes: ChangeRecords in line order
        total_fix_count: Sum of all change fix counts
        line_count: Number of lines in the split
        had_bom: Whether a leading byte-order mark was removed
    """

    content: str
    changes: Tuple[ChangeRecord, ...]
    total_fix_count: int
    line_count: int
    had_bom: bool = False


def split_lines(text: str) -> List[str]:
    """Split text on CRLF, LF or CR, keeping empty lines."""
    return LINE_BREAK.split(text)


def assemble_document(
    text: str,
    logger: Optional[CorrelationLogger] = None,
) -> AssembledDocument:
    """Repair every line of a document and reassemble it.

    Args:
        text: Decoded document text
        logger: Optional correlation logger for per-line debug records

    Returns:
        AssembledDocument with cleaned content and change records
    """
    log = logger or get_logger(__name__, None, "assembler")

    had_bom = text.startswith(BOM_CHAR)
    if had_bom:
        text = text[len(BOM_CHAR):]

    lines = split_lines(text)
    cleaned_lines: List[str] = []
    changes: List[ChangeRecord] = []

    for index, line in enumerate(lines):
        result = repair_line(line)
        if not result.changed:
            cleaned_lines.append(line)
            continue

        line_number = index + 1
        changes.append(
            ChangeRecord(
                line_number=line_number,
                original_content=line,
                cleaned_content=result.cleaned,
                fix_count=result.fix_count,
                fix_breakdown=result.breakdown,
            )
        )
        cleaned_lines.append(result.cleaned)
        log.debug(
            "Line repaired",
            extra={"line_number": line_number, "fix_count": result.fix_count},
        )

    return AssembledDocument(
        content="\n".join(cleaned_lines),
        changes=tuple(changes),
        total_fix_count=sum(change.fix_count for change in changes),
        line_count=len(lines),
        had_bom=had_bom,
    )
