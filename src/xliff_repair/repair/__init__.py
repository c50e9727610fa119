"""Line repair layer for XLIFF repair.

This layer applies the ordered heuristic fixers to each line and assembles
the repaired document together with its per-line change records.
"""

from .document import AssembledDocument, assemble_document, split_lines
from .fixers import (
    LINE_REPAIR_STAGES,
    RepairStage,
    escape_bare_ampersands,
    escape_invalid_start_tags,
    insert_missing_attribute_space,
    quote_unquoted_attributes,
)
from .line import LineRepair, repair_line

__all__ = [
    "AssembledDocument",
    "assemble_document",
    "split_lines",
    "LINE_REPAIR_STAGES",
    "RepairStage",
    "escape_bare_ampersands",
    "escape_invalid_start_tags",
    "insert_missing_attribute_space",
    "quote_unquoted_attributes",
    "LineRepair",
    "repair_line",
]
