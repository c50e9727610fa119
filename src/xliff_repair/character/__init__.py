"""Character processing layer for XLIFF repair.

This layer turns raw bytes into text and removes the control characters
XML 1.0 does not allow.
"""

from .control import (
    describe_control_char,
    find_control_chars,
    is_illegal_control_char,
    strip_control_chars,
    visualize_control_chars,
)
from .decoding import BOM_CHAR, BOMDetector, DecodedContent, decode_content

__all__ = [
    "BOM_CHAR",
    "BOMDetector",
    "DecodedContent",
    "decode_content",
    "describe_control_char",
    "find_control_chars",
    "is_illegal_control_char",
    "strip_control_chars",
    "visualize_control_chars",
]
