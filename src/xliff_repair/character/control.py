"""Illegal control character handling for XML 1.0 text.

XML 1.0 only admits tab, line feed and carriage return from the C0 control
block. Every other code point in 0x00-0x1F makes a document non-well-formed
and is a common artefact of broken translation memory exports.
"""

import re
from typing import List, Tuple

# C0 control characters illegal in XML 1.0 (tab, LF and CR are excluded)
ILLEGAL_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")

ALLOWED_CONTROL_CHARS = {0x0009, 0x000A, 0x000D}
CONTROL_CHARS_END = 0x001F
NUL = 0x0000


def is_illegal_control_char(char_code: int) -> bool:
    """Check if a code point is a control character XML 1.0 forbids.

    Args:
        char_code: Unicode code point

    Returns:
        True if the character must be stripped
    """
    return 0 <= char_code <= CONTROL_CHARS_END and char_code not in ALLOWED_CONTROL_CHARS


def strip_control_chars(line: str) -> Tuple[str, int]:
    """Remove illegal control characters from a line.

    Args:
        line: Text to clean

    Returns:
        Tuple of (stripped text, number of characters removed)

    Examples:
        >>> strip_control_chars("Value\\x00 is here")
        ('Value is here', 1)
        >>> strip_control_chars("tab\\tkept")
        ('tab\\tkept', 0)
    """
    return ILLEGAL_CONTROL_CHARS.subn("", line)


def describe_control_char(char_code: int) -> str:
    """Short label for an illegal control character.

    NUL gets its own name; everything else is shown as a two-digit hex code.
    """
    if char_code == NUL:
        return "NUL"
    return f"x{char_code:02X}"


def find_control_chars(text: str) -> List[Tuple[int, int]]:
    """List (index, code point) pairs for every illegal control character."""
    return [(match.start(), ord(match.group())) for match in ILLEGAL_CONTROL_CHARS.finditer(text)]


def visualize_control_chars(text: str, template: str = "[{label}]") -> str:
    """Render illegal control characters as visible labels.

    Args:
        text: Original line text
        template: Format string receiving ``label`` and ``code``

    Returns:
        Text with each illegal character replaced by its label
    """
    def _label(match: "re.Match[str]") -> str:
        code = ord(match.group())
        return template.format(label=describe_control_char(code), code=code)

    return ILLEGAL_CONTROL_CHARS.sub(_label, text)
