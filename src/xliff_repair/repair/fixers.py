"""Heuristic syntax fixers for single lines of XML text.

Each fixer is a pure function ``(line) -> (line, count)`` backed by an
immutable compiled pattern. They are purely textual and may leave a line
that is still not well-formed; the validator judges the assembled document.

The fixers are order dependent. ``LINE_REPAIR_STAGES`` fixes the order used
by the line orchestrator: control characters first, then start tags,
unquoted attributes, missing attribute spaces and finally ampersands.
"""

import re
from typing import Callable, NamedTuple, Tuple

from xliff_repair.character.control import strip_control_chars

# '<' that cannot open a tag, e.g. the '<' in "<200"
INVALID_START_TAG = re.compile(r"<(?![A-Za-z/!_?])")

# Whitespace, attribute name, '=', then a bare value ending before ws, '>' or '/'
UNQUOTED_ATTRIBUTE = re.compile(r"(\s)([A-Za-z0-9_:-]+)=([^\"'\s<>]+)(?=[\s>/])")

# A quote immediately followed by the next attribute name, e.g. '"1"id='
MISSING_ATTRIBUTE_SPACE = re.compile(r"\"([A-Za-z0-9_:-]+=)")

# '&' that does not start a predefined entity or a character reference
BARE_AMPERSAND = re.compile(r"&(?!(?:amp|lt|gt|apos|quot|#[0-9]+|#x[0-9A-Fa-f]+);)")

LineFix = Callable[[str], Tuple[str, int]]


class RepairStage(NamedTuple):
    """A named step of the line repair pipeline."""

    name: str
    apply: LineFix


def escape_invalid_start_tags(line: str) -> Tuple[str, int]:
    """Escape '<' characters that cannot start a tag.

    Examples:
        >>> escape_invalid_start_tags("<target>Max <200 words</target>")
        ('<target>Max &lt;200 words</target>', 1)
    """
    return INVALID_START_TAG.subn("&lt;", line)


def quote_unquoted_attributes(line: str) -> Tuple[str, int]:
    """Wrap bare attribute values in double quotes.

    Examples:
        >>> quote_unquoted_attributes("<x id=123>")
        ('<x id="123">', 1)
    """
    return UNQUOTED_ATTRIBUTE.subn(r'\1\2="\3"', line)


def insert_missing_attribute_space(line: str) -> Tuple[str, int]:
    """Separate an attribute from the closing quote of the previous one."""
    return MISSING_ATTRIBUTE_SPACE.subn(r'" \1', line)


def escape_bare_ampersands(line: str) -> Tuple[str, int]:
    """Escape '&' characters that are not part of an entity reference.

    Examples:
        >>> escape_bare_ampersands("A & B")
        ('A &amp; B', 1)
        >>> escape_bare_ampersands("&#x41; &amp;")
        ('&#x41; &amp;', 0)
    """
    return BARE_AMPERSAND.subn("&amp;", line)


LINE_REPAIR_STAGES: Tuple[RepairStage, ...] = (
    RepairStage("control_chars", strip_control_chars),
    RepairStage("invalid_start_tags", escape_invalid_start_tags),
    RepairStage("unquoted_attributes", quote_unquoted_attributes),
    RepairStage("missing_attribute_space", insert_missing_attribute_space),
    RepairStage("bare_ampersands", escape_bare_ampersands),
)
