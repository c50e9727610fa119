"""XML well-formedness validation.

The repaired document is handed to libxml2 through lxml. Only generic XML
syntax is checked: no DTD is loaded, no entity is resolved and nothing is
fetched from the network.
"""

from dataclasses import dataclass
from typing import Optional

from lxml import etree

EMPTY_FILE_MESSAGE = "File is empty"
GENERIC_PARSE_ERROR = "XML Parsing Error"


@dataclass(frozen=True)
class WellFormedness:
    """Validation verdict.

    Attributes:
        valid: Whether the document is well-formed XML
        error: Parser diagnostic when invalid, None otherwise
    """

    valid: bool
    error: Optional[str] = None


def _create_parser() -> etree.XMLParser:
    # The text was decoded already, so any declared encoding is overridden
    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
        huge_tree=True,
        remove_blank_text=False,
    )


def check_well_formed(text: str) -> WellFormedness:
    """Check a document against XML well-formedness rules.

    Args:
        text: Reassembled document text

    Returns:
        WellFormedness with a parser diagnostic when the document is invalid

    Examples:
        >>> check_well_formed("<root><item/></root>").valid
        True
        >>> check_well_formed("   ").error
        'File is empty'
    """
    if not text or not text.strip():
        return WellFormedness(valid=False, error=EMPTY_FILE_MESSAGE)

    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        return WellFormedness(valid=False, error=f"Document cannot be encoded as UTF-8: {e}")

    try:
        etree.fromstring(data, parser=_create_parser())
    except etree.XMLSyntaxError as e:
        return WellFormedness(valid=False, error=str(e) or GENERIC_PARSE_ERROR)

    return WellFormedness(valid=True)
