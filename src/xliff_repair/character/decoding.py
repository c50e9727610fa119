"""Byte-order-mark aware decoding of raw file bytes.

Encoding is never guessed: a leading BOM selects the codec, anything else is
decoded with the configured encoding. The BOM code point is kept in the
decoded text so that the document assembler handles it the same way for
bytes and for text input.
"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Optional

BOM_CHAR = "\ufeff"


@dataclass(frozen=True)
class DecodedContent:
    """Decoded text plus the codec that produced it.

    Attributes:
        text: Decoded text, including a leading U+FEFF if a BOM was present
        encoding: Codec used for decoding
        bom_detected: Whether the codec was chosen from a byte-order mark
    """

    text: str
    encoding: str
    bom_detected: bool


class BOMDetector:
    """Byte Order Mark (BOM) detection for the Unicode encodings."""

    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        b"\xef\xbb\xbf": "utf-8",
        b"\xff\xfe": "utf-16-le",
        b"\xfe\xff": "utf-16-be",
        b"\xff\xfe\x00\x00": "utf-32-le",
        b"\x00\x00\xfe\xff": "utf-32-be",
    }

    def detect(self, data: bytes) -> Optional[str]:
        """Detect encoding based on BOM.

        Args:
            data: Byte data to analyze

        Returns:
            Codec name if a BOM is present, None otherwise
        """
        if not data:
            return None

        # UTF-32 LE shares its first two bytes with UTF-16 LE
        for bom_bytes, encoding in sorted(
            self.BOM_PATTERNS.items(), key=lambda x: len(x[0]), reverse=True
        ):
            if data.startswith(bom_bytes):
                return encoding
        return None


def decode_content(
    data: bytes,
    default_encoding: str = "utf-8",
    errors: str = "replace",
) -> DecodedContent:
    """Decode raw bytes to text.

    Args:
        data: Raw file bytes
        default_encoding: Codec for input without a BOM
        errors: Codec error handler, 'replace' or 'strict'

    Returns:
        DecodedContent with the text and codec used

    Raises:
        UnicodeDecodeError: If ``errors`` is 'strict' and the bytes are invalid
    """
    bom_encoding = BOMDetector().detect(data)
    encoding = bom_encoding or default_encoding
    text = data.decode(encoding, errors=errors)
    return DecodedContent(text=text, encoding=encoding, bom_detected=bom_encoding is not None)
