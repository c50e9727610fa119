"""Tests for the well-formedness validator."""

from xliff_repair.validation.wellformed import EMPTY_FILE_MESSAGE, check_well_formed

XLIFF_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file source-language="en" target-language="de" datatype="plaintext" original="ui">
    <body>
      <trans-unit id="1">
        <source>Max &lt;200 words &amp; more</source>
        <target>Max. &lt;200 Wörter &amp; mehr</target>
      </trans-unit>
    </body>
  </file>
</xliff>"""


class TestCheckWellFormed:
    """Tests for check_well_formed."""

    def test_valid_xliff(self):
        result = check_well_formed(XLIFF_DOCUMENT)

        assert result.valid is True
        assert result.error is None

    def test_empty_document(self):
        assert check_well_formed("").error == EMPTY_FILE_MESSAGE
        assert check_well_formed("").valid is False

    def test_whitespace_only_document(self):
        result = check_well_formed("  \n\t \n")

        assert result.valid is False
        assert result.error == EMPTY_FILE_MESSAGE

    def test_mismatched_tags(self):
        result = check_well_formed("<a><b></a>")

        assert result.valid is False
        assert result.error

    def test_unclosed_root(self):
        assert check_well_formed("<root>\n  <a/>\n").valid is False

    def test_multiple_roots(self):
        assert check_well_formed("<a/><b/>").valid is False

    def test_bare_ampersand(self):
        assert check_well_formed("<a>x & y</a>").valid is False

    def test_bare_less_than(self):
        assert check_well_formed("<a>x <5</a>").valid is False

    def test_control_character(self):
        assert check_well_formed("<a>x\x01</a>").valid is False

    def test_unquoted_attribute(self):
        assert check_well_formed("<a id=1/>").valid is False

    def test_missing_attribute_space(self):
        assert check_well_formed('<a x="1"y="2"/>').valid is False

    def test_character_references(self):
        assert check_well_formed("<a>&#65;&#x41;&apos;&quot;</a>").valid is True

    def test_unencodable_text(self):
        """Test that a lone surrogate is reported instead of raising."""
        result = check_well_formed("<a>\ud800</a>")

        assert result.valid is False
        assert "UTF-8" in result.error
