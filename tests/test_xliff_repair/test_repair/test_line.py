"""Tests for the line repair orchestrator."""

from xliff_repair.repair.fixers import LINE_REPAIR_STAGES, RepairStage
from xliff_repair.repair.line import repair_line


class TestRepairLine:
    """Tests for repair_line."""

    def test_clean_line_unchanged(self):
        """Test that a line needing no fixes passes through."""
        line = '  <trans-unit id="1" resname="a">Tom &amp; Jerry &#169;</trans-unit>'

        result = repair_line(line)

        assert result.cleaned == line
        assert result.fix_count == 0
        assert result.breakdown == ()
        assert not result.changed

    def test_empty_line(self):
        result = repair_line("")

        assert result.cleaned == ""
        assert not result.changed

    def test_combined_repairs(self):
        """Test control characters, start tags and ampersands on one line."""
        result = repair_line("Value\x00 is <5 and a & b")

        assert result.cleaned == "Value is &lt;5 and a &amp; b"
        assert result.fix_count == 3
        assert result.counts == {
            "control_chars": 1,
            "invalid_start_tags": 1,
            "bare_ampersands": 1,
        }
        assert result.changed

    def test_escaped_start_tag_not_double_escaped(self):
        """Test that the ampersand stage leaves the new &lt; alone."""
        result = repair_line("<200")

        assert result.cleaned == "&lt;200"
        assert result.fix_count == 1

    def test_quoting_then_ampersand(self):
        """Test that later stages see the output of earlier ones."""
        result = repair_line("<x id=a&b>")

        assert result.cleaned == '<x id="a&amp;b">'
        assert result.fix_count == 2

    def test_attribute_repairs(self):
        result = repair_line('<x a=1 b="2"c="3">')

        assert result.cleaned == '<x a="1" b="2" c="3">'
        assert result.counts == {"unquoted_attributes": 1, "missing_attribute_space": 1}

    def test_breakdown_follows_stage_order(self):
        result = repair_line("a & <1 \x01")

        assert [name for name, _ in result.breakdown] == [
            "control_chars", "invalid_start_tags", "bare_ampersands"
        ]

    def test_fix_count_floor(self):
        """Test that a change reported with zero fixes still counts once."""
        silent = RepairStage("silent", lambda line: (line.upper(), 0))

        result = repair_line("abc", stages=(silent,))

        assert result.cleaned == "ABC"
        assert result.fix_count == 1
        assert result.changed

    def test_custom_stages_subset(self):
        """Test running only part of the pipeline."""
        result = repair_line("a & <1", stages=LINE_REPAIR_STAGES[:2])

        assert result.cleaned == "a & &lt;1"
        assert result.fix_count == 1
