"""Tests for result objects."""

import pytest

from xliff_repair.shared.result import (
    ChangeRecord,
    FileResult,
    FileStatus,
    RepairStats,
)


def _change(line_number: int = 1, fix_count: int = 1) -> ChangeRecord:
    return ChangeRecord(
        line_number=line_number,
        original_content="a & b",
        cleaned_content="a &amp; b",
        fix_count=fix_count,
        fix_breakdown=(("bare_ampersands", fix_count),),
    )


def _result(status: FileStatus, fixes: int = 0, content: str = "<a/>") -> FileResult:
    changes = (_change(fix_count=fixes),) if fixes else ()
    return FileResult(
        name="a.xlf",
        byte_size=4,
        cleaned_content=content,
        total_fix_count=fixes,
        status=status,
        changes=changes,
    )


class TestChangeRecord:
    """Tests for ChangeRecord."""

    def test_breakdown_dict(self):
        """Test breakdown conversion."""
        assert _change(fix_count=2).breakdown == {"bare_ampersands": 2}

    def test_line_number_must_be_positive(self):
        """Test 1-based line numbering."""
        with pytest.raises(ValueError):
            _change(line_number=0)

    def test_fix_count_floor(self):
        """Test that a recorded change always counts at least one fix."""
        with pytest.raises(ValueError):
            _change(fix_count=0)

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = _change().to_dict()

        assert data["line_number"] == 1
        assert data["cleaned_content"] == "a &amp; b"
        assert data["fix_breakdown"] == {"bare_ampersands": 1}


class TestFileResult:
    """Tests for FileResult."""

    def test_ids_are_unique(self):
        """Test that each result gets its own identifier."""
        first = _result(FileStatus.CLEAN)
        second = _result(FileStatus.CLEAN)

        assert first.id != second.id

    def test_total_must_match_changes(self):
        """Test the fix count aggregation invariant."""
        with pytest.raises(ValueError, match="total_fix_count"):
            FileResult(
                name="a.xlf",
                byte_size=1,
                cleaned_content="x",
                total_fix_count=5,
                status=FileStatus.FIXED,
                changes=(_change(fix_count=1),),
            )

    def test_pending_not_allowed(self):
        """Test that PENDING is never a completed status."""
        with pytest.raises(ValueError):
            _result(FileStatus.PENDING)

    def test_has_content(self):
        """Test content detection used by packaging."""
        assert _result(FileStatus.CLEAN).has_content
        assert not _result(FileStatus.ERROR, content="").has_content

    def test_to_dict_excludes_content_by_default(self):
        """Test dictionary conversion."""
        result = _result(FileStatus.FIXED, fixes=1)

        data = result.to_dict()
        assert data["status"] == "FIXED"
        assert data["total_fix_count"] == 1
        assert len(data["changes"]) == 1
        assert "cleaned_content" not in data

        assert result.to_dict(include_content=True)["cleaned_content"] == "<a/>"


class TestRepairStats:
    """Tests for aggregate statistics."""

    def test_from_results(self):
        """Test counting by status."""
        results = [
            _result(FileStatus.CLEAN),
            _result(FileStatus.FIXED, fixes=3),
            _result(FileStatus.FIXED, fixes=1),
            _result(FileStatus.ERROR, content=""),
        ]

        stats = RepairStats.from_results(results)

        assert stats.total == 4
        assert stats.clean == 1
        assert stats.fixed == 2
        assert stats.error == 1
        assert stats.total_fixes == 4
        assert stats.success_rate == 0.75

    def test_empty(self):
        """Test statistics over no results."""
        stats = RepairStats.from_results([])

        assert stats.to_dict() == {
            "total": 0, "fixed": 0, "clean": 0, "error": 0, "total_fixes": 0
        }
        assert stats.success_rate == 0.0
