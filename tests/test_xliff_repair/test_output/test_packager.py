"""Tests for output packaging."""

import io
import tempfile
import zipfile
from pathlib import Path

import pytest

from xliff_repair.api.engine import repair_text
from xliff_repair.output.packager import (
    PackagingError,
    build_archive,
    duplicate_names,
    package_results,
    packageable,
)
from xliff_repair.shared.config import RepairConfig
from xliff_repair.shared.result import FileResult, FileStatus


def _read_failure(name: str) -> FileResult:
    return FileResult(
        name=name,
        byte_size=0,
        cleaned_content="",
        total_fix_count=0,
        status=FileStatus.ERROR,
        error_message="Read error",
    )


class TestPackageable:
    """Tests for result selection."""

    def test_results_without_content_skipped(self):
        results = [repair_text("a.xlf", "<a/>"), _read_failure("b.xlf")]

        assert [r.name for r in packageable(results)] == ["a.xlf"]

    def test_error_results_with_content_kept(self):
        """Test that malformed output is still offered for inspection."""
        result = repair_text("bad.xlf", "<a><b></a>")

        assert result.status is FileStatus.ERROR
        assert packageable([result]) == [result]


class TestPackageResults:
    """Tests for writing packaged output."""

    def test_single_file(self):
        results = [repair_text("ui.xlf", "<a>x & y</a>"), _read_failure("gone.xlf")]

        with tempfile.TemporaryDirectory() as temp_dir:
            package = package_results(results, temp_dir)

            assert package.is_archive is False
            assert package.path == Path(temp_dir) / "fixed_ui.xlf"
            assert package.entry_names == ("ui.xlf",)
            assert package.path.read_text(encoding="utf-8") == "<a>x &amp; y</a>"

    def test_multiple_files_zip(self):
        results = [
            repair_text("de.xlf", "<a>ä & ö</a>"),
            repair_text("fr.xlf", "<a>é</a>"),
        ]

        with tempfile.TemporaryDirectory() as temp_dir:
            package = package_results(results, Path(temp_dir) / "out")

            assert package.is_archive is True
            assert package.path.name == "cleaned_xliff_files.zip"
            assert package.entry_names == ("de.xlf", "fr.xlf")
            with zipfile.ZipFile(package.path) as archive:
                assert archive.namelist() == ["de.xlf", "fr.xlf"]
                assert archive.read("de.xlf").decode("utf-8") == "<a>ä &amp; ö</a>"

    def test_custom_names_from_config(self):
        config = RepairConfig(single_file_prefix="clean-", archive_name="batch.zip")

        with tempfile.TemporaryDirectory() as temp_dir:
            single = package_results([repair_text("a.xml", "<a/>")], temp_dir, config)
            multi = package_results(
                [repair_text("a.xml", "<a/>"), repair_text("b.xml", "<b/>")],
                temp_dir,
                config,
            )

            assert single.path.name == "clean-a.xml"
            assert multi.path.name == "batch.zip"

    def test_nothing_to_package(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(PackagingError, match="No files with content"):
                package_results([_read_failure("a.xlf")], temp_dir)

    def test_unwritable_output_dir(self):
        """Test that filesystem errors surface as PackagingError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = Path(temp_dir) / "file"
            blocker.write_text("x")

            with pytest.raises(PackagingError, match="Could not write"):
                package_results([repair_text("a.xml", "<a/>")], blocker / "sub")


class TestBuildArchive:
    """Tests for in-memory archives."""

    def test_duplicate_names_keep_first(self):
        results = [
            repair_text("same.xlf", "<first/>"),
            repair_text("same.xlf", "<second/>"),
            repair_text("other.xlf", "<other/>"),
        ]

        data = build_archive(results)

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.namelist() == ["same.xlf", "other.xlf"]
            assert archive.read("same.xlf") == b"<first/>"

    def test_empty(self):
        with pytest.raises(PackagingError):
            build_archive([])


class TestDuplicateNames:
    """Tests for file name clashes."""

    def test_duplicate_names(self):
        results = [
            repair_text("messages.xlf", "<a/>"),
            repair_text("other.xlf", "<b/>"),
            repair_text("messages.xlf", "<c/>"),
        ]

        assert duplicate_names(results) == ["messages.xlf"]
        assert duplicate_names(results[:2]) == []

    def test_reject_duplicates(self):
        """Test that clashing names fail and nothing is written."""
        results = [repair_text("messages.xlf", "<a/>"), repair_text("messages.xlf", "<b/>")]

        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(PackagingError, match="messages.xlf"):
                package_results(results, temp_dir, reject_duplicates=True)

            assert list(Path(temp_dir).iterdir()) == []

    def test_duplicates_without_content_ignored(self):
        results = [repair_text("messages.xlf", "<a/>"), _read_failure("messages.xlf")]

        with tempfile.TemporaryDirectory() as temp_dir:
            package = package_results(results, temp_dir, reject_duplicates=True)

            assert package.path.name == "fixed_messages.xlf"
