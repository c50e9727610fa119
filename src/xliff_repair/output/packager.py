"""Packaging of cleaned output.

A single result with content is written as one file named
``<prefix><original name>``; several results are bundled into one zip
archive whose entries keep the original file names. Results without content
(read failures) are never packaged.
"""

import io
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from xliff_repair.shared.config import RepairConfig
from xliff_repair.shared.logging import get_logger
from xliff_repair.shared.result import FileResult

logger = get_logger(__name__, None, "packager")


class PackagingError(Exception):
    """Raised when cleaned output cannot be packaged."""


@dataclass(frozen=True)
class PackageResult:
    """Where the packaged output was written.

    Attributes:
        path: Written file or archive
        entry_names: Names of the packaged results
        is_archive: Whether ``path`` is a zip archive
    """

    path: Path
    entry_names: Tuple[str, ...]
    is_archive: bool


def packageable(results: Iterable[FileResult]) -> List[FileResult]:
    """Results that carry cleaned content, in the given order."""
    return [result for result in results if result.has_content]


def duplicate_names(results: Iterable[FileResult]) -> List[str]:
    """Names carried by more than one result, in first-seen order."""
    counts: Dict[str, int] = {}
    for result in results:
        counts[result.name] = counts.get(result.name, 0) + 1
    return [name for name, count in counts.items() if count > 1]


def _unique_entries(results: Iterable[FileResult]) -> List[FileResult]:
    seen = set()
    unique = []
    for result in results:
        if result.name in seen:
            logger.warning(
                "Duplicate archive entry skipped",
                extra={"file": result.name, "result_id": result.id},
            )
            continue
        seen.add(result.name)
        unique.append(result)
    return unique


def build_archive(results: Iterable[FileResult]) -> bytes:
    """Build an in-memory zip archive of cleaned results.

    Args:
        results: Processed files; those without content are skipped

    Returns:
        Zip archive bytes, one UTF-8 entry per unique file name

    Raises:
        PackagingError: If no result has content
    """
    entries = _unique_entries(packageable(results))
    if not entries:
        raise PackagingError("No files with content to package")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for result in entries:
            archive.writestr(result.name, result.cleaned_content.encode("utf-8"))
    return buffer.getvalue()


def package_results(
    results: Iterable[FileResult],
    output_dir: Union[str, Path],
    config: Optional[RepairConfig] = None,
    reject_duplicates: bool = False,
) -> PackageResult:
    """Write cleaned output to disk.

    Args:
        results: Processed files
        output_dir: Directory receiving the file or archive
        config: Supplies the single-file prefix and archive name (defaults if None)
        reject_duplicates: Fail instead of keeping only the first result when
            several results share a file name

    Returns:
        PackageResult describing what was written

    Raises:
        PackagingError: If nothing has content, names clash while
            reject_duplicates is set, or the output cannot be written
    """
    config = config or RepairConfig()
    with_content = packageable(results)
    if not with_content:
        raise PackagingError("No files with content to package")

    if reject_duplicates:
        clashes = duplicate_names(with_content)
        if clashes:
            raise PackagingError(
                f"Several files share the name(s) {', '.join(clashes)}; "
                "an archive can hold only one of each"
            )

    directory = Path(output_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)

        if len(with_content) == 1:
            result = with_content[0]
            target = directory / f"{config.single_file_prefix}{result.name}"
            target.write_bytes(result.cleaned_content.encode("utf-8"))
            logger.info("Cleaned file written", extra={"path": str(target)})
            return PackageResult(path=target, entry_names=(result.name,), is_archive=False)

        entries = _unique_entries(with_content)
        target = directory / config.archive_name
        target.write_bytes(build_archive(entries))
    except OSError as e:
        raise PackagingError(f"Could not write output to {directory}: {e}") from e

    logger.info(
        "Cleaned archive written",
        extra={"path": str(target), "entries": len(entries)},
    )
    return PackageResult(
        path=target,
        entry_names=tuple(result.name for result in entries),
        is_archive=True,
    )
