"""Repair engine API with never-fail per-file processing.

This module ties the layers together: decode, assemble, validate and
classify. Every input, however malformed or unreadable, yields a FileResult;
no exception crosses the per-file boundary.

Progressive API:
- Module-level functions: repair_text(), repair_bytes(), repair_file()
- Configured engine: RepairEngine
- Batches: repair_files(), RepairEngine.repair_batch()
"""

import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from xliff_repair.character.decoding import decode_content
from xliff_repair.repair.document import assemble_document
from xliff_repair.shared.config import RepairConfig, StatusPolicy
from xliff_repair.shared.logging import get_logger
from xliff_repair.shared.result import FileResult, FileStatus, RepairStats, new_result_id
from xliff_repair.validation.wellformed import check_well_formed

ContentType = Union[str, bytes]
PathType = Union[str, Path]
CompletionCallback = Callable[[FileResult], None]

READ_ERROR_MESSAGE = "Read error"
CONTENT_ERROR_MESSAGE = "Failed to read file content"
MS_PER_SECOND = 1000


def classify_status(
    total_fix_count: int,
    well_formed: bool,
    policy: StatusPolicy = StatusPolicy.STRICT,
) -> FileStatus:
    """Combine the fix count and validation outcome into a file status.

    Args:
        total_fix_count: Corrections applied to the whole file
        well_formed: Whether the reassembled document passed validation
        policy: STRICT reports any malformed document as ERROR; FIXES_FIRST
            reports any file with applied fixes as FIXED

    Returns:
        Terminal FileStatus
    """
    if policy is StatusPolicy.FIXES_FIRST:
        if total_fix_count > 0:
            return FileStatus.FIXED
        if well_formed:
            return FileStatus.CLEAN
        return FileStatus.ERROR

    if not well_formed:
        return FileStatus.ERROR
    if total_fix_count > 0:
        return FileStatus.FIXED
    return FileStatus.CLEAN


def _utf8_size(text: str) -> int:
    return len(text.encode("utf-8", errors="surrogatepass"))


class RepairEngine:
    """Configured repair engine.

    The engine keeps no mutable state between calls and can be shared
    across threads or used from many call sites at once.

    Examples:
        >>> engine = RepairEngine()
        >>> result = engine.repair_text("a.xlf", "<root>A & B</root>")
        >>> result.status
        <FileStatus.FIXED: 'FIXED'>
        >>> result.cleaned_content
        '<root>A &amp; B</root>'
    """

    def __init__(self, config: Optional[RepairConfig] = None) -> None:
        self.config = config or RepairConfig()
        self.logger = get_logger(__name__, None, "engine")

    def repair(
        self,
        name: str,
        content: ContentType,
        byte_size: Optional[int] = None,
    ) -> FileResult:
        """Repair in-memory content, dispatching on its type.

        Args:
            name: File name reported in the result
            content: Decoded text or raw bytes
            byte_size: Size to report, derived from the content when omitted

        Returns:
            FileResult for the content
        """
        if isinstance(content, bytes):
            result = self.repair_bytes(name, content)
            if byte_size is not None and byte_size != result.byte_size:
                return _with_size(result, byte_size)
            return result
        return self.repair_text(name, content, byte_size)

    def repair_text(
        self,
        name: str,
        text: str,
        byte_size: Optional[int] = None,
    ) -> FileResult:
        """Repair decoded text and validate the result.

        Args:
            name: File name reported in the result
            text: Decoded document text
            byte_size: Size of the original input, UTF-8 length of text if omitted

        Returns:
            FileResult with cleaned content, change records and status
        """
        result_id = new_result_id()
        log = self.logger.bind(result_id)
        size = byte_size if byte_size is not None else _utf8_size(text)
        start_time = time.time()

        try:
            document = assemble_document(text, log)
            verdict = check_well_formed(document.content)
        except Exception:
            log.exception("Unexpected failure while repairing file", extra={"file": name})
            return self._failed_result(name, size, CONTENT_ERROR_MESSAGE, result_id)

        status = classify_status(
            document.total_fix_count, verdict.valid, self.config.status_policy
        )
        result = FileResult(
            id=result_id,
            name=name,
            byte_size=size,
            cleaned_content=document.content,
            total_fix_count=document.total_fix_count,
            status=status,
            error_message=None if verdict.valid else verdict.error,
            changes=document.changes,
        )

        log.info(
            "File processed",
            extra={
                "file": name,
                "status": status.value,
                "total_fix_count": result.total_fix_count,
                "changed_lines": result.changed_line_count,
                "well_formed": verdict.valid,
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            },
        )
        return result

    def repair_bytes(self, name: str, data: bytes) -> FileResult:
        """Decode raw bytes and repair the text.

        Undecodable input, possible only with strict decoding, yields an
        ERROR result instead of raising.
        """
        try:
            decoded = decode_content(
                data,
                default_encoding=self.config.input_encoding,
                errors=self.config.decode_errors,
            )
        except (UnicodeDecodeError, LookupError):
            self.logger.warning(
                "Could not decode file content",
                extra={"file": name, "encoding": self.config.input_encoding},
            )
            return self._failed_result(name, len(data), CONTENT_ERROR_MESSAGE)

        return self.repair_text(name, decoded.text, byte_size=len(data))

    def repair_path(self, path: PathType) -> FileResult:
        """Read a file from disk and repair it.

        Args:
            path: Path to the file

        Returns:
            FileResult named after the file's base name
        """
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            self.logger.warning(
                "Could not read file", extra={"file": str(file_path), "error": str(e)}
            )
            return self._failed_result(
                file_path.name, _file_size(file_path), READ_ERROR_MESSAGE
            )

        return self.repair_bytes(file_path.name, data)

    def repair_batch(
        self,
        items: Iterable[Tuple[str, ContentType]],
    ) -> List[FileResult]:
        """Repair many in-memory files in parallel.

        Args:
            items: (name, content) pairs

        Returns:
            Results in input order
        """
        arguments = [(name, content, self.config) for name, content in items]
        return _run_parallel(_repair_content_worker, arguments, self.config.max_workers)

    def _failed_result(
        self,
        name: str,
        byte_size: int,
        message: str,
        result_id: Optional[str] = None,
    ) -> FileResult:
        return FileResult(
            id=result_id or new_result_id(),
            name=name,
            byte_size=byte_size,
            cleaned_content="",
            total_fix_count=0,
            status=FileStatus.ERROR,
            error_message=message,
            changes=(),
        )


def _with_size(result: FileResult, byte_size: int) -> FileResult:
    return replace(result, byte_size=byte_size)


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _repair_path_worker(path: str, config: RepairConfig) -> FileResult:
    return RepairEngine(config).repair_path(path)


def _repair_content_worker(name: str, content: ContentType, config: RepairConfig) -> FileResult:
    return RepairEngine(config).repair(name, content)


def _run_parallel(
    worker: Callable[..., FileResult],
    arguments: Sequence[Tuple[Any, ...]],
    max_workers: Optional[int],
    on_complete: Optional[CompletionCallback] = None,
) -> List[FileResult]:
    """Run one task per file and return results in submission order.

    ``on_complete`` is called in the parent process with each result as soon
    as its task finishes, so in completion order rather than input order.
    """
    if not arguments:
        return []

    if len(arguments) == 1 or max_workers == 1:
        ordered = []
        for args in arguments:
            result = worker(*args)
            ordered.append(result)
            if on_complete is not None:
                on_complete(result)
        return ordered

    results: Dict[int, FileResult] = {}
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(worker, *args): index
            for index, args in enumerate(arguments)
        }
        for future in as_completed(future_to_index):
            result = future.result()
            results[future_to_index[future]] = result
            if on_complete is not None:
                on_complete(result)

    return [results[index] for index in range(len(arguments))]


# Module-level convenience functions

def repair_text(
    name: str,
    text: str,
    config: Optional[RepairConfig] = None,
    byte_size: Optional[int] = None,
) -> FileResult:
    """Repair decoded text with an optional configuration."""
    return RepairEngine(config).repair_text(name, text, byte_size)


def repair_bytes(name: str, data: bytes, config: Optional[RepairConfig] = None) -> FileResult:
    """Repair raw bytes with an optional configuration."""
    return RepairEngine(config).repair_bytes(name, data)


def repair_file(path: PathType, config: Optional[RepairConfig] = None) -> FileResult:
    """Repair a file on disk with an optional configuration."""
    return RepairEngine(config).repair_path(path)


def repair_files(
    paths: Iterable[PathType],
    config: Optional[RepairConfig] = None,
    on_complete: Optional[CompletionCallback] = None,
) -> List[FileResult]:
    """Repair several files in parallel, one worker task per file.

    Args:
        paths: Files to repair
        config: Optional configuration, also controls ``max_workers``
        on_complete: Called with each result as soon as its file is done

    Returns:
        Results in the same order as ``paths``
    """
    repair_config = config or RepairConfig()
    arguments = [(str(path), repair_config) for path in paths]
    return _run_parallel(
        _repair_path_worker, arguments, repair_config.max_workers, on_complete
    )


def summarize(results: Iterable[FileResult]) -> RepairStats:
    """Aggregate counts over a set of results."""
    return RepairStats.from_results(results)


def sort_newest_first(results: Iterable[FileResult]) -> List[FileResult]:
    """Order results by creation time, most recent first."""
    return sorted(results, key=lambda result: result.timestamp, reverse=True)
