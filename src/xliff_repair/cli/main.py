"""Main CLI entry point for the xliff-repair command-line tool.

Provides batch repair of XML/XLIFF files with packaging of the cleaned
output, and a check command that reports per-file and per-line changes
without writing anything.
"""

import argparse
import csv
import io
import json
import logging
import sys
import time
from pathlib import Path
from typing import Iterator, List, Optional

from xliff_repair import __version__
from xliff_repair.api.engine import repair_files, summarize
from xliff_repair.character.control import visualize_control_chars
from xliff_repair.output.packager import PackagingError, package_results
from xliff_repair.shared.config import ConfigError, RepairConfig, StatusPolicy
from xliff_repair.shared.logging import get_logger
from xliff_repair.shared.result import FileResult, FileStatus

POLICY_CHOICES = {
    "strict": StatusPolicy.STRICT,
    "fixes-first": StatusPolicy.FIXES_FIRST,
}
STATUS_MARKERS = {
    FileStatus.CLEAN: "✓",
    FileStatus.FIXED: "~",
    FileStatus.ERROR: "✗",
}
MAX_LISTED_CHANGES = 20


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.repair_config = RepairConfig()
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        A missing or unusable file leaves the defaults in place.
        """
        config = cls()
        if config_path.exists():
            try:
                config.repair_config = RepairConfig.from_json(config_path.read_text())
            except (OSError, ConfigError) as e:
                print(f"Warning: Could not load config file: {e}", file=sys.stderr)

        return config


class ProgressTracker:
    """Progress tracking for long-running batches."""

    def __init__(self, total: int, description: str = "Processing", enabled: bool = True):
        self.total = total
        self.completed = 0
        self.description = description
        self.enabled = enabled
        self.start_time = time.time()
        self.last_update = 0.0

    def update(self, increment: int = 1) -> None:
        """Update progress and display if needed."""
        self.completed += increment
        current_time = time.time()

        # Update every second or on completion
        if current_time - self.last_update >= 1.0 or self.completed >= self.total:
            self._display_progress()
            self.last_update = current_time

    def _display_progress(self) -> None:
        if not self.enabled or self.total == 0:
            return

        percentage = (self.completed / self.total) * 100
        elapsed = time.time() - self.start_time

        eta_str = ""
        if 0 < self.completed < self.total and elapsed > 0:
            eta = (self.total - self.completed) / (self.completed / elapsed)
            eta_str = f", ETA: {eta:.0f}s"

        progress_bar = "=" * int(percentage // 2)
        progress_bar += " " * (50 - len(progress_bar))

        print(f"\r{self.description}: [{progress_bar}] "
              f"{percentage:.1f}% ({self.completed}/{self.total}){eta_str}",
              end="", file=sys.stderr)

        if self.completed >= self.total:
            print(file=sys.stderr)


class FileRepairProcessor:
    """File discovery and batch repair for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.logger = get_logger(__name__, None, "cli_processor")

    def find_xml_files(self, path: Path, recursive: bool = True) -> Iterator[Path]:
        """Find repairable files in path.

        Files named explicitly are always returned; directories are scanned
        for the configured extensions.
        """
        extensions = self.config.repair_config.file_extensions
        if path.is_file():
            yield path
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            for candidate in sorted(candidates):
                if candidate.is_file() and candidate.suffix.lower() in extensions:
                    yield candidate
        else:
            # Missing paths are passed on so they surface as read errors
            yield path

    def batch_process(self, paths: List[Path], recursive: bool = True) -> List[FileResult]:
        """Repair all files found under paths, in discovery order."""
        all_files: List[Path] = []
        for path in paths:
            all_files.extend(self.find_xml_files(path, recursive))

        if not all_files:
            return []

        progress = ProgressTracker(
            len(all_files), "Repairing files", enabled=not self.config.quiet
        )
        results = repair_files(
            all_files,
            self.config.repair_config,
            on_complete=lambda _result: progress.update(),
        )

        self.logger.info(
            "Batch complete", extra={"files": len(results), **summarize(results).to_dict()}
        )
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xliff-repair",
        description="Repair malformed XML/XLIFF translation files line by line"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "paths",
            nargs="+",
            type=Path,
            help="Files or directories to process"
        )
        sub.add_argument(
            "--recursive", "-r",
            action="store_true",
            help="Recursively process directories"
        )
        sub.add_argument(
            "--config", "-c",
            type=Path,
            help="Configuration file path (JSON)"
        )
        sub.add_argument(
            "--policy",
            choices=sorted(POLICY_CHOICES),
            help="Status policy for files that are fixed but still malformed"
        )
        sub.add_argument(
            "--workers", "-w",
            type=int,
            help="Number of parallel workers"
        )

    # Repair command
    repair_parser = subparsers.add_parser("repair", help="Repair files and write cleaned output")
    add_common_arguments(repair_parser)
    repair_parser.add_argument(
        "--output-dir", "-d",
        type=Path,
        default=Path("."),
        help="Output directory for the cleaned file or archive (default: .)"
    )
    repair_parser.add_argument(
        "--prefix",
        help="Prefix for a single cleaned file (default: fixed_)"
    )
    repair_parser.add_argument(
        "--archive-name",
        help="Archive name for several cleaned files (default: cleaned_xliff_files.zip)"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Report repairs without writing files")
    add_common_arguments(check_parser)
    check_parser.add_argument(
        "--format", "-f",
        choices=["json", "csv", "text"],
        default="text",
        help="Output format (default: text)"
    )
    check_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    check_parser.add_argument(
        "--show-changes",
        action="store_true",
        help="List changed lines in text output"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def format_results(
    results: List[FileResult],
    format_type: str,
    show_changes: bool = False,
) -> str:
    """Format repair results for output."""
    if format_type == "json":
        return json.dumps(
            {
                "summary": summarize(results).to_dict(),
                "files": [result.to_dict() for result in results],
            },
            indent=2,
        )

    if format_type == "csv":
        if not results:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["file", "status", "fixes", "changed_lines", "bytes", "error"])
        for result in results:
            writer.writerow([
                result.name,
                result.status.value,
                result.total_fix_count,
                result.changed_line_count,
                result.byte_size,
                result.error_message or "",
            ])
        return buffer.getvalue().rstrip("\n")

    if not results:
        return "No results to display."

    stats = summarize(results)
    lines = [
        f"Processed {stats.total} files: {stats.fixed} fixed, {stats.clean} clean, "
        f"{stats.error} errors ({stats.total_fixes} fixes applied)",
        "-" * 60,
    ]

    for result in results:
        marker = STATUS_MARKERS.get(result.status, "?")
        lines.append(f"{marker} {result.name} [{result.status.value}]")
        lines.append(
            f"   Fixes: {result.total_fix_count}, Changed lines: {result.changed_line_count}"
        )
        if result.error_message:
            lines.append(f"   Error: {result.error_message}")

        if show_changes:
            for change in result.changes[:MAX_LISTED_CHANGES]:
                kinds = ", ".join(f"{name}={count}" for name, count in change.fix_breakdown)
                lines.append(f"   Line {change.line_number} ({change.fix_count} fixes: {kinds})")
                lines.append(f"     - {visualize_control_chars(change.original_content)}")
                lines.append(f"     + {change.cleaned_content}")
            if len(result.changes) > MAX_LISTED_CHANGES:
                lines.append(
                    f"   ... and {len(result.changes) - MAX_LISTED_CHANGES} more changed lines"
                )

        lines.append("")

    return "\n".join(lines)


def _load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if args.config and args.config.exists():
        config = CLIConfig.from_file(args.config)

    overrides = {}
    if args.policy:
        overrides["status_policy"] = POLICY_CHOICES[args.policy]
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    if getattr(args, "prefix", None):
        overrides["single_file_prefix"] = args.prefix
    if getattr(args, "archive_name", None):
        overrides["archive_name"] = args.archive_name
    if overrides:
        config.repair_config = config.repair_config.override(**overrides)

    config.verbose = args.verbose
    config.quiet = args.quiet
    return config


def _exit_code(results: List[FileResult]) -> int:
    if not results:
        return 1
    return 1 if any(result.status is FileStatus.ERROR for result in results) else 0


def cmd_repair(args: argparse.Namespace) -> int:
    """Handle repair command."""
    config = _load_config(args)
    processor = FileRepairProcessor(config)
    results = processor.batch_process(args.paths, args.recursive)

    if not results:
        print("No files found to repair", file=sys.stderr)
        return 1

    if not config.quiet:
        print(format_results(results, "text"))

    try:
        package = package_results(
            results, args.output_dir, config.repair_config, reject_duplicates=True
        )
    except PackagingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    kind = "archive" if package.is_archive else "file"
    print(f"Cleaned {kind} written to {package.path}", file=sys.stderr)
    return _exit_code(results)


def cmd_check(args: argparse.Namespace) -> int:
    """Handle check command."""
    config = _load_config(args)
    processor = FileRepairProcessor(config)
    results = processor.batch_process(args.paths, args.recursive)

    formatted_output = format_results(results, args.format, args.show_changes)

    if args.output:
        try:
            args.output.write_text(formatted_output, encoding="utf-8")
            print(f"Results written to {args.output}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(formatted_output)

    return _exit_code(results)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "repair":
            return cmd_repair(args)
        if args.command == "check":
            return cmd_check(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
