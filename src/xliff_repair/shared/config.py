"""Configuration classes for XLIFF repair.

This module provides the immutable configuration object shared by the repair
engine, the packager and the command-line tool, together with JSON
round-tripping and presets.
"""

import codecs
import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

DECODE_ERROR_MODES = ("replace", "strict")
DEFAULT_FILE_EXTENSIONS: Tuple[str, ...] = (".xlf", ".xliff", ".xml")


class StatusPolicy(Enum):
    """How fix counts and validation outcome combine into a file status."""

    STRICT = auto()       # Not well-formed is always ERROR
    FIXES_FIRST = auto()  # Any applied fix is FIXED, even if still malformed


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class RepairConfig:
    """Configuration for repairing, classifying and packaging files.

    Attributes:
        status_policy: Rule used to classify fixed-but-malformed files
        input_encoding: Encoding used for bytes without a byte-order mark
        decode_errors: 'replace' substitutes U+FFFD, 'strict' turns bad bytes
            into a read failure
        single_file_prefix: Prefix for the name of a single cleaned file
        archive_name: File name of the zip archive for multiple results
        max_workers: Worker processes for batch runs (None for system default)
        file_extensions: Extensions picked up when scanning directories
    """

    status_policy: StatusPolicy = StatusPolicy.STRICT
    input_encoding: str = "utf-8"
    decode_errors: str = "replace"
    single_file_prefix: str = "fixed_"
    archive_name: str = "cleaned_xliff_files.zip"
    max_workers: Optional[int] = None
    file_extensions: Tuple[str, ...] = field(
        default_factory=lambda: DEFAULT_FILE_EXTENSIONS
    )

    def __post_init__(self) -> None:
        """Validate repair configuration."""
        try:
            codecs.lookup(self.input_encoding)
        except LookupError as e:
            raise ConfigValidationError(
                f"Unknown input encoding: {self.input_encoding}",
                field_name="input_encoding",
                suggestions=["utf-8", "utf-16", "latin-1"],
            ) from e

        if self.decode_errors not in DECODE_ERROR_MODES:
            raise ConfigValidationError(
                f"decode_errors must be one of {', '.join(DECODE_ERROR_MODES)}",
                field_name="decode_errors",
                suggestions=list(DECODE_ERROR_MODES),
            )
        if not self.archive_name.lower().endswith(".zip"):
            raise ConfigValidationError(
                "archive_name must end with .zip", field_name="archive_name"
            )
        if "/" in self.single_file_prefix or "\\" in self.single_file_prefix:
            raise ConfigValidationError(
                "single_file_prefix cannot contain path separators",
                field_name="single_file_prefix",
            )
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigValidationError(
                "max_workers must be > 0 or None", field_name="max_workers"
            )
        if not self.file_extensions:
            raise ConfigValidationError(
                "file_extensions cannot be empty", field_name="file_extensions"
            )

        # Normalise list input from JSON into the hashable tuple form
        extensions = tuple(ext.lower() for ext in self.file_extensions)
        if any(not ext.startswith(".") for ext in extensions):
            raise ConfigValidationError(
                "file extensions must start with '.'", field_name="file_extensions"
            )
        object.__setattr__(self, "file_extensions", extensions)

    def override(self, **kwargs: Any) -> "RepairConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Configuration fields to override

        Returns:
            New RepairConfig instance with overrides applied

        Raises:
            ConfigValidationError: If a field name is unknown or a value is invalid
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field_name=unknown[0],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format, enums by name."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.name
            elif isinstance(value, tuple):
                value = list(value)
            result[f.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RepairConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in config files surface early.

        Args:
            data: Dictionary containing configuration data

        Returns:
            RepairConfig instance created from dictionary
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field_name=unknown[0],
            )

        values = dict(data)
        policy = values.get("status_policy")
        if isinstance(policy, str):
            try:
                values["status_policy"] = StatusPolicy[policy.upper().replace("-", "_")]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown status policy: {policy}",
                    field_name="status_policy",
                    suggestions=[p.name for p in StatusPolicy],
                ) from e
        if "file_extensions" in values:
            values["file_extensions"] = tuple(values["file_extensions"])
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "RepairConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "RepairConfig":
        """Strict status policy with lenient decoding."""
        return cls()

    @classmethod
    def reference(cls) -> "RepairConfig":
        """Mark any file with applied fixes as FIXED, even if still malformed."""
        return cls(status_policy=StatusPolicy.FIXES_FIRST)

    @classmethod
    def strict_decoding(cls) -> "RepairConfig":
        """Treat undecodable bytes as a read failure."""
        return cls(decode_errors="strict")
