"""Output packaging for cleaned files."""

from .packager import (
    PackageResult,
    PackagingError,
    build_archive,
    duplicate_names,
    package_results,
    packageable,
)

__all__ = [
    "PackageResult",
    "PackagingError",
    "build_archive",
    "duplicate_names",
    "package_results",
    "packageable",
]
