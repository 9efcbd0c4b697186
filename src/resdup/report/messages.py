"""Formatting of duplicate diagnostics, registry dumps and run summaries."""
from typing import NamedTuple

from ..registry import DuplicateFinding, PathRecord


class ScanSummary(NamedTuple):
    """Totals for a whole run.

    Attributes:
        duplicates: Number of repeat encounters across all inputs
        files: Number of archives scanned
        directories: Number of directory trees scanned
        skipped: Number of inputs that were neither a directory nor an archive
    """
    duplicates: int = 0
    files: int = 0
    directories: int = 0
    skipped: int = 0


def format_duplicate(finding: DuplicateFinding) -> str:
    occurrence, first = finding
    message = (f"{occurrence.source} contains path {occurrence.path} "
               f"which duplicates a path from {first.origin}")
    if finding.same_size:
        return f"{message} with same file size"
    return f"{message} with a different file size ({occurrence.size} != {first.size})"


def format_entry(path: str, record: PathRecord) -> str:
    return f"{path}: {record}"


def _count(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"


def format_summary(summary: ScanSummary) -> str:
    """Render the final summary sentence.

    Example:
        >>> format_summary(ScanSummary(duplicates=1, files=2, directories=0))
        'Found 1 duplicate path in 2 files and 0 directories.'
    """
    return (f"Found {_count(summary.duplicates, 'duplicate path', 'duplicate paths')} "
            f"in {_count(summary.files, 'file', 'files')} "
            f"and {_count(summary.directories, 'directory', 'directories')}.")
