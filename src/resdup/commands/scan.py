import logging
import os
import sys
from pathlib import Path
from typing import Iterable, NamedTuple, TextIO

from ..path_filter import PathFilter
from ..registry import Registry
from ..report.messages import ScanSummary
from ..scanner.archive import scan_archive
from ..scanner.tree import scan_tree
from ..settings import DEFAULT_ARCHIVE_EXTENSIONS

logger = logging.getLogger(__name__)


class ScanArgs(NamedTuple):
    """Arguments for the scan operation."""
    path_filter: PathFilter
    archive_extensions: tuple[str, ...] = DEFAULT_ARCHIVE_EXTENSIONS
    output: TextIO | None = None  # Duplicate diagnostics, defaults to sys.stdout
    errors: TextIO | None = None  # Skipped-input warnings, defaults to sys.stderr


def is_archive(path: str | os.PathLike, extensions: Iterable[str]) -> bool:
    """Check whether path names an archive by its extension, ignoring case."""
    name = os.fspath(path).lower()
    return any(name.endswith(extension) for extension in extensions)


def do_scan(paths: Iterable[str | os.PathLike], registry: Registry, args: ScanArgs) -> ScanSummary:
    """Scan every input path in order against one registry.

    Directories are walked, paths with an archive extension are opened as archives (whether or
    not they exist) and everything else is skipped with a warning.

    Raises:
        ArchiveReadError: An archive cannot be read; scanning stops at that input
    """
    errors = sys.stderr if args.errors is None else args.errors

    duplicates = 0
    files = 0
    directories = 0
    skipped = 0
    for path in paths:
        path = Path(path)
        if path.is_dir():
            directories += 1
            duplicates += scan_tree(path, args.path_filter, registry, args.output)
        elif is_archive(path, args.archive_extensions):
            files += 1
            duplicates += scan_archive(path, args.path_filter, registry, args.output)
        else:
            logger.info(f"Ignoring unsupported input {path}")
            print(f"Ignoring non-archive file {path}", file=errors)
            skipped += 1

    logger.debug(f"Registry holds {registry.count()} path(s) after scanning")
    return ScanSummary(duplicates, files, directories, skipped)
