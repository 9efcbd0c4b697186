"""Duplicate scanning of directory trees such as exploded class directories."""
import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from ..path_filter import PathFilter
from ..registry import Occurrence, Registry
from ..report.messages import format_duplicate
from ..utils.walker import walk

logger = logging.getLogger(__name__)


def scan_tree(root: str | os.PathLike, path_filter: PathFilter, registry: Registry,
              output: TextIO | None = None) -> int:
    """Register every accepted file below root and report the duplicates.

    The logical path of a file is its path relative to root, '/'-separated, so that the same
    resource reached through different roots or archives maps to the same key. Unreadable
    directories are treated as empty.

    Args:
        root: Directory to walk; its base name becomes the origin of new records
        path_filter: Filter deciding which files take part
        registry: Registry shared by every input of the run
        output: Stream for duplicate diagnostics, defaults to sys.stdout

    Returns:
        Number of files below root that duplicate an already registered path
    """
    root = Path(root)
    if output is None:
        output = sys.stdout

    logger.info(f"Scanning directory {root}")
    # Path('.').name is empty, so name the origin after the resolved directory
    origin = root.name or root.resolve().name
    source = f"Directory {root}"
    duplicates = 0
    for file_path, path in walk(root):
        if not path_filter.matches(path):
            continue

        try:
            size = file_path.stat().st_size
        except OSError as e:
            logger.warning(f"Skipping {file_path}, cannot read its size: {e}")
            continue

        finding = registry.register(Occurrence(path, origin, size, source))
        if finding is not None:
            print(format_duplicate(finding), file=output)
            duplicates += 1

    logger.info(f"Finished directory {root}: {duplicates} duplicate(s)")
    return duplicates
