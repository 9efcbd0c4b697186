"""Duplicate scanning of ZIP-format archives (JAR, WAR, ZIP, ...)."""
import logging
import os
import sys
import zipfile
from pathlib import Path
from typing import TextIO

from ..errors import ArchiveReadError
from ..path_filter import PathFilter
from ..registry import Occurrence, Registry
from ..report.messages import format_duplicate

logger = logging.getLogger(__name__)


def scan_archive(archive_path: str | os.PathLike, path_filter: PathFilter, registry: Registry,
                 output: TextIO | None = None) -> int:
    """Register every accepted entry of an archive and report the duplicates.

    Entries are visited in the archive's central directory order. Entry names are used verbatim
    as logical paths and sizes are the declared uncompressed sizes; no content is read.
    Directory entries (names ending with '/') take part like any other entry, with an empty file
    name component and a size of 0. The archive is closed before returning, whatever the outcome.

    Args:
        archive_path: Archive file to scan; its base name becomes the origin of new records
        path_filter: Filter deciding which entries take part
        registry: Registry shared by every input of the run
        output: Stream for duplicate diagnostics, defaults to sys.stdout

    Returns:
        Number of entries of this archive that duplicate an already registered path

    Raises:
        ArchiveReadError: The archive cannot be opened or is not a valid ZIP file
    """
    archive_path = Path(archive_path)
    if output is None:
        output = sys.stdout

    logger.info(f"Scanning archive {archive_path}")
    try:
        archive = zipfile.ZipFile(archive_path)
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveReadError(f"Cannot read archive {archive_path}: {e}") from e

    origin = archive_path.name
    source = f"File {archive_path}"
    duplicates = 0
    with archive:
        for info in archive.infolist():
            if not path_filter.matches(info.filename):
                continue

            finding = registry.register(Occurrence(info.filename, origin, info.file_size, source))
            if finding is not None:
                print(format_duplicate(finding), file=output)
                duplicates += 1

    logger.info(f"Finished archive {archive_path}: {duplicates} duplicate(s)")
    return duplicates
