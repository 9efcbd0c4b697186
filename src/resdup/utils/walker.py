import logging
import stat
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def logical_path(parts: tuple[str, ...]) -> str:
    """Join relative path components with '/' regardless of the platform separator."""
    return '/'.join(parts)


def walk(base: Path, current: Path | None = None, *,
         _prefix: tuple[str, ...] = (),
         _ancestors: frozenset[tuple[int, int]] = frozenset()) -> Iterator[tuple[Path, str]]:
    """Recursively yield every regular file below base, depth first.

    Sibling order is whatever the directory listing yields. A directory that cannot be
    listed (permissions, removed during the walk) is treated as empty and logged; the walk
    goes on with its siblings. An entry that cannot be stat'ed, such as a file inside a
    directory that is readable but not searchable, is logged and skipped. Symlinked
    directories are followed, except when they lead back to a directory that is already
    being walked.

    Args:
        base: Root of the walk; logical paths are relative to it
        current: Directory to list, defaults to base

    Yields:
        Tuples of (file_path, logical_path), where logical_path is '/'-separated and relative to base
    """
    if current is None:
        current = base

    try:
        st = current.stat()
        children = list(current.iterdir())
    except OSError as e:
        logger.warning(f"Cannot list directory {current}, treating it as empty: {e}")
        return

    identity = (st.st_dev, st.st_ino)
    if identity in _ancestors:
        logger.warning(f"Not following directory loop at {current}")
        return
    ancestors = _ancestors | {identity}

    for child in children:
        parts = _prefix + (child.name,)
        try:
            mode = child.stat().st_mode
        except FileNotFoundError:
            logger.debug(f"Skipping dangling entry {child}")
            continue
        except OSError as e:
            logger.warning(f"Cannot inspect {child}, skipping it: {e}")
            continue

        if stat.S_ISDIR(mode):
            yield from walk(base, child, _prefix=parts, _ancestors=ancestors)
        elif stat.S_ISREG(mode):
            yield child, logical_path(parts)
        else:
            logger.debug(f"Skipping special entry {child}")
