"""Shared test utilities for resdup tests."""
import zipfile
from pathlib import Path


def make_archive(path: Path, entries: dict[str, int | bytes]) -> Path:
    """Create a ZIP archive at path.

    Each entry maps an entry name to its content, or to a size for which filler content is generated.
    Names ending with '/' become directory entries.
    """
    with zipfile.ZipFile(path, 'w') as archive:
        for name, content in entries.items():
            if isinstance(content, int):
                content = b'x' * content
            archive.writestr(name, content)
    return path


def make_tree(root: Path, files: dict[str, int]) -> Path:
    """Create a directory tree of files with filler content of the given sizes."""
    for name, size in files.items():
        file_path = root / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(b'x' * size)
    return root
