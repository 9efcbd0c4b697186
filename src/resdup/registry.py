from typing import Iterator, NamedTuple


class PathRecord(NamedTuple):
    """First-seen occurrence of a logical path.

    Attributes:
        origin: Base name of the archive or directory the path was first found in
        size: Byte size of that first occurrence (declared uncompressed size for archive entries)
    """
    origin: str
    size: int

    def __str__(self) -> str:
        return f"{{ origin={self.origin}, size={self.size} }}"


class Occurrence(NamedTuple):
    """A single scanned entry as fed to the registry.

    Attributes:
        path: Logical path, '/'-separated and independent of the container it came from
        origin: Base name of the archive or directory being scanned
        size: Byte size of this occurrence
        source: Human-readable description of the container, e.g. "File lib/a.jar" or "Directory build/classes"
    """
    path: str
    origin: str
    size: int
    source: str


class DuplicateFinding(NamedTuple):
    """A repeat encounter of a logical path, paired with the record it duplicates."""
    occurrence: Occurrence
    first: PathRecord

    @property
    def same_size(self) -> bool:
        return self.occurrence.size == self.first.size


class Registry:
    """Duplicate-detection engine holding the first-seen record of every logical path.

    A registry is created once per run and shared by every scanner invocation, in input order.
    Records are never overwritten: the stored record is always the earliest occurrence in
    traversal order, and every later occurrence is reported as a duplicate of that one.

    The duplicate counter only increases over the lifetime of the registry. Registry is not
    thread-safe; a parallel scanner must serialize calls to register().
    """

    def __init__(self):
        self._records: dict[str, PathRecord] = {}
        self._duplicates = 0

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, path: str) -> bool:
        return path in self._records

    @property
    def duplicates(self) -> int:
        """Number of repeat encounters registered so far."""
        return self._duplicates

    def lookup(self, path: str) -> PathRecord | None:
        return self._records.get(path)

    def insert_if_absent(self, path: str, record: PathRecord) -> bool:
        """Store record for path unless the path is already known.

        Returns:
            True if the record was inserted, False if an earlier record was kept
        """
        if path in self._records:
            return False
        self._records[path] = record
        return True

    def count(self) -> int:
        """Number of distinct logical paths recorded."""
        return len(self._records)

    def entries(self) -> Iterator[tuple[str, PathRecord]]:
        yield from self._records.items()

    def register(self, occurrence: Occurrence) -> DuplicateFinding | None:
        """Record an occurrence, or count it as a duplicate of the first one seen.

        Returns:
            None if the path was new, otherwise a DuplicateFinding against the stored record
        """
        if self.insert_if_absent(occurrence.path, PathRecord(occurrence.origin, occurrence.size)):
            return None

        first = self.lookup(occurrence.path)

        self._duplicates += 1
        return DuplicateFinding(occurrence, first)
