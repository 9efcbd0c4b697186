"""Predicates deciding which logical paths take part in duplicate detection."""
import re
from typing import Callable, NamedTuple

from .errors import ConfigurationError

DEFAULT_SUFFIX = '.class'


def file_name_of(logical_path: str) -> str:
    """Return the last '/'-separated component of a logical path."""
    return logical_path.rsplit('/', 1)[-1]


class PathFilter(NamedTuple):
    """Filter applied to the file name component of every scanned logical path.

    Attributes:
        description: Human-readable form of the filter, used in log messages
        accept: Predicate over a file name

    Example:
        path_filter = PathFilter.pattern(r'.*\\.(class|properties)')
        path_filter.matches('org/example/Main.class')  # True
    """
    description: str
    accept: Callable[[str], bool]

    def matches(self, logical_path: str) -> bool:
        return self.accept(file_name_of(logical_path))

    @classmethod
    def suffix(cls, suffix: str = DEFAULT_SUFFIX) -> 'PathFilter':
        """Filter accepting names ending with the literal suffix."""
        return cls(f"*{suffix}", lambda name: name.endswith(suffix))

    @classmethod
    def pattern(cls, regex: str) -> 'PathFilter':
        """Filter accepting names the regular expression matches in full.

        Raises:
            ConfigurationError: The expression does not compile
        """
        try:
            compiled = re.compile(regex)
        except re.error as e:
            raise ConfigurationError(f"Invalid filter pattern {regex!r}: {e}") from e

        return cls(f"/{regex}/", lambda name: compiled.fullmatch(name) is not None)
