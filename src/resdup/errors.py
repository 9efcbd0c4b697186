"""Exceptions raised by resdup."""


class ConfigurationError(ValueError):
    """Invalid run configuration, such as a filter pattern that does not compile or a broken settings file.

    Raised before any input is scanned.
    """


class ArchiveReadError(OSError):
    """An archive could not be opened or its directory could not be read.

    Aborts the whole run; there is no partial-results mode.
    """
