from .errors import ArchiveReadError, ConfigurationError
from .path_filter import PathFilter
from .registry import DuplicateFinding, Occurrence, PathRecord, Registry
from .settings import ScanSettings
from .report.messages import ScanSummary
from .scanner.archive import scan_archive
from .scanner.tree import scan_tree
from .commands.scan import ScanArgs, do_scan
