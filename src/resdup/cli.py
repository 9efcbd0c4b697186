import argparse
import logging
import sys
import textwrap

from . import ArchiveReadError, ConfigurationError, PathFilter, Registry, ScanSettings
from .commands.scan import ScanArgs, do_scan
from .path_filter import DEFAULT_SUFFIX
from .report.messages import format_entry, format_summary
from .settings import SETTING_FILTER_PATTERN, SETTING_FILTER_SUFFIX, SETTING_LOGGING_PATH

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# Options taking a value, by every spelling, mapped to their long form
VALUE_OPTIONS = {
    '-f': '--filter',
    '--filter': '--filter',
    '--config': '--config',
    '--log-file': '--log-file',
    '--log-level': '--log-level',
}


def split_arguments(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv into options and paths.

    Options end at '--' or at the first argument that does not start with '-'; every later
    argument is a path even if it looks like an option. The value of an option is taken
    verbatim, so a filter expression may itself start with '-'.

    Returns:
        Tuple of (options, paths), where options are ready for argparse
    """
    options = []
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == '--':
            index += 1
            break
        if not arg.startswith('-'):
            break

        index += 1
        if arg in VALUE_OPTIONS and index < len(argv):
            arg = f"{VALUE_OPTIONS[arg]}={argv[index]}"
            index += 1
        options.append(arg)

    return options, argv[index:]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='resdup',
        allow_abbrev=False,
        description='Find resources (by default .class files) whose path appears more than once across a set of '
                    'JAR/ZIP archives and directory trees.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              resdup lib/*.jar
              resdup --filter '.*\\.(class|properties)' build/classes lib/app.jar
              resdup --print -- -weird-name.jar

            Paths are scanned in order; the first occurrence of a path is kept and every later
            occurrence is reported as a duplicate of it.
            ''').strip()
    )
    parser.add_argument(
        'paths',
        nargs='*',
        metavar='PATH',
        help='Archives (.jar, .zip by default) or directories to scan')
    parser.add_argument(
        '-f', '--filter',
        metavar='REGEX',
        help=f'Regular expression that file names must match in full to be checked for duplicates. '
             f'Defaults to files ending with {DEFAULT_SUFFIX}')
    parser.add_argument(
        '-p', '--print',
        dest='print_paths',
        action='store_true',
        help='Print all scanned paths, their sources, and file sizes after scanning')
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to a settings file. If not provided, uses RESDUP_CONFIG environment variable or resdup.toml in '
             'the current directory if present.')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log progress at DEBUG level to standard error')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file for operation logging. If not provided, uses logging.path from settings or no '
             'logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO when logging to a file.')
    return parser


def configure_logging(args, settings: ScanSettings) -> None:
    """Configure logging from command-line options, falling back to the logging.path setting."""
    log_file = args.log_file or settings.get_str(SETTING_LOGGING_PATH)
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, args.log_level or 'INFO'),
            format=LOG_FORMAT
        )
    elif args.verbose or args.log_level:
        logging.basicConfig(
            stream=sys.stderr,
            level=getattr(logging, args.log_level or 'DEBUG'),
            format=LOG_FORMAT
        )


def build_filter(args, settings: ScanSettings) -> PathFilter:
    pattern = args.filter if args.filter is not None else settings.get_str(SETTING_FILTER_PATTERN)
    if pattern is not None:
        return PathFilter.pattern(pattern)
    return PathFilter.suffix(settings.get_str(SETTING_FILTER_SUFFIX, DEFAULT_SUFFIX))


def resdup_main(argv: list[str] | None = None):
    parser = build_parser()
    options, paths = split_arguments(sys.argv[1:] if argv is None else argv)
    args = parser.parse_args(options)
    args.paths = paths

    if not args.paths:
        print("No path(s) specified.")
        print()
        parser.print_usage(sys.stderr)
        return

    try:
        settings = ScanSettings.load(args.config)
        configure_logging(args, settings)
        path_filter = build_filter(args, settings)
        archive_extensions = settings.archive_extensions()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.getLogger(__name__).info(f"Scanning {len(args.paths)} path(s) with filter {path_filter.description}")

    registry = Registry()
    try:
        summary = do_scan(args.paths, registry, ScanArgs(path_filter, archive_extensions))
    except ArchiveReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.print_paths:
        for path, record in registry.entries():
            print(format_entry(path, record))

    print(format_summary(summary))


if __name__ == '__main__':
    resdup_main()
