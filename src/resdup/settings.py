import os
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib  # pyright: ignore[reportMissingImports]

from .errors import ConfigurationError

# Settings key constants
SETTING_FILTER_SUFFIX = 'filter.suffix'
SETTING_FILTER_PATTERN = 'filter.pattern'
SETTING_ARCHIVE_EXTENSIONS = 'archive.extensions'
SETTING_LOGGING_PATH = 'logging.path'

CONFIG_ENVIRONMENT_VARIABLE = 'RESDUP_CONFIG'
DEFAULT_CONFIG_FILE_NAME = 'resdup.toml'
DEFAULT_ARCHIVE_EXTENSIONS = ('.jar', '.zip')


class ScanSettings:
    """Read-only view of the optional resdup.toml settings file.

    The file is loaded as-is; get() gives access to values by dot-notation keys and the typed
    accessors below interpret the keys resdup understands. Command-line options take precedence
    over every setting.

    Example:
        settings = ScanSettings.load(None)
        extensions = settings.archive_extensions()
        suffix = settings.get(SETTING_FILTER_SUFFIX, '.class')

    Example resdup.toml:
        [filter]
        pattern = '.*\\.(class|properties)'

        [archive]
        extensions = ['.jar', '.war']

        [logging]
        path = 'resdup.log'
    """

    def __init__(self, settings_file: Path | None = None):
        """Load settings from settings_file, or use empty settings when it is None.

        Raises:
            ConfigurationError: The file cannot be read or is not valid TOML
        """
        self._settings_file = settings_file
        self._settings = {}

        if settings_file is not None:
            try:
                with open(settings_file, 'rb') as f:
                    self._settings = tomllib.load(f)
            except OSError as e:
                raise ConfigurationError(f"Cannot read settings file {settings_file}: {e}") from e
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid settings file {settings_file}: {e}") from e

    @classmethod
    def load(cls, config_path: str | os.PathLike | None) -> 'ScanSettings':
        """Locate and load the settings file.

        Looks at config_path first, then the RESDUP_CONFIG environment variable, then
        resdup.toml in the working directory. A file named explicitly must exist; the
        working-directory file is optional.
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENVIRONMENT_VARIABLE) or None

        if config_path is not None:
            return cls(Path(config_path))

        default_file = Path.cwd() / DEFAULT_CONFIG_FILE_NAME
        if default_file.is_file():
            return cls(default_file)
        return cls(None)

    @property
    def settings_file(self) -> Path | None:
        return self._settings_file

    def get(self, key: str, default=None):
        """Get a setting value by key with optional default.

        Dot notation accesses nested tables, e.g. 'filter.suffix' reads settings['filter']['suffix'].
        Returns the default if the key path does not exist or crosses a non-table value.
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self.get(key, default)
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"Setting {key} must be a string, got {value!r}")
        return value

    def archive_extensions(self) -> tuple[str, ...]:
        """File name extensions recognised as archives, lower-cased and dot-prefixed."""
        extensions = self.get(SETTING_ARCHIVE_EXTENSIONS, DEFAULT_ARCHIVE_EXTENSIONS)
        if not isinstance(extensions, (list, tuple)) or not all(isinstance(e, str) and e for e in extensions):
            raise ConfigurationError(
                f"Setting {SETTING_ARCHIVE_EXTENSIONS} must be a list of non-empty strings, got {extensions!r}")

        return tuple(e.lower() if e.startswith('.') else '.' + e.lower() for e in extensions)
