"""
Configuration for nbsync - converter invocation and sync layout settings.

Settings are read from a toml file (``.nbsync.toml`` in the scan root by
default) and fall back to built-in defaults when the file is absent.
"""
import os
import toml
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .converter import DEFAULT_COMMAND, DEFAULT_TIMEOUT
from .errors import ConfigError
from .mapping import DEFAULT_HIDDEN_DIR

CONFIG_FILENAME = ".nbsync.toml"
CONFIG_ENV_VAR = "NBSYNC_CONFIG"


@dataclass
class ConverterConfig:
    """External converter invocation."""
    command: str = DEFAULT_COMMAND
    timeout: float = DEFAULT_TIMEOUT  # seconds, 0 disables


@dataclass
class SyncConfig:
    """Discovery and scheduling."""
    hidden_dir: str = DEFAULT_HIDDEN_DIR
    ignore_patterns: List[str] = field(default_factory=list)
    jobs: int = 1


@dataclass
class GlobalConfig:
    """Global nbsync configuration."""
    verbose: bool = False
    converter: ConverterConfig = field(default_factory=ConverterConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'GlobalConfig':
        """Load configuration from file; a missing file yields the defaults."""
        if config_path is None:
            config_path = Path(CONFIG_FILENAME)
        config_path = Path(config_path)

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Could not load config from {config_path}: {e}") from e
        return cls.from_dict(data, source=config_path)

    @classmethod
    def from_dict(cls, data: dict, source: Union[str, Path] = "<dict>") -> 'GlobalConfig':
        """Create GlobalConfig from dictionary data."""
        converter_data = _section(data, 'converter', source)
        converter_config = ConverterConfig(
            command=_typed(converter_data, 'command', str, DEFAULT_COMMAND, source),
            timeout=_typed(converter_data, 'timeout', (int, float), DEFAULT_TIMEOUT, source),
        )
        if converter_config.timeout < 0:
            raise ConfigError(f"{source}: converter.timeout must not be negative")
        if not converter_config.command.strip():
            raise ConfigError(f"{source}: converter.command must not be empty")

        sync_data = _section(data, 'sync', source)
        sync_config = SyncConfig(
            hidden_dir=_typed(sync_data, 'hidden_dir', str, DEFAULT_HIDDEN_DIR, source),
            ignore_patterns=list(_typed(sync_data, 'ignore_patterns', list, [], source)),
            jobs=_typed(sync_data, 'jobs', int, 1, source),
        )
        if sync_config.jobs < 1:
            raise ConfigError(f"{source}: sync.jobs must be at least 1")
        if not sync_config.hidden_dir or '/' in sync_config.hidden_dir:
            raise ConfigError(f"{source}: sync.hidden_dir must be a single directory name")
        if not all(isinstance(p, str) for p in sync_config.ignore_patterns):
            raise ConfigError(f"{source}: sync.ignore_patterns must be a list of strings")

        return cls(
            verbose=_typed(_section(data, 'nbsync', source), 'verbose', bool, False, source),
            converter=converter_config,
            sync=sync_config,
        )

    def to_dict(self) -> dict:
        return {
            'nbsync': {
                'verbose': self.verbose,
            },
            'converter': {
                'command': self.converter.command,
                'timeout': self.converter.timeout,
            },
            'sync': {
                'hidden_dir': self.sync.hidden_dir,
                'ignore_patterns': self.sync.ignore_patterns,
                'jobs': self.sync.jobs,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = Path(CONFIG_FILENAME)
        config_path = Path(config_path)

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w', encoding='utf-8') as f:
                toml.dump(self.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"Could not save config to {config_path}: {e}") from e


def resolve_config_path(root: Union[str, Path] = ".", explicit: Optional[Union[str, Path]] = None) -> Path:
    """Pick the config file: explicit argument, then $NBSYNC_CONFIG, then <root>/.nbsync.toml."""
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path(root) / CONFIG_FILENAME


def _section(data: dict, name: str, source) -> dict:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"{source}: [{name}] must be a table")
    return value


def _typed(section: dict, key: str, expected, default, source):
    value = section.get(key, default)
    # bool is an int subclass; only accept it where bool is asked for
    if isinstance(value, bool) and expected is not bool:
        raise ConfigError(f"{source}: {key} has invalid value {value!r}")
    if not isinstance(value, expected):
        raise ConfigError(f"{source}: {key} has invalid value {value!r}")
    return value
