"""
Configuration module for fuzzgrep.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    value = section_defaults.get(key, fallback)
    return fallback if value is None else value


@dataclass
class SearchConfig:
    """Configuration for a search run."""

    root_path: str = field(default_factory=lambda: _get_default("search", "root_path", "."))
    # None resolves to the available parallelism at run time
    workers: Optional[int] = field(default_factory=lambda: _get_default("search", "workers"))
    extensions: list[str] = field(
        default_factory=lambda: list(_get_default("search", "extensions", []))
    )
    path_queue_size: int = field(
        default_factory=lambda: _get_default("search", "path_queue_size", 64)
    )
    result_queue_size: int = field(
        default_factory=lambda: _get_default("search", "result_queue_size", 256)
    )


@dataclass
class ScanConfig:
    """Configuration for decoding scanned files."""

    encoding: str = field(default_factory=lambda: _get_default("scan", "encoding", "utf-8"))
    errors: str = field(default_factory=lambda: _get_default("scan", "errors", "replace"))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default("logging", "format", "%(message)s")
    )


@dataclass
class FuzzgrepConfig:
    """Main configuration class for fuzzgrep."""

    search: SearchConfig = field(default_factory=SearchConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "FuzzgrepConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            FuzzgrepConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "FuzzgrepConfig":
        """Create FuzzgrepConfig from a dictionary."""
        config = cls()

        if "search" in data:
            config.search = SearchConfig(**data["search"])
        if "scan" in data:
            config.scan = ScanConfig(**data["scan"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "FuzzgrepConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: FUZZGREP_<SECTION>_<KEY>
        Examples:
            - FUZZGREP_SEARCH_WORKERS
            - FUZZGREP_SEARCH_EXTENSIONS (comma-separated)
            - FUZZGREP_SCAN_ENCODING
            - FUZZGREP_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Search config
            "FUZZGREP_SEARCH_ROOT_PATH": ("search", "root_path", str),
            "FUZZGREP_SEARCH_WORKERS": ("search", "workers", int),
            "FUZZGREP_SEARCH_EXTENSIONS": ("search", "extensions", _parse_list),
            "FUZZGREP_SEARCH_PATH_QUEUE_SIZE": ("search", "path_queue_size", int),
            "FUZZGREP_SEARCH_RESULT_QUEUE_SIZE": ("search", "result_queue_size", int),
            # Scan config
            "FUZZGREP_SCAN_ENCODING": ("scan", "encoding", str),
            "FUZZGREP_SCAN_ERRORS": ("scan", "errors", str),
            # Logging config
            "FUZZGREP_LOGGING_LEVEL": ("logging", "level", str),
            "FUZZGREP_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string into a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> FuzzgrepConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        FuzzgrepConfig instance
    """
    if config_path:
        config = FuzzgrepConfig.from_file(config_path)
    else:
        config = FuzzgrepConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def configure_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """
    Route diagnostics to stderr using the configured level and format.

    Does nothing if the root logger already has handlers.
    """
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(stream=sys.stderr, level=level, format=config.format)
