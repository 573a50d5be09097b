"""
Configuration module for envscan.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
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
    return section_defaults.get(key, fallback)


@dataclass
class ScanConfig:
    """Configuration for scanning a project tree."""

    debug: bool = field(default_factory=lambda: _get_default("scan", "debug", False))
    # YAML file of custom pattern entries merged over the built-in tags
    patterns_file: str = field(default_factory=lambda: _get_default("scan", "patterns_file", ""))


@dataclass
class GitConfig:
    """Configuration for staging remote repositories."""

    default_branch: str = field(
        default_factory=lambda: _get_default("git", "default_branch", "main")
    )
    executable: str = field(default_factory=lambda: _get_default("git", "executable", "git"))
    temp_prefix: str = field(
        default_factory=lambda: _get_default("git", "temp_prefix", "envscan-")
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class EnvScanConfig:
    """Main configuration class for envscan."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    git: GitConfig = field(default_factory=GitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "EnvScanConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            EnvScanConfig instance with loaded values

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
    def _from_dict(cls, data: dict) -> "EnvScanConfig":
        """Create EnvScanConfig from a dictionary."""
        config = cls()

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config format: expected dict, got {type(data)}")

        sections = {"scan": ScanConfig, "git": GitConfig, "logging": LoggingConfig}
        for section, section_cls in sections.items():
            if section not in data:
                continue
            values = data[section] or {}
            if not isinstance(values, dict):
                raise ValueError(f"Invalid config section '{section}': expected dict")
            unknown = set(values) - {f.name for f in fields(section_cls)}
            if unknown:
                raise ValueError(
                    f"Unknown config keys in '{section}': {', '.join(sorted(map(str, unknown)))}"
                )
            setattr(config, section, section_cls(**values))

        return config

    def apply_env_overrides(self) -> "EnvScanConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: ENVSCAN_<SECTION>_<KEY>
        Examples:
            - ENVSCAN_SCAN_DEBUG
            - ENVSCAN_GIT_DEFAULT_BRANCH
            - ENVSCAN_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Scan config
            "ENVSCAN_SCAN_DEBUG": ("scan", "debug", _parse_bool),
            "ENVSCAN_SCAN_PATTERNS_FILE": ("scan", "patterns_file", str),
            # Git config
            "ENVSCAN_GIT_DEFAULT_BRANCH": ("git", "default_branch", str),
            "ENVSCAN_GIT_EXECUTABLE": ("git", "executable", str),
            "ENVSCAN_GIT_TEMP_PREFIX": ("git", "temp_prefix", str),
            # Logging config
            "ENVSCAN_LOGGING_LEVEL": ("logging", "level", str),
            "ENVSCAN_LOGGING_FORMAT": ("logging", "format", str),
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


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> EnvScanConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        EnvScanConfig instance
    """
    if config_path:
        config = EnvScanConfig.from_file(config_path)
    else:
        config = EnvScanConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def configure_logging(config: LoggingConfig, debug: bool = False) -> None:
    """Configure the root logger from a LoggingConfig; debug forces DEBUG level."""
    level = logging.DEBUG if debug else getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.format)
    logging.getLogger("envscan").setLevel(level)
