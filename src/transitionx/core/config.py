"""
Configuration management for TransitionX.
Loads configuration from YAML files and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from transitionx.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "TRANSITIONX_"
SNAPSHOT_MODES = ("shallow", "deep")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: str = "logs/transitionx.log"
    LOG_FILE_MAX_BYTES: int = 10485760
    LOG_FILE_BACKUP_COUNT: int = 5
    LOG_ENABLE_CONSOLE: bool = True
    LOG_ENABLE_FILE: bool = False


@dataclass
class HistoryConfig:
    """State history configuration."""

    HISTORY_DEBUG: bool = False
    HISTORY_SNAPSHOT_MODE: str = "shallow"


@dataclass
class Config:
    """Main configuration container."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "logging": dict(self.logging.__dict__),
            "history": dict(self.history.__dict__),
        }


class ConfigLoader:
    """Configuration loader that handles YAML files and environment variables."""

    def __init__(self, config_path: str | Path | None = None, config_dir: str | Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to configuration file. Defaults to profile-based selection.
            config_dir: Directory searched for profile files. Defaults to the
                project's config/ directory.
        """
        if config_path is None:
            if config_dir is None:
                # Project root is three levels up from src/transitionx/core
                config_dir = Path(__file__).parent.parent.parent.parent / "config"
            config_dir = Path(config_dir)

            profile = os.getenv(f"{ENV_PREFIX}CONFIG_PROFILE", "default")
            if profile in ["development", "dev"]:
                config_file = "development.yaml"
            elif profile in ["production", "prod"]:
                config_file = "production.yaml"
            else:
                config_file = "default.yaml"

            if not (config_dir / config_file).exists():
                logger.warning(f"Profile file {config_file} not found in {config_dir}, using default.yaml")
                config_file = "default.yaml"

            self.config_path = config_dir / config_file
            logger.debug(f"Selected configuration profile: {profile} -> {config_file}")
        else:
            self.config_path = Path(config_path)
        self.config = Config()

    def load(self) -> Config:
        """
        Load configuration from file and environment variables.

        Environment variables override file configuration.

        Returns:
            Loaded configuration object

        Raises:
            ConfigurationError: If the file is malformed or a value is invalid
        """
        config_data = self._load_with_inheritance()

        if config_data:
            self._apply_yaml_config(config_data)
            logger.info(f"Loaded configuration from {self.config_path}")
        else:
            logger.debug(f"Configuration file {self.config_path} not found, using defaults")

        self._apply_env_overrides()
        self._validate_config()

        return self.config

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        """Read a YAML mapping from disk."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")
        return data

    def _load_with_inheritance(self) -> dict[str, Any] | None:
        """
        Load configuration with inheritance from base configuration.

        Returns:
            Merged configuration dictionary or None if file not found
        """
        if not self.config_path.exists():
            return None

        config_data = self._read_yaml(self.config_path)

        # Profile files inherit from default.yaml in the same directory
        if self.config_path.name != "default.yaml":
            base_config_path = self.config_path.parent / "default.yaml"
            if base_config_path.exists():
                base_config = self._read_yaml(base_config_path)
                logger.debug(f"Inherited base configuration from {base_config_path}")
                return {**base_config, **config_data}

        return config_data

    def _section_for(self, key: str) -> Any | None:
        """Map a flat configuration key to its section by prefix."""
        if key.startswith("LOG_"):
            return self.config.logging
        if key.startswith("HISTORY_"):
            return self.config.history
        return None

    def _apply_yaml_config(self, yaml_config: dict[str, Any]) -> None:
        """Apply configuration from YAML dictionary with proper type conversion."""
        for key, value in yaml_config.items():
            section = self._section_for(str(key))
            if section is None:
                logger.warning(f"Unknown configuration key: {key}")
                continue
            self._set_config_value(section, str(key), str(value))

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            config_key = env_key[len(ENV_PREFIX) :]
            section = self._section_for(config_key)
            if section is not None:
                self._set_config_value(section, config_key, env_value)

    def _set_config_value(self, config_section: Any, key: str, value: str) -> None:
        """
        Set configuration value with appropriate type conversion.

        Args:
            config_section: Configuration section object
            key: Configuration key
            value: String value from YAML or environment

        Raises:
            ConfigurationError: If the value cannot be converted
        """
        if not hasattr(config_section, key):
            logger.warning(f"Unknown configuration key: {key}")
            return

        current_value = getattr(config_section, key)

        converted_value: Any
        if isinstance(current_value, bool):
            converted_value = value.lower() in ("true", "1", "yes", "on")
        elif isinstance(current_value, int):
            try:
                converted_value = int(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid integer value for {key}: {value}") from e
        else:
            converted_value = value

        setattr(config_section, key, converted_value)
        logger.debug(f"Set {key} = {converted_value}")

    def _validate_config(self) -> None:
        """Validate configuration after all loading is complete."""
        history = self.config.history
        history.HISTORY_SNAPSHOT_MODE = history.HISTORY_SNAPSHOT_MODE.lower()
        if history.HISTORY_SNAPSHOT_MODE not in SNAPSHOT_MODES:
            raise ConfigurationError(
                f"HISTORY_SNAPSHOT_MODE must be one of {list(SNAPSHOT_MODES)}, "
                f"got {history.HISTORY_SNAPSHOT_MODE!r}"
            )

        log_config = self.config.logging
        log_config.LOG_LEVEL = log_config.LOG_LEVEL.upper()
        if log_config.LOG_LEVEL not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {log_config.LOG_LEVEL}")

        if log_config.LOG_FILE_MAX_BYTES <= 0:
            raise ConfigurationError("LOG_FILE_MAX_BYTES must be positive")


# Global configuration instance
_config: Config | None = None


def get_config(config_path: str | Path | None = None) -> Config:
    """
    Get configuration instance (singleton pattern).

    Args:
        config_path: Optional path to configuration file

    Returns:
        Configuration object
    """
    global _config

    if _config is None:
        loader = ConfigLoader(config_path)
        _config = loader.load()

    return _config


def reload_config(config_path: str | Path | None = None) -> Config:
    """
    Reload configuration from file and environment.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Reloaded configuration object
    """
    global _config

    loader = ConfigLoader(config_path)
    _config = loader.load()

    return _config


def configure_logging(config: Config | None = None) -> None:
    """
    Configure root logging from the logging section of a configuration.

    Args:
        config: Configuration to apply. Defaults to the global configuration.
    """
    from transitionx.utils.logging import setup_logging

    log_config = (config or get_config()).logging
    setup_logging(
        log_level=log_config.LOG_LEVEL,
        log_format=log_config.LOG_FORMAT,
        log_file_path=log_config.LOG_FILE_PATH,
        log_file_max_bytes=log_config.LOG_FILE_MAX_BYTES,
        log_file_backup_count=log_config.LOG_FILE_BACKUP_COUNT,
        enable_console=log_config.LOG_ENABLE_CONSOLE,
        enable_file=log_config.LOG_ENABLE_FILE,
    )
