"""
Configuration management system for Pen Compatibility Matrix.

This module handles application settings, user preferences, default values,
and configuration file loading/saving with proper error handling.
"""

import os
import re
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, asdict, field
from enum import Enum

from ..models.display import FormatOptions, ViewMode

APP_NAME = "pen-compat-matrix"


def _get_version_from_file() -> str:
    """Read version from VERSION file in resources directory."""
    try:
        version_file = Path(__file__).parent.parent.parent / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
    except OSError:
        pass
    return "1.0.0"


def _env_flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


class LogLevel(Enum):
    """Available log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class SourceConfig:
    """Dataset location and fetch settings."""
    sources: List[str] = field(default_factory=lambda: ["wacom-pen-compat.xml"])
    fetch_timeout: int = 30
    user_agent: str = "pen-compat-matrix/1.0"
    report_conflicts: bool = False


@dataclass
class DisplayConfig:
    """Initial state of the matrix controls."""
    view_mode: str = ViewMode.GROUPED.value
    show_names: bool = True
    one_per_line: bool = False
    organize_by_family: bool = False

    def get_view_mode(self) -> ViewMode:
        return ViewMode.from_name(self.view_mode)

    def get_format_options(self) -> FormatOptions:
        return FormatOptions(
            show_names=self.show_names,
            one_per_line=self.one_per_line,
            organize_by_family=self.organize_by_family,
        )


@dataclass
class UIConfig:
    """User interface configuration."""
    colored_output: bool = True
    appearance_mode: str = "dark"
    color_theme: str = "blue"
    window_geometry: str = "1100x750"


@dataclass
class AppConfig:
    """Main application configuration container."""

    sources: SourceConfig = field(default_factory=SourceConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # Application metadata
    version: str = field(default_factory=_get_version_from_file)
    app_name: str = "Pen Compatibility Matrix"
    config_version: str = "1.0"

    # Runtime settings
    debug_mode: bool = False
    log_level: LogLevel = LogLevel.INFO

    def __post_init__(self):
        """Post-initialization processing."""
        self._load_environment_variables()
        self._validate_config()

    def _load_environment_variables(self) -> None:
        """Load configuration from environment variables."""
        if env_sources := os.getenv("PEN_COMPAT_SOURCES"):
            sources = [s for s in re.split(r"[\s,]+", env_sources) if s]
            if sources:
                self.sources.sources = sources

        if env_view := os.getenv("PEN_COMPAT_VIEW_MODE"):
            try:
                self.display.view_mode = ViewMode.from_name(env_view).value
            except ValueError:
                logging.warning(f"Invalid view mode in environment: {env_view}")

        if env_debug := os.getenv("PEN_COMPAT_DEBUG"):
            self.debug_mode = _env_flag(env_debug)

        if env_log_level := os.getenv("PEN_COMPAT_LOG_LEVEL"):
            try:
                self.log_level = LogLevel(env_log_level.upper())
            except ValueError:
                logging.warning(f"Invalid log level in environment: {env_log_level}")

    def _validate_config(self) -> None:
        """Validate configuration values."""
        from ..utils.validators import get_validator
        validator = get_validator()
        timeout = validator.validate_timeout(self.sources.fetch_timeout)
        if not timeout:
            raise ValueError(timeout.message)

        if not self.sources.sources:
            raise ValueError("At least one dataset source is required")

        view_mode = validator.validate_view_mode(self.display.view_mode)
        if not view_mode:
            raise ValueError(view_mode.message)

    def get_config_dir(self) -> Path:
        """Get the application configuration directory."""
        from ..utils.platform_utils import get_platform_config_dir
        return get_platform_config_dir(APP_NAME)

    def get_config_file_path(self) -> Path:
        """Get the path to the configuration file."""
        return self.get_config_dir() / 'config.json'

    def save_to_file(self, file_path: Optional[Union[str, Path]] = None) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path to save the config file. If None, uses default location.

        Raises:
            IOError: If the file cannot be written
        """
        file_path = Path(file_path) if file_path is not None else self.get_config_file_path()

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_serializable_dict(), f, indent=2, ensure_ascii=False)
            logging.info(f"Configuration saved to {file_path}")
        except OSError as e:
            raise IOError(f"Failed to save configuration to {file_path}: {e}")

    def _to_serializable_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-serializable dictionary."""
        config_dict = asdict(self)
        config_dict['log_level'] = self.log_level.value
        return config_dict

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> 'AppConfig':
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to load the config file from

        Returns:
            AppConfig instance loaded from file

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the config file is invalid
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
            if not isinstance(config_dict, dict):
                raise ValueError("top level must be a JSON object")
            return cls._from_dict(config_dict)
        except (OSError, TypeError, ValueError) as e:
            raise ValueError(f"Failed to load configuration from {file_path}: {e}")

    @classmethod
    def _from_dict(cls, config_dict: Dict[str, Any]) -> 'AppConfig':
        """Create AppConfig instance from dictionary."""
        log_level = LogLevel.INFO
        if log_level_str := config_dict.get('log_level'):
            try:
                log_level = LogLevel(log_level_str)
            except ValueError:
                logging.warning(f"Invalid log level in config: {log_level_str}")

        return cls(
            sources=SourceConfig(**config_dict.get('sources', {})),
            display=DisplayConfig(**config_dict.get('display', {})),
            ui=UIConfig(**config_dict.get('ui', {})),
            version=config_dict.get('version', _get_version_from_file()),
            app_name=config_dict.get('app_name', 'Pen Compatibility Matrix'),
            config_version=config_dict.get('config_version', '1.0'),
            debug_mode=config_dict.get('debug_mode', False),
            log_level=log_level,
        )

    def get_log_file_path(self) -> Path:
        from ..utils.platform_utils import get_platform_log_dir
        return get_platform_log_dir(APP_NAME) / 'pen-compat-matrix.log'


# Global configuration instance
_global_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Raises:
        RuntimeError: If configuration hasn't been initialized
    """
    if _global_config is None:
        raise RuntimeError("Configuration not initialized. Call init_config() first.")
    return _global_config


def init_config(config_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Initialize the global configuration.

    Args:
        config_file: Optional path to config file. If None, uses the default
            location when it exists, otherwise defaults.

    Returns:
        Initialized AppConfig instance
    """
    global _global_config

    try:
        if config_file:
            _global_config = AppConfig.load_from_file(config_file)
        else:
            default_path = AppConfig().get_config_file_path()
            if default_path.exists():
                _global_config = AppConfig.load_from_file(default_path)
            else:
                _global_config = AppConfig()
                logging.info("Created new configuration with default values")
    except (FileNotFoundError, ValueError) as e:
        logging.warning(f"Failed to load configuration: {e}. Using defaults.")
        _global_config = AppConfig()

    return _global_config


def save_config() -> None:
    """Save the current global configuration to file."""
    get_config().save_to_file()
