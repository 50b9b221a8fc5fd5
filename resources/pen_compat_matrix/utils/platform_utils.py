"""
Platform-specific utilities for Pen Compatibility Matrix.

This module provides cross-platform functions for locating the configuration
and log directories of the application on Windows, macOS, and Linux.
"""

import os
import sys
from pathlib import Path


def is_windows() -> bool:
    """Check if the current operating system is Windows."""
    return os.name == 'nt'


def get_platform_config_dir(app_name: str) -> Path:
    """
    Get the platform-appropriate configuration directory for the application.

    Args:
        app_name: The name of the application.

    Returns:
        A Path object pointing to the configuration directory.
    """
    if is_windows():
        # Windows: %APPDATA%\app_name
        config_dir = Path(os.getenv('APPDATA', '')) / app_name
    elif sys.platform == 'darwin':
        config_dir = Path.home() / 'Library' / 'Application Support' / app_name
    else:
        # Linux: $XDG_CONFIG_HOME/app_name, defaulting to ~/.config
        base = os.getenv('XDG_CONFIG_HOME')
        config_dir = (Path(base) if base else Path.home() / '.config') / app_name

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_platform_log_dir(app_name: str) -> Path:
    """
    Get the platform-appropriate log directory for the application.

    Args:
        app_name: The name of the application.

    Returns:
        A Path object pointing to the log directory.
    """
    if is_windows():
        log_dir = Path(os.getenv('LOCALAPPDATA', '')) / app_name / 'Logs'
    elif sys.platform == 'darwin':
        log_dir = Path.home() / 'Library' / 'Logs' / app_name
    else:
        log_dir = Path.home() / '.local' / 'share' / app_name / 'logs'

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
