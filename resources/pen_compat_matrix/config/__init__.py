"""
Configuration module for Pen Compatibility Matrix.

This module handles application settings, user preferences, and configuration
file management with proper validation and error handling.
"""

from .settings import AppConfig, get_config, init_config

__all__ = ["AppConfig", "get_config", "init_config"]
