"""
Logging utility for Pen Compatibility Matrix.

This module provides colored console logging, optional file logging, a custom
HIGHLIGHT level and a hook that mirrors log records into the desktop log panel.
"""

import logging
import re
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional, Union


class LogLevel(Enum):
    """Log levels understood by the application logger."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    HIGHLIGHT = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR


logging.addLevelName(LogLevel.HIGHLIGHT.value, "HIGHLIGHT")


class ColorCodes:
    """ANSI color codes used for console output."""
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    PURPLE = "\033[0;35m"
    GRAY = "\033[0;90m"
    NC = "\033[0m"

    _ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    @classmethod
    def strip_colors(cls, text: str) -> str:
        """Remove ANSI escape sequences from text."""
        return cls._ANSI_PATTERN.sub("", text)

    @classmethod
    def for_level(cls, level: int) -> str:
        """Get the color used for a log level."""
        if level >= logging.ERROR:
            return cls.RED
        if level >= logging.WARNING:
            return cls.YELLOW
        if level == LogLevel.HIGHLIGHT.value:
            return cls.PURPLE
        if level >= logging.INFO:
            return cls.BLUE
        return cls.GRAY


class ColoredFormatter(logging.Formatter):
    """Console formatter that prefixes each line with a colored level tag."""

    def __init__(self, colored: bool = True):
        super().__init__("%(message)s")
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tag = f"[{record.levelname}]"
        if not self.colored:
            return f"{tag} {message}"
        return f"{ColorCodes.for_level(record.levelno)}{tag}{ColorCodes.NC} {message}"


class GUIHandler(logging.Handler):
    """Forwards formatted, color-free records to a GUI callback."""

    def __init__(self, callback: Callable[[str, int], None]):
        super().__init__()
        self.callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.callback(ColorCodes.strip_colors(self.format(record)), record.levelno)
        except Exception:
            self.handleError(record)


class CompatLogger:
    """
    Application logger wrapper.

    Owns the root handlers for the application and adds the HIGHLIGHT level
    used for headline messages (dataset loaded, report summaries).
    """

    def __init__(self, name: str = "pen_compat_matrix", colored: bool = True,
                 log_file: Optional[Path] = None, level: int = logging.INFO):
        self.name = name
        self.colored = colored
        self.log_file = log_file
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._gui_handlers: List[GUIHandler] = []

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter(colored=colored))
        self._logger.addHandler(console_handler)

        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setFormatter(logging.Formatter(
                    "%(asctime)s %(levelname)s %(name)s: %(message)s"
                ))
                self._logger.addHandler(file_handler)
            except OSError as e:
                self._logger.warning(f"Could not open log file {log_file}: {e}")

    @property
    def level(self) -> int:
        return self._logger.level

    def set_level(self, level: Union[int, Any]) -> None:
        """Change the active log level."""
        self._logger.setLevel(_coerce_level(level))

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def highlight(self, message: str) -> None:
        self._logger.log(LogLevel.HIGHLIGHT.value, message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def add_gui_handler(self, callback: Callable[[str, int], None]) -> GUIHandler:
        """
        Mirror log records into a GUI component.

        Args:
            callback: Called with (message, level) for every record

        Returns:
            The installed handler, for later removal
        """
        handler = GUIHandler(callback)
        handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)
        self._gui_handlers.append(handler)
        return handler

    def remove_gui_handler(self, handler: GUIHandler) -> None:
        """Detach a handler installed by add_gui_handler."""
        self._logger.removeHandler(handler)
        if handler in self._gui_handlers:
            self._gui_handlers.remove(handler)


def _coerce_level(level: Union[int, str, Any]) -> int:
    """Accept ints, level names, or enums whose value is either."""
    if isinstance(level, Enum):
        level = level.value
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return int(level)


# Global logger instance
_global_logger: Optional[CompatLogger] = None


def setup_logging(colored: bool = True, log_file: Optional[Path] = None,
                  level: Union[int, str, Any] = logging.INFO) -> CompatLogger:
    """
    Configure the global application logger.

    Args:
        colored: Use ANSI colors on the console
        log_file: Optional file receiving a plain copy of every record
        level: Log level as int, name, or LogLevel-like enum

    Returns:
        Configured CompatLogger instance
    """
    global _global_logger
    _global_logger = CompatLogger(colored=colored, log_file=log_file,
                                  level=_coerce_level(level))
    return _global_logger


def get_logger() -> CompatLogger:
    """
    Get the global application logger.

    Raises:
        RuntimeError: If setup_logging() has not been called
    """
    if _global_logger is None:
        raise RuntimeError("Logging not initialized. Call setup_logging() first.")
    return _global_logger
