"""
GUI components for Pen Compatibility Matrix.

Reusable CustomTkinter widgets assembled by the main window.
"""

from .controls_panel import ControlsPanel
from .log_panel import LogEntry, LogPanel
from .matrix_panel import MatrixPanel

__all__ = ["ControlsPanel", "LogEntry", "LogPanel", "MatrixPanel"]
