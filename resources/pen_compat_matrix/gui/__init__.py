"""
GUI package for Pen Compatibility Matrix.

CustomTkinter desktop viewer for the compatibility matrix.
"""

from .main_window import MainWindow

__all__ = ["MainWindow"]
