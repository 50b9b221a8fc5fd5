"""
Data models for Pen Compatibility Matrix.

This module contains the device definitions, compatibility rows, datasets,
diagnostics and display structures used throughout the application.
"""

from .device import DeviceKind, DeviceDef, FamilyDef, device_sort_key, family_label
from .diagnostics import Diagnostics, ValidationWarning, WarningKind
from .dataset import CompatFact, EffectiveRow, Dataset
from .display import (
    ViewMode, DisplayRow, FormatOptions, FamilyGroup, FormattedCell,
    FormattedRow, MatrixStats
)

__all__ = [
    "DeviceKind", "DeviceDef", "FamilyDef", "device_sort_key", "family_label",
    "Diagnostics", "ValidationWarning", "WarningKind",
    "CompatFact", "EffectiveRow", "Dataset",
    "ViewMode", "DisplayRow", "FormatOptions", "FamilyGroup", "FormattedCell",
    "FormattedRow", "MatrixStats",
]
