"""
Pen Compatibility Matrix

Builds the tablet/pen compatibility matrix from a hand-maintained XML dataset:
parsing, family expansion, merging, view projection, search and formatting,
with a CustomTkinter viewer and a command line front end.
"""

from .config.settings import _get_version_from_file

__version__ = _get_version_from_file()
__description__ = "Tablet and pen compatibility matrix viewer"

# Package-level imports for convenience
from .config.settings import AppConfig
from .errors import FetchError, ParseError, PenCompatError
from .models import (
    Dataset, DeviceDef, DisplayRow, FamilyDef, FormatOptions, MatrixStats, ViewMode
)
from .services.dataset_parser import load_dataset
from .services.merge_service import merge_datasets
from .services.view_projector import project
from .services.search_filter import filter_rows
from .services.formatter import compare_device_ids, compute_stats, format_row
from .services.matrix_service import render_matrix

__all__ = [
    "AppConfig",
    "FetchError", "ParseError", "PenCompatError",
    "Dataset", "DeviceDef", "DisplayRow", "FamilyDef", "FormatOptions", "MatrixStats",
    "ViewMode",
    "load_dataset", "merge_datasets", "project", "filter_rows",
    "compare_device_ids", "compute_stats", "format_row", "render_matrix",
]
