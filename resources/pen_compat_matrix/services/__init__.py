"""
Service modules for Pen Compatibility Matrix.

This module provides the dataset pipeline: loading and parsing documents,
family expansion, merging, view projection, search filtering, formatting and
the dataset report.
"""

from .dataset_parser import load_dataset, parse_document, check_references
from .family_expander import build_family_index, expand_facts
from .merge_service import merge_datasets
from .view_projector import project
from .search_filter import SearchFilter, filter_rows, tokenize_query
from .formatter import compare_device_ids, compute_stats, format_row, render_device_id
from .matrix_service import MatrixView, render_matrix, to_plain_text
from .report_service import build_report, format_report
from .source_service import SourceService

__all__ = [
    "load_dataset", "parse_document", "check_references",
    "build_family_index", "expand_facts",
    "merge_datasets",
    "project",
    "SearchFilter", "filter_rows", "tokenize_query",
    "compare_device_ids", "compute_stats", "format_row", "render_device_id",
    "MatrixView", "render_matrix", "to_plain_text",
    "build_report", "format_report",
    "SourceService",
]
