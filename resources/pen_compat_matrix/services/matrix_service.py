"""
Render pass for Pen Compatibility Matrix.

Each render runs the whole pipeline on a snapshot of the UI parameters:
project the dataset for the view mode, filter by the search query, format the
surviving rows and count what is visible.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..models.dataset import Dataset
from ..models.display import DisplayRow, FormatOptions, FormattedRow, MatrixStats, ViewMode
from .formatter import compute_stats, format_row
from .search_filter import filter_rows
from .view_projector import project


@dataclass
class MatrixView:
    """Output of one render pass."""
    view_mode: ViewMode
    query: str
    rows: List[DisplayRow] = field(default_factory=list)
    formatted: List[FormattedRow] = field(default_factory=list)
    stats: MatrixStats = field(default_factory=MatrixStats)

    @property
    def is_empty(self) -> bool:
        return not self.rows


def render_matrix(dataset: Dataset,
                  view_mode: Union[ViewMode, str, None] = ViewMode.GROUPED,
                  query: Optional[str] = "",
                  options: Optional[FormatOptions] = None) -> MatrixView:
    """
    Run projection, filtering and formatting for one render.

    Args:
        dataset: The loaded dataset
        view_mode: ViewMode or its name
        query: Search text
        options: Formatting switches

    Returns:
        MatrixView with display rows, formatted rows and statistics
    """
    mode = view_mode if isinstance(view_mode, ViewMode) else ViewMode.from_name(view_mode)
    options = options or FormatOptions()
    projected = project(dataset, mode)
    visible = filter_rows(projected, query, dataset.tablet_defs, dataset.pen_defs)
    return MatrixView(
        view_mode=mode,
        query=query or "",
        rows=visible,
        formatted=[format_row(row, dataset, options) for row in visible],
        stats=compute_stats(visible, dataset, total_rows=len(projected)),
    )


def to_plain_text(view: MatrixView, header: bool = True) -> str:
    """Tab-separated text of a rendered view, one line per row."""
    lines = ["Tablets\tPens"] if header else []
    lines.extend(row.to_plain_text() for row in view.formatted)
    return "\n".join(lines)
