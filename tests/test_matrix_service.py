"""Tests for a full render pass and copied text."""

from pen_compat_matrix.models import FormatOptions, ViewMode
from pen_compat_matrix.services.matrix_service import render_matrix, to_plain_text


def test_render_without_query_shows_everything(sample_dataset):
    view = render_matrix(sample_dataset)
    assert view.view_mode is ViewMode.GROUPED
    assert len(view.rows) == len(view.formatted) == 3
    assert view.stats.summary() == "3 of 3 rows | 4/4 tablets | 3/3 pens"


def test_render_filters_and_counts(sample_dataset):
    view = render_matrix(sample_dataset, "by-pen", "cintiq")
    assert view.view_mode is ViewMode.BY_PEN
    assert [row.pens for row in view.rows] == [("KP-504E",)]
    assert view.stats.visible_rows == 1
    assert view.stats.total_rows == 3
    assert view.stats.visible_tablets == 3


def test_render_with_no_match_is_empty(sample_dataset):
    view = render_matrix(sample_dataset, ViewMode.UNGROUPED, "nothing-like-this")
    assert view.is_empty
    assert view.stats.total_rows == 6
    assert to_plain_text(view) == "Tablets\tPens"
    assert to_plain_text(view, header=False) == ""


def test_plain_text_of_scenario(scenario_dataset):
    view = render_matrix(scenario_dataset, options=FormatOptions(show_names=True))
    assert to_plain_text(view) == "Tablets\tPens\nPro (T1)\tPen (P1)"


def test_render_reuses_options(scenario_dataset):
    view = render_matrix(scenario_dataset, options=FormatOptions(show_names=False))
    assert view.formatted[0].to_plain_text() == "T1\tP1"
