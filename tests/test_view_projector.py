"""Tests for the four view projections."""

import pytest

from pen_compat_matrix.models import DeviceKind, DisplayRow, ViewMode
from pen_compat_matrix.services.dataset_parser import load_dataset
from pen_compat_matrix.services.view_projector import PROJECTORS, project


def test_every_view_mode_has_a_projector():
    assert set(PROJECTORS) == set(ViewMode)


def test_grouped_keeps_one_row_per_fact(sample_dataset):
    rows = project(sample_dataset, ViewMode.GROUPED)
    assert rows == [
        DisplayRow(tablets=("PTH-660", "PTH-860"), pens=("KP-504E", "KP-505")),
        DisplayRow(tablets=("DTK-1660",), pens=("KP-504E",)),
        DisplayRow(tablets=("CTL-472",), pens=("LP-190K",)),
    ]


def test_grouped_is_the_default(sample_dataset):
    assert project(sample_dataset) == project(sample_dataset, ViewMode.GROUPED)
    assert project(sample_dataset, None) == project(sample_dataset, ViewMode.GROUPED)


def test_grouped_sorts_by_family_then_id():
    dataset = load_dataset("""<compat>
      <tabletdef id="A" name="a" familyid="zeta"/>
      <tabletdef id="B" name="b" familyid="alpha"/>
      <compatrow><tablet>A B C</tablet><pen>P</pen></compatrow>
    </compat>""")
    [row] = project(dataset, ViewMode.GROUPED)
    # C has no definition, so its family is empty and sorts first
    assert row.tablets == ("C", "B", "A")


def test_ungrouped_row_count_is_cross_product(sample_dataset):
    rows = project(sample_dataset, ViewMode.UNGROUPED)
    expected = sum(len(r.tablet_ids) * len(r.pen_ids) for r in sample_dataset.rows)
    assert len(rows) == expected == 6
    assert all(len(row.tablets) == 1 and len(row.pens) == 1 for row in rows)
    assert rows[:4] == [
        DisplayRow(("PTH-660",), ("KP-504E",)),
        DisplayRow(("PTH-660",), ("KP-505",)),
        DisplayRow(("PTH-860",), ("KP-504E",)),
        DisplayRow(("PTH-860",), ("KP-505",)),
    ]


def test_ungrouped_drops_rows_with_an_empty_side(broken_dataset):
    rows = project(broken_dataset, ViewMode.UNGROUPED)
    assert len(rows) == 2
    assert {row.tablets[0] for row in rows} == {"T1", "T9"}


def test_by_pen_aggregates_tablets(sample_dataset):
    rows = project(sample_dataset, ViewMode.BY_PEN)
    assert rows == [
        DisplayRow(tablets=("CTL-472",), pens=("LP-190K",)),
        DisplayRow(tablets=("DTK-1660", "PTH-660", "PTH-860"), pens=("KP-504E",)),
        DisplayRow(tablets=("PTH-660", "PTH-860"), pens=("KP-505",)),
    ]


def test_by_tablet_aggregates_pens(sample_dataset):
    rows = project(sample_dataset, "by-tablet")
    assert rows == [
        DisplayRow(tablets=("CTL-472",), pens=("LP-190K",)),
        DisplayRow(tablets=("DTK-1660",), pens=("KP-504E",)),
        DisplayRow(tablets=("PTH-660",), pens=("KP-504E", "KP-505")),
        DisplayRow(tablets=("PTH-860",), pens=("KP-504E", "KP-505")),
    ]


@pytest.mark.parametrize("fixture_name", ["sample_dataset", "broken_dataset", "scenario_dataset"])
def test_by_tablet_covers_every_tablet(request, fixture_name):
    dataset = request.getfixturevalue(fixture_name)
    rows = project(dataset, ViewMode.BY_TABLET)
    assert {row.tablets[0] for row in rows} == dataset.used_ids(DeviceKind.TABLET)


@pytest.mark.parametrize("fixture_name", ["sample_dataset", "broken_dataset", "scenario_dataset"])
def test_by_pen_covers_every_pen(request, fixture_name):
    dataset = request.getfixturevalue(fixture_name)
    rows = project(dataset, ViewMode.BY_PEN)
    assert {row.pens[0] for row in rows} == dataset.used_ids(DeviceKind.PEN)


def test_tablet_without_pens_still_gets_a_row(broken_dataset):
    rows = project(broken_dataset, ViewMode.BY_TABLET)
    by_tablet = {row.tablets[0]: row.pens for row in rows}
    assert by_tablet == {"T1": ("P7",), "T9": ("P7",)}


def test_unknown_view_mode_name_is_rejected(sample_dataset):
    with pytest.raises(ValueError):
        project(sample_dataset, "sideways")
