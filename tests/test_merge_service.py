"""Tests for merging several datasets into one."""

from pen_compat_matrix.models import DeviceKind, WarningKind
from pen_compat_matrix.services.dataset_parser import load_dataset
from pen_compat_matrix.services.merge_service import merge_datasets


OLD = """<compat>
  <tabletdef id="T1" name="Old"/>
  <pendef id="P1" name="Pen"/>
  <compatrow><tablet>T1</tablet><pen>P1 P2</pen></compatrow>
</compat>"""

NEW = """<compat>
  <tabletdef id="T1" name="New"/>
  <pendef id="P2" name="Second pen"/>
  <compatrow><tablet>T1</tablet><pen>P2</pen></compatrow>
</compat>"""


def ids(rows):
    return [(row.tablet_ids, row.pen_ids) for row in rows]


def test_later_definitions_win():
    merged = merge_datasets([load_dataset(OLD, "old.xml"), load_dataset(NEW, "new.xml")])
    assert merged.tablet_defs["T1"].name == "New"
    assert set(merged.pen_defs) == {"P1", "P2"}
    assert merged.sources == ["old.xml", "new.xml"]


def test_rows_are_concatenated_in_load_order():
    old, new = load_dataset(OLD), load_dataset(NEW)
    merged = merge_datasets([old, new])
    assert ids(merged.rows) == ids(old.rows) + ids(new.rows)
    assert [row.index for row in merged.rows] == [0, 1]


def test_merge_does_not_touch_inputs():
    old, new = load_dataset(OLD), load_dataset(NEW)
    merged = merge_datasets([old, new])

    assert old.tablet_defs["T1"].name == "Old"
    assert len(old.rows) == 1
    assert merged.tablet_defs is not old.tablet_defs
    assert merged.rows is not old.rows

    merged.rows.clear()
    merged.pen_defs.clear()
    assert len(old.rows) == 1
    assert "P1" in old.pen_defs


def test_missing_definitions_are_recomputed_after_merge():
    old = load_dataset(OLD)
    assert "P2" in old.diagnostics.missing_pens

    merged = merge_datasets([old, load_dataset(NEW)])
    assert not merged.diagnostics.missing_pens
    assert merged.diagnostics.subjects(WarningKind.MISSING_DEFINITION, DeviceKind.PEN) == []


def test_merging_a_dataset_with_itself():
    dataset = load_dataset(OLD, "old.xml")
    merged = merge_datasets([dataset, dataset])

    assert merged.tablet_defs == dataset.tablet_defs
    assert merged.pen_defs == dataset.pen_defs
    # Rows are not deduplicated
    assert ids(merged.rows) == ids(dataset.rows) * 2
    assert merged.used_ids(DeviceKind.PEN) == dataset.used_ids(DeviceKind.PEN)
    assert (merged.diagnostics.subjects(WarningKind.MISSING_DEFINITION, DeviceKind.PEN)
            == dataset.diagnostics.subjects(WarningKind.MISSING_DEFINITION, DeviceKind.PEN))


def test_conflicts_are_silent_by_default():
    merged = merge_datasets([load_dataset(OLD), load_dataset(NEW)])
    assert not merged.diagnostics.of_kind(WarningKind.OVERRIDDEN_DEFINITION)


def test_conflicts_reported_on_request():
    merged = merge_datasets([load_dataset(OLD, "old.xml"), load_dataset(NEW, "new.xml")],
                            report_conflicts=True)
    [warning] = merged.diagnostics.of_kind(WarningKind.OVERRIDDEN_DEFINITION)
    assert warning.subject_id == "T1"
    assert warning.device_kind is DeviceKind.TABLET
    assert warning.source == "new.xml"


def test_identical_redefinition_is_not_a_conflict():
    dataset = load_dataset(OLD)
    merged = merge_datasets([dataset, dataset], report_conflicts=True)
    assert not merged.diagnostics.of_kind(WarningKind.OVERRIDDEN_DEFINITION)


def test_per_document_warnings_are_carried_once(broken_xml):
    broken = load_dataset(broken_xml, "broken.xml")
    merged = merge_datasets([broken, broken])
    assert len(merged.diagnostics.of_kind(WarningKind.UNKNOWN_FAMILY)) == 1


def test_merging_nothing_gives_an_empty_dataset():
    merged = merge_datasets([])
    assert merged.is_empty
    assert len(merged.diagnostics) == 0


def test_missing_tablet_rows_point_into_the_merged_list(broken_xml):
    broken = load_dataset(broken_xml, "broken.xml")
    assert broken.diagnostics.missing_tablets == {"T9": {0, 1}}

    merged = merge_datasets([broken, broken])
    assert merged.diagnostics.missing_tablets == {"T9": {0, 1, 2, 3}}
    assert [row.index for row in broken.rows] == [0, 1]
