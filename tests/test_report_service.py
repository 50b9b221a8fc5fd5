"""Tests for the dataset consistency report."""

from pen_compat_matrix.models import DeviceKind
from pen_compat_matrix.services.dataset_parser import load_dataset
from pen_compat_matrix.services.report_service import build_report, format_report
from pen_compat_matrix.utils.logger import ColorCodes


def test_clean_dataset_report(sample_dataset):
    report = build_report(sample_dataset)
    tablets = report.kinds[DeviceKind.TABLET]
    pens = report.kinds[DeviceKind.PEN]

    assert report.rows == 3
    assert report.sources == ["sample.xml"]
    assert (tablets.defined, tablets.used) == (4, 4)
    assert (pens.defined, pens.used) == (4, 3)
    assert pens.unused == ["UP-911E"]
    assert not report.has_problems


def test_broken_dataset_report(broken_dataset):
    report = build_report(broken_dataset)
    assert report.kinds[DeviceKind.TABLET].undefined == ["T9"]
    assert report.kinds[DeviceKind.PEN].undefined == ["P7"]
    assert report.kinds[DeviceKind.PEN].unknown_families == ["ghost"]
    assert report.has_problems


def test_duplicates_are_problems():
    dataset = load_dataset("""<compat>
      <pendef id="P1" name="a"/><pendef id="P1" name="b"/>
      <compatrow><tablet>T</tablet><pen>P1</pen></compatrow>
    </compat>""")
    report = build_report(dataset)
    assert report.kinds[DeviceKind.PEN].duplicates == ["P1"]
    assert report.has_problems


def test_format_report_plain(broken_dataset):
    text = format_report(build_report(broken_dataset))
    assert "Rows: 2" in text
    assert "Sources: broken.xml" in text
    assert "Tablets used but not defined (1):\n    T9" in text
    assert "Pens used but not defined (1):\n    P7" in text
    assert "Unknown families (1):\n    ghost" in text
    assert "Pens defined but not used (0):" in text
    assert "\033[" not in text


def test_format_report_colored(broken_dataset):
    text = format_report(build_report(broken_dataset), colored=True)
    assert ColorCodes.RED in text
    assert "Definitions count: 1" in ColorCodes.strip_colors(text)
