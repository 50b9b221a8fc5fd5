"""Tests for input validation."""

from pen_compat_matrix.models import ViewMode
from pen_compat_matrix.utils.validators import Validator, get_validator


def test_url_sources():
    validator = Validator()
    result = validator.validate_source("https://example.org/compat.xml")
    assert result
    assert result.details["source_type"] == "url"
    assert validator.validate_source("file:///srv/compat.xml")
    assert not validator.validate_source("https:///compat.xml")
    assert not validator.validate_source("ftp://example.org/compat.xml")


def test_path_sources(tmp_path):
    validator = Validator()
    existing = tmp_path / "compat.xml"
    existing.write_text("<compat/>", encoding="utf-8")

    assert validator.validate_source(str(existing)).details["source_type"] == "path"
    assert not validator.validate_source(str(tmp_path / "missing.xml"))
    assert not validator.validate_source(str(tmp_path))
    assert validator.validate_source(str(tmp_path / "missing.xml"), must_exist=False)


def test_windows_drive_letter_is_a_path():
    result = Validator().validate_source(r"C:\data\compat.xml", must_exist=False)
    assert result
    assert result.details["source_type"] == "path"


def test_empty_sources():
    validator = Validator()
    assert not validator.validate_source("")
    assert not validator.validate_source("   ")
    assert not validator.validate_sources([])


def test_first_invalid_source_is_reported(tmp_path):
    result = Validator().validate_sources(["https://example.org/a.xml",
                                           str(tmp_path / "missing.xml")])
    assert not result
    assert "missing.xml" in result.message


def test_view_mode():
    validator = Validator()
    assert validator.validate_view_mode("by_tablet").details["view_mode"] is ViewMode.BY_TABLET
    assert not validator.validate_view_mode("diagonal")


def test_timeout():
    validator = Validator()
    assert validator.validate_timeout("30").details["timeout"] == 30
    assert not validator.validate_timeout("soon")
    assert not validator.validate_timeout(0)
    assert not validator.validate_timeout(601)


def test_global_validator():
    assert get_validator() is get_validator()
