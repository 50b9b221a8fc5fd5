"""Shared fixtures for the Pen Compatibility Matrix tests."""

import logging

import pytest

from pen_compat_matrix.config import settings
from pen_compat_matrix.services import source_service
from pen_compat_matrix.services.dataset_parser import load_dataset
from pen_compat_matrix.utils import logger as app_logger


SCENARIO_XML = """<?xml version="1.0" encoding="UTF-8"?>
<compat>
  <tabletdef id="T1" name="Pro" familyid="F"/>
  <pendef id="P1" name="Pen"/>
  <compatrow>
    <tablet>T1</tablet>
    <pen>P1</pen>
  </compatrow>
</compat>
"""

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<compat>
  <tabletfamilydef id="intuos" name="Intuos"/>
  <tabletfamilydef id="cintiq" name="Cintiq"/>
  <penfamilydef id="pro" name="Pro Pen"/>

  <tabletdef id="PTH-660" name="Intuos Pro M" familyid="intuos"/>
  <tabletdef id="PTH-860" name="Intuos Pro L" familyid="intuos"/>
  <tabletdef id="DTK-1660" name="Cintiq 16" familyid="cintiq"/>
  <tabletdef id="CTL-472" name="One by Wacom"/>

  <pendef id="KP-504E" name="Pro Pen 2" familyid="pro"/>
  <pendef id="KP-505" name="Pro Pen 3D" familyid="pro"/>
  <pendef id="LP-190K" name="Pen"/>
  <pendef id="UP-911E" name="Grip Pen"/>

  <compatrow>
    <tabletfamily>intuos</tabletfamily>
    <penfamily>pro</penfamily>
  </compatrow>
  <compatrow>
    <tablet>DTK-1660</tablet>
    <pen>KP-504E</pen>
  </compatrow>
  <compatrow>
    <tablet>CTL-472</tablet>
    <pen>LP-190K</pen>
  </compatrow>
</compat>
"""

BROKEN_REFERENCES_XML = """<compat>
  <tabletdef id="T1" name="One"/>
  <compatrow>
    <tablet>T1
      T9</tablet>
    <pen>P7</pen>
  </compatrow>
  <compatrow>
    <tablet>T9</tablet>
    <penfamily>ghost</penfamily>
  </compatrow>
</compat>
"""


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep configuration, logging and global services per test."""
    for name in ("PEN_COMPAT_SOURCES", "PEN_COMPAT_DEBUG",
                 "PEN_COMPAT_LOG_LEVEL", "PEN_COMPAT_VIEW_MODE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr(settings, "_global_config", None)
    monkeypatch.setattr(source_service, "_global_source_service", None)
    monkeypatch.setattr(app_logger, "_global_logger", None)

    yield

    package_logger = logging.getLogger("pen_compat_matrix")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def scenario_dataset():
    return load_dataset(SCENARIO_XML, source="scenario.xml")


@pytest.fixture
def sample_dataset():
    return load_dataset(SAMPLE_XML, source="sample.xml")


@pytest.fixture
def broken_dataset():
    return load_dataset(BROKEN_REFERENCES_XML, source="broken.xml")


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.xml"
    path.write_text(SAMPLE_XML, encoding="utf-8")
    return path


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "scenario.xml"
    path.write_text(SCENARIO_XML, encoding="utf-8")
    return path


@pytest.fixture
def scenario_xml():
    return SCENARIO_XML


@pytest.fixture
def sample_xml():
    return SAMPLE_XML


@pytest.fixture
def broken_xml():
    return BROKEN_REFERENCES_XML
