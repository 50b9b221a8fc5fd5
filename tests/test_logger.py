"""Tests for the application logger."""

import logging

import pytest

from pen_compat_matrix.config.settings import LogLevel as ConfigLogLevel
from pen_compat_matrix.services.dataset_parser import load_dataset
from pen_compat_matrix.utils.logger import ColorCodes, LogLevel, get_logger, setup_logging


def test_get_logger_requires_setup():
    with pytest.raises(RuntimeError):
        get_logger()


def test_console_output_without_colors(capsys):
    logger = setup_logging(colored=False)
    assert get_logger() is logger

    logger.highlight("Dataset ready")
    logger.debug("hidden at INFO")

    err = capsys.readouterr().err
    assert "[HIGHLIGHT] Dataset ready" in err
    assert "hidden" not in err


def test_colored_output(capsys):
    setup_logging(colored=True).error("broken")
    err = capsys.readouterr().err
    assert ColorCodes.RED in err
    assert ColorCodes.strip_colors(err).strip() == "[ERROR] broken"


def test_level_accepts_config_enum(capsys):
    logger = setup_logging(colored=False, level=ConfigLogLevel.DEBUG)
    assert logger.level == logging.DEBUG
    logger.set_level("warning")
    assert logger.level == logging.WARNING


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "logs" / "app.log"
    setup_logging(colored=False, log_file=log_file).info("to the file")
    logging.getLogger("pen_compat_matrix").handlers[-1].flush()
    assert "INFO pen_compat_matrix: to the file" in log_file.read_text(encoding="utf-8")


def test_gui_handler_receives_pipeline_warnings(capsys, broken_xml):
    logger = setup_logging(colored=False)
    received = []
    handler = logger.add_gui_handler(lambda message, level: received.append((message, level)))

    load_dataset(broken_xml, source="broken.xml")
    levels = {level for _, level in received}
    assert logging.WARNING in levels
    assert any("ghost" in message for message, _ in received)

    logger.remove_gui_handler(handler)
    received.clear()
    logger.highlight("after removal")
    assert received == []


def test_highlight_level_name():
    assert logging.getLevelName(LogLevel.HIGHLIGHT.value) == "HIGHLIGHT"
