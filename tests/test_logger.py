# tests/test_logger.py

import logging

from mamdani.logger import LOGGER_NAMES, set_tick_index, setup_logging


def _flush(name):
    for h in logging.getLogger(name).handlers:
        h.flush()


def test_setup_logging_creates_one_file_per_logger(tmp_path, restore_loggers):
    setup_logging(log_dir=str(tmp_path))
    for name in LOGGER_NAMES:
        assert (tmp_path / f"{name}.log").exists()
        assert logging.getLogger(name).propagate is False


def test_records_carry_tick_index(tmp_path, restore_loggers):
    setup_logging(log_dir=str(tmp_path))
    set_tick_index(42)
    try:
        logging.getLogger("fuzzy_variable").info("tick test")
        _flush("fuzzy_variable")
    finally:
        set_tick_index(-1)
    line = (tmp_path / "fuzzy_variable.log").read_text(encoding="utf-8").strip().splitlines()[-1]
    assert line == "000042 | INFO | fuzzy_variable | tick test"


def test_log_level_filters_file_output(tmp_path, restore_loggers):
    setup_logging(log_dir=str(tmp_path), log_level=logging.WARNING)
    log = logging.getLogger("inference")
    log.info("quiet")
    log.warning("loud")
    _flush("inference")
    text = (tmp_path / "inference.log").read_text(encoding="utf-8")
    assert "quiet" not in text
    assert "loud" in text


def test_rotated_logs_are_cleaned(tmp_path, restore_loggers):
    stale = tmp_path / "inference.log.1"
    stale.write_text("old")
    setup_logging(log_dir=str(tmp_path))
    assert not stale.exists()


def test_append_mode_keeps_previous_content(tmp_path, restore_loggers):
    (tmp_path / "profiler.log").write_text("previous run\n", encoding="utf-8")
    setup_logging(log_dir=str(tmp_path), overwrite=False)
    assert "previous run" in (tmp_path / "profiler.log").read_text(encoding="utf-8")
