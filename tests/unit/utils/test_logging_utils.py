"""
Tests for the logging helpers shared by the CLI and the scanning engines.
"""
import logging
from pathlib import Path

from rna_hairpin.utils.logging_utils import (
    ENGINE_LOGGERS,
    configure_engine_logging,
    get_log_file_path,
    setup_logger,
)


def test_get_log_file_path_sanitizes_name(tmp_path):
    path = get_log_file_path("rna_hairpin.folding.stem_loops", log_dir=tmp_path, include_timestamp=False)
    assert path == tmp_path / "rna_hairpin_folding_stem_loops.log"


def test_setup_logger_writes_to_explicit_file(tmp_path):
    """
    An explicit log file receives the records; handlers are not duplicated on reconfiguration.
    """
    log_file = tmp_path / "run.log"
    logger = setup_logger("rna_hairpin.test_logger", level=logging.INFO, log_file=str(log_file))
    setup_logger("rna_hairpin.test_logger", level=logging.INFO, log_file=str(log_file))
    assert len(logger.handlers) == 2

    logger.info("hello hairpins")
    for handler in logger.handlers:
        handler.flush()
    assert "hello hairpins" in log_file.read_text()

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logger_console_only():
    logger = setup_logger("rna_hairpin.console_only", level=logging.DEBUG, enable_file_logging=False)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.handlers[0].level == logging.DEBUG


def test_configure_engine_logging_quiet_level():
    """
    Verbosity 0 keeps engine loggers at WARNING and opens no file handler.
    """
    level = configure_engine_logging(0)
    assert level == logging.WARNING
    for name in ENGINE_LOGGERS:
        engine_logger = logging.getLogger(name)
        assert engine_logger.level == logging.WARNING
        assert not any(isinstance(h, logging.FileHandler) for h in engine_logger.handlers)


def test_configure_engine_logging_caps_verbosity_at_debug(tmp_path):
    """
    Any verbosity above 2 resolves to DEBUG, and an explicit file is shared by every engine logger.
    """
    log_file = tmp_path / "engines.log"
    level = configure_engine_logging(5, log_file=str(log_file))
    assert level == logging.DEBUG

    for name in ENGINE_LOGGERS:
        engine_logger = logging.getLogger(name)
        assert engine_logger.level == logging.DEBUG
        file_handlers = [h for h in engine_logger.handlers if isinstance(h, logging.FileHandler)]
        assert [Path(h.baseFilename) for h in file_handlers] == [log_file]

    configure_engine_logging(0)
