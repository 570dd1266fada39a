# File: tests/test_config.py
"""
Test MatrixConfig defaults and loading overrides from TOML/JSON files.
"""

import json

import pytest

from flatmat.config import MatrixConfig, load_config
from flatmat.logging_config import setup_logging


def test_defaults():
    cfg = MatrixConfig()
    assert cfg.default_dtype == "float64"
    assert cfg.default_layout == "row_major"
    assert cfg.delimiter == ","
    assert cfg.random_seed is None


def test_delimiter_must_be_single_char():
    with pytest.raises(ValueError):
        MatrixConfig(delimiter="::")


def test_load_toml(tmp_path):
    path = tmp_path / "flatmat.toml"
    path.write_text(
        '[flatmat]\ndefault_layout = "col_major"\ndelimiter = ";"\nrandom_seed = 42\n',
        encoding="utf-8",
    )
    cfg = load_config(path)

    assert cfg.default_layout == "col_major"
    assert cfg.delimiter == ";"
    assert cfg.random_seed == 42
    assert cfg.default_dtype == "float64"


def test_load_json(tmp_path):
    path = tmp_path / "flatmat.json"
    path.write_text(json.dumps({"default_dtype": "int32"}), encoding="utf-8")
    assert load_config(path).default_dtype == "int32"


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "flatmat.json"
    path.write_text(json.dumps({"colour": "blue"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_bad_extension_and_missing_file(tmp_path):
    path = tmp_path / "flatmat.yaml"
    path.write_text("x: 1", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_setup_logging_replaces_only_its_own_handlers(tmp_path):
    """
    Calling setup_logging twice keeps one stderr + one file handler, and a
    handler the application attached itself survives.
    """
    import logging

    logger = logging.getLogger("flatmat")
    own = logging.NullHandler()
    logger.addHandler(own)
    try:
        log_file = tmp_path / "flatmat.log"
        setup_logging("debug", log_file=str(log_file))
        setup_logging("debug", log_file=str(log_file))

        assert logger.level == logging.DEBUG
        assert own in logger.handlers
        assert len(logger.handlers) == 3
        assert logger.propagate is False

        logging.getLogger("flatmat.io").debug("reorder step")
        for handler in logger.handlers:
            handler.flush()
        assert "flatmat.io: reorder step" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_setup_logging_level_from_config(monkeypatch):
    import logging
    from flatmat.config import CONFIG

    monkeypatch.setattr(CONFIG, "log_level", "ERROR")
    logger = setup_logging()
    try:
        assert logger.level == logging.ERROR
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("chatty")
