"""
Tests for log setup and the run audit log.
"""

import json
import logging

from citematch.logging import save_log, setup_logging

PAYLOAD = {
    "reporters_file": "reporters.txt",
    "directory": "data",
    "on_read_error": "skip",
    "files_scanned": 3,
    "files_with_citations": 2,
    "matched_rows": 5,
    "unmatched_rows": 1,
    "failed_rows": 0,
    "matched_output": "data/citations.csv",
    "unmatched_output": "data/unmatched_citations.csv",
    "skipped": [{"filename": "bad.txt", "reason": "invalid start byte"}],
}


def test_save_log_json(tmp_path):
    path = save_log("citematch_run", PAYLOAD, str(tmp_path), "json")
    assert path.endswith(".json")
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == PAYLOAD


def test_save_log_markdown(tmp_path):
    path = save_log("citematch_run", PAYLOAD, str(tmp_path / "logs"), "markdown")
    assert path.endswith(".md")
    text = open(path, encoding="utf-8").read()
    assert text.startswith("# citematch_run")
    assert "**Matched Rows**: 5" in text
    assert "`bad.txt`" in text
    assert "invalid start byte" in text


def test_save_log_uses_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = save_log("citematch_run", {"files_scanned": 0})
    assert (tmp_path / "logs").is_dir()
    assert path.endswith(".json")


def test_setup_logging_creates_log_file(tmp_path):
    log_file = setup_logging(verbose=False, log_dir=str(tmp_path / "logs"))
    logging.getLogger("citematch.test").debug("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "citematch_" in log_file
    assert "hello from the test" in open(log_file, encoding="utf-8").read()


def test_setup_logging_verbose_adds_console(tmp_path):
    setup_logging(verbose=True, log_dir=str(tmp_path))
    handler_types = {type(h) for h in logging.getLogger().handlers}
    assert logging.FileHandler in handler_types
    assert logging.StreamHandler in handler_types
