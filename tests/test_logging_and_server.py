import json
import logging

import pytest

from mazegen import logging_utils
from mazegen.logging_utils import get_logger
from mazegen.server import _configure_logging


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    get_logger("mazegen.test").info(event="maze_served", seed=4, size="21 x 15", skipped=None)
    line = capsys.readouterr().out.strip()
    assert line.startswith("level=info ts=")
    assert "event=maze_served" in line
    assert "seed=4" in line
    assert "size=21_x_15" in line
    assert "skipped" not in line
    assert "logger=mazegen.test" in line


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    get_logger("mazegen.test").warn(event="bad_request", detail="width must be odd")
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "warn"
    assert rec["event"] == "bad_request"
    assert rec["detail"] == "width must be odd"


def test_level_filter_and_stderr(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    log = get_logger("mazegen.test")
    log.debug(event="hidden")
    log.error(event="generation_failed")
    captured = capsys.readouterr()
    assert "hidden" not in captured.out
    assert "event=generation_failed" in captured.err


def test_set_level(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.CURRENT_LEVEL)
    logging_utils.set_level("error")
    assert logging_utils.CURRENT_LEVEL == logging_utils.LEVELS["error"]
    with pytest.raises(ValueError):
        logging_utils.set_level("loud")


def test_get_logger_is_cached():
    assert get_logger("mazegen.a") is get_logger("mazegen.a")
    assert get_logger("mazegen.a") is not get_logger("mazegen.b")


def test_configure_logging_creates_file(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        # Run twice to ensure handlers are replaced, not stacked
        _configure_logging(str(tmp_path))
        path = _configure_logging(str(tmp_path))
        assert len(root.handlers) == 2
        logging.getLogger("mazegen.test").info("hello")
        for h in root.handlers:
            h.flush()
        assert (tmp_path / "mazegen.log").exists()
        assert path.endswith("mazegen.log")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])


def test_bound_context_and_configure(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    bound = get_logger("mazegen.test").bind(seed=7)
    bound.info(event="stage_done", stage="maze")
    line = capsys.readouterr().out
    assert "seed=7" in line and "stage=maze" in line
    assert "seed" not in get_logger("mazegen.test").context
    logging_utils.configure(level="WARN", json_mode=True)
    bound.info(event="hidden")
    bound.warn(event="shown")
    rec = json.loads(capsys.readouterr().out)
    assert rec == {"seed": 7, "event": "shown", "logger": "mazegen.test", "level": "warn", "ts": rec["ts"]}
