import pytest

from app_deploy import log


def test_logger_writes_formatted_line(monkeypatch, capsys):
    monkeypatch.setattr(log, "LOG_LEVEL", "DEBUG")
    log.get_logger("test").info("hello %s", "world")
    err = capsys.readouterr().err
    assert "INFO app_deploy.test hello world" in err


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setattr(log, "LOG_LEVEL", "WARNING")
    logger = log.get_logger("test")
    logger.debug("hidden")
    logger.warning("shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_exception_includes_traceback(monkeypatch, capsys):
    monkeypatch.setattr(log, "LOG_LEVEL", "DEBUG")
    try:
        raise ValueError("bad value")
    except ValueError:
        log.get_logger("test").exception("failed")
    err = capsys.readouterr().err
    assert "ERROR app_deploy.test failed" in err
    assert "ValueError: bad value" in err


def test_set_level(monkeypatch):
    monkeypatch.setattr(log, "LOG_LEVEL", "INFO")
    log.set_level("error")
    assert log.LOG_LEVEL == "ERROR"
    with pytest.raises(ValueError):
        log.set_level("loud")


def test_loggers_are_cached():
    assert log.get_logger("same") is log.get_logger("same")


def test_log_file_receives_lines(monkeypatch, tmp_path, capsys):
    path = tmp_path / "deploy.log"
    monkeypatch.setattr(log, "LOG_FILE", str(path))
    monkeypatch.setattr(log, "LOG_LEVEL", "DEBUG")
    assert log.get_log_file_path() == str(path)

    log.get_logger("file-test").warning("written %d", 1)

    assert "WARNING app_deploy.file-test written 1" in path.read_text(encoding="utf-8")
