from __future__ import annotations

import json

from sfafkit import logger as package_logger
from sfafkit.logging import _flatten_extra, configure_logging, get_logger
from sfafkit.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logs_expose_message_and_extra(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("Compliance check completed", extra={"is_valid": True})

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "Compliance check completed"
    assert payload["is_valid"] is True
    assert "event" not in payload


def test_log_file_receives_records(tmp_path) -> None:
    log_file = tmp_path / "sfafkit.log"
    configure_logging(settings=Settings(log_json=True, log_file=str(log_file)), force=True)

    get_logger("tests").warning("written to file")

    assert "written to file" in log_file.read_text(encoding="utf-8")
    configure_logging(settings=Settings(log_json=False), force=True)


def test_flatten_extra_keeps_explicit_keys() -> None:
    event = _flatten_extra(None, "info", {"event": "x", "field_id": "110", "extra": {"field_id": "999", "count": 2}})

    assert event == {"event": "x", "field_id": "110", "count": 2}


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))
