import json
import logging

import pytest

from battleships.game.infra.logging import (
    JsonFormatter,
    LoggingConfig,
    build_logging_config,
    configure_logging,
    shutdown_logging,
)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    configure_logging(LoggingConfig())
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str, *args: object, **extra: object) -> logging.LogRecord:
    logger = logging.getLogger("test.json.formatter")
    return logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg=msg,
        args=args,
        exc_info=None,
        extra=extra,
    )


def test_json_formatter_splits_event_fields_and_keeps_extras() -> None:
    payload = json.loads(JsonFormatter().format(_record("attack_resolved row=%d col=%d", 3, 4, outcome="Hit")))
    assert payload["msg"] == "attack_resolved row=3 col=4"
    assert payload["level"] == "INFO"
    assert payload["event"] == "attack_resolved"
    assert payload["fields"] == {"row": "3", "col": "4", "outcome": "Hit"}


def test_json_formatter_plain_message_has_no_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record("logging_file=%s", "/tmp/x")))
    assert payload["msg"] == "logging_file=/tmp/x"
    assert "event" not in payload
    assert "fields" not in payload


def test_build_logging_config_reads_level_and_format(monkeypatch, tmp_path, restore_root_logging) -> None:
    monkeypatch.setenv("BATTLESHIPS_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("BATTLESHIPS_LOG_DIR", raising=False)
    monkeypatch.delenv("BATTLESHIPS_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")

    config = build_logging_config()

    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_format == "json"

    monkeypatch.setenv("BATTLESHIPS_LOG_LEVEL", "warning")
    assert build_logging_config().level_name == "WARNING"

    configure_logging(config)
    assert restore_root_logging.level == logging.DEBUG
    assert restore_root_logging.handlers


def test_configure_logging_without_file_uses_console_only(restore_root_logging) -> None:
    configure_logging(LoggingConfig(level_name="ERROR"))
    assert restore_root_logging.level == logging.ERROR
    assert len(restore_root_logging.handlers) == 1
    assert isinstance(restore_root_logging.handlers[0], logging.StreamHandler)


def test_run_file_is_written_under_app_data_logs(monkeypatch, tmp_path, restore_root_logging) -> None:
    monkeypatch.setenv("BATTLESHIPS_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("BATTLESHIPS_LOG_DIR", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "json")
    configure_logging(build_logging_config())

    logging.getLogger("test.logging.file.path").info("game_over winner=Human shots=%d", 17)
    shutdown_logging()

    files = list((tmp_path / "appdata" / "logs").glob("battleships_run_*.jsonl"))
    assert len(files) == 1
    lines = [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]
    assert {"event": "game_over", "fields": {"winner": "Human", "shots": "17"}}.items() <= lines[-1].items()
