# tests/test_core/test_logging.py

from loguru import logger

from moviereview.core.logger import LoggingConfig


def test_credentials_in_extra_are_masked():
    captured = []
    sink_id = logger.add(lambda message: captured.append(message.record), level="INFO")
    try:
        logger.bind(password="hunter2", refresh_token="abc.def.ghi", user_id=3).info("login attempt")
    finally:
        logger.remove(sink_id)

    extra = captured[-1]["extra"]
    assert extra["password"] == "***"
    assert extra["refresh_token"] == "***"
    assert extra["user_id"] == 3
    assert extra["request_id"] == "N/A"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_JSON", "1")
    monkeypatch.setenv("LOG_DIR", "var/log")
    monkeypatch.setenv("LOG_FILE", "api.log")

    cfg = LoggingConfig.from_env()
    assert cfg.level == "DEBUG"
    assert cfg.json is True
    assert str(cfg.file_path).replace("\\", "/") == "var/log/api.log"
