import logging
from pathlib import Path

from word_walk.config import AppConfig
from word_walk.logging_config import APP_LOGGER_NAME, setup_logging


def _build_config(tmp_path: Path) -> AppConfig:
    log_dir = tmp_path / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return AppConfig(
        log_level="INFO",
        file_log_level="DEBUG",
        log_dir=str(log_dir),
        log_file=str(log_dir / "app.log"),
        catalog_path=str(tmp_path / "words.json"),
        repo_id="repo/x",
        tts_voice="af_heart",
        tts_use_gpu=False,
        tts_prewarm_enabled=False,
        default_rate="medium",
        default_mode="normal",
    )


def test_setup_logging_replaces_handlers(tmp_path):
    config = _build_config(tmp_path)
    logger = setup_logging(config)
    logger_again = setup_logging(config)

    assert logger is logger_again
    assert logger.name == APP_LOGGER_NAME
    assert len(logger.handlers) == 2
    assert logger.propagate is False


def test_setup_logging_writes_module_and_library_records_to_file(tmp_path):
    config = _build_config(tmp_path)
    logger = setup_logging(config)

    logging.getLogger("word_walk.application.playback_controller").debug("controller detail")
    logging.getLogger("kokoro").info("pipeline chatter")
    for handler in logger.handlers:
        handler.flush()
    for handler in logging.getLogger("kokoro").handlers:
        handler.flush()

    content = Path(config.log_file).read_text(encoding="utf-8")
    assert "controller detail" in content
    assert "pipeline chatter" in content
    assert logging.getLogger("kokoro").propagate is False
