import logging

import pytest

from termjack.blackjack.game_logger import GameLogger, logging_disabled
from termjack.events import EngineEventType


@pytest.fixture
def game_logger(tmp_path, monkeypatch):
    monkeypatch.delenv("TERMJACK_DISABLE_LOGGING", raising=False)
    game_logger = GameLogger(tmp_path / "blackjack.log")
    yield game_logger
    game_logger.close()


def test_events_are_written(game_logger, emitter):
    game_logger.attach(emitter)
    emitter.emit(EngineEventType.HAND_RESULT, {"outcome": "win", "delta": 50})
    emitter.emit(EngineEventType.ERROR, {"message": "disk full"})
    game_logger.close()

    lines = game_logger.log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert 'INFO: hand_result {"outcome": "win", "delta": 50}' in lines[0]
    assert 'ERROR: error {"message": "disk full"}' in lines[1]


def test_log_file_starts_empty(game_logger, emitter):
    game_logger.log_path.write_text("old session\n", encoding="utf-8")
    game_logger.attach(emitter)
    game_logger.close()
    assert game_logger.log_path.read_text(encoding="utf-8") == ""


def test_close_detaches(game_logger, emitter):
    game_logger.attach(emitter)
    game_logger.close()
    emitter.emit(EngineEventType.HAND_RESULT, {"outcome": "loss"})
    assert "loss" not in game_logger.log_path.read_text(encoding="utf-8")


def test_close_restores_package_logger(tmp_path, monkeypatch):
    monkeypatch.delenv("TERMJACK_DISABLE_LOGGING", raising=False)
    package_logger = logging.getLogger("termjack")
    before = (package_logger.propagate, package_logger.level)

    game_logger = GameLogger(tmp_path / "blackjack.log")
    assert package_logger.propagate is False
    game_logger.close()

    assert (package_logger.propagate, package_logger.level) == before


def test_disable_flag(tmp_path, monkeypatch, emitter):
    monkeypatch.setenv("TERMJACK_DISABLE_LOGGING", "true")
    assert logging_disabled()

    game_logger = GameLogger(tmp_path / "blackjack.log")
    try:
        game_logger.attach(emitter)
        emitter.emit(EngineEventType.HAND_RESULT, {"outcome": "win"})
        emitter.emit(EngineEventType.ERROR, {"message": "still logged"})
    finally:
        game_logger.close()

    text = game_logger.log_path.read_text(encoding="utf-8")
    assert "hand_result" not in text
    assert "still logged" in text
