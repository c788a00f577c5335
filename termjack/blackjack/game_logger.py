"""
Session log for blackjack games.
Writes every engine event as one line to a log file that starts empty each session.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from termjack.events import EventEmitter, EngineEventType

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"

# Event types logged above INFO
EVENT_LEVELS = {
    EngineEventType.ERROR.name: logging.ERROR,
    EngineEventType.WARNING.name: logging.WARNING,
    EngineEventType.PLAYER_BET.name: logging.DEBUG,
    EngineEventType.PHASE_CHANGED.name: logging.DEBUG,
    EngineEventType.PROFILE_SAVED.name: logging.DEBUG,
    EngineEventType.COMMAND_IGNORED.name: logging.DEBUG,
    EngineEventType.COMMAND_DROPPED.name: logging.DEBUG,
}


def logging_disabled() -> bool:
    return os.environ.get("TERMJACK_DISABLE_LOGGING", "").lower() in (
        "1",
        "true",
        "yes",
    )


class GameLogger:
    """Writes engine events to the session log file."""

    def __init__(
        self,
        log_path: Union[str, Path] = "blackjack.log",
        log_level=logging.DEBUG,
    ):
        self.log_path = Path(log_path)
        # Handler sits on the package logger so module loggers land in the file too
        self.package_logger = logging.getLogger("termjack")
        self._saved = (self.package_logger.propagate, self.package_logger.level)
        self.package_logger.propagate = False
        self.logger = logging.getLogger("termjack.session")
        self._unsubscribe = None
        self._handler: Optional[logging.Handler] = None

        if logging_disabled():
            self.package_logger.setLevel(logging.ERROR)
        else:
            self.package_logger.setLevel(log_level)

    def open(self) -> None:
        """Truncate the log file and start writing to it."""
        if self._handler is not None:
            return
        handler = logging.FileHandler(self.log_path, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.package_logger.addHandler(handler)
        self._handler = handler

    def attach(self, emitter: EventEmitter) -> None:
        """Log every event emitted on `emitter`."""
        self.open()
        self._unsubscribe = emitter.on_any(self.log_event)

    def log_event(self, event: Tuple[str, Dict[str, Any]]) -> None:
        event_type, data = event
        level = EVENT_LEVELS.get(event_type, logging.INFO)
        if self.logger.isEnabledFor(level):
            payload = json.dumps(data, default=str, ensure_ascii=False) if data else ""
            self.logger.log(level, "%s %s", event_type.lower(), payload)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._handler is not None:
            self.package_logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
        self.package_logger.propagate, level = self._saved
        self.package_logger.setLevel(level)
