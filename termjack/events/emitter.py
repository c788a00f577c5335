"""
Event system for the termjack engine.

The engine reports phase transitions, card draws and settlements as
structured events. Emission is fire-and-forget: a failing handler is logged
and never affects the game.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("termjack.events")

EventKey = Union[str, Enum]


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


@dataclass(frozen=True, eq=False)
class Subscription:
    callback: Callable
    priority: int


def _event_name(event_type: EventKey) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """
    Event emitter for the termjack engine.

    Handlers for one event type run in priority order, highest first, and
    in subscription order within a priority. Listeners registered with
    `on_any` run after the typed handlers and receive an
    ``(event_type, data)`` pair, where `event_type` is the enum member name.
    Registration is guarded by a re-entrant lock; handlers are called
    outside it, so a handler may subscribe or unsubscribe.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Subscription]] = {}
        self._global_listeners: List[Subscription] = []
        self._listener_lock = threading.RLock()

    def _add(self, bucket: List[Subscription], subscription: Subscription) -> Callable:
        with self._listener_lock:
            position = len(bucket)
            for i, existing in enumerate(bucket):
                if existing.priority < subscription.priority:
                    position = i
                    break
            bucket.insert(position, subscription)

        def unsubscribe():
            with self._listener_lock:
                if subscription in bucket:
                    bucket.remove(subscription)

        return unsubscribe

    def on(
        self,
        event_type: EventKey,
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to one event type.

        Args:
            event_type: Event name or `EngineEventType` member
            callback: Called as ``callback(data)``
            priority: Priority level for this handler

        Returns:
            Function that removes this subscription
        """
        with self._listener_lock:
            bucket = self._listeners.setdefault(_event_name(event_type), [])
            return self._add(bucket, Subscription(callback, priority.value))

    def once(
        self,
        event_type: EventKey,
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """Subscribe for the next occurrence of an event only."""
        unsubscribe: Optional[Callable] = None

        def handle_once(data):
            unsubscribe()
            callback(data)

        unsubscribe = self.on(event_type, handle_once, priority)
        return unsubscribe

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to every event.

        Args:
            callback: Called as ``callback((event_type, data))``
            priority: Priority level for this handler

        Returns:
            Function that removes this subscription
        """
        return self._add(self._global_listeners, Subscription(callback, priority.value))

    def emit(self, event_type: EventKey, data: Dict[str, Any]) -> int:
        """
        Deliver an event to its handlers and to every global listener.

        Args:
            event_type: Event name or `EngineEventType` member
            data: Event payload

        Returns:
            Number of handlers that completed without raising
        """
        name = _event_name(event_type)
        with self._listener_lock:
            calls = [(sub.callback, data) for sub in self._listeners.get(name, ())]
            calls += [(sub.callback, (name, data)) for sub in self._global_listeners]

        delivered = 0
        for callback, argument in calls:
            try:
                callback(argument)
            except Exception:
                logger.exception("Handler for %s failed", name)
            else:
                delivered += 1
        return delivered

    def remove_all_listeners(self, event_type: Optional[EventKey] = None) -> None:
        """
        Drop the handlers of one event type, or every handler when no type
        is given.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners.pop(_event_name(event_type), None)


class EventBus:
    """
    Process-wide default emitter.

    Components take an emitter argument and fall back to the bus only when
    none is given; tests reset `_instance` between cases.
    """

    _instance: Optional[EventEmitter] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """
    Event types emitted by the termjack engine.
    """

    # Engine lifecycle
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Round lifecycle
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"
    PHASE_CHANGED = "phase_changed"

    # Betting
    PLAYER_BET = "player_bet"
    BET_CONFIRMED = "bet_confirmed"

    # Player input
    PLAYER_ACTION = "player_action"
    COMMAND_IGNORED = "command_ignored"
    COMMAND_DROPPED = "command_dropped"

    # Cards
    SHUFFLE = "shuffle"
    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"

    # Hands and money
    HAND_BUSTED = "hand_busted"
    HAND_RESULT = "hand_result"
    BANKROLL_UPDATED = "bankroll_updated"
    PROFILE_SAVED = "profile_saved"

    # Problems
    WARNING = "warning"
    ERROR = "error"
