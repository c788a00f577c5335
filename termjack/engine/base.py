"""
Base engine class for termjack.

This module provides the abstract base class the blackjack engine builds on.
It holds the adapter, the configuration dictionary and the event bus.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from termjack.adapters import PlatformAdapter
from termjack.events import EventBus, EventEmitter


class GameEngine(ABC):
    """
    Abstract base class for game engines.

    Args:
        adapter: Platform adapter to use for rendering and input
        config: Configuration options for the game
        event_bus: Event sink; the global event bus if omitted
    """

    def __init__(
        self,
        adapter: PlatformAdapter,
        config: Optional[Dict[str, Any]] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.adapter = adapter
        self.config = config or {}
        self.event_bus = event_bus or EventBus.get_instance()

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        await self.adapter.shutdown()

    @abstractmethod
    async def run(self) -> None:
        """
        Play until the player quits.
        """
        pass
