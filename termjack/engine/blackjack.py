"""
Blackjack engine implementation.

This module provides the BlackjackEngine class, which wires the profile
store, the game session, the command dispatcher and a platform adapter into
a playable game.
"""

from typing import Any, Dict, Optional, Set, Tuple
import asyncio
import logging
import random
import time

from termjack.adapters import PlatformAdapter
from termjack.engine.base import GameEngine
from termjack.engine.dispatcher import CommandDispatcher
from termjack.engine.scheduler import AsyncioScheduler, Scheduler
from termjack.engine.session import GameSession
from termjack.events import EngineEventType, EventEmitter
from termjack.storage.profile import DEFAULT_PROFILE_PATH, ProfileStore

logger = logging.getLogger(__name__)

# Events the adapter is told about directly
FORWARDED_EVENTS = {EngineEventType.ERROR.name, EngineEventType.WARNING.name}


class BlackjackEngine(GameEngine):
    """
    Engine implementation for single-player blackjack.

    Recognised config keys:
        profile_path: Location of the player profile JSON file
        delays: Overrides for named presentation delays (seconds)
        speed: Multiplier for all delays; 0 disables pauses
        seed: Seed for the shuffle, for reproducible games

    Args:
        adapter: Platform adapter to use for rendering and input
        config: Configuration options for the game
        event_bus: Event sink; the global event bus if omitted
        scheduler: Presentation pause source; built from config if omitted
    """

    def __init__(
        self,
        adapter: PlatformAdapter,
        config: Optional[Dict[str, Any]] = None,
        event_bus: Optional[EventEmitter] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        super().__init__(adapter, config, event_bus)
        self.profile_path = self.config.get("profile_path", DEFAULT_PROFILE_PATH)
        self.store = ProfileStore(self.profile_path, emitter=self.event_bus)
        self.scheduler = scheduler or AsyncioScheduler(
            delays=self.config.get("delays"), speed=self.config.get("speed", 1.0)
        )
        seed = self.config.get("seed")
        self.rng = random.Random(seed) if seed is not None else None

        self.session: Optional[GameSession] = None
        self.dispatcher: Optional[CommandDispatcher] = None
        self._unsubscribe = None
        self._pending: Set[asyncio.Task] = set()

    async def initialize(self) -> None:
        """
        Load the profile and build the session.

        Raises:
            ProfileStoreError: If the stored profile cannot be read
        """
        await super().initialize()

        profile = self.store.load()
        self.session = GameSession(
            profile,
            self.store,
            self.adapter,
            scheduler=self.scheduler,
            emitter=self.event_bus,
            rng=self.rng,
        )
        self.dispatcher = CommandDispatcher(self.session, self.adapter, self.event_bus)
        self._unsubscribe = self.event_bus.on_any(self._forward_event)

        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": "blackjack",
                "profile_path": str(self.profile_path),
                "chips": profile.chips,
                "games_played": profile.games_played,
                "timestamp": time.time(),
            },
        )

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        self.event_bus.emit(EngineEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

        await super().shutdown()

    async def run(self) -> None:
        """
        Show the welcome screen, then play rounds until the player quits.
        """
        if self.session is None:
            raise RuntimeError("Engine not initialized")

        await self.adapter.show_welcome(self.session.profile)
        await self.session.begin()
        await self.dispatcher.run()

    def _forward_event(self, event: Tuple[str, Dict[str, Any]]) -> None:
        event_type, data = event
        if event_type not in FORWARDED_EVENTS:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, %s not forwarded", event_type)
            return
        task = loop.create_task(self.adapter.notify_game_event(event_type, data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
