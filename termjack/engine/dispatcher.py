"""
Command dispatch for the game session.

Exactly one command is processed at a time. While a command's transition is
still running (for example while the dealer draws with pauses in between),
further commands are dropped rather than queued. QUIT is the exception: it
cancels whatever is in flight and ends the session at once. A profile save
already under way is not cancelled; `run` waits for it before returning.
"""

import asyncio
import logging
from typing import Optional

from termjack.adapters.base import PlatformAdapter
from termjack.engine.session import GameSession
from termjack.events import EventBus, EventEmitter, EngineEventType
from termjack.state.models import Command

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Feeds commands from an adapter into a game session.

    Args:
        session: The session to drive
        adapter: Source of commands
        emitter: Event sink; the global event bus if omitted
    """

    def __init__(
        self,
        session: GameSession,
        adapter: PlatformAdapter,
        emitter: Optional[EventEmitter] = None,
    ):
        self.session = session
        self.adapter = adapter
        self.emitter = emitter or EventBus.get_instance()
        self._current: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        """Whether a command is still being processed."""
        return self._current is not None and not self._current.done()

    def submit(self, command: Command) -> bool:
        """
        Start processing a command unless one is already in flight.

        Must be called from a running event loop.

        Returns:
            True if the command was accepted
        """
        if command is Command.QUIT:
            self.cancel()
            self.session.quit()
            return True

        previous = self._current
        if previous is not None and previous.done() and not previous.cancelled():
            # Surface a failed transition instead of replacing it silently
            previous.result()

        if self.busy:
            logger.debug("Dropping %s while a transition is in flight", command.name)
            self.emitter.emit(
                EngineEventType.COMMAND_DROPPED,
                {"command": command.value, "phase": self.session.phase.name},
            )
            return False

        self._current = asyncio.ensure_future(self.session.handle(command))
        return True

    def cancel(self) -> None:
        """Cancel the command in flight, if any."""
        if self.busy:
            self._current.cancel()
        self._current = None

    async def wait_idle(self) -> None:
        """
        Wait for the command in flight to finish.

        Raises whatever the transition raised.
        """
        task = self._current
        if task is None:
            return
        try:
            await task
        finally:
            if self._current is task:
                self._current = None

    async def run(self) -> None:
        """
        Pull commands from the adapter until the session ends.

        A transition that fails propagates out of this method.
        """
        reader: Optional[asyncio.Future] = None
        try:
            while not self.session.is_over:
                if reader is None:
                    reader = asyncio.ensure_future(self.adapter.next_command())

                waiting = {reader}
                if self._current is not None:
                    waiting.add(self._current)
                done, _ = await asyncio.wait(
                    waiting, return_when=asyncio.FIRST_COMPLETED
                )

                if self._current is not None and self._current in done:
                    await self.wait_idle()

                if reader in done:
                    command = reader.result()
                    reader = None
                    self.submit(command)
        finally:
            if reader is not None:
                reader.cancel()
            self.cancel()
            await self.session.flush()
