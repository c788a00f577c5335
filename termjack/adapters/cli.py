"""
Command-line interface adapter for the termjack engine.

This module provides the terminal front end: it redraws the table for every
snapshot and turns typed keys into engine commands. Input is line based;
each line is one key (Enter alone is an empty line).
"""

import logging
from typing import Any, Dict, Optional, Union
from enum import Enum

from termjack.adapters.base import PlatformAdapter
from termjack.blackjack.stats import PlayerProfile
from termjack.common.io_interface import (
    AsyncIOInterfaceWrapper,
    ConsoleIOInterface,
    IOInterface,
)
from termjack.state.models import Command, GamePhase, RenderState
from termjack.ui.render import render_table, render_welcome

logger = logging.getLogger(__name__)

ENTER = ""

DEFAULT_KEY_MAP: Dict[str, Command] = {
    "u": Command.ADJUST_BET_UP,
    "up": Command.ADJUST_BET_UP,
    "+": Command.ADJUST_BET_UP,
    "d": Command.ADJUST_BET_DOWN,
    "down": Command.ADJUST_BET_DOWN,
    "-": Command.ADJUST_BET_DOWN,
    "b": Command.CHANGE_BET,
    "backspace": Command.CHANGE_BET,
    "h": Command.HIT,
    "s": Command.STAND,
    "r": Command.RESTART,
    "q": Command.QUIT,
}


class CLIAdapter(PlatformAdapter):
    """
    Command-line interface adapter for the termjack engine.

    Args:
        io_interface: IOInterface to use for I/O; a console one if omitted
        key_map: Overrides for the key to command mapping
    """

    def __init__(
        self,
        io_interface: Optional[IOInterface] = None,
        key_map: Optional[Dict[str, Command]] = None,
    ):
        self.io_interface = io_interface or ConsoleIOInterface()
        self._async_io = AsyncIOInterfaceWrapper(self.io_interface)
        self.key_map = dict(DEFAULT_KEY_MAP)
        self.key_map.update(key_map or {})
        self._last_phase: Optional[GamePhase] = None

    async def shutdown(self) -> None:
        self._async_io.close()

    async def render_game_state(self, state: RenderState) -> None:
        """
        Redraw the whole table.

        Args:
            state: Snapshot from the game session
        """
        self._last_phase = state.phase
        self.io_interface.clear()
        self.io_interface.output(render_table(state))

    def translate(self, key: str) -> Optional[Command]:
        """
        Map one typed key to a command.

        Enter confirms the bet while betting and starts the round once the
        bet is confirmed. Unknown keys map to None.
        """
        key = key.strip().lower()
        if key == ENTER:
            if self._last_phase is GamePhase.BETTING:
                return Command.CONFIRM_BET
            if self._last_phase is GamePhase.CONFIRMED:
                return Command.START_ROUND
            return None
        if key in self.key_map:
            return self.key_map[key]
        return Command.parse(key)

    async def next_command(self) -> Command:
        """
        Read lines until one maps to a command.

        End of input is treated as quit.
        """
        while True:
            try:
                line = await self._async_io.input("> ")
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed, quitting")
                return Command.QUIT

            command = self.translate(line)
            if command is not None:
                return command
            logger.debug("Ignoring unmapped key %r", line)

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Surface problems to the player. Routine events are only logged.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            self.io_interface.output(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        if event_type == "ERROR":
            return f"Error: {data.get('message', 'unknown error')}"
        if event_type == "WARNING":
            return f"Warning: {data.get('message', '')}"
        return None

    async def show_welcome(self, profile: PlayerProfile) -> None:
        self.io_interface.clear()
        self.io_interface.output(render_welcome(profile))
        try:
            await self._async_io.input("")
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed on the welcome screen")
