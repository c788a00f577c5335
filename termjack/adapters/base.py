"""
Base adapter interface for the termjack engine.

This module defines the interface that platform-specific adapters must implement
to interact with the termjack engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from enum import Enum

from termjack.blackjack.stats import PlayerProfile
from termjack.state.models import Command, RenderState


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    The engine hands the adapter a `RenderState` snapshot after every visible
    step and pulls discrete `Command`s from it. Adapters translate raw input
    (keys, lines, scripted lists) into that closed command vocabulary.
    """

    @abstractmethod
    async def render_game_state(self, state: RenderState) -> None:
        """
        Render the current game state to the platform.

        Args:
            state: Snapshot of the table
        """
        pass

    @abstractmethod
    async def next_command(self) -> Command:
        """
        Wait for the next player command.

        Returns:
            The command; adapters return Command.QUIT when input ends
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    async def show_welcome(self, profile: PlayerProfile) -> None:
        """
        Show the startup screen and wait for the player to continue.
        """
        pass

    async def initialize(self) -> None:
        """
        Initialize the adapter.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.
        """
        pass
