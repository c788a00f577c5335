"""
Dummy adapter for the termjack engine, used for testing and simulation.

This module provides a non-interactive adapter that replays a scripted list
of commands and records everything the engine sends it.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from enum import Enum

from termjack.adapters.base import PlatformAdapter
from termjack.blackjack.stats import PlayerProfile
from termjack.state.models import Command, RenderState


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    Args:
        commands: Commands to hand out in order; QUIT once they run out
        verbose: Whether to print states and events to stdout
    """

    def __init__(
        self, commands: Optional[Iterable[Command]] = None, verbose: bool = False
    ):
        self.commands: List[Command] = list(commands or [])
        self.verbose = verbose

        # Track events and rendered states for later inspection
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.rendered_states: List[RenderState] = []
        self.welcomed: List[PlayerProfile] = []

    async def render_game_state(self, state: RenderState) -> None:
        self.rendered_states.append(state)
        if self.verbose:
            print(state.to_dict())

    async def next_command(self) -> Command:
        if self.commands:
            return self.commands.pop(0)
        return Command.QUIT

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((event_type_str, data))
        if self.verbose:
            print(f"Event: {event_type_str} {data}")

    async def show_welcome(self, profile: PlayerProfile) -> None:
        self.welcomed.append(profile)

    @property
    def last_state(self) -> Optional[RenderState]:
        return self.rendered_states[-1] if self.rendered_states else None

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
