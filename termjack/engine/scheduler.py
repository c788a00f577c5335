"""
Presentation delays for the game session.

The rules engine never sleeps. At the points where the player should get a
moment to read the table (after a stand, between dealer draws, before a
result) the session awaits a named pause on an injected scheduler. Tests
use `ImmediateScheduler`, which returns at once.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

# Seconds per named pause
DEFAULT_DELAYS: Dict[str, float] = {
    "stand": 1.0,
    "auto_stand": 1.5,
    "bust": 1.5,
    "dealer_draw": 2.0,
    "dealer_result": 2.5,
    "natural_reveal": 2.0,
}


class Scheduler(ABC):
    """Source of presentation pauses."""

    @abstractmethod
    async def pause(self, name: str) -> None:
        """
        Suspend the current transition for the named delay.

        Args:
            name: One of the keys of `DEFAULT_DELAYS`
        """
        pass


class AsyncioScheduler(Scheduler):
    """
    Scheduler that sleeps on the running event loop.

    Args:
        delays: Overrides for individual named delays
        speed: Multiplier applied to every delay; 0 disables pauses
    """

    def __init__(self, delays: Optional[Dict[str, float]] = None, speed: float = 1.0):
        if speed < 0:
            raise ValueError("speed must not be negative")
        self.delays = dict(DEFAULT_DELAYS)
        self.delays.update(delays or {})
        self.speed = speed

    def duration(self, name: str) -> float:
        return self.delays.get(name, 0.0) * self.speed

    async def pause(self, name: str) -> None:
        seconds = self.duration(name)
        if seconds > 0:
            await asyncio.sleep(seconds)


class ImmediateScheduler(Scheduler):
    """Scheduler that never waits and records the pauses requested."""

    def __init__(self):
        self.pauses: List[str] = []

    async def pause(self, name: str) -> None:
        self.pauses.append(name)
