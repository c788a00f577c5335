"""
Core engine for termjack.

This package provides the game session state machine, the command
dispatcher, presentation pacing and the engine that wires them together.
"""

from termjack.engine.base import GameEngine
from termjack.engine.blackjack import BlackjackEngine
from termjack.engine.dispatcher import CommandDispatcher
from termjack.engine.scheduler import AsyncioScheduler, ImmediateScheduler, Scheduler
from termjack.engine.session import GameSession

__all__ = [
    "GameEngine",
    "BlackjackEngine",
    "CommandDispatcher",
    "AsyncioScheduler",
    "ImmediateScheduler",
    "Scheduler",
    "GameSession",
]
