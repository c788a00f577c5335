"""
Round state management for the termjack engine.

This package provides the round model, the render snapshot and the rules
transitions that advance a round.
"""

from termjack.state.models import (
    Command,
    GamePhase,
    RenderState,
    RoundContext,
)

from termjack.state.transitions import StateTransitionEngine

__all__ = [
    "Command",
    "GamePhase",
    "RenderState",
    "RoundContext",
    "StateTransitionEngine",
]
