"""
Exception types for the termjack engine.

Invariant violations signal a logic defect, not a runtime condition. The
engine never catches them; they propagate to the entry point, which logs
them and exits.
"""


class InvariantViolation(Exception):
    """Base class for programming-invariant violations."""


class DeckExhaustedError(InvariantViolation):
    """Raised when a card is dealt from an empty deck."""


class InvalidBetError(InvariantViolation):
    """Raised when a bet outside the allowed range is confirmed."""


class InvalidPhaseError(InvariantViolation):
    """Raised when a transition runs in a phase that does not allow it."""


class ProfileStoreError(Exception):
    """Raised when the stored player profile cannot be read."""
