"""
Payout rules for termjack.

Settlement is a pure function of the two totals and the bet. There are two
paths: the natural path, taken only when either two-card hand totals 21
right after the deal, and the standard path, taken after the player busts
or the dealer finishes drawing.
"""

import math
from dataclasses import dataclass
from enum import Enum

from termjack.blackjack.constants import (
    BET_STEP,
    BLACKJACK_PAYOUT,
    BLACKJACK_TOTAL,
    DEALER_STAND_TOTAL,
    MIN_BET,
)
from termjack.common.errors import InvalidBetError, InvariantViolation


class Outcome(Enum):
    """Outcome category of a settled round."""

    WIN = "win"
    BLACKJACK = "blackjack"
    LOSS = "loss"
    TIE = "tie"

    @property
    def is_win(self) -> bool:
        return self in (Outcome.WIN, Outcome.BLACKJACK)


@dataclass(frozen=True)
class Settlement:
    """
    Result of settling a round.

    Attributes:
        outcome: The outcome category
        delta: Signed change applied to the player's chips
        player_total: Player's final total
        dealer_total: Dealer's final total
        bet: The bet that was settled
        natural: Whether the natural-blackjack path produced this result
    """

    outcome: Outcome
    delta: int
    player_total: int
    dealer_total: int
    bet: int
    natural: bool = False

    @property
    def message(self) -> str:
        """Result line shown to the player."""
        if self.natural:
            if self.outcome is Outcome.TIE:
                return "Both have Blackjack! Push (Tie)."
            if self.outcome is Outcome.BLACKJACK:
                return f"Blackjack! You win {self.delta} chips!"
            return "Dealer has Blackjack! You lose."

        if self.player_total > BLACKJACK_TOTAL:
            return "Bust! You lose."
        if self.outcome is Outcome.WIN:
            return "You won!"
        if self.outcome is Outcome.TIE:
            return "Push (Tie)."
        return "You lost."

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "delta": self.delta,
            "player_total": self.player_total,
            "dealer_total": self.dealer_total,
            "bet": self.bet,
            "natural": self.natural,
        }


def is_natural(player_total: int, dealer_total: int) -> bool:
    """Check whether either initial two-card hand is a natural 21."""
    return player_total == BLACKJACK_TOTAL or dealer_total == BLACKJACK_TOTAL


def blackjack_payout(bet: int) -> int:
    """Net chips won on a player natural: 3:2 on the bet, rounded down."""
    return math.floor(bet * BLACKJACK_PAYOUT)


def natural_settlement(player_total: int, dealer_total: int, bet: int) -> Settlement:
    """
    Settle a round where at least one side was dealt a natural.

    Args:
        player_total: Player's two-card total
        dealer_total: Dealer's two-card total
        bet: The confirmed bet

    Returns:
        The settlement for this round

    Raises:
        InvariantViolation: If neither total is 21
    """
    player_natural = player_total == BLACKJACK_TOTAL
    dealer_natural = dealer_total == BLACKJACK_TOTAL

    if player_natural and dealer_natural:
        outcome, delta = Outcome.TIE, 0
    elif player_natural:
        outcome, delta = Outcome.BLACKJACK, blackjack_payout(bet)
    elif dealer_natural:
        outcome, delta = Outcome.LOSS, -bet
    else:
        raise InvariantViolation(
            f"Natural settlement without a natural: {player_total} vs {dealer_total}"
        )

    return Settlement(outcome, delta, player_total, dealer_total, bet, natural=True)


def standard_settlement(player_total: int, dealer_total: int, bet: int) -> Settlement:
    """
    Settle a round after the player's turn and, unless the player busted,
    the dealer's turn.

    A player bust is a loss whatever the dealer holds.
    """
    if player_total > BLACKJACK_TOTAL:
        outcome, delta = Outcome.LOSS, -bet
    elif dealer_total > BLACKJACK_TOTAL or player_total > dealer_total:
        outcome, delta = Outcome.WIN, bet
    elif player_total == dealer_total:
        outcome, delta = Outcome.TIE, 0
    else:
        outcome, delta = Outcome.LOSS, -bet

    return Settlement(outcome, delta, player_total, dealer_total, bet)


def dealer_should_hit(total: int) -> bool:
    """The dealer draws below 17 and stands on every 17, soft or hard."""
    return total < DEALER_STAND_TOTAL


def max_bet(chips: int) -> int:
    """
    Largest bet on the betting grid that the player can cover.

    Returns a value below `MIN_BET` when the player cannot cover the minimum.
    """
    if chips < MIN_BET:
        return chips
    return MIN_BET + ((chips - MIN_BET) // BET_STEP) * BET_STEP


def can_place_bet(chips: int) -> bool:
    return chips >= MIN_BET


def clamp_bet(requested: int, chips: int) -> int:
    """
    Clamp a requested bet onto the betting grid.

    The result is ``MIN_BET + k * BET_STEP`` for some k >= 0, never below
    `MIN_BET` and never above `max_bet(chips)` (unless the player cannot
    cover the minimum, in which case `MIN_BET` is returned and the bet can
    not be confirmed).
    """
    if requested <= MIN_BET:
        return MIN_BET
    steps = (requested - MIN_BET) // BET_STEP
    bet = MIN_BET + steps * BET_STEP
    return max(MIN_BET, min(bet, max_bet(chips)))


def validate_bet(bet: int, chips: int) -> None:
    """
    Check a bet about to be confirmed.

    Raises:
        InvalidBetError: If the bet is outside ``[MIN_BET, chips]``
    """
    if not isinstance(bet, int) or bet < MIN_BET or bet > chips:
        raise InvalidBetError(f"Bet {bet!r} outside allowed range [{MIN_BET}, {chips}]")
