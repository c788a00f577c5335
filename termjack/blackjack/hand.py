"""
Blackjack hand scoring.

`calculate_total` is the single scoring routine. It is pure and works on any
sequence of cards, so the same function scores a full hand and the
"visible cards only" view of the dealer's hand while the hole card is down.
"""

from typing import Iterable

from termjack.common.card import Card, Rank
from termjack.common.hand import Hand
from termjack.blackjack.constants import BLACKJACK_TOTAL


def calculate_total(cards: Iterable[Card]) -> int:
    """
    Calculate the blackjack total of a sequence of cards.

    Number cards count face value, J/Q/K count 10 and aces count 11 until
    the total would exceed 21, at which point aces are demoted to 1 one at
    a time. The result is the best total not above 21 when one exists,
    otherwise the all-aces-low total.

    >>> calculate_total([Card.parse("A♠"), Card.parse("K♥"), Card.parse("5♦")])
    16
    """
    total = 0
    high_aces = 0
    for card in cards:
        total += card.rank.rank_value
        if card.rank is Rank.ACE:
            high_aces += 1

    while total > BLACKJACK_TOTAL and high_aces > 0:
        total -= 10
        high_aces -= 1

    return total


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    def value(self) -> int:
        """Calculate the optimal value of the hand with ace handling."""
        return calculate_total(self._cards)

    def visible_value(self, hide_first: bool) -> int:
        """Value of the face-up cards; the first card is skipped when hidden."""
        if hide_first:
            return calculate_total(self._cards[1:])
        return self.value()

    @property
    def is_bust(self) -> bool:
        return self.value() > BLACKJACK_TOTAL
