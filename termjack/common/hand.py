"""
This module contains classes to represent a hand of cards.

A hand belongs to exactly one participant for one round. It only grows:
cards are appended as they are dealt and are never removed or reordered.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import Iterable, Iterator, List, Optional, Tuple

from termjack.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for an append-only hand of cards.
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards else []

    @property
    def cards(self) -> Tuple[Card, ...]:
        """Returns the cards in the hand, in deal order."""
        return tuple(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        if not isinstance(card, Card):
            raise TypeError(f"Expected a Card, got {card!r}")
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.
    """

    def __repr__(self) -> str:
        return f"Hand({self._cards!r})"

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self._cards)
