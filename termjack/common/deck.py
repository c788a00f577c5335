"""
This module contains the Deck class, which represents a single 52-card deck.

A fresh deck is built for every round, shuffled once and dealt from the end
until the round ends. There is no shoe, no cut card and no reuse.

>>> deck = Deck()
>>> deck.size
52
>>> deck.deal()
Card(Suit.CLUBS, Rank.ACE)
>>> deck.size
51
"""

import random
from typing import List, Optional, Union

from termjack.common.card import Card, Rank, Suit
from termjack.common.errors import DeckExhaustedError


def create_deck() -> List[Card]:
    """
    Construct the 52-card cross product of suits and ranks.

    The order is fixed: suit-major, rank-minor, following the declaration
    order of `Suit` and `Rank`.

    >>> len(create_deck())
    52
    """
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffle_cards(
    cards: List[Card], rng: Optional[random.Random] = None
) -> List[Card]:
    """
    Shuffle a list of cards in place with the Fisher-Yates algorithm.

    :param cards: The cards to shuffle. The list is modified in place.
    :param rng: Optional random source; the `random` module is used if omitted.
    :return: The same list, shuffled.
    """
    source = rng or random
    for i in range(len(cards) - 1, 0, -1):
        j = source.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


class Deck:
    """
    One shuffled 52-card deck, dealt from the end of its card list.
    """

    def __init__(
        self,
        cards: Union[List[Card], None] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        :param cards: Cards to deal, last card first. A fresh unshuffled
                      deck is built when omitted.
        :param rng: Random source used by `shuffle`.
        """
        self._rng = rng
        if cards is None:
            self.cards: List[Card] = create_deck()
        else:
            self.cards = list(cards)

    def shuffle(self) -> "Deck":
        """
        Shuffle in place and return the deck, so rounds can write
        `Deck(rng=rng).shuffle()`.

        >>> deck = Deck()
        >>> original = set(deck.cards)
        >>> set(deck.shuffle().cards) == original
        True
        """
        shuffle_cards(self.cards, self._rng)
        return self

    def deal(self) -> Card:
        """
        Pop the top card (the end of the list) from the deck.

        :return: The dealt card.
        :raises DeckExhaustedError: If the deck is empty.
        """
        if not self.cards:
            raise DeckExhaustedError("Cannot deal from an empty deck")
        return self.cards.pop()

    @property
    def size(self) -> int:
        """
        Cards left to deal.
        """
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
