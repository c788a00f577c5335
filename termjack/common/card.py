"""
Playing cards for a single 52-card blackjack deck.

- `Suit`: the four suits, in the order a fresh deck is built.

- `Rank`: the thirteen ranks, Two through Ace, each carrying its blackjack
scoring value.

- `Card`: An immutable playing card. A card has a suit and a rank and nothing
else; two cards with the same suit and rank are equal.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck, in deck construction order.
    """

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck, in deck construction order.

    The enum value is the printed symbol; `rank_value` is the blackjack
    value, with the Ace counted high.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def rank_value(self) -> int:
        """The value of the rank, used for scoring."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> "Rank":
        """
        Look up a rank by its printed symbol.

        >>> Rank.from_symbol("k")
        <Rank.KING: 'K'>
        """
        return cls(symbol.upper())

    def __str__(self) -> str:
        return self.rank_str


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2♥
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit!r}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank!r}")

    @classmethod
    def parse(cls, token: str) -> "Card":
        """
        Build a card from its short form, e.g. ``"10♥"`` or ``"A♠"``.

        :param token: Rank symbol followed by a suit symbol.
        :return: The parsed card.
        """
        token = token.strip()
        if len(token) < 2:
            raise ValueError(f"Invalid card: {token!r}")
        return cls(Suit(token[-1]), Rank.from_symbol(token[:-1]))

    def __repr__(self) -> str:
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        return f"{self.rank.rank_str}{self.suit}"
