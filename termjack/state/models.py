"""
State models for the termjack engine.

`RoundContext` is the mutable state of one round, owned by the game
session and replaced when a new round begins. `RenderState` is an
immutable snapshot of everything the presentation layer needs; building
it never changes the round.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from enum import Enum, auto
import uuid

from termjack.blackjack.constants import MIN_BET
from termjack.blackjack.hand import BlackjackHand
from termjack.blackjack.rules import Settlement
from termjack.common.card import Card
from termjack.common.deck import Deck


class GamePhase(Enum):
    """
    Phases of a round.
    """

    BETTING = auto()
    CONFIRMED = auto()
    DEALING = auto()
    NATURAL_CHECK = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    SETTLED = auto()
    QUIT = auto()


class Command(Enum):
    """
    The closed vocabulary of commands the session accepts.
    """

    ADJUST_BET_UP = "adjustBetUp"
    ADJUST_BET_DOWN = "adjustBetDown"
    CONFIRM_BET = "confirmBet"
    CHANGE_BET = "changeBet"
    START_ROUND = "startRound"
    HIT = "hit"
    STAND = "stand"
    RESTART = "restart"
    QUIT = "quit"

    @classmethod
    def parse(cls, name: str) -> Optional["Command"]:
        """
        Look up a command by enum name or camelCase name.

        >>> Command.parse("adjustBetUp")
        <Command.ADJUST_BET_UP: 'adjustBetUp'>
        >>> Command.parse("hit")
        <Command.HIT: 'hit'>
        >>> Command.parse("fold") is None
        True
        """
        if not isinstance(name, str):
            return None
        name = name.strip()
        if name.upper() in cls.__members__:
            return cls.__members__[name.upper()]
        for command in cls:
            if command.value.lower() == name.lower():
                return command
        return None


@dataclass
class RoundContext:
    """
    Mutable state of a single round.

    Attributes:
        round_id: Unique identifier for this round
        phase: Current phase of the round
        bet: Bet amount; fixed once the round is dealt
        deck: The round's deck, created at deal time
        player_hand: The player's cards
        dealer_hand: The dealer's cards; the first card is the hole card
        hole_card_hidden: Whether the dealer's hole card is face down
        settlement: The settlement once the round is settled
        notice: One-off message for the player (e.g. not enough chips)
    """

    round_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    phase: GamePhase = GamePhase.BETTING
    bet: int = MIN_BET
    deck: Optional[Deck] = None
    player_hand: BlackjackHand = field(default_factory=BlackjackHand)
    dealer_hand: BlackjackHand = field(default_factory=BlackjackHand)
    hole_card_hidden: bool = True
    settlement: Optional[Settlement] = None
    notice: Optional[str] = None

    @property
    def player_total(self) -> int:
        return self.player_hand.value()

    @property
    def dealer_total(self) -> int:
        return self.dealer_hand.value()

    @property
    def dealer_visible_total(self) -> int:
        """Dealer total as the player sees it."""
        return self.dealer_hand.visible_value(self.hole_card_hidden)


@dataclass(frozen=True)
class RenderState:
    """
    Immutable snapshot handed to the presentation layer.

    Attributes:
        phase: Current phase
        chips: Player's chip balance
        bet: Current bet
        player_hand: Player's cards
        dealer_hand: Dealer's cards; a hidden hole card is None
        hole_card_hidden: Whether the hole card is face down
        player_total: Player's total
        dealer_total: Dealer's total over the visible cards
        prompt_text: What the player can do now
        result_text: Settlement message once settled, else None
        stats: Player statistics
    """

    phase: GamePhase
    chips: int
    bet: int
    player_hand: Tuple[Card, ...]
    dealer_hand: Tuple[Optional[Card], ...]
    hole_card_hidden: bool
    player_total: int
    dealer_total: int
    prompt_text: str
    result_text: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the snapshot to a dictionary suitable for serialization.
        """
        return {
            "phase": self.phase.name,
            "chips": self.chips,
            "bet": self.bet,
            "player_hand": [str(card) for card in self.player_hand],
            "dealer_hand": [
                str(card) if card is not None else None for card in self.dealer_hand
            ],
            "hole_card_hidden": self.hole_card_hidden,
            "player_total": self.player_total,
            "dealer_total": self.dealer_total,
            "prompt_text": self.prompt_text,
            "result_text": self.result_text,
            "stats": dict(self.stats),
        }
