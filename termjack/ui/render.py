"""
Plain-text rendering of the blackjack table.

Every function here is pure: it turns a card, a `RenderState` or a profile
into text and leaves printing to the adapter.
"""

from typing import List, Optional, Sequence

from termjack.blackjack.stats import PlayerProfile
from termjack.common.card import Card
from termjack.state.models import GamePhase, RenderState

CARD_HEIGHT = 5


def card_art(card: Card) -> List[str]:
    """
    Draw a single face-up card as five lines of text.

    >>> print("\\n".join(card_art(Card.parse("10♥"))))
    ┌─────┐
    │10   │
    │  ♥  │
    │   10│
    └─────┘
    """
    rank = card.rank.rank_str
    return [
        "┌─────┐",
        f"│{rank:<2}   │",
        f"│  {card.suit}  │",
        f"│   {rank:>2}│",
        "└─────┘",
    ]


def hidden_card_art() -> List[str]:
    """Draw the back of a card."""
    return ["┌─────┐", "│░░░░░│", "│░░░░░│", "│░░░░░│", "└─────┘"]


def format_cards_art(cards: Sequence[Optional[Card]]) -> str:
    """
    Draw cards side by side. A None entry is drawn face down.
    """
    if not cards:
        return ""
    drawn = [hidden_card_art() if card is None else card_art(card) for card in cards]
    return "\n".join(
        " ".join(lines[row] for lines in drawn) for row in range(CARD_HEIGHT)
    )


def render_table(state: RenderState) -> str:
    """
    Render a full screen for the given snapshot.

    Args:
        state: Snapshot from the game session

    Returns:
        The screen as a single string
    """
    lines = [f" Chips: {state.chips}    Bet: {state.bet}", ""]

    if state.phase in (GamePhase.BETTING, GamePhase.CONFIRMED):
        if state.phase is GamePhase.BETTING:
            lines += ["Place your bet:", "", f"{state.bet} chips"]
        else:
            lines += [f"Bet confirmed: {state.bet} chips"]
    else:
        lines += [
            "Dealer's cards:",
            format_cards_art(state.dealer_hand),
            f"Dealer's total: {state.dealer_total}",
            "",
            "Your cards:",
            format_cards_art(state.player_hand),
            f"Your total: {state.player_total}",
        ]

    if state.result_text:
        lines += ["", state.result_text]

    lines += ["", state.prompt_text]
    return "\n".join(lines)


def render_welcome(profile: PlayerProfile) -> str:
    """Welcome screen with the stored balance and statistics."""
    return "\n".join(
        [
            "Welcome to the Blackjack Game!",
            "",
            f" Chips: {profile.chips}",
            f"Games Played: {profile.games_played}",
            f"Wins: {profile.games_won}  Losses: {profile.games_lost}  "
            f"Ties: {profile.games_tied}",
            f"Win rate: {profile.win_rate:.0%}",
            "",
            "Press Enter to continue...",
        ]
    )


def render_goodbye(profile_path: str) -> str:
    rule = "─" * 60
    return "\n".join(
        [
            rule,
            "",
            "Thank you for playing Blackjack!",
            "",
            "Player data loaded from:",
            profile_path,
            "If you want to reset your player data, change the numbers in that file.",
            rule,
        ]
    )
