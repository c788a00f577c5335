"""
This module contains the PlayerProfile class which holds the player's chip
balance and lifetime statistics.

The profile is mutated only by settlement and is persisted after every
settled round by `termjack.storage.profile.ProfileStore`.
"""

from dataclasses import dataclass
from typing import Any, Dict

from termjack.blackjack.constants import STARTING_CHIPS
from termjack.blackjack.rules import Outcome, Settlement


@dataclass
class PlayerProfile:
    """
    Persistent chip balance and statistics for the single player.

    Attributes:
        chips: Current chip balance
        games_played: Number of settled rounds
        games_won: Rounds won, including natural blackjacks
        games_lost: Rounds lost
        games_tied: Rounds pushed
    """

    chips: int = STARTING_CHIPS
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_tied: int = 0

    def record(self, settlement: Settlement) -> None:
        """
        Apply a settlement: chip delta, games played and one outcome counter.

        Args:
            settlement: The settled round
        """
        self.chips += settlement.delta
        self.games_played += 1
        if settlement.outcome.is_win:
            self.games_won += 1
        elif settlement.outcome is Outcome.TIE:
            self.games_tied += 1
        else:
            self.games_lost += 1

    @property
    def is_consistent(self) -> bool:
        return self.games_played == (
            self.games_won + self.games_lost + self.games_tied
        )

    @property
    def win_rate(self) -> float:
        """Share of settled rounds that were won, 0.0 before the first round."""
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played

    def report(self) -> Dict[str, Any]:
        """
        Returns a dictionary containing the current statistics.
        """
        return {
            "games_played": self.games_played,
            "games_won": self.games_won,
            "games_lost": self.games_lost,
            "games_tied": self.games_tied,
            "win_rate": round(self.win_rate, 4),
        }

    def to_dict(self) -> Dict[str, int]:
        """Serialize with the keys used in the stored JSON file."""
        return {
            "chips": self.chips,
            "gamesPlayed": self.games_played,
            "gamesWon": self.games_won,
            "gamesLost": self.games_lost,
            "gamesTied": self.games_tied,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerProfile":
        """
        Build a profile from its stored JSON form.

        Missing counters default to zero; `chips` defaults to the starting
        balance.
        """
        return cls(
            chips=int(data.get("chips", STARTING_CHIPS)),
            games_played=int(data.get("gamesPlayed", 0)),
            games_won=int(data.get("gamesWon", 0)),
            games_lost=int(data.get("gamesLost", 0)),
            games_tied=int(data.get("gamesTied", 0)),
        )
