"""
State transition functions for the termjack engine.

Each function advances a `RoundContext` by one rules step and reports what
happened on an event emitter. The functions never wait and never touch
the presentation layer; pacing and rendering belong to the game session.
A transition called in a phase that does not allow it raises
`InvalidPhaseError`.
"""

from typing import Optional

from termjack.blackjack.constants import BET_STEP
from termjack.blackjack.rules import (
    Settlement,
    clamp_bet,
    dealer_should_hit,
    is_natural,
    natural_settlement,
    standard_settlement,
    validate_bet,
)
from termjack.blackjack.stats import PlayerProfile
from termjack.common.card import Card
from termjack.common.deck import Deck
from termjack.common.errors import InvalidPhaseError
from termjack.events import EventBus, EventEmitter, EngineEventType
from termjack.state.models import GamePhase, RoundContext


def _require_phase(ctx: RoundContext, *phases: GamePhase) -> None:
    if ctx.phase not in phases:
        allowed = ", ".join(phase.name for phase in phases)
        raise InvalidPhaseError(f"Expected phase {allowed}, round is in {ctx.phase.name}")


class StateTransitionEngine:
    """
    Rules steps for a single round.

    This class contains static methods that implement round transitions.
    Each method takes the round context and an optional emitter; when the
    emitter is omitted the global event bus is used.
    """

    @staticmethod
    def change_phase(
        ctx: RoundContext, phase: GamePhase, emitter: Optional[EventEmitter] = None
    ) -> None:
        """
        Move the round to a new phase.

        Args:
            ctx: Current round
            phase: Phase to enter
            emitter: Event sink
        """
        emitter = emitter or EventBus.get_instance()
        previous = ctx.phase
        ctx.phase = phase
        emitter.emit(
            EngineEventType.PHASE_CHANGED,
            {"round_id": ctx.round_id, "from": previous.name, "to": phase.name},
        )

    @staticmethod
    def adjust_bet(
        ctx: RoundContext,
        chips: int,
        steps: int,
        emitter: Optional[EventEmitter] = None,
    ) -> int:
        """
        Raise or lower the bet by whole betting steps, clamped to what the
        player can cover.

        Args:
            ctx: Current round
            chips: Player's chip balance
            steps: +1 to raise, -1 to lower
            emitter: Event sink

        Returns:
            The new bet
        """
        _require_phase(ctx, GamePhase.BETTING)
        emitter = emitter or EventBus.get_instance()

        ctx.bet = clamp_bet(ctx.bet + steps * BET_STEP, chips)
        ctx.notice = None
        emitter.emit(
            EngineEventType.PLAYER_BET,
            {"round_id": ctx.round_id, "bet": ctx.bet, "chips": chips},
        )
        return ctx.bet

    @staticmethod
    def confirm_bet(
        ctx: RoundContext, chips: int, emitter: Optional[EventEmitter] = None
    ) -> None:
        """
        Lock in the bet.

        Raises:
            InvalidBetError: If the bet is outside the allowed range
        """
        _require_phase(ctx, GamePhase.BETTING)
        emitter = emitter or EventBus.get_instance()

        validate_bet(ctx.bet, chips)
        emitter.emit(
            EngineEventType.BET_CONFIRMED,
            {"round_id": ctx.round_id, "bet": ctx.bet, "chips": chips},
        )
        StateTransitionEngine.change_phase(ctx, GamePhase.CONFIRMED, emitter)

    @staticmethod
    def change_bet(ctx: RoundContext, emitter: Optional[EventEmitter] = None) -> None:
        """Return from a confirmed bet to bet selection."""
        _require_phase(ctx, GamePhase.CONFIRMED)
        StateTransitionEngine.change_phase(ctx, GamePhase.BETTING, emitter)

    @staticmethod
    def deal_initial(
        ctx: RoundContext, deck: Deck, emitter: Optional[EventEmitter] = None
    ) -> None:
        """
        Deal the opening hands from a freshly shuffled deck.

        Cards alternate player, dealer, player, dealer. The dealer's first
        card is the hole card and stays face down.

        Args:
            ctx: Current round, in the CONFIRMED phase
            deck: The shuffled deck for this round
            emitter: Event sink
        """
        _require_phase(ctx, GamePhase.CONFIRMED)
        emitter = emitter or EventBus.get_instance()

        StateTransitionEngine.change_phase(ctx, GamePhase.DEALING, emitter)
        ctx.deck = deck
        ctx.hole_card_hidden = True
        emitter.emit(
            EngineEventType.SHUFFLE,
            {"round_id": ctx.round_id, "deck_size": deck.size},
        )

        for _ in range(2):
            for hand, participant in (
                (ctx.player_hand, "player"),
                (ctx.dealer_hand, "dealer"),
            ):
                card = deck.deal()
                hand.add_card(card)
                face_down = participant == "dealer" and len(hand) == 1
                emitter.emit(
                    EngineEventType.CARD_DEALT,
                    {
                        "round_id": ctx.round_id,
                        "participant": participant,
                        "card": str(card),
                        "face_down": face_down,
                        "total": hand.value(),
                    },
                )

        StateTransitionEngine.change_phase(ctx, GamePhase.NATURAL_CHECK, emitter)

    @staticmethod
    def check_naturals(ctx: RoundContext, emitter: Optional[EventEmitter] = None) -> bool:
        """
        Check the opening hands for a natural 21.

        On a natural both hands are revealed and the round stays in
        NATURAL_CHECK until it is settled; otherwise the player's turn begins.

        Returns:
            True if either opening hand totals 21
        """
        _require_phase(ctx, GamePhase.NATURAL_CHECK)
        emitter = emitter or EventBus.get_instance()

        if is_natural(ctx.player_total, ctx.dealer_total):
            StateTransitionEngine.reveal_hole_card(ctx, emitter)
            return True

        StateTransitionEngine.change_phase(ctx, GamePhase.PLAYER_TURN, emitter)
        return False

    @staticmethod
    def player_hit(ctx: RoundContext, emitter: Optional[EventEmitter] = None) -> Card:
        """
        Deal one card to the player.

        Returns:
            The card dealt
        """
        _require_phase(ctx, GamePhase.PLAYER_TURN)
        emitter = emitter or EventBus.get_instance()

        card = ctx.deck.deal()
        ctx.player_hand.add_card(card)
        total = ctx.player_total
        emitter.emit(
            EngineEventType.CARD_DEALT,
            {
                "round_id": ctx.round_id,
                "participant": "player",
                "card": str(card),
                "face_down": False,
                "total": total,
            },
        )
        if ctx.player_hand.is_bust:
            emitter.emit(
                EngineEventType.HAND_BUSTED,
                {"round_id": ctx.round_id, "participant": "player", "total": total},
            )
        return card

    @staticmethod
    def player_stand(ctx: RoundContext, emitter: Optional[EventEmitter] = None) -> None:
        """End the player's turn and hand over to the dealer."""
        _require_phase(ctx, GamePhase.PLAYER_TURN)
        StateTransitionEngine.change_phase(ctx, GamePhase.DEALER_TURN, emitter)

    @staticmethod
    def reveal_hole_card(
        ctx: RoundContext, emitter: Optional[EventEmitter] = None
    ) -> None:
        """Turn the dealer's hole card face up."""
        _require_phase(ctx, GamePhase.NATURAL_CHECK, GamePhase.DEALER_TURN)
        emitter = emitter or EventBus.get_instance()

        if not ctx.hole_card_hidden:
            return
        ctx.hole_card_hidden = False
        emitter.emit(
            EngineEventType.CARD_REVEALED,
            {
                "round_id": ctx.round_id,
                "card": str(ctx.dealer_hand.cards[0]),
                "total": ctx.dealer_total,
            },
        )

    @staticmethod
    def dealer_draw(
        ctx: RoundContext, emitter: Optional[EventEmitter] = None
    ) -> Optional[Card]:
        """
        Draw one card for the dealer if house rules require it.

        Returns:
            The card drawn, or None once the dealer stands
        """
        _require_phase(ctx, GamePhase.DEALER_TURN)
        if ctx.hole_card_hidden:
            raise InvalidPhaseError("Dealer cannot draw before revealing the hole card")
        emitter = emitter or EventBus.get_instance()

        if not dealer_should_hit(ctx.dealer_total):
            return None

        card = ctx.deck.deal()
        ctx.dealer_hand.add_card(card)
        emitter.emit(
            EngineEventType.CARD_DEALT,
            {
                "round_id": ctx.round_id,
                "participant": "dealer",
                "card": str(card),
                "face_down": False,
                "total": ctx.dealer_total,
            },
        )
        if ctx.dealer_hand.is_bust:
            emitter.emit(
                EngineEventType.HAND_BUSTED,
                {
                    "round_id": ctx.round_id,
                    "participant": "dealer",
                    "total": ctx.dealer_total,
                },
            )
        return card

    @staticmethod
    def settle(
        ctx: RoundContext,
        profile: PlayerProfile,
        emitter: Optional[EventEmitter] = None,
    ) -> Settlement:
        """
        Settle the round and apply the result to the player's profile.

        The natural path is used from NATURAL_CHECK. The standard path is
        used from DEALER_TURN once the dealer stands, and from PLAYER_TURN
        only when the player has busted.

        Args:
            ctx: Current round
            profile: Player profile to update
            emitter: Event sink

        Returns:
            The settlement applied
        """
        _require_phase(
            ctx, GamePhase.NATURAL_CHECK, GamePhase.PLAYER_TURN, GamePhase.DEALER_TURN
        )
        emitter = emitter or EventBus.get_instance()

        if ctx.phase is GamePhase.NATURAL_CHECK:
            settlement = natural_settlement(ctx.player_total, ctx.dealer_total, ctx.bet)
        elif ctx.phase is GamePhase.PLAYER_TURN:
            if not ctx.player_hand.is_bust:
                raise InvalidPhaseError("Player turn can only settle on a bust")
            settlement = standard_settlement(ctx.player_total, ctx.dealer_total, ctx.bet)
        else:
            if ctx.hole_card_hidden or dealer_should_hit(ctx.dealer_total):
                raise InvalidPhaseError("Dealer has not finished drawing")
            settlement = standard_settlement(ctx.player_total, ctx.dealer_total, ctx.bet)

        profile.record(settlement)
        ctx.settlement = settlement

        emitter.emit(
            EngineEventType.HAND_RESULT,
            {"round_id": ctx.round_id, **settlement.to_dict()},
        )
        emitter.emit(
            EngineEventType.BANKROLL_UPDATED,
            {"round_id": ctx.round_id, "chips": profile.chips, **profile.report()},
        )
        StateTransitionEngine.change_phase(ctx, GamePhase.SETTLED, emitter)
        emitter.emit(
            EngineEventType.ROUND_ENDED,
            {"round_id": ctx.round_id, "outcome": settlement.outcome.value},
        )
        return settlement
