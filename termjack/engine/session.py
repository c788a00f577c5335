"""
The game session: the state machine that runs rounds of blackjack.

A session owns the player profile and the current round. Commands are routed
through a dispatch table keyed by the round's phase; a command that has no
handler in the current phase is a no-op. Presentation pauses go through the
injected scheduler, so the session runs without real time passing when
tests inject `ImmediateScheduler`.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Dict, Optional

from termjack.adapters.base import PlatformAdapter
from termjack.blackjack.constants import BLACKJACK_TOTAL, MIN_BET
from termjack.blackjack.rules import can_place_bet, dealer_should_hit
from termjack.blackjack.stats import PlayerProfile
from termjack.common.deck import Deck
from termjack.engine.scheduler import ImmediateScheduler, Scheduler
from termjack.events import EventBus, EventEmitter, EngineEventType
from termjack.state.models import Command, GamePhase, RenderState, RoundContext
from termjack.state.transitions import StateTransitionEngine
from termjack.storage.profile import ProfileStore

logger = logging.getLogger(__name__)

Handler = Callable[[], Awaitable[None]]

PROMPTS: Dict[GamePhase, str] = {
    GamePhase.BETTING: "Use ↑/↓ (u/d) to adjust, Enter to confirm",
    GamePhase.CONFIRMED: "Press Backspace (b) to change bet or Enter to start.",
    GamePhase.DEALING: "Dealing...",
    GamePhase.NATURAL_CHECK: "Checking for Blackjack...",
    GamePhase.PLAYER_TURN: "Press (h) to Hit, (s) to Stand",
    GamePhase.DEALER_TURN: "Dealer's turn...",
    GamePhase.SETTLED: "Press (r) to restart, (q) to quit.",
    GamePhase.QUIT: "Goodbye.",
}

NOT_ENOUGH_CHIPS = (
    f"Not enough chips for the minimum bet of {MIN_BET}. "
    "Edit your player file to continue."
)


class GameSession:
    """
    Runs rounds for a single player.

    Args:
        profile: The player's profile, updated on every settlement
        store: Where the profile is saved after each settlement
        adapter: Presentation layer that receives render snapshots
        scheduler: Source of presentation pauses
        emitter: Event sink; the global event bus if omitted
        deck_factory: Builds the shuffled deck for each round
        rng: Random source for the default deck factory
    """

    def __init__(
        self,
        profile: PlayerProfile,
        store: ProfileStore,
        adapter: PlatformAdapter,
        scheduler: Optional[Scheduler] = None,
        emitter: Optional[EventEmitter] = None,
        deck_factory: Optional[Callable[[], Deck]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.profile = profile
        self.store = store
        self.adapter = adapter
        self.scheduler = scheduler or ImmediateScheduler()
        self.emitter = emitter or EventBus.get_instance()
        self.rng = rng
        self.deck_factory = deck_factory or self._new_deck
        self.round = RoundContext()
        self._saving: Optional[asyncio.Future] = None

        self._handlers: Dict[GamePhase, Dict[Command, Handler]] = {
            GamePhase.BETTING: {
                Command.ADJUST_BET_UP: self._raise_bet,
                Command.ADJUST_BET_DOWN: self._lower_bet,
                Command.CONFIRM_BET: self._confirm_bet,
            },
            GamePhase.CONFIRMED: {
                Command.CHANGE_BET: self._change_bet,
                Command.START_ROUND: self._start_round,
            },
            GamePhase.PLAYER_TURN: {
                Command.HIT: self._hit,
                Command.STAND: self._stand,
            },
            GamePhase.SETTLED: {
                Command.RESTART: self._restart,
            },
        }

    def _new_deck(self) -> Deck:
        return Deck(rng=self.rng).shuffle()

    @property
    def phase(self) -> GamePhase:
        return self.round.phase

    @property
    def is_over(self) -> bool:
        return self.round.phase is GamePhase.QUIT

    def accepts(self, command: Command) -> bool:
        """Whether the command does anything in the current phase."""
        if command is Command.QUIT:
            return not self.is_over
        return command in self._handlers.get(self.round.phase, {})

    async def begin(self) -> None:
        """Show the betting screen for the first round."""
        self._log_round_start()
        await self.render()

    async def handle(self, command: Command) -> bool:
        """
        Process one command to completion.

        Args:
            command: The command to process

        Returns:
            True if the command was handled, False if it was ignored
        """
        if command is Command.QUIT:
            self.quit()
            return True

        handler = self._handlers.get(self.round.phase, {}).get(command)
        if handler is None:
            logger.debug(
                "Ignoring %s in phase %s", command.name, self.round.phase.name
            )
            self.emitter.emit(
                EngineEventType.COMMAND_IGNORED,
                {"command": command.value, "phase": self.round.phase.name},
            )
            return False

        self.emitter.emit(
            EngineEventType.PLAYER_ACTION,
            {
                "round_id": self.round.round_id,
                "command": command.value,
                "phase": self.round.phase.name,
            },
        )
        await handler()
        return True

    async def flush(self) -> None:
        """Wait for the last settlement save to reach the store."""
        saving, self._saving = self._saving, None
        if saving is not None:
            await saving

    def quit(self) -> None:
        """End the session. Nothing is saved beyond what settlement saved."""
        if self.is_over:
            return
        logger.warning("Player quit in phase %s", self.round.phase.name)
        StateTransitionEngine.change_phase(self.round, GamePhase.QUIT, self.emitter)

    def snapshot(self) -> RenderState:
        """
        Build the render snapshot for the current state.

        Calling this repeatedly without an intervening command returns equal
        snapshots.
        """
        ctx = self.round
        dealer_cards = ctx.dealer_hand.cards
        if ctx.hole_card_hidden and dealer_cards:
            dealer_view = (None,) + dealer_cards[1:]
        else:
            dealer_view = dealer_cards

        return RenderState(
            phase=ctx.phase,
            chips=self.profile.chips,
            bet=ctx.bet,
            player_hand=ctx.player_hand.cards,
            dealer_hand=dealer_view,
            hole_card_hidden=ctx.hole_card_hidden and bool(dealer_cards),
            player_total=ctx.player_total,
            dealer_total=ctx.dealer_visible_total,
            prompt_text=self._prompt(),
            result_text=ctx.settlement.message if ctx.settlement else None,
            stats=self.profile.report(),
        )

    def _prompt(self) -> str:
        ctx = self.round
        prompt = PROMPTS[ctx.phase]
        if ctx.phase is GamePhase.PLAYER_TURN:
            if ctx.player_total == BLACKJACK_TOTAL:
                prompt = "21! Standing automatically..."
            elif ctx.player_total > BLACKJACK_TOTAL:
                prompt = "Bust!"
        if ctx.notice:
            prompt = f"{ctx.notice}\n{prompt}"
        return prompt

    async def render(self) -> None:
        await self.adapter.render_game_state(self.snapshot())

    def _log_round_start(self) -> None:
        logger.info("Betting phase started with %d chips", self.profile.chips)

    # Betting

    async def _raise_bet(self) -> None:
        StateTransitionEngine.adjust_bet(self.round, self.profile.chips, 1, self.emitter)
        await self.render()

    async def _lower_bet(self) -> None:
        StateTransitionEngine.adjust_bet(self.round, self.profile.chips, -1, self.emitter)
        await self.render()

    async def _confirm_bet(self) -> None:
        if not can_place_bet(self.profile.chips):
            self.round.notice = NOT_ENOUGH_CHIPS
            self.emitter.emit(
                EngineEventType.WARNING,
                {"message": NOT_ENOUGH_CHIPS, "chips": self.profile.chips},
            )
            await self.render()
            return

        StateTransitionEngine.confirm_bet(self.round, self.profile.chips, self.emitter)
        await self.render()

    async def _change_bet(self) -> None:
        StateTransitionEngine.change_bet(self.round, self.emitter)
        await self.render()

    # Round

    async def _start_round(self) -> None:
        ctx = self.round
        logger.info("Round %s starting with bet %d", ctx.round_id, ctx.bet)
        self.emitter.emit(
            EngineEventType.ROUND_STARTED,
            {"round_id": ctx.round_id, "bet": ctx.bet, "chips": self.profile.chips},
        )

        StateTransitionEngine.deal_initial(ctx, self.deck_factory(), self.emitter)
        natural = StateTransitionEngine.check_naturals(ctx, self.emitter)
        await self.render()

        if natural:
            logger.info(
                "Natural blackjack: player %d, dealer %d",
                ctx.player_total,
                ctx.dealer_total,
            )
            await self.scheduler.pause("natural_reveal")
            await self._settle()

    async def _hit(self) -> None:
        ctx = self.round
        StateTransitionEngine.player_hit(ctx, self.emitter)
        await self.render()

        if ctx.player_total > BLACKJACK_TOTAL:
            await self.scheduler.pause("bust")
            await self._settle()
        elif ctx.player_total == BLACKJACK_TOTAL:
            await self.scheduler.pause("auto_stand")
            StateTransitionEngine.player_stand(ctx, self.emitter)
            await self._dealer_turn()

    async def _stand(self) -> None:
        StateTransitionEngine.player_stand(self.round, self.emitter)
        await self.render()
        await self.scheduler.pause("stand")
        await self._dealer_turn()

    async def _dealer_turn(self) -> None:
        ctx = self.round
        StateTransitionEngine.reveal_hole_card(ctx, self.emitter)
        await self.render()

        while dealer_should_hit(ctx.dealer_total):
            await self.scheduler.pause("dealer_draw")
            StateTransitionEngine.dealer_draw(ctx, self.emitter)
            await self.render()

        await self.scheduler.pause("dealer_result")
        await self._settle()

    async def _settle(self) -> None:
        settlement = StateTransitionEngine.settle(self.round, self.profile, self.emitter)
        logger.info(
            "Round %s ended: %s (player %d, dealer %d, delta %+d, chips %d)",
            self.round.round_id,
            settlement.outcome.value,
            settlement.player_total,
            settlement.dealer_total,
            settlement.delta,
            self.profile.chips,
        )
        # Shielded from QUIT; flush() waits for it
        self._saving = asyncio.ensure_future(self.store.save(self.profile))
        await asyncio.shield(self._saving)
        await self.render()

    async def _restart(self) -> None:
        self.round = RoundContext()
        self.emitter.emit(
            EngineEventType.PHASE_CHANGED,
            {
                "round_id": self.round.round_id,
                "from": GamePhase.SETTLED.name,
                "to": GamePhase.BETTING.name,
            },
        )
        self._log_round_start()
        await self.render()
