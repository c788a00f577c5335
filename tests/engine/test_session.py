import pytest

from termjack.blackjack.rules import Outcome
from termjack.engine.scheduler import ImmediateScheduler
from termjack.engine.session import NOT_ENOUGH_CHIPS
from termjack.state.models import Command, GamePhase

STAND_DEAL = ["10♠", "9♥", "8♦", "8♣"]


async def play(session, *commands):
    return [await session.handle(command) for command in commands]


@pytest.mark.asyncio
async def test_begin_renders_betting_screen(make_session):
    session, adapter, _ = make_session()
    await session.begin()
    state = adapter.last_state
    assert state.phase is GamePhase.BETTING
    assert state.bet == 50
    assert state.chips == 1000
    assert state.player_hand == ()
    assert state.result_text is None


@pytest.mark.asyncio
async def test_bet_adjustment(make_session):
    session, adapter, _ = make_session(chips=100)
    await play(session, Command.ADJUST_BET_UP, Command.ADJUST_BET_UP, Command.ADJUST_BET_UP)
    assert adapter.last_state.bet == 100
    await play(session, Command.ADJUST_BET_DOWN, Command.ADJUST_BET_DOWN, Command.ADJUST_BET_DOWN)
    assert adapter.last_state.bet == 50


@pytest.mark.asyncio
async def test_stand_and_win(make_session):
    scheduler = ImmediateScheduler()
    session, adapter, store = make_session(deal=STAND_DEAL, scheduler=scheduler)
    await play(
        session,
        Command.ADJUST_BET_UP,
        Command.CONFIRM_BET,
        Command.START_ROUND,
        Command.STAND,
    )

    state = adapter.last_state
    assert state.phase is GamePhase.SETTLED
    assert state.result_text == "You won!"
    assert state.chips == 1075
    assert not state.hole_card_hidden
    assert state.dealer_total == 17
    assert scheduler.pauses == ["stand", "dealer_result"]
    assert store.saved == [
        {"chips": 1075, "gamesPlayed": 1, "gamesWon": 1, "gamesLost": 0, "gamesTied": 0}
    ]


@pytest.mark.asyncio
async def test_player_natural_settles_immediately(make_session):
    scheduler = ImmediateScheduler()
    session, adapter, store = make_session(
        deal=["A♠", "9♥", "K♦", "10♣"], scheduler=scheduler
    )
    await play(session, Command.CONFIRM_BET, Command.START_ROUND)

    assert session.phase is GamePhase.SETTLED
    assert session.round.settlement.outcome is Outcome.BLACKJACK
    assert session.profile.chips == 1075
    assert adapter.last_state.result_text == "Blackjack! You win 75 chips!"
    assert scheduler.pauses == ["natural_reveal"]
    assert len(store.saved) == 1


@pytest.mark.asyncio
async def test_dealer_natural(make_session):
    session, adapter, _ = make_session(deal=["9♠", "A♥", "8♦", "Q♣"])
    await play(session, Command.CONFIRM_BET, Command.START_ROUND)
    assert session.profile.chips == 950
    assert adapter.last_state.result_text == "Dealer has Blackjack! You lose."


@pytest.mark.asyncio
async def test_hole_card_hidden_during_player_turn(make_session):
    session, adapter, _ = make_session(deal=STAND_DEAL)
    await play(session, Command.CONFIRM_BET, Command.START_ROUND)

    state = adapter.last_state
    assert state.phase is GamePhase.PLAYER_TURN
    assert state.hole_card_hidden
    assert state.dealer_hand[0] is None
    assert state.dealer_total == 8
    assert state.player_total == 18
    assert state.prompt_text == "Press (h) to Hit, (s) to Stand"


@pytest.mark.asyncio
async def test_bust_ends_round_without_dealer_play(make_session):
    scheduler = ImmediateScheduler()
    session, adapter, store = make_session(
        deal=["10♠", "9♥", "6♦", "8♣", "K♥", "5♠"], scheduler=scheduler
    )
    await play(session, Command.CONFIRM_BET, Command.START_ROUND, Command.HIT)

    state = adapter.last_state
    assert state.phase is GamePhase.SETTLED
    assert state.result_text == "Bust! You lose."
    assert state.chips == 950
    assert state.hole_card_hidden
    assert len(state.dealer_hand) == 2
    assert scheduler.pauses == ["bust"]
    assert any(s.prompt_text == "Bust!" for s in adapter.rendered_states)
    assert len(store.saved) == 1


@pytest.mark.asyncio
async def test_hitting_21_stands_automatically(make_session):
    scheduler = ImmediateScheduler()
    session, adapter, _ = make_session(
        deal=["10♠", "9♥", "5♦", "7♣", "6♥", "2♠"], scheduler=scheduler
    )
    await play(session, Command.CONFIRM_BET, Command.START_ROUND, Command.HIT)

    assert session.phase is GamePhase.SETTLED
    assert session.round.dealer_total == 18
    assert session.profile.chips == 1050
    assert scheduler.pauses == ["auto_stand", "dealer_draw", "dealer_result"]
    assert any(
        s.prompt_text == "21! Standing automatically..." for s in adapter.rendered_states
    )


@pytest.mark.asyncio
async def test_dealer_draws_and_busts(make_session):
    scheduler = ImmediateScheduler()
    session, adapter, _ = make_session(
        deal=["10♠", "9♥", "8♦", "7♣", "K♥"], scheduler=scheduler
    )
    await play(session, Command.CONFIRM_BET, Command.START_ROUND, Command.STAND)

    assert session.round.dealer_total == 26
    assert session.round.settlement.outcome is Outcome.WIN
    assert session.profile.chips == 1050
    assert scheduler.pauses == ["stand", "dealer_draw", "dealer_result"]


@pytest.mark.asyncio
async def test_push(make_session):
    session, adapter, _ = make_session(deal=["10♠", "10♥", "8♦", "8♣"])
    await play(session, Command.CONFIRM_BET, Command.START_ROUND, Command.STAND)
    assert adapter.last_state.result_text == "Push (Tie)."
    assert session.profile.chips == 1000
    assert session.profile.games_tied == 1


@pytest.mark.asyncio
async def test_change_bet_after_confirm(make_session):
    session, adapter, _ = make_session()
    await play(session, Command.ADJUST_BET_UP, Command.CONFIRM_BET, Command.CHANGE_BET)
    assert session.phase is GamePhase.BETTING
    await play(session, Command.ADJUST_BET_UP)
    assert adapter.last_state.bet == 100


@pytest.mark.asyncio
async def test_commands_outside_their_phase_are_ignored(make_session, recorded_events):
    session, adapter, _ = make_session()
    await session.begin()
    before = session.snapshot()

    results = await play(session, Command.HIT, Command.STAND, Command.START_ROUND, Command.RESTART)

    assert results == [False] * 4
    assert session.snapshot() == before
    ignored = [data for event_type, data in recorded_events if event_type == "COMMAND_IGNORED"]
    assert [data["command"] for data in ignored] == ["hit", "stand", "startRound", "restart"]


@pytest.mark.asyncio
async def test_bet_frozen_after_deal(make_session):
    session, _, _ = make_session(deal=STAND_DEAL)
    await play(session, Command.CONFIRM_BET, Command.START_ROUND)
    assert not await session.handle(Command.ADJUST_BET_UP)
    assert session.round.bet == 50


@pytest.mark.asyncio
async def test_snapshot_is_stable(make_session):
    session, _, _ = make_session(deal=STAND_DEAL)
    await play(session, Command.CONFIRM_BET, Command.START_ROUND)
    first = session.snapshot()
    assert session.snapshot() == first
    assert session.snapshot() == first
    assert session.phase is GamePhase.PLAYER_TURN


@pytest.mark.asyncio
async def test_not_enough_chips(make_session, recorded_events):
    session, adapter, _ = make_session(chips=40)
    await session.begin()
    assert not session.accepts(Command.HIT)
    assert await session.handle(Command.CONFIRM_BET)

    state = adapter.last_state
    assert state.phase is GamePhase.BETTING
    assert state.prompt_text.startswith(NOT_ENOUGH_CHIPS)
    assert "WARNING" in [event_type for event_type, _ in recorded_events]


@pytest.mark.asyncio
async def test_restart_resets_round(make_session):
    session, adapter, _ = make_session(deal=STAND_DEAL)
    await play(
        session,
        Command.ADJUST_BET_UP,
        Command.ADJUST_BET_UP,
        Command.CONFIRM_BET,
        Command.START_ROUND,
        Command.STAND,
    )
    round_id = session.round.round_id
    assert await session.handle(Command.RESTART)

    state = adapter.last_state
    assert state.phase is GamePhase.BETTING
    assert state.bet == 50
    assert state.player_hand == ()
    assert state.dealer_hand == ()
    assert state.chips == 1100
    assert session.round.round_id != round_id


@pytest.mark.asyncio
async def test_losing_everything_blocks_next_bet(make_session):
    session, adapter, _ = make_session(
        deal=["10♠", "10♥", "7♦", "8♣"], chips=50
    )
    await play(session, Command.CONFIRM_BET, Command.START_ROUND, Command.STAND)
    assert session.profile.chips == 0

    await play(session, Command.RESTART, Command.CONFIRM_BET)
    assert session.phase is GamePhase.BETTING
    assert adapter.last_state.prompt_text.startswith(NOT_ENOUGH_CHIPS)


@pytest.mark.asyncio
async def test_several_rounds_keep_counts_consistent(make_session):
    session, _, store = make_session(deal=STAND_DEAL)
    for _ in range(3):
        await play(
            session,
            Command.CONFIRM_BET,
            Command.START_ROUND,
            Command.STAND,
            Command.RESTART,
        )
        assert session.profile.is_consistent

    assert session.profile.games_played == 3
    assert session.profile.chips == 1150
    assert [saved["gamesPlayed"] for saved in store.saved] == [1, 2, 3]


@pytest.mark.asyncio
async def test_quit(make_session):
    session, _, store = make_session(deal=STAND_DEAL)
    await play(session, Command.CONFIRM_BET, Command.START_ROUND)
    assert await session.handle(Command.QUIT)
    assert session.is_over
    assert not session.accepts(Command.QUIT)
    assert store.saved == []
    assert session.profile.games_played == 0


@pytest.mark.asyncio
async def test_failed_save_keeps_playing(make_session, memory_store):
    memory_store.fail = True
    session, adapter, _ = make_session(deal=STAND_DEAL, store=memory_store)
    await play(session, Command.CONFIRM_BET, Command.START_ROUND, Command.STAND)
    assert session.phase is GamePhase.SETTLED
    assert session.profile.chips == 1050
    assert memory_store.saved == []
