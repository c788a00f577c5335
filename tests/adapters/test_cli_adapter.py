import pytest

from termjack.adapters import CLIAdapter
from termjack.blackjack.stats import PlayerProfile
from termjack.common.card import Card
from termjack.common.io_interface import TestIOInterface
from termjack.state.models import Command, GamePhase, RenderState


def _state(phase, **overrides):
    values = dict(
        phase=phase,
        chips=1000,
        bet=50,
        player_hand=(),
        dealer_hand=(),
        hole_card_hidden=False,
        player_total=0,
        dealer_total=0,
        prompt_text="prompt",
    )
    values.update(overrides)
    return RenderState(**values)


@pytest.fixture
def io():
    return TestIOInterface()


@pytest.fixture
def adapter(io):
    adapter = CLIAdapter(io)
    yield adapter
    adapter._async_io.close()


@pytest.mark.parametrize(
    "key, command",
    [
        ("u", Command.ADJUST_BET_UP),
        ("UP", Command.ADJUST_BET_UP),
        ("+", Command.ADJUST_BET_UP),
        ("d", Command.ADJUST_BET_DOWN),
        ("-", Command.ADJUST_BET_DOWN),
        ("b", Command.CHANGE_BET),
        ("backspace", Command.CHANGE_BET),
        (" h ", Command.HIT),
        ("s", Command.STAND),
        ("r", Command.RESTART),
        ("q", Command.QUIT),
        ("stand", Command.STAND),
        ("startRound", Command.START_ROUND),
    ],
)
def test_translate_keys(adapter, key, command):
    assert adapter.translate(key) is command


def test_translate_unknown_key(adapter):
    assert adapter.translate("x") is None


@pytest.mark.asyncio
async def test_enter_depends_on_phase(adapter):
    assert adapter.translate("") is None

    await adapter.render_game_state(_state(GamePhase.BETTING))
    assert adapter.translate("") is Command.CONFIRM_BET

    await adapter.render_game_state(_state(GamePhase.CONFIRMED))
    assert adapter.translate("") is Command.START_ROUND

    await adapter.render_game_state(_state(GamePhase.PLAYER_TURN))
    assert adapter.translate("") is None


@pytest.mark.asyncio
async def test_render_redraws_screen(adapter, io):
    state = _state(
        GamePhase.PLAYER_TURN,
        player_hand=(Card.parse("10♥"), Card.parse("7♠")),
        dealer_hand=(None, Card.parse("K♣")),
        hole_card_hidden=True,
        player_total=17,
        dealer_total=10,
        prompt_text="Press (h) to Hit, (s) to Stand",
    )
    await adapter.render_game_state(state)

    assert io.clear_count == 1
    screen = io.sent_messages[-1]
    assert "Your total: 17" in screen
    assert "Dealer's total: 10" in screen
    assert "░░░░░" in screen
    assert screen.endswith("Press (h) to Hit, (s) to Stand")


@pytest.mark.asyncio
async def test_next_command_skips_unmapped_lines():
    io = TestIOInterface(["x", "???", "h"])
    adapter = CLIAdapter(io)
    try:
        assert await adapter.next_command() is Command.HIT
        assert io.prompts == ["> ", "> ", "> "]
    finally:
        await adapter.shutdown()


@pytest.mark.asyncio
async def test_end_of_input_quits():
    adapter = CLIAdapter(TestIOInterface([]))
    try:
        assert await adapter.next_command() is Command.QUIT
    finally:
        await adapter.shutdown()


@pytest.mark.asyncio
async def test_only_problems_are_shown(adapter, io):
    await adapter.notify_game_event("CARD_DEALT", {"card": "A♠"})
    await adapter.notify_game_event("WARNING", {"message": "low chips"})
    await adapter.notify_game_event("ERROR", {"message": "disk full"})
    assert io.sent_messages == ["Warning: low chips", "Error: disk full"]


@pytest.mark.asyncio
async def test_welcome_waits_for_enter():
    io = TestIOInterface([""])
    adapter = CLIAdapter(io)
    try:
        await adapter.show_welcome(PlayerProfile(chips=800, games_played=2, games_won=1, games_lost=1))
        assert "Chips: 800" in io.sent_messages[0]
        assert io.input_responses == []
    finally:
        await adapter.shutdown()


def test_console_io_interface(mocker):
    from termjack.common.io_interface import ConsoleIOInterface

    mocker.patch("builtins.input", side_effect=["h"])
    interface = ConsoleIOInterface()
    interface.output("Test message")
    assert interface.input("> ") == "h"
