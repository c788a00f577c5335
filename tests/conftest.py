"""
Pytest configuration for termjack tests.

Provides a stacked-deck helper, an in-memory profile store and a factory for
game sessions that run without presentation pauses.
"""

import pytest

from termjack.adapters import DummyAdapter
from termjack.blackjack.stats import PlayerProfile
from termjack.common.card import Card
from termjack.common.deck import Deck
from termjack.engine.scheduler import ImmediateScheduler
from termjack.engine.session import GameSession
from termjack.events import EventBus, EventEmitter
from termjack.storage.profile import ProfileStore


class MemoryProfileStore(ProfileStore):
    """Profile store that keeps saved copies in memory."""

    def __init__(self, emitter=None, fail=False):
        super().__init__("memory.json", emitter=emitter)
        self.saved = []
        self.fail = fail

    def load(self):
        return PlayerProfile()

    async def save(self, profile):
        if self.fail:
            return False
        self.saved.append(profile.to_dict())
        return True


def stacked_deck(*tokens):
    """
    Build a deck that deals the given cards in order.

    The opening deal goes player, dealer (hole card), player, dealer; any
    further tokens are dealt to hits and dealer draws.
    """
    cards = [Card.parse(token) for token in tokens]
    return Deck(list(reversed(cards)))


@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def recorded_events(emitter):
    """List of (event_type, data) pairs emitted on the test emitter."""
    events = []
    emitter.on_any(events.append)
    return events


@pytest.fixture
def make_session(emitter):
    """
    Factory for sessions with a stacked deck.

    Usage: ``session, adapter, store = make_session(["10♠", "9♥", "7♦", "8♣"])``
    """

    def factory(deal=None, chips=1000, commands=None, store=None, scheduler=None):
        adapter = DummyAdapter(commands)
        store = store or MemoryProfileStore(emitter=emitter)
        deck_factory = (lambda: stacked_deck(*deal)) if deal else None
        session = GameSession(
            PlayerProfile(chips=chips),
            store,
            adapter,
            scheduler=scheduler or ImmediateScheduler(),
            emitter=emitter,
            deck_factory=deck_factory,
        )
        return session, adapter, store

    return factory


@pytest.fixture
def deck_builder():
    return stacked_deck


@pytest.fixture
def memory_store(emitter):
    return MemoryProfileStore(emitter=emitter)
