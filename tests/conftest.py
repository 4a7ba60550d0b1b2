"""Pytest fixtures for blackjack trainer tests."""

import pytest
from random import Random

from trainer.cards import Rank, Shoe
from trainer.counting import HiLoSystem
from trainer.drills import (
    CountingSession,
    FrameScheduler,
    StrategySession,
    TimedDrill,
)
from trainer.hand import evaluate_hand
from trainer.strategy import BasicStrategy, Variant


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return Shoe(num_decks=6, rng=rng)


@pytest.fixture
def single_deck_shoe(rng):
    """A shuffled 1-deck shoe."""
    return Shoe(num_decks=1, rng=rng)


@pytest.fixture
def soft_18_hand():
    """A soft 18 hand (A-7)."""
    return evaluate_hand([Rank.ACE, Rank.SEVEN])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return evaluate_hand([Rank.TEN, Rank.SIX])


@pytest.fixture
def hard_9_hand():
    """A hard 9 hand (5-4)."""
    return evaluate_hand([Rank.FIVE, Rank.FOUR])


@pytest.fixture
def pair_aces_hand():
    """A pair of Aces."""
    return evaluate_hand([Rank.ACE, Rank.ACE])


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def basic_strategy():
    """Basic strategy with the default tables."""
    return BasicStrategy()


@pytest.fixture
def scheduler():
    """Virtual-clock scheduler advanced explicitly by tests."""
    return FrameScheduler()


@pytest.fixture
def strategy_session(rng, scheduler):
    """A 6-deck strategy drill on the virtual clock."""
    return StrategySession(variant=Variant.SIX_DECK, scheduler=scheduler, rng=rng)


@pytest.fixture
def counting_session(rng):
    """A 6-deck counting drill."""
    return CountingSession(num_decks=6, rng=rng)


@pytest.fixture
def single_deck_session(rng):
    """A 1-deck counting drill, small enough to run through the shoe."""
    return CountingSession(num_decks=1, rng=rng)


@pytest.fixture
def timed_drill(counting_session, scheduler):
    """A timed drill over the 6-deck counting session."""
    return TimedDrill(counting_session, scheduler=scheduler)
