"""
Pytest configuration and shared fixtures for RPS Bet tests.
"""

import pytest
from rpsbet.agents import ScriptedOpponent
from rpsbet.core.game import RoundEngine
from rpsbet.core.rules import GameConfig
from rpsbet.core.scheduler import ManualScheduler
from rpsbet.core.state import Bet


@pytest.fixture
def config():
    """Default configuration (5000 balance, 500 bets, 14x / 3x)."""
    return GameConfig()


@pytest.fixture
def scheduler():
    """A virtual clock that only runs resolutions when advanced."""
    return ManualScheduler()


@pytest.fixture
def opponent():
    """An opponent that always plays scissors unless re-scripted."""
    return ScriptedOpponent(["scissors"])


@pytest.fixture
def engine(config, opponent, scheduler):
    """An engine driven by the scripted opponent and the manual clock."""
    return RoundEngine(config=config, opponent=opponent, scheduler=scheduler)


@pytest.fixture
def play_round(engine, opponent, scheduler):
    """
    Play one full round: bet on each position, reveal, then resolve.

    Usage:
        state = play_round(["rock", "paper"], computer="scissors")
    """
    def _play(positions, computer):
        engine.start_new_round()
        opponent.set_next(computer)
        for position in positions:
            assert engine.place_bet(position).success
        assert engine.complete_betting().success
        scheduler.advance(engine.config.animation_duration)
        return engine.get_state()

    return _play


@pytest.fixture
def make_bets():
    """Build a bet tuple from positions, 500 each unless given."""
    def _make(*positions, amount=500):
        return tuple(Bet(position, amount) for position in positions)

    return _make
