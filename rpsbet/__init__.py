"""
RPS Bet - Rock-Paper-Scissors Betting Engine

A single-player rock-paper-scissors betting game with:
- Pure Python round engine and payout rules
- Pluggable opponents and schedulers
- FastAPI + WebSocket adapter for remote presentation layers

Usage:
    from rpsbet.core import RoundEngine, GameConfig
    from rpsbet.agents import RandomOpponent, ScriptedOpponent
"""

__version__ = "0.1.0"

from rpsbet.core.rules import GameConfig, GamePhase
from rpsbet.core.choice import ChoiceSet, Outcome
from rpsbet.core.state import Bet, GameState
from rpsbet.core.game import RoundEngine, ActionResult

__all__ = [
    "GameConfig",
    "GamePhase",
    "ChoiceSet",
    "Outcome",
    "Bet",
    "GameState",
    "RoundEngine",
    "ActionResult",
    "__version__",
]
