"""
RPS Bet Core - Pure Python Round Engine and Rules

This module contains all game logic without any network dependencies.
"""

from rpsbet.core.choice import ChoiceSet, Outcome, determine_outcome, generate_computer_choice
from rpsbet.core.rules import GameConfig, GamePhase
from rpsbet.core.state import Bet, Round, Player, GameState
from rpsbet.core.payout import (
    calculate_payout,
    get_player_best_choice,
    get_round_winning_choice,
    round_result_text,
)
from rpsbet.core.scheduler import (
    Scheduler,
    ScheduledCall,
    ThreadingScheduler,
    AsyncioScheduler,
    ManualScheduler,
)
from rpsbet.core.transitions import EngineInvariantError
from rpsbet.core.game import RoundEngine, ActionType, ActionResult

__all__ = [
    "ChoiceSet",
    "Outcome",
    "determine_outcome",
    "generate_computer_choice",
    "GameConfig",
    "GamePhase",
    "Bet",
    "Round",
    "Player",
    "GameState",
    "calculate_payout",
    "get_player_best_choice",
    "get_round_winning_choice",
    "round_result_text",
    "Scheduler",
    "ScheduledCall",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "EngineInvariantError",
    "RoundEngine",
    "ActionType",
    "ActionResult",
]
