"""
Pydantic schemas for API request/response validation.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from rpsbet.core.rules import (
    DEFAULT_INITIAL_BALANCE, DEFAULT_BET_AMOUNT, DEFAULT_MAX_POSITIONS,
    DEFAULT_SINGLE_BET_MULTIPLIER, DEFAULT_DOUBLE_BET_MULTIPLIER,
    DEFAULT_ANIMATION_DURATION, DEFAULT_CHOICES,
)


# ============= Request Schemas =============

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    initial_balance: int = Field(ge=0, default=DEFAULT_INITIAL_BALANCE)
    bet_amount: int = Field(gt=0, default=DEFAULT_BET_AMOUNT)
    max_positions: int = Field(ge=1, default=DEFAULT_MAX_POSITIONS)
    single_bet_multiplier: int = Field(ge=0, default=DEFAULT_SINGLE_BET_MULTIPLIER)
    double_bet_multiplier: int = Field(ge=0, default=DEFAULT_DOUBLE_BET_MULTIPLIER)
    animation_duration: float = Field(ge=0, default=DEFAULT_ANIMATION_DURATION)
    choices: List[str] = Field(default_factory=lambda: list(DEFAULT_CHOICES))
    track_gross_winnings: bool = False
    seed: Optional[int] = Field(default=None, description="Seed for the random opponent")


class BetRequest(BaseModel):
    """Request to place a bet."""
    position: str = Field(..., description="Choice to bet on, e.g. rock")


# ============= Response Schemas =============

class BetSchema(BaseModel):
    """A single bet."""
    position: str
    amount: int


class RoundSchema(BaseModel):
    """The current round."""
    bets: List[BetSchema] = []
    computer_choice: Optional[str] = None
    player_best_choice: Optional[str] = None
    winning_choice: Optional[str] = None
    payout: Optional[int] = None


class PlayerSchema(BaseModel):
    """Player balance and winnings."""
    balance: int
    cumulative_wins: int
    current_round: RoundSchema


class GameStateSchema(BaseModel):
    """Complete game state."""
    phase: str
    player: PlayerSchema
    is_showing_animation: bool
    is_round_complete: bool


class SessionSchema(BaseModel):
    """A session and its current state."""
    session_id: str
    state: GameStateSchema
    result_text: str = ""
    available_positions: List[str] = []


class ActionResultSchema(BaseModel):
    """Result of a game action."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    state: GameStateSchema


class ConfigSchema(BaseModel):
    """Game configuration."""
    initial_balance: int
    bet_amount: int
    max_positions: int
    single_bet_multiplier: int
    double_bet_multiplier: int
    animation_duration: float
    choices: List[str]
    position_multipliers: Dict[int, int] = {}
    track_gross_winnings: bool = False

