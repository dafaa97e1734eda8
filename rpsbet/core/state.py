"""
Immutable game state snapshots.

Every transition of the round engine produces a new ``GameState``; nothing
here is ever mutated in place. Observers can compare snapshots by identity
to detect a change.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass, field

from rpsbet.core.rules import GamePhase


@dataclass(frozen=True)
class Bet:
    """
    A single stake on one position.

    Attributes:
        position: The staked choice
        amount: Staked amount (positive)
    """
    position: str
    amount: int

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"Bet amount must be positive, got {self.amount}")

    def to_dict(self) -> Dict[str, Any]:
        return {"position": self.position, "amount": self.amount}


@dataclass(frozen=True)
class Round:
    """
    The current betting round.

    The resolution fields are unset while betting and are filled in
    together when betting completes. ``payout`` is set once the round
    is resolved.
    """
    bets: Tuple[Bet, ...] = ()
    computer_choice: Optional[str] = None
    player_best_choice: Optional[str] = None
    winning_choice: Optional[str] = None
    payout: Optional[int] = None

    @property
    def total_staked(self) -> int:
        return sum(bet.amount for bet in self.bets)

    @property
    def is_revealed(self) -> bool:
        return self.computer_choice is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bets": [bet.to_dict() for bet in self.bets],
            "computer_choice": self.computer_choice,
            "player_best_choice": self.player_best_choice,
            "winning_choice": self.winning_choice,
            "payout": self.payout,
        }


@dataclass(frozen=True)
class Player:
    """
    The player's balance and winnings ledger.

    Attributes:
        balance: Current balance; decreases when betting, increases on payout
        cumulative_wins: Net winnings over all resolved rounds (never decreases)
        current_round: The active round
    """
    balance: int
    cumulative_wins: int = 0
    current_round: Round = field(default_factory=Round)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "balance": self.balance,
            "cumulative_wins": self.cumulative_wins,
            "current_round": self.current_round.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"Player(balance={self.balance}, "
            f"cumulative_wins={self.cumulative_wins}, "
            f"bets={len(self.current_round.bets)})"
        )


@dataclass(frozen=True)
class GameState:
    """The full externally observable snapshot."""
    player: Player
    is_showing_animation: bool = False
    is_round_complete: bool = False

    @property
    def phase(self) -> GamePhase:
        """Derive the phase from the two flags."""
        if self.is_round_complete:
            return GamePhase.COMPLETE
        if self.is_showing_animation:
            return GamePhase.RESOLVING
        return GamePhase.BETTING

    @property
    def bets(self) -> Tuple[Bet, ...]:
        return self.player.current_round.bets

    @classmethod
    def initial(cls, initial_balance: int) -> GameState:
        """Create the state of a fresh game."""
        return cls(player=Player(balance=initial_balance))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "phase": self.phase.name,
            "player": self.player.to_dict(),
            "is_showing_animation": self.is_showing_animation,
            "is_round_complete": self.is_round_complete,
        }
