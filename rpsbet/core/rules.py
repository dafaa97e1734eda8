"""
Rock-Paper-Scissors Betting Rules and Constants.

This module defines the static configuration consumed by the round engine
and the enumerations shared by the rest of the core. Key rules:

1. Staking: every bet stakes the same fixed amount. A bet is only accepted
   if the balance covers it.

2. Position cap: at most ``max_positions`` distinct choices may carry bets
   in one round. Re-staking an already-staked choice is always allowed.

3. Single position payout: a win pays ``stake * single_bet_multiplier``,
   a tie refunds the stake, a loss pays nothing.

4. Multi-position payout: every winning position pays
   ``stake * double_bet_multiplier``. Ties count as losses.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from rpsbet.core.choice import ChoiceSet


class GamePhase(Enum):
    """Phases of a betting round."""
    BETTING = auto()      # Accepting bets
    RESOLVING = auto()    # Computer choice revealed, animation running
    COMPLETE = auto()     # Payout applied, waiting for a new round


# Default game settings
DEFAULT_INITIAL_BALANCE = 5000
DEFAULT_BET_AMOUNT = 500
DEFAULT_MAX_POSITIONS = 2
DEFAULT_SINGLE_BET_MULTIPLIER = 14
DEFAULT_DOUBLE_BET_MULTIPLIER = 3
DEFAULT_ANIMATION_DURATION = 2.0  # seconds
DEFAULT_CHOICES: Tuple[str, ...] = ("rock", "paper", "scissors")

# Result text shown to the player
RESULT_WIN = "YOU WIN"
RESULT_TIE = "TIE"
RESULT_LOSE = "YOU LOSE"


@dataclass(frozen=True)
class GameConfig:
    """
    Static configuration for one engine instance.

    Attributes:
        initial_balance: Starting balance of the player
        bet_amount: Amount staked by every bet
        max_positions: Maximum number of distinct staked choices per round
        single_bet_multiplier: Win multiplier when one position is staked
        double_bet_multiplier: Win multiplier when two positions are staked
        animation_duration: Delay in seconds between reveal and payout
        choices: Ordered choice tokens; each beats its cyclic predecessor
        position_multipliers: Optional win multipliers for three or more
            staked positions, keyed by the number of positions
        track_gross_winnings: Credit the whole payout (instead of the net
            gain) to cumulative wins on a winning round
    """
    initial_balance: int = DEFAULT_INITIAL_BALANCE
    bet_amount: int = DEFAULT_BET_AMOUNT
    max_positions: int = DEFAULT_MAX_POSITIONS
    single_bet_multiplier: int = DEFAULT_SINGLE_BET_MULTIPLIER
    double_bet_multiplier: int = DEFAULT_DOUBLE_BET_MULTIPLIER
    animation_duration: float = DEFAULT_ANIMATION_DURATION
    choices: Tuple[str, ...] = DEFAULT_CHOICES
    position_multipliers: Mapping[int, int] = field(default_factory=dict)
    track_gross_winnings: bool = False

    def __post_init__(self) -> None:
        # Read-only copies of the caller's containers
        object.__setattr__(self, "choices", tuple(self.choices))
        object.__setattr__(
            self, "position_multipliers", MappingProxyType(dict(self.position_multipliers))
        )

        if self.initial_balance < 0:
            raise ValueError("initial_balance must be >= 0")
        if self.bet_amount <= 0:
            raise ValueError("bet_amount must be positive")
        if self.max_positions < 1:
            raise ValueError("max_positions must be at least 1")
        if self.max_positions > len(self.choices):
            raise ValueError(
                f"max_positions ({self.max_positions}) cannot exceed "
                f"the number of choices ({len(self.choices)})"
            )
        if self.single_bet_multiplier < 0 or self.double_bet_multiplier < 0:
            raise ValueError("Multipliers must be >= 0")
        if self.animation_duration < 0:
            raise ValueError("animation_duration must be >= 0")
        for count, multiplier in self.position_multipliers.items():
            if count < 3:
                raise ValueError(
                    "position_multipliers only applies to 3 or more positions"
                )
            if multiplier < 0:
                raise ValueError("Multipliers must be >= 0")

        # Validates token count and uniqueness
        ChoiceSet(self.choices)

    def __hash__(self) -> int:
        return hash((
            self.initial_balance,
            self.bet_amount,
            self.max_positions,
            self.single_bet_multiplier,
            self.double_bet_multiplier,
            self.animation_duration,
            self.choices,
            tuple(sorted(self.position_multipliers.items())),
            self.track_gross_winnings,
        ))

    def multiplier_for(self, num_positions: int) -> int:
        """
        Get the win multiplier for a bet set spanning ``num_positions`` choices.

        Args:
            num_positions: Number of distinct staked positions

        Returns:
            Multiplier applied to each winning position's stake
        """
        if num_positions <= 1:
            return self.single_bet_multiplier
        if num_positions == 2:
            return self.double_bet_multiplier
        return self.position_multipliers.get(num_positions, self.double_bet_multiplier)

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "initial_balance": self.initial_balance,
            "bet_amount": self.bet_amount,
            "max_positions": self.max_positions,
            "single_bet_multiplier": self.single_bet_multiplier,
            "double_bet_multiplier": self.double_bet_multiplier,
            "animation_duration": self.animation_duration,
            "choices": list(self.choices),
            "position_multipliers": dict(self.position_multipliers),
            "track_gross_winnings": self.track_gross_winnings,
        }
