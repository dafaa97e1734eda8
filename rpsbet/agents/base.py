"""
Base Opponent Interface for RPS Bet.

The round engine asks an opponent for the computer's choice every time
betting completes. The default opponent samples uniformly at random;
scripted opponents make rounds reproducible in tests and demos.

Usage:
    class MyOpponent(BaseOpponent):
        def choose(self, choices):
            return choices.tokens[0]
"""

from abc import ABC, abstractmethod
from typing import Optional

from rpsbet.core.choice import ChoiceSet


class BaseOpponent(ABC):
    """
    Abstract base class for computer opponents.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or type(self).__name__

    @abstractmethod
    def choose(self, choices: ChoiceSet) -> str:
        """
        Pick the computer's choice for a round.

        Called once per round, when the player completes betting. The
        returned token must belong to ``choices``.

        Args:
            choices: The configured choice set

        Returns:
            One of the choice tokens
        """
        pass

    def reset(self) -> None:
        """
        Reset the opponent's internal state.

        Override this method if your opponent keeps state between rounds.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
