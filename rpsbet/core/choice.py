"""
Choices and the cyclic beats-relation.

Choices are opaque string tokens supplied by configuration. The relation is
derived from their order: every token beats its cyclic predecessor, so with
the default ``("rock", "paper", "scissors")`` paper beats rock, scissors beats
paper and rock beats scissors.

Any odd number of tokens (3, 5, ...) gives a balanced game where each token
beats exactly half of the others.
"""

from __future__ import annotations
import random
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple


class Outcome(Enum):
    """Result of one choice played against another."""
    WIN = "win"
    LOSE = "lose"
    TIE = "tie"


class ChoiceSet:
    """
    A validated, ordered set of choice tokens.

    Usage:
        choices = ChoiceSet(["rock", "paper", "scissors"])
        choices.outcome("rock", "scissors")  # Outcome.WIN
    """

    __slots__ = ("_tokens", "_index")

    def __init__(self, tokens: Iterable[str]):
        tokens = tuple(tokens)

        if len(tokens) < 3:
            raise ValueError("At least 3 choices are required")
        if len(tokens) % 2 == 0:
            raise ValueError(
                f"Number of choices must be odd, got {len(tokens)}"
            )
        for token in tokens:
            if not isinstance(token, str) or not token:
                raise ValueError(f"Invalid choice token: {token!r}")
        if len(set(tokens)) != len(tokens):
            raise ValueError(f"Duplicate choice tokens: {list(tokens)}")

        self._tokens: Tuple[str, ...] = tokens
        self._index: Dict[str, int] = {t: i for i, t in enumerate(tokens)}

    @property
    def tokens(self) -> Tuple[str, ...]:
        return self._tokens

    def __contains__(self, choice: object) -> bool:
        return choice in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChoiceSet):
            return self._tokens == other._tokens
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"ChoiceSet({list(self._tokens)})"

    def index(self, choice: str) -> int:
        """Position of a token in the configured order."""
        try:
            return self._index[choice]
        except KeyError:
            raise ValueError(f"Unknown choice: {choice!r}") from None

    def beats(self, first: str, second: str) -> bool:
        """
        Check whether ``first`` beats ``second``.

        ``first`` beats the tokens that sit 1..n//2 places before it in
        cyclic order. For three tokens this is just the predecessor.
        """
        n = len(self._tokens)
        distance = (self.index(first) - self.index(second)) % n
        return 1 <= distance <= n // 2

    def outcome(self, first: str, second: str) -> Outcome:
        """
        Outcome of ``first`` played against ``second``.

        Returns:
            WIN if first beats second, LOSE if second beats first, TIE if equal
        """
        if self.index(first) == self.index(second):
            return Outcome.TIE
        if self.beats(first, second):
            return Outcome.WIN
        return Outcome.LOSE

    def random_choice(self, rng: Optional[random.Random] = None) -> str:
        """Sample a token uniformly at random."""
        return generate_computer_choice(self._tokens, rng)


def determine_outcome(
    player_choice: str,
    computer_choice: str,
    choices: Sequence[str],
) -> Outcome:
    """
    Determine the outcome of a player choice against the computer's choice.

    Args:
        player_choice: The player's choice
        computer_choice: The computer's choice
        choices: Ordered choice tokens

    Returns:
        Outcome from the player's point of view
    """
    return ChoiceSet(choices).outcome(player_choice, computer_choice)


def generate_computer_choice(
    choices: Sequence[str],
    rng: Optional[random.Random] = None,
) -> str:
    """
    Sample the computer's choice uniformly at random.

    Args:
        choices: Ordered choice tokens
        rng: Optional random generator (module-level random if None)

    Returns:
        One of the tokens
    """
    if not choices:
        raise ValueError("Cannot sample from an empty choice set")
    rng = rng or random
    return choices[rng.randrange(len(choices))]
