"""
Random Opponent Implementation.

Samples the computer's choice uniformly at random. This is the opponent
used by the round engine unless another one is supplied.
"""

import random
from typing import Optional

from rpsbet.agents.base import BaseOpponent
from rpsbet.core.choice import ChoiceSet


class RandomOpponent(BaseOpponent):
    """
    An opponent that picks every choice with equal probability.

    Pass a ``seed`` (or an ``rng``) for a reproducible sequence.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(name or "Random")
        self._seed = seed
        self.rng = rng or random.Random(seed)

    def choose(self, choices: ChoiceSet) -> str:
        return choices.random_choice(self.rng)

    def reset(self) -> None:
        """Restart the sequence if the opponent was seeded."""
        if self._seed is not None:
            self.rng.seed(self._seed)
