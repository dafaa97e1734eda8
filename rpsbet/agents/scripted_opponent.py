"""
Scripted Opponent Implementation.

Plays a fixed sequence of choices. Useful for tests, demos and replaying
a known series of rounds.
"""

from typing import Iterable, List, Optional

from rpsbet.agents.base import BaseOpponent
from rpsbet.core.choice import ChoiceSet


class ScriptedOpponent(BaseOpponent):
    """
    An opponent that plays a predetermined list of choices.

    Args:
        script: Choices to play, in order
        cycle: Start over after the last choice (otherwise keep playing it)
    """

    def __init__(
        self,
        script: Iterable[str],
        cycle: bool = True,
        name: Optional[str] = None,
    ):
        super().__init__(name or "Scripted")
        self.script: List[str] = list(script)
        if not self.script:
            raise ValueError("Script must contain at least one choice")
        self.cycle = cycle
        self._position = 0

    @property
    def rounds_played(self) -> int:
        return self._position

    def set_next(self, *choices: str) -> None:
        """Replace the script with ``choices``, starting from the first one."""
        if not choices:
            raise ValueError("At least one choice is required")
        self.script = list(choices)
        self._position = 0

    def choose(self, choices: ChoiceSet) -> str:
        if self.cycle:
            choice = self.script[self._position % len(self.script)]
        else:
            choice = self.script[min(self._position, len(self.script) - 1)]
        self._position += 1

        if choice not in choices:
            raise ValueError(f"Scripted choice {choice!r} is not in {choices!r}")
        return choice

    def reset(self) -> None:
        self._position = 0
