"""
RPS Bet Opponents

This module provides the opponent interface used by the round engine to
pick the computer's choice, plus a random and a scripted implementation.
"""

from rpsbet.agents.base import BaseOpponent
from rpsbet.agents.random_opponent import RandomOpponent
from rpsbet.agents.scripted_opponent import ScriptedOpponent

__all__ = ["BaseOpponent", "RandomOpponent", "ScriptedOpponent"]
