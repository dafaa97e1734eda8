"""
Tests for computer opponents.
"""

import random

import pytest
from rpsbet.agents import BaseOpponent, RandomOpponent, ScriptedOpponent
from rpsbet.core.choice import ChoiceSet
from rpsbet.core.rules import DEFAULT_CHOICES


@pytest.fixture
def choices():
    return ChoiceSet(DEFAULT_CHOICES)


class TestRandomOpponent:
    """Tests for the uniform random opponent."""

    def test_choices_are_valid(self, choices):
        opponent = RandomOpponent(seed=3)
        for _ in range(30):
            assert opponent.choose(choices) in choices

    def test_seed_and_reset(self, choices):
        opponent = RandomOpponent(seed=11)
        first = [opponent.choose(choices) for _ in range(10)]
        opponent.reset()
        assert [opponent.choose(choices) for _ in range(10)] == first
        assert RandomOpponent(seed=11).choose(choices) == first[0]

    def test_samples_through_choice_set(self, choices):
        rng = random.Random(9)
        expected = [choices.random_choice(rng) for _ in range(10)]
        opponent = RandomOpponent(rng=random.Random(9))
        assert [opponent.choose(choices) for _ in range(10)] == expected


class TestScriptedOpponent:
    """Tests for the scripted opponent."""

    def test_cycles(self, choices):
        opponent = ScriptedOpponent(["rock", "paper"])
        played = [opponent.choose(choices) for _ in range(5)]
        assert played == ["rock", "paper", "rock", "paper", "rock"]
        assert opponent.rounds_played == 5

    def test_repeats_last_without_cycle(self, choices):
        opponent = ScriptedOpponent(["rock", "paper"], cycle=False)
        played = [opponent.choose(choices) for _ in range(4)]
        assert played == ["rock", "paper", "paper", "paper"]

    def test_set_next(self, choices):
        opponent = ScriptedOpponent(["rock"])
        opponent.choose(choices)
        opponent.set_next("scissors")
        assert opponent.choose(choices) == "scissors"

    def test_invalid_script(self, choices):
        with pytest.raises(ValueError):
            ScriptedOpponent([])
        with pytest.raises(ValueError):
            ScriptedOpponent(["lizard"]).choose(choices)


class TestCustomOpponent:
    """Opponents only need to implement choose()."""

    def test_subclass(self, choices):
        class FirstChoice(BaseOpponent):
            def choose(self, choices):
                return choices.tokens[0]

        opponent = FirstChoice()
        assert opponent.name == "FirstChoice"
        assert opponent.choose(choices) == "rock"

    def test_abstract(self):
        with pytest.raises(TypeError):
            BaseOpponent()
