"""
Tests for payout computation and the best-choice policy.
"""

import pytest
from rpsbet.core.choice import ChoiceSet
from rpsbet.core.payout import (
    bet_amount_for_choice,
    calculate_payout,
    can_bet_on_position,
    can_place_any_bet,
    get_player_best_choice,
    get_round_winning_choice,
    group_bets_by_position,
    round_result_text,
    total_bet_amount,
    unique_positions,
)
from rpsbet.core.rules import GameConfig, DEFAULT_CHOICES


@pytest.fixture
def choices():
    return ChoiceSet(DEFAULT_CHOICES)


class TestBetGrouping:
    """Tests for bet grouping helpers."""

    def test_total_bet_amount(self, make_bets):
        assert total_bet_amount(make_bets("rock", "rock", "paper")) == 1500
        assert total_bet_amount(()) == 0

    def test_bet_amount_for_choice(self, make_bets):
        bets = make_bets("rock", "rock", "paper")
        assert bet_amount_for_choice(bets, "rock") == 1000
        assert bet_amount_for_choice(bets, "paper") == 500
        assert bet_amount_for_choice(bets, "scissors") == 0

    def test_positions_keep_first_bet_order(self, make_bets):
        bets = make_bets("paper", "rock", "paper")
        assert unique_positions(bets) == ["paper", "rock"]
        grouped, positions = group_bets_by_position(bets)
        assert positions == ["paper", "rock"]
        assert len(grouped["paper"]) == 2


class TestSinglePositionPayout:
    """Single position: 14x on a win, refund on a tie, nothing on a loss."""

    def test_win(self, config, make_bets):
        assert calculate_payout(make_bets("rock"), "scissors", config) == 7000

    def test_win_with_stacked_bets(self, config, make_bets):
        assert calculate_payout(make_bets("rock", "rock"), "scissors", config) == 14000

    def test_tie_refunds_stake(self, config, make_bets):
        assert calculate_payout(make_bets("rock", "rock"), "rock", config) == 1000

    def test_loss(self, config, make_bets):
        assert calculate_payout(make_bets("rock"), "paper", config) == 0

    def test_no_bets(self, config):
        assert calculate_payout((), "rock", config) == 0


class TestTwoPositionPayout:
    """Two positions: 3x per winning position, ties count as losses."""

    def test_one_wins_one_loses(self, config, make_bets):
        assert calculate_payout(make_bets("rock", "paper"), "scissors", config) == 1500

    def test_tie_and_loss_pay_nothing(self, config, make_bets):
        # rock ties, scissors loses to rock
        assert calculate_payout(make_bets("rock", "scissors"), "rock", config) == 0

    def test_tie_and_win(self, config, make_bets):
        # rock ties (pays nothing), paper wins 500 * 3
        assert calculate_payout(make_bets("rock", "rock", "paper"), "rock", config) == 1500

    def test_winning_stack(self, config, make_bets):
        bets = make_bets("rock", "rock", "paper")
        assert calculate_payout(bets, "scissors", config) == 3000

    def test_multipliers_come_from_config(self, make_bets):
        config = GameConfig(single_bet_multiplier=2, double_bet_multiplier=5)
        assert calculate_payout(make_bets("rock"), "scissors", config) == 1000
        assert calculate_payout(make_bets("rock", "paper"), "scissors", config) == 2500


class TestManyPositionPayout:
    """Three or more positions only happen with a raised cap."""

    def test_three_positions_use_configured_multiplier(self, make_bets):
        config = GameConfig(
            max_positions=3,
            choices=("rock", "paper", "scissors", "spock", "lizard"),
            position_multipliers={3: 2},
        )
        bets = make_bets("rock", "paper", "scissors", amount=100)
        # Against lizard (index 4): rock (0) and paper (1) win, scissors (2) loses
        assert calculate_payout(bets, "lizard", config) == 400

    def test_three_positions_fall_back_to_double_multiplier(self, make_bets):
        config = GameConfig(max_positions=3)
        bets = make_bets("rock", "paper", "scissors")
        # Exactly one position wins, one ties, one loses
        assert calculate_payout(bets, "rock", config) == 500 * 3

    def test_multipliers_cannot_be_mutated(self, make_bets):
        multipliers = {3: 2}
        config = GameConfig(
            max_positions=3,
            choices=("rock", "paper", "scissors", "spock", "lizard"),
            position_multipliers=multipliers,
        )
        before = hash(config)

        with pytest.raises(TypeError):
            config.position_multipliers[3] = 99
        multipliers[3] = 99

        assert config.multiplier_for(3) == 2
        assert hash(config) == before
        bets = make_bets("rock", "paper", "scissors", amount=100)
        assert calculate_payout(bets, "lizard", config) == 400

    def test_equal_configs_hash_equal(self):
        first = GameConfig(max_positions=3, position_multipliers={3: 4})
        second = GameConfig(max_positions=3, position_multipliers={3: 4})
        assert first == second
        assert hash(first) == hash(second)
        assert first.to_dict()["position_multipliers"] == {3: 4}


class TestBestChoice:
    """Tests for the player's best choice policy."""

    def test_prefers_win(self, choices, make_bets):
        bets = make_bets("scissors", "rock")
        assert get_player_best_choice(bets, "scissors", choices) == "rock"

    def test_prefers_tie_over_loss(self, choices, make_bets):
        bets = make_bets("scissors", "rock")
        assert get_player_best_choice(bets, "rock", choices) == "rock"

    def test_falls_back_to_loss(self, choices, make_bets):
        bets = make_bets("rock")
        assert get_player_best_choice(bets, "paper", choices) == "rock"

    def test_no_bets(self, choices):
        assert get_player_best_choice((), "rock", choices) is None

    def test_winning_choice_is_player_on_win(self, choices, make_bets):
        bets = make_bets("rock", "paper")
        assert get_round_winning_choice(bets, "scissors", choices) == "rock"

    def test_winning_choice_is_player_on_tie(self, choices, make_bets):
        assert get_round_winning_choice(make_bets("rock"), "rock", choices) == "rock"

    def test_winning_choice_is_computer_on_loss(self, choices, make_bets):
        assert get_round_winning_choice(make_bets("rock"), "paper", choices) == "paper"


class TestResultText:
    """Tests for the round result text."""

    def test_no_bets(self, choices):
        assert round_result_text((), "rock", choices) == ""

    def test_single_results(self, choices, make_bets):
        assert round_result_text(make_bets("rock"), "scissors", choices) == "YOU WIN"
        assert round_result_text(make_bets("rock"), "rock", choices) == "TIE"
        assert round_result_text(make_bets("rock"), "paper", choices) == "YOU LOSE"

    def test_tie_with_two_positions_is_a_loss(self, choices, make_bets):
        assert round_result_text(make_bets("rock", "scissors"), "rock", choices) == "YOU LOSE"

    def test_any_win_with_two_positions(self, choices, make_bets):
        assert round_result_text(make_bets("rock", "paper"), "scissors", choices) == "YOU WIN"


class TestBetAvailability:
    """Tests for the position cap helpers."""

    def test_cap_reached(self, make_bets):
        bets = make_bets("rock", "paper")
        assert can_bet_on_position(bets, "rock", 2)
        assert not can_bet_on_position(bets, "scissors", 2)

    def test_disabled(self, make_bets):
        assert not can_bet_on_position((), "rock", 2, disabled=True)
        assert not can_place_any_bet((), DEFAULT_CHOICES, 2, disabled=True)

    def test_any_bet(self, make_bets):
        assert can_place_any_bet(make_bets("rock", "paper"), DEFAULT_CHOICES, 2)
