"""
Pure state transitions for a betting round.

Each function takes the current ``GameState`` and returns the next one.
A rejected action returns the very same object, so callers can detect a
no-op with an identity check. Nothing here has side effects; the round
engine owns scheduling, locking and observer notification.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from rpsbet.core.choice import ChoiceSet
from rpsbet.core.payout import (
    calculate_payout,
    get_player_best_choice,
    get_round_winning_choice,
    unique_positions,
)
from rpsbet.core.rules import GameConfig, GamePhase
from rpsbet.core.state import Bet, GameState, Round


class EngineInvariantError(RuntimeError):
    """An internal invariant of the round engine was violated."""


def bet_rejection_reason(
    state: GameState,
    position: str,
    config: GameConfig,
    choices: ChoiceSet,
) -> Optional[str]:
    """
    Explain why a bet on ``position`` would be rejected.

    Returns:
        A human-readable reason, or None if the bet is allowed
    """
    if state.phase != GamePhase.BETTING:
        return f"Cannot bet during {state.phase.name}"
    if position not in choices:
        return f"Unknown position: {position!r}"
    if state.player.balance < config.bet_amount:
        return (
            f"Insufficient balance (${state.player.balance}) "
            f"for bet of ${config.bet_amount}"
        )
    positions = unique_positions(state.bets)
    if position not in positions and len(positions) >= config.max_positions:
        return f"Cannot bet on more than {config.max_positions} positions"
    return None


def place_bet(
    state: GameState,
    position: str,
    config: GameConfig,
    choices: ChoiceSet,
) -> GameState:
    """Stake ``config.bet_amount`` on ``position``."""
    if bet_rejection_reason(state, position, config, choices) is not None:
        return state

    player = state.player
    current_round = player.current_round
    return replace(
        state,
        player=replace(
            player,
            balance=player.balance - config.bet_amount,
            current_round=replace(
                current_round,
                bets=current_round.bets + (Bet(position, config.bet_amount),),
            ),
        ),
    )


def begin_resolution(
    state: GameState,
    computer_choice: str,
    choices: ChoiceSet,
) -> GameState:
    """
    Reveal the computer's choice and enter the animation phase.

    Only valid while betting with at least one bet placed.
    """
    if state.phase != GamePhase.BETTING or not state.bets:
        return state
    if computer_choice not in choices:
        raise EngineInvariantError(f"Opponent chose unknown token {computer_choice!r}")

    bets = state.bets
    return replace(
        state,
        is_showing_animation=True,
        player=replace(
            state.player,
            current_round=replace(
                state.player.current_round,
                computer_choice=computer_choice,
                player_best_choice=get_player_best_choice(bets, computer_choice, choices),
                winning_choice=get_round_winning_choice(bets, computer_choice, choices),
            ),
        ),
    )


def finish_resolution(
    state: GameState,
    config: GameConfig,
    choices: ChoiceSet,
) -> GameState:
    """
    Apply the payout and complete the round.

    Balance, the winnings ledger and both phase flags change together.
    Only valid in the resolving phase.
    """
    if state.phase != GamePhase.RESOLVING:
        return state

    current_round = state.player.current_round
    if not current_round.bets or current_round.computer_choice is None:
        raise EngineInvariantError("Cannot resolve a round without bets and a computer choice")

    payout = calculate_payout(current_round.bets, current_round.computer_choice, config, choices)
    staked = current_round.total_staked

    winnings = 0
    if payout > staked:
        winnings = payout if config.track_gross_winnings else payout - staked

    player = state.player
    return replace(
        state,
        is_showing_animation=False,
        is_round_complete=True,
        player=replace(
            player,
            balance=player.balance + payout,
            cumulative_wins=player.cumulative_wins + winnings,
            current_round=replace(current_round, payout=payout),
        ),
    )


def start_new_round(state: GameState) -> GameState:
    """Clear the round and return to betting. Balance and winnings are kept."""
    return replace(
        state,
        is_showing_animation=False,
        is_round_complete=False,
        player=replace(state.player, current_round=Round()),
    )
