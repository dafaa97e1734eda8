"""
Round evaluation: bet grouping, best-choice policy and payout computation.

Everything here is a pure function over a bet sequence and the computer's
choice. The round engine calls these during resolution; presentation code
may call them to preview results or decide which buttons to enable.

Payout rules:
- Single position: win pays stake * single multiplier, tie refunds the
  stake, loss pays nothing.
- Multiple positions: each winning position pays its stake * the
  multiplier for that number of positions. Ties pay nothing.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from rpsbet.core.choice import ChoiceSet, Outcome
from rpsbet.core.rules import GameConfig, RESULT_WIN, RESULT_TIE, RESULT_LOSE
from rpsbet.core.state import Bet


def total_bet_amount(bets: Iterable[Bet]) -> int:
    """Sum of all bet amounts."""
    return sum(bet.amount for bet in bets)


def bet_amount_for_choice(bets: Iterable[Bet], choice: str) -> int:
    """Total staked on a single choice."""
    return sum(bet.amount for bet in bets if bet.position == choice)


def unique_positions(bets: Iterable[Bet]) -> List[str]:
    """Distinct staked positions in first-bet order."""
    seen: List[str] = []
    for bet in bets:
        if bet.position not in seen:
            seen.append(bet.position)
    return seen


def group_bets_by_position(bets: Sequence[Bet]) -> Tuple[Dict[str, List[Bet]], List[str]]:
    """
    Group bets by their position.

    Returns:
        Tuple of (bets keyed by position, positions in first-bet order)
    """
    grouped: Dict[str, List[Bet]] = {}
    for bet in bets:
        grouped.setdefault(bet.position, []).append(bet)
    return grouped, list(grouped.keys())


def get_player_best_choice(
    bets: Sequence[Bet],
    computer_choice: str,
    choices: ChoiceSet,
) -> Optional[str]:
    """
    Pick the staked position to present as the player's choice.

    Priority: a winning position, then a tying one, then a losing one,
    then the first staked position. Within a tier, the position that was
    staked first is preferred.

    Returns:
        A staked position, or None if there are no bets
    """
    positions = unique_positions(bets)
    if not positions:
        return None

    by_outcome: Dict[Outcome, str] = {}
    for position in positions:
        by_outcome.setdefault(choices.outcome(position, computer_choice), position)

    for outcome in (Outcome.WIN, Outcome.TIE, Outcome.LOSE):
        if outcome in by_outcome:
            return by_outcome[outcome]
    return positions[0]


def get_round_winning_choice(
    bets: Sequence[Bet],
    computer_choice: str,
    choices: ChoiceSet,
) -> Optional[str]:
    """
    Determine which choice wins the round overall.

    The player's best choice wins (or shares a tie) if it does not lose
    to the computer; otherwise the computer's choice wins.
    """
    best = get_player_best_choice(bets, computer_choice, choices)
    if best is None:
        return None
    if choices.outcome(best, computer_choice) in (Outcome.WIN, Outcome.TIE):
        return best
    return computer_choice


def calculate_payout(
    bets: Sequence[Bet],
    computer_choice: str,
    config: GameConfig,
    choices: Optional[ChoiceSet] = None,
) -> int:
    """
    Calculate the total amount credited to the player for a round.

    Args:
        bets: All bets of the round
        computer_choice: The sampled computer choice
        config: Game configuration (multipliers)
        choices: Choice set to evaluate with (built from config if None)

    Returns:
        Payout amount (>= 0)
    """
    choices = choices or ChoiceSet(config.choices)
    grouped, positions = group_bets_by_position(bets)

    if not positions:
        return 0

    if len(positions) == 1:
        position = positions[0]
        stake = total_bet_amount(grouped[position])
        outcome = choices.outcome(position, computer_choice)
        if outcome == Outcome.TIE:
            return stake
        if outcome == Outcome.WIN:
            return stake * config.single_bet_multiplier
        return 0

    # Ties lose when more than one position is staked
    multiplier = config.multiplier_for(len(positions))
    payout = 0
    for position in positions:
        if choices.outcome(position, computer_choice) == Outcome.WIN:
            payout += total_bet_amount(grouped[position]) * multiplier
    return payout


def round_result_text(
    bets: Sequence[Bet],
    computer_choice: str,
    choices: ChoiceSet,
) -> str:
    """
    Human-readable result of a round ('YOU WIN', 'TIE', 'YOU LOSE' or '').

    A tie is only reported when a single position is staked.
    """
    positions = unique_positions(bets)
    if not positions:
        return ""

    outcomes = {choices.outcome(p, computer_choice) for p in positions}
    if Outcome.WIN in outcomes:
        return RESULT_WIN
    if len(positions) == 1 and Outcome.TIE in outcomes:
        return RESULT_TIE
    return RESULT_LOSE


def can_bet_on_position(
    bets: Sequence[Bet],
    choice: str,
    max_positions: int,
    disabled: bool = False,
) -> bool:
    """Check if the position cap allows another bet on ``choice``."""
    if disabled:
        return False
    positions = unique_positions(bets)
    if choice in positions:
        return True
    return len(positions) < max_positions


def can_place_any_bet(
    bets: Sequence[Bet],
    choices: Iterable[str],
    max_positions: int,
    disabled: bool = False,
) -> bool:
    """Check if at least one choice can still receive a bet."""
    return not disabled and any(
        can_bet_on_position(bets, choice, max_positions) for choice in choices
    )
