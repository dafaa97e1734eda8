"""
Round Engine - State Machine Implementation.

This module implements the authoritative game state for the betting game.
It handles:
- Game state management (phases: betting, resolving, complete)
- Player actions (place bet, complete betting, start new round)
- Delayed round resolution through a pluggable scheduler
- Observer notification on every committed state change

Invalid actions never raise: they are rejected, leave the state untouched
and report the reason through an ``ActionResult``.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import itertools
import logging
import threading

from rpsbet.agents.base import BaseOpponent
from rpsbet.agents.random_opponent import RandomOpponent
from rpsbet.core.choice import ChoiceSet
from rpsbet.core.payout import can_bet_on_position, round_result_text
from rpsbet.core.rules import GameConfig, GamePhase
from rpsbet.core.scheduler import ScheduledCall, Scheduler, ThreadingScheduler
from rpsbet.core.state import GameState
from rpsbet.core import transitions
from rpsbet.core.transitions import EngineInvariantError


logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class ActionType(Enum):
    """Possible player actions."""
    PLACE_BET = "PLACE_BET"
    COMPLETE_BETTING = "COMPLETE_BETTING"
    START_NEW_ROUND = "START_NEW_ROUND"


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0

    def __bool__(self) -> bool:
        return self.success


class RoundEngine:
    """
    Betting round engine implementing a state machine.

    Usage:
        engine = RoundEngine()
        unsubscribe = engine.subscribe(render)

        engine.place_bet("rock")
        engine.place_bet("paper")
        engine.complete_betting()   # reveals the computer choice
        # ... animation_duration later the payout is applied
        engine.start_new_round()

    Listeners are called synchronously, in registration order, with the new
    snapshot. They must not call engine actions: such calls are rejected.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        opponent: Optional[BaseOpponent] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        """
        Initialize a new engine.

        Args:
            config: Game configuration (defaults if None)
            opponent: Picks the computer's choice (uniform random if None)
            scheduler: Runs the delayed resolution (threading timer if None)
        """
        self.config = config or GameConfig()
        self.choices = ChoiceSet(self.config.choices)
        self.opponent = opponent or RandomOpponent()
        self.scheduler = scheduler or ThreadingScheduler()

        self._state = GameState.initial(self.config.initial_balance)
        self._listeners: Dict[int, Listener] = {}
        self._listener_ids = itertools.count()

        self._lock = threading.RLock()
        self._notifying = False
        self._closed = False

        # Pending delayed resolution and the round it belongs to
        self._pending: Optional[ScheduledCall] = None
        self.round_number = 0

    @property
    def phase(self) -> GamePhase:
        """Current phase of the round."""
        return self._state.phase

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def has_pending_resolution(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def get_state(self) -> GameState:
        """
        Get the current snapshot.

        Snapshots are frozen, so the returned value cannot be used to
        modify the engine.
        """
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Args:
            listener: Called with the new GameState after every transition

        Returns:
            Function that removes this registration. Calling it again is a no-op.
        """
        with self._lock:
            listener_id = next(self._listener_ids)
            self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(listener_id, None)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def can_place_bet(self, position: str) -> bool:
        """Check if ``place_bet(position)`` would currently be accepted."""
        if self._closed:
            return False
        reason = transitions.bet_rejection_reason(
            self._state, position, self.config, self.choices
        )
        return reason is None

    def available_positions(self) -> List[str]:
        """Choices the position cap still allows a bet on (ignores balance)."""
        disabled = self.phase != GamePhase.BETTING
        return [
            choice for choice in self.choices
            if can_bet_on_position(
                self._state.bets, choice, self.config.max_positions, disabled
            )
        ]

    def get_result_text(self) -> str:
        """Result text of a completed round, empty otherwise."""
        current_round = self._state.player.current_round
        if self.phase != GamePhase.COMPLETE or not current_round.is_revealed:
            return ""
        return round_result_text(current_round.bets, current_round.computer_choice, self.choices)

    def place_bet(self, position: str) -> ActionResult:
        """
        Stake the configured bet amount on a position.

        Args:
            position: The choice to bet on

        Returns:
            ActionResult indicating success/failure and the amount staked
        """
        with self._lock:
            guard = self._guard()
            if guard is not None:
                return guard

            reason = transitions.bet_rejection_reason(
                self._state, position, self.config, self.choices
            )
            if reason is not None:
                logger.debug(f"Bet on {position!r} rejected: {reason}")
                return ActionResult(False, reason)

            self._commit(transitions.place_bet(
                self._state, position, self.config, self.choices
            ))
            logger.debug(
                f"Bet ${self.config.bet_amount} on {position} "
                f"(balance ${self._state.player.balance})"
            )
            return ActionResult(
                True,
                f"Bet ${self.config.bet_amount} on {position}",
                ActionType.PLACE_BET,
                self.config.bet_amount,
            )

    def complete_betting(self) -> ActionResult:
        """
        Close betting and reveal the computer's choice.

        The payout is applied ``config.animation_duration`` seconds later by
        the scheduler.

        Returns:
            ActionResult; ``amount`` is the total staked in the round
        """
        with self._lock:
            guard = self._guard()
            if guard is not None:
                return guard

            if self.phase != GamePhase.BETTING:
                logger.debug(f"complete_betting rejected during {self.phase.name}")
                return ActionResult(False, f"Cannot complete betting during {self.phase.name}")
            if not self._state.bets:
                logger.debug("complete_betting rejected: no bets placed")
                return ActionResult(False, "No bets placed")

            computer_choice = self.opponent.choose(self.choices)
            revealed = transitions.begin_resolution(
                self._state, computer_choice, self.choices
            )

            # Schedule before committing so a scheduler failure leaves no trace
            round_number = self.round_number + 1
            try:
                pending = self.scheduler.call_later(
                    self.config.animation_duration,
                    lambda: self._resolve_round(round_number),
                )
            except RuntimeError as e:
                logger.error(f"Cannot schedule resolution of round #{round_number}: {e}")
                return ActionResult(False, f"Cannot schedule round resolution: {e}")

            self.round_number = round_number
            self._pending = pending
            self._commit(revealed)

            current_round = self._state.player.current_round
            logger.info(
                f"Round #{round_number}: computer chose {computer_choice}, "
                f"player best {current_round.player_best_choice}, "
                f"winning {current_round.winning_choice}"
            )
            return ActionResult(
                True,
                f"Computer chose {computer_choice}",
                ActionType.COMPLETE_BETTING,
                current_round.total_staked,
            )

    def start_new_round(self) -> ActionResult:
        """
        Clear the round and return to betting.

        Valid in any phase. A resolution still pending is cancelled, so
        stakes of an unresolved round are not paid out.
        """
        with self._lock:
            guard = self._guard()
            if guard is not None:
                return guard

            if self._pending is not None:
                if self.phase == GamePhase.RESOLVING:
                    logger.warning(
                        f"Round #{self.round_number} abandoned before resolution; "
                        f"${self._state.player.current_round.total_staked} forfeited"
                    )
                self._pending.cancel()
                self._pending = None

            self._commit(transitions.start_new_round(self._state))
            return ActionResult(True, "New round started", ActionType.START_NEW_ROUND)

    def close(self) -> None:
        """
        Tear the engine down.

        Cancels a pending resolution and drops all listeners. Every later
        action is rejected and a resolution firing late has no effect.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._listeners.clear()
            logger.info("Round engine closed")

    def _resolve_round(self, round_number: int) -> None:
        """Apply the payout of a revealed round (runs on the scheduler)."""
        with self._lock:
            if self._closed:
                return
            # Stale callback: the round was abandoned or already resolved
            if round_number != self.round_number or self.phase != GamePhase.RESOLVING:
                return

            self._pending = None
            before = self._state.player
            self._commit(transitions.finish_resolution(
                self._state, self.config, self.choices
            ))
            after = self._state.player
            logger.info(
                f"Round #{round_number} resolved: payout ${after.current_round.payout}, "
                f"balance ${before.balance} -> ${after.balance}, "
                f"cumulative wins ${after.cumulative_wins}"
            )

    def _guard(self) -> Optional[ActionResult]:
        """Reject actions on a closed engine or from inside a notification."""
        if self._closed:
            return ActionResult(False, "Engine is closed")
        if self._notifying:
            logger.warning("Engine action called from a state listener; ignored")
            return ActionResult(False, "Cannot act from inside a state notification")
        return None

    def _commit(self, new_state: GameState) -> None:
        """Replace the current snapshot and notify listeners."""
        if new_state is self._state:
            return
        if new_state.player.balance < 0:
            raise EngineInvariantError(
                f"Balance would become negative: {new_state.player.balance}"
            )
        if new_state.player.cumulative_wins < self._state.player.cumulative_wins:
            raise EngineInvariantError("Cumulative wins cannot decrease")

        self._state = new_state
        self._notify_listeners()

    def _notify_listeners(self) -> None:
        """Call every listener with the current snapshot, in registration order."""
        state = self._state
        listeners: List[Tuple[int, Listener]] = sorted(self._listeners.items())
        self._notifying = True
        try:
            for _, listener in listeners:
                try:
                    listener(state)
                except Exception as e:
                    logger.error(f"Error notifying listener {listener!r}: {e}")
        finally:
            self._notifying = False

    def __repr__(self) -> str:
        return (
            f"RoundEngine(phase={self.phase.name}, "
            f"balance={self._state.player.balance}, round={self.round_number})"
        )
