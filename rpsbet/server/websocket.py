"""
WebSocket handling for real-time state updates.

This module provides:
- SessionManager: Owns one round engine per game session
- WebSocket endpoint: Pushes every state change and accepts game actions
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, Any
from dataclasses import dataclass
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from rpsbet.agents import RandomOpponent
from rpsbet.core.game import ActionResult, RoundEngine
from rpsbet.core.rules import GameConfig
from rpsbet.core.scheduler import AsyncioScheduler, Scheduler
from rpsbet.core.state import GameState


logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """A game session and its engine."""
    session_id: str
    engine: RoundEngine

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "state": self.engine.get_state().to_dict(),
            "result_text": self.engine.get_result_text(),
            "available_positions": self.engine.available_positions(),
        }


def action_response(result: ActionResult, state: GameState) -> Dict[str, Any]:
    """Format an action result together with the resulting state."""
    return {
        "success": result.success,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
        "state": state.to_dict(),
    }


class SessionManager:
    """
    Manages game sessions, one round engine each.

    Usage:
        manager = SessionManager()
        session_id = manager.create_session(GameConfig())
        session = manager.get_session(session_id)
        session.engine.place_bet("rock")
        manager.close_session(session_id)
    """

    def __init__(self, scheduler_factory: Optional[Callable[[], Scheduler]] = None):
        self.sessions: Dict[str, GameSession] = {}
        self._session_counter = 0
        self._scheduler_factory = scheduler_factory or AsyncioScheduler

    def create_session(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
    ) -> str:
        """Create a new session and return its id."""
        self._session_counter += 1
        session_id = f"session-{self._session_counter}"

        engine = RoundEngine(
            config=config,
            opponent=RandomOpponent(seed=seed),
            scheduler=self._scheduler_factory(),
        )
        self.sessions[session_id] = GameSession(session_id=session_id, engine=engine)
        logger.info(f"Created {session_id} with balance {engine.config.initial_balance}")

        return session_id

    def get_session(self, session_id: str) -> Optional[GameSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    def close_session(self, session_id: str) -> bool:
        """
        Close a session and tear down its engine.

        Returns:
            True if the session existed
        """
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.engine.close()
        logger.info(f"Closed {session_id}")
        return True

    def close_all(self) -> None:
        for session_id in list(self.sessions):
            self.close_session(session_id)

    def handle_message(self, session: GameSession, message: Any) -> Dict[str, Any]:
        """
        Handle a message from a client.

        Args:
            session: The target session
            message: Decoded JSON; a dict with 'type' and optional data

        Returns:
            Response dict
        """
        if not isinstance(message, dict):
            return {"type": "error", "message": "Message must be a JSON object"}

        engine = session.engine
        msg_type = message.get("type", "")

        if msg_type == "place_bet":
            position = message.get("position")
            if not isinstance(position, str):
                return {"type": "error", "message": "position required"}
            result = engine.place_bet(position)
        elif msg_type == "complete_betting":
            result = engine.complete_betting()
        elif msg_type == "start_new_round":
            result = engine.start_new_round()
        elif msg_type == "get_state":
            return {"type": "state", **engine.get_state().to_dict()}
        else:
            return {"type": "error", "message": f"Unknown message type: {msg_type}"}

        return {"type": "action_result", **action_response(result, engine.get_state())}


# Global session manager instance
session_manager = SessionManager()


async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """
    WebSocket endpoint for one game session.

    Protocol:
    1. Client connects to /ws/{session_id}
    2. Server sends the current state
    3. Client sends actions: {"type": "place_bet", "position": "rock"},
       {"type": "complete_betting"}, {"type": "start_new_round"}
    4. Server pushes {"type": "state", ...} on every state change
    """
    await websocket.accept()

    session = session_manager.get_session(session_id)
    if session is None:
        await websocket.send_json({
            "type": "error",
            "message": f"Session {session_id} not found"
        })
        await websocket.close()
        return

    loop = asyncio.get_running_loop()
    updates: asyncio.Queue = asyncio.Queue()

    # Listeners may run on a scheduler thread, so hand off to the loop
    def on_state(state: GameState) -> None:
        loop.call_soon_threadsafe(updates.put_nowait, state)

    async def push_updates() -> None:
        while True:
            state = await updates.get()
            await websocket.send_json({"type": "state", **state.to_dict()})

    unsubscribe = session.engine.subscribe(on_state)
    pusher = asyncio.create_task(push_updates())
    logger.info(f"Client connected to {session_id}")

    try:
        await websocket.send_json({"type": "state", **session.engine.get_state().to_dict()})

        while True:
            message = await websocket.receive_json()
            response = session_manager.handle_message(session, message)
            await websocket.send_json(response)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from {session_id}")
    except Exception as e:
        logger.error(f"WebSocket error in {session_id}: {e}")
    finally:
        unsubscribe()
        pusher.cancel()
