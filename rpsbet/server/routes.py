"""
HTTP API Routes for RPS Bet.

These routes create sessions and run game actions. State changes are also
pushed to WebSocket clients of the same session.
"""

from typing import Dict, Any
from fastapi import APIRouter, HTTPException

from rpsbet.core.rules import GameConfig
from rpsbet.server.schemas import (
    CreateSessionRequest, BetRequest, SessionSchema, ActionResultSchema,
    ConfigSchema,
)
from rpsbet.server.websocket import GameSession, action_response, session_manager

router = APIRouter()


def get_session(session_id: str) -> GameSession:
    """Get a session or fail with 404."""
    session = session_manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


@router.get("/config/defaults", response_model=ConfigSchema)
async def get_default_config() -> Dict[str, Any]:
    """Get the default game configuration."""
    return GameConfig().to_dict()


@router.post("/sessions", response_model=SessionSchema)
async def create_session(req: CreateSessionRequest) -> Dict[str, Any]:
    """
    Create a new game session.

    The request fields override the default configuration.
    """
    try:
        config = GameConfig(
            initial_balance=req.initial_balance,
            bet_amount=req.bet_amount,
            max_positions=req.max_positions,
            single_bet_multiplier=req.single_bet_multiplier,
            double_bet_multiplier=req.double_bet_multiplier,
            animation_duration=req.animation_duration,
            choices=tuple(req.choices),
            track_gross_winnings=req.track_gross_winnings,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session_id = session_manager.create_session(config, seed=req.seed)
    return get_session(session_id).to_dict()


@router.get("/sessions/{session_id}", response_model=SessionSchema)
async def get_session_state(session_id: str) -> Dict[str, Any]:
    """Get the current state of a session."""
    return get_session(session_id).to_dict()


@router.post("/sessions/{session_id}/bets", response_model=ActionResultSchema)
async def place_bet(session_id: str, req: BetRequest) -> Dict[str, Any]:
    """
    Place a bet on a position.

    A rejected bet is not an HTTP error: the response has success=false
    and the unchanged state.
    """
    engine = get_session(session_id).engine
    result = engine.place_bet(req.position)
    return action_response(result, engine.get_state())


@router.post("/sessions/{session_id}/complete", response_model=ActionResultSchema)
async def complete_betting(session_id: str) -> Dict[str, Any]:
    """Close betting and reveal the computer's choice."""
    engine = get_session(session_id).engine
    result = engine.complete_betting()
    return action_response(result, engine.get_state())


@router.post("/sessions/{session_id}/new_round", response_model=ActionResultSchema)
async def start_new_round(session_id: str) -> Dict[str, Any]:
    """Clear the round and return to betting."""
    engine = get_session(session_id).engine
    result = engine.start_new_round()
    return action_response(result, engine.get_state())


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str) -> Dict[str, Any]:
    """Close a session and tear down its engine."""
    if not session_manager.close_session(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return {"success": True, "message": f"Session {session_id} closed"}
