"""
RPS Bet Server - FastAPI + WebSocket Server Layer
"""

from rpsbet.server.app import app, create_app

__all__ = ["app", "create_app"]
