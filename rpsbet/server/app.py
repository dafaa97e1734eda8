"""
FastAPI Application Entry Point for RPS Bet.

This module creates and configures the FastAPI application with:
- HTTP routes for session management and game actions
- WebSocket endpoint for real-time state updates
- CORS middleware for development
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rpsbet import __version__
from rpsbet.server.routes import router
from rpsbet.server.websocket import session_manager, websocket_endpoint

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("RPS Bet server starting up...")
    yield
    session_manager.close_all()
    logger.info("RPS Bet server shutting down...")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="RPS Bet",
        description="Rock-paper-scissors betting engine with WebSocket API",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.websocket("/ws/{session_id}")(websocket_endpoint)

    return app


# Create the application instance
app = create_app()
