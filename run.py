#!/usr/bin/env python3
"""
RPS Bet - Server Startup Script

Serves the rock-paper-scissors betting API with uvicorn: HTTP routes to
create and close sessions, place bets, complete betting and start new
rounds, plus a WebSocket at /ws/{session_id} that pushes every state
change of the session's round engine.

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]
"""

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="RPS Bet HTTP/WebSocket server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    uvicorn.run(
        "rpsbet.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
