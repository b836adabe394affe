"""
Flask/SocketIO API for streaming the maze view to the browser.

This module is intentionally small: it only handles server concerns
(routes + events). The WebSurface owns the view state and calls
``broadcast`` to push updates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

from flask import Flask, jsonify, send_from_directory
from flask_socketio import SocketIO, emit

from infra.logger import get_logger

logger = get_logger(__name__)


class ViewerAPI:
    """
    Flask application with REST endpoints and WebSocket events.

    ``state_provider`` returns the full view state; it is sent to each
    client on connect so late joiners can draw the board before the
    next delta arrives.
    """

    def __init__(self, state_provider: Callable[[], Dict[str, Any]], port: int = 5000):
        static_dir = Path(__file__).resolve().parent / "static"
        self.app = Flask(
            __name__,
            static_folder=str(static_dir),
            static_url_path="",
        )
        self.socketio = SocketIO(
            self.app,
            cors_allowed_origins="*",
            async_mode="threading",
        )
        self.port = port
        self._state_provider = state_provider

        self._setup_routes(static_dir)
        self._setup_websocket()

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------
    def _setup_routes(self, static_dir: Path) -> None:
        """Define REST API endpoints."""

        @self.app.route("/")
        def index():
            """Serve main HTML page."""
            return send_from_directory(static_dir, "index.html")

        @self.app.route("/api/state")
        def get_state():
            """Full view state, for clients that cannot use WebSockets."""
            return jsonify(self._state_provider())

    # ------------------------------------------------------------------
    # WebSocket handlers
    # ------------------------------------------------------------------
    def _setup_websocket(self) -> None:
        """Define WebSocket handlers."""

        @self.socketio.on("connect")
        def handle_connect():
            """Client connected - send the whole board."""
            emit("layout", self._state_provider())

        @self.socketio.on("disconnect")
        def handle_disconnect(*_args):
            logger.debug("Browser client disconnected")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def broadcast(self, event: str, payload: Dict[str, Any]) -> None:
        """Push an event to all connected clients."""
        self.socketio.emit(event, payload)

    def run(self, host: str = "0.0.0.0") -> None:
        """Start the Flask server (blocking call)."""
        self.socketio.run(
            self.app,
            host=host,
            port=self.port,
            debug=False,
            use_reloader=False,
            allow_unsafe_werkzeug=True,
        )
