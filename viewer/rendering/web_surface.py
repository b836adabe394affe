"""
Browser render surface.

Keeps a shadow copy of the board and streams it to the browser through
ViewerAPI. Cell and label changes are buffered and sent as one ``delta``
message per flush, so the page never shows a half-applied poll cycle.
"""

from __future__ import annotations

import copy
import threading
import time
import webbrowser
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from infra.logger import get_logger

from ..core.types import ConnectionState, Coord, Tag
from .api import ViewerAPI
from .surface import RenderSurface

logger = get_logger(__name__)

CellChange = Tuple[int, int, str, bool]


class WebSurface(RenderSurface):
    """Manage the browser view state and coordinate the API server."""

    def __init__(self, port: int = 5000, live: bool = True, auto_open: bool = True):
        self.port = port
        self.live = live

        self._lock = threading.Lock()
        self.width = 0
        self.height = 0
        self._cells: Dict[Coord, Set[Tag]] = {}
        self._labels: Optional[List[str]] = None
        self._status: Optional[str] = None
        self._connection: Optional[ConnectionState] = None

        self._pending_cells: List[CellChange] = []
        self._pending_labels: Optional[List[str]] = None
        self._layout_dirty = False
        # Board as of the last flush; this is what clients joining mid-cycle see.
        self._committed: Dict[str, Any] = self._snapshot_locked()

        self.api = ViewerAPI(self.snapshot, port=port)
        self._server_thread: Optional[threading.Thread] = None

        if live:
            self._start_server(auto_open=auto_open)

    # ------------------------------------------------------------------
    # RenderSurface
    # ------------------------------------------------------------------
    def show_status(self, text: Optional[str]) -> None:
        with self._lock:
            self._status = text
            self._committed["status"] = text
        self.api.broadcast("status", {"text": text})

    def begin_grid(self, width: int, height: int) -> None:
        with self._lock:
            self.width = width
            self.height = height
            self._cells = {}
            self._pending_cells = []
            self._layout_dirty = True

    def create_cell(self, x: int, y: int) -> Coord:
        with self._lock:
            self._cells[(x, y)] = set()
        return (x, y)

    def set_cell_tag(self, handle: Coord, tag: Tag, present: bool) -> None:
        x, y = handle
        with self._lock:
            tags = self._cells[handle]
            if present:
                tags.add(tag)
            else:
                tags.discard(tag)
            self._pending_cells.append((x, y, tag.value, present))

    def create_label_panel(self) -> None:
        with self._lock:
            self._labels = []
            self._layout_dirty = True

    def set_label_list(self, names: Sequence[str]) -> None:
        with self._lock:
            self._labels = list(names)
            self._pending_labels = list(names)

    def set_connection_state(self, state: ConnectionState) -> None:
        with self._lock:
            self._connection = state
            self._committed["connection"] = state.value
        self.api.broadcast("connection", {"state": state.value})

    def flush(self) -> None:
        """Send buffered changes: the full board after a rebuild, otherwise a delta."""
        with self._lock:
            if self._layout_dirty:
                event, payload = "layout", self._snapshot_locked()
            elif self._pending_cells or self._pending_labels is not None:
                event, payload = "delta", {
                    "cells": [list(change) for change in self._pending_cells],
                    "labels": self._pending_labels,
                }
            else:
                event = None
            self._pending_cells = []
            self._pending_labels = None
            self._layout_dirty = False
            self._committed = self._snapshot_locked()
        if event is not None:
            self.api.broadcast(event, payload)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """Full JSON-friendly view state as of the last flush."""
        with self._lock:
            return copy.deepcopy(self._committed)

    def _snapshot_locked(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "cells": [
                [x, y, sorted(tag.value for tag in tags)]
                for (x, y), tags in sorted(self._cells.items())
                if tags
            ],
            "labels": list(self._labels) if self._labels is not None else None,
            "status": self._status,
            "connection": self._connection.value if self._connection else None,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _start_server(self, auto_open: bool = True) -> None:
        """Start the API server in a background daemon thread."""
        if self._is_server_running():
            return

        self._server_thread = threading.Thread(target=self.api.run, daemon=True)
        self._server_thread.start()
        logger.info("Browser view at http://localhost:%d", self.port)

        if auto_open:
            # Small delay to give the server time to start before opening.
            time.sleep(1.0)
            self._open_browser()

    def _open_browser(self) -> None:
        """Open the browser to the viewer UI."""
        webbrowser.open(f"http://localhost:{self.port}")

    def _is_server_running(self) -> bool:
        """Check if the server thread is active."""
        return self._server_thread is not None and self._server_thread.is_alive()
