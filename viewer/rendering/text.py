"""Terminal render surface: redraws the board as text after each flush."""

from __future__ import annotations

import sys
from typing import Dict, List, Optional, Sequence, Set, TextIO

from ..core.types import ConnectionState, Coord, Tag
from .surface import RenderSurface

# Two characters per cell keeps the board roughly square in a terminal.
GLYPHS = {
    Tag.PLAYER: "@@",
    Tag.WALL: "##",
    Tag.PRESENT: "<>",
}
EMPTY = "  "
# Earlier entries win when a cell carries several tags.
GLYPH_PRIORITY = (Tag.PLAYER, Tag.WALL, Tag.PRESENT)


def render_board(width: int, height: int, cells: Dict[Coord, Set[Tag]]) -> str:
    """Render tagged cells as text, highest y on the first line."""
    lines: List[str] = []
    for y in range(height - 1, -1, -1):
        row = []
        for x in range(width):
            tags = cells.get((x, y), ())
            glyph = next((GLYPHS[t] for t in GLYPH_PRIORITY if t in tags), EMPTY)
            row.append(glyph)
        lines.append("|" + "".join(row) + "|")
    border = "+" + "-" * (2 * width) + "+"
    return "\n".join([border, *lines, border])


class TextSurface(RenderSurface):
    """Write the board, player list and connection state to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None, clear_screen: bool = False):
        self.stream = stream or sys.stdout
        self.clear_screen = clear_screen
        self.width = 0
        self.height = 0
        self.cells: Dict[Coord, Set[Tag]] = {}
        self.labels: Optional[List[str]] = None
        self.connection: Optional[ConnectionState] = None
        self._last_frame: Optional[str] = None

    def show_status(self, text: Optional[str]) -> None:
        if text:
            self._write(text)

    def begin_grid(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells = {}

    def create_cell(self, x: int, y: int) -> Coord:
        self.cells[(x, y)] = set()
        return (x, y)

    def set_cell_tag(self, handle: Coord, tag: Tag, present: bool) -> None:
        tags = self.cells[handle]
        if present:
            tags.add(tag)
        else:
            tags.discard(tag)

    def create_label_panel(self) -> None:
        self.labels = []

    def set_label_list(self, names: Sequence[str]) -> None:
        self.labels = list(names)

    def set_connection_state(self, state: ConnectionState) -> None:
        self.connection = state
        if state is ConnectionState.DISCONNECTED:
            self._write("Disconnected from maze server, retrying...")
        elif state is ConnectionState.CONNECTED:
            self._write("Connected")

    def flush(self) -> None:
        """Redraw, unless the frame is identical to the last one written."""
        if not self.width:
            return
        parts = [render_board(self.width, self.height, self.cells)]
        if self.labels is not None:
            parts.append("Players:")
            parts.extend(f"  {name}" for name in self.labels)
        frame = "\n".join(parts)
        if frame == self._last_frame:
            return
        self._last_frame = frame
        if self.clear_screen:
            frame = "\033[H\033[2J" + frame
        self._write(frame)

    def _write(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()
