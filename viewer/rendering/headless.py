"""In-memory render surface used by tests and offline runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.types import ConnectionState, Coord, Tag
from .surface import RenderSurface


@dataclass
class HeadlessCell:
    """Stand-in for a rendered cell node."""

    x: int
    y: int
    tags: Set[Tag] = field(default_factory=set)


class HeadlessSurface(RenderSurface):
    """
    Record every surface call in plain Python structures.

    Attributes:
        cells: Handles keyed by (x, y)
        creation_order: (x, y) of each created cell, in insertion order
        labels: Current side panel contents (None until the panel exists)
        status: Current status line
        status_history: Every status value shown, oldest first
        connection_history: Every connection state shown, oldest first
        flush_count: Number of flush() calls
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.cells: Dict[Coord, HeadlessCell] = {}
        self.creation_order: List[Coord] = []
        self.labels: Optional[List[str]] = None
        self.status: Optional[str] = None
        self.status_history: List[Optional[str]] = []
        self.connection_history: List[ConnectionState] = []
        self.flush_count = 0
        self.tag_calls: List[Tuple[Coord, Tag, bool]] = []

    def show_status(self, text: Optional[str]) -> None:
        self.status = text
        self.status_history.append(text)

    def begin_grid(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def create_cell(self, x: int, y: int) -> HeadlessCell:
        cell = HeadlessCell(x, y)
        self.cells[(x, y)] = cell
        self.creation_order.append((x, y))
        return cell

    def set_cell_tag(self, handle: HeadlessCell, tag: Tag, present: bool) -> None:
        self.tag_calls.append(((handle.x, handle.y), tag, present))
        if present:
            handle.tags.add(tag)
        else:
            handle.tags.discard(tag)

    def create_label_panel(self) -> None:
        self.labels = []

    def set_label_list(self, names: Sequence[str]) -> None:
        if self.labels is None:
            raise RuntimeError("Label panel has not been created")
        self.labels = list(names)

    def set_connection_state(self, state: ConnectionState) -> None:
        self.connection_history.append(state)

    def flush(self) -> None:
        self.flush_count += 1

    # ------------------------------------------------------------------
    # Inspection helpers
    # ------------------------------------------------------------------
    @property
    def connection(self) -> Optional[ConnectionState]:
        return self.connection_history[-1] if self.connection_history else None

    def tagged(self, tag: Tag) -> Set[Coord]:
        """Coordinates of every cell currently carrying ``tag``."""
        return {pos for pos, cell in self.cells.items() if tag in cell.tags}
