"""
Render surface interface for the maze viewer.

The grid model, poll loop and bootstrap sequencer only talk to the
surface through this interface, so the same engine can drive a browser
page, a terminal board or an in-memory test double.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..core.types import ConnectionState, Tag


class RenderSurface(ABC):
    """
    Abstract base class for all render surfaces.

    Lifecycle:
    1. show_status("Loading...") while the maze is fetched
    2. begin_grid() then create_cell() once per cell, top row first
    3. create_label_panel() once the grid exists
    4. per poll cycle: set_cell_tag()/set_label_list() calls, then flush()

    Cell handles returned by create_cell() are opaque to callers and are
    passed back unchanged to set_cell_tag().
    """

    @abstractmethod
    def show_status(self, text: Optional[str]) -> None:
        """Show a status line (loading/error). ``None`` clears it."""

    @abstractmethod
    def begin_grid(self, width: int, height: int) -> None:
        """Prepare an empty grid of the given extent."""

    @abstractmethod
    def create_cell(self, x: int, y: int) -> Any:
        """Insert one cell node and return its handle."""

    @abstractmethod
    def set_cell_tag(self, handle: Any, tag: Tag, present: bool) -> None:
        """Add or remove a tag on a previously created cell."""

    @abstractmethod
    def create_label_panel(self) -> None:
        """Create the (empty) side panel listing player names."""

    @abstractmethod
    def set_label_list(self, names: Sequence[str]) -> None:
        """Replace the side panel contents, preserving order."""

    @abstractmethod
    def set_connection_state(self, state: ConnectionState) -> None:
        """Update the connection indicator."""

    def flush(self) -> None:
        """Publish everything changed since the last flush. Optional hook."""
        return

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
