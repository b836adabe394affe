"""
Grid model: per-cell render targets for one maze.

Coordinate convention: (x, y) for the API, [y][x] for handle indexing.
Row 0 is the bottom of the board; rows are created top-down, starting
at ``y = height - 1``, so increasing y renders upward on screen.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Set

from .core.types import Coord, Maze, Tag
from .errors import OutOfBoundsError
from .rendering.surface import RenderSurface


class GridModel:
    """
    Addressable structure of render-target handles mirroring a maze.

    Built once per session with ``GridModel.build``; handles are never
    recreated afterwards. The model keeps its own copy of each cell's tags
    so callers can query state without asking the surface.

    Attributes:
        maze: The maze this grid was built from
        surface: Surface owning the rendered nodes
        cells: Handles indexed ``cells[y][x]``
    """

    def __init__(self, maze: Maze, surface: RenderSurface, cells: List[List[Any]]):
        self.maze = maze
        self.surface = surface
        self.cells = cells
        self._tags: Dict[Coord, Set[Tag]] = {}

    @property
    def width(self) -> int:
        return self.maze.width

    @property
    def height(self) -> int:
        return self.maze.height

    @classmethod
    def build(cls, maze: Maze, surface: RenderSurface) -> GridModel:
        """
        Lay the maze out on the surface and apply its permanent tags.

        Every coordinate is checked before the first node is created, so
        a rejected maze leaves the surface untouched.

        Raises:
            OutOfBoundsError: If the goal or any wall lies outside the grid.
        """
        cls._check_bounds(maze)

        surface.begin_grid(maze.width, maze.height)
        cells: List[List[Any]] = [[None] * maze.width for _ in range(maze.height)]
        for y in range(maze.height - 1, -1, -1):
            for x in range(maze.width):
                cells[y][x] = surface.create_cell(x, y)

        grid = cls(maze, surface, cells)
        grid.set_cell_tag(maze.present_x, maze.present_y, Tag.PRESENT, True)
        for x, y in sorted(maze.walls):
            grid.set_cell_tag(x, y, Tag.WALL, True)
        return grid

    @staticmethod
    def _check_bounds(maze: Maze) -> None:
        if not maze.in_bounds(maze.present_x, maze.present_y):
            raise OutOfBoundsError(
                maze.present_x, maze.present_y, maze.width, maze.height, what="present"
            )
        for x, y in sorted(maze.walls):
            if not maze.in_bounds(x, y):
                raise OutOfBoundsError(x, y, maze.width, maze.height, what="wall")

    # ------------------------------------------------------------------
    # Tag mutation
    # ------------------------------------------------------------------
    def set_cell_tag(self, x: int, y: int, tag: Tag, present: bool) -> None:
        """Add or remove ``tag`` on the cell at (x, y)."""
        self._require_in_bounds(x, y)
        tags = self._tags.setdefault((x, y), set())
        if present:
            tags.add(tag)
        else:
            tags.discard(tag)
        self.surface.set_cell_tag(self.cells[y][x], tag, present)

    def mark_player(self, x: int, y: int) -> None:
        self.set_cell_tag(x, y, Tag.PLAYER, True)

    def unmark_player(self, x: int, y: int) -> None:
        self.set_cell_tag(x, y, Tag.PLAYER, False)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return self.maze.in_bounds(x, y)

    def handle_at(self, x: int, y: int) -> Any:
        self._require_in_bounds(x, y)
        return self.cells[y][x]

    def tags_at(self, x: int, y: int) -> FrozenSet[Tag]:
        self._require_in_bounds(x, y)
        return frozenset(self._tags.get((x, y), ()))

    def cells_with(self, tag: Tag) -> Set[Coord]:
        """Coordinates of every cell currently carrying ``tag``."""
        return {pos for pos, tags in self._tags.items() if tag in tags}

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def __repr__(self) -> str:
        return f"GridModel(width={self.width}, height={self.height}, surface={self.surface!r})"
