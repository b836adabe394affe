"""
Core value types for the maze viewer.

This module provides:
- Coord: (x, y) grid coordinate alias
- Tag: visual markers a cell can carry
- Maze: immutable maze description, fetched once per session
- Player / PlayerSnapshot: one poll's worth of player positions
- Fetched / FetchFailed: typed outcomes of an awaited fetch
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Generic, Tuple, TypeVar, Union

from ..errors import FetchError

Coord = Tuple[int, int]

T = TypeVar("T")


class Tag(Enum):
    """Boolean visual marker on a cell. Values double as CSS class names."""

    PRESENT = "present"
    WALL = "wall"
    PLAYER = "player"


class ConnectionState(Enum):
    """Connection indicator shown while polling."""

    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class Maze:
    """
    Immutable grid description.

    Attributes:
        width: Number of columns (x extent)
        height: Number of rows (y extent)
        present_x: Goal cell column
        present_y: Goal cell row
        walls: Wall cell coordinates
    """

    width: int
    height: int
    present_x: int
    present_y: int
    walls: FrozenSet[Coord] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {self.width}x{self.height}")
        # Accept any iterable of pairs and normalise to a frozenset of tuples.
        object.__setattr__(
            self, "walls", frozenset((int(x), int(y)) for x, y in self.walls)
        )

    @property
    def present(self) -> Coord:
        return (self.present_x, self.present_y)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire field names."""
        return {
            "width": self.width,
            "height": self.height,
            "presentX": self.present_x,
            "presentY": self.present_y,
            "walls": [list(wall) for wall in sorted(self.walls)],
        }


@dataclass(frozen=True)
class Player:
    """A named player at a grid position."""

    name: str
    x: int
    y: int

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "x": self.x, "y": self.y}


PlayerSnapshot = Tuple[Player, ...]


@dataclass(frozen=True)
class Fetched(Generic[T]):
    """Successful fetch outcome."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailed:
    """Failed fetch outcome carrying the error that caused it."""

    error: FetchError

    @property
    def ok(self) -> bool:
        return False


FetchResult = Union[Fetched[T], FetchFailed]
