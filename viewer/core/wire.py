"""
Wire models for the maze and player endpoints.

The server speaks camelCase JSON; these pydantic models validate the
payload shape and convert it into the frozen core types. Anything that
fails validation is reported as a ``FetchError`` because, from the
viewer's point of view, bad data is a transport failure. Scalars are
strict: booleans, floats and numeric strings are not coordinates.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from ..errors import FetchError
from .types import Maze, Player, PlayerSnapshot


class MazePayload(BaseModel):
    """``GET /maze`` response body."""

    model_config = ConfigDict(populate_by_name=True)

    width: StrictInt = Field(gt=0, description="Number of columns.")
    height: StrictInt = Field(gt=0, description="Number of rows.")
    present_x: StrictInt = Field(alias="presentX", description="Goal cell column.")
    present_y: StrictInt = Field(alias="presentY", description="Goal cell row.")
    walls: List[Tuple[StrictInt, StrictInt]] = Field(
        default_factory=list,
        description="Wall cells as [x, y] pairs.",
    )

    def to_maze(self) -> Maze:
        return Maze(
            width=self.width,
            height=self.height,
            present_x=self.present_x,
            present_y=self.present_y,
            walls=frozenset(self.walls),
        )

    @classmethod
    def from_maze(cls, maze: Maze) -> "MazePayload":
        return cls(
            width=maze.width,
            height=maze.height,
            present_x=maze.present_x,
            present_y=maze.present_y,
            walls=sorted(maze.walls),
        )


class PlayerPayload(BaseModel):
    """One entry of the ``GET /players`` response body."""

    name: StrictStr
    x: StrictInt
    y: StrictInt

    def to_player(self) -> Player:
        return Player(name=self.name, x=self.x, y=self.y)


_players_adapter = TypeAdapter(List[PlayerPayload])


def decode_maze(data: Any) -> Maze:
    """
    Validate a decoded maze payload.

    Coordinates are not bounds-checked here; the grid model does that
    when it lays the maze out.

    Raises:
        FetchError: If the payload does not match the maze schema.
    """
    try:
        return MazePayload.model_validate(data).to_maze()
    except ValidationError as exc:
        raise FetchError(f"Invalid maze payload: {exc.error_count()} error(s)\n{exc}") from exc


def decode_players(data: Any) -> PlayerSnapshot:
    """
    Validate a decoded players payload, preserving server order.

    Raises:
        FetchError: If the payload does not match the players schema.
    """
    try:
        payloads = _players_adapter.validate_python(data)
    except ValidationError as exc:
        raise FetchError(f"Invalid players payload: {exc.error_count()} error(s)\n{exc}") from exc
    return tuple(p.to_player() for p in payloads)
