"""Core value types and the wire codec."""

from .types import (
    ConnectionState,
    Coord,
    Fetched,
    FetchFailed,
    FetchResult,
    Maze,
    Player,
    PlayerSnapshot,
    Tag,
)
from .wire import MazePayload, PlayerPayload, decode_maze, decode_players

__all__ = [
    "ConnectionState",
    "Coord",
    "Fetched",
    "FetchFailed",
    "FetchResult",
    "Maze",
    "Player",
    "PlayerSnapshot",
    "Tag",
    "MazePayload",
    "PlayerPayload",
    "decode_maze",
    "decode_players",
]
