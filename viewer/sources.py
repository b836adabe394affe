"""
Data sources for the maze and player endpoints.

Sources are awaited and never raise for expected failures: they return
``Fetched`` or ``FetchFailed`` so callers branch on the outcome instead
of wrapping every call in try/except.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Union

from infra.http import fetch_json, join_url
from infra.logger import get_logger

from .core.types import Fetched, FetchFailed, FetchResult, Maze, Player, PlayerSnapshot
from .core.wire import decode_maze, decode_players
from .errors import FetchError

logger = get_logger(__name__)


class MazeSource(ABC):
    """Provides the maze once at startup."""

    @abstractmethod
    async def fetch_maze(self) -> FetchResult[Maze]:
        """Fetch the maze description."""


class PlayerSource(ABC):
    """Provides a fresh player snapshot on every poll."""

    @abstractmethod
    async def fetch_players(self) -> FetchResult[PlayerSnapshot]:
        """Fetch the current player snapshot."""


class HttpDataSource(MazeSource, PlayerSource):
    """
    Read the maze and player endpoints of a running maze server.

    Blocking HTTP calls run in a worker thread so the event loop keeps
    serving the render surface while a request is in flight.

    Attributes:
        base_url: Server root, e.g. ``http://localhost:3001``
        maze_path: Maze endpoint path relative to ``base_url``
        players_path: Player endpoint path relative to ``base_url``
        timeout: Per-request timeout in seconds, covering the whole
            request. A fetch still running when it expires is abandoned
            to its worker thread and reported as a failure.
    """

    def __init__(
        self,
        base_url: str,
        maze_path: str = "maze",
        players_path: str = "players",
        timeout: float = 2.0,
        fetcher: Callable[[str, float], object] = fetch_json,
    ):
        self.base_url = base_url
        self.maze_path = maze_path
        self.players_path = players_path
        self.timeout = timeout
        self._fetcher = fetcher

    @property
    def maze_url(self) -> str:
        return join_url(self.base_url, self.maze_path)

    @property
    def players_url(self) -> str:
        return join_url(self.base_url, self.players_path)

    async def fetch_maze(self) -> FetchResult[Maze]:
        try:
            data = await self._get(self.maze_url)
            return Fetched(decode_maze(data))
        except FetchError as exc:
            logger.debug("Maze fetch failed: %s", exc)
            return FetchFailed(exc)

    async def fetch_players(self) -> FetchResult[PlayerSnapshot]:
        try:
            data = await self._get(self.players_url)
            return Fetched(decode_players(data))
        except FetchError as exc:
            logger.debug("Players fetch failed: %s", exc)
            return FetchFailed(exc)

    async def _get(self, url: str) -> object:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._fetcher, url, self.timeout),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise FetchError(f"{url} timed out after {self.timeout}s") from exc
        except RuntimeError as exc:
            raise FetchError(str(exc)) from exc

    def __repr__(self) -> str:
        return f"HttpDataSource(base_url='{self.base_url}')"


class StaticDataSource(MazeSource, PlayerSource):
    """
    Serve a fixed maze and a scripted sequence of player snapshots.

    Each poll consumes the next script entry; once the script runs out the
    last snapshot is repeated. A script entry may be a ``FetchError`` to
    simulate a failed poll.
    """

    def __init__(
        self,
        maze: Union[Maze, FetchError],
        snapshots: Optional[Iterable[Union[Iterable[Player], FetchError]]] = None,
    ):
        self.maze = maze
        self._script: List[Union[PlayerSnapshot, FetchError]] = [
            entry if isinstance(entry, FetchError) else tuple(entry)
            for entry in (snapshots or [])
        ]
        self._last: PlayerSnapshot = ()
        self.maze_fetches = 0
        self.player_fetches = 0

    async def fetch_maze(self) -> FetchResult[Maze]:
        self.maze_fetches += 1
        if isinstance(self.maze, FetchError):
            return FetchFailed(self.maze)
        return Fetched(self.maze)

    async def fetch_players(self) -> FetchResult[PlayerSnapshot]:
        self.player_fetches += 1
        entry = self._script.pop(0) if self._script else self._last
        if isinstance(entry, FetchError):
            return FetchFailed(entry)
        self._last = entry
        return Fetched(entry)
