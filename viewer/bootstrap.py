"""
Bootstrap sequencer: loading state → maze → grid → poll loop.

A maze that cannot be fetched, or that references cells outside its own
extent, ends the session with a visible error message. There is no retry
at this stage; the process itself keeps running.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from infra.logger import get_logger

from .config import ViewerConfig
from .errors import OutOfBoundsError, ViewerError
from .grid import GridModel
from .poll_loop import BackoffPolicy, PollLoop, PollState, Sleeper, ViewerSession
from .rendering.surface import RenderSurface
from .sources import MazeSource, PlayerSource

logger = get_logger(__name__)

LOADING_TEXT = "Loading..."
ERROR_TEXT = "Error loading maze data"


class BootstrapSequencer:
    """
    One-time startup for a viewer session.

    Attributes:
        maze_source: Maze data provider
        player_source: Player data provider handed to the poll loop
        surface: Surface to render onto
        config: Session settings (poll interval, backoff cap)
        loop: Poll loop, set once bootstrap succeeds
        error: Error that stopped bootstrap, if any
    """

    def __init__(
        self,
        maze_source: MazeSource,
        player_source: PlayerSource,
        surface: RenderSurface,
        config: Optional[ViewerConfig] = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.maze_source = maze_source
        self.player_source = player_source
        self.surface = surface
        self.config = config or ViewerConfig()
        self.loop: Optional[PollLoop] = None
        self.error: Optional[ViewerError] = None
        self._sleep = sleep

    @property
    def state(self) -> PollState:
        if self.error is not None:
            return PollState.STOPPED
        if self.loop is None:
            return PollState.IDLE
        return self.loop.state

    async def start(self) -> Optional[PollLoop]:
        """
        Show the loading state, fetch the maze and build the grid.

        Returns:
            A ready (not yet running) PollLoop, or None if bootstrap failed.
        """
        if self.loop is not None or self.error is not None:
            raise RuntimeError("Bootstrap already ran for this session")

        self.surface.show_status(LOADING_TEXT)
        logger.info("Fetching maze from %r", self.maze_source)

        result = await self.maze_source.fetch_maze()
        if not result.ok:
            return self._fail(result.error)

        maze = result.value
        try:
            grid = GridModel.build(maze, self.surface)
        except OutOfBoundsError as exc:
            return self._fail(exc)

        # The status line is only cleared once the grid exists, so a rejected
        # maze leaves the error in place of the placeholder.
        self.surface.show_status(None)
        self.surface.create_label_panel()
        self.surface.flush()
        logger.info(
            "Maze ready: %dx%d, %d wall(s), present at %s",
            maze.width,
            maze.height,
            len(maze.walls),
            maze.present,
        )

        session = ViewerSession(grid=grid, surface=self.surface)
        backoff = BackoffPolicy(
            interval=self.config.poll_interval,
            max_delay=self.config.backoff_max,
        )
        self.loop = PollLoop(session, self.player_source, backoff=backoff, sleep=self._sleep)
        return self.loop

    async def run(self, max_cycles: Optional[int] = None) -> Optional[PollLoop]:
        """Bootstrap, then poll until stopped. Returns the loop (None on failure)."""
        loop = await self.start()
        if loop is not None:
            await loop.run(max_cycles=max_cycles)
        return loop

    def _fail(self, error: ViewerError) -> None:
        self.error = error
        logger.error("Could not load maze: %s", error)
        self.surface.show_status(ERROR_TEXT)
        self.surface.flush()
        return None
