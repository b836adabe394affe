"""
Reindeer Maze Viewer - live view of players moving through a maze.

This package fetches a maze once, then polls the player feed and keeps
a rendered board in sync with it.

Quick Start:
    import asyncio
    from viewer import BootstrapSequencer, HttpDataSource, ViewerConfig
    from viewer.rendering import TextSurface

    config = ViewerConfig(base_url="http://localhost:3001")
    source = HttpDataSource(config.base_url)
    boot = BootstrapSequencer(source, source, TextSurface(), config)
    asyncio.run(boot.run())
"""

__version__ = "1.0.0"

from .bootstrap import ERROR_TEXT, LOADING_TEXT, BootstrapSequencer
from .config import ViewerConfig
from .core import ConnectionState, Fetched, FetchFailed, Maze, Player, Tag
from .differ import SnapshotDiff, diff_snapshots
from .errors import FetchError, OutOfBoundsError, ViewerError
from .grid import GridModel
from .poll_loop import BackoffPolicy, PollLoop, PollState, ViewerSession
from .sources import HttpDataSource, MazeSource, PlayerSource, StaticDataSource

__all__ = [
    # Startup
    "BootstrapSequencer",
    "LOADING_TEXT",
    "ERROR_TEXT",
    "ViewerConfig",

    # Engine
    "GridModel",
    "SnapshotDiff",
    "diff_snapshots",
    "PollLoop",
    "PollState",
    "BackoffPolicy",
    "ViewerSession",

    # Data
    "Maze",
    "Player",
    "Tag",
    "ConnectionState",
    "Fetched",
    "FetchFailed",
    "MazeSource",
    "PlayerSource",
    "HttpDataSource",
    "StaticDataSource",

    # Errors
    "ViewerError",
    "FetchError",
    "OutOfBoundsError",
]
