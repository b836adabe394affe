"""
Viewer configuration.

Defaults match the reference maze server (JSON on port 3001, players
polled every 200 ms). Values can be overridden from the environment (a
``.env`` file is honoured) and then from command-line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

SURFACES = ("web", "text", "headless")

_ENV_PREFIX = "VIEWER_"


@dataclass(frozen=True)
class ViewerConfig:
    """
    Settings for one viewer session.

    Attributes:
        base_url: Root URL of the maze server
        maze_path: Maze endpoint path
        players_path: Player endpoint path
        poll_interval: Delay in seconds between a completed render and the next poll
        backoff_max: Upper bound in seconds for the retry delay after failed polls
        request_timeout: Per-request HTTP timeout in seconds
        surface: Which render surface to drive ("web", "text" or "headless")
        port: Port for the browser view when surface is "web"
        open_browser: Open the browser view automatically
    """

    base_url: str = "http://localhost:3001"
    maze_path: str = "maze"
    players_path: str = "players"
    poll_interval: float = 0.2
    backoff_max: float = 5.0
    request_timeout: float = 2.0
    surface: str = "web"
    port: int = 5000
    open_browser: bool = True

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.backoff_max < self.poll_interval:
            raise ValueError("backoff_max must be at least poll_interval")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.surface not in SURFACES:
            raise ValueError(f"surface must be one of {SURFACES}, got '{self.surface}'")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_env_file: bool = True,
    ) -> ViewerConfig:
        """
        Build a config from ``VIEWER_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (tests)
            load_env_file: Load a ``.env`` file into the process environment first
        """
        if load_env_file:
            load_dotenv()
        env = os.environ if environ is None else environ

        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            values[f.name] = _coerce(raw, f.default)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> ViewerConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _coerce(raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw
