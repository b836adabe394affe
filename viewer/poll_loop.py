"""
Poll loop: fetch → diff → apply → reschedule.

The next cycle is scheduled only after the current one has finished
applying, so a slow fetch delays the loop instead of overlapping it.
Failed polls flip the connection indicator to DISCONNECTED and retry
with bounded exponential backoff. A source or surface that raises counts
as a failed poll; it never ends the loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from infra.logger import get_logger

from .core.types import ConnectionState, FetchFailed, PlayerSnapshot
from .differ import SnapshotDiff, diff_snapshots
from .errors import FetchError, OutOfBoundsError
from .grid import GridModel
from .rendering.surface import RenderSurface
from .sources import PlayerSource

logger = get_logger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


class PollState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    APPLYING = "applying"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Delay schedule for the poll loop.

    After a success the loop waits ``interval``. After ``n`` consecutive
    failures it waits ``interval * factor ** n``, capped at ``max_delay``.
    """

    interval: float = 0.2
    max_delay: float = 5.0
    factor: float = 2.0

    def delay_after(self, failures: int) -> float:
        if failures <= 0:
            return self.interval
        return min(self.max_delay, self.interval * self.factor ** failures)


@dataclass
class ViewerSession:
    """
    Everything one viewer session keeps between poll cycles.

    Attributes:
        grid: Grid model built at bootstrap
        surface: Surface the grid renders onto
        previous: Players currently marked on the grid
        connection: Last connection state shown to the user
    """

    grid: GridModel
    surface: RenderSurface
    previous: PlayerSnapshot = field(default_factory=tuple)
    connection: Optional[ConnectionState] = None

    def apply(self, current: PlayerSnapshot) -> SnapshotDiff:
        """
        Bring the grid and label panel in line with ``current``.

        Every previous mark is cleared before any new mark is set. Players
        outside the grid are skipped (their names stay in the label list)
        and are not retained, so they are never unmarked later.
        """
        diff = diff_snapshots(self.previous, current)

        for x, y in diff.to_unmark:
            self.grid.unmark_player(x, y)

        applied = []
        try:
            for player, (x, y) in zip(current, diff.to_mark):
                try:
                    self.grid.mark_player(x, y)
                except OutOfBoundsError as exc:
                    logger.warning("Skipping player '%s': %s", player.name, exc)
                    continue
                applied.append(player)

            self.surface.set_label_list(diff.labels)
            self.surface.flush()
        finally:
            # Whatever got marked must be unmarked next cycle, even if this one broke.
            self.previous = tuple(applied)
        return diff

    def set_connection(self, state: ConnectionState) -> None:
        """Update the indicator, touching the surface only on change."""
        if state is self.connection:
            return
        self.surface.set_connection_state(state)
        self.connection = state


class PollLoop:
    """
    Timer-driven player poller for one session.

    Attributes:
        session: Session whose grid and surface are updated
        source: Player data provider
        backoff: Delay schedule
        state: Current PollState
        failures: Consecutive failed polls
        cycles: Completed cycles (successful or not)
    """

    def __init__(
        self,
        session: ViewerSession,
        source: PlayerSource,
        backoff: Optional[BackoffPolicy] = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.session = session
        self.source = source
        self.backoff = backoff or BackoffPolicy()
        self.state = PollState.IDLE
        self.failures = 0
        self.cycles = 0
        self._sleep = sleep
        self._stop_requested = False

    async def run_cycle(self) -> float:
        """
        Run one fetch → diff → apply step.

        Returns:
            Seconds to wait before the next cycle.
        """
        self.state = PollState.FETCHING
        try:
            result = await self.source.fetch_players()
            if result.ok:
                self.state = PollState.APPLYING
                self.session.apply(result.value)
        except Exception as exc:
            logger.exception("Poll cycle raised %s", type(exc).__name__)
            result = FetchFailed(FetchError(f"{type(exc).__name__}: {exc}"))

        if result.ok:
            if self.failures:
                logger.info("Player feed recovered after %d failed poll(s)", self.failures)
            self.failures = 0
            self.session.set_connection(ConnectionState.CONNECTED)
            delay = self.backoff.interval
        else:
            self.failures += 1
            self.session.set_connection(ConnectionState.DISCONNECTED)
            delay = self.backoff.delay_after(self.failures)
            logger.warning(
                "Player poll failed (%d in a row), retrying in %.2fs: %s",
                self.failures,
                delay,
                result.error,
            )

        self.cycles += 1
        self.state = PollState.SCHEDULED
        return delay

    async def run(self, max_cycles: Optional[int] = None) -> None:
        """
        Poll until stopped.

        Args:
            max_cycles: Stop after this many cycles (None = run for the session lifetime)
        """
        self._stop_requested = False
        if self.session.connection is None:
            self.session.set_connection(ConnectionState.CONNECTING)

        completed = 0
        while not self._stop_requested:
            try:
                delay = await self.run_cycle()
            except Exception:
                # Only reachable when the surface fails while showing the connection state.
                logger.exception("Poll cycle failed outside fetch and apply")
                self.failures += 1
                self.cycles += 1
                delay = self.backoff.delay_after(self.failures)
                self.state = PollState.SCHEDULED
            completed += 1
            if self._stop_requested or (max_cycles is not None and completed >= max_cycles):
                break
            await self._sleep(delay)

        self.state = PollState.STOPPED

    def stop(self) -> None:
        """Stop after the cycle in progress finishes."""
        self._stop_requested = True

    def __repr__(self) -> str:
        return f"PollLoop(state={self.state.name}, cycles={self.cycles}, failures={self.failures})"
