"""
Snapshot differ.

Turns the previous and current player snapshots into the cells to clear,
the cells to mark and the ordered side panel labels. There is no
tracking of players by name: every previous position is cleared and
every current position is marked. Clearing always happens before marking
within one synchronous apply, so the final board matches ``current``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .core.types import Coord, PlayerSnapshot


@dataclass(frozen=True)
class SnapshotDiff:
    """
    Visual delta between two snapshots.

    Attributes:
        to_unmark: Positions from the previous snapshot, in its order
        to_mark: Positions from the current snapshot, in its order
        labels: Player names from the current snapshot, in its order
    """

    to_unmark: Tuple[Coord, ...]
    to_mark: Tuple[Coord, ...]
    labels: Tuple[str, ...]

    @property
    def is_noop(self) -> bool:
        """True when applying the diff cannot change which cells are marked."""
        return set(self.to_unmark) == set(self.to_mark)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "to_unmark": [list(pos) for pos in self.to_unmark],
            "to_mark": [list(pos) for pos in self.to_mark],
            "labels": list(self.labels),
        }


def diff_snapshots(previous: PlayerSnapshot, current: PlayerSnapshot) -> SnapshotDiff:
    """Compute the delta that takes a board showing ``previous`` to ``current``."""
    return SnapshotDiff(
        to_unmark=tuple(player.pos for player in previous),
        to_mark=tuple(player.pos for player in current),
        labels=tuple(player.name for player in current),
    )
