# connection_scheduler.py

"""
Progressive reveal order for the minute web.

The schedule is a fixed ordering of every anchor pair. Drawing a growing
prefix of it completes the twelve perimeter edges at evenly spaced points
while the inner edges sweep clockwise between them, so the web fills in
evenly instead of in bursts.
"""

import logging
from itertools import combinations
from typing import NamedTuple, Sequence, Tuple
import numpy as np
import constants

logger = logging.getLogger("constellation_clock")


class Connection(NamedTuple):
    """An unordered anchor pair, stored with i < j."""
    i: int
    j: int

    def is_perimeter(self, count: int = constants.ANCHOR_COUNT) -> bool:
        return self.j - self.i == 1 or (self.i == 0 and self.j == count - 1)


Schedule = Tuple[Connection, ...]


def _normalize_angle(angle: float) -> float:
    """Maps an angle in degrees into [-90, 270)."""
    return (angle + 90.0) % 360.0 - 90.0

def _perimeter_index(connection: Connection, count: int) -> int:
    # (i, i+1) sorts at i; the wraparound pair (0, count-1) sorts last.
    if connection.i == 0 and connection.j == count - 1:
        return count - 1
    return connection.i

def build_schedule(angles: Sequence[float]) -> Schedule:
    """
    Builds the fixed reveal order of all pairs of anchors.

    - Inputs:
        - angles: Layout angle (degrees) of each anchor, index order. The
          interleave pattern assumes ANCHOR_COUNT anchors.
    - Outputs: A tuple of CONNECTION_COUNT connections.
    """
    angles = np.asarray(angles, dtype=float)
    count = len(angles)
    if count != constants.ANCHOR_COUNT:
        raise ValueError(f"expected {constants.ANCHOR_COUNT} anchor angles, got {count}")

    pairs = [Connection(i, j) for i, j in combinations(range(count), 2)]
    perimeter = [c for c in pairs if c.is_perimeter(count)]
    inner = [c for c in pairs if not c.is_perimeter(count)]

    perimeter.sort(key=lambda c: _perimeter_index(c, count))
    # Clockwise sweep by average angle; enumeration order breaks ties.
    inner.sort(key=lambda c: (
        (_normalize_angle(angles[c.i]) + _normalize_angle(angles[c.j])) / 2.0, c.i, c.j
    ))

    schedule = []
    next_inner = 0
    for slot, edge in enumerate(perimeter):
        take = constants.INNER_PER_EVEN_SLOT if slot % 2 == 0 else constants.INNER_PER_ODD_SLOT
        schedule.extend(inner[next_inner:next_inner + take])
        next_inner += take
        schedule.append(edge)
    schedule.extend(inner[next_inner:])

    logger.info(
        f"Connection schedule built: {len(schedule)} connections "
        f"({len(perimeter)} perimeter, {len(inner)} inner)."
    )
    return tuple(schedule)

def revealed_count(minute: int, total: int = constants.CONNECTION_COUNT) -> int:
    """
    Number of connections shown at a minute: floor(minute / 59 * total).

    Integer arithmetic keeps the boundaries exact: minute 0 shows none and
    minute 59 shows all of them.
    """
    if not 0 <= minute <= constants.LAST_MINUTE:
        raise ValueError(f"minute must be in [0, {constants.LAST_MINUTE}], got {minute}")
    return minute * total // constants.LAST_MINUTE

def connections_for_minute(schedule: Schedule, minute: int) -> Schedule:
    """Returns the prefix of the schedule revealed at the given minute."""
    return schedule[:revealed_count(minute, len(schedule))]
