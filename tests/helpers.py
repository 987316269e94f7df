"""Shared test helpers."""

from __future__ import annotations

import numpy as np

from racetrack.track import RaceTrack, build_track

STRAIGHT_WORKED_EXAMPLE_LENGTH = 10.0
STRAIGHT_WORKED_EXAMPLE_WIDTH = 4.0


def straight_worked_example_track() -> RaceTrack:
    """Create the 10 m straight, 4 m wide track starting at the origin.

    Returns:
        Straight race track heading east.
    """
    return build_track(
        [("s", STRAIGHT_WORKED_EXAMPLE_LENGTH)],
        start_position=np.zeros(2),
        start_heading=0.0,
        width=STRAIGHT_WORKED_EXAMPLE_WIDTH,
    )


def segment_boundaries(segment_index: np.ndarray) -> list[int]:
    """Find sample indices where a new segment begins.

    Args:
        segment_index: Per-sample owning instruction index.

    Returns:
        Indices ``i`` such that sample ``i`` starts a different segment than
        sample ``i - 1``.
    """
    return [int(i) for i in np.flatnonzero(np.diff(segment_index)) + 1]
