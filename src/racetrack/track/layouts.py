"""Example and synthetic track layouts built from segment instructions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from racetrack.track.config import TrackConfig
from racetrack.track.geometry import build_track
from racetrack.track.models import RaceTrack
from racetrack.track.segments import Arc, SegmentInstruction, Straight, parse_instructions
from racetrack.utils.exceptions import TrackDataError

DEFAULT_TRACK_WIDTH = 6.0
DEFAULT_STRAIGHT_LENGTH = 100.0
DEFAULT_CIRCUIT_RADIUS = 20.0

_TRACK_01 = (
    ("s", 14),
    ("c", (15, -90)),
    ("s", 5),
    ("c", (4, 90)),
    ("c", (4, -90)),
    ("s", 5),
    ("c", (3.5, -90)),
    ("s", 16),
    ("c", (3.5, -120)),
    ("s", 10),
    ("c", (10, 120)),
    ("s", 10),
    ("c", (5, 90)),
    ("s", 5),
    ("c", (5, 150)),
    ("s", 5),
    ("c", (3.2, -180)),
    ("s", 12),
    ("c", (10, -150)),
    ("s", 12.3),
    ("c", (12, -90)),
)

_TRACK_02 = (
    ("s", 14),
    ("c", (15, -90)),
    ("s", 5),
    ("c", (4, 90)),
    ("c", (4, -90)),
    ("s", 5),
    ("c", (3.5, -180)),
    ("c", (3.5, 180)),
    ("c", (3.5, -90)),
    ("s", 2),
    ("c", (3.5, -120)),
    ("s", 10),
    ("c", (10, 120)),
    ("s", 10),
    ("c", (5, 90)),
    ("s", 5),
    ("c", (5, 150)),
    ("s", 5),
    ("c", (3.2, -180)),
    ("s", 12),
    ("c", (10, -150)),
    ("s", 12.3),
    ("c", (12, -90)),
)


@dataclass(frozen=True)
class TrackLayout:
    """Instruction sequence plus the global parameters needed to build it.

    Args:
        instructions: Ordered straight and arc instructions.
        start_position: Start point ``(x, y)`` [m].
        start_heading: Start heading [rad].
        width: Track width [m].
    """

    instructions: tuple[SegmentInstruction, ...]
    start_position: tuple[float, float] = (0.0, 0.0)
    start_heading: float = 0.0
    width: float = DEFAULT_TRACK_WIDTH

    def build(self, config: TrackConfig | None = None) -> RaceTrack:
        """Generate the race track described by this layout.

        Args:
            config: Optional track configuration.

        Returns:
            Validated race track.
        """
        return build_track(
            self.instructions,
            np.asarray(self.start_position, dtype=np.float64),
            self.start_heading,
            self.width,
            config=config,
        )


def track_01_layout() -> TrackLayout:
    """Closed-loop example circuit with hairpins and an S-bend.

    Returns:
        Layout starting at the origin, heading east, 6 m wide.
    """
    return TrackLayout(instructions=parse_instructions(_TRACK_01))


def track_02_layout() -> TrackLayout:
    """Variant of :func:`track_01_layout` with a double hairpin chicane.

    Returns:
        Layout starting at the origin, heading east, 6 m wide.
    """
    return TrackLayout(instructions=parse_instructions(_TRACK_02))


def build_straight_layout(
    length: float = DEFAULT_STRAIGHT_LENGTH,
    width: float = DEFAULT_TRACK_WIDTH,
) -> TrackLayout:
    """Single straight starting at the origin heading east.

    Args:
        length: Straight length [m].
        width: Track width [m].

    Returns:
        One-segment straight layout.
    """
    return TrackLayout(instructions=(Straight(length=length),), width=width)


def build_circuit_layout(
    radius: float = DEFAULT_CIRCUIT_RADIUS,
    width: float = DEFAULT_TRACK_WIDTH,
    clockwise: bool = False,
) -> TrackLayout:
    """Full circle made of four quarter arcs.

    Args:
        radius: Centerline radius [m].
        width: Track width [m].
        clockwise: Whether to turn right instead of left.

    Returns:
        Closed circular layout.
    """
    angle = -90.0 if clockwise else 90.0
    return TrackLayout(
        instructions=tuple(Arc(radius=radius, angle=angle) for _ in range(4)),
        width=width,
    )


EXAMPLE_LAYOUTS: dict[str, Callable[[], TrackLayout]] = {
    "track_01": track_01_layout,
    "track_02": track_02_layout,
}


def load_example_layout(name: str) -> TrackLayout:
    """Look up a bundled example layout by name.

    Args:
        name: Layout name, one of ``EXAMPLE_LAYOUTS``.

    Returns:
        Requested layout.

    Raises:
        racetrack.utils.exceptions.TrackDataError: If ``name`` is unknown.
    """
    try:
        factory = EXAMPLE_LAYOUTS[name]
    except KeyError as exc:
        msg = f"Unknown example layout {name!r}; available: {sorted(EXAMPLE_LAYOUTS)}"
        raise TrackDataError(msg) from exc
    return factory()
