"""Centerline and arc-length construction for racetracks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from racetrack.track.config import TrackConfig
from racetrack.track.generator import generate_boundary_samples
from racetrack.track.models import BoundarySamples, RaceTrack
from racetrack.track.segments import parse_instructions
from racetrack.track.spatial import build_spatial_index
from racetrack.utils.constants import DEFAULT_ARC_LENGTH_BIAS
from racetrack.utils.exceptions import TrackDataError

FloatArray = npt.NDArray[np.float64]

logger = logging.getLogger(__name__)


def centerline_from_boundaries(left: FloatArray, right: FloatArray) -> FloatArray:
    """Compute centerline points as the midpoint of both edges.

    Args:
        left: Left-edge points, shape ``(L, 2)`` [m].
        right: Right-edge points, shape ``(L, 2)`` [m].

    Returns:
        Centerline points, shape ``(L, 2)`` [m].
    """
    return np.asarray(0.5 * (left + right), dtype=np.float64)


def cumulative_arc_length(
    points: FloatArray,
    bias: float = DEFAULT_ARC_LENGTH_BIAS,
) -> FloatArray:
    """Compute a strictly increasing cumulative arc length along a polyline.

    Each step is the Euclidean distance between consecutive points scaled by
    ``1 + bias`` and floored at ``bias``, so repeated points still advance the
    parametrization.

    Args:
        points: Polyline points, shape ``(L, 2)`` [m].
        bias: Relative step bias and minimum step [m].

    Returns:
        Cumulative arc-length samples starting at zero [m].
    """
    ds = np.hypot(np.diff(points[:, 0]), np.diff(points[:, 1]))
    ds = np.maximum(ds * (1.0 + bias), bias)
    s = np.zeros(points.shape[0], dtype=np.float64)
    s[1:] = np.cumsum(ds)
    return s


def build_race_track(
    samples: BoundarySamples,
    width: float,
    config: TrackConfig | None = None,
) -> RaceTrack:
    """Build a complete ``RaceTrack`` from generated boundary samples.

    Args:
        samples: Index-aligned left/right/heading samples.
        width: Track width [m].
        config: Optional track configuration.

    Returns:
        Validated race track in the arc-length domain.

    Raises:
        racetrack.utils.exceptions.TrackDataError: If the samples are
            inconsistent or the track has no length.
        racetrack.utils.exceptions.ConfigurationError: If the configuration is
            invalid.
    """
    config = config or TrackConfig()
    config.validate()
    samples.validate()

    if samples.size < 2:
        msg = f"Track needs at least 2 samples to have a length, got {samples.size}"
        raise TrackDataError(msg)

    center = centerline_from_boundaries(samples.left, samples.right)
    arc_length = cumulative_arc_length(center, bias=config.discretization.arc_length_bias)
    if not arc_length[-1] > 0.0:
        msg = "Track length must be positive"
        raise TrackDataError(msg)

    track = RaceTrack(
        left=np.array(samples.left, dtype=np.float64),
        right=np.array(samples.right, dtype=np.float64),
        center=center,
        heading=np.array(samples.heading, dtype=np.float64),
        arc_length=arc_length,
        segment_index=np.array(samples.segment_index, dtype=np.int_),
        width=float(width),
        spatial_index=build_spatial_index(center, kind=config.lookup.spatial_index),
    )
    track.validate()
    logger.debug("Built track with %d samples, length %.3f m", track.size, track.length)
    return track


def build_track(
    instructions: Sequence[Any],
    start_position: npt.ArrayLike,
    start_heading: float,
    width: float,
    config: TrackConfig | None = None,
) -> RaceTrack:
    """Build a race track from straight and arc instructions.

    Args:
        instructions: Ordered instructions, either :class:`Straight`/:class:`Arc`
            objects or compact tagged tuples such as ``("s", 14)`` and
            ``("c", (15, -90))``.
        start_position: Start point ``(x, y)`` [m].
        start_heading: Start heading [rad].
        width: Track width [m].
        config: Optional track configuration.

    Returns:
        Validated race track.

    Raises:
        racetrack.utils.exceptions.InstructionError: If an instruction is
            malformed.
        racetrack.utils.exceptions.TrackDataError: If the resulting track is
            degenerate.
    """
    config = config or TrackConfig()
    segments = parse_instructions(instructions)
    samples = generate_boundary_samples(segments, start_position, start_heading, width, config)
    return build_race_track(samples, width, config)
