"""Boundary sample generation from straight and arc instructions.

The generator walks the instruction list once and threads a pose (position
and heading) from one segment to the next, so every segment starts exactly
where the previous one ended.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from racetrack.track.config import DiscretizationConfig, TrackConfig
from racetrack.track.models import BoundarySamples
from racetrack.track.segments import Arc, SegmentInstruction, Straight
from racetrack.utils.constants import SMALL_EPS
from racetrack.utils.exceptions import InstructionError, TrackDataError

FloatArray = npt.NDArray[np.float64]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pose:
    """Running reference pose of the generator.

    Args:
        position: Reference point on the centerline ``(x, y)`` [m].
        heading: Direction of travel [rad].
    """

    position: FloatArray
    heading: float

    @property
    def forward(self) -> FloatArray:
        """Unit vector along the heading.

        Returns:
            Forward direction ``(cos, sin)``.
        """
        return np.array([math.cos(self.heading), math.sin(self.heading)], dtype=np.float64)

    @property
    def left_normal(self) -> FloatArray:
        """Unit vector pointing to the left of the heading.

        Returns:
            Left normal ``(-sin, cos)``.
        """
        return np.array([-math.sin(self.heading), math.cos(self.heading)], dtype=np.float64)


@dataclass(frozen=True)
class SegmentSamples:
    """Boundary samples of a single segment.

    Args:
        left: Left-edge points, shape ``(n, 2)`` [m].
        right: Right-edge points, shape ``(n, 2)`` [m].
        heading: Heading per sample [rad].
    """

    left: FloatArray
    right: FloatArray
    heading: FloatArray


def _sample_count(extent: float, step: float) -> int:
    """Number of whole steps that fit into ``extent``.

    Args:
        extent: Segment length or absolute angle.
        step: Sampling step in the same unit.

    Returns:
        ``floor(extent / step)``, tolerant to float noise at exact multiples.
    """
    return int(math.floor(extent / step * (1.0 + SMALL_EPS)))


def straight_samples(
    segment: Straight,
    pose: Pose,
    width: float,
    step: float,
) -> tuple[SegmentSamples, Pose]:
    """Sample both edges along a straight and advance the pose.

    Offsets start one step after the segment start and stop at the last whole
    step inside the segment. The pose advances by the full segment length.

    Args:
        segment: Straight instruction.
        pose: Pose at the segment start.
        width: Track width [m].
        step: Sample spacing [m].

    Returns:
        Segment samples and the pose at the segment end.
    """
    offsets = step * np.arange(1, _sample_count(segment.length, step) + 1, dtype=np.float64)
    forward = pose.forward
    half_offset = 0.5 * width * pose.left_normal
    along = pose.position + offsets[:, None] * forward
    samples = SegmentSamples(
        left=along + half_offset,
        right=along - half_offset,
        heading=np.full(offsets.size, pose.heading, dtype=np.float64),
    )
    end_pose = Pose(position=pose.position + segment.length * forward, heading=pose.heading)
    return samples, end_pose


def arc_samples(
    segment: Arc,
    pose: Pose,
    width: float,
    step_deg: float,
) -> tuple[SegmentSamples, Pose]:
    """Sample two concentric edge arcs around the turn center.

    The edges are built in the segment frame (x forward, y left) around the
    curvature center ``(0, s * radius)``, then rotated and translated into the
    inertial frame. The end position is the midpoint of the last edge pair and
    the end heading adds the full signed turn angle.

    Args:
        segment: Arc instruction.
        pose: Pose at the segment start.
        width: Track width [m].
        step_deg: Angular sample spacing [deg].

    Returns:
        Segment samples and the pose at the segment end.
    """
    sign = segment.direction
    step = math.radians(step_deg)
    theta = step * np.arange(0, _sample_count(abs(segment.angle_rad), step) + 1, dtype=np.float64)

    radial = np.column_stack((np.sin(theta), -sign * np.cos(theta)))
    turn_center = np.array([0.0, sign * segment.radius], dtype=np.float64)
    local_left = turn_center + (segment.radius - sign * 0.5 * width) * radial
    local_right = turn_center + (segment.radius + sign * 0.5 * width) * radial

    # Columns of the pose rotation are the forward and left axes.
    rotation = np.column_stack((pose.forward, pose.left_normal))
    left = local_left @ rotation.T + pose.position
    right = local_right @ rotation.T + pose.position

    samples = SegmentSamples(left=left, right=right, heading=pose.heading + sign * theta)
    end_pose = Pose(
        position=0.5 * (left[-1] + right[-1]),
        heading=pose.heading + segment.angle_rad,
    )
    return samples, end_pose


def _validate_inputs(start_position: FloatArray, start_heading: float, width: float) -> None:
    """Validate the global generator parameters.

    Args:
        start_position: Start point ``(x, y)`` [m].
        start_heading: Start heading [rad].
        width: Track width [m].

    Raises:
        racetrack.utils.exceptions.TrackDataError: If the width is not positive
            or the start pose is not finite.
    """
    if not (math.isfinite(width) and width > 0.0):
        msg = f"Track width must be a positive finite number, got: {width!r}"
        raise TrackDataError(msg)
    if start_position.shape != (2,) or not np.all(np.isfinite(start_position)):
        msg = f"start_position must be a finite (x, y) point, got: {start_position!r}"
        raise TrackDataError(msg)
    if not math.isfinite(start_heading):
        msg = f"start_heading must be finite, got: {start_heading!r}"
        raise TrackDataError(msg)


def generate_boundary_samples(
    instructions: Sequence[SegmentInstruction],
    start_position: npt.ArrayLike,
    start_heading: float,
    width: float,
    config: TrackConfig | DiscretizationConfig | None = None,
) -> BoundarySamples:
    """Generate left/right boundary points and headings for a track.

    Args:
        instructions: Ordered straight and arc instructions.
        start_position: Start point ``(x, y)`` [m].
        start_heading: Start heading [rad].
        width: Track width [m].
        config: Optional track or discretization config. Defaults to the
            reference sampling of 0.5 m on straights and 2 deg on arcs.

    Returns:
        Index-aligned boundary samples for the whole instruction sequence.

    Raises:
        racetrack.utils.exceptions.InstructionError: If an instruction is
            neither :class:`Straight` nor :class:`Arc`.
        racetrack.utils.exceptions.TrackDataError: If the global parameters
            are invalid or no samples are produced.
    """
    if config is None:
        discretization = DiscretizationConfig()
    elif isinstance(config, TrackConfig):
        discretization = config.discretization
    else:
        discretization = config
    discretization.validate()

    origin = np.asarray(start_position, dtype=np.float64).reshape(-1)
    start_heading = float(start_heading)
    width = float(width)
    _validate_inputs(origin, start_heading, width)

    pose = Pose(position=origin, heading=start_heading)
    chunks: list[SegmentSamples] = []
    owners: list[npt.NDArray[np.int_]] = []
    for idx, segment in enumerate(instructions):
        if isinstance(segment, Straight):
            samples, pose = straight_samples(segment, pose, width, discretization.straight_step)
        elif isinstance(segment, Arc):
            if segment.radius < 0.5 * width:
                logger.warning(
                    "Arc %d radius %.3f m is below the half-width %.3f m; the inner edge folds",
                    idx,
                    segment.radius,
                    0.5 * width,
                )
            samples, pose = arc_samples(segment, pose, width, discretization.arc_step_deg)
        else:
            msg = f"Instruction {idx}: unsupported segment type {type(segment).__name__}"
            raise InstructionError(msg)
        chunks.append(samples)
        owners.append(np.full(samples.heading.size, idx, dtype=np.int_))

    if not chunks or sum(chunk.heading.size for chunk in chunks) == 0:
        msg = "Instruction sequence produced no track samples"
        raise TrackDataError(msg)

    boundary = BoundarySamples(
        left=np.concatenate([chunk.left for chunk in chunks]),
        right=np.concatenate([chunk.right for chunk in chunks]),
        heading=np.concatenate([chunk.heading for chunk in chunks]),
        segment_index=np.concatenate(owners),
    )
    boundary.validate()
    logger.debug(
        "Generated %d boundary samples from %d segments",
        boundary.size,
        len(chunks),
    )
    return boundary
