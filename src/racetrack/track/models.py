"""Track data models."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

from racetrack.localization.deviation import VehicleDeviation, compute_vehicle_deviation
from racetrack.track.spatial import SpatialIndex
from racetrack.utils.exceptions import TrackDataError

if TYPE_CHECKING:
    from racetrack.track.config import TrackConfig

FloatArray = npt.NDArray[np.float64]
IntArray = npt.NDArray[np.int_]


def _freeze(array: np.ndarray) -> None:
    """Mark an array read-only.

    Args:
        array: Array to protect against in-place writes.
    """
    array.flags.writeable = False


@dataclass(frozen=True, eq=False)
class BoundarySamples:
    """Index-aligned boundary samples produced by the segment generator.

    Args:
        left: Left-edge points, shape ``(L, 2)`` [m].
        right: Right-edge points, shape ``(L, 2)`` [m].
        heading: Centerline tangent direction per sample [rad], unwrapped.
        segment_index: Index of the instruction that produced each sample.
    """

    left: FloatArray
    right: FloatArray
    heading: FloatArray
    segment_index: IntArray

    @property
    def size(self) -> int:
        """Number of samples.

        Returns:
            Sample count ``L``.
        """
        return int(self.heading.size)

    def validate(self) -> None:
        """Validate shapes and numeric validity of the sample arrays.

        Raises:
            racetrack.utils.exceptions.TrackDataError: If shapes disagree or
                any value is non-finite.
        """
        size = self.heading.size
        if self.heading.ndim != 1:
            msg = "heading must be a one-dimensional array"
            raise TrackDataError(msg)
        for name, points in (("left", self.left), ("right", self.right)):
            if points.shape != (size, 2):
                msg = f"{name} must have shape ({size}, 2), got {points.shape}"
                raise TrackDataError(msg)
        if self.segment_index.shape != (size,):
            msg = "segment_index must have one entry per sample"
            raise TrackDataError(msg)
        if not (
            np.all(np.isfinite(self.left))
            and np.all(np.isfinite(self.right))
            and np.all(np.isfinite(self.heading))
        ):
            msg = "Boundary samples contain non-finite values"
            raise TrackDataError(msg)


@dataclass(frozen=True)
class TrackInfo:
    """Centerline state at one arc-length position.

    Args:
        position: Centerline point ``(x, y)`` [m].
        heading: Track heading [rad].
        half_width: Track half-width [m], the off-track threshold.
    """

    position: FloatArray
    heading: float
    half_width: float

    def __iter__(self) -> Iterator[Any]:
        """Unpack as ``(position, heading, half_width)``.

        Returns:
            Iterator over the three fields.
        """
        return iter((self.position, self.heading, self.half_width))


@dataclass(frozen=True, eq=False)
class RaceTrack:
    """Immutable racetrack parametrized by centerline arc length.

    Args:
        left: Left-edge points, shape ``(L, 2)`` [m].
        right: Right-edge points, shape ``(L, 2)`` [m].
        center: Centerline points, mean of ``left`` and ``right`` [m].
        heading: Centerline heading per sample [rad].
        arc_length: Strictly increasing arc length, starting at zero [m].
        segment_index: Index of the instruction that produced each sample.
        width: Constant track width [m].
        spatial_index: Nearest-point lookup over ``center``.
    """

    left: FloatArray
    right: FloatArray
    center: FloatArray
    heading: FloatArray
    arc_length: FloatArray
    segment_index: IntArray
    width: float
    spatial_index: SpatialIndex = field(repr=False)

    def __post_init__(self) -> None:
        """Make all sample arrays read-only."""
        for array in (
            self.left,
            self.right,
            self.center,
            self.heading,
            self.arc_length,
            self.segment_index,
        ):
            _freeze(array)

    @classmethod
    def from_instructions(
        cls,
        instructions: Sequence[Any],
        start_position: npt.ArrayLike,
        start_heading: float,
        width: float,
        config: TrackConfig | None = None,
    ) -> RaceTrack:
        """Build a track from segment instructions.

        Args:
            instructions: Ordered straight/arc instructions, as objects or
                compact tagged tuples.
            start_position: Start point ``(x, y)`` [m].
            start_heading: Start heading [rad].
            width: Track width [m].
            config: Optional track configuration.

        Returns:
            Validated race track.
        """
        from racetrack.track.geometry import build_track

        return build_track(instructions, start_position, start_heading, width, config=config)

    @property
    def length(self) -> float:
        """Track length [m].

        Returns:
            Final arc-length value of the discretized centerline [m].
        """
        return float(self.arc_length[-1])

    @property
    def half_width(self) -> float:
        """Track half-width [m].

        Returns:
            Half of the constant track width [m].
        """
        return 0.5 * self.width

    @property
    def size(self) -> int:
        """Number of samples.

        Returns:
            Sample count ``L``.
        """
        return int(self.arc_length.size)

    def validate(self) -> None:
        """Validate consistency of all track arrays.

        Raises:
            racetrack.utils.exceptions.TrackDataError: If array shapes, arc
                length monotonicity, width, or numeric validity checks fail.
        """
        size = self.arc_length.size
        if size < 2:
            msg = "Track must contain at least 2 samples"
            raise TrackDataError(msg)
        for name, points in (("left", self.left), ("right", self.right), ("center", self.center)):
            if points.shape != (size, 2):
                msg = f"{name} must have shape ({size}, 2), got {points.shape}"
                raise TrackDataError(msg)
        if self.heading.shape != (size,) or self.segment_index.shape != (size,):
            msg = "All track arrays must have equal length"
            raise TrackDataError(msg)
        if not np.all(np.isfinite(self.arc_length)):
            msg = "Arc-length array contains non-finite values"
            raise TrackDataError(msg)
        if self.arc_length[0] != 0.0:
            msg = "Arc length must start at zero"
            raise TrackDataError(msg)
        if not np.all(np.diff(self.arc_length) > 0.0):
            msg = "Arc length must be strictly increasing"
            raise TrackDataError(msg)
        if not self.width > 0.0:
            msg = "Track width must be positive"
            raise TrackDataError(msg)

    def _wrap(self, distance: float) -> float:
        """Map a distance onto one lap.

        Args:
            distance: Arc-length position, any real value [m].

        Returns:
            Equivalent position in ``[0, length)`` [m].
        """
        return float(np.mod(distance, self.length))

    def _nearest_sample(self, distance: float) -> int:
        """Find the sample whose arc length is closest to ``distance``.

        Args:
            distance: Wrapped arc-length position [m].

        Returns:
            Sample index; the lower index wins when both neighbours are
            equally close.
        """
        upper = int(np.searchsorted(self.arc_length, distance, side="left"))
        if upper <= 0:
            return 0
        if upper >= self.size:
            return self.size - 1
        lower = upper - 1
        if distance - self.arc_length[lower] <= self.arc_length[upper] - distance:
            return lower
        return upper

    def get_track_info(self, distance: float) -> TrackInfo:
        """Centerline point, heading, and half-width at an arc-length position.

        The position is snapped to the nearest generated sample, so the result
        always matches a stored sample exactly. Distances outside one lap wrap
        around.

        Args:
            distance: Arc-length position [m].

        Returns:
            Track state at the nearest sample.
        """
        idx = self._nearest_sample(self._wrap(distance))
        return TrackInfo(
            position=self.center[idx].copy(),
            heading=float(self.heading[idx]),
            half_width=self.half_width,
        )

    def get_track_info_interpolated(self, distance: float) -> TrackInfo:
        """Centerline state linearly interpolated between samples.

        Args:
            distance: Arc-length position [m]; wraps like :meth:`get_track_info`.

        Returns:
            Interpolated track state.
        """
        wrapped = self._wrap(distance)
        x = np.interp(wrapped, self.arc_length, self.center[:, 0])
        y = np.interp(wrapped, self.arc_length, self.center[:, 1])
        heading = np.interp(wrapped, self.arc_length, self.heading)
        return TrackInfo(
            position=np.array([x, y], dtype=np.float64),
            heading=float(heading),
            half_width=self.half_width,
        )

    def get_track_distance(self, position: npt.ArrayLike) -> float:
        """Distance travelled along the centerline up to the closest sample.

        Args:
            position: Query point ``(x, y)`` [m].

        Returns:
            Arc length of the centerline sample nearest to ``position`` [m].
        """
        return float(self.arc_length[self.spatial_index.nearest(position)])

    def get_vehicle_deviation(
        self,
        position: npt.ArrayLike,
        target_distance: float,
    ) -> VehicleDeviation:
        """Lag, contour, and off-track errors relative to a target distance.

        Args:
            position: Vehicle position ``(x, y)`` [m].
            target_distance: Arc-length position of the target point [m].

        Returns:
            Vehicle deviation in the track-tangent frame at the target point.
        """
        return compute_vehicle_deviation(self.get_track_info(target_distance), position)
