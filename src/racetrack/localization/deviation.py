"""Lag, contour, and off-track errors in the track-tangent frame."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from racetrack.track.models import TrackInfo

FloatArray = npt.NDArray[np.float64]


@dataclass(frozen=True)
class VehicleDeviation:
    """Vehicle position error relative to a target centerline point.

    Args:
        lag_error: Along-track error [m]. Positive when the vehicle has not yet
            reached the target point.
        contour_error: Cross-track error [m]. Positive when the vehicle is to
            the right of the track direction.
        offroad_error: Lateral excess beyond the track half-width [m]; zero
            inside the track.
    """

    lag_error: float
    contour_error: float
    offroad_error: float

    @property
    def is_offroad(self) -> bool:
        """Whether the vehicle is beyond the track border.

        Returns:
            ``True`` when ``offroad_error`` is positive.
        """
        return self.offroad_error > 0.0

    def __iter__(self) -> Iterator[float]:
        """Unpack as ``(lag_error, contour_error, offroad_error)``.

        Returns:
            Iterator over the three error components.
        """
        return iter((self.lag_error, self.contour_error, self.offroad_error))


def inertial_to_track_rotation(heading: float) -> FloatArray:
    """Rotation that maps inertial vectors into the track-tangent frame.

    The first axis of the target frame points along ``heading`` and the second
    axis points to the right of it.

    Args:
        heading: Track heading [rad].

    Returns:
        ``2 x 2`` rotation matrix.
    """
    cos_h = np.cos(heading)
    sin_h = np.sin(heading)
    return np.array([[cos_h, sin_h], [-sin_h, cos_h]], dtype=np.float64)


def offroad_distance(contour_error: float, half_width: float) -> float:
    """Distance beyond the track border for a given cross-track error.

    Args:
        contour_error: Cross-track error [m].
        half_width: Track half-width [m].

    Returns:
        ``max(0, |contour_error| - half_width)`` [m].
    """
    return float(np.maximum(0.0, abs(contour_error) - half_width))


def compute_vehicle_deviation(
    track_info: TrackInfo,
    vehicle_position: npt.ArrayLike,
) -> VehicleDeviation:
    """Express the vehicle-to-target offset in the track-tangent frame.

    Args:
        track_info: Target centerline point, heading, and half-width.
        vehicle_position: Vehicle position ``(x, y)`` in inertial coordinates.

    Returns:
        Lag, contour, and off-track errors.
    """
    position = np.asarray(vehicle_position, dtype=np.float64).reshape(2)
    inertial_error = np.asarray(track_info.position, dtype=np.float64) - position
    lag_error, contour_error = inertial_to_track_rotation(track_info.heading) @ inertial_error
    return VehicleDeviation(
        lag_error=float(lag_error),
        contour_error=float(contour_error),
        offroad_error=offroad_distance(float(contour_error), track_info.half_width),
    )
