"""Vehicle deviation from the track centerline."""

from racetrack.localization.deviation import (
    VehicleDeviation,
    compute_vehicle_deviation,
    inertial_to_track_rotation,
    offroad_distance,
)

__all__ = [
    "VehicleDeviation",
    "compute_vehicle_deviation",
    "inertial_to_track_rotation",
    "offroad_distance",
]
