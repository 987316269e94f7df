"""Racetrack geometry from straight/arc instructions with tracking errors."""

from racetrack.localization import VehicleDeviation
from racetrack.track import (
    Arc,
    RaceTrack,
    Straight,
    TrackInfo,
    build_track,
    build_track_config,
)

__all__ = [
    "Arc",
    "RaceTrack",
    "Straight",
    "TrackInfo",
    "VehicleDeviation",
    "build_track",
    "build_track_config",
]
