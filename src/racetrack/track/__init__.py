"""Track generation from segment instructions and arc-length queries."""

from racetrack.track.config import (
    DiscretizationConfig,
    LookupConfig,
    TrackConfig,
    build_track_config,
)
from racetrack.track.generator import generate_boundary_samples
from racetrack.track.geometry import build_race_track, build_track
from racetrack.track.io import export_track_csv, load_instructions_csv
from racetrack.track.layouts import (
    TrackLayout,
    build_circuit_layout,
    build_straight_layout,
    load_example_layout,
    track_01_layout,
    track_02_layout,
)
from racetrack.track.models import BoundarySamples, RaceTrack, TrackInfo
from racetrack.track.segments import Arc, Straight, parse_instruction, parse_instructions
from racetrack.track.spatial import BruteForceIndex, KDTreeIndex, build_spatial_index

__all__ = [
    "Arc",
    "BoundarySamples",
    "BruteForceIndex",
    "DiscretizationConfig",
    "KDTreeIndex",
    "LookupConfig",
    "RaceTrack",
    "Straight",
    "TrackConfig",
    "TrackInfo",
    "TrackLayout",
    "build_circuit_layout",
    "build_race_track",
    "build_spatial_index",
    "build_straight_layout",
    "build_track",
    "build_track_config",
    "export_track_csv",
    "generate_boundary_samples",
    "load_example_layout",
    "load_instructions_csv",
    "parse_instruction",
    "parse_instructions",
    "track_01_layout",
    "track_02_layout",
]
