"""Build the example circuits and report vehicle deviations along a lap."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import numpy as np

from racetrack.track import RaceTrack, build_track, export_track_csv, load_instructions_csv
from racetrack.utils import configure_logging

TRACK_WIDTH = 6.0
LATERAL_SWEEP = 4.0
PROBE_COUNT = 40


def _sweep_deviations(track: RaceTrack) -> list[dict[str, float]]:
    """Probe a vehicle that weaves across the track over one lap.

    Args:
        track: Track to probe.

    Returns:
        One record per probe with travelled distance and deviation errors.
    """
    records = []
    for phase, distance in enumerate(np.linspace(0.0, track.length, PROBE_COUNT, endpoint=False)):
        target = track.get_track_info(float(distance))
        normal = np.array([-np.sin(target.heading), np.cos(target.heading)])
        offset = LATERAL_SWEEP * np.sin(0.5 * phase)
        position = target.position + offset * normal

        travelled = track.get_track_distance(position)
        deviation = track.get_vehicle_deviation(position, float(distance))
        records.append({"distance": float(distance), "travelled": travelled, **asdict(deviation)})
    return records


def main() -> None:
    """Build both example circuits and export samples plus deviation summaries."""
    configure_logging(logging.INFO)
    logger = logging.getLogger("track_deviation_demo")

    project_root = Path(__file__).resolve().parents[1]
    output_dir = project_root / "examples" / "output" / "track_deviation"
    output_dir.mkdir(parents=True, exist_ok=True)

    summary: dict[str, dict[str, float]] = {}
    for name in ("track_01", "track_02"):
        instructions = load_instructions_csv(project_root / "data" / f"{name}.csv")
        track = build_track(instructions, (0.0, 0.0), 0.0, TRACK_WIDTH)
        export_track_csv(track, output_dir / f"{name}_samples.csv")

        records = _sweep_deviations(track)
        offroad = [record["offroad_error"] for record in records]
        summary[name] = {
            "length": track.length,
            "samples": float(track.size),
            "max_offroad_error": max(offroad),
            "offroad_fraction": sum(value > 0.0 for value in offroad) / len(offroad),
        }
        logger.info(
            "%s: %.2f m over %d samples, max off-track error %.2f m",
            name,
            track.length,
            track.size,
            summary[name]["max_offroad_error"],
        )

    (output_dir / "deviation_summary.json").write_text(
        json.dumps(summary, indent=2),
        encoding="utf-8",
    )
    logger.info("Track deviation artifacts written to %s", output_dir)


if __name__ == "__main__":
    main()
