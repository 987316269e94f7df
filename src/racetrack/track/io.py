"""Instruction loading and sample export as CSV files."""

from __future__ import annotations

import csv
from pathlib import Path

from racetrack.track.models import RaceTrack
from racetrack.track.segments import (
    ARC_TAGS,
    STRAIGHT_TAGS,
    Arc,
    SegmentInstruction,
    Straight,
)
from racetrack.utils.exceptions import InstructionError, TrackDataError

REQUIRED_COLUMNS = ("kind", "length", "radius", "angle")
EXPORT_COLUMNS = (
    "s",
    "center_x",
    "center_y",
    "left_x",
    "left_y",
    "right_x",
    "right_y",
    "heading",
    "segment",
)


def _parse_row(row: dict[str, str], line: int) -> SegmentInstruction:
    """Convert one CSV row into a segment instruction.

    Args:
        row: CSV row keyed by column name.
        line: Line number used in error messages.

    Returns:
        Parsed segment instruction.

    Raises:
        racetrack.utils.exceptions.InstructionError: If the kind is unknown or
            a required value is missing or invalid.
    """
    kind = (row.get("kind") or "").strip().lower()
    try:
        if kind in STRAIGHT_TAGS:
            return Straight(length=float(row["length"]))
        if kind in ARC_TAGS:
            return Arc(radius=float(row["radius"]), angle=float(row["angle"]))
    except (TypeError, ValueError) as exc:
        msg = f"Line {line}: invalid values for {kind!r} segment"
        raise InstructionError(msg) from exc
    except InstructionError as exc:
        msg = f"Line {line}: {exc}"
        raise InstructionError(msg) from exc

    msg = f"Line {line}: unknown segment kind {row.get('kind')!r}"
    raise InstructionError(msg)


def load_instructions_csv(path: str | Path) -> tuple[SegmentInstruction, ...]:
    """Load a segment instruction sequence from CSV.

    Straights read ``length``; arcs read ``radius`` and ``angle`` [deg]. Unused
    cells may be left empty.

    Args:
        path: Path to a CSV containing ``kind``, ``length``, ``radius``, and
            ``angle`` columns.

    Returns:
        Parsed instructions in file order.

    Raises:
        racetrack.utils.exceptions.TrackDataError: If the file does not exist,
            has an invalid schema, or contains no rows.
        racetrack.utils.exceptions.InstructionError: If a row is malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"Instruction file not found: {file_path}"
        raise TrackDataError(msg)

    instructions: list[SegmentInstruction] = []
    with file_path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            msg = f"CSV has no header: {file_path}"
            raise TrackDataError(msg)

        missing = [col for col in REQUIRED_COLUMNS if col not in reader.fieldnames]
        if missing:
            msg = f"Instruction CSV missing required columns: {missing}"
            raise TrackDataError(msg)

        for row in reader:
            instructions.append(_parse_row(row, reader.line_num))

    if not instructions:
        msg = f"Instruction CSV contains no segments: {file_path}"
        raise TrackDataError(msg)
    return tuple(instructions)


def export_track_csv(track: RaceTrack, path: str | Path) -> None:
    """Write per-sample track geometry to CSV for rendering tools.

    Args:
        track: Track to export.
        path: Output file path.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(EXPORT_COLUMNS)
        for idx in range(track.size):
            writer.writerow(
                [
                    repr(float(track.arc_length[idx])),
                    repr(float(track.center[idx, 0])),
                    repr(float(track.center[idx, 1])),
                    repr(float(track.left[idx, 0])),
                    repr(float(track.left[idx, 1])),
                    repr(float(track.right[idx, 0])),
                    repr(float(track.right[idx, 1])),
                    repr(float(track.heading[idx])),
                    int(track.segment_index[idx]),
                ]
            )
