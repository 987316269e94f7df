"""Unit tests for example and synthetic track layouts."""

from __future__ import annotations

import math
import unittest

import numpy as np

from racetrack.track import (
    Arc,
    Straight,
    build_circuit_layout,
    build_straight_layout,
    load_example_layout,
    track_01_layout,
    track_02_layout,
)
from racetrack.track.layouts import EXAMPLE_LAYOUTS
from racetrack.utils.exceptions import TrackDataError


class TrackLayoutTests(unittest.TestCase):
    """Validate geometry properties of bundled and synthetic layouts."""

    def test_example_layouts_share_start_parameters(self) -> None:
        """Start both circuits at the origin heading east with 6 m width."""
        for layout in (track_01_layout(), track_02_layout()):
            with self.subTest(count=len(layout.instructions)):
                self.assertEqual(layout.start_position, (0.0, 0.0))
                self.assertEqual(layout.start_heading, 0.0)
                self.assertEqual(layout.width, 6.0)
                self.assertEqual(layout.instructions[0], Straight(length=14.0))
                self.assertEqual(layout.instructions[1], Arc(radius=15.0, angle=-90.0))

    def test_example_layouts_have_expected_segment_counts(self) -> None:
        """Keep the instruction sequences of both example circuits."""
        self.assertEqual(len(track_01_layout().instructions), 21)
        self.assertEqual(len(track_02_layout().instructions), 23)

    def test_example_circuits_turn_one_full_lap(self) -> None:
        """Sum the arc angles of each closed circuit to -360 deg."""
        for name in EXAMPLE_LAYOUTS:
            with self.subTest(name=name):
                layout = load_example_layout(name)
                total = sum(seg.angle for seg in layout.instructions if isinstance(seg, Arc))
                self.assertEqual(total, -360.0)

    def test_example_circuits_build_valid_tracks(self) -> None:
        """Build strictly parametrized tracks of plausible length."""
        for name in EXAMPLE_LAYOUTS:
            with self.subTest(name=name):
                track = load_example_layout(name).build()
                self.assertTrue(np.all(np.diff(track.arc_length) > 0.0))
                self.assertGreater(track.length, 200.0)
                self.assertEqual(int(track.segment_index[-1]), len(load_example_layout(name).instructions) - 1)

    def test_straight_layout_length(self) -> None:
        """Build a straight whose centerline spans the sampled length."""
        track = build_straight_layout(length=100.0, width=4.0).build()
        self.assertAlmostEqual(track.length, 99.5, delta=1e-3)
        self.assertEqual(track.half_width, 2.0)

    def test_circuit_layout_closes_on_itself(self) -> None:
        """Return to the start after four quarter arcs."""
        radius = 20.0
        for clockwise in (False, True):
            with self.subTest(clockwise=clockwise):
                track = build_circuit_layout(radius=radius, clockwise=clockwise).build()
                np.testing.assert_allclose(track.center[-1], track.center[0], atol=1e-9)
                self.assertAlmostEqual(track.length, 2.0 * math.pi * radius, delta=0.05)
                sign = -1.0 if clockwise else 1.0
                self.assertAlmostEqual(float(track.heading[-1]), sign * 2.0 * math.pi)

    def test_unknown_example_layout_is_rejected(self) -> None:
        """Reject layout names that are not bundled."""
        with self.assertRaises(TrackDataError):
            load_example_layout("track_99")


if __name__ == "__main__":
    unittest.main()
