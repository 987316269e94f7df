"""Unit tests for lag, contour, and off-track errors."""

from __future__ import annotations

import math
import unittest

import numpy as np

from racetrack.localization import (
    VehicleDeviation,
    compute_vehicle_deviation,
    inertial_to_track_rotation,
    offroad_distance,
)
from racetrack.track import TrackInfo, build_track, track_02_layout
from tests.helpers import straight_worked_example_track

STRAIGHT_STEP = 0.5


class WorkedExampleDeviationTests(unittest.TestCase):
    """Deviation on the 10 m straight, 4 m wide track."""

    def setUp(self) -> None:
        """Create the straight worked-example track."""
        self.track = straight_worked_example_track()

    def test_vehicle_left_of_centerline_inside_track(self) -> None:
        """Report contour error -1 for a vehicle 1 m left of the centerline."""
        deviation = self.track.get_vehicle_deviation((5.0, 1.0), 5.0)
        target = self.track.get_track_info(5.0)

        self.assertIsInstance(deviation, VehicleDeviation)
        self.assertAlmostEqual(deviation.contour_error, -1.0)
        self.assertAlmostEqual(deviation.lag_error, float(target.position[0]) - 5.0)
        self.assertLessEqual(abs(deviation.lag_error), STRAIGHT_STEP + 1e-6)
        self.assertEqual(deviation.offroad_error, 0.0)
        self.assertFalse(deviation.is_offroad)

    def test_vehicle_beyond_track_border(self) -> None:
        """Report off-track error 3 for a vehicle 5 m left on a 2 m half-width."""
        deviation = self.track.get_vehicle_deviation((5.0, 5.0), 5.0)

        self.assertAlmostEqual(deviation.contour_error, -5.0)
        self.assertAlmostEqual(deviation.offroad_error, 3.0)
        self.assertTrue(deviation.is_offroad)

    def test_vehicle_right_of_centerline_has_positive_contour_error(self) -> None:
        """Use positive contour error for vehicles right of the track direction."""
        deviation = self.track.get_vehicle_deviation((5.5, -1.5), 5.0)
        self.assertAlmostEqual(deviation.contour_error, 1.5)
        self.assertAlmostEqual(deviation.lag_error, 0.0)

    def test_deviation_unpacks_like_a_tuple(self) -> None:
        """Unpack into lag, contour, and off-track errors."""
        lag_error, contour_error, offroad_error = self.track.get_vehicle_deviation((5.5, 0.0), 5.0)
        self.assertAlmostEqual(lag_error, 0.0)
        self.assertAlmostEqual(contour_error, 0.0)
        self.assertEqual(offroad_error, 0.0)


class FrameConventionTests(unittest.TestCase):
    """Sign conventions of the track-tangent frame at arbitrary headings."""

    def test_rotation_matches_identity_at_zero_heading(self) -> None:
        """Reduce to the identity when the track points along the x-axis."""
        np.testing.assert_allclose(inertial_to_track_rotation(0.0), np.eye(2))

    def test_lagging_vehicle_has_positive_lag_error_for_any_heading(self) -> None:
        """Keep lag positive for a vehicle behind the target point."""
        for heading in (0.0, 0.4, 0.5 * math.pi, 2.5, -2.0):
            with self.subTest(heading=heading):
                forward = np.array([math.cos(heading), math.sin(heading)])
                info = TrackInfo(position=np.array([3.0, -1.0]), heading=heading, half_width=2.0)
                deviation = compute_vehicle_deviation(info, info.position - 1.25 * forward)
                self.assertAlmostEqual(deviation.lag_error, 1.25)
                self.assertAlmostEqual(deviation.contour_error, 0.0)

    def test_vehicle_right_of_track_has_positive_contour_error_for_any_heading(self) -> None:
        """Keep contour positive for a vehicle right of the track direction."""
        for heading in (0.0, 0.4, 0.5 * math.pi, 2.5, -2.0):
            with self.subTest(heading=heading):
                right = np.array([math.sin(heading), -math.cos(heading)])
                info = TrackInfo(position=np.array([3.0, -1.0]), heading=heading, half_width=2.0)
                deviation = compute_vehicle_deviation(info, info.position + 2.5 * right)
                self.assertAlmostEqual(deviation.lag_error, 0.0)
                self.assertAlmostEqual(deviation.contour_error, 2.5)
                self.assertAlmostEqual(deviation.offroad_error, 0.5)

    def test_north_heading_straight(self) -> None:
        """Resolve lag and contour on a straight pointing along +y."""
        track = build_track([("s", 10)], (0.0, 0.0), 0.5 * math.pi, 4.0)
        target = track.get_track_info(4.0)

        behind = track.get_vehicle_deviation(target.position - np.array([0.0, 1.0]), 4.0)
        self.assertAlmostEqual(behind.lag_error, 1.0)
        self.assertAlmostEqual(behind.contour_error, 0.0)

        east = track.get_vehicle_deviation(target.position + np.array([1.0, 0.0]), 4.0)
        self.assertAlmostEqual(east.lag_error, 0.0)
        self.assertAlmostEqual(east.contour_error, 1.0)


class DeviationPropertyTests(unittest.TestCase):
    """Properties that hold on a full example circuit."""

    def setUp(self) -> None:
        """Create the second example circuit."""
        self.track = track_02_layout().build()

    def test_centerline_point_has_zero_deviation(self) -> None:
        """Return zero lag and contour error at the exact target point."""
        for distance in np.linspace(0.0, self.track.length, 23):
            with self.subTest(distance=float(distance)):
                target = self.track.get_track_info(float(distance))
                deviation = self.track.get_vehicle_deviation(target.position, float(distance))
                self.assertAlmostEqual(deviation.lag_error, 0.0, places=12)
                self.assertAlmostEqual(deviation.contour_error, 0.0, places=12)
                self.assertEqual(deviation.offroad_error, 0.0)

    def test_offroad_error_matches_half_width_excess(self) -> None:
        """Apply ``max(0, |contour| - half_width)`` for random vehicle positions."""
        rng = np.random.default_rng(7)
        lower = self.track.center.min(axis=0) - 10.0
        upper = self.track.center.max(axis=0) + 10.0
        for _ in range(200):
            position = rng.uniform(lower, upper)
            distance = float(rng.uniform(-self.track.length, 2.0 * self.track.length))
            deviation = self.track.get_vehicle_deviation(position, distance)
            excess = abs(deviation.contour_error) - self.track.half_width
            if excess <= 0.0:
                self.assertEqual(deviation.offroad_error, 0.0)
            else:
                self.assertAlmostEqual(deviation.offroad_error, excess)

    def test_offroad_distance_helper(self) -> None:
        """Clamp inside-track errors to zero and keep the border excess."""
        self.assertEqual(offroad_distance(1.9, 2.0), 0.0)
        self.assertEqual(offroad_distance(-2.0, 2.0), 0.0)
        self.assertAlmostEqual(offroad_distance(-3.5, 2.0), 1.5)

    def test_nan_position_propagates(self) -> None:
        """Leave invalid inputs to the caller and return NaN errors."""
        deviation = self.track.get_vehicle_deviation((math.nan, 0.0), 10.0)
        self.assertTrue(math.isnan(deviation.lag_error))
        self.assertTrue(math.isnan(deviation.contour_error))
        self.assertTrue(math.isnan(deviation.offroad_error))


if __name__ == "__main__":
    unittest.main()
