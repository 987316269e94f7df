"""Unit tests for track-building configuration."""

from __future__ import annotations

import unittest

from racetrack.track import DiscretizationConfig, LookupConfig, TrackConfig, build_track_config
from racetrack.utils.exceptions import ConfigurationError


class TrackConfigTests(unittest.TestCase):
    """Validate configuration defaults and bounds."""

    def test_defaults_match_reference_sampling(self) -> None:
        """Use 0.5 m straight steps, 2 deg arc steps, and a 1e-6 bias."""
        config = build_track_config()

        self.assertEqual(config.discretization.straight_step, 0.5)
        self.assertEqual(config.discretization.arc_step_deg, 2.0)
        self.assertEqual(config.discretization.arc_length_bias, 1e-6)
        self.assertEqual(config.lookup.spatial_index, "brute_force")
        self.assertEqual(config, TrackConfig())

    def test_discretization_rejects_out_of_range_values(self) -> None:
        """Reject non-positive steps and out-of-range bias values."""
        invalid = (
            DiscretizationConfig(straight_step=0.0),
            DiscretizationConfig(straight_step=-0.5),
            DiscretizationConfig(arc_step_deg=0.0),
            DiscretizationConfig(arc_step_deg=120.0),
            DiscretizationConfig(arc_length_bias=0.0),
            DiscretizationConfig(arc_length_bias=0.5),
        )
        for config in invalid:
            with self.subTest(config=config), self.assertRaises(ConfigurationError):
                config.validate()

    def test_lookup_rejects_unknown_index(self) -> None:
        """Reject spatial index identifiers outside the supported set."""
        with self.assertRaises(ConfigurationError):
            LookupConfig(spatial_index="octree").validate()

    def test_build_track_config_validates(self) -> None:
        """Validate assembled settings in the factory."""
        with self.assertRaises(ConfigurationError):
            build_track_config(straight_step=-1.0)
        with self.assertRaises(ConfigurationError):
            build_track_config(spatial_index="grid")


if __name__ == "__main__":
    unittest.main()
