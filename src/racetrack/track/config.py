"""Track-building configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from racetrack.utils.constants import (
    DEFAULT_ARC_LENGTH_BIAS,
    DEFAULT_ARC_STEP_DEG,
    DEFAULT_STRAIGHT_STEP,
)
from racetrack.utils.exceptions import ConfigurationError

DEFAULT_SPATIAL_INDEX = "brute_force"
VALID_SPATIAL_INDEXES = ("brute_force", "kdtree")
MAX_ARC_LENGTH_BIAS = 1e-3
MAX_ARC_STEP_DEG = 90.0


@dataclass(frozen=True)
class DiscretizationConfig:
    """Sampling controls for the segment generator.

    Args:
        straight_step: Spacing of boundary samples along straights [m].
        arc_step_deg: Angular spacing of boundary samples along arcs [deg].
        arc_length_bias: Relative bias added to every centerline step before
            accumulation. It is also the minimum step, which keeps the
            arc-length table strictly increasing across coincident samples.
    """

    straight_step: float = DEFAULT_STRAIGHT_STEP
    arc_step_deg: float = DEFAULT_ARC_STEP_DEG
    arc_length_bias: float = DEFAULT_ARC_LENGTH_BIAS

    def validate(self) -> None:
        """Validate discretization settings.

        Raises:
            racetrack.utils.exceptions.ConfigurationError: If any sampling
                value violates its bound.
        """
        if not self.straight_step > 0.0:
            msg = "straight_step must be positive"
            raise ConfigurationError(msg)
        if not 0.0 < self.arc_step_deg <= MAX_ARC_STEP_DEG:
            msg = f"arc_step_deg must be in (0, {MAX_ARC_STEP_DEG}]"
            raise ConfigurationError(msg)
        if not 0.0 < self.arc_length_bias <= MAX_ARC_LENGTH_BIAS:
            msg = f"arc_length_bias must be in (0, {MAX_ARC_LENGTH_BIAS}]"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class LookupConfig:
    """Controls for nearest-point queries against the centerline.

    Args:
        spatial_index: Spatial index identifier (``brute_force`` or
            ``kdtree``). Both return identical results; ``kdtree`` needs SciPy.
    """

    spatial_index: str = DEFAULT_SPATIAL_INDEX

    def validate(self) -> None:
        """Validate lookup settings.

        Raises:
            racetrack.utils.exceptions.ConfigurationError: If the spatial index
                is unknown or its runtime dependency is missing.
        """
        if self.spatial_index not in VALID_SPATIAL_INDEXES:
            msg = (
                "spatial_index must be one of "
                f"{VALID_SPATIAL_INDEXES}, got: {self.spatial_index!r}"
            )
            raise ConfigurationError(msg)
        if self.spatial_index == "kdtree":
            self._validate_scipy_runtime()

    def _validate_scipy_runtime(self) -> None:
        """Validate availability of SciPy for the k-d tree index.

        Raises:
            racetrack.utils.exceptions.ConfigurationError: If SciPy is not
                installed in the active environment.
        """
        try:
            import scipy.spatial  # noqa: F401
        except ModuleNotFoundError as exc:
            msg = (
                "spatial_index='kdtree' requires SciPy. "
                "Install with `pip install -e '.[kdtree]'` or add `scipy` to your environment."
            )
            raise ConfigurationError(msg) from exc


@dataclass(frozen=True)
class TrackConfig:
    """Top-level track config composed of discretization and lookup.

    Args:
        discretization: Sampling controls used while generating boundaries.
        lookup: Nearest-point query controls.
    """

    discretization: DiscretizationConfig = field(default_factory=DiscretizationConfig)
    lookup: LookupConfig = field(default_factory=LookupConfig)

    def validate(self) -> None:
        """Validate combined track settings.

        Raises:
            racetrack.utils.exceptions.ConfigurationError: If discretization or
                lookup values violate their bounds.
        """
        self.discretization.validate()
        self.lookup.validate()


def build_track_config(
    straight_step: float = DEFAULT_STRAIGHT_STEP,
    arc_step_deg: float = DEFAULT_ARC_STEP_DEG,
    arc_length_bias: float = DEFAULT_ARC_LENGTH_BIAS,
    spatial_index: str = DEFAULT_SPATIAL_INDEX,
) -> TrackConfig:
    """Build a validated track config with the reference sampling defaults.

    Args:
        straight_step: Spacing of boundary samples along straights [m].
        arc_step_deg: Angular spacing of boundary samples along arcs [deg].
        arc_length_bias: Relative bias applied to centerline steps.
        spatial_index: Spatial index identifier (``brute_force`` or ``kdtree``).

    Returns:
        Fully validated track configuration.

    Raises:
        racetrack.utils.exceptions.ConfigurationError: If any assembled
            setting is out of bounds.
    """
    config = TrackConfig(
        discretization=DiscretizationConfig(
            straight_step=straight_step,
            arc_step_deg=arc_step_deg,
            arc_length_bias=arc_length_bias,
        ),
        lookup=LookupConfig(spatial_index=spatial_index),
    )
    config.validate()
    return config
