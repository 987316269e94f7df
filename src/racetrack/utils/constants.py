"""Numeric constants used across the library."""

SMALL_EPS: float = 1e-9
DEFAULT_STRAIGHT_STEP: float = 0.5
DEFAULT_ARC_STEP_DEG: float = 2.0
DEFAULT_ARC_LENGTH_BIAS: float = 1e-6
