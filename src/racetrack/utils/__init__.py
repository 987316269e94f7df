"""Utility helpers."""

from racetrack.utils.constants import SMALL_EPS
from racetrack.utils.logging import configure_logging

__all__ = ["SMALL_EPS", "configure_logging"]
