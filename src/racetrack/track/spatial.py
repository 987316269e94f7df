"""Nearest-sample lookup over centerline points."""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np
import numpy.typing as npt

from racetrack.track.config import DEFAULT_SPATIAL_INDEX, VALID_SPATIAL_INDEXES
from racetrack.utils.exceptions import ConfigurationError, TrackDataError

FloatArray = npt.NDArray[np.float64]

# Relative slack for the ball query that collects k-d tree tie candidates.
TIE_RADIUS_REL_TOL = 1e-12


class SpatialIndex(Protocol):
    """Nearest-neighbour capability over a fixed point set."""

    def nearest(self, point: npt.ArrayLike) -> int:
        """Return the index of the sample closest to ``point``.

        Args:
            point: Query point ``(x, y)``.

        Returns:
            Index of the nearest sample; the lowest index wins exact ties.
        """
        ...


def _as_point_array(points: npt.ArrayLike) -> FloatArray:
    """Convert a point collection to a ``(N, 2)`` float array.

    Args:
        points: Point collection.

    Returns:
        Float array of shape ``(N, 2)``.

    Raises:
        racetrack.utils.exceptions.TrackDataError: If the shape is not
            ``(N, 2)`` with ``N >= 1``.
    """
    array = np.asarray(points, dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 2 or array.shape[0] == 0:
        msg = f"Spatial index expects a non-empty (N, 2) point array, got shape {array.shape}"
        raise TrackDataError(msg)
    return array


class BruteForceIndex:
    """Exhaustive nearest-neighbour search.

    Every query computes the Euclidean distance to all samples, which is
    ``O(N)`` but exact and dependency-free.
    """

    def __init__(self, points: npt.ArrayLike) -> None:
        """Store the sample points.

        Args:
            points: Sample points of shape ``(N, 2)``.
        """
        self._points = _as_point_array(points)

    def nearest(self, point: npt.ArrayLike) -> int:
        """Return the index of the sample closest to ``point``.

        Args:
            point: Query point ``(x, y)``.

        Returns:
            Index of the nearest sample; ``numpy.argmin`` keeps the first index
            on exact ties.
        """
        query = np.asarray(point, dtype=np.float64).reshape(2)
        distances = np.hypot(self._points[:, 0] - query[0], self._points[:, 1] - query[1])
        return int(np.argmin(distances))


class KDTreeIndex:
    """SciPy k-d tree nearest-neighbour search with brute-force tie semantics.

    The tree answers the query in ``O(log N)``; samples lying on the same
    distance shell are then re-ranked by exact distance and index so the
    result matches :class:`BruteForceIndex`.
    """

    def __init__(self, points: npt.ArrayLike) -> None:
        """Build the k-d tree once over the sample points.

        Args:
            points: Sample points of shape ``(N, 2)``.

        Raises:
            racetrack.utils.exceptions.ConfigurationError: If SciPy is not
                installed in the active environment.
        """
        self._points = _as_point_array(points)
        self._tree = self._kdtree_class()(self._points)

    @staticmethod
    def _kdtree_class() -> Any:
        """Import SciPy's k-d tree lazily.

        Returns:
            ``scipy.spatial.KDTree`` class.

        Raises:
            racetrack.utils.exceptions.ConfigurationError: If SciPy is not
                installed in the active environment.
        """
        try:
            from scipy.spatial import KDTree
        except ModuleNotFoundError as exc:
            msg = (
                "KDTreeIndex requires SciPy. "
                "Install with `pip install -e '.[kdtree]'`."
            )
            raise ConfigurationError(msg) from exc
        return KDTree

    def nearest(self, point: npt.ArrayLike) -> int:
        """Return the index of the sample closest to ``point``.

        Args:
            point: Query point ``(x, y)``.

        Returns:
            Index of the nearest sample; the lowest index wins exact ties.
        """
        query = np.asarray(point, dtype=np.float64).reshape(2)
        if not np.all(np.isfinite(query)):
            distances = np.hypot(self._points[:, 0] - query[0], self._points[:, 1] - query[1])
            return int(np.argmin(distances))
        best_distance, best_index = self._tree.query(query, k=1)

        radius = best_distance * (1.0 + TIE_RADIUS_REL_TOL) + TIE_RADIUS_REL_TOL
        candidates = np.sort(np.asarray(self._tree.query_ball_point(query, r=radius), dtype=int))
        if candidates.size == 0:
            return int(best_index)
        candidate_points = self._points[candidates]
        distances = np.hypot(candidate_points[:, 0] - query[0], candidate_points[:, 1] - query[1])
        return int(candidates[int(np.argmin(distances))])


def build_spatial_index(points: npt.ArrayLike, kind: str = DEFAULT_SPATIAL_INDEX) -> SpatialIndex:
    """Create a spatial index of the requested kind.

    Args:
        points: Sample points of shape ``(N, 2)``.
        kind: Spatial index identifier (``brute_force`` or ``kdtree``).

    Returns:
        Spatial index over ``points``.

    Raises:
        racetrack.utils.exceptions.ConfigurationError: If ``kind`` is unknown
            or its dependency is missing.
    """
    if kind == "brute_force":
        return BruteForceIndex(points)
    if kind == "kdtree":
        return KDTreeIndex(points)
    msg = f"spatial index must be one of {VALID_SPATIAL_INDEXES}, got: {kind!r}"
    raise ConfigurationError(msg)
