"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon as ShapelyPolygon


def as_array(points: list[tuple[float, float]] | tuple[tuple[float, float], ...]) -> NDArray[np.float64]:
    """Nx2 float array; empty input gives a (0, 2) array."""
    if len(points) == 0:
        return np.empty((0, 2))
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula over the implicitly closed ring. Positive = CCW."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(points: NDArray[np.float64]) -> float:
    return abs(signed_area(points))


def polygon_perimeter(points: NDArray[np.float64], closed: bool = True) -> float:
    """Sum of edge lengths, including the closing edge when ``closed``."""
    if len(points) < 2:
        return 0.0
    ring = np.vstack([points, points[:1]]) if closed else points
    diffs = np.diff(ring, axis=0)
    return float(np.sum(np.sqrt(np.sum(diffs**2, axis=1))))


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Vertex mean of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def polygon_centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Area centroid; degenerate rings fall back to the vertex mean."""
    if len(points) < 3 or polygon_area(points) < 1e-10:
        return centroid(points)
    c = ShapelyPolygon(points).centroid
    return (float(c.x), float(c.y))


def is_finite_point(point: tuple[float, float]) -> bool:
    return math.isfinite(point[0]) and math.isfinite(point[1])


def within(p: tuple[float, float], q: tuple[float, float], threshold: float) -> bool:
    """Chebyshev proximity: both axis deltas at most ``threshold``."""
    return abs(p[0] - q[0]) <= threshold and abs(p[1] - q[1]) <= threshold
