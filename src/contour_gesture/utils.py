from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .errors import MalformedGeometryError
from .types import Point2


def as_points(polygon) -> np.ndarray:
    """
    Normalize a polygon to a float64 ``(N, 2)`` array.

    Accepts a sequence of ``(x, y)`` pairs or an OpenCV contour of shape ``(N, 1, 2)``.
    """

    try:
        pts = np.asarray(polygon, dtype=np.float64)
    except (TypeError, ValueError) as e:
        # ragged sequences and non-numeric entries
        raise MalformedGeometryError(f"Not a polygon: {e}") from e
    if pts.ndim == 0:
        raise MalformedGeometryError(f"Not a polygon: {polygon!r}")
    if pts.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if pts.ndim < 2 or pts.shape[-1] != 2:
        raise MalformedGeometryError(f"Expected 2D points, got array of shape {pts.shape}")
    return pts.reshape(-1, 2)


def polygon_area(points: np.ndarray) -> float:
    """Absolute enclosed area (shoelace formula)."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def distance(p1: Point2, p2: Point2) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def min_pairwise_distance(points: np.ndarray) -> float:
    """Smallest distance between any two points of the polygon (inf if fewer than 2)."""
    n = len(points)
    if n < 2:
        return math.inf
    diff = points[:, None, :] - points[None, :, :]
    d = np.sqrt((diff ** 2).sum(axis=-1))
    iu = np.triu_indices(n, k=1)
    return float(d[iu].min())


def to_int_point(pt: Point2) -> Tuple[int, int]:
    return (int(round(pt[0])), int(round(pt[1])))
