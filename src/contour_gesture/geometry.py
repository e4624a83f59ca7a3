from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .config import GeometryConfig
from .errors import MalformedGeometryError
from .types import ConvexityDefect, Point2
from .utils import as_points

logger = logging.getLogger(__name__)

# cv2.convexityDefects reports depth as fixed point with 8 fractional bits.
DEFECT_DEPTH_SCALE = 256.0


@dataclass(frozen=True)
class RegionGeometry:
    """Boundary geometry of the selected region, ready for analysis."""

    contour: np.ndarray  # raw contour, (N, 2) float
    polygon: np.ndarray  # approximated boundary, (M, 2) float
    hull_indices: Tuple[int, ...]  # into polygon
    defects: Tuple[ConvexityDefect, ...]
    centroid: Point2  # raw contour, reported to callers
    area: float
    polygon_centroid: Optional[Point2] = None  # approximated boundary, used for classification

    @property
    def hull_points(self) -> np.ndarray:
        return self.polygon[list(self.hull_indices)]


def clean_mask(mask: np.ndarray, config: Optional[GeometryConfig] = None) -> np.ndarray:
    """Morphological open + close, then median blur to drop speckle noise."""
    cfg = config or GeometryConfig()
    if mask.ndim != 2:
        raise ValueError(f"Expected a single-channel mask, got shape {mask.shape}")
    mask = mask.astype(np.uint8)
    kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (cfg.morph_kernel, cfg.morph_kernel))
    mask = cv2.morphologyEx(mask, cv2.MORPH_OPEN, kernel)
    mask = cv2.morphologyEx(mask, cv2.MORPH_CLOSE, kernel)
    return cv2.medianBlur(mask, cfg.median_blur)


def find_contours(mask: np.ndarray, config: Optional[GeometryConfig] = None) -> List[np.ndarray]:
    """External contours of a binary mask, after cleanup."""
    cleaned = clean_mask(mask, config)
    contours, _ = cv2.findContours(cleaned, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    return list(contours)


def _to_cv_contour(points: np.ndarray) -> np.ndarray:
    return np.round(as_points(points)).astype(np.int32).reshape(-1, 1, 2)


def extract_region(contour, config: Optional[GeometryConfig] = None) -> RegionGeometry:
    """
    Derive the polygon, hull, convexity defects, centroid and area of one contour.

    Centroid and area come from the raw contour; hull, defects and the
    classification centroid from its polygon approximation.

    Raises:
        MalformedGeometryError: if the contour is degenerate (fewer than 3 points,
            zero area, or rejected by OpenCV).
    """

    cfg = config or GeometryConfig()
    raw = _to_cv_contour(contour)
    if len(raw) < 3:
        raise MalformedGeometryError(f"Contour has {len(raw)} points, need at least 3")

    m = cv2.moments(raw)
    if m["m00"] == 0:
        raise MalformedGeometryError("Contour encloses zero area")
    centroid = (m["m10"] / m["m00"], m["m01"] / m["m00"])
    area = float(cv2.contourArea(raw))

    approx = cv2.approxPolyDP(raw, cfg.approx_epsilon, True)
    if len(approx) < 3:
        raise MalformedGeometryError(f"Approximated polygon has {len(approx)} points, need at least 3")

    try:
        hull = cv2.convexHull(approx, returnPoints=False)
        raw_defects = cv2.convexityDefects(approx, hull)
    except cv2.error as e:
        # Non-monotonous hulls on self-intersecting outlines.
        raise MalformedGeometryError(f"OpenCV rejected the contour: {e}") from e

    pm = cv2.moments(approx)
    polygon_centroid = (pm["m10"] / pm["m00"], pm["m01"] / pm["m00"]) if pm["m00"] != 0 else centroid

    defects: Tuple[ConvexityDefect, ...] = ()
    if raw_defects is not None:
        defects = tuple(
            ConvexityDefect(int(s), int(e), int(f), float(d) / DEFECT_DEPTH_SCALE)
            for s, e, f, d in raw_defects.reshape(-1, 4)
        )

    return RegionGeometry(
        contour=raw.reshape(-1, 2).astype(np.float64),
        polygon=approx.reshape(-1, 2).astype(np.float64),
        hull_indices=tuple(int(i) for i in hull.reshape(-1)),
        defects=defects,
        centroid=(float(centroid[0]), float(centroid[1])),
        area=area,
        polygon_centroid=(float(polygon_centroid[0]), float(polygon_centroid[1])),
    )
