"""
Finger counting and gesture classification from convexity defects.

A convexity defect is a valley between two hull points. Deep, narrow valleys
are gaps between raised fingers, so N valid valleys mean N + 1 fingers.
The gesture is then picked by an ordered rule table over the finger count
and the boundary shape.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from .config import AnalyzerConfig
from .errors import MalformedGeometryError
from .geometry import RegionGeometry
from .types import (
    GESTURE_FIST,
    GESTURE_INDEX_UP,
    GESTURE_OK,
    GESTURE_PALM,
    GESTURE_PEACE,
    GESTURE_ROCK,
    GESTURE_THUMBS_UP,
    MAX_FINGERS,
    NO_FINGERS,
    ConvexityDefect,
    FingerData,
    FrameResult,
    Point2,
    fingers_label,
)
from .utils import as_points, distance, min_pairwise_distance

logger = logging.getLogger(__name__)


def defect_angle(start: Point2, far: Point2, end: Point2) -> Optional[float]:
    """
    Interior angle at ``far`` of the triangle (start, far, end), in degrees.

    Returns None when any side has zero length (coincident points) or the
    coordinates are not finite.
    """

    ab = distance(start, far)
    bc = distance(far, end)
    ac = distance(start, end)
    if ab == 0.0 or bc == 0.0 or ac == 0.0:
        return None
    cos_angle = (ab * ab + bc * bc - ac * ac) / (2 * ab * bc)
    if not math.isfinite(cos_angle):
        return None
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.degrees(math.acos(cos_angle))


@dataclass(frozen=True)
class GestureInput:
    """Arguments shared by every gesture rule."""

    fingers: int
    boundary: np.ndarray  # (N, 2)
    centroid: Point2


@dataclass(frozen=True)
class GestureRule:
    name: str
    matches: Callable[[GestureInput, AnalyzerConfig], bool]
    label: str


def _topmost(boundary: np.ndarray, k: int) -> np.ndarray:
    # stable sort keeps first-seen order among equal y
    order = np.argsort(boundary[:, 1], kind="stable")
    return boundary[order[:k]]


def _thumb_above_centroid(g: GestureInput, cfg: AnalyzerConfig) -> bool:
    if len(g.boundary) == 0:
        return False
    return float(_topmost(g.boundary, 1)[0, 1]) < g.centroid[1]


def _tips_spread(g: GestureInput, cfg: AnalyzerConfig) -> bool:
    top = _topmost(g.boundary, 2)
    if len(top) < 2:
        return False
    return abs(float(top[0, 0] - top[1, 0])) > cfg.peace_min_dx


def _pinch_circle(g: GestureInput, cfg: AnalyzerConfig) -> bool:
    # Coarse proxy: any two boundary points closer than the threshold.
    return min_pairwise_distance(g.boundary) < cfg.ok_max_distance


GESTURE_RULES: List[GestureRule] = [
    GestureRule("fist", lambda g, cfg: g.fingers == 0, GESTURE_FIST),
    GestureRule("palm", lambda g, cfg: g.fingers == MAX_FINGERS, GESTURE_PALM),
    GestureRule("thumbs_up", lambda g, cfg: g.fingers == 1 and _thumb_above_centroid(g, cfg), GESTURE_THUMBS_UP),
    GestureRule("index_up", lambda g, cfg: g.fingers == 1, GESTURE_INDEX_UP),
    GestureRule("peace", lambda g, cfg: g.fingers == 2 and _tips_spread(g, cfg), GESTURE_PEACE),
    GestureRule("rock", lambda g, cfg: g.fingers == 2, GESTURE_ROCK),
    GestureRule("ok", lambda g, cfg: g.fingers == 3 and _pinch_circle(g, cfg), GESTURE_OK),
]


class GestureAnalyzer:
    """
    Turns the boundary geometry of one region into a finger count and a gesture label.

    Stateless: every call depends only on its arguments and the configuration.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None, rules: Optional[Sequence[GestureRule]] = None) -> None:
        self._config = config or AnalyzerConfig()
        self._rules = tuple(rules if rules is not None else GESTURE_RULES)

    def count_fingers(self, defects: Sequence[ConvexityDefect], boundary) -> FingerData:
        """
        Count raised fingers from the defects of ``boundary``.

        Raises:
            MalformedGeometryError: if a defect references a point outside ``boundary``.
        """

        if len(defects) == 0:
            return NO_FINGERS

        cfg = self._config
        points = as_points(boundary)
        n = len(points)

        angles: List[float] = []
        for defect in defects:
            start_idx, end_idx, far_idx, depth = defect
            for idx in (start_idx, end_idx, far_idx):
                if not 0 <= idx < n:
                    raise MalformedGeometryError(f"Defect index {idx} out of range for {n} boundary points")

            if depth <= cfg.min_defect_depth:
                continue

            angle = defect_angle(points[start_idx], points[far_idx], points[end_idx])
            if angle is None:
                logger.debug("Skipping degenerate defect %s", tuple(defect))
                continue
            if angle < cfg.max_defect_angle:
                angles.append(angle)

        valid = len(angles)
        # fsum is exact, so the average does not depend on defect order
        avg_angle = math.fsum(angles) / valid if valid > 0 else 0.0
        return FingerData(count=min(MAX_FINGERS, valid + 1), avg_angle=avg_angle, valid_defects=valid)

    def classify(self, finger_count: int, boundary, centroid: Point2) -> str:
        """Label for ``finger_count``; the first matching rule wins, else ``"<N> Fingers"``."""
        g = GestureInput(fingers=finger_count, boundary=as_points(boundary), centroid=centroid)
        for rule in self._rules:
            if rule.matches(g, self._config):
                return rule.label
        return fingers_label(finger_count)

    def analyze(self, region: RegionGeometry) -> FrameResult:
        finger_data = self.count_fingers(region.defects, region.polygon)
        centroid = region.polygon_centroid if region.polygon_centroid is not None else region.centroid
        gesture = self.classify(finger_data.count, region.polygon, centroid)
        return FrameResult(
            finger_data=finger_data,
            gesture=gesture,
            centroid=region.centroid,
            area=region.area,
            defect_count=len(region.defects),
        )
