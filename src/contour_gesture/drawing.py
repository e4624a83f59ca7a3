from __future__ import annotations

from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from .geometry import RegionGeometry
from .types import FrameResult
from .utils import to_int_point


def draw_point(frame, pt: Tuple[int, int], color=(0, 0, 255), radius=5):
    cv2.circle(frame, pt, radius, color, -1)
    return frame


def draw_text(frame, text: str, org: Tuple[int, int], color=(0, 255, 0), scale=1.0, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_polyline(frame, points: Iterable[Tuple[float, float]], color=(0, 255, 0), thickness=2, closed=True):
    pts = np.array([(int(round(x)), int(round(y))) for x, y in points], dtype=np.int32)
    if pts.shape[0] < 2:
        return frame
    cv2.polylines(frame, [pts], closed, color, thickness)
    return frame


def caption(result: FrameResult) -> str:
    return f"Fingers: {result.fingers} - {result.gesture}"


def annotate(frame, result: FrameResult, region: Optional[RegionGeometry], draw_defects: bool = True):
    """Draw contour (green), hull (blue), defect far points (red) and the caption. Works in place."""
    if region is None or not result.found:
        return frame

    draw_polyline(frame, region.contour, color=(0, 255, 0))
    draw_polyline(frame, region.hull_points, color=(255, 0, 0))
    if draw_defects:
        for defect in region.defects:
            draw_point(frame, to_int_point(region.polygon[defect.far_index]))
    draw_point(frame, to_int_point(result.centroid), color=(255, 255, 255), radius=4)
    draw_text(frame, caption(result), (20, 40))
    return frame
