from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .pipeline import FrameContext
from .types import FrameResult


TELEMETRY_COLUMNS: Tuple[str, ...] = (
    "frame",
    "fingers",
    "maxContourArea",
    "centerX",
    "centerY",
    "convexDefects",
    "avgAngle",
    "fps",
    "usedMemoryMB",
    "cpuLoad",
    "gesture",
)


@dataclass(frozen=True)
class TelemetryRow:
    """One row of per-frame performance telemetry."""

    frame: int
    fingers: int
    max_contour_area: float
    center_x: float
    center_y: float
    convex_defects: int
    avg_angle: float
    fps: float
    used_memory_mb: float
    cpu_load: float
    gesture: str

    @classmethod
    def from_result(
        cls,
        result: FrameResult,
        context: FrameContext,
        used_memory_mb: float = 0.0,
        cpu_load: float = 0.0,
        now: Optional[float] = None,
    ) -> "TelemetryRow":
        """Memory and CPU figures are process metrics the caller measures."""
        cx, cy = result.centroid
        return cls(
            frame=context.index,
            fingers=result.fingers,
            max_contour_area=result.area,
            center_x=cx,
            center_y=cy,
            convex_defects=result.defect_count,
            avg_angle=result.finger_data.avg_angle,
            fps=context.fps(now),
            used_memory_mb=used_memory_mb,
            cpu_load=cpu_load,
            gesture=result.gesture,
        )

    def as_dict(self) -> Dict[str, Union[int, float, str]]:
        values = (
            self.frame,
            self.fingers,
            self.max_contour_area,
            self.center_x,
            self.center_y,
            self.convex_defects,
            self.avg_angle,
            self.fps,
            self.used_memory_mb,
            self.cpu_load,
            self.gesture,
        )
        return dict(zip(TELEMETRY_COLUMNS, values))
