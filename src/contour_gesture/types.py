from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Tuple


Point2 = Tuple[float, float]


# Gesture labels
GESTURE_NONE = ""
GESTURE_FIST = "Fist"
GESTURE_PALM = "Palm"
GESTURE_THUMBS_UP = "Thumbs Up"
GESTURE_INDEX_UP = "Index Up"
GESTURE_PEACE = "Peace"
GESTURE_ROCK = "Rock"
GESTURE_OK = "OK"

MAX_FINGERS = 5


def fingers_label(count: int) -> str:
    return f"{count} Fingers"


class ConvexityDefect(NamedTuple):
    """One convexity defect; indices point into the boundary polygon, depth is in pixels."""

    start_index: int
    end_index: int
    far_index: int
    depth: float


@dataclass(frozen=True)
class FingerData:
    """Finger counting result for a single region."""

    count: int  # 0..MAX_FINGERS
    avg_angle: float  # degrees, mean over valid defects only
    valid_defects: int


NO_FINGERS = FingerData(count=0, avg_angle=0.0, valid_defects=0)


@dataclass(frozen=True)
class FrameResult:
    """Everything one frame hands back to rendering and telemetry."""

    finger_data: FingerData
    gesture: str
    centroid: Point2
    area: float
    defect_count: int  # all defects reported for the region, valid or not

    @property
    def found(self) -> bool:
        return self.gesture != GESTURE_NONE

    @property
    def fingers(self) -> int:
        return self.finger_data.count


NO_GESTURE = FrameResult(
    finger_data=NO_FINGERS,
    gesture=GESTURE_NONE,
    centroid=(0.0, 0.0),
    area=0.0,
    defect_count=0,
)
