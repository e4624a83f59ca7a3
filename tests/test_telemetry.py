"""
Tests for per-frame telemetry rows.
"""
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from contour_gesture.pipeline import FrameContext
from contour_gesture.telemetry import TELEMETRY_COLUMNS, TelemetryRow
from contour_gesture.types import NO_GESTURE, FingerData, FrameResult


class TestTelemetryRow(unittest.TestCase):
    """Test building telemetry rows from frame results."""

    def setUp(self):
        self.result = FrameResult(
            finger_data=FingerData(count=3, avg_angle=41.5, valid_defects=2),
            gesture="3 Fingers",
            centroid=(320.5, 240.25),
            area=15000.0,
            defect_count=6,
        )
        self.context = FrameContext(index=12, started_at=100.0)

    def test_column_order(self):
        row = TelemetryRow.from_result(self.result, self.context, now=100.04)
        self.assertEqual(tuple(row.as_dict()), TELEMETRY_COLUMNS)

    def test_values(self):
        row = TelemetryRow.from_result(self.result, self.context, used_memory_mb=88.0, cpu_load=0.25, now=100.04)
        values = row.as_dict()
        self.assertEqual(values["frame"], 12)
        self.assertEqual(values["fingers"], 3)
        self.assertEqual(values["maxContourArea"], 15000.0)
        self.assertEqual(values["centerX"], 320.5)
        self.assertEqual(values["centerY"], 240.25)
        self.assertEqual(values["convexDefects"], 6)
        self.assertEqual(values["avgAngle"], 41.5)
        self.assertAlmostEqual(values["fps"], 25.0, places=6)
        self.assertEqual(values["usedMemoryMB"], 88.0)
        self.assertEqual(values["cpuLoad"], 0.25)
        self.assertEqual(values["gesture"], "3 Fingers")

    def test_no_gesture_row(self):
        values = TelemetryRow.from_result(NO_GESTURE, self.context, now=100.1).as_dict()
        self.assertEqual(values["fingers"], 0)
        self.assertEqual(values["gesture"], "")


if __name__ == "__main__":
    unittest.main()
