"""
Tests for frame annotation.
"""
import sys
import unittest
from pathlib import Path

import cv2
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from contour_gesture.drawing import annotate, caption
from contour_gesture.pipeline import GesturePipeline
from contour_gesture.types import NO_GESTURE


class TestAnnotate(unittest.TestCase):
    """Test drawing results onto frames."""

    def setUp(self):
        mask = np.zeros((480, 640), dtype=np.uint8)
        cv2.fillPoly(mask, [np.array([(100, 100), (300, 100), (300, 300), (100, 300)], dtype=np.int32)], 255)
        self.out = GesturePipeline().process_mask(mask)

    def test_draws_on_frame(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        returned = annotate(frame, self.out.result, self.out.region)
        self.assertIs(returned, frame)
        self.assertGreater(int(frame.sum()), 0)

    def test_nothing_drawn_without_region(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        annotate(frame, NO_GESTURE, None)
        self.assertEqual(int(frame.sum()), 0)

    def test_caption(self):
        self.assertTrue(caption(self.out.result).startswith(f"Fingers: {self.out.result.fingers} - "))


if __name__ == "__main__":
    unittest.main()
