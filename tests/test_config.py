"""
Tests for threshold configuration loading.
"""
import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from contour_gesture.config import AnalyzerConfig, PipelineConfig, config_from_dict, load_config
from contour_gesture.errors import ConfigError

REPO_ROOT = Path(__file__).parent.parent


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def _write(self, text):
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg.selector.min_area, 5000.0)
        self.assertEqual(cfg.analyzer.min_defect_depth, 25.0)
        self.assertEqual(cfg.analyzer.max_defect_angle, 85.0)
        self.assertEqual(cfg.analyzer.peace_min_dx, 40.0)
        self.assertEqual(cfg.analyzer.ok_max_distance, 50.0)

    def test_default_file_matches_builtin_defaults(self):
        self.assertEqual(load_config(REPO_ROOT / "config.default.yaml"), PipelineConfig())

    def test_partial_override(self):
        path = self._write("analyzer:\n  min_defect_depth: 18\n")
        cfg = load_config(path)
        self.assertEqual(cfg.analyzer.min_defect_depth, 18.0)
        self.assertIsInstance(cfg.analyzer.min_defect_depth, float)
        self.assertEqual(cfg.analyzer.max_defect_angle, 85.0)
        self.assertEqual(cfg.selector.min_area, 5000.0)

    def test_empty_file(self):
        self.assertEqual(load_config(self._write("")), PipelineConfig())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigError):
            load_config(self._write("analyzer: [unclosed\n"))

    def test_unknown_section(self):
        with self.assertRaises(ConfigError):
            config_from_dict({"camera": {"index": 0}})

    def test_unknown_key(self):
        with self.assertRaises(ConfigError):
            config_from_dict({"analyzer": {"depth": 10}})

    def test_non_positive_value(self):
        with self.assertRaises(ConfigError):
            config_from_dict({"selector": {"min_area": 0}})

    def test_wrong_type(self):
        with self.assertRaises(ConfigError):
            config_from_dict({"analyzer": {"max_defect_angle": "wide"}})

    def test_even_median_blur(self):
        with self.assertRaises(ConfigError):
            config_from_dict({"geometry": {"median_blur": 4}})

    def test_frozen(self):
        with self.assertRaises(Exception):
            AnalyzerConfig().min_defect_depth = 1.0


if __name__ == "__main__":
    unittest.main()
