"""
Test cases for configuration loading and validation.
"""
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import airscroll.config
from airscroll.config import Cfg, default_config_path, load_config
from airscroll.exceptions import ConfigError


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write(self, text: str) -> str:
        path = Path(self.tmpdir.name) / "config.yaml"
        path.write_text(text)
        return str(path)

    def test_default_file_matches_builtin_defaults(self):
        self.assertTrue(default_config_path().exists())
        self.assertEqual(load_config(), Cfg())

    def test_default_file_ships_inside_package(self):
        # Installed copies only carry files under the package directory
        package_dir = Path(airscroll.config.__file__).resolve().parent
        self.assertEqual(default_config_path().resolve().parent, package_dir)
        self.assertIn("config.default.yaml", [p.name for p in package_dir.iterdir()])

    def test_default_values(self):
        cfg = load_config()
        self.assertEqual(cfg.scroll.warmup_ms, 400)
        self.assertEqual(cfg.orientation.transition_ms, 500)
        self.assertEqual(cfg.scroll.history_capacity, 50)
        self.assertEqual(cfg.scroll.analysis_window, 12)
        self.assertEqual(cfg.smoothing.centroid.alpha_min, 0.08)
        self.assertEqual(cfg.smoothing.pointer.speed_high, 0.05)
        self.assertEqual(cfg.click.z_threshold, -0.06)
        self.assertEqual(cfg.click.cooldown_ms, 1000)

    def test_partial_file_keeps_defaults(self):
        cfg = load_config(self.write("scroll:\n  warmup_ms: 250\nsmoothing:\n  pointer:\n    alpha_max: 0.9\n"))
        self.assertEqual(cfg.scroll.warmup_ms, 250)
        self.assertEqual(cfg.scroll.dead_zone, 0.0005)
        self.assertEqual(cfg.smoothing.pointer.alpha_max, 0.9)
        self.assertEqual(cfg.smoothing.pointer.alpha_min, 0.1)
        self.assertEqual(cfg.smoothing.centroid.alpha_max, 0.6)

    def test_empty_file_is_all_defaults(self):
        self.assertEqual(load_config(self.write("")), Cfg())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(str(Path(self.tmpdir.name) / "nope.yaml"))

    def test_unknown_section(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("gestures:\n  scroll: {}\n"))

    def test_unknown_key(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("click:\n  threshold: -0.1\n"))

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("scroll: [unclosed\n"))

    def test_alpha_order_is_validated(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("smoothing:\n  centroid:\n    alpha_min: 0.7\n    alpha_max: 0.6\n"))

    def test_speed_thresholds_are_validated(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("smoothing:\n  pointer:\n    speed_low: 0.05\n    speed_high: 0.05\n"))

    def test_window_bounds_are_validated(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("scroll:\n  min_samples: 20\n"))

    def test_click_threshold_must_point_forward(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("click:\n  z_threshold: 0.06\n"))


if __name__ == '__main__':
    unittest.main()
