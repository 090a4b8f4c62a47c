import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from wallseed_core.config import AppConfig, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual((cfg.seed.width, cfg.seed.height), (1920, 1080))
            self.assertEqual(cfg.seed.background, "#FFFFFF")
            self.assertTrue(cfg.raster.hinting)
            self.assertTrue(cfg.raster.antialias)
            self.assertIsNone(cfg.text.pixel_size)

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.seed.width = 640
            cfg.seed.background = "#123456"
            cfg.raster.antialias = False
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.seed.width, 640)
            self.assertEqual(reloaded.seed.background, "#123456")
            self.assertFalse(reloaded.raster.antialias)

    def test_normalizes_bad_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "seed": {"width": 0, "height": 99999, "background": "not-a-color", "unknown": 1},
                "text": {"fill_ratio": 3.0, "min_pixel_size": -4},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.seed.width, 1)
            self.assertEqual(cfg.seed.height, 16384)
            self.assertEqual(cfg.seed.background, "#FFFFFF")
            self.assertEqual(cfg.text.fill_ratio, 0.8)
            self.assertEqual(cfg.text.min_pixel_size, 1)
            self.assertFalse(hasattr(cfg.seed, "unknown"))

    def test_background_is_canonicalized(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"seed": {"background": "ABCDEF"}}), encoding="utf-8")
            self.assertEqual(load_config(path).seed.background, "#abcdef")

    def test_corrupt_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())


if __name__ == "__main__":
    unittest.main()
