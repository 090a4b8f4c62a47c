import json
import logging
import sys
import unittest
from pathlib import Path

import matplotlib

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from wallseed_core.config import AppConfig
from wallseed_core.diagnostics import build_doctor_payload
from wallseed_core.logging_setup import JsonFormatter
from wallseed_renderer import StaticFontProvider

SANS = Path(matplotlib.get_data_path()) / "fonts" / "ttf" / "DejaVuSans.ttf"


class DiagnosticsTests(unittest.TestCase):
    def test_doctor_payload_reports_fonts(self):
        payload = build_doctor_payload(AppConfig(), StaticFontProvider.from_paths([SANS]))
        self.assertEqual(payload["fonts"]["count"], 1)
        self.assertEqual(payload["fonts"]["sample"], [str(SANS)])
        self.assertEqual(payload["config"]["seed"]["width"], 1920)
        self.assertIn("freetype", payload)
        json.dumps(payload)


class JsonFormatterTests(unittest.TestCase):
    def test_formats_event_and_kind(self):
        record = logging.LogRecord("wallseed.composer", logging.ERROR, __file__, 1, "render failed", None, None)
        record.event = "render_failed"
        record.kind = "MissingGlyph"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "ERROR")
        self.assertEqual(payload["logger"], "wallseed.composer")
        self.assertEqual(payload["msg"], "render failed")
        self.assertEqual(payload["event"], "render_failed")
        self.assertEqual(payload["kind"], "MissingGlyph")

    def test_formats_font_selection_fields(self):
        record = logging.LogRecord("wallseed.fonts", logging.INFO, __file__, 1, "font selected", None, None)
        record.event = "font_selected"
        record.font = "/fonts/a.ttc#2"
        record.candidates = 12
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["font"], "/fonts/a.ttc#2")
        self.assertEqual(payload["candidates"], 12)
        self.assertNotIn("char", payload)


if __name__ == "__main__":
    unittest.main()
