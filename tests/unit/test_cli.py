import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

import matplotlib
from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from wallseed_app import cli
from wallseed_core.config import AppConfig
from wallseed_renderer import Color

SANS = Path(matplotlib.get_data_path()) / "fonts" / "ttf" / "DejaVuSans.ttf"


def _run(args):
    parsed = cli.build_parser().parse_args(args)
    out = io.StringIO()
    with mock.patch.object(cli, "load_config", return_value=AppConfig()), redirect_stdout(out):
        rc = parsed.func(parsed)
    return rc, json.loads(out.getvalue())


class ParserTests(unittest.TestCase):
    def test_seed_defaults(self):
        args = cli.build_parser().parse_args(["img", "seed"])
        self.assertEqual(args.command, "img")
        self.assertEqual(args.img_cmd, "seed")
        self.assertIsNone(args.width)
        self.assertIsNone(args.background)

    def test_seed_options(self):
        args = cli.build_parser().parse_args(["img", "seed", "-W", "800", "-H", "600", "-b", "#102030"])
        self.assertEqual((args.width, args.height), (800, 600))
        self.assertEqual(args.background, Color(0x10, 0x20, 0x30))

    def test_invalid_background_is_usage_error(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli.build_parser().parse_args(["img", "seed", "--background", "#12"])
        self.assertEqual(ctx.exception.code, 2)

    def test_non_positive_sizes_are_usage_errors(self):
        for argv in (["-W", "0"], ["-H", "-5"], ["--size", "-3"], ["-W", "wide"]):
            with self.subTest(argv=argv), redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
                cli.build_parser().parse_args(["img", "seed", *argv])
            self.assertEqual(ctx.exception.code, 2)

    def test_update_command(self):
        args = cli.build_parser().parse_args(["img", "update"])
        self.assertEqual(args.img_cmd, "update")
        self.assertIsNone(args.image)

    def test_list_fonts_and_doctor(self):
        parser = cli.build_parser()
        self.assertEqual(parser.parse_args(["list-fonts"]).command, "list-fonts")
        self.assertEqual(parser.parse_args(["doctor"]).command, "doctor")


class CommandTests(unittest.TestCase):
    def test_seed_writes_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "nested" / "bg.png"
            rc, payload = _run(
                ["img", "seed", "-W", "120", "-H", "60", "-b", "000000", "--font", str(SANS), "--out", str(out)]
            )
            self.assertEqual(rc, 0)
            self.assertTrue(payload["success"])
            self.assertEqual(payload["text_color"], "#ffffff")
            with Image.open(out) as img:
                self.assertEqual(img.size, (120, 60))

    def test_explicit_width_overrides_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "bg.png"
            rc, payload = _run(["img", "seed", "-W", "1", "-H", "3", "--text", "", "--font", str(SANS), "--out", str(out)])
            self.assertEqual(rc, 0)
            self.assertEqual((payload["width"], payload["height"]), (1, 3))
            with Image.open(out) as img:
                self.assertEqual(img.size, (1, 3))

    def test_seed_failure_writes_nothing(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "bg.png"
            rc, payload = _run(["img", "seed", "--text", "漢", "--font", str(SANS), "--out", str(out)])
            self.assertEqual(rc, cli.EXIT_CODE_RENDER_FAILED)
            self.assertFalse(payload["success"])
            self.assertEqual(payload["kind"], "MissingGlyph")
            self.assertFalse(out.exists())

    def test_update_keeps_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bg.png"
            Image.new("RGB", (16, 8), (9, 8, 7)).save(path)
            rc, payload = _run(["img", "update", "--image", str(path)])
            self.assertEqual(rc, 0)
            self.assertEqual(payload["background"], "#090807")
            with Image.open(path) as img:
                self.assertEqual(img.size, (16, 8))

    def test_update_missing_image(self):
        rc, payload = _run(["img", "update", "--image", "/nonexistent/bg.png"])
        self.assertEqual(rc, cli.EXIT_CODE_RENDER_FAILED)
        self.assertFalse(payload["success"])


if __name__ == "__main__":
    unittest.main()
