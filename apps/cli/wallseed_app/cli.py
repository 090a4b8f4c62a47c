"""CLI entrypoints for seeding and updating background images."""

from __future__ import annotations

import argparse
import json
from importlib import metadata
from pathlib import Path

from PIL import Image

from wallseed_core import build_doctor_payload, load_config
from wallseed_core.config import AppConfig
from wallseed_core.logging_setup import configure_logging, get_logger
from wallseed_renderer import (
    BackgroundComposer,
    Color,
    FontProvider,
    ParseError,
    RasterOptions,
    RenderError,
    RenderedImage,
    StaticFontProvider,
    SystemFontProvider,
)

EXIT_CODE_RENDER_FAILED = 2


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _installed_version() -> str:
    try:
        return metadata.version("wallseed")
    except Exception:
        return "0.1.0"


def _color_arg(text: str) -> Color:
    try:
        return Color.parse(text)
    except ParseError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer {text!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _provider(font: str | None) -> FontProvider:
    if font:
        return StaticFontProvider.from_paths([Path(font).expanduser()])
    return SystemFontProvider()


def _composer(cfg: AppConfig, args: argparse.Namespace) -> BackgroundComposer:
    return BackgroundComposer(
        provider=_provider(getattr(args, "font", None)),
        options=RasterOptions(hinting=cfg.raster.hinting, antialias=cfg.raster.antialias),
        pixel_size=_given(getattr(args, "size", None), cfg.text.pixel_size),
        min_pixel_size=cfg.text.min_pixel_size,
        fill_ratio=cfg.text.fill_ratio,
    )


def _given(value, default):
    return default if value is None else value


def _failure(exc: RenderError) -> int:
    get_logger().error(f"render failed: {exc}", extra={"event": "render_failed", "kind": exc.kind.value, "char": exc.char})
    _print_json({"success": False, "kind": exc.kind.value, "error": str(exc)})
    return EXIT_CODE_RENDER_FAILED


def cmd_seed(args: argparse.Namespace) -> int:
    cfg = load_config()
    width = _given(args.width, cfg.seed.width)
    height = _given(args.height, cfg.seed.height)
    background = _given(args.background, Color.parse(cfg.seed.background))
    text = cfg.seed.text if args.text is None else args.text
    out = Path(args.out or cfg.seed.output).expanduser()

    try:
        rendered = _composer(cfg, args).seed(width, height, background, text)
    except RenderError as exc:
        return _failure(exc)

    out.parent.mkdir(parents=True, exist_ok=True)
    rendered.image.save(out)
    _print_json(
        {
            "success": True,
            "output": str(out),
            "width": rendered.width,
            "height": rendered.height,
            "background": str(rendered.background),
            "text_color": str(rendered.text_color),
            "font": rendered.font_path,
            "pixel_size": rendered.pixel_size,
        }
    )
    return 0


def cmd_update(args: argparse.Namespace) -> int:
    cfg = load_config()
    path = Path(args.image or cfg.seed.output).expanduser()
    if not path.exists():
        _print_json({"success": False, "error": f"Image not found: {path}"})
        return EXIT_CODE_RENDER_FAILED

    with Image.open(path) as img:
        existing = RenderedImage.from_image(img.convert("RGB"))
    rendered = _composer(cfg, args).update(existing)
    rendered.image.save(path)
    _print_json({"success": True, "output": str(path), "background": str(rendered.background)})
    return 0


def cmd_list_fonts(_args: argparse.Namespace) -> int:
    _print_json([{"path": f.path, "index": f.index} for f in SystemFontProvider().list_fonts()])
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wallseed", description="Seed background images with text")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_installed_version()}")
    sub = parser.add_subparsers(dest="command")

    img_cmd = sub.add_parser("img", help="Manipulate background images")
    img_sub = img_cmd.add_subparsers(dest="img_cmd", required=True)

    seed_cmd = img_sub.add_parser("seed", help="Seed a new background image that can be updated afterwards")
    seed_cmd.add_argument("-W", "--width", type=_positive_int, default=None, help="Image width in pixels (default 1920)")
    seed_cmd.add_argument("-H", "--height", type=_positive_int, default=None, help="Image height in pixels (default 1080)")
    seed_cmd.add_argument(
        "-b",
        "--background",
        type=_color_arg,
        default=None,
        help="Background color as #RRGGBB (default #FFFFFF)",
    )
    seed_cmd.add_argument("--text", default=None, help="Text to draw")
    seed_cmd.add_argument("--font", default=None, help="Use this font file instead of a random installed font")
    seed_cmd.add_argument("--size", type=_positive_int, default=None, help="Fixed glyph size in pixels")
    seed_cmd.add_argument("--out", default=None, help="Output image path")
    seed_cmd.set_defaults(func=cmd_seed)

    update_cmd = img_sub.add_parser("update", help="Update an existing background image")
    update_cmd.add_argument("--image", default=None, help="Image to update (default: configured output)")
    update_cmd.set_defaults(func=cmd_update)

    fonts_cmd = sub.add_parser("list-fonts", help="List installed fonts")
    fonts_cmd.set_defaults(func=cmd_list_fonts)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics and detected fonts")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "func", None) is None:
        # Parse empty args, as the user may have supplied only a help flag.
        parser.print_help()
        return 0
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
