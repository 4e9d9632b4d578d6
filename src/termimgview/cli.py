import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from termimgview.charsets import BUILTIN_RAMPS
from termimgview.config import FONT_ASPECT_RATIO, RenderConfig, ShadeMethod
from termimgview.converter import decode_image, image_to_ansi
from termimgview.errors import ConfigError, DecodeError
from termimgview.terminal import write_frame

try:
    __version__ = version("termimgview")
except PackageNotFoundError:
    __version__ = "0.0.0"

PROG = "termimgview"

EPILOG = (
    "Shade maps:\n"
    + "\n".join(f"  {name}: '{ramp}'" for name, ramp in BUILTIN_RAMPS.items())
    + "\n  custom: any other string, sparsest glyph first\n\n"
    "Example usage:\n"
    f'  {PROG} photo.png -s 0.15 -m " -:!|#@"\n'
    f"  {PROG} photo.jpg -s 1 -i -m ascii"
)


def _parse_rgb(text: str) -> tuple[int, int, int]:
    parts = text.split(",")
    try:
        channels = tuple(int(p) for p in parts)
    except ValueError:
        raise ConfigError("remove-bg", f"expected R,G,B integers, got {text!r}") from None
    if len(channels) != 3:
        raise ConfigError("remove-bg", f"expected three comma-separated channels, got {text!r}")
    return channels


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Display an image in the terminal as coloured text",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", help="Path to the image file to be displayed")
    parser.add_argument(
        "-m", "--shade-method", default="blocks", help="Shading method: blocks, ascii or a custom ramp (default: blocks)"
    )
    parser.add_argument("-s", "--scale", type=float, default=1.0, help="The scale of the image (default: 1)")
    parser.add_argument("-g", "--grayscale", action="store_true", default=False, help="Render in grayscale")
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Invert colours")
    parser.add_argument(
        "-a",
        "--adjust-aspect-ratio",
        type=float,
        default=FONT_ASPECT_RATIO,
        help=f"Vertical correction for the font cell shape (default: {FONT_ASPECT_RATIO})",
    )
    parser.add_argument("-b", "--brightness", type=float, default=1.0, help="Brightness multiplier (default: 1)")
    parser.add_argument(
        "-r", "--hue-rotation", type=float, default=0.0, help="Rotate the hue by this many degrees (default: 0)"
    )
    parser.add_argument("--remove-bg", default=None, metavar="R,G,B", help="Treat pixels near this colour as transparent")
    parser.add_argument(
        "--bg-tolerance",
        type=float,
        default=10.0,
        help="Colour distance used by --remove-bg (default: 10)",
    )
    parser.add_argument("--no-colour", action="store_true", default=False, help="Print glyphs without colour")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    return RenderConfig(
        scale=args.scale,
        aspect_ratio_adjust=args.adjust_aspect_ratio,
        grayscale=args.grayscale,
        invert=args.invert,
        brightness=args.brightness,
        hue_rotation_degrees=args.hue_rotation,
        shade_method=ShadeMethod.parse(args.shade_method),
        colour=not args.no_colour,
        remove_background=_parse_rgb(args.remove_bg) if args.remove_bg is not None else None,
        background_tolerance=args.bg_tolerance,
    ).validate()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(stream=sys.stderr, level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")

    try:
        config = config_from_args(args)
    except ConfigError as exc:
        parser.error(str(exc))

    try:
        image = decode_image(args.file)
    except DecodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    write_frame(image_to_ansi(image, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
