"""Command line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import CutterSettings, PlotBounds, PlotSettings, PreviewSettings
from .controller import TARGETS, PlotterController
from .designs import DESIGNS
from .errors import ConfigurationError, PlotterError

logger = logging.getLogger(__name__)


def _parse_bounds(value: str) -> PlotBounds:
    try:
        return PlotBounds.parse(value)
    except ConfigurationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rouletteplot",
        description="Plot hypotrochoid designs on a USCutter plotter or preview them on screen.",
    )
    parser.add_argument(
        "--target",
        "-t",
        choices=TARGETS,
        default="preview",
        help="Output device: the plotter, an on-screen preview, an SVG file or a dry run.",
    )
    parser.add_argument(
        "--port",
        "-p",
        default=CutterSettings.port,
        help="Serial port of the plotter (e.g. COM12 or /dev/ttyUSB0).",
    )
    parser.add_argument(
        "--bounds",
        "-b",
        type=_parse_bounds,
        default=PlotBounds(),
        metavar="LLX,LLY,URX,URY",
        help="Plot rectangle in millimeters, lower-left then upper-right corner, e.g. -40,-40,40,40.",
    )
    parser.add_argument("--design", "-d", choices=sorted(DESIGNS), default="demo", help="Design to plot.")
    parser.add_argument("--svg-out", dest="svg_path", metavar="PATH", help="Output file for the svg target.")
    parser.add_argument(
        "--strict-io",
        action="store_true",
        help="Abort on serial write errors other than timeouts instead of skipping the command.",
    )
    parser.add_argument("--hold", action="store_true", help="Keep the preview window open until clicked.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> PlotSettings:
    return PlotSettings(
        target=args.target,
        bounds=args.bounds,
        cutter=CutterSettings(port=args.port, strict_io=args.strict_io),
        preview=PreviewSettings(svg_path=args.svg_path, hold=args.hold),
        design=args.design,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.target == "svg" and not args.svg_path:
        parser.error("--svg-out is required with --target svg")

    settings = settings_from_args(args)
    try:
        controller = PlotterController.from_settings(settings)
        controller.run_named(settings.design)
    except PlotterError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
