"""Example script that plots a ring of rotated hypotrochoids to an SVG file."""
from __future__ import annotations

import logging
import math

from rouletteplot.config import PlotBounds, PreviewSettings
from rouletteplot.controller import PlotterController
from rouletteplot.device import PreviewPlotter, SvgCanvas
from rouletteplot.geometry import Placement, RollerParams
from rouletteplot.roulette import full_hypotrochoid


def build_ring(plotter, copies: int = 6, ring_radius: float = 25.0) -> None:
    params = RollerParams(rolling_radius_mm=6.0, pen_radius_mm=4.5, inner=5, outer=8)
    for k in range(copies):
        angle = 2 * math.pi * k / copies
        placement = Placement(ring_radius * math.cos(angle), ring_radius * math.sin(angle), angle)
        full_hypotrochoid(plotter, params, placement)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    bounds = PlotBounds(-60.0, -60.0, 60.0, 60.0)
    plotter = PreviewPlotter(bounds, PreviewSettings(), canvas=SvgCanvas("rotated_rosette.svg"))
    PlotterController(plotter).run(build_ring)


if __name__ == "__main__":
    main()
