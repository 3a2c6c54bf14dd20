"""Top-level package for the rouletteplot toolkit.

This package generates hypotrochoid (spirograph) curves in millimeters and
plays them on a USCutter pen plotter, an on-screen preview or an SVG file.
"""

from .geometry import Placement, Point, RollerParams
from .roulette import full_hypotrochoid, hypotrochoid_points, spirograph
from .device import MockPlotter, Plotter, PreviewPlotter, USCutter
from .controller import PlotterController, create_plotter

__all__ = [
    "Point",
    "Placement",
    "RollerParams",
    "full_hypotrochoid",
    "hypotrochoid_points",
    "spirograph",
    "Plotter",
    "MockPlotter",
    "PreviewPlotter",
    "USCutter",
    "PlotterController",
    "create_plotter",
]
