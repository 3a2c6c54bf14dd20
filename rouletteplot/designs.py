"""Ready-made plot recipes.

A design is any callable taking a :class:`~rouletteplot.device.base.Plotter`;
it issues drawing calls only and leaves ``initialize``/``finalize`` to the
controller.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, List, Sequence, Tuple

from .device.base import Plotter
from .geometry import Placement, Point, RollerParams
from .roulette import full_hypotrochoid

Design = Callable[[Plotter], None]

# (color, params) passes of the demo plot, all centered at the origin.
DEMO_PASSES: Sequence[Tuple[str, RollerParams]] = (
    ("cyan", RollerParams(17.1, 11.4, 7, 12)),
    ("green", RollerParams(30.0, 16.5, 5, 6)),
    ("black", RollerParams(30.0, 30.0, 5, 6)),
)

ROSETTE_PASSES: Sequence[Tuple[str, RollerParams]] = (
    ("cyan", RollerParams(5.7, 3.8, 7, 12)),
    ("green", RollerParams(10.0, 5.5, 5, 6)),
    ("black", RollerParams(10.0, 10.0, 5, 6)),
)


def demo(plotter: Plotter) -> None:
    """Three nested hypotrochoids in three pens."""
    for color, params in DEMO_PASSES:
        plotter.change_color(color)
        full_hypotrochoid(plotter, params)


def hex_grid_centers(rows: int = 5, pitch_mm: float = 24.0) -> List[Point]:
    """Centers of a hexagon of ``rows`` rows, widest row through the origin.

    ``rows`` should be odd.  The middle row holds ``rows`` cells and each row
    further out holds one cell less.
    """
    half = rows // 2
    row_height = pitch_mm * math.sqrt(3.0) / 2.0
    centers: List[Point] = []
    for row in range(-half, half + 1):
        cells = rows - abs(row)
        for col in range(cells):
            x = (col - (cells - 1) / 2.0) * pitch_mm
            centers.append(Point(x, row * row_height))
    return centers


def rosette_grid(plotter: Plotter, rows: int = 5, pitch_mm: float = 24.0) -> None:
    """Small hypotrochoids tiled on a hexagonal grid, one pass per pen."""
    centers = hex_grid_centers(rows, pitch_mm)
    for color, params in ROSETTE_PASSES:
        plotter.change_color(color)
        for cx, cy in centers:
            full_hypotrochoid(plotter, params, Placement(cx, cy))


DESIGNS: Dict[str, Design] = {
    "demo": demo,
    "rosette-grid": rosette_grid,
}


__all__ = ["Design", "DESIGNS", "demo", "rosette_grid", "hex_grid_centers"]
