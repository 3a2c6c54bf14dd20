"""In-memory plotter used for dry runs and unit tests."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import PlotBounds
from ..geometry import bounding_box, distance
from .base import Plotter, PlotterState, XY

logger = logging.getLogger(__name__)

Op = Tuple  # ("move_to", x, y), ("draw", x, y), ("pen_up",), ...


@dataclass
class Stroke:
    """Continuous pen-down polyline in one color."""

    color: str
    pts: List[XY] = field(default_factory=list)

    def length(self) -> float:
        return sum(distance(a, b) for a, b in zip(self.pts, self.pts[1:]))


class MockPlotter(Plotter):
    """Small simulation that records every call of the plotting contract."""

    def __init__(self, bounds: Optional[PlotBounds] = None) -> None:
        self.bounds = bounds or PlotBounds()
        self.state = PlotterState.at_lower_left(self.bounds)
        self.ops: List[Op] = []
        self.strokes: List[Stroke] = []
        self.color = "black"
        self.initialized = False
        self.finalized = False
        self.closed = False

    # Lifecycle ----------------------------------------------------------
    def initialize(self) -> None:
        self.initialized = True
        self.ops.append(("initialize",))

    def finalize(self) -> None:
        self.finalized = True
        self.ops.append(("finalize",))
        logger.info(
            "Dry run: %d strokes, %.1f mm drawn, extent %s",
            len(self.strokes),
            self.drawn_length(),
            self.extent(),
        )

    def close(self) -> None:
        self.closed = True
        self.ops.append(("close",))

    # Motion -------------------------------------------------------------
    def move_to(self, x_mm: float, y_mm: float) -> None:
        self.ops.append(("move_to", x_mm, y_mm))
        self._track(x_mm, y_mm, pen_down=False)

    def draw(self, x_mm: float, y_mm: float) -> None:
        if not self.state.pen_down or not self.strokes:
            self.strokes.append(Stroke(self.color, [self.position]))
        self.ops.append(("draw", x_mm, y_mm))
        self._track(x_mm, y_mm, pen_down=True)
        self.strokes[-1].pts.append((x_mm, y_mm))

    # Pen ----------------------------------------------------------------
    def pen_up(self) -> None:
        self.ops.append(("pen_up",))
        self.state.pen_down = False

    def change_color(self, name: str) -> None:
        self.ops.append(("change_color", name))
        self.color = name
        self.state.pen_down = False

    # Inspection ---------------------------------------------------------
    def drawn_length(self) -> float:
        return sum(s.length() for s in self.strokes)

    def extent(self):
        return bounding_box(p for s in self.strokes for p in s.pts)

    def calls(self, name: str) -> List[Op]:
        return [op for op in self.ops if op[0] == name]


__all__ = ["MockPlotter", "Stroke"]
