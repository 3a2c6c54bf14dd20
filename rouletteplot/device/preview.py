"""On-screen and SVG preview backends.

The preview fits the requested plot rectangle into a fixed size canvas using a
single uniform scale, so circles stay circles, and centers it.  Nothing is
clipped: geometry outside the plot rectangle is drawn outside it, or falls off
the canvas.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

from svgpathtools import Line, Path as SVGPath

from ..config import PlotBounds, PreviewSettings
from ..errors import UnknownColorError
from .base import Plotter, PlotterState

logger = logging.getLogger(__name__)

# Turtle color names that match HP and other manufacturers' pen colors.
PEN_COLORS = frozenset(
    ["black", "blue", "brown", "cyan", "green", "magenta", "orange", "purple", "red", "yellow"]
)
_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

XY = Tuple[float, float]


@dataclass(frozen=True)
class ViewCalibration:
    """Uniform mm to pixel mapping for a ``width_px`` x ``height_px`` canvas."""

    scale_mm_per_px: float
    offset_x_px: float
    offset_y_px: float
    width_px: int
    height_px: int

    @classmethod
    def fit(cls, bounds: PlotBounds, width_px: int = 1200, height_px: int = 600) -> "ViewCalibration":
        # The larger ratio wins so the whole rectangle stays visible.
        scale = max(bounds.width_mm / width_px, bounds.height_mm / height_px)
        cx, cy = bounds.center
        return cls(
            scale_mm_per_px=scale,
            offset_x_px=cx / scale,
            offset_y_px=cy / scale,
            width_px=width_px,
            height_px=height_px,
        )

    def to_view(self, x_mm: float, y_mm: float) -> XY:
        """Scaled coordinates, origin at the plot origin."""
        return x_mm / self.scale_mm_per_px, y_mm / self.scale_mm_per_px

    def to_canvas(self, x_mm: float, y_mm: float) -> XY:
        """Canvas pixel position, origin at the lower-left canvas corner."""
        vx, vy = self.to_view(x_mm, y_mm)
        return (
            vx - self.offset_x_px + 0.5 * self.width_px,
            vy - self.offset_y_px + 0.5 * self.height_px,
        )


class Canvas(Protocol):
    """Drawing surface with a single cursor, in canvas pixels."""

    def open(self, width_px: int, height_px: int) -> None: ...

    def pen_up(self) -> None: ...

    def pen_down(self) -> None: ...

    def goto(self, x: float, y: float) -> None: ...

    def set_color(self, color: str) -> None: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Canvases
# ---------------------------------------------------------------------------


class TurtleCanvas:
    """Window canvas driven by the standard library turtle.

    Animation is off; the window is refreshed at the end of every stroke.
    ``close`` waits for a click when ``hold`` is set and then releases the
    window.
    """

    def __init__(self, *, title: str = "rouletteplot preview", hold: bool = False) -> None:
        self.title = title
        self.hold = hold
        self._screen = None
        self._turtle = None

    def open(self, width_px: int, height_px: int) -> None:
        import turtle  # needs Tk, only import when a window is requested

        screen = turtle.Screen()
        screen.setup(width=width_px, height=height_px)
        screen.title(self.title)
        screen.setworldcoordinates(0, 0, width_px, height_px)
        screen.tracer(0)
        pen = turtle.Turtle()
        pen.hideturtle()
        pen.speed("fastest")
        pen.penup()
        self._screen = screen
        self._turtle = pen

    def pen_up(self) -> None:
        self._turtle.penup()
        self._screen.update()

    def pen_down(self) -> None:
        self._turtle.pendown()

    def goto(self, x: float, y: float) -> None:
        self._turtle.goto(x, y)

    def set_color(self, color: str) -> None:
        self._screen.update()
        self._turtle.pencolor(color)

    def close(self) -> None:
        screen, self._screen, self._turtle = self._screen, None, None
        if screen is None:
            return
        screen.update()
        if self.hold:
            screen.exitonclick()  # calls bye() after the click
        else:
            screen.bye()


class SvgCanvas:
    """Collects strokes as svgpathtools paths and writes an SVG on close."""

    def __init__(self, path: str, *, stroke_width: float = 1.0, background: str = "#ffffff") -> None:
        self.path = Path(path)
        self.stroke_width = stroke_width
        self.background = background
        self.width_px = 0
        self.height_px = 0
        self.paths: List[Tuple[SVGPath, str]] = []
        self._color = "#000000"
        self._down = False
        self._cur: Optional[complex] = None
        self._segments: List[Line] = []

    def open(self, width_px: int, height_px: int) -> None:
        self.width_px = width_px
        self.height_px = height_px

    def _point(self, x: float, y: float) -> complex:
        # SVG y axis points down.
        return complex(x, self.height_px - y)

    def _flush(self) -> None:
        if self._segments:
            self.paths.append((SVGPath(*self._segments), self._color))
            self._segments = []

    def pen_up(self) -> None:
        self._flush()
        self._down = False

    def pen_down(self) -> None:
        self._down = True

    def goto(self, x: float, y: float) -> None:
        p = self._point(x, y)
        if self._down and self._cur is not None and p != self._cur:
            self._segments.append(Line(self._cur, p))
        self._cur = p

    def set_color(self, color: str) -> None:
        self._flush()
        self._color = color

    def to_svg(self) -> str:
        self._flush()
        width, height = max(1, self.width_px), max(1, self.height_px)
        body = [f'<rect x="0" y="0" width="{width}" height="{height}" fill="{self.background}" />']
        for path, color in self.paths:
            body.append(
                f'<path d="{path.d()}" stroke="{color}" stroke-width="{self.stroke_width}" '
                f'fill="none" stroke-linecap="round" stroke-linejoin="round" />'
            )
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" '
            f'width="{width}" height="{height}">' + "".join(body) + "</svg>"
        )

    def close(self) -> None:
        self.path.write_text(self.to_svg(), encoding="utf-8")
        logger.info("Wrote preview with %d strokes to %s", len(self.paths), self.path)


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------


def resolve_color(name: str) -> str:
    """Return a drawable color for ``name`` or raise :class:`UnknownColorError`."""
    key = name.strip().lower()
    if key in PEN_COLORS:
        return key
    if _HEX_COLOR.match(key):
        return key
    raise UnknownColorError(f"Unknown pen color {name!r}; expected one of {sorted(PEN_COLORS)} or #rrggbb.")


class PreviewPlotter(Plotter):
    """Plotter backend that draws on a :class:`Canvas` instead of paper.

    Color changes take effect immediately.  Unknown color names fail closed
    with :class:`UnknownColorError`.
    """

    def __init__(
        self,
        bounds: PlotBounds,
        settings: Optional[PreviewSettings] = None,
        *,
        canvas: Optional[Canvas] = None,
    ) -> None:
        self.settings = settings or PreviewSettings()
        self.bounds = bounds
        self.view = ViewCalibration.fit(bounds, self.settings.width_px, self.settings.height_px)
        self.state = PlotterState.at_lower_left(bounds)
        if canvas is None:
            if self.settings.svg_path:
                canvas = SvgCanvas(self.settings.svg_path)
            else:
                canvas = TurtleCanvas(title=self.settings.title, hold=self.settings.hold)
        self.canvas = canvas
        self.color = "black"

    def initialize(self) -> None:
        self.canvas.open(self.view.width_px, self.view.height_px)
        logger.info(
            "Initializing preview: %dx%d px, %.4f mm/px",
            self.view.width_px,
            self.view.height_px,
            self.view.scale_mm_per_px,
        )

    def finalize(self) -> None:
        self.move_to(0.0, 0.0)
        logger.info("Finalizing")

    def close(self) -> None:
        self.canvas.close()

    def move_to(self, x_mm: float, y_mm: float) -> None:
        self.canvas.pen_up()
        self.canvas.goto(*self.view.to_canvas(x_mm, y_mm))
        self._track(x_mm, y_mm, pen_down=False)

    def draw(self, x_mm: float, y_mm: float) -> None:
        self.canvas.pen_down()
        self.canvas.goto(*self.view.to_canvas(x_mm, y_mm))
        self._track(x_mm, y_mm, pen_down=True)

    def pen_up(self) -> None:
        self.canvas.pen_up()
        self.state.pen_down = False

    def change_color(self, name: str) -> None:
        color = resolve_color(name)
        self.canvas.set_color(color)
        self.color = color


__all__ = [
    "PreviewPlotter",
    "ViewCalibration",
    "Canvas",
    "TurtleCanvas",
    "SvgCanvas",
    "PEN_COLORS",
    "resolve_color",
]
