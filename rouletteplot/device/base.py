"""Device-agnostic plotting contract.

The curve generator only ever talks to a :class:`Plotter`.  Callers are
expected to call :meth:`Plotter.initialize` once before drawing and
:meth:`Plotter.finalize` once afterwards; the contract documents this ordering
but does not enforce it.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from ..config import PlotBounds

XY = Tuple[float, float]


@dataclass
class PlotterState:
    """Pen position in mm and the lower-left limit of the plot."""

    min_x_mm: float
    min_y_mm: float
    pos_x_mm: float
    pos_y_mm: float
    pen_down: bool = False

    @classmethod
    def at_lower_left(cls, bounds: PlotBounds) -> "PlotterState":
        return cls(
            min_x_mm=bounds.llx_mm,
            min_y_mm=bounds.lly_mm,
            pos_x_mm=bounds.llx_mm,
            pos_y_mm=bounds.lly_mm,
        )


class Plotter(ABC):
    """Abstract output device working in millimeters."""

    state: PlotterState

    # Lifecycle ----------------------------------------------------------
    @abstractmethod
    def initialize(self) -> None:
        """One-time setup before any drawing call."""

    @abstractmethod
    def finalize(self) -> None:
        """Shutdown after all drawing: park the pen, power down or just log."""

    def close(self) -> None:
        """Release the backend's resource.  Default: nothing to release."""

    # Motion -------------------------------------------------------------
    @abstractmethod
    def move_to(self, x_mm: float, y_mm: float) -> None:
        """Move to an absolute position without marking."""

    @abstractmethod
    def draw(self, x_mm: float, y_mm: float) -> None:
        """Draw a straight line from the present position to an absolute one."""

    def move_relative(self, dx_mm: float, dy_mm: float) -> XY:
        """Move without marking by ``(dx, dy)``; returns the new position."""
        self.move_to(self.state.pos_x_mm + dx_mm, self.state.pos_y_mm + dy_mm)
        return self.position

    def draw_relative(self, dx_mm: float, dy_mm: float) -> XY:
        """Draw by ``(dx, dy)`` from the present position; returns the new position."""
        self.draw(self.state.pos_x_mm + dx_mm, self.state.pos_y_mm + dy_mm)
        return self.position

    # Pen ----------------------------------------------------------------
    @abstractmethod
    def pen_up(self) -> None:
        """Raise the pen without moving."""

    @abstractmethod
    def change_color(self, name: str) -> None:
        """Switch to the pen called ``name``."""

    # Helpers ------------------------------------------------------------
    @property
    def position(self) -> XY:
        return self.state.pos_x_mm, self.state.pos_y_mm

    def _track(self, x_mm: float, y_mm: float, *, pen_down: bool) -> None:
        self.state.pos_x_mm = x_mm
        self.state.pos_y_mm = y_mm
        self.state.pen_down = pen_down


__all__ = ["Plotter", "PlotterState", "XY"]
