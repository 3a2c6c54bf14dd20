"""Geometry primitives shared by the curve generator and the plot backends.

Everything here is expressed in millimeters in plot space.  The backends are
responsible for mapping these values into their own native coordinates.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Tuple

from .errors import ConfigurationError


class Point(NamedTuple):
    """Immutable position in plot space."""

    x_mm: float
    y_mm: float


# ---------------------------------------------------------------------------
# Rolling circle parameters
# ---------------------------------------------------------------------------


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RollerParams:
    """Describes one member of the rolling-circle (hypotrochoid) family.

    ``rolling_radius_mm`` is the radius of the circle that rolls inside the
    fixed circle and ``pen_radius_mm`` the distance from its center to the pen.
    ``inner`` and ``outer`` set the relative sizes of the two circles.  When
    they are coprime the curve closes after ``inner`` revolutions with
    ``outer`` radial maxima.
    """

    rolling_radius_mm: float
    pen_radius_mm: float
    inner: int
    outer: int

    def validate(self) -> None:
        if not (_is_count(self.inner) and _is_count(self.outer)) or self.inner < 1 or self.outer < 1:
            raise ConfigurationError(
                f"inner and outer must be positive integers, got inner={self.inner}, outer={self.outer}."
            )
        if self.inner > self.outer:
            raise ConfigurationError(
                f"Parameter `inner` ({self.inner}) must not be greater than `outer` ({self.outer})."
            )
        if not (math.isfinite(self.rolling_radius_mm) and math.isfinite(self.pen_radius_mm)):
            raise ConfigurationError(
                f"Radii must be finite, got rolling_radius_mm={self.rolling_radius_mm}, "
                f"pen_radius_mm={self.pen_radius_mm}."
            )
        if self.rolling_radius_mm <= 0:
            raise ConfigurationError(f"rolling_radius_mm must be positive, got {self.rolling_radius_mm}.")
        if self.pen_radius_mm < 0:
            raise ConfigurationError(f"pen_radius_mm must not be negative, got {self.pen_radius_mm}.")

    @property
    def ratio(self) -> float:
        return self.inner / self.outer

    @property
    def outer_radius_mm(self) -> float:
        """Radius of the fixed circle."""
        return self.rolling_radius_mm / self.ratio

    @property
    def plot_radius_mm(self) -> float:
        """Maximum distance of the curve from its center."""
        return self.outer_radius_mm - self.rolling_radius_mm + self.pen_radius_mm

    @property
    def pen_to_outer(self) -> float:
        return self.pen_radius_mm / self.outer_radius_mm


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Placement:
    """Rigid transform: rotate about the origin, then translate."""

    center_x_mm: float = 0.0
    center_y_mm: float = 0.0
    rotation_rad: float = 0.0

    def apply(self, x: float, y: float) -> Point:
        cos_t = math.cos(self.rotation_rad)
        sin_t = math.sin(self.rotation_rad)
        rx = x * cos_t - y * sin_t
        ry = x * sin_t + y * cos_t
        return Point(rx + self.center_x_mm, ry + self.center_y_mm)

    @property
    def center(self) -> Point:
        return Point(self.center_x_mm, self.center_y_mm)


IDENTITY = Placement()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def bounding_box(points: Iterable[Tuple[float, float]]) -> Optional[Tuple[Point, Point]]:
    """Return ``(lower_left, upper_right)`` of ``points`` or ``None`` when empty."""
    xmin = ymin = float("inf")
    xmax = ymax = float("-inf")
    for x, y in points:
        xmin = min(xmin, x)
        ymin = min(ymin, y)
        xmax = max(xmax, x)
        ymax = max(ymax, y)
    if xmin == float("inf"):
        return None
    return Point(xmin, ymin), Point(xmax, ymax)


__all__ = [
    "Point",
    "RollerParams",
    "Placement",
    "IDENTITY",
    "distance",
    "bounding_box",
]
