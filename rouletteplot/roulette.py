"""Roulette curves traced by a circle rolling inside another circle.

Roulettes are the general family of cycloids, epicycloids, hypocycloids and
trochoids; this module plots full hypotrochoids.  Unlike a real Spirograph the
pen radius may equal or exceed the radius of the rolling circle, which gives
looped curves.

https://en.wikipedia.org/wiki/Roulette_(curve)
https://en.wikipedia.org/wiki/Hypotrochoid
"""
from __future__ import annotations

import logging
import math
from typing import Iterator, Optional

from .device.base import Plotter
from .geometry import IDENTITY, Placement, Point, RollerParams

logger = logging.getLogger(__name__)

STEPS_PER_REV = 40  # samples per revolution of the rolling circle


def plot_radius(params: RollerParams) -> float:
    """Maximum distance of the curve from its center, in mm."""
    params.validate()
    return params.plot_radius_mm


def sample_count(params: RollerParams) -> int:
    """Number of points in one full traversal, both ends included."""
    return params.inner * STEPS_PER_REV + 1


def hypotrochoid_points(params: RollerParams, placement: Optional[Placement] = None) -> Iterator[Point]:
    """Yield the points of one full hypotrochoid, placed by ``placement``.

    The curve closes after ``inner`` revolutions.  Parameters are checked
    before the first point is produced.
    """
    params.validate()
    placement = placement or IDENTITY
    ratio = params.ratio
    outer_mm = params.outer_radius_mm
    pen2outer = params.pen_to_outer
    lobes = (1.0 - ratio) / ratio
    return _generate(params.inner * STEPS_PER_REV, ratio, outer_mm, pen2outer, lobes, placement)


def _generate(
    last: int, ratio: float, outer_mm: float, pen2outer: float, lobes: float, placement: Placement
) -> Iterator[Point]:
    for i in range(last + 1):
        t = 2.0 * math.pi * i / STEPS_PER_REV
        x = outer_mm * ((1.0 - ratio) * math.cos(t) + pen2outer * math.cos(lobes * t))
        y = outer_mm * ((1.0 - ratio) * math.sin(t) - pen2outer * math.sin(lobes * t))
        yield placement.apply(x, y)


def full_hypotrochoid(plotter: Plotter, params: RollerParams, placement: Optional[Placement] = None) -> int:
    """Plot a full hypotrochoid as a single stroke and return the point count.

    plotter: device to plot to.
    params: rolling radius, pen radius and the ``inner``/``outer`` circle sizes.
    placement: center and rotation of the curve, origin when omitted.

    If ``inner`` and ``outer`` are coprime there will be ``outer`` radial
    maxima (cusps).
    """
    points = hypotrochoid_points(params, placement)
    logger.info("Plot radius is %.3f mm.", params.plot_radius_mm)
    count = 0
    for count, (x, y) in enumerate(points, start=1):
        if count == 1:
            plotter.move_to(x, y)
        else:
            plotter.draw(x, y)
    return count


def spirograph(plotter: Plotter, outer_radius_mm: float, pen_radius_mm: float, inner: int, outer: int) -> int:
    """Plot a spirograph centered at the origin.

    ``inner`` and ``outer`` are the tooth counts of the rolling gear and the
    fixed ring, so the rolling radius is ``outer_radius_mm * inner / outer``.
    """
    # Check the counts before dividing by them.
    RollerParams(outer_radius_mm, pen_radius_mm, inner, outer).validate()
    params = RollerParams(outer_radius_mm * inner / outer, pen_radius_mm, inner, outer)
    return full_hypotrochoid(plotter, params)


__all__ = [
    "STEPS_PER_REV",
    "plot_radius",
    "sample_count",
    "hypotrochoid_points",
    "full_hypotrochoid",
    "spirograph",
]
