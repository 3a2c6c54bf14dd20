"""Configuration models for the roulette plotter."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import ConfigurationError


@dataclass(frozen=True)
class PlotBounds:
    """Requested plot rectangle in mm, lower-left and upper-right corners."""

    llx_mm: float = -40.0
    lly_mm: float = -40.0
    urx_mm: float = 40.0
    ury_mm: float = 40.0

    def __post_init__(self) -> None:
        corners = (self.llx_mm, self.lly_mm, self.urx_mm, self.ury_mm)
        if not all(math.isfinite(v) for v in corners + (self.width_mm, self.height_mm)):
            raise ConfigurationError(f"Plot bounds must be finite numbers, got {corners}.")
        if self.width_mm <= 0.0 or self.height_mm <= 0.0:
            raise ConfigurationError(
                "Upper right corner "
                f"({self.urx_mm}, {self.ury_mm}) is not greater than lower left "
                f"({self.llx_mm}, {self.lly_mm})."
            )

    @property
    def width_mm(self) -> float:
        return self.urx_mm - self.llx_mm

    @property
    def height_mm(self) -> float:
        return self.ury_mm - self.lly_mm

    @property
    def center(self) -> Tuple[float, float]:
        return 0.5 * (self.llx_mm + self.urx_mm), 0.5 * (self.lly_mm + self.ury_mm)

    def corners(self) -> Tuple[Tuple[float, float], ...]:
        return (
            (self.llx_mm, self.lly_mm),
            (self.urx_mm, self.lly_mm),
            (self.urx_mm, self.ury_mm),
            (self.llx_mm, self.ury_mm),
        )

    @classmethod
    def parse(cls, text: str) -> "PlotBounds":
        """Build bounds from ``"LLX,LLY,URX,URY"``."""
        raw = text.strip().lower().replace("mm", "")
        try:
            llx, lly, urx, ury = (float(v) for v in raw.split(","))
        except ValueError as exc:
            raise ConfigurationError(
                f"Bounds must be four comma separated numbers LLX,LLY,URX,URY, got {text!r}."
            ) from exc
        return cls(llx, lly, urx, ury)


@dataclass(frozen=True)
class CutterCalibration:
    """Per-axis scale (mm per plotter unit) and pen offset (plotter units).

    Defaults are measured on a USCutter LPII: at 0.025 mm/unit a "150 mm" line
    came out 150.6 mm long in x and 149.5 mm in y.
    """

    scale_x_mm_per_unit: float = 0.0251
    scale_y_mm_per_unit: float = 0.024917
    offset_x_units: int = 25
    offset_y_units: int = 25


@dataclass
class CutterSettings:
    """Serial link and I/O policy for the cutter/plotter."""

    port: str = "COM12"
    baudrate: int = 9600
    write_timeout_s: float = 0.01
    rtscts: bool = True
    calibration: CutterCalibration = field(default_factory=CutterCalibration)
    # Raise FatalIoError on non-timeout write failures instead of logging them.
    strict_io: bool = False


@dataclass
class PreviewSettings:
    """Canvas used by the preview backend."""

    width_px: int = 1200
    height_px: int = 600
    svg_path: Optional[str] = None
    hold: bool = False
    title: str = "rouletteplot preview"


@dataclass
class PlotSettings:
    """Aggregate settings selected by the command line."""

    target: str = "preview"  # plotter | preview | svg | mock
    bounds: PlotBounds = field(default_factory=PlotBounds)
    cutter: CutterSettings = field(default_factory=CutterSettings)
    preview: PreviewSettings = field(default_factory=PreviewSettings)
    design: str = "demo"


__all__ = [
    "PlotBounds",
    "CutterCalibration",
    "CutterSettings",
    "PreviewSettings",
    "PlotSettings",
]
