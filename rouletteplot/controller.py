"""Backend selection and plot lifecycle orchestration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import PlotSettings
from .designs import DESIGNS, Design
from .device import MockPlotter, Plotter, PreviewPlotter, SvgCanvas, TurtleCanvas, USCutter
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

TARGETS = ("plotter", "preview", "svg", "mock")


def create_plotter(settings: PlotSettings) -> Plotter:
    """Build the single backend used for the whole run."""
    target = settings.target
    if target == "plotter":
        return USCutter(settings.bounds, settings.cutter)
    if target == "preview":
        canvas = TurtleCanvas(title=settings.preview.title, hold=settings.preview.hold)
        return PreviewPlotter(settings.bounds, settings.preview, canvas=canvas)
    if target == "svg":
        if not settings.preview.svg_path:
            raise ConfigurationError("The svg target needs an output path.")
        canvas = SvgCanvas(settings.preview.svg_path)
        return PreviewPlotter(settings.bounds, settings.preview, canvas=canvas)
    if target == "mock":
        return MockPlotter(settings.bounds)
    raise ConfigurationError(f"Unknown target {target!r}; expected one of {', '.join(TARGETS)}.")


@dataclass
class PlotterController:
    """Run designs on one plotter: initialize, draw, finalize, close."""

    plotter: Plotter

    @classmethod
    def from_settings(cls, settings: PlotSettings) -> "PlotterController":
        return cls(create_plotter(settings))

    def run(self, design: Design, *, close: bool = True) -> None:
        plotter = self.plotter
        logger.info("Starting plot on %s", type(plotter).__name__)
        try:
            plotter.initialize()
            try:
                design(plotter)
            finally:
                plotter.finalize()
        finally:
            if close:
                plotter.close()

    def run_named(self, name: str, *, close: bool = True) -> None:
        design: Optional[Design] = DESIGNS.get(name)
        if design is None:
            raise ConfigurationError(f"Unknown design {name!r}; expected one of {', '.join(DESIGNS)}.")
        self.run(design, close=close)


__all__ = ["PlotterController", "create_plotter", "TARGETS"]
