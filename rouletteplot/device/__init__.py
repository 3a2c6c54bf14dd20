"""Plot backends implementing the :class:`Plotter` contract."""

from .base import Plotter, PlotterState
from .mock import MockPlotter
from .preview import PreviewPlotter, SvgCanvas, TurtleCanvas, ViewCalibration
from .uscutter import DeviceCalibration, USCutter, WriteResult

__all__ = [
    "Plotter",
    "PlotterState",
    "MockPlotter",
    "PreviewPlotter",
    "SvgCanvas",
    "TurtleCanvas",
    "ViewCalibration",
    "USCutter",
    "DeviceCalibration",
    "WriteResult",
]
