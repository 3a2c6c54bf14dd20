"""Exceptions raised by the rouletteplot toolkit."""
from __future__ import annotations


class PlotterError(RuntimeError):
    """Base class for every error raised by this package."""


class ConfigurationError(PlotterError, ValueError):
    """Raised for invalid plot bounds or curve parameters, before any I/O."""


class UnknownColorError(ConfigurationError):
    """Raised by backends that cannot render the requested pen color."""


class TransientIoError(PlotterError):
    """A serial write timed out. The command was dropped."""


class FatalIoError(PlotterError):
    """A serial write failed for a reason other than a timeout."""


__all__ = [
    "PlotterError",
    "ConfigurationError",
    "UnknownColorError",
    "TransientIoError",
    "FatalIoError",
]
