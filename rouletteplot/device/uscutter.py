"""USCutter LPII cutter/plotter backend.

The device speaks a small HPGL dialect over a 9600 baud serial line.  Positions
are integer plotter units; this module converts the millimeter requests of the
:class:`~rouletteplot.device.base.Plotter` contract into units using a
:class:`DeviceCalibration` and clips every command to the mechanical travel of
the device.

Write failures never reach the curve generator.  Each write produces a
:class:`WriteResult`; timeouts are logged and the command is dropped, other
failures are logged and dropped too unless ``CutterSettings.strict_io`` is set.
"""
from __future__ import annotations

import enum
import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import serial

from ..config import CutterCalibration, CutterSettings, PlotBounds
from ..errors import FatalIoError, TransientIoError
from .base import Plotter, PlotterState

logger = logging.getLogger(__name__)

WAKE = b";:H A L0 ECN U "
PEN_UP = b"PU;"
PARK_AND_POWER_DOWN = b"PU0,0;!PG;"

Units = Tuple[int, int]


class WriteResult(enum.Enum):
    OK = "ok"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class DeviceCalibration:
    """Mapping between plot millimeters and plotter units for one plot."""

    min_x_mm: float
    min_y_mm: float
    scale_x_mm_per_unit: float
    scale_y_mm_per_unit: float
    offset_x_units: int
    offset_y_units: int
    max_x_units: int
    max_y_units: int

    @classmethod
    def from_bounds(cls, bounds: PlotBounds, cal: Optional[CutterCalibration] = None) -> "DeviceCalibration":
        cal = cal or CutterCalibration()
        return cls(
            min_x_mm=bounds.llx_mm,
            min_y_mm=bounds.lly_mm,
            scale_x_mm_per_unit=cal.scale_x_mm_per_unit,
            scale_y_mm_per_unit=cal.scale_y_mm_per_unit,
            offset_x_units=cal.offset_x_units,
            offset_y_units=cal.offset_y_units,
            # Same rounding as to_device, so the upper-right corner is never clipped.
            max_x_units=int(round(bounds.width_mm / cal.scale_x_mm_per_unit)) + cal.offset_x_units,
            max_y_units=int(round(bounds.height_mm / cal.scale_y_mm_per_unit)) + cal.offset_y_units,
        )

    def to_device(self, x_mm: float, y_mm: float) -> Units:
        """Convert mm to plotter units, offset applied, not clipped.

        Only defined for finite positions; use :meth:`to_device_clipped` for
        anything that is sent to the device.
        """
        ux = int(round((x_mm - self.min_x_mm) / self.scale_x_mm_per_unit)) + self.offset_x_units
        uy = int(round((y_mm - self.min_y_mm) / self.scale_y_mm_per_unit)) + self.offset_y_units
        return ux, uy

    def to_mm(self, ux: int, uy: int) -> Tuple[float, float]:
        """Inverse of :meth:`to_device`, up to rounding."""
        x = (ux - self.offset_x_units) * self.scale_x_mm_per_unit + self.min_x_mm
        y = (uy - self.offset_y_units) * self.scale_y_mm_per_unit + self.min_y_mm
        return x, y

    def clip(self, ux: int, uy: int) -> Units:
        """Saturate each axis into ``[0, max_units]``."""
        return min(max(0, ux), self.max_x_units), min(max(0, uy), self.max_y_units)

    def to_device_clipped(self, x_mm: float, y_mm: float) -> Units:
        """Convert and clip in one step; total for any float input.

        Huge and infinite requests saturate to the nearest stop and NaN goes
        to the lower stop, so the conversion never overflows.
        """
        ux = _axis_units(x_mm, self.min_x_mm, self.scale_x_mm_per_unit, self.offset_x_units, self.max_x_units)
        uy = _axis_units(y_mm, self.min_y_mm, self.scale_y_mm_per_unit, self.offset_y_units, self.max_y_units)
        return ux, uy


def _axis_units(mm: float, min_mm: float, scale: float, offset: int, max_units: int) -> int:
    raw = (mm - min_mm) / scale
    if math.isnan(raw):
        return 0
    # Saturate in floats first; int() of inf raises.
    raw = min(max(raw, -offset - 1.0), max_units - offset + 1.0)
    return min(max(0, int(round(raw)) + offset), max_units)


def open_serial(settings: CutterSettings) -> serial.Serial:
    """Open the serial port with the cutter's line settings (8N1, RTS/CTS)."""
    try:
        return serial.Serial(
            settings.port,
            baudrate=settings.baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            rtscts=settings.rtscts,
            timeout=settings.write_timeout_s,
            write_timeout=settings.write_timeout_s,
        )
    except serial.SerialException as exc:  # pragma: no cover - hardware dependent
        raise FatalIoError(f"Can't open serial port {settings.port}: {exc}") from exc


class USCutter(Plotter):
    """Plotter backend writing HPGL commands to a USCutter over serial.

    ``transport`` may be any object with a ``write(bytes)`` method; when it is
    omitted the serial port from ``settings`` is opened by :meth:`connect`.
    ``prompt`` is called with a message on every color change and must block
    until the operator has swapped the pen.
    """

    def __init__(
        self,
        bounds: PlotBounds,
        settings: Optional[CutterSettings] = None,
        *,
        transport=None,
        prompt: Callable[[str], object] = input,
    ) -> None:
        self.settings = settings or CutterSettings()
        self.calibration = DeviceCalibration.from_bounds(bounds, self.settings.calibration)
        self.state = PlotterState.at_lower_left(bounds)
        self.ser = transport
        self.prompt = prompt
        self.io_stats: Counter = Counter()

    # -------- Connection / basic I/O --------
    def connect(self) -> "USCutter":
        if self.ser is None:
            self.ser = open_serial(self.settings)
            logger.info("Opened %s at %d baud", self.settings.port, self.settings.baudrate)
        return self

    def close(self) -> None:
        if self.ser is not None and getattr(self.ser, "is_open", False):
            self.ser.close()

    def _write(self, data: bytes) -> None:
        if self.ser is None:
            raise FatalIoError("Serial port is not open")
        try:
            self.ser.write(data)
        except serial.SerialTimeoutException as exc:
            raise TransientIoError(str(exc) or "write timeout") from exc
        except (serial.SerialException, OSError) as exc:
            raise FatalIoError(str(exc)) from exc

    def send(self, data: bytes) -> WriteResult:
        """Write one command and report the outcome.

        A timed out command is dropped, not retried.
        """
        try:
            self._write(data)
        except TransientIoError:
            result = WriteResult.TIMEOUT
            logger.warning("Timeout writing %r, command dropped", data)
        except FatalIoError as exc:
            result = WriteResult.ERROR
            logger.error("Write of %r failed: %s", data, exc)
            if self.settings.strict_io:
                self.io_stats[result] += 1
                raise
        else:
            result = WriteResult.OK
            logger.debug("sent %r", data)
        self.io_stats[result] += 1
        return result

    # -------- Lifecycle --------
    def initialize(self) -> None:
        self.connect()
        if self.send(WAKE) is WriteResult.OK:
            logger.info("Initializing")
        cal = self.calibration
        self.send(f"PU{cal.offset_x_units},{cal.offset_y_units};".encode("ascii"))

    def finalize(self) -> None:
        if self.send(PARK_AND_POWER_DOWN) is WriteResult.OK:
            logger.info("Finalizing")
        self.state.pen_down = False
        dropped = self.io_stats[WriteResult.TIMEOUT] + self.io_stats[WriteResult.ERROR]
        if dropped:
            logger.warning("%d of %d commands were dropped", dropped, sum(self.io_stats.values()))

    # -------- Movement --------
    def device_coords(self, x_mm: float, y_mm: float) -> Units:
        """Plotter units actually sent for a mm position (converted and clipped)."""
        return self.calibration.to_device_clipped(x_mm, y_mm)

    def move_to(self, x_mm: float, y_mm: float) -> None:
        self._track(x_mm, y_mm, pen_down=False)
        x, y = self.device_coords(x_mm, y_mm)
        self.send(f"PU{x},{y};".encode("ascii"))

    def draw(self, x_mm: float, y_mm: float) -> None:
        self._track(x_mm, y_mm, pen_down=True)
        x, y = self.device_coords(x_mm, y_mm)
        self.send(f"PD{x},{y};".encode("ascii"))

    # -------- Pen --------
    def pen_up(self) -> None:
        self.state.pen_down = False
        self.send(PEN_UP)

    def change_color(self, name: str) -> None:
        """Ask the operator to swap pens; any color name is accepted."""
        self.pen_up()
        message = f"Load the {name} pen, then press Enter to continue."
        logger.info("Waiting for pen change: %s", name)
        self.prompt(message)


__all__ = [
    "USCutter",
    "DeviceCalibration",
    "WriteResult",
    "open_serial",
    "WAKE",
    "PEN_UP",
    "PARK_AND_POWER_DOWN",
]
