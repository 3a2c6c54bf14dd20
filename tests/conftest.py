from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from rouletteplot.config import PlotBounds


class FakeSerial:
    """Stands in for ``serial.Serial``; records every write.

    ``failures`` maps the 0-based write index to an exception raised instead
    of writing.
    """

    def __init__(self, failures: Optional[dict] = None) -> None:
        self.writes: List[bytes] = []
        self.failures = dict(failures or {})
        self.is_open = True
        self._count = 0

    def write(self, data: bytes) -> int:
        idx = self._count
        self._count += 1
        if idx in self.failures:
            raise self.failures[idx]
        self.writes.append(bytes(data))
        return len(data)

    def close(self) -> None:
        self.is_open = False

    @property
    def text(self) -> str:
        return b"".join(self.writes).decode("ascii")


class RecordingCanvas:
    """Canvas that records calls instead of drawing."""

    def __init__(self) -> None:
        self.calls: List[Tuple] = []
        self.size: Optional[Tuple[int, int]] = None
        self.closed = False

    def open(self, width_px: int, height_px: int) -> None:
        self.size = (width_px, height_px)
        self.calls.append(("open", width_px, height_px))

    def pen_up(self) -> None:
        self.calls.append(("pen_up",))

    def pen_down(self) -> None:
        self.calls.append(("pen_down",))

    def goto(self, x: float, y: float) -> None:
        self.calls.append(("goto", x, y))

    def set_color(self, color: str) -> None:
        self.calls.append(("set_color", color))

    def close(self) -> None:
        self.closed = True

    def gotos(self) -> List[Tuple[float, float]]:
        return [(c[1], c[2]) for c in self.calls if c[0] == "goto"]


@pytest.fixture
def bounds() -> PlotBounds:
    return PlotBounds(-40.0, -40.0, 40.0, 40.0)


@pytest.fixture
def fake_serial() -> FakeSerial:
    return FakeSerial()


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def serial_factory():
    return FakeSerial
