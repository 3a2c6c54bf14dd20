"""Tests for the preview backend's fit-to-window mapping, canvases and colors."""
from __future__ import annotations

import sys
import types

import pytest

from rouletteplot.config import PlotBounds, PreviewSettings
from rouletteplot.device.preview import PreviewPlotter, SvgCanvas, TurtleCanvas, ViewCalibration, resolve_color
from rouletteplot.errors import UnknownColorError
from rouletteplot.geometry import RollerParams
from rouletteplot.roulette import full_hypotrochoid

EPS = 1e-9


@pytest.mark.parametrize(
    "bounds",
    [
        PlotBounds(-40.0, -40.0, 40.0, 40.0),
        PlotBounds(0.0, 0.0, 500.0, 20.0),
        PlotBounds(100.0, 200.0, 110.0, 400.0),
        PlotBounds(-3.0, -1.0, 9.0, 5.0),
    ],
)
def test_bounds_corners_land_on_canvas(bounds):
    view = ViewCalibration.fit(bounds)
    for x, y in bounds.corners():
        cx, cy = view.to_canvas(x, y)
        assert -EPS <= cx <= view.width_px + EPS
        assert -EPS <= cy <= view.height_px + EPS


def test_scale_uses_larger_ratio():
    wide = ViewCalibration.fit(PlotBounds(0.0, 0.0, 600.0, 100.0))
    assert wide.scale_mm_per_px == pytest.approx(0.5)
    tall = ViewCalibration.fit(PlotBounds(0.0, 0.0, 100.0, 600.0))
    assert tall.scale_mm_per_px == pytest.approx(1.0)


def test_center_maps_to_canvas_center():
    view = ViewCalibration.fit(PlotBounds(10.0, 20.0, 50.0, 40.0), 1200, 600)
    assert view.to_canvas(30.0, 30.0) == pytest.approx((600.0, 300.0))


def test_offset_is_scaled_center():
    view = ViewCalibration.fit(PlotBounds(10.0, 20.0, 50.0, 40.0), 1200, 600)
    assert view.offset_x_px == pytest.approx(30.0 / view.scale_mm_per_px)
    assert view.offset_y_px == pytest.approx(30.0 / view.scale_mm_per_px)


def test_no_clipping_outside_bounds(bounds):
    view = ViewCalibration.fit(bounds)
    cx, _ = view.to_canvas(1000.0, 0.0)
    assert cx > view.width_px


def test_plotter_drives_canvas(bounds, canvas):
    plotter = PreviewPlotter(bounds, canvas=canvas)
    plotter.initialize()
    plotter.move_to(-40.0, 0.0)
    plotter.draw(40.0, 0.0)
    assert canvas.size == (1200, 600)
    assert canvas.calls[1:] == [
        ("pen_up",),
        ("goto",) + plotter.view.to_canvas(-40.0, 0.0),
        ("pen_down",),
        ("goto",) + plotter.view.to_canvas(40.0, 0.0),
    ]
    assert plotter.position == (40.0, 0.0)
    assert plotter.state.pen_down


def test_relative_moves(bounds, canvas):
    plotter = PreviewPlotter(bounds, canvas=canvas)
    assert plotter.position == (-40.0, -40.0)
    assert plotter.move_relative(10.0, 10.0) == (-30.0, -30.0)
    assert plotter.draw_relative(5.0, -5.0) == (-25.0, -35.0)


def test_finalize_returns_to_origin(bounds, canvas):
    plotter = PreviewPlotter(bounds, canvas=canvas)
    plotter.draw(10.0, 10.0)
    plotter.finalize()
    assert plotter.position == (0.0, 0.0)
    assert canvas.gotos()[-1] == pytest.approx(plotter.view.to_canvas(0.0, 0.0))
    plotter.close()
    assert canvas.closed


def test_change_color_known_and_hex(bounds, canvas):
    plotter = PreviewPlotter(bounds, canvas=canvas)
    plotter.change_color("Cyan")
    plotter.change_color("#12ab3F")
    assert ("set_color", "cyan") in canvas.calls
    assert ("set_color", "#12ab3f") in canvas.calls


def test_change_color_fails_closed(bounds, canvas):
    plotter = PreviewPlotter(bounds, canvas=canvas)
    with pytest.raises(UnknownColorError):
        plotter.change_color("chartreuse-ish")
    assert not any(c[0] == "set_color" for c in canvas.calls)


def test_resolve_color():
    assert resolve_color(" BLACK ") == "black"
    with pytest.raises(UnknownColorError):
        resolve_color("#12345")


def test_default_canvas_from_settings(bounds, tmp_path):
    plotter = PreviewPlotter(bounds, PreviewSettings(svg_path=str(tmp_path / "out.svg")))
    assert isinstance(plotter.canvas, SvgCanvas)


def test_svg_canvas_writes_strokes(bounds, tmp_path):
    out = tmp_path / "preview.svg"
    plotter = PreviewPlotter(bounds, PreviewSettings(width_px=400, height_px=200), canvas=SvgCanvas(str(out)))
    plotter.initialize()
    plotter.change_color("cyan")
    full_hypotrochoid(plotter, RollerParams(17.1, 11.4, 7, 12))
    plotter.change_color("black")
    full_hypotrochoid(plotter, RollerParams(30.0, 30.0, 5, 6))
    plotter.finalize()
    plotter.close()

    text = out.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert 'viewBox="0 0 400 200"' in text
    assert text.count("<path") == 2
    assert 'stroke="cyan"' in text
    assert 'stroke="black"' in text


def test_svg_canvas_flips_y():
    canvas = SvgCanvas("unused.svg")
    canvas.open(100, 50)
    canvas.pen_up()
    canvas.goto(0.0, 0.0)
    canvas.pen_down()
    canvas.goto(10.0, 50.0)
    canvas.pen_up()
    (path, color), = canvas.paths
    assert path.start == complex(0, 50)
    assert path.end == complex(10, 0)
    assert color == "#000000"


# ---------------------------------------------------------------------------
# Turtle window, with the turtle module replaced by a recorder
# ---------------------------------------------------------------------------


class _Recorder:
    def __init__(self, log, name):
        self._log = log
        self._name = name

    def __getattr__(self, attr):
        def call(*args, **kwargs):
            self._log.append((self._name, attr) + args)

        return call


@pytest.fixture
def turtle_log(monkeypatch):
    log = []
    module = types.ModuleType("turtle")
    module.Screen = lambda: _Recorder(log, "screen")
    module.Turtle = lambda: _Recorder(log, "pen")
    monkeypatch.setitem(sys.modules, "turtle", module)
    return log


def test_turtle_canvas_draws_without_animation(bounds, turtle_log):
    plotter = PreviewPlotter(bounds, canvas=TurtleCanvas())
    plotter.initialize()
    plotter.change_color("cyan")
    full_hypotrochoid(plotter, RollerParams(17.1, 11.4, 7, 12))
    plotter.finalize()
    plotter.close()

    assert ("screen", "setworldcoordinates", 0, 0, 1200, 600) in turtle_log
    assert ("screen", "tracer", 0) in turtle_log
    assert ("pen", "pencolor", "cyan") in turtle_log
    assert sum(1 for entry in turtle_log if entry[:2] == ("pen", "goto")) == 7 * 40 + 1 + 1
    assert turtle_log[-2:] == [("screen", "update"), ("screen", "bye")]


def test_turtle_canvas_hold_waits_for_click(turtle_log):
    canvas = TurtleCanvas(hold=True)
    canvas.open(300, 200)
    canvas.close()
    canvas.close()
    assert turtle_log[-1] == ("screen", "exitonclick")
    assert ("screen", "bye") not in turtle_log
    assert sum(1 for entry in turtle_log if entry == ("screen", "exitonclick")) == 1
