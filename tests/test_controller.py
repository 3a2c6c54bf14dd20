"""Tests for backend selection, lifecycle ordering and the bundled designs."""
from __future__ import annotations

import pytest

from rouletteplot.config import CutterSettings, PlotSettings, PreviewSettings
from rouletteplot.controller import PlotterController, create_plotter
from rouletteplot.designs import DEMO_PASSES, demo, hex_grid_centers, rosette_grid
from rouletteplot.device import MockPlotter, PreviewPlotter, SvgCanvas, TurtleCanvas, USCutter
from rouletteplot.device.uscutter import PARK_AND_POWER_DOWN, WAKE
from rouletteplot.errors import ConfigurationError


def test_create_plotter_selects_backend(bounds, tmp_path):
    assert isinstance(create_plotter(PlotSettings(target="mock", bounds=bounds)), MockPlotter)
    assert isinstance(create_plotter(PlotSettings(target="plotter", bounds=bounds)), USCutter)
    preview = create_plotter(PlotSettings(target="preview", bounds=bounds))
    assert isinstance(preview, PreviewPlotter)
    assert isinstance(preview.canvas, TurtleCanvas)
    svg = create_plotter(
        PlotSettings(target="svg", bounds=bounds, preview=PreviewSettings(svg_path=str(tmp_path / "a.svg")))
    )
    assert isinstance(svg.canvas, SvgCanvas)


def test_create_plotter_rejects_bad_targets(bounds):
    with pytest.raises(ConfigurationError):
        create_plotter(PlotSettings(target="plotter9000", bounds=bounds))
    with pytest.raises(ConfigurationError):
        create_plotter(PlotSettings(target="svg", bounds=bounds))


def test_run_orders_lifecycle(bounds):
    plotter = MockPlotter(bounds)
    PlotterController(plotter).run(lambda p: p.draw(1.0, 1.0))
    assert [op[0] for op in plotter.ops] == ["initialize", "draw", "finalize", "close"]


def test_run_finalizes_when_design_fails(bounds):
    plotter = MockPlotter(bounds)

    def broken(p):
        p.move_to(0.0, 0.0)
        raise ConfigurationError("bad design")

    with pytest.raises(ConfigurationError):
        PlotterController(plotter).run(broken)
    assert plotter.finalized
    assert plotter.closed


def test_unknown_design_fails_before_initialize(bounds):
    plotter = MockPlotter(bounds)
    with pytest.raises(ConfigurationError):
        PlotterController(plotter).run_named("nope")
    assert plotter.ops == []


def test_demo_on_cutter_wire_sequence(bounds, fake_serial):
    prompts = []
    cutter = USCutter(bounds, CutterSettings(), transport=fake_serial, prompt=prompts.append)
    PlotterController(cutter).run_named("demo")
    writes = fake_serial.writes
    assert writes[0] == WAKE
    assert writes[1] == b"PU25,25;"
    assert writes[-1] == PARK_AND_POWER_DOWN
    assert writes.count(b"PU;") == 3
    assert len(prompts) == 3
    points = sum(p.inner * 40 + 1 for _, p in DEMO_PASSES)
    assert len(writes) == 2 + 3 + points + 1
    assert not fake_serial.is_open


def test_demo_colors_and_strokes():
    plotter = MockPlotter()
    demo(plotter)
    assert [op[1] for op in plotter.calls("change_color")] == ["cyan", "green", "black"]
    assert [s.color for s in plotter.strokes] == ["cyan", "green", "black"]


def test_hex_grid_layout():
    centers = hex_grid_centers(rows=5, pitch_mm=24.0)
    assert len(centers) == 3 + 4 + 5 + 4 + 3
    middle = sorted(c.x_mm for c in centers if abs(c.y_mm) < 1e-9)
    assert middle == pytest.approx([-48.0, -24.0, 0.0, 24.0, 48.0])
    top = sorted(c.x_mm for c in centers if c.y_mm > 40)
    assert top == pytest.approx([-24.0, 0.0, 24.0])
    assert max(c.y_mm for c in centers) == pytest.approx(2 * 12.0 * 3 ** 0.5)


def test_rosette_grid_plots_every_cell_per_pen():
    plotter = MockPlotter()
    rosette_grid(plotter)
    assert len(plotter.calls("change_color")) == 3
    assert len(plotter.calls("move_to")) == 3 * 19
