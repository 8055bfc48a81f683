"""Tests for MiniBox / Violin geometry, restyling and drawing.

Run:  python -m pytest tests/test_plots.py -v
"""
from __future__ import annotations

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless backend

import matplotlib.pyplot as plt
import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from violinbox._commands import CommandStack
from violinbox._errors import ConfigurationError, EmptySample
from violinbox._options import GRAY, WHITE, BoxOptions, ViolinOptions
from violinbox._renderer import AxesRenderer
from violinbox.plots import (
    ColorCycle, MiniBox, Violin, build_box_geometry, build_violin_geometry,
    default_palette, next_color, reset_palette,
)

RED = (1.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)


def _rng(seed=0):
    return np.random.default_rng(seed)


@pytest.fixture(autouse=True)
def fresh_palette():
    reset_palette()
    yield
    reset_palette()


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


@pytest.fixture
def normal_sample():
    return np.random.default_rng(0).normal(size=200)


# ---------------------------------------------------------------------------
# MiniBox geometry
# ---------------------------------------------------------------------------

class TestMiniBoxGeometry:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.box = MiniBox(np.arange(1, 11, dtype=float), 1, label="a", rng=_rng())

    def test_box_rectangle(self):
        xy = self.box.box_plot.xy
        np.testing.assert_allclose(xy[:, 0], [0.985, 1.015, 1.015, 0.985])
        np.testing.assert_allclose(xy[:, 1], [3.25, 3.25, 7.75, 7.75])
        assert self.box.box_width == pytest.approx(0.03)

    def test_whisker(self):
        np.testing.assert_array_equal(self.box.whisker_plot.xdata, [1, 1])
        np.testing.assert_allclose(self.box.whisker_plot.ydata, [1, 10])

    def test_median_and_notches(self):
        np.testing.assert_allclose(self.box.median_plot.offsets, [[1, 5.5]])
        lo, hi = self.box.notch_plots
        offset = 1.57 * 4.5 / np.sqrt(10)
        assert lo.marker == "^" and hi.marker == "v"
        assert lo.y[0] == pytest.approx(5.5 - offset)
        assert hi.y[0] == pytest.approx(5.5 + offset)

    def test_default_flags(self):
        assert self.box.show_outliers is True
        assert self.box.show_notches is False
        assert all(not n.visible for n in self.box.notch_plots)

    def test_no_outliers(self):
        assert self.box.outlier_points.offsets.shape == (0, 2)

    def test_default_colors(self):
        assert self.box.box_color == GRAY
        assert self.box.median_color == WHITE
        assert self.box.whisker_plot.color == GRAY

    def test_draw_order(self):
        roles = [p.role for p in self.box.geometry()]
        assert roles == ["box", "whisker", "outliers", "median", "notch", "notch"]


class TestMiniBoxOutliers:

    def test_outliers_jittered_within_width(self):
        sample = np.r_[np.arange(1, 11, dtype=float), 60.0, 80.0, -40.0]
        box = MiniBox(sample, 2, BoxOptions(width=0.2),
                      rng=np.random.default_rng(3))
        pts = box.outlier_points
        assert pts.marker == "+"
        assert sorted(pts.y.tolist()) == [-40.0, 60.0, 80.0]
        assert np.all(np.abs(pts.x - 2) <= 0.2)

    def test_outliers_hidden(self):
        box = MiniBox([1.0, 2.0, 3.0, 50.0], 1,
                      BoxOptions(show_outliers=False), rng=_rng())
        assert box.show_outliers is False
        assert box.outlier_points.visible is False


class TestMiniBoxSingle:

    def test_single_point(self):
        box = MiniBox([4.0, np.nan], 3)
        assert box.is_single
        assert box.box_plot is None
        assert box.whisker_plot is None
        assert box.notch_plots == []
        assert len(box.geometry()) == 1
        np.testing.assert_allclose(box.median_plot.offsets, [[3, 4.0]])
        assert box.median_plot.edgecolor == GRAY

    def test_single_point_flags(self):
        box = MiniBox([4.0], 1)
        assert box.show_outliers is False
        assert box.show_notches is False
        assert box.box_width is None

    def test_single_point_box_color(self):
        box = MiniBox([4.0], 1)
        box.box_color = RED
        assert box.box_color == RED
        assert box.median_color == WHITE

    def test_empty(self):
        with pytest.raises(EmptySample):
            MiniBox([np.nan], 1)

    def test_build_box_geometry(self):
        geom = build_box_geometry([1.0], 1, label="x")
        assert geom.label == "x"
        assert len(geom.points) == 1
        assert geom.polygons == [] and geom.lines == []


# ---------------------------------------------------------------------------
# MiniBox restyling
# ---------------------------------------------------------------------------

class TestMiniBoxRestyle:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.stack = CommandStack()
        sample = np.r_[np.arange(1, 11, dtype=float), 100.0]
        self.box = MiniBox(sample, 1, stack=self.stack, rng=_rng())

    def test_box_color_fans_out(self):
        self.box.box_color = RED
        b = self.box
        assert b.box_plot.facecolor == RED
        assert b.box_plot.edgecolor == RED
        assert b.whisker_plot.color == RED
        assert b.outlier_points.edgecolor == RED
        assert [n.facecolor for n in b.notch_plots] == [RED, RED]
        assert b.median_plot.facecolor == WHITE

    def test_median_color(self):
        self.box.median_color = BLUE
        assert self.box.median_plot.facecolor == BLUE
        assert [n.facecolor for n in self.box.notch_plots] == [BLUE, BLUE]
        assert self.box.box_plot.facecolor == GRAY

    def test_color_string(self):
        self.box.box_color = "red"
        assert self.box.box_color == RED

    def test_box_width(self):
        self.box.box_width = 0.1
        assert self.box.box_width == pytest.approx(0.1)
        assert self.box.box_plot.xy[:, 0].mean() == pytest.approx(1.0)

    def test_undo_redo(self):
        self.box.box_color = RED
        self.box.show_notches = True
        assert self.stack.undo()
        assert self.box.show_notches is False
        assert self.stack.undo()
        assert self.box.box_color == GRAY
        assert self.box.whisker_plot.color == GRAY
        assert self.stack.redo()
        assert self.box.box_color == RED

    def test_history_is_one_step_per_property(self):
        self.box.box_color = RED
        assert len(self.stack.history) == 1
        assert self.stack.history[0].description == "Box color"

    @pytest.mark.parametrize("attr, value", [
        ("box_color", [1, 0]),
        ("box_color", (2, 0, 0)),
        ("median_color", "not-a-color"),
        ("show_notches", "yes"),
        ("show_outliers", 1),
        ("box_width", 0),
    ])
    def test_invalid_values(self, attr, value):
        with pytest.raises(ConfigurationError):
            setattr(self.box, attr, value)
        assert not self.stack.can_undo


class TestMiniBoxDrawn:

    def test_artists_follow_restyle(self, ax):
        box = MiniBox(np.r_[np.arange(1, 11, dtype=float), 100.0], 1, rng=_rng())
        artists = box.draw(AxesRenderer(ax))
        assert len(artists) == 6
        assert box.rendered
        box.box_color = RED
        assert box.box_plot.artist.get_facecolor()[:3] == pytest.approx(RED)
        assert box.whisker_plot.artist.get_color() == pytest.approx((*RED, 1.0))
        box.show_notches = True
        assert all(n.artist.get_visible() for n in box.notch_plots)

    def test_box_width_moves_artist(self, ax):
        box = MiniBox(np.arange(1, 11, dtype=float), 1, rng=_rng())
        box.draw(AxesRenderer(ax))
        box.box_width = 0.2
        xs = box.box_plot.artist.get_xy()[:, 0]
        assert xs.max() - xs.min() == pytest.approx(0.2)


# ---------------------------------------------------------------------------
# Violin geometry
# ---------------------------------------------------------------------------

class TestViolinGeometry:

    @pytest.fixture(autouse=True)
    def setup(self, normal_sample):
        self.sample = normal_sample
        self.violin = Violin(normal_sample, 2, label="v",
                             rng=np.random.default_rng(5))

    def test_scale(self):
        assert self.violin.scale == pytest.approx(0.3 / self.violin.density.peak)

    def test_silhouette_symmetric(self):
        xy = self.violin.violin_plot.xy
        n = len(self.violin.density)
        right, left = xy[:n], xy[n:][::-1]
        np.testing.assert_allclose(right[:, 0] - 2, 2 - left[:, 0])
        np.testing.assert_allclose(right[:, 1], left[:, 1])

    def test_silhouette_spans_width(self):
        xs = self.violin.violin_plot.xy[:, 0]
        assert xs.max() - 2 == pytest.approx(0.3)

    def test_silhouette_range(self):
        ys = self.violin.violin_plot.xy[:, 1]
        assert ys.min() == self.sample.min()
        assert ys.max() == self.sample.max()

    def test_scatter_inside_violin(self):
        pts = self.violin.scatter_plot
        limit = self.violin.density.at(pts.y) * self.violin.scale
        assert np.all(np.abs(pts.x - 2) <= limit + 1e-12)
        np.testing.assert_array_equal(pts.y, self.sample)

    def test_mean_marker(self):
        line = self.violin.mean_plot
        np.testing.assert_allclose(line.ydata, [self.sample.mean()] * 2)
        assert line.xdata.mean() == pytest.approx(2.0)
        half = (line.xdata[1] - line.xdata[0]) / 2
        assert half >= self.violin.scale / 200
        assert line.visible is False

    def test_embedded_box(self):
        box = self.violin.box_plot
        assert box.show_outliers is False
        assert box.box_width == pytest.approx(self.violin.scale / 100)

    def test_draw_order(self):
        roles = [p.role for p in self.violin.geometry()]
        assert roles[:2] == ["data", "violin"]
        assert roles[-1] == "mean"
        assert "box" in roles

    def test_seeded_jitter_reproducible(self):
        again = Violin(self.sample, 2, rng=np.random.default_rng(5))
        np.testing.assert_array_equal(again.scatter_plot.offsets,
                                      self.violin.scatter_plot.offsets)

    def test_bandwidth_option(self):
        v = Violin(self.sample, 1, ViolinOptions(bandwidth=0.5), rng=_rng())
        assert v.density.bandwidth == 0.5


class TestViolinDegenerate:

    def test_identical_values_nonzero_width(self):
        v = Violin([2.0, 2.0, 2.0, 2.0], 1, rng=_rng())
        assert v.density.is_degenerate
        xs = v.violin_plot.xy[:, 0]
        assert xs.max() - xs.min() == pytest.approx(0.6)
        assert np.all(np.abs(v.scatter_plot.x - 1) <= 0.3)
        mean_half = (v.mean_plot.xdata[1] - v.mean_plot.xdata[0]) / 2
        assert mean_half == pytest.approx(0.3)

    def test_single_value(self):
        v = Violin([5.0], 1)
        assert v.is_single
        assert v.violin_plot is None
        assert v.scatter_plot is None
        assert v.mean_plot is None
        assert len(v.geometry()) == 1
        assert v.show_data is False

    def test_single_value_geometry(self):
        geom = build_violin_geometry([5.0, np.nan], 4)
        assert geom.polygons == []
        np.testing.assert_allclose(geom.points[0].offsets, [[4, 5.0]])


# ---------------------------------------------------------------------------
# Violin colors and restyling
# ---------------------------------------------------------------------------

class TestViolinColors:

    def test_palette_advances(self, normal_sample):
        expected = ColorCycle().colors(2)
        first = Violin(normal_sample, 1, rng=_rng())
        second = Violin(normal_sample, 2, rng=_rng())
        assert first.violin_color == pytest.approx(expected[0])
        assert second.violin_color == pytest.approx(expected[1])

    def test_explicit_color_keeps_palette(self, normal_sample):
        v = Violin(normal_sample, 1, ViolinOptions(violin_color=RED), rng=_rng())
        assert v.violin_color == RED
        assert default_palette().peek() == pytest.approx(ColorCycle().colors(1)[0])

    def test_next_color_advances_default(self, normal_sample):
        expected = ColorCycle().colors(2)
        assert next_color() == pytest.approx(expected[0])
        v = Violin(normal_sample, 1, rng=_rng())
        assert v.violin_color == pytest.approx(expected[1])

    def test_private_palette(self, normal_sample):
        palette = ColorCycle("Set1")
        v = Violin(normal_sample, 1, rng=_rng(), palette=palette)
        assert v.violin_color == pytest.approx(ColorCycle("Set1").colors(1)[0])
        assert default_palette().peek() == pytest.approx(ColorCycle().colors(1)[0])

    def test_violin_color_fans_out(self, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.violin_color = RED
        assert v.violin_plot.facecolor == RED
        assert v.scatter_plot.facecolor == RED
        assert v.mean_plot.color == RED
        assert v.edge_color == GRAY

    def test_alpha_fans_out(self, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.violin_alpha = 0.6
        assert v.violin_plot.alpha == 0.6
        assert v.scatter_plot.alpha == 0.6

    def test_invalid_alpha(self, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        with pytest.raises(ConfigurationError):
            v.violin_alpha = 1.5

    def test_edge_color_only_outline(self, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        before = v.violin_color
        v.edge_color = BLUE
        assert v.violin_plot.edgecolor == BLUE
        assert v.violin_color == before

    def test_flags(self, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.show_data = False
        v.show_mean = True
        assert v.scatter_plot.visible is False
        assert v.mean_plot.visible is True

    def test_box_passthrough(self, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.box_color = RED
        v.median_color = BLUE
        v.show_notches = True
        assert v.box_plot.box_plot.facecolor == RED
        assert v.box_plot.median_plot.facecolor == BLUE
        assert v.show_notches is True


class TestViolinDrawn:

    def test_artists_created_in_order(self, ax, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.draw(AxesRenderer(ax))
        assert ax.patches[0] is v.violin_plot.artist
        assert ax.patches[1] is v.box_plot.box_plot.artist
        assert ax.collections[0] is v.scatter_plot.artist

    def test_face_alpha(self, ax, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.draw(AxesRenderer(ax))
        assert v.violin_plot.artist.get_facecolor()[3] == pytest.approx(0.3)
        assert v.scatter_plot.artist.get_facecolor()[0][3] == pytest.approx(0.3)
        v.violin_alpha = 0.8
        assert v.violin_plot.artist.get_facecolor()[3] == pytest.approx(0.8)

    def test_restyle_reaches_embedded_box(self, ax, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.draw(AxesRenderer(ax))
        v.box_color = RED
        assert v.box_plot.box_plot.artist.get_facecolor()[:3] == pytest.approx(RED)

    def test_visibility(self, ax, normal_sample):
        v = Violin(normal_sample, 1, rng=_rng())
        v.draw(AxesRenderer(ax))
        assert v.mean_plot.artist.get_visible() is False
        v.show_mean = True
        assert v.mean_plot.artist.get_visible() is True


class TestSingleValueViolinStyle:

    def test_color_reads_back(self):
        v = Violin([5.0], 1)
        v.violin_color = RED
        assert v.violin_color == RED
        assert v.options.violin_color == RED

    def test_alpha_and_edge_read_back(self):
        v = Violin([5.0], 1)
        v.violin_alpha = 0.9
        v.edge_color = BLUE
        assert v.violin_alpha == 0.9
        assert v.edge_color == BLUE

    def test_undo_restores_palette_color(self):
        stack = CommandStack()
        v = Violin([5.0], 1, stack=stack)
        before = v.violin_color
        v.violin_color = RED
        stack.undo()
        assert v.violin_color == before


class TestRedraw:

    def test_every_restyle_requests_a_repaint(self, ax, monkeypatch):
        calls = []
        monkeypatch.setattr(ax.figure.canvas, "draw_idle",
                            lambda *a, **k: calls.append(1))
        box = MiniBox(np.arange(1, 11, dtype=float), 1, rng=_rng())
        box.draw(AxesRenderer(ax))
        box.box_color = RED
        box.median_color = BLUE
        box.show_notches = True
        assert len(calls) == 3
