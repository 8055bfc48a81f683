"""Compact box plot — quartile box, whisker line, median and notch markers,
jittered outliers."""
from __future__ import annotations

import numpy as np

from .._commands import CommandStack
from .._errors import EmptySample
from .._geometry import GeometryDescriptor, LineGeom, PointsGeom, PolygonGeom, Primitive
from .._options import BoxOptions, resolve_rng, validate_color, validate_flag, validate_positive
from .._stats import RobustStats, compute_stats
from ._base import ComposedPlot


def _box_xy(position: float, box_width: float, q1: float, q3: float) -> np.ndarray:
    xs = position + np.array([-1, 1, 1, -1]) * box_width / 2
    return np.column_stack([xs, [q1, q1, q3, q3]])


def _point(position: float, value: float) -> np.ndarray:
    return np.array([[position, value]], dtype=float)


class MiniBox(ComposedPlot):
    """Compact box plot of one sample at x = ``position``.

    A sample with a single value is drawn as one point (``median_plot``)
    and every other part is ``None``.
    """

    def __init__(self, sample, position: float, options: BoxOptions | None = None,
                 *, label: str = "", rng=None, stack: CommandStack | None = None,
                 stats: RobustStats | None = None):
        super().__init__(label, position, stack)
        self.options = (options or BoxOptions()).validate()
        sample = np.asarray(sample, dtype=float).ravel()
        sample = sample[~np.isnan(sample)]
        if sample.size == 0:
            raise EmptySample(f"group {label!r} has no non-NaN values")
        self.stats = stats if stats is not None else compute_stats(sample)

        self.box_plot: PolygonGeom | None = None
        self.whisker_plot: LineGeom | None = None
        self.outlier_points: PointsGeom | None = None
        self.notch_plots: list[PointsGeom] = []

        if self.stats.is_single:
            self.median_plot = PointsGeom(
                "median", offsets=_point(self.position, self.stats.median),
                facecolor=self.options.median_color,
                edgecolor=self.options.edge_color)
        else:
            self._build(resolve_rng(rng))

    def _build(self, rng) -> None:
        opts, st, pos = self.options, self.stats, self.position
        q1, q2, q3 = st.quartiles

        self.box_plot = PolygonGeom(
            "box", xy=_box_xy(pos, opts.box_width, q1, q3),
            facecolor=opts.box_color, edgecolor=opts.box_color)

        if st.has_whiskers:
            low, high = st.whiskers
            self.whisker_plot = LineGeom(
                "whisker", xdata=np.array([pos, pos]),
                ydata=np.array([low, high]), color=opts.box_color)

        jitter = rng.uniform(-1.0, 1.0, st.outliers.size)
        self.outlier_points = PointsGeom(
            "outliers",
            offsets=np.column_stack([pos + jitter * opts.width, st.outliers]),
            marker="+", facecolor=opts.box_color, edgecolor=opts.box_color,
            visible=opts.show_outliers)

        self.median_plot = PointsGeom(
            "median", offsets=_point(pos, q2),
            facecolor=opts.median_color, edgecolor=opts.box_color)

        notch_lo, notch_hi = st.notch
        self.notch_plots = [
            PointsGeom("notch", offsets=_point(pos, notch_lo), marker="^",
                       facecolor=opts.median_color, visible=opts.show_notches),
            PointsGeom("notch", offsets=_point(pos, notch_hi), marker="v",
                       facecolor=opts.median_color, visible=opts.show_notches),
        ]

    def parts(self) -> list[Primitive]:
        parts = [self.box_plot, self.whisker_plot, self.outlier_points,
                 self.median_plot, *self.notch_plots]
        return [p for p in parts if p is not None]

    @property
    def is_single(self) -> bool:
        return self.box_plot is None

    # -- style properties --------------------------------------------------

    @property
    def box_color(self):
        if self.box_plot is not None:
            return self.box_plot.facecolor
        return self.median_plot.edgecolor

    @box_color.setter
    def box_color(self, color) -> None:
        color = validate_color(color, "box_color")
        changes = [(self.median_plot, "edgecolor", color)]
        if self.box_plot is not None:
            changes += [
                (self.box_plot, "facecolor", color),
                (self.box_plot, "edgecolor", color),
                (self.outlier_points, "edgecolor", color),
                (self.whisker_plot, "color", color),
            ]
            changes += [(n, "facecolor", color) for n in self.notch_plots]
        self._restyle("Box color", changes)

    @property
    def median_color(self):
        return self.median_plot.facecolor

    @median_color.setter
    def median_color(self, color) -> None:
        color = validate_color(color, "median_color")
        changes = [(self.median_plot, "facecolor", color)]
        changes += [(n, "facecolor", color) for n in self.notch_plots]
        self._restyle("Median color", changes)

    @property
    def box_width(self) -> float | None:
        if self.box_plot is None:
            return None
        xs = self.box_plot.xy[:, 0]
        return float(xs.max() - xs.min())

    @box_width.setter
    def box_width(self, width: float) -> None:
        width = validate_positive(width, "box_width")
        if self.box_plot is None:
            return
        q1, _, q3 = self.stats.quartiles
        self._restyle("Box width", [
            (self.box_plot, "xy", _box_xy(self.position, width, q1, q3))])

    @property
    def show_outliers(self) -> bool:
        return self.outlier_points is not None and self.outlier_points.visible

    @show_outliers.setter
    def show_outliers(self, yesno: bool) -> None:
        yesno = validate_flag(yesno, "show_outliers")
        self._restyle("Show outliers", [(self.outlier_points, "visible", yesno)])

    @property
    def show_notches(self) -> bool:
        return bool(self.notch_plots) and self.notch_plots[0].visible

    @show_notches.setter
    def show_notches(self, yesno: bool) -> None:
        yesno = validate_flag(yesno, "show_notches")
        self._restyle("Show notches",
                      [(n, "visible", yesno) for n in self.notch_plots])


def build_box_geometry(sample, position: float, options: BoxOptions | None = None,
                       *, label: str = "", rng=None) -> GeometryDescriptor:
    """Geometry of a compact box plot without drawing anything."""
    return MiniBox(sample, position, options, label=label, rng=rng).geometry()
