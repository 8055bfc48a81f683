"""Violin plot — mirrored density silhouette with jittered data points, an
embedded compact box plot and a mean marker.

See J. L. Hintze and R. D. Nelson, "Violin plots: a box plot-density trace
synergism", The American Statistician 52(2), 1998.
"""
from __future__ import annotations

import dataclasses
from typing import Any

import numpy as np

from .._commands import CommandStack
from .._density import DensityCurve, estimate_density
from .._errors import EmptySample
from .._geometry import GeometryDescriptor, LineGeom, PointsGeom, PolygonGeom, Primitive
from .._options import ViolinOptions, resolve_rng, validate_alpha, validate_color, validate_flag
from .._renderer import AxesRenderer
from .._stats import compute_stats
from ._base import ComposedPlot
from ._color_utils import ColorCycle, default_palette
from ._minibox import MiniBox


def _silhouette(curve: DensityCurve, position: float, scale: float) -> np.ndarray:
    half = curve.densities * scale
    xs = np.concatenate([position + half, position - half[::-1]])
    ys = np.concatenate([curve.values, curve.values[::-1]])
    return np.column_stack([xs, ys])


class Violin(ComposedPlot):
    """Violin of one sample at x = ``position``.

    For a single-value sample only ``box_plot`` exists (drawn as one point);
    ``scatter_plot``, ``violin_plot`` and ``mean_plot`` are ``None``.
    """

    def __init__(self, sample, position: float, options: ViolinOptions | None = None,
                 *, label: str = "", rng=None, stack: CommandStack | None = None,
                 palette: ColorCycle | None = None):
        super().__init__(label, position, stack)
        opts = (options or ViolinOptions()).validate()
        sample = np.asarray(sample, dtype=float).ravel()
        sample = sample[~np.isnan(sample)]
        if sample.size == 0:
            raise EmptySample(f"group {label!r} has no non-NaN values")

        if opts.violin_color is None:
            opts = dataclasses.replace(
                opts, violin_color=(palette or default_palette()).next())
        self.options = opts
        self.stats = compute_stats(sample)
        rng = resolve_rng(rng)

        self.scatter_plot: PointsGeom | None = None
        self.violin_plot: PolygonGeom | None = None
        self.mean_plot: LineGeom | None = None
        self.density: DensityCurve | None = None
        self.scale: float | None = None

        if self.stats.is_single:
            self.box_plot = MiniBox(sample, position, opts.box_options(opts.width),
                                    label=label, rng=rng, stack=stack,
                                    stats=self.stats)
            return

        self.density = curve = estimate_density(sample, opts.bandwidth)
        self.scale = scale = opts.width / curve.peak
        pos = self.position

        # points spread horizontally up to the local violin half-width
        jitter = rng.uniform(-1.0, 1.0, sample.size)
        spread = curve.at(sample) * scale
        self.scatter_plot = PointsGeom(
            "data", offsets=np.column_stack([pos + jitter * spread, sample]),
            facecolor=opts.violin_color, alpha=opts.violin_alpha,
            visible=opts.show_data)

        self.violin_plot = PolygonGeom(
            "violin", xy=_silhouette(curve, pos, scale),
            facecolor=opts.violin_color, edgecolor=opts.edge_color,
            alpha=opts.violin_alpha)

        self.box_plot = MiniBox(sample, pos, opts.box_options(scale),
                                label=label, rng=rng, stack=stack,
                                stats=self.stats)

        mean = self.stats.mean
        half = max(curve.at(mean) * scale, scale / 200)
        self.mean_plot = LineGeom(
            "mean", xdata=np.array([pos - half, pos + half]),
            ydata=np.array([mean, mean]), color=opts.violin_color,
            linewidth=1.0, visible=opts.show_mean)

    def parts(self) -> list[Primitive]:
        parts = [self.scatter_plot, self.violin_plot,
                 *self.box_plot.parts(), self.mean_plot]
        return [p for p in parts if p is not None]

    def draw(self, renderer: AxesRenderer) -> list[Any]:
        self.box_plot._renderer = renderer
        return super().draw(renderer)

    @property
    def is_single(self) -> bool:
        return self.violin_plot is None

    def _with(self, **changes) -> ViolinOptions:
        # single-value violins keep their style only in the options
        return dataclasses.replace(self.options, **changes)

    # -- style properties --------------------------------------------------

    @property
    def violin_color(self):
        if self.violin_plot is not None:
            return self.violin_plot.facecolor
        return self.options.violin_color

    @violin_color.setter
    def violin_color(self, color) -> None:
        color = validate_color(color, "violin_color")
        self._restyle("Violin color", [
            (self.violin_plot, "facecolor", color),
            (self.scatter_plot, "facecolor", color),
            (self.mean_plot, "color", color),
            (self, "options", self._with(violin_color=color)),
        ])

    @property
    def violin_alpha(self) -> float:
        if self.violin_plot is not None:
            return self.violin_plot.alpha
        return self.options.violin_alpha

    @violin_alpha.setter
    def violin_alpha(self, alpha: float) -> None:
        alpha = validate_alpha(alpha)
        self._restyle("Violin alpha", [
            (self.scatter_plot, "alpha", alpha),
            (self.violin_plot, "alpha", alpha),
            (self, "options", self._with(violin_alpha=alpha)),
        ])

    @property
    def edge_color(self):
        if self.violin_plot is not None:
            return self.violin_plot.edgecolor
        return self.options.edge_color

    @edge_color.setter
    def edge_color(self, color) -> None:
        color = validate_color(color, "edge_color")
        self._restyle("Edge color", [
            (self.violin_plot, "edgecolor", color),
            (self, "options", self._with(edge_color=color)),
        ])

    @property
    def show_data(self) -> bool:
        return self.scatter_plot is not None and self.scatter_plot.visible

    @show_data.setter
    def show_data(self, yesno: bool) -> None:
        yesno = validate_flag(yesno, "show_data")
        self._restyle("Show data", [(self.scatter_plot, "visible", yesno)])

    @property
    def show_mean(self) -> bool:
        return self.mean_plot is not None and self.mean_plot.visible

    @show_mean.setter
    def show_mean(self, yesno: bool) -> None:
        yesno = validate_flag(yesno, "show_mean")
        self._restyle("Show mean", [(self.mean_plot, "visible", yesno)])

    # embedded box plot

    @property
    def box_color(self):
        return self.box_plot.box_color

    @box_color.setter
    def box_color(self, color) -> None:
        self.box_plot.box_color = color

    @property
    def median_color(self):
        return self.box_plot.median_color

    @median_color.setter
    def median_color(self, color) -> None:
        self.box_plot.median_color = color

    @property
    def show_notches(self) -> bool:
        return self.box_plot.show_notches

    @show_notches.setter
    def show_notches(self, yesno: bool) -> None:
        self.box_plot.show_notches = yesno


def build_violin_geometry(sample, position: float, options: ViolinOptions | None = None,
                          *, label: str = "", rng=None,
                          palette: ColorCycle | None = None) -> GeometryDescriptor:
    """Geometry of a violin without drawing anything."""
    return Violin(sample, position, options, label=label, rng=rng,
                  palette=palette).geometry()
