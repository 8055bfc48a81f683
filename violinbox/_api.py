"""Entry points: extract groups, build every plot, then draw them."""
from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from ._commands import CommandStack
from ._errors import ConfigurationError
from ._groups import drop_missing, extract_groups
from ._options import resolve_rng
from ._profiles import load_profile
from ._renderer import AxesRenderer
from .plots import PLOT_REGISTRY, ColorCycle, ComposedPlot, MiniBox, Violin

logger = logging.getLogger(__name__)


def _plot(kind: str, data: Any, categories: Any, *, ax: Axes | None,
          rng: Any, seed: int | None, stack: CommandStack | None,
          profile: str | dict | None, render: bool,
          plot_kwargs: dict[str, Any], options: dict[str, Any]) -> list[ComposedPlot]:
    plot_cls, options_cls = PLOT_REGISTRY[kind]

    # everything is validated before the first plot is built
    if isinstance(profile, str):
        profile = load_profile(profile)
    opts = options_cls.from_kwargs(profile, **options)
    rng = resolve_rng(rng, seed)
    groups = drop_missing(extract_groups(data, categories))

    plots = [plot_cls(g.sample, position, opts, label=g.label, rng=rng,
                      stack=stack, **plot_kwargs)
             for position, g in enumerate(groups, start=1)]
    logger.debug("built %d %s plots", len(plots), kind)

    if render:
        renderer = AxesRenderer(ax if ax is not None else plt.gca())
        for p in plots:
            p.draw(renderer)
        renderer.set_group_ticks([p.label for p in plots])
    return plots


def miniboxplot(data: Any, categories: Any = None, *, ax: Axes | None = None,
                rng: Any = None, seed: int | None = None,
                stack: CommandStack | None = None,
                profile: str | dict | None = None, render: bool = True,
                **options: Any) -> list[MiniBox]:
    """Compact box plots of some data and categories.

    Parameters
    ----------
    data : vector, 2-D array, list of samples, DataFrame, dict or
        structured array
        - vector: one box.
        - vector with *categories* of equal length: one box per category.
        - 2-D array / ragged list of samples: one box per column / sample,
          labelled by *categories* if given, else 1, 2, ...
        - DataFrame / dict / structured array: one box per numeric column.
    categories : sequence, optional
        Per-value categories or per-column names, see *data*.
    ax : Axes, optional
        Target axes; defaults to ``plt.gca()``.
    rng, seed :
        Jitter generator for outlier points, or a seed to create one.
    stack : CommandStack, optional
        Records later restyles so they can be undone.
    profile : str or dict, optional
        Saved profile name (see :func:`save_profile`) or a dict of options;
        keyword options override it.
    render : bool
        If False, build the geometry only and leave the axes untouched.
    **options
        ``width``, ``box_width``, ``box_color``, ``edge_color``,
        ``median_color``, ``show_outliers``, ``show_notches``.

    Returns
    -------
    list of MiniBox, one per group in axis order.
    """
    return _plot("box", data, categories, ax=ax, rng=rng, seed=seed,
                 stack=stack, profile=profile, render=render,
                 plot_kwargs={}, options=options)


def violinplot(data: Any, categories: Any = None, *, ax: Axes | None = None,
               rng: Any = None, seed: int | None = None,
               stack: CommandStack | None = None,
               profile: str | dict | None = None, render: bool = True,
               palette: ColorCycle | None = None,
               **options: Any) -> list[Violin]:
    """Violin plots of some data and categories.

    Accepts the same inputs as :func:`miniboxplot`. Violins without an
    explicit ``violin_color`` take successive colors from *palette*
    (default: the process-wide palette, see :func:`reset_palette`).

    Options: ``width``, ``bandwidth``, ``violin_color``, ``violin_alpha``,
    ``edge_color``, ``box_color``, ``median_color``, ``box_width``,
    ``show_data``, ``show_mean``, ``show_notches``.
    """
    return _plot("violin", data, categories, ax=ax, rng=rng, seed=seed,
                 stack=stack, profile=profile, render=render,
                 plot_kwargs={"palette": palette}, options=options)


def _settable(plot: ComposedPlot, name: str) -> bool:
    prop = getattr(type(plot), name, None)
    return isinstance(prop, property) and prop.fset is not None


def restyle(plots: list[ComposedPlot], description: str = "Restyle",
            **properties: Any) -> None:
    """Set style properties on every plot in *plots*.

    With a shared :class:`CommandStack` the whole change is one undo step,
    and a value rejected part way through reverts the plots already
    changed.

    Example::

        violins = violinplot(data, stack=stack)
        restyle(violins, edge_color="k", show_mean=True)
        stack.undo()  # both properties, every violin
    """
    for name in properties:
        missing = [p.label for p in plots if not _settable(p, name)]
        if missing:
            raise ConfigurationError(
                f"{name!r} is not a style property of plot(s) {missing}")

    with ExitStack() as scope:
        for stack in {id(p.stack): p.stack for p in plots
                      if p.stack is not None}.values():
            scope.enter_context(stack.transaction(description))
        for p in plots:
            for name, value in properties.items():
                setattr(p, name, value)
    logger.debug("restyled %d plots: %s", len(plots), sorted(properties))
