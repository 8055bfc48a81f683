"""matplotlib backend — draws geometry descriptors onto an Axes."""
from __future__ import annotations

import logging
from typing import Any, Callable

from matplotlib.axes import Axes

from ._geometry import GeometryDescriptor, LineGeom, PointsGeom, PolygonGeom, Primitive

logger = logging.getLogger(__name__)


def _draw_polygon(ax: Axes, geom: PolygonGeom, zorder: float) -> Any:
    patch, = ax.fill(geom.xy[:, 0], geom.xy[:, 1], zorder=zorder)
    return patch


def _draw_points(ax: Axes, geom: PointsGeom, zorder: float) -> Any:
    return ax.scatter(geom.x, geom.y, s=geom.size, marker=geom.marker,
                      zorder=zorder)


def _draw_line(ax: Axes, geom: LineGeom, zorder: float) -> Any:
    line, = ax.plot(geom.xdata, geom.ydata, zorder=zorder)
    return line


DRAW_REGISTRY: dict[type[Primitive], Callable[[Axes, Any, float], Any]] = {
    PolygonGeom: _draw_polygon,
    PointsGeom: _draw_points,
    LineGeom: _draw_line,
}


class AxesRenderer:
    """Draws primitives in order on one Axes and binds the created artists.

    Every artist shares one zorder so the insertion order of the
    primitives is the drawing order.
    """

    def __init__(self, ax: Axes, zorder: float = 2.0):
        self._ax = ax
        self._zorder = zorder

    def draw(self, geometry: GeometryDescriptor) -> list[Any]:
        artists = []
        for part in geometry:
            draw_fn = DRAW_REGISTRY.get(type(part))
            if draw_fn is None:
                raise TypeError(f"no renderer for {type(part).__name__}")
            artist = draw_fn(self._ax, part, self._zorder)
            part.attach(artist)
            artists.append(artist)
        logger.debug("drew %d artists for group %r at x=%g",
                     len(artists), geometry.label, geometry.position)
        return artists

    def set_group_ticks(self, labels: list[str]) -> None:
        positions = list(range(1, len(labels) + 1))
        self._ax.set_xticks(positions)
        self._ax.set_xticklabels(labels)

    def redraw(self) -> None:
        """Request a canvas repaint; pending requests are merged by
        ``draw_idle`` until the canvas next paints."""
        self._ax.figure.canvas.draw_idle()
