"""Geometry primitives, the only objects handed to a renderer.

Each primitive stores its coordinates and resolved style. Once a renderer
has drawn it, ``artist`` references the matplotlib artist and every
``set_*`` call is mirrored onto that artist immediately.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

import numpy as np
from matplotlib.colors import to_rgba
from matplotlib.markers import MarkerStyle

RGB = tuple[float, float, float]


def _rgba(color: RGB | None, alpha: float = 1.0):
    if color is None:
        return "none"
    return to_rgba(color, alpha)


@dataclass(eq=False)
class Primitive:
    role: str
    visible: bool = True
    artist: Any = field(default=None, repr=False)

    def attach(self, artist: Any) -> None:
        """Bind a drawn artist and push the current style onto it."""
        self.artist = artist
        self._sync_all()

    def set_visible(self, visible: bool) -> None:
        self.visible = bool(visible)
        if self.artist is not None:
            self.artist.set_visible(self.visible)

    def _sync_all(self) -> None:
        self.artist.set_visible(self.visible)


@dataclass(eq=False)
class PolygonGeom(Primitive):
    """Closed filled outline; ``alpha`` applies to the face only."""

    xy: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))
    facecolor: RGB | None = None
    edgecolor: RGB | None = None
    alpha: float = 1.0
    linewidth: float = 0.5

    def set_xy(self, xy) -> None:
        self.xy = np.asarray(xy, dtype=float)
        if self.artist is not None:
            self.artist.set_xy(self.xy)

    def set_facecolor(self, color: RGB | None) -> None:
        self.facecolor = color
        if self.artist is not None:
            self.artist.set_facecolor(_rgba(self.facecolor, self.alpha))

    def set_edgecolor(self, color: RGB | None) -> None:
        self.edgecolor = color
        if self.artist is not None:
            self.artist.set_edgecolor(_rgba(self.edgecolor))

    def set_alpha(self, alpha: float) -> None:
        self.alpha = float(alpha)
        if self.artist is not None:
            self.artist.set_facecolor(_rgba(self.facecolor, self.alpha))

    def _sync_all(self) -> None:
        super()._sync_all()
        self.artist.set_facecolor(_rgba(self.facecolor, self.alpha))
        self.artist.set_edgecolor(_rgba(self.edgecolor))
        self.artist.set_linewidth(self.linewidth)


@dataclass(eq=False)
class PointsGeom(Primitive):
    """Scatter markers at ``offsets`` (an ``(n, 2)`` array of x, y).

    Unfilled markers such as ``"+"`` are stroked with ``edgecolor``.
    """

    offsets: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))
    marker: str = "o"
    facecolor: RGB | None = None
    edgecolor: RGB | None = None
    alpha: float = 1.0
    size: float = 36.0

    @property
    def filled(self) -> bool:
        return MarkerStyle(self.marker).is_filled()

    @property
    def x(self) -> np.ndarray:
        return self.offsets[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.offsets[:, 1]

    def set_facecolor(self, color: RGB | None) -> None:
        self.facecolor = color
        self._sync_colors()

    def set_edgecolor(self, color: RGB | None) -> None:
        self.edgecolor = color
        self._sync_colors()

    def set_alpha(self, alpha: float) -> None:
        self.alpha = float(alpha)
        self._sync_colors()

    def _sync_colors(self) -> None:
        if self.artist is None:
            return
        if self.filled:
            self.artist.set_facecolor(_rgba(self.facecolor, self.alpha))
            self.artist.set_edgecolor(_rgba(self.edgecolor))
        else:
            # unfilled markers are drawn with their face color
            self.artist.set_facecolor(_rgba(self.edgecolor))

    def _sync_all(self) -> None:
        super()._sync_all()
        self._sync_colors()


@dataclass(eq=False)
class LineGeom(Primitive):
    """Straight line through ``xdata``/``ydata``."""

    xdata: np.ndarray = field(default_factory=lambda: np.empty(0))
    ydata: np.ndarray = field(default_factory=lambda: np.empty(0))
    color: RGB | None = None
    linewidth: float = 0.5

    def set_color(self, color: RGB | None) -> None:
        self.color = color
        if self.artist is not None:
            self.artist.set_color(_rgba(self.color))

    def _sync_all(self) -> None:
        super()._sync_all()
        self.artist.set_color(_rgba(self.color))
        self.artist.set_linewidth(self.linewidth)


@dataclass
class GeometryDescriptor:
    """Primitives of one group in draw order."""

    label: str
    position: float
    parts: list[Primitive] = field(default_factory=list)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    @property
    def polygons(self) -> list[PolygonGeom]:
        return [p for p in self.parts if isinstance(p, PolygonGeom)]

    @property
    def points(self) -> list[PointsGeom]:
        return [p for p in self.parts if isinstance(p, PointsGeom)]

    @property
    def lines(self) -> list[LineGeom]:
        return [p for p in self.parts if isinstance(p, LineGeom)]
