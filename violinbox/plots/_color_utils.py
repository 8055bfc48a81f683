"""Default violin colors drawn from a matplotlib colormap."""
from __future__ import annotations

import matplotlib
from matplotlib.colors import ListedColormap, to_rgb

from .._errors import ConfigurationError

DEFAULT_CMAP = "tab10"


def _cmap_color(cmap, i, n):
    """Sample color i of n from a colormap.

    Small qualitative colormaps (tab10, Set1, ... with N <= 20) cycle through
    their discrete colors; continuous or large listed colormaps are sampled
    evenly across [0, 1].
    """
    if isinstance(cmap, ListedColormap) and cmap.N <= 20:
        return cmap(i % cmap.N)
    return cmap((i % n) / max(n - 1, 1))


def _get_cmap(cmap_name: str):
    try:
        return matplotlib.colormaps[cmap_name]
    except KeyError:
        raise ConfigurationError(f"unknown colormap {cmap_name!r}") from None


class ColorCycle:
    """Deterministic sequence of RGB colors.

    Each :meth:`next` call returns the following color and advances;
    :meth:`reset` starts over from the first color.
    """

    def __init__(self, cmap_name: str = DEFAULT_CMAP, n: int = 10):
        self._n = n
        self.reset(cmap_name)

    def reset(self, cmap_name: str | None = None) -> None:
        if cmap_name is not None:
            self._cmap = _get_cmap(cmap_name)
            self.cmap_name = cmap_name
        self._index = 0

    def peek(self) -> tuple[float, float, float]:
        return tuple(to_rgb(_cmap_color(self._cmap, self._index, self._n)))

    def next(self) -> tuple[float, float, float]:
        color = self.peek()
        self._index += 1
        return color

    def colors(self, n: int | None = None) -> list[tuple[float, float, float]]:
        """The first *n* colors of the cycle, without advancing it."""
        n = self._n if n is None else n
        return [tuple(to_rgb(_cmap_color(self._cmap, i, self._n)))
                for i in range(n)]


_PALETTE = ColorCycle()


def default_palette() -> ColorCycle:
    return _PALETTE


def next_color() -> tuple[float, float, float]:
    """Advance the process-wide palette."""
    return _PALETTE.next()


def reset_palette(cmap_name: str = DEFAULT_CMAP) -> None:
    """Restart the process-wide palette at its first color."""
    _PALETTE.reset(cmap_name)
