"""Plot registry mapping a plot kind to its composed plot class and options."""
from __future__ import annotations

from .._options import BoxOptions, ViolinOptions, _Options
from ._base import ComposedPlot
from ._color_utils import ColorCycle, default_palette, next_color, reset_palette
from ._minibox import MiniBox, build_box_geometry
from ._violin import Violin, build_violin_geometry

PLOT_REGISTRY: dict[str, tuple[type[ComposedPlot], type[_Options]]] = {
    "box": (MiniBox, BoxOptions),
    "violin": (Violin, ViolinOptions),
}

__all__ = [
    "ColorCycle", "ComposedPlot", "MiniBox", "PLOT_REGISTRY", "Violin",
    "build_box_geometry", "build_violin_geometry", "default_palette",
    "next_color", "reset_palette",
]
