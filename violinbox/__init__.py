"""violinbox — violin plots and compact box plots for matplotlib.

Usage:
    import violinbox

    # One violin per column
    violins = violinbox.violinplot(np.random.randn(100, 3))

    # One compact box per category
    boxes = violinbox.miniboxplot(values, categories=labels, show_notches=True)

    # Restyle after drawing
    violins[0].violin_color = (0.8, 0.2, 0.2)
    boxes[1].box_color = "k"

    # Change every plot of a call as one undo step
    stack = violinbox.CommandStack()
    violins = violinbox.violinplot(data, stack=stack)
    violinbox.restyle(violins, edge_color="k", show_mean=True)
    stack.undo()
"""
from __future__ import annotations

__version__ = "0.1.0"

import logging

from ._api import miniboxplot, restyle, violinplot
from ._commands import BatchCommand, Command, CommandStack
from ._density import DensityCurve, estimate_density, silverman_bandwidth
from ._errors import ConfigurationError, EmptySample, ShapeMismatch, ViolinboxError
from ._geometry import GeometryDescriptor, LineGeom, PointsGeom, PolygonGeom
from ._groups import classify_input, drop_missing, extract_groups
from ._options import BoxOptions, ViolinOptions
from ._profiles import delete_profile, list_profiles, load_profile, save_profile
from ._renderer import AxesRenderer
from ._stats import RobustStats, compute_stats
from ._types import Group, InputKind
from .plots import (
    ColorCycle, MiniBox, Violin, build_box_geometry, build_violin_geometry,
    next_color, reset_palette,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AxesRenderer", "BatchCommand", "BoxOptions", "ColorCycle", "Command",
    "CommandStack", "ConfigurationError", "DensityCurve", "EmptySample",
    "GeometryDescriptor", "Group", "InputKind", "LineGeom", "MiniBox",
    "PointsGeom", "PolygonGeom", "RobustStats", "ShapeMismatch", "Violin",
    "ViolinOptions", "ViolinboxError", "build_box_geometry",
    "build_violin_geometry", "classify_input", "compute_stats",
    "delete_profile", "drop_missing", "estimate_density", "extract_groups",
    "list_profiles", "load_profile", "miniboxplot", "next_color",
    "reset_palette", "restyle", "save_profile", "silverman_bandwidth",
    "violinplot",
]
