"""Error taxonomy for plot calls."""
from __future__ import annotations


class ViolinboxError(ValueError):
    """Base class for every error raised while preparing a plot."""


class ShapeMismatch(ViolinboxError):
    """Category or label count does not match the extent of the data."""


class ConfigurationError(ViolinboxError):
    """An option has an invalid value."""


class EmptySample(ViolinboxError):
    """A group has no values left after NaN filtering."""
