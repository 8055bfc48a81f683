"""Plot options with eager validation."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from matplotlib.colors import to_rgb

from ._errors import ConfigurationError

GRAY = (0.5, 0.5, 0.5)
WHITE = (1.0, 1.0, 1.0)


# ---------------------------------------------------------------------------
# Value checks
# ---------------------------------------------------------------------------

def validate_color(value: Any, name: str = "color") -> tuple[float, float, float]:
    """Return *value* as an RGB float triple.

    Accepts a 3-element numeric sequence in [0, 1] or any matplotlib color
    string ("C0", "tab:blue", "#1f77b4", ...).
    """
    if isinstance(value, str):
        try:
            return tuple(float(c) for c in to_rgb(value))
        except ValueError:
            raise ConfigurationError(
                f"{name}: {value!r} is not a color") from None
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError):
        arr = None
    if arr is None or arr.shape != (3,):
        raise ConfigurationError(
            f"{name} must be an RGB triple, got {value!r}")
    if not np.all((arr >= 0) & (arr <= 1)):
        raise ConfigurationError(
            f"{name} components must lie in [0, 1], got {value!r}")
    return tuple(float(c) for c in arr)


def validate_flag(value: Any, name: str) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise ConfigurationError(f"{name} must be True or False, got {value!r}")
    return bool(value)


def validate_positive(value: Any, name: str) -> float:
    if isinstance(value, (bool, str)) or not np.isscalar(value):
        raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
    return value


def validate_alpha(value: Any, name: str = "violin_alpha") -> float:
    if isinstance(value, (bool, str)) or not np.isscalar(value):
        raise ConfigurationError(f"{name} must be a number in [0, 1], got {value!r}")
    value = float(value)
    if not 0 <= value <= 1:
        raise ConfigurationError(f"{name} must be a number in [0, 1], got {value!r}")
    return value


_CHECKS = {
    "color": validate_color,
    "flag": validate_flag,
    "positive": validate_positive,
    "alpha": validate_alpha,
}


def _opt(default: Any, kind: str, optional: bool = False):
    return field(default=default, metadata={"kind": kind, "optional": optional})


# ---------------------------------------------------------------------------
# Option sets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Options:

    def validate(self):
        """Return a copy with every value checked and normalized."""
        changes = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None and f.metadata.get("optional"):
                continue
            changes[f.name] = _CHECKS[f.metadata["kind"]](value, f.name)
        return dataclasses.replace(self, **changes)

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in dataclasses.fields(cls)]

    @classmethod
    def from_kwargs(cls, profile: dict | None = None, **kwargs):
        """Build validated options from a profile dict overridden by kwargs.

        Profile entries that do not apply to this option set are ignored;
        unknown keyword arguments are an error.
        """
        names = cls.names()
        unknown = sorted(set(kwargs) - set(names))
        if unknown:
            raise ConfigurationError(
                f"unknown option(s) for {cls.__name__}: {', '.join(unknown)}")
        merged = {k: v for k, v in (profile or {}).items() if k in names}
        merged.update(kwargs)
        return cls(**merged).validate()

    def to_dict(self) -> dict[str, Any]:
        return {name: (list(v) if isinstance(v, tuple) else v)
                for name, v in dataclasses.asdict(self).items()}


@dataclass(frozen=True)
class BoxOptions(_Options):
    """Options of a compact box plot.

    ``width`` is the horizontal jitter amplitude of outlier points;
    ``box_width`` is the full width of the quartile box.
    """

    width: float = _opt(0.3, "positive")
    box_width: float = _opt(0.03, "positive")
    box_color: tuple = _opt(GRAY, "color")
    edge_color: tuple = _opt(GRAY, "color")
    median_color: tuple = _opt(WHITE, "color")
    show_outliers: bool = _opt(True, "flag")
    show_notches: bool = _opt(False, "flag")


@dataclass(frozen=True)
class ViolinOptions(_Options):
    """Options of a violin; ``violin_color=None`` takes the next palette color
    and ``box_width=None`` sizes the embedded box from the violin scale."""

    width: float = _opt(0.3, "positive")
    bandwidth: float | None = _opt(None, "positive", optional=True)
    violin_color: tuple | None = _opt(None, "color", optional=True)
    violin_alpha: float = _opt(0.3, "alpha")
    edge_color: tuple = _opt(GRAY, "color")
    box_color: tuple = _opt(GRAY, "color")
    median_color: tuple = _opt(WHITE, "color")
    box_width: float | None = _opt(None, "positive", optional=True)
    show_data: bool = _opt(True, "flag")
    show_mean: bool = _opt(False, "flag")
    show_notches: bool = _opt(False, "flag")

    def box_options(self, scale: float) -> BoxOptions:
        """Options for the compact box embedded inside the violin."""
        return BoxOptions(
            width=self.width,
            box_width=self.box_width if self.box_width is not None else scale / 100,
            box_color=self.box_color,
            edge_color=self.edge_color,
            median_color=self.median_color,
            show_outliers=False,
            show_notches=self.show_notches,
        )


def resolve_rng(rng: Any = None, seed: int | None = None):
    """Return the jitter generator: *rng* itself, or a new one from *seed*."""
    if rng is not None:
        if seed is not None:
            raise ConfigurationError("pass either rng or seed, not both")
        if not callable(getattr(rng, "uniform", None)):
            raise ConfigurationError(
                f"rng must be a numpy Generator or RandomState, got {rng!r}")
        return rng
    return np.random.default_rng(seed)
