"""Turn vectors, matrices, tables and categorized vectors into an ordered
list of labelled samples.

The input shape is resolved once by :func:`classify_input`; every other
function works on the resulting :class:`InputKind`.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from ._errors import ConfigurationError, EmptySample, ShapeMismatch
from ._types import Group, InputKind

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_record(data: Any) -> bool:
    if isinstance(data, (pd.DataFrame, Mapping)):
        return True
    dtype = getattr(data, "dtype", None)
    return getattr(dtype, "names", None) is not None


def _is_numeric_column(column: Any) -> bool:
    if isinstance(column, pd.Series):
        return is_numeric_dtype(column) and not is_bool_dtype(column)
    arr = np.asarray(column)
    return arr.dtype.kind in "iuf"


def _record_columns(data: Any) -> list[tuple[str, Any]]:
    """Return (name, column) pairs in declaration order."""
    if isinstance(data, pd.DataFrame):
        return [(str(name), data[name]) for name in data.columns]
    if isinstance(data, Mapping):
        return [(str(name), col) for name, col in data.items()]
    return [(name, data[name]) for name in data.dtype.names]


def _as_float(values: Any, what: str) -> np.ndarray:
    try:
        return np.asarray(values, dtype=float)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{what} must be numeric") from None


def _is_vector(arr: np.ndarray) -> bool:
    return arr.ndim == 1 or (arr.ndim == 2 and 1 in arr.shape)


def _is_columns(data: Any) -> bool:
    """A list/tuple of 1-D samples of differing lengths.

    Rectangular nested lists are left to numpy and read as a matrix.
    """
    if not isinstance(data, (list, tuple)) or len(data) < 2:
        return False
    if not all(isinstance(item, (Sequence, np.ndarray, pd.Series))
               and not isinstance(item, str)
               and np.ndim(item) == 1
               for item in data):
        return False
    return len({len(item) for item in data}) > 1


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_input(data: Any, categories: Any = None) -> InputKind:
    """Resolve the shape of *data* into an :class:`InputKind`.

    Precedence: record-like, ragged list of samples, vector with per-value
    categories, plain vector, then matrix. Column and row vectors count as
    vectors unless *categories* names their single column.
    """
    has_categories = categories is not None and len(categories) > 0

    if _is_record(data):
        kind = InputKind.RECORD
    elif _is_columns(data):
        kind = InputKind.COLUMNS
    else:
        arr = np.asarray(data)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        if _is_vector(arr):
            if not has_categories:
                kind = InputKind.VECTOR
            elif len(categories) == arr.size:
                kind = InputKind.CATEGORIZED
            elif arr.ndim == 2 and len(categories) == arr.shape[1]:
                kind = InputKind.MATRIX
            else:
                raise ShapeMismatch(
                    f"categories has {len(categories)} entries but data has "
                    f"{arr.size} values")
        elif arr.ndim == 2:
            kind = InputKind.MATRIX
        else:
            raise ShapeMismatch(
                f"data must be 1-D or 2-D, got {arr.ndim} dimensions")

    logger.debug("classified input as %s", kind.name)
    return kind


# ---------------------------------------------------------------------------
# Extraction per kind
# ---------------------------------------------------------------------------

def _extract_record(data: Any) -> list[Group]:
    groups = []
    for name, column in _record_columns(data):
        if not _is_numeric_column(column):
            logger.debug("skipping non-numeric field %r", name)
            continue
        groups.append(Group(name, _as_float(column, f"field {name!r}").ravel()))
    return groups


def _extract_categorized(data: Any, categories: Any) -> list[Group]:
    values = _as_float(data, "data").ravel()
    if isinstance(categories, pd.Series):
        categories = categories.array
    cats = pd.Categorical(categories).remove_unused_categories()
    codes = np.asarray(cats.codes)
    return [Group(str(level), values[codes == i])
            for i, level in enumerate(cats.categories)]


def _labels_for(n: int, names: Any) -> list[str]:
    if names is None or len(names) == 0:
        return [str(i + 1) for i in range(n)]
    if len(names) != n:
        raise ShapeMismatch(
            f"{len(names)} names given for {n} columns of data")
    return [str(name) for name in names]


def _extract_matrix(data: Any, names: Any) -> list[Group]:
    arr = _as_float(data, "data")
    labels = _labels_for(arr.shape[1], names)
    return [Group(label, arr[:, j]) for j, label in enumerate(labels)]


def _extract_columns(data: Sequence, names: Any) -> list[Group]:
    labels = _labels_for(len(data), names)
    return [Group(label, _as_float(col, f"column {label}").ravel())
            for label, col in zip(labels, data)]


def extract_groups(data: Any, categories: Any = None) -> list[Group]:
    """Normalize *data* into an ordered list of :class:`Group`.

    Parameters
    ----------
    data : vector, 2-D array, list of 1-D samples, DataFrame, dict or
        structured array
        The values to plot.
    categories : sequence, optional
        For vector data, one category per value; groups follow the sorted
        category levels. For matrix / list data, one name per column.

    NaN values are kept; see :func:`drop_missing`.
    """
    kind = classify_input(data, categories)
    if kind is InputKind.RECORD:
        if categories is not None:
            logger.debug("categories ignored for record-like input")
        groups = _extract_record(data)
    elif kind is InputKind.CATEGORIZED:
        groups = _extract_categorized(data, categories)
    elif kind is InputKind.VECTOR:
        groups = [Group("1", _as_float(data, "data").ravel())]
    elif kind is InputKind.MATRIX:
        groups = _extract_matrix(data, categories)
    else:
        groups = _extract_columns(data, categories)

    labels = [g.label for g in groups]
    duplicates = sorted({lb for lb in labels if labels.count(lb) > 1})
    if duplicates:
        raise ConfigurationError(f"duplicate group labels: {duplicates}")
    for g in groups:
        g.metadata["kind"] = kind
    logger.debug("extracted %d groups: %s", len(groups), labels)
    return groups


def drop_missing(groups: list[Group]) -> list[Group]:
    """Remove NaNs from every group; raise :class:`EmptySample` if any
    group (or the whole input) ends up empty."""
    if not groups:
        raise EmptySample("input contains no numeric data")
    cleaned = []
    for g in groups:
        sample = g.sample[~np.isnan(g.sample)]
        if sample.size == 0:
            raise EmptySample(f"group {g.label!r} has no non-NaN values")
        cleaned.append(Group(g.label, sample, dict(g.metadata)))
    return cleaned
