"""Input classification enums and per-group data structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

import numpy as np


class InputKind(Enum):
    RECORD = auto()
    CATEGORIZED = auto()
    VECTOR = auto()
    MATRIX = auto()
    COLUMNS = auto()


@dataclass
class Group:
    """One labelled numeric sample destined for a single box or violin."""

    label: str
    sample: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.sample)
