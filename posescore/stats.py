from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class ScoringStatistics:
    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0
    variance: float = 0.0

    def to_payload(self) -> dict[str, float]:
        return {"mean": self.mean, "min": self.min, "max": self.max, "variance": self.variance}


def calculate_statistics(values: Sequence[float]) -> ScoringStatistics:
    """Population mean, min, max and variance; all zero for no values."""
    if len(values) == 0:
        return ScoringStatistics()
    data = np.asarray(values, dtype=float)
    return ScoringStatistics(
        mean=float(data.mean()),
        min=float(data.min()),
        max=float(data.max()),
        variance=float(data.var(ddof=0)),
    )
