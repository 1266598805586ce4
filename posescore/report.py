from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from posescore.stats import ScoringStatistics


@dataclass(frozen=True)
class ScoringBreakdown:
    position_score: float = 0.0
    angular_score: float = 0.0
    timing_score: float = 0.0
    statistics: ScoringStatistics = field(default_factory=ScoringStatistics)


@dataclass(frozen=True)
class ScoringResult:
    # Mean of the combined frame scores; timing_score is reported but not folded in.
    overall_score: float = 0.0
    frame_scores: tuple[float, ...] = ()
    breakdown: ScoringBreakdown = field(default_factory=ScoringBreakdown)

    def to_payload(self) -> dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "frameScores": list(self.frame_scores),
            "breakdown": {
                "positionScore": self.breakdown.position_score,
                "angularScore": self.breakdown.angular_score,
                "timingScore": self.breakdown.timing_score,
                "statistics": self.breakdown.statistics.to_payload(),
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), indent=2)


def format_summary(result: ScoringResult) -> str:
    stats = result.breakdown.statistics
    return (
        "Comparison Summary\n"
        f"- Overall score: {result.overall_score:.2f}%\n"
        f"- Frames compared: {len(result.frame_scores)}\n"
        f"- Position score: {result.breakdown.position_score:.2f}%\n"
        f"- Angular score: {result.breakdown.angular_score:.2f}%\n"
        f"- Timing score: {result.breakdown.timing_score:.2f}%\n"
        f"- Frame score mean/min/max: {stats.mean:.2f}/{stats.min:.2f}/{stats.max:.2f}\n"
        f"- Frame score variance: {stats.variance:.2f}\n"
    )
