from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from posescore.config import ComparatorConfig, resolve_config
from posescore.geometry import distance, is_landmark_visible, joint_angle
from posescore.normalize import normalize_frame
from posescore.pose import Frame, Video
from posescore.report import ScoringBreakdown, ScoringResult
from posescore.schema import JOINTS, LANDMARK_COUNT
from posescore.stats import calculate_statistics

# score = 100 * e^(-k * d); half a shoulder width of mean error scores ~37%.
POSITION_DECAY = 2.0
MAX_ANGLE_DIFF = 180.0


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


class PoseComparator:
    """Scores how closely a comparison video reproduces a reference video.

    Frames are paired by index and normalized independently before scoring.
    The comparator holds only its resolved configuration, so one instance can
    serve concurrent calls.
    """

    def __init__(self, config: ComparatorConfig | Mapping[str, Any] | None = None) -> None:
        self.config = resolve_config(config)

    def compare_videos(self, reference: Video, comparison: Video) -> ScoringResult:
        pair_count = min(len(reference), len(comparison))
        logging.debug(
            "Comparing videos: reference=%d frames comparison=%d frames",
            len(reference),
            len(comparison),
        )
        if pair_count == 0:
            return ScoringResult()

        frame_scores: list[float] = []
        total_position = 0.0
        total_angular = 0.0
        for index in range(pair_count):
            ref_frame = self.normalize(reference.frames[index])
            comp_frame = self.normalize(comparison.frames[index])
            position = self.position_score(ref_frame, comp_frame)
            angular = self.angular_score(ref_frame, comp_frame)
            frame_scores.append(self.combine(position, angular))
            total_position += position
            total_angular += angular

        statistics = calculate_statistics(frame_scores)
        return ScoringResult(
            overall_score=statistics.mean,
            frame_scores=tuple(frame_scores),
            breakdown=ScoringBreakdown(
                position_score=total_position / pair_count,
                angular_score=total_angular / pair_count,
                timing_score=self.timing_score(len(reference), len(comparison)),
                statistics=statistics,
            ),
        )

    def normalize(self, frame: Frame) -> Frame:
        return normalize_frame(frame, self.config.normalization)

    def compare_frames(self, reference: Frame, comparison: Frame) -> float:
        """Combined score for an already-normalized frame pair."""
        return self.combine(
            self.position_score(reference, comparison),
            self.angular_score(reference, comparison),
        )

    def combine(self, position: float, angular: float) -> float:
        # Weighted sum, deliberately not renormalized.
        return position * self.config.position_weight + angular * self.config.angular_weight

    def position_score(self, reference: Frame, comparison: Frame) -> float:
        threshold = self.config.visibility_threshold
        total_distance = 0.0
        total_weight = 0.0
        for index, (ref_lm, comp_lm) in enumerate(zip(reference.landmarks, comparison.landmarks)):
            if not is_landmark_visible(ref_lm, threshold) or not is_landmark_visible(comp_lm, threshold):
                continue
            weight = self.config.weight_for(index)
            total_distance += distance(ref_lm, comp_lm) * weight
            total_weight += weight

        if total_weight == 0:
            return 0.0
        mean_distance = total_distance / total_weight
        return _clamp_score(100.0 * math.exp(-POSITION_DECAY * mean_distance))

    def angular_score(self, reference: Frame, comparison: Frame) -> float:
        if len(reference) < LANDMARK_COUNT or len(comparison) < LANDMARK_COUNT:
            return 0.0

        threshold = self.config.visibility_threshold
        differences: list[float] = []
        for indices in JOINTS.values():
            ref_points = [reference.landmarks[i] for i in indices]
            comp_points = [comparison.landmarks[i] for i in indices]
            if not all(is_landmark_visible(lm, threshold) for lm in ref_points + comp_points):
                continue
            differences.append(abs(joint_angle(*ref_points) - joint_angle(*comp_points)))

        if not differences:
            return 0.0
        mean_difference = sum(differences) / len(differences)
        return _clamp_score(100.0 * (1.0 - mean_difference / MAX_ANGLE_DIFF))

    @staticmethod
    def timing_score(reference_length: int, comparison_length: int) -> float:
        if reference_length == 0 or comparison_length == 0:
            return 0.0
        return min(reference_length, comparison_length) / max(reference_length, comparison_length) * 100.0


def compare_videos(
    reference: Video,
    comparison: Video,
    config: ComparatorConfig | Mapping[str, Any] | None = None,
) -> ScoringResult:
    return PoseComparator(config).compare_videos(reference, comparison)
