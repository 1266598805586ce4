from posescore.comparator import PoseComparator, compare_videos
from posescore.config import DEFAULT_CONFIG, ComparatorConfig, NormalizationOptions, resolve_config
from posescore.pose import Frame, Landmark, Video, frame_from_payload
from posescore.report import ScoringBreakdown, ScoringResult
from posescore.stats import ScoringStatistics

__all__ = [
    "ComparatorConfig",
    "DEFAULT_CONFIG",
    "Frame",
    "Landmark",
    "NormalizationOptions",
    "PoseComparator",
    "ScoringBreakdown",
    "ScoringResult",
    "ScoringStatistics",
    "Video",
    "compare_videos",
    "frame_from_payload",
    "resolve_config",
]
