from __future__ import annotations

import logging
import math

from posescore.config import NormalizationOptions
from posescore.geometry import distance, midpoint, rotate_around_vertical_axis, scale, translate
from posescore.pose import Frame
from posescore.schema import LEFT_HIP, LEFT_SHOULDER, RIGHT_HIP, RIGHT_SHOULDER

# Each step needs its reference landmarks; a frame without them passes through.
_CENTER_MIN_LANDMARKS = RIGHT_HIP + 1
_SHOULDER_MIN_LANDMARKS = RIGHT_SHOULDER + 1


def center_normalize(frame: Frame) -> Frame:
    """Translate the frame so the hip midpoint sits at the origin."""
    if len(frame) < _CENTER_MIN_LANDMARKS:
        logging.debug("Center skipped: %d landmarks.", len(frame))
        return frame
    hip_center = midpoint(frame.landmarks[LEFT_HIP], frame.landmarks[RIGHT_HIP])
    return frame.with_landmarks(translate(frame.landmarks, hip_center))


def scale_normalize(frame: Frame) -> Frame:
    """Scale the frame so shoulder width becomes 1.0."""
    if len(frame) < _SHOULDER_MIN_LANDMARKS:
        logging.debug("Scale skipped: %d landmarks.", len(frame))
        return frame
    shoulder_width = distance(frame.landmarks[LEFT_SHOULDER], frame.landmarks[RIGHT_SHOULDER])
    if shoulder_width == 0:
        logging.debug("Scale skipped: zero shoulder width.")
        return frame
    return frame.with_landmarks(scale(frame.landmarks, shoulder_width))


def rotation_normalize(frame: Frame) -> Frame:
    """Turn the body about the vertical axis so the shoulder line has zero depth slope."""
    if len(frame) < _SHOULDER_MIN_LANDMARKS:
        logging.debug("Rotation skipped: %d landmarks.", len(frame))
        return frame
    left = frame.landmarks[LEFT_SHOULDER]
    right = frame.landmarks[RIGHT_SHOULDER]
    angle = math.atan2(right.z - left.z, right.x - left.x)
    return frame.with_landmarks(rotate_around_vertical_axis(frame.landmarks, -angle))


def normalize_frame(frame: Frame, options: NormalizationOptions) -> Frame:
    # Order is fixed: center, then scale, then rotation.
    normalized = frame
    if options.center:
        normalized = center_normalize(normalized)
    if options.scale:
        normalized = scale_normalize(normalized)
    if options.rotation:
        normalized = rotation_normalize(normalized)
    return normalized
