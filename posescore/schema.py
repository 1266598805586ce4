from __future__ import annotations

import math
from typing import Any

SCHEMA_VERSION = "1.0"

LANDMARK_NAMES = [
    "nose",
    "left_eye_inner",
    "left_eye",
    "left_eye_outer",
    "right_eye_inner",
    "right_eye",
    "right_eye_outer",
    "left_ear",
    "right_ear",
    "mouth_left",
    "mouth_right",
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_pinky",
    "right_pinky",
    "left_index",
    "right_index",
    "left_thumb",
    "right_thumb",
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
    "left_heel",
    "right_heel",
    "left_foot_index",
    "right_foot_index",
]

LANDMARK_COUNT = len(LANDMARK_NAMES)

LEFT_SHOULDER = 11
RIGHT_SHOULDER = 12
LEFT_ELBOW = 13
RIGHT_ELBOW = 14
LEFT_WRIST = 15
RIGHT_WRIST = 16
LEFT_HIP = 23
RIGHT_HIP = 24
LEFT_KNEE = 25
RIGHT_KNEE = 26
LEFT_ANKLE = 27
RIGHT_ANKLE = 28

# (first, vertex, last) index triples compared by the angular score.
JOINTS: dict[str, tuple[int, int, int]] = {
    "left_elbow": (LEFT_SHOULDER, LEFT_ELBOW, LEFT_WRIST),
    "right_elbow": (RIGHT_SHOULDER, RIGHT_ELBOW, RIGHT_WRIST),
    "left_knee": (LEFT_HIP, LEFT_KNEE, LEFT_ANKLE),
    "right_knee": (RIGHT_HIP, RIGHT_KNEE, RIGHT_ANKLE),
    # Shoulder-hip-knee, not a true hip flexion triple.
    "left_hip": (LEFT_SHOULDER, LEFT_HIP, LEFT_KNEE),
    "right_hip": (RIGHT_SHOULDER, RIGHT_HIP, RIGHT_KNEE),
}


def is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # JSON integers beyond float range.
        return False


def validate_video_payload(payload: Any) -> tuple[bool, str]:
    if isinstance(payload, dict):
        version = payload.get("schema_version")
        if version is not None and version != SCHEMA_VERSION:
            return False, "schema_version unsupported."
        frames = payload.get("frames")
    else:
        frames = payload
    if not isinstance(frames, list):
        return False, "frames must be a list."
    for index, frame in enumerate(frames):
        if not isinstance(frame, dict):
            return False, f"frame {index} must be an object."
        landmarks = frame.get("landmarks")
        if not isinstance(landmarks, list):
            return False, f"frame {index} missing 'landmarks' list."
        timestamp = frame.get("timestamp", 0)
        if not is_finite_number(timestamp):
            return False, f"frame {index} timestamp must be a number."
        for lm_index, landmark in enumerate(landmarks):
            if not isinstance(landmark, dict):
                return False, f"frame {index} landmark {lm_index} must be an object."
            for key in ("x", "y"):
                if not is_finite_number(landmark.get(key)):
                    return False, f"frame {index} landmark {lm_index} missing numeric '{key}'."
            for key in ("z", "visibility", "presence"):
                value = landmark.get(key)
                if value is not None and not is_finite_number(value):
                    return False, f"frame {index} landmark {lm_index} '{key}' must be a number."
    return True, "video schema is valid."
