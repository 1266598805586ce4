from __future__ import annotations

import json
import time
from dataclasses import dataclass, field, replace
from typing import Any

from posescore.schema import SCHEMA_VERSION, is_finite_number

_LANDMARK_LIST_KEYS = ("landmarks", "poseLandmarks", "points", "data")


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    z: float = 0.0
    # None means the detector did not report a confidence; treated as visible.
    visibility: float | None = None
    presence: float | None = None

    def moved(self, x: float, y: float, z: float) -> "Landmark":
        return replace(self, x=x, y=y, z=z)

    @classmethod
    def from_payload(cls, payload: Any) -> "Landmark":
        if not isinstance(payload, dict):
            raise ValueError("Landmark payload must be an object")
        if not is_finite_number(payload.get("x")) or not is_finite_number(payload.get("y")):
            raise ValueError("Landmark payload missing numeric x/y")
        z = payload.get("z")
        visibility = payload.get("visibility")
        presence = payload.get("presence")
        return cls(
            x=float(payload["x"]),
            y=float(payload["y"]),
            z=float(z) if is_finite_number(z) else 0.0,
            visibility=float(visibility) if is_finite_number(visibility) else None,
            presence=float(presence) if is_finite_number(presence) else None,
        )

    def to_payload(self) -> dict[str, float]:
        payload = {"x": self.x, "y": self.y, "z": self.z}
        if self.visibility is not None:
            payload["visibility"] = self.visibility
        if self.presence is not None:
            payload["presence"] = self.presence
        return payload


@dataclass(frozen=True)
class Frame:
    landmarks: tuple[Landmark, ...]
    timestamp: float = 0.0
    raw_type: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.landmarks, tuple):
            object.__setattr__(self, "landmarks", tuple(self.landmarks))

    def __len__(self) -> int:
        return len(self.landmarks)

    def with_landmarks(self, landmarks: list[Landmark] | tuple[Landmark, ...]) -> "Frame":
        return replace(self, landmarks=tuple(landmarks))

    @classmethod
    def from_payload(cls, payload: Any) -> "Frame":
        if not isinstance(payload, dict):
            raise ValueError("Frame payload must be an object")
        landmarks = payload.get("landmarks", [])
        if not isinstance(landmarks, list):
            raise ValueError("Frame payload missing landmarks list")
        timestamp = payload.get("timestamp", 0.0)
        raw_type = payload.get("type")
        return cls(
            landmarks=tuple(Landmark.from_payload(item) for item in landmarks),
            timestamp=float(timestamp) if is_finite_number(timestamp) else 0.0,
            raw_type=raw_type if isinstance(raw_type, str) else None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "timestamp": self.timestamp,
            "landmarks": [landmark.to_payload() for landmark in self.landmarks],
        }
        if self.raw_type is not None:
            payload["type"] = self.raw_type
        return payload


@dataclass(frozen=True)
class Video:
    frames: tuple[Frame, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.frames, tuple):
            object.__setattr__(self, "frames", tuple(self.frames))

    def __len__(self) -> int:
        return len(self.frames)

    @classmethod
    def from_payload(cls, payload: Any) -> "Video":
        frames = payload.get("frames", []) if isinstance(payload, dict) else payload
        if not isinstance(frames, list):
            raise ValueError("Video payload missing frames list")
        return cls(frames=tuple(Frame.from_payload(item) for item in frames))

    def to_payload(self) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "frames": [frame.to_payload() for frame in self.frames],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), indent=2)

    @classmethod
    def from_json(cls, data: str) -> "Video":
        payload = json.loads(data)
        return cls.from_payload(payload)


def _is_landmark(value: object) -> bool:
    return isinstance(value, dict) and is_finite_number(value.get("x")) and is_finite_number(value.get("y"))


def _pick_landmark_list(value: object) -> list[Any] | None:
    if not isinstance(value, list) or not value:
        return None
    if any(_is_landmark(item) for item in value):
        return value
    # Capture clients nest the newest pose last.
    for item in reversed(value):
        inner = _pick_landmark_list(item)
        if inner is not None:
            return inner
    return None


def frame_from_payload(payload: Any, *, now: float | None = None) -> Frame | None:
    """Decode a loosely shaped capture message into a frame.

    Accepts a bare landmark list or an object carrying the list under
    ``landmarks``, ``poseLandmarks``, ``points`` or ``data``, possibly nested.
    Returns None when no landmark can be found.
    """
    is_mapping = isinstance(payload, dict)
    timestamp = payload.get("timestamp") if is_mapping else None
    if not is_finite_number(timestamp):
        timestamp = now if now is not None else time.time() * 1000.0
    raw_type = payload.get("type") if is_mapping else None

    if isinstance(payload, list):
        candidate: Any = payload
    elif is_mapping:
        candidate = next((payload[key] for key in _LANDMARK_LIST_KEYS if payload.get(key) is not None), None)
    else:
        candidate = None

    picked = _pick_landmark_list(candidate)
    if picked is None:
        return None
    landmarks = [Landmark.from_payload(item) for item in picked if _is_landmark(item)]
    if not landmarks:
        return None
    return Frame(
        landmarks=tuple(landmarks),
        timestamp=float(timestamp),
        raw_type=raw_type if isinstance(raw_type, str) else None,
    )
