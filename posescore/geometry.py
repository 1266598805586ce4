from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Protocol

from posescore.pose import Landmark


class HasCoordinates(Protocol):
    x: float
    y: float
    z: float


class Point3D(NamedTuple):
    x: float
    y: float
    z: float


def midpoint(p1: HasCoordinates, p2: HasCoordinates) -> Point3D:
    return Point3D((p1.x + p2.x) / 2, (p1.y + p2.y) / 2, (p1.z + p2.z) / 2)


def distance(p1: HasCoordinates, p2: HasCoordinates) -> float:
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    dz = p1.z - p2.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def translate(landmarks: Iterable[Landmark], offset: HasCoordinates) -> list[Landmark]:
    return [lm.moved(lm.x - offset.x, lm.y - offset.y, lm.z - offset.z) for lm in landmarks]


def scale(landmarks: Iterable[Landmark], factor: float) -> list[Landmark]:
    # A zero factor would produce non-finite coordinates; pass input through.
    if factor == 0:
        return list(landmarks)
    return [lm.moved(lm.x / factor, lm.y / factor, lm.z / factor) for lm in landmarks]


def rotate_around_vertical_axis(landmarks: Iterable[Landmark], angle: float) -> list[Landmark]:
    """Rotate x/z by ``angle`` radians in the horizontal plane; y is untouched."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return [lm.moved(lm.x * cos_a - lm.z * sin_a, lm.y, lm.x * sin_a + lm.z * cos_a) for lm in landmarks]


def joint_angle(p1: HasCoordinates, p2: HasCoordinates, p3: HasCoordinates) -> float:
    """Angle at ``p2`` between rays to ``p1`` and ``p3``, in degrees [0, 180].

    Returns 0.0 when either ray has zero length.
    """
    v1 = (p1.x - p2.x, p1.y - p2.y, p1.z - p2.z)
    v2 = (p3.x - p2.x, p3.y - p2.y, p3.z - p2.z)
    dot = v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]
    mag1 = math.sqrt(v1[0] * v1[0] + v1[1] * v1[1] + v1[2] * v1[2])
    mag2 = math.sqrt(v2[0] * v2[0] + v2[1] * v2[1] + v2[2] * v2[2])
    if mag1 == 0 or mag2 == 0:
        return 0.0
    cos_theta = max(-1.0, min(1.0, dot / (mag1 * mag2)))
    return math.degrees(math.acos(cos_theta))


def is_landmark_visible(landmark: Landmark, threshold: float) -> bool:
    return landmark.visibility is None or landmark.visibility >= threshold
