from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from posescore.settings import safe_bool, safe_float, safe_index


def _region_weights() -> dict[int, float]:
    weights: dict[int, float] = {}
    # (first index, last index inclusive, weight)
    for first, last, weight in (
        (0, 10, 0.3),  # face
        (11, 16, 1.5),  # shoulders, elbows, wrists
        (17, 22, 0.8),  # hands
        (23, 24, 1.2),  # hips
        (25, 32, 1.8),  # legs and feet
    ):
        for index in range(first, last + 1):
            weights[index] = weight
    return weights


DEFAULT_LANDMARK_WEIGHTS: Mapping[int, float] = MappingProxyType(_region_weights())


@dataclass(frozen=True)
class NormalizationOptions:
    center: bool = True
    scale: bool = True
    rotation: bool = False


@dataclass(frozen=True)
class ComparatorConfig:
    """Resolved scoring parameters.

    ``position_weight`` and ``angular_weight`` are applied as given; they are
    not renormalized when they do not sum to 1.
    """

    normalization: NormalizationOptions = field(default_factory=NormalizationOptions)
    # Indices missing from the table weigh 1.0.
    landmark_weights: Mapping[int, float] = field(default_factory=lambda: DEFAULT_LANDMARK_WEIGHTS)
    position_weight: float = 0.6
    angular_weight: float = 0.4
    # Landmarks without a visibility value always pass.
    visibility_threshold: float = 0.5

    def weight_for(self, index: int) -> float:
        return self.landmark_weights.get(index, 1.0)


DEFAULT_CONFIG = ComparatorConfig()

_FIELD_ALIASES = {
    "landmarkWeights": "landmark_weights",
    "positionWeight": "position_weight",
    "angularWeight": "angular_weight",
    "visibilityThreshold": "visibility_threshold",
}


def _canonical_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {_FIELD_ALIASES.get(str(key), str(key)): value for key, value in payload.items()}


def _parse_normalization(value: object, defaults: NormalizationOptions) -> NormalizationOptions:
    if isinstance(value, NormalizationOptions):
        return value
    if not isinstance(value, Mapping):
        logging.warning("Invalid normalization setting %r; using defaults.", value)
        return defaults
    flags: dict[str, bool] = {}
    for name in ("center", "scale", "rotation"):
        default = getattr(defaults, name)
        if value.get(name) is None:
            flags[name] = default
        else:
            flags[name] = safe_bool((f"normalization.{name}", value[name]), default)
    return NormalizationOptions(**flags)


def _parse_landmark_weights(value: object, defaults: Mapping[int, float]) -> Mapping[int, float]:
    if not isinstance(value, Mapping):
        logging.warning("Invalid landmark weights %r; using defaults.", value)
        return defaults
    weights: dict[int, float] = {}
    for raw_index, raw_weight in value.items():
        index = safe_index(("landmark_weights", raw_index))
        if index is None:
            continue
        weights[index] = safe_float((f"landmark_weights[{index}]", raw_weight), 1.0)
    return MappingProxyType(weights)


def config_from_payload(payload: Mapping[str, Any], defaults: ComparatorConfig = DEFAULT_CONFIG) -> ComparatorConfig:
    """Build a resolved config from a partial mapping.

    Keys may be camelCase or snake_case. A supplied weight table replaces the
    default table entirely. Unparseable values fall back to the defaults.
    """
    values = _canonical_keys(payload)
    for key in values:
        if key not in _FIELD_ALIASES.values() and key != "normalization":
            logging.warning("Unknown comparator setting %s ignored.", key)

    normalization = defaults.normalization
    if values.get("normalization") is not None:
        normalization = _parse_normalization(values["normalization"], defaults.normalization)
    landmark_weights = defaults.landmark_weights
    if values.get("landmark_weights") is not None:
        landmark_weights = _parse_landmark_weights(values["landmark_weights"], defaults.landmark_weights)

    def number(name: str) -> float:
        default = getattr(defaults, name)
        if values.get(name) is None:
            return default
        return safe_float((name, values[name]), default)

    return ComparatorConfig(
        normalization=normalization,
        landmark_weights=landmark_weights,
        position_weight=number("position_weight"),
        angular_weight=number("angular_weight"),
        visibility_threshold=number("visibility_threshold"),
    )


def resolve_config(override: ComparatorConfig | Mapping[str, Any] | None = None) -> ComparatorConfig:
    if override is None:
        return DEFAULT_CONFIG
    if isinstance(override, ComparatorConfig):
        if not isinstance(override.landmark_weights, MappingProxyType):
            # Snapshot so later mutation of the caller's dict cannot leak in.
            return replace(override, landmark_weights=MappingProxyType(dict(override.landmark_weights)))
        return override
    return config_from_payload(override)


def load_config(path: Path) -> ComparatorConfig:
    if not path.is_file():
        logging.warning("Comparator config %s not found; using defaults.", path)
        return DEFAULT_CONFIG
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logging.warning("Comparator config %s unreadable; using defaults.", path)
        return DEFAULT_CONFIG
    if not isinstance(payload, dict):
        logging.warning("Comparator config %s invalid; using defaults.", path)
        return DEFAULT_CONFIG
    return config_from_payload(payload)
