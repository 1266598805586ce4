from __future__ import annotations

import logging
import math

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _split_key_value(value: object) -> tuple[str | None, object]:
    if (
        isinstance(value, tuple)
        and len(value) == 2
        and isinstance(value[0], str)
    ):
        return value[0], value[1]
    return None, value


def _log_invalid(kind: str, key: str | None, value: object, default: object) -> None:
    if key:
        logging.warning("Invalid %s setting %s=%r; using default %s.", kind, key, value, default)
    else:
        logging.warning("Invalid %s setting value %r; using default %s.", kind, value, default)


def safe_float(value: object, default: float) -> float:
    """Parse a finite float, falling back to ``default`` with a warning.

    ``value`` may be a ``(key, raw)`` pair so the warning can name the setting.
    Finite values are returned as given, negative ones included.
    """
    key, raw = _split_key_value(value)
    parsed: float | None = None
    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped:
            try:
                parsed = float(stripped)
            except ValueError:
                parsed = None
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            parsed = float(raw)
        except OverflowError:
            parsed = None

    if parsed is None or not math.isfinite(parsed):
        _log_invalid("numeric", key, raw, default)
        return default
    return parsed


def safe_bool(value: object, default: bool) -> bool:
    key, raw = _split_key_value(value)
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    _log_invalid("boolean", key, raw, default)
    return default


def safe_index(value: object) -> int | None:
    key, raw = _split_key_value(value)
    parsed: int | None = None
    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped:
            try:
                parsed = int(stripped)
            except ValueError:
                parsed = None
    elif isinstance(raw, int) and not isinstance(raw, bool):
        parsed = raw
    elif isinstance(raw, float):
        if math.isfinite(raw) and raw.is_integer():
            parsed = int(raw)

    if parsed is None or parsed < 0:
        if key:
            logging.warning("Invalid landmark index in %s: %r; entry ignored.", key, raw)
        else:
            logging.warning("Invalid landmark index %r; entry ignored.", raw)
        return None
    return parsed
