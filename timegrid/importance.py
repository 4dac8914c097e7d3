from __future__ import annotations

from enum import IntEnum


class Importance(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


IMPORTANCE_LABELS = {
    Importance.NONE: "",
    Importance.LOW: "Low",
    Importance.MEDIUM: "Medium",
    Importance.HIGH: "High",
}

IMPORTANCE_COLOR_KEYS = {
    Importance.NONE: "gray",
    Importance.LOW: "blue",
    Importance.MEDIUM: "yellow",
    Importance.HIGH: "red",
}

_BY_NAME = {level.name: level for level in Importance}


def normalize_importance(raw) -> Importance:
    """Map a stored importance (label string or 0-3 code) onto one scale.

    Anything unrecognized degrades to NONE so rows written under either
    convention still render.
    """
    if isinstance(raw, Importance):
        return raw
    if isinstance(raw, bool) or raw is None:
        return Importance.NONE
    if isinstance(raw, str):
        return _BY_NAME.get(raw.strip().upper(), Importance.NONE)
    if isinstance(raw, float):
        if not raw.is_integer():
            return Importance.NONE
        raw = int(raw)
    if isinstance(raw, int):
        try:
            return Importance(raw)
        except ValueError:
            return Importance.NONE
    return Importance.NONE


def display_label(level: Importance) -> str:
    return IMPORTANCE_LABELS[level]


def color_key(level: Importance) -> str:
    return IMPORTANCE_COLOR_KEYS[level]


def storage_label(raw) -> str:
    return normalize_importance(raw).name
