"""Small numeric helpers shared by the body, physiology and effect layers."""

from __future__ import annotations


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum value
        max_val: Maximum value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def ratio(value: float, maximum: float) -> float:
    """Return ``value / maximum`` clamped to [0, 1]; zero when ``maximum`` is not positive."""
    if maximum <= 0:
        return 0.0
    return clamp(value / maximum, 0.0, 1.0)


__all__ = [
    "clamp",
    "ratio",
]
