"""Constant values for the survival core."""

from __future__ import annotations

DEFAULTS = {
    "MAX_CALORIES": 2000.0,
    "MAX_HYDRATION": 4000.0,
    "MAX_ENERGY_MINUTES": 960.0,
    "BASE_EXHAUSTION_RATE": 1.0,
    "BASE_DEHYDRATION_RATE": 4000.0 / (24.0 * 60.0),
}

BASE_BODY_TEMPERATURE = 98.6  # °F
SKIN_TEMPERATURE_OFFSET = 8.4
