"""Body temperature: stage classification, heat exchange and threshold effects."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from ..config.constants import BASE_BODY_TEMPERATURE, SKIN_TEMPERATURE_OFFSET
from ..effects import factory as effect_factory
from ..effects.effect import Effect
from ..utils.math_utils import clamp
from .data import SurvivalData

SEVERE_HYPOTHERMIA_THRESHOLD = 89.6
HYPOTHERMIA_THRESHOLD = 95.0
SHIVERING_THRESHOLD = 97.0
HYPERTHERMIA_THRESHOLD = 100.0
SWEATING_THRESHOLD = 99.0

MAX_TOTAL_INSULATION = 0.95
BASE_EXCHANGE_RATE = 1.0 / 120.0
EXCHANGE_GRADIENT_SCALE = 40.0


class TemperatureStage(str, Enum):
    FREEZING = "Freezing"
    COLD = "Cold"
    COOL = "Cool"
    WARM = "Warm"
    HOT = "Hot"

    @property
    def is_cold(self) -> bool:
        return self in (TemperatureStage.COLD, TemperatureStage.FREEZING)


STAGE_MESSAGES = {
    TemperatureStage.WARM: "You feel normal.",
    TemperatureStage.COOL: "You feel cool.",
    TemperatureStage.COLD: "You feel cold.",
    TemperatureStage.FREEZING: "You are freezing cold.",
    TemperatureStage.HOT: "You feel hot.",
}

STILL_COLD_MESSAGE = "You are still cold."
STILL_FREEZING_MESSAGE = "You are still freezing."
STILL_HOT_MESSAGE = "You are still hot."


def classify_temperature(temperature: float) -> TemperatureStage:
    if temperature < SEVERE_HYPOTHERMIA_THRESHOLD:
        return TemperatureStage.FREEZING
    if temperature < HYPOTHERMIA_THRESHOLD:
        return TemperatureStage.COLD
    if temperature < BASE_BODY_TEMPERATURE:
        return TemperatureStage.COOL
    if temperature <= HYPERTHERMIA_THRESHOLD:
        return TemperatureStage.WARM
    return TemperatureStage.HOT


def total_insulation(cold_resistance: float, equipment_insulation: float) -> float:
    natural = clamp(cold_resistance, 0.0, 1.0)
    return clamp(natural + equipment_insulation, 0.0, MAX_TOTAL_INSULATION)


def thermal_exchange(data: SurvivalData) -> float:
    """Return the core temperature change from one exchange step with the environment.

    The transfer rate grows with the size of the insulated gradient, so large
    differences move heat disproportionately fast.
    """
    insulation = total_insulation(data.cold_resistance, data.equipment_insulation)
    skin_temperature = data.temperature - SKIN_TEMPERATURE_OFFSET
    differential = data.environmental_temp - skin_temperature
    insulated = differential * (1.0 - insulation)
    rate = BASE_EXCHANGE_RATE * (1.0 + abs(insulated) / EXCHANGE_GRADIENT_SCALE)
    return insulated * rate


def temperature_effects(temperature: float, extremities: Sequence[str]) -> List[Effect]:
    """Effects triggered by the current core temperature."""
    effects: List[Effect] = []
    if temperature < SHIVERING_THRESHOLD:
        effects.append(effect_factory.shivering(clamp((SHIVERING_THRESHOLD - temperature) / 5.0, 0.01, 1.0)))
    if temperature < HYPOTHERMIA_THRESHOLD:
        effects.append(effect_factory.hypothermia(clamp((HYPOTHERMIA_THRESHOLD - temperature) / 10.0, 0.01, 1.0)))
    if temperature < SEVERE_HYPOTHERMIA_THRESHOLD:
        severity = clamp((SEVERE_HYPOTHERMIA_THRESHOLD - temperature) / 10.0, 0.01, 1.0)
        effects.extend(effect_factory.frostbite(part, severity) for part in extremities)
    if temperature > HYPERTHERMIA_THRESHOLD:
        effects.append(effect_factory.hyperthermia(clamp((temperature - HYPERTHERMIA_THRESHOLD) / 10.0, 0.01, 1.0)))
    if temperature > SWEATING_THRESHOLD:
        effects.append(effect_factory.sweating(clamp((temperature - SWEATING_THRESHOLD) / 4.0, 0.10, 1.0)))
    return effects


def stage_message(before: float, after: float, repeat_roll: bool) -> Optional[str]:
    """Pick the message for a tick that moved core temperature from ``before`` to ``after``.

    Entering a new stage always reports it. Staying cold, freezing or hot
    repeats a milder notice only when ``repeat_roll`` is true.
    """
    old_stage = classify_temperature(before)
    new_stage = classify_temperature(after)
    if new_stage is not old_stage:
        return STAGE_MESSAGES[new_stage]
    if not repeat_roll:
        return None
    if new_stage is TemperatureStage.FREEZING:
        return STILL_FREEZING_MESSAGE
    if new_stage is TemperatureStage.COLD:
        return STILL_COLD_MESSAGE
    if new_stage is TemperatureStage.HOT:
        return STILL_HOT_MESSAGE
    return None


__all__ = [
    "HYPERTHERMIA_THRESHOLD",
    "HYPOTHERMIA_THRESHOLD",
    "SEVERE_HYPOTHERMIA_THRESHOLD",
    "SHIVERING_THRESHOLD",
    "SWEATING_THRESHOLD",
    "STAGE_MESSAGES",
    "TemperatureStage",
    "classify_temperature",
    "stage_message",
    "temperature_effects",
    "thermal_exchange",
    "total_insulation",
]
