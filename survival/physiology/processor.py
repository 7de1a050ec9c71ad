"""Survival processor: advances calories, hydration, energy and core temperature.

``process`` and ``sleep`` are pure with respect to their inputs: they work on a
copy of the supplied :class:`SurvivalData` and report everything else (new
effects, messages, organ damage, natural healing) through the returned
:class:`SurvivalProcessorResult`. Owners apply the result to their body and
effect registry.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from ..body.body_part import RandomSource
from ..body.damage import DamageInfo, HealingInfo
from ..config import settings
from ..effects.effect import Effect
from ..utils.math_utils import clamp, ratio
from .data import SurvivalData, SurvivalProcessorResult, SurvivalStatsDelta
from .temperature import (
    SEVERE_HYPOTHERMIA_THRESHOLD,
    TemperatureStage,
    classify_temperature,
    stage_message,
    temperature_effects,
    thermal_exchange,
)

logger = logging.getLogger("survival.physiology")

METABOLIC_HEAT_DIVISOR = 24000.0
SLEEP_ACTIVITY_LEVEL = 0.5
SLEEP_HYDRATION_FACTOR = 0.7
SLEEP_RECOVERY_FACTOR = 2.0

DEHYDRATION_DAMAGE_PER_HOUR = 0.2
DEHYDRATION_ORGANS = ("Brain", "Heart", "Liver")
HYPOTHERMIA_BASE_DAMAGE_PER_HOUR = 0.15
HYPOTHERMIA_ORGANS = ("Heart", "Brain", "Lungs")

REGEN_MIN_CALORIES_PERCENT = 0.10
REGEN_MIN_HYDRATION_PERCENT = 0.10
REGEN_MIN_ENERGY_PERCENT = 0.50
BASE_HEALING_PER_HOUR = 0.1
HEALING_MESSAGE_CHANCE = 0.01

# (fraction of maximum, chance per tick, message); the first matching row that rolls wins.
HUNGER_WARNINGS = (
    (0.01, 0.10, "You are starving to death!"),
    (0.20, 0.05, "You're desperately hungry."),
    (0.50, 0.02, "You're getting very hungry."),
)
THIRST_WARNINGS = (
    (0.01, 0.10, "You are dying of thirst!"),
    (0.20, 0.05, "You're desperately thirsty."),
    (0.50, 0.02, "You're getting quite thirsty."),
)
FATIGUE_WARNINGS = (
    (0.01, 0.10, "You're so exhausted you can barely stay awake."),
    (0.20, 0.05, "You're extremely tired."),
    (0.50, 0.02, "You're getting tired."),
)

WAKE_MESSAGE = "You wake up feeling refreshed."


def get_current_metabolism(data: SurvivalData, activity_level: Optional[float] = None) -> float:
    """Daily energy expenditure in kcal at ``activity_level`` (defaults to the data's own)."""
    activity = data.activity_level if activity_level is None else activity_level
    bmr = 370.0 + 21.6 * data.muscle_weight + 6.17 * data.fat_weight
    bmr *= 0.7 + 0.3 * clamp(data.health_percent, 0.0, 1.0)
    return bmr * activity


def process(
    data: SurvivalData,
    minutes_elapsed: float,
    active_effects: Iterable[Effect] = (),
    rng: Optional[RandomSource] = None,
) -> SurvivalProcessorResult:
    """Advance ``data`` by ``minutes_elapsed`` waking minutes."""
    working = data.copy()
    result = SurvivalProcessorResult(data=working)
    if minutes_elapsed <= 0:
        return result
    rng = rng or random

    # Base needs
    working.energy = max(0.0, working.energy - settings.BASE_EXHAUSTION_RATE * minutes_elapsed)
    working.hydration = max(0.0, working.hydration - settings.BASE_DEHYDRATION_RATE * minutes_elapsed)
    burned = get_current_metabolism(working) / 24.0 / 60.0 * minutes_elapsed
    result.calorie_deficit = max(0.0, burned - working.calories)
    working.calories = max(0.0, working.calories - burned)

    # Metabolic heat plus one exchange step with the environment, both from the
    # temperature at the start of the call
    working.temperature += thermal_exchange(working) + burned / METABOLIC_HEAT_DIVISOR

    result.effects.extend(temperature_effects(working.temperature, working.extremities))
    _temperature_messages(data.temperature, working.temperature, rng, result.messages)

    _apply_effect_deltas(working, active_effects, minutes_elapsed)
    _clamp_stores(working)

    _dehydration_damage(working, minutes_elapsed, rng, result)
    _hypothermia_damage(working, minutes_elapsed, rng, result)
    _regeneration(working, minutes_elapsed, rng, result)
    if working.is_player:
        _warning_messages(working, rng, result.messages)

    result.stats_delta = _delta_between(data, working)
    logger.debug(
        "Processed %.0f min: cal %.1f hyd %.1f energy %.1f temp %.2f (%d effects)",
        minutes_elapsed,
        working.calories,
        working.hydration,
        working.energy,
        working.temperature,
        len(result.effects),
    )
    return result


def sleep(data: SurvivalData, minutes: float) -> SurvivalProcessorResult:
    """Advance ``data`` by ``minutes`` of sleep.

    Metabolism runs at half activity, water loss slows and energy is restored.
    Sleep never generates temperature effects.
    """
    working = data.copy()
    result = SurvivalProcessorResult(data=working)
    if minutes <= 0:
        return result

    working.energy = min(
        settings.MAX_ENERGY_MINUTES,
        working.energy + SLEEP_RECOVERY_FACTOR * settings.BASE_EXHAUSTION_RATE * minutes,
    )
    working.hydration = max(
        0.0,
        working.hydration - settings.BASE_DEHYDRATION_RATE * SLEEP_HYDRATION_FACTOR * minutes,
    )
    burned = get_current_metabolism(working, SLEEP_ACTIVITY_LEVEL) / 24.0 / 60.0 * minutes
    result.calorie_deficit = max(0.0, burned - working.calories)
    working.calories = max(0.0, working.calories - burned)

    if working.energy >= settings.MAX_ENERGY_MINUTES and data.energy < settings.MAX_ENERGY_MINUTES:
        result.messages.append(WAKE_MESSAGE)

    result.stats_delta = _delta_between(data, working)
    logger.debug("Slept %.0f min: energy %.1f -> %.1f", minutes, data.energy, working.energy)
    return result


# ----------------------------------------------------------------------
# Steps


def _temperature_messages(before: float, after: float, rng: RandomSource, messages: List[str]) -> None:
    stage = classify_temperature(after)
    repeat = False
    if stage is classify_temperature(before) and (stage.is_cold or stage is TemperatureStage.HOT):
        repeat = rng.random() < settings.NOTIFY_EXISTING_STATUS_CHANCE
    message = stage_message(before, after, repeat)
    if message:
        messages.append(message)


def _apply_effect_deltas(working: SurvivalData, active_effects: Iterable[Effect], minutes: float) -> None:
    total = SurvivalStatsDelta()
    for effect in active_effects:
        if effect.is_active:
            total = total + effect.survival_delta()
    if total.is_zero:
        return
    total = total * minutes
    working.calories += total.calories
    working.hydration += total.hydration
    working.temperature += total.temperature
    working.energy += total.energy


def _clamp_stores(working: SurvivalData) -> None:
    working.calories = clamp(working.calories, 0.0, settings.MAX_CALORIES)
    working.hydration = clamp(working.hydration, 0.0, settings.MAX_HYDRATION)
    working.energy = clamp(working.energy, 0.0, settings.MAX_ENERGY_MINUTES)


def _pick_organ(organs: Sequence[str], rng: RandomSource) -> str:
    return organs[rng.randrange(len(organs))]


def _dehydration_damage(
    working: SurvivalData,
    minutes: float,
    rng: RandomSource,
    result: SurvivalProcessorResult,
) -> None:
    if working.hydration > 0:
        return
    result.damage_events.append(
        DamageInfo(
            amount=DEHYDRATION_DAMAGE_PER_HOUR / 60.0 * minutes,
            type="internal",
            is_penetrating=True,
            target_part=_pick_organ(DEHYDRATION_ORGANS, rng),
            source="Dehydration",
        )
    )
    result.messages.append("Your organs are failing from dehydration!")


def _hypothermia_damage(
    working: SurvivalData,
    minutes: float,
    rng: RandomSource,
    result: SurvivalProcessorResult,
) -> None:
    temperature = working.temperature
    if temperature >= SEVERE_HYPOTHERMIA_THRESHOLD:
        return
    severity = min(1.0, (SEVERE_HYPOTHERMIA_THRESHOLD - temperature) / 50.0)
    per_hour = HYPOTHERMIA_BASE_DAMAGE_PER_HOUR * (1.0 + severity)
    result.damage_events.append(
        DamageInfo(
            amount=per_hour / 60.0 * minutes,
            type="internal",
            is_penetrating=True,
            target_part=_pick_organ(HYPOTHERMIA_ORGANS, rng),
            source="Hypothermia",
        )
    )
    result.messages.append(
        f"Your core body temperature is dangerously low ({temperature:.1f}°F)... Your organs are failing..."
    )


def _regeneration(
    working: SurvivalData,
    minutes: float,
    rng: RandomSource,
    result: SurvivalProcessorResult,
) -> None:
    well_fed = working.calories > settings.MAX_CALORIES * REGEN_MIN_CALORIES_PERCENT
    hydrated = working.hydration > settings.MAX_HYDRATION * REGEN_MIN_HYDRATION_PERCENT
    rested = working.energy >= settings.MAX_ENERGY_MINUTES * REGEN_MIN_ENERGY_PERCENT
    if not (well_fed and hydrated and rested) or working.health_percent >= 1.0:
        return
    nutrition = min(1.0, working.calories / settings.MAX_CALORIES)
    result.healing_events.append(
        HealingInfo(
            amount=BASE_HEALING_PER_HOUR / 60.0 * minutes * nutrition,
            type="natural regeneration",
            quality=nutrition,
        )
    )
    if rng.random() < HEALING_MESSAGE_CHANCE:
        result.messages.append("Your body is slowly healing...")


def _warning_messages(working: SurvivalData, rng: RandomSource, messages: List[str]) -> None:
    levels = (
        (ratio(working.calories, settings.MAX_CALORIES), HUNGER_WARNINGS),
        (ratio(working.hydration, settings.MAX_HYDRATION), THIRST_WARNINGS),
        (ratio(working.energy, settings.MAX_ENERGY_MINUTES), FATIGUE_WARNINGS),
    )
    for level, warnings in levels:
        for limit, chance, message in warnings:
            if level <= limit and rng.random() < chance:
                messages.append(message)
                break


def _delta_between(before: SurvivalData, after: SurvivalData) -> SurvivalStatsDelta:
    return SurvivalStatsDelta(
        calories=after.calories - before.calories,
        hydration=after.hydration - before.hydration,
        temperature=after.temperature - before.temperature,
        energy=after.energy - before.energy,
    )


__all__ = [
    "get_current_metabolism",
    "process",
    "sleep",
]
