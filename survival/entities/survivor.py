"""An actor that owns a body, its effects and its survival stores."""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional

from ..body.body import Body
from ..body.body_part import RandomSource
from ..body.capacities import apply_capacity_modifiers
from ..body.damage import DamageInfo, HealingInfo
from ..body.factory import BASELINE_PLAYER, BodyCreationInfo, create_body
from ..config import settings
from ..config.constants import BASE_BODY_TEMPERATURE
from ..effects.effect import Effect
from ..effects.registry import EffectRegistry
from ..physiology import processor
from ..physiology.data import SurvivalData, SurvivalProcessorResult
from ..systems.telemetry import TelemetryRecorder
from ..systems.events import EventDispatcher, StarvingEvent, StoppedStarvingEvent
from ..systems.notifications import MessageLog, publish
from ..systems.starvation import StarvationHandler
from ..utils.math_utils import clamp

logger = logging.getLogger("survival.simulation")

STARTING_CALORIE_FRACTION = 0.75
STARTING_HYDRATION_FRACTION = 0.75
STARTING_ENERGY_MINUTES = 800.0


class Survivor:
    """Glue between the body, the effect registry and the survival processor.

    One ``update`` call is one tick: the processor runs on a snapshot, then the
    result is applied here (stores, new effects, organ damage, healing,
    starvation), and finally the registry advances its effects.
    """

    def __init__(
        self,
        name: str = "You",
        body: Optional[Body] = None,
        *,
        creation_info: BodyCreationInfo = BASELINE_PLAYER,
        rng: Optional[RandomSource] = None,
        log: Optional[MessageLog] = None,
        telemetry: Optional[TelemetryRecorder] = None,
    ) -> None:
        self.name = name
        self.body = body or create_body(creation_info)
        self.effects = EffectRegistry()
        self.log = log or MessageLog(owner_name=name)
        self.events = EventDispatcher()
        self.rng = rng or random
        self.telemetry = telemetry

        self.calories = settings.MAX_CALORIES * STARTING_CALORIE_FRACTION
        self.hydration = settings.MAX_HYDRATION * STARTING_HYDRATION_FRACTION
        self.energy = min(STARTING_ENERGY_MINUTES, settings.MAX_ENERGY_MINUTES)
        self.temperature = BASE_BODY_TEMPERATURE

        self.environment_temp = 70.0
        self.insulation = 0.0
        self.activity = 1.0
        self.minutes_survived = 0
        self.is_starving = False

        starvation = StarvationHandler(self.log, self.rng)
        self.events.subscribe(StarvingEvent, starvation.handle)
        self.events.subscribe(StoppedStarvingEvent, starvation.handle_stopped)

    def __repr__(self) -> str:
        return f"Survivor({self.name!r}, temp={self.temperature:.1f}, health={self.body.health_percent:.2f})"

    @property
    def is_alive(self) -> bool:
        return self.body.is_alive

    # ------------------------------------------------------------------
    # Ticks

    def survival_data(self) -> SurvivalData:
        body = self.body
        return SurvivalData(
            calories=self.calories,
            hydration=self.hydration,
            energy=self.energy,
            temperature=self.temperature,
            cold_resistance=body.cold_resistance,
            body_weight=body.weight,
            muscle_weight=body.muscle_weight,
            fat_weight=body.fat_weight,
            health_percent=body.health_percent,
            equipment_insulation=self.insulation,
            environmental_temp=self.environment_temp,
            activity_level=self.activity,
            is_player=body.is_player,
            extremities=tuple(body.extremities),
        )

    def update(
        self,
        minutes: int = 1,
        *,
        environment_temp: Optional[float] = None,
        insulation: Optional[float] = None,
        activity: Optional[float] = None,
    ) -> SurvivalProcessorResult:
        """Advance the survivor by ``minutes`` awake."""
        if environment_temp is not None:
            self.environment_temp = environment_temp
        if insulation is not None:
            self.insulation = clamp(insulation, 0.0, 0.95)
        if activity is not None:
            self.activity = max(0.0, activity)

        result = processor.process(self.survival_data(), minutes, self.effects.active_effects, self.rng)
        if minutes <= 0 or not self.is_alive:
            return result

        self._apply_stores(result.data)
        publish(self.log, result.messages)
        for effect in result.effects:
            publish(self.log, self.effects.add_effect(effect))
        self._apply_body_events(result)
        self._dispatch_starvation(result, minutes)
        publish(self.log, self.effects.update(minutes))
        self._finish_tick(minutes, result)
        return result

    def sleep(self, minutes: int) -> SurvivalProcessorResult:
        result = processor.sleep(self.survival_data(), minutes)
        if minutes <= 0 or not self.is_alive:
            return result
        self._apply_stores(result.data)
        publish(self.log, result.messages)
        self._dispatch_starvation(result, minutes)
        publish(self.log, self.effects.update(minutes))
        self._finish_tick(minutes, result)
        return result

    def _apply_stores(self, data: SurvivalData) -> None:
        self.calories = data.calories
        self.hydration = data.hydration
        self.energy = data.energy
        self.temperature = data.temperature

    def _apply_body_events(self, result: SurvivalProcessorResult) -> None:
        for damage in result.damage_events:
            self.body.damage(damage, self.rng, self.log)
            self._record_damage(damage)
        for healing in result.healing_events:
            self.body.heal(healing, self.rng, self.log)

    def _record_damage(self, damage: DamageInfo) -> None:
        if self.telemetry is not None:
            self.telemetry.damage_sample(minute=self.minutes_survived, survivor=self, damage=damage)

    def _dispatch_starvation(self, result: SurvivalProcessorResult, minutes: int) -> None:
        if result.is_starving:
            event = StarvingEvent(
                owner_name=self.name,
                body=self.body,
                effects=self.effects,
                calorie_deficit=result.calorie_deficit,
                minutes=minutes,
                is_new=not self.is_starving,
            )
            self.is_starving = True
            self.events.publish(event)
        elif self.is_starving and self.calories > 0:
            self.is_starving = False
            self.events.publish(StoppedStarvingEvent(owner_name=self.name, body=self.body, effects=self.effects))

    def _finish_tick(self, minutes: int, result: SurvivalProcessorResult) -> None:
        self.minutes_survived += minutes
        self.log.advance(minutes)
        if self.telemetry is not None:
            self.telemetry.survival_sample(
                minute=self.minutes_survived, survivor=self, message_count=len(result.messages)
            )
        if not self.is_alive:
            logger.info("%s died after %d minutes", self.name, self.minutes_survived)

    # ------------------------------------------------------------------
    # Actions

    def eat(self, calories: float, water: float = 0.0) -> None:
        self.calories = clamp(self.calories + calories, 0.0, settings.MAX_CALORIES)
        if water:
            self.drink(water)

    def drink(self, water: float) -> None:
        self.hydration = clamp(self.hydration + water, 0.0, settings.MAX_HYDRATION)

    def add_effect(self, effect: Effect) -> List[str]:
        messages = self.effects.add_effect(effect)
        publish(self.log, messages)
        return messages

    def treat(self, kind: str, target_part: Optional[str] = None) -> List[str]:
        messages = self.effects.treat(kind, target_part)
        publish(self.log, messages)
        return messages

    def damage(self, info: DamageInfo) -> List[str]:
        messages = self.body.damage(info, self.rng, self.log)
        self._record_damage(info)
        return messages

    def heal(self, info: HealingInfo) -> List[str]:
        return self.body.heal(info, self.rng, self.log)

    # ------------------------------------------------------------------
    # Queries

    def get_capacity(self, name: str) -> float:
        """Body capacity with active effect modifiers applied."""
        modifiers = self.effects.get_capacity_modifiers()
        base = {name: self.body.get_capacity(name)}
        return apply_capacity_modifiers(base, {name: modifiers.get(name, 0.0)})[name]

    def get_capacities(self) -> Dict[str, float]:
        return apply_capacity_modifiers(self.body.get_capacities(), self.effects.get_capacity_modifiers())

    def get_stat(self, name: str) -> float:
        return self.body.get_stat(name, self.effects.get_capacity_modifiers())

    def describe(self) -> List[str]:
        lines = [
            f"{self.name}: {self.temperature:.1f}°F, "
            f"{self.calories:.0f} kcal, {self.hydration:.0f} ml water, {self.energy:.0f} min energy",
        ]
        lines.extend(self.body.describe())
        lines.extend(self.effects.describe())
        return lines

    def recent_messages(self, count: int = 6) -> Iterable[str]:
        return self.log.latest(count)


__all__ = ["Survivor"]
