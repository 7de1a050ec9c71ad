"""Starvation: burning body reserves when food runs out."""

from __future__ import annotations

import logging
import random
from typing import Optional

from ..body.body_part import RandomSource
from ..body.damage import DamageInfo
from ..config import settings
from ..effects import factory as effect_factory
from ..utils.math_utils import clamp
from .events import StarvingEvent, StoppedStarvingEvent
from .notifications import MessageSink

logger = logging.getLogger("survival.starvation")

MIN_FAT_PERCENT = 0.03
MIN_MUSCLE_PERCENT = 0.15
CALORIES_PER_KG_FAT = 7700.0
CALORIES_PER_KG_MUSCLE = 1320.0

STARVATION_DAMAGE_PER_HOUR = 0.1
STARVATION_ORGANS = ("Heart", "Liver", "Brain", "Lungs")

# Fat fraction at which the starvation effect starts, and where it peaks.
HEALTHY_FAT_PERCENT = 0.15


class StarvationHandler:
    """Handles starving events for one actor.

    The calorie deficit is paid from fat first, then muscle, each down to a
    survival minimum. Whatever is left damages a vital organ.
    """

    def __init__(self, sink: Optional[MessageSink] = None, rng: Optional[RandomSource] = None) -> None:
        self.sink = sink
        self.rng = rng or random

    def _say(self, message: str) -> None:
        if self.sink is not None:
            self.sink.add(message)

    def handle(self, event: StarvingEvent) -> None:
        if event.is_new:
            self._say(f"{event.owner_name} is starving!")
        elif self.rng.random() < settings.NOTIFY_EXISTING_STATUS_CHANCE:
            self._say(f"{event.owner_name} is still starving.")

        remaining = self._burn_fat(event, event.calorie_deficit)
        if remaining > 0:
            remaining = self._burn_muscle(event, remaining)
        if remaining > 0:
            self._damage_organs(event)

        body = event.body
        severity = clamp(
            (HEALTHY_FAT_PERCENT - body.fat_fraction) / (HEALTHY_FAT_PERCENT - MIN_FAT_PERCENT),
            0.1,
            1.0,
        )
        for message in event.effects.add_effect(effect_factory.starvation(severity)):
            self._say(message)

    def handle_stopped(self, event: StoppedStarvingEvent) -> None:
        self._say(f"{event.owner_name} is no longer starving!")
        if "Starvation" in event.effects:
            for message in event.effects.remove_effect("Starvation"):
                self._say(message)

    def _burn_fat(self, event: StarvingEvent, deficit: float) -> float:
        body = event.body
        available = max(0.0, body.fat_weight - MIN_FAT_PERCENT * body.weight)
        calories = available * CALORIES_PER_KG_FAT
        if calories >= deficit:
            body.lose_fat(deficit / CALORIES_PER_KG_FAT)
            if body.is_player:
                if body.fat_fraction < 0.08:
                    self._say("Your body is consuming the last of your fat reserves... You're becoming dangerously thin.")
                elif body.fat_fraction < 0.12:
                    self._say("Your body is burning fat reserves. You're noticeably thinner.")
            return 0.0
        body.lose_fat(available)
        if available > 0 and body.is_player:
            self._say("Your body has exhausted all available fat reserves!")
        return deficit - calories

    def _burn_muscle(self, event: StarvingEvent, deficit: float) -> float:
        body = event.body
        available = max(0.0, body.muscle_weight - MIN_MUSCLE_PERCENT * body.weight)
        calories = available * CALORIES_PER_KG_MUSCLE
        if calories >= deficit:
            body.lose_muscle(deficit / CALORIES_PER_KG_MUSCLE)
            if body.is_player:
                if body.muscle_fraction < 0.18:
                    self._say("Your body is cannibalizing muscle tissue! You feel extremely weak.")
                elif body.muscle_fraction < 0.25:
                    self._say("Your muscles are wasting away. You're losing strength rapidly.")
            return 0.0
        body.lose_muscle(available)
        if available > 0 and body.is_player:
            self._say("Your body has consumed almost all muscle tissue. Organ damage imminent!")
        return deficit - calories

    def _damage_organs(self, event: StarvingEvent) -> None:
        organ = STARVATION_ORGANS[self.rng.randrange(len(STARVATION_ORGANS))]
        amount = STARVATION_DAMAGE_PER_HOUR / 60.0 * event.minutes
        logger.info("%s has no reserves left; starvation damages %s by %.3f", event.owner_name, organ, amount)
        damage = DamageInfo(amount=amount, type="internal", is_penetrating=True, target_part=organ, source="Starvation")
        for message in event.body.damage(damage, self.rng):
            self._say(message)


__all__ = [
    "CALORIES_PER_KG_FAT",
    "CALORIES_PER_KG_MUSCLE",
    "MIN_FAT_PERCENT",
    "MIN_MUSCLE_PERCENT",
    "StarvationHandler",
]
