"""Actor body: a part tree plus body composition."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from ..systems.notifications import MessageSink, publish
from ..utils.math_utils import clamp
from . import capacities
from .body_part import BodyPart, RandomSource
from .damage import DamageInfo, HealingInfo

logger = logging.getLogger("survival.body")

# Untargeted fallback strength when a named target part does not exist.
MISSED_TARGET_FACTOR = 0.7

EXTREMITY_SUFFIXES = ("Arm", "Leg")
DERIVED_STATS = ("Strength", "Speed", "Vitality", "Perception")
BASE_COLD_RESISTANCE = 0.5


class BodyConstructionError(ValueError):
    """Raised when a body is built from an impossible composition."""


def fat_insulation(fat_fraction: float) -> float:
    """Extra cold resistance provided by body fat (piecewise in fat fraction)."""
    if fat_fraction < 0.05:
        return fat_fraction / 0.05 * 0.10
    if fat_fraction < 0.15:
        return 0.10 + (fat_fraction - 0.05) / 0.10 * 0.15
    return 0.25 + (fat_fraction - 0.15) * 0.15


class Body:
    """Owns the root ``BodyPart`` and tracks weight split into fat, muscle and the rest.

    ``fat_fraction`` and ``muscle_fraction`` are fractions of total weight in
    [0, 1]; their sum may not exceed 1.
    """

    def __init__(
        self,
        root: BodyPart,
        *,
        body_type: str = "Human",
        weight: float = 75.0,
        fat_fraction: float = 0.15,
        muscle_fraction: float = 0.30,
        is_player: bool = False,
    ) -> None:
        if weight <= 0:
            raise BodyConstructionError(f"Body weight must be positive, got {weight}")
        if fat_fraction < 0 or muscle_fraction < 0:
            raise BodyConstructionError("Fat and muscle percentages cannot be negative")
        if fat_fraction + muscle_fraction > 1.0:
            raise BodyConstructionError(
                f"Fat ({fat_fraction:.0%}) and muscle ({muscle_fraction:.0%}) exceed 100% of body weight"
            )
        self.root = root
        self.body_type = body_type
        self.is_player = is_player
        self.fat_weight = weight * fat_fraction
        self.muscle_weight = weight * muscle_fraction
        self.base_weight = weight - self.fat_weight - self.muscle_weight
        self._initial_weight = weight

    def __repr__(self) -> str:
        return f"Body({self.body_type!r}, weight={self.weight:.1f}, health={self.health_percent:.2f})"

    # ------------------------------------------------------------------
    # Composition

    @property
    def weight(self) -> float:
        return self.base_weight + self.fat_weight + self.muscle_weight

    @property
    def fat_fraction(self) -> float:
        return self.fat_weight / self.weight

    @property
    def muscle_fraction(self) -> float:
        return self.muscle_weight / self.weight

    def lose_fat(self, kilograms: float) -> float:
        """Remove up to ``kilograms`` of fat; returns the amount actually lost."""
        lost = clamp(kilograms, 0.0, self.fat_weight)
        self.fat_weight -= lost
        return lost

    def lose_muscle(self, kilograms: float) -> float:
        lost = clamp(kilograms, 0.0, self.muscle_weight)
        self.muscle_weight -= lost
        return lost

    def gain_fat(self, kilograms: float) -> None:
        self.fat_weight += max(0.0, kilograms)

    @property
    def cold_resistance(self) -> float:
        return clamp(BASE_COLD_RESISTANCE + fat_insulation(self.fat_fraction), 0.0, 1.0)

    # ------------------------------------------------------------------
    # Parts

    def iter_parts(self, include_destroyed: bool = True) -> Iterator[BodyPart]:
        return self.root.iter_parts(include_destroyed)

    @property
    def parts(self) -> List[BodyPart]:
        return list(self.iter_parts())

    def find_part(self, name: str) -> Optional[BodyPart]:
        return self.root.find_part(name)

    @property
    def is_alive(self) -> bool:
        return not self.root.is_destroyed

    @property
    def extremities(self) -> List[str]:
        """Names of the live limbs that can suffer frostbite."""
        return [
            part.name
            for part in self.iter_parts(include_destroyed=False)
            if part.name.endswith(EXTREMITY_SUFFIXES)
        ]

    # ------------------------------------------------------------------
    # Damage and healing

    def damage(
        self,
        info: DamageInfo,
        rng: Optional[RandomSource] = None,
        sink: Optional[MessageSink] = None,
    ) -> List[str]:
        """Apply a hit and return the resulting messages."""
        messages: List[str] = []
        if info.amount <= 0 or not self.is_alive:
            return messages

        amount = info.amount
        if info.target_part is not None:
            target = self.find_part(info.target_part)
            if target is not None:
                if info.is_environmental and not target.accepts_environmental and target.parent is not None:
                    target = target.parent
                target.apply_damage(amount, messages, penetrating=info.is_penetrating)
                publish(sink, messages)
                return messages
            logger.warning(
                "Damage target '%s' not found on %s body; applying untargeted hit",
                info.target_part,
                self.body_type,
            )
            amount *= MISSED_TARGET_FACTOR

        self.root.damage(
            amount,
            rng,
            messages,
            penetrating=info.is_penetrating,
            environmental=info.is_environmental,
        )
        publish(sink, messages)
        return messages

    def heal(
        self,
        info: HealingInfo,
        rng: Optional[RandomSource] = None,
        sink: Optional[MessageSink] = None,
    ) -> List[str]:
        messages: List[str] = []
        amount = info.effective_amount
        if amount <= 0:
            return messages

        if info.target_part is not None:
            target = self.find_part(info.target_part)
            if target is not None:
                target.apply_healing(amount, messages)
                publish(sink, messages)
                return messages
            logger.debug("Healing target '%s' not found; healing untargeted", info.target_part)

        self.root.heal(amount, rng, messages)
        publish(sink, messages)
        return messages

    # ------------------------------------------------------------------
    # Capacities and derived stats

    def get_capacity(self, name: str) -> float:
        return capacities.get_capacity(self.iter_parts(), name)

    def get_capacities(self) -> Dict[str, float]:
        return capacities.get_capacities(self.iter_parts())

    @property
    def health_percent(self) -> float:
        """Mean of the vital capacities; 0 once the body is destroyed."""
        if not self.is_alive:
            return 0.0
        parts = self.parts
        values = [capacities.get_capacity(parts, name) for name in capacities.VITAL_CAPACITIES]
        return sum(values) / len(values)

    def get_stat(self, name: str, modifiers: Optional[Dict[str, float]] = None) -> float:
        """Return a derived stat, optionally with effect capacity modifiers applied."""
        caps = self.get_capacities()
        if modifiers:
            caps = capacities.apply_capacity_modifiers(caps, modifiers)
        if name == "Strength":
            return caps["Manipulation"] * self.muscle_fraction
        if name == "Speed":
            return caps["Moving"] * (1.0 - self.fat_fraction) * (self._initial_weight / self.weight)
        if name == "Vitality":
            organs = (caps["Breathing"] + caps["BloodPumping"] + caps["Digestion"]) / 3.0
            return organs * (self.muscle_fraction + self.fat_fraction / 2.0)
        if name == "Perception":
            return (caps["Sight"] + caps["Hearing"]) / 2.0
        raise KeyError(f"Unknown stat: {name}")

    # ------------------------------------------------------------------
    # Presentation

    def describe(self) -> List[str]:
        lines = [
            f"{self.body_type} body: {self.weight:.1f} kg "
            f"({self.fat_fraction:.0%} fat, {self.muscle_fraction:.0%} muscle)",
            f"Overall health: {self.health_percent:.0%}",
        ]
        for part in self.iter_parts():
            if part.is_destroyed:
                lines.append(f"  {part.qualified_name}: destroyed")
            elif part.is_damaged:
                lines.append(f"  {part.qualified_name}: {part.health:.1f}/{part.max_health:.1f}")
        for name, value in self.get_capacities().items():
            if value < 1.0:
                lines.append(f"  {name}: {value:.0%}")
        return lines


__all__ = [
    "Body",
    "BodyConstructionError",
    "fat_insulation",
]
