"""Damage and healing records passed into a ``Body`` by collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Damage types that come from the environment rather than a blow. They cannot
# reach an internal organ directly and land on the part that contains it.
ENVIRONMENTAL_DAMAGE_TYPES = frozenset({"frostbite", "burn"})


@dataclass
class DamageInfo:
    """A single hit against a body."""

    amount: float
    type: str = "blunt"
    is_penetrating: bool = False
    target_part: Optional[str] = None
    source: Optional[str] = None

    @property
    def is_environmental(self) -> bool:
        return self.type in ENVIRONMENTAL_DAMAGE_TYPES


@dataclass
class HealingInfo:
    """A single healing application; the applied amount is ``amount * quality``."""

    amount: float
    type: str = "natural"
    target_part: Optional[str] = None
    quality: float = 1.0

    @property
    def effective_amount(self) -> float:
        return max(0.0, self.amount * self.quality)
