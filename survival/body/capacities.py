"""Capacity aggregation over a flattened list of body parts.

Every capacity uses exactly one strategy:

* ``MIN``: bottleneck parts. One ruined leg zeroes Moving.
* ``AVERAGE``: paired or redundant parts. One lost eye halves Sight.
* ``SINGLE``: a unique organ (Brain, Heart).

``MIN`` and ``AVERAGE`` match parts with a word in their name that starts
with one of the listed fragments, so ``"Leg"`` matches ``"Left Leg"`` and
``"Front Right Leg"`` while ``"Ear"`` does not match ``"Heart"``. ``SINGLE``
matches the exact part name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Tuple

from ..utils.math_utils import clamp
from .body_part import BodyPart

logger = logging.getLogger("survival.body")

DEFAULT_CAPACITY = 1.0


class Aggregation(str, Enum):
    """How part terms combine into one capacity value."""

    MIN = "min"
    AVERAGE = "average"
    SINGLE = "single"


@dataclass(frozen=True)
class CapacityRule:
    aggregation: Aggregation
    parts: Tuple[str, ...]

    def matches(self, part: BodyPart) -> bool:
        if self.aggregation is Aggregation.SINGLE:
            return part.name in self.parts
        words = part.name.split()
        return any(word.startswith(fragment) for word in words for fragment in self.parts)


CAPACITY_RULES: Dict[str, CapacityRule] = {
    "Moving": CapacityRule(Aggregation.MIN, ("Leg", "Spine", "Pelvis")),
    "Manipulation": CapacityRule(Aggregation.MIN, ("Arm", "Hand", "Clavicle")),
    "Breathing": CapacityRule(Aggregation.MIN, ("Lung", "Ribcage", "Sternum")),
    "Digestion": CapacityRule(Aggregation.MIN, ("Stomach", "Liver")),
    "Eating": CapacityRule(Aggregation.MIN, ("Mouth", "Jaw")),
    "Talking": CapacityRule(Aggregation.MIN, ("Mouth", "Jaw", "Tongue")),
    "Sight": CapacityRule(Aggregation.AVERAGE, ("Eye",)),
    "Hearing": CapacityRule(Aggregation.AVERAGE, ("Ear",)),
    "BloodFiltration": CapacityRule(Aggregation.AVERAGE, ("Kidney",)),
    "Consciousness": CapacityRule(Aggregation.SINGLE, ("Brain",)),
    "BloodPumping": CapacityRule(Aggregation.SINGLE, ("Heart",)),
}

CAPACITY_NAMES: Tuple[str, ...] = tuple(CAPACITY_RULES)

# Capacities whose loss threatens life; their mean is the body's health percent.
VITAL_CAPACITIES: Tuple[str, ...] = (
    "Consciousness",
    "BloodPumping",
    "Breathing",
    "Moving",
    "Manipulation",
)


def get_capacity(parts: Iterable[BodyPart], capacity: str) -> float:
    """Aggregate ``capacity`` over ``parts``.

    Unknown capacity names and capacities with no matching part both return
    ``1.0``.
    """
    rule = CAPACITY_RULES.get(capacity)
    if rule is None:
        logger.debug("Unknown capacity '%s', using %.1f", capacity, DEFAULT_CAPACITY)
        return DEFAULT_CAPACITY

    terms = [part.capacity_term(capacity) for part in parts if rule.matches(part)]
    if not terms:
        logger.debug("No parts provide capacity '%s', using %.1f", capacity, DEFAULT_CAPACITY)
        return DEFAULT_CAPACITY

    if rule.aggregation is Aggregation.MIN:
        value = min(terms)
    elif rule.aggregation is Aggregation.AVERAGE:
        value = sum(terms) / len(terms)
    else:
        value = terms[0]
    return clamp(value, 0.0, 1.0)


def get_capacities(parts: Iterable[BodyPart]) -> Dict[str, float]:
    part_list = list(parts)
    return {name: get_capacity(part_list, name) for name in CAPACITY_NAMES}


def apply_capacity_modifiers(base: Mapping[str, float], modifiers: Mapping[str, float]) -> Dict[str, float]:
    """Add effect modifiers onto base capacities, clamping each to [0, 1].

    Modifiers for capacities missing from ``base`` start from ``1.0``.
    """
    combined = dict(base)
    for name, delta in modifiers.items():
        combined[name] = combined.get(name, DEFAULT_CAPACITY) + delta
    return {name: clamp(value, 0.0, 1.0) for name, value in combined.items()}


__all__ = [
    "Aggregation",
    "CAPACITY_NAMES",
    "CAPACITY_RULES",
    "CapacityRule",
    "VITAL_CAPACITIES",
    "apply_capacity_modifiers",
    "get_capacities",
    "get_capacity",
]
