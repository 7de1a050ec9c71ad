"""Body part trees, capacity aggregation and body factories."""

from .body import Body, BodyConstructionError
from .body_part import BodyPart, Organ, RandomSource
from .capacities import CAPACITY_NAMES, apply_capacity_modifiers, get_capacities, get_capacity
from .damage import DamageInfo, HealingInfo
from .factory import BodyCreationInfo, BodyType, create_body

__all__ = [
    "Body",
    "BodyConstructionError",
    "BodyCreationInfo",
    "BodyPart",
    "BodyType",
    "CAPACITY_NAMES",
    "DamageInfo",
    "HealingInfo",
    "Organ",
    "RandomSource",
    "apply_capacity_modifiers",
    "create_body",
    "get_capacities",
    "get_capacity",
]
