"""Factories that assemble body part trees for the supported anatomies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

from .body import Body, BodyConstructionError
from .body_part import BodyPart, Organ

DEFAULT_BODY_HEALTH = 100.0

FINGERS = ("Thumb", "Index Finger", "Middle Finger", "Ring Finger", "Pinky")
TOES = ("Big Toe", "Second Toe", "Middle Toe", "Fourth Toe", "Little Toe")


class BodyType(str, Enum):
    HUMAN = "Human"
    QUADRUPED = "Quadruped"
    BIPED = "Biped"
    GENERIC = "Generic"


@dataclass(frozen=True)
class BodyCreationInfo:
    """Blueprint for a new body.

    ``fat_percent`` and ``muscle_percent`` are fractions of ``overall_weight``
    (``0.15`` is 15%).
    """

    type: BodyType = BodyType.HUMAN
    overall_weight: float = 75.0
    fat_percent: float = 0.15
    muscle_percent: float = 0.30
    is_player: bool = False

    def validate(self) -> None:
        if self.overall_weight <= 0:
            raise BodyConstructionError(f"overall_weight must be positive, got {self.overall_weight}")
        if self.fat_percent < 0 or self.muscle_percent < 0:
            raise BodyConstructionError("fat_percent and muscle_percent cannot be negative")
        if self.fat_percent + self.muscle_percent > 1.0:
            raise BodyConstructionError("fat_percent + muscle_percent cannot exceed 100%")


BASELINE_HUMAN = BodyCreationInfo()
BASELINE_PLAYER = BodyCreationInfo(is_player=True)


# ----------------------------------------------------------------------
# Head and torso


def create_head(hp: float) -> BodyPart:
    head = BodyPart("Head", hp, is_vital=True)
    head.add_part(Organ("Brain", hp / 2, is_vital=True, capacities={"Consciousness": 1.0}))
    for side in ("Right", "Left"):
        head.add_part(Organ(f"{side} Eye", hp / 8, capacities={"Sight": 1.0}, is_external=True))
    head.add_part(BodyPart("Mouth", hp / 8, capacities={"Eating": 1.0, "Talking": 1.0}))
    for side in ("Left", "Right"):
        head.add_part(Organ(f"{side} Ear", hp / 8, capacities={"Hearing": 1.0}, is_external=True))
    head.add_part(BodyPart("Jaw", hp / 8, capacities={"Eating": 1.0, "Talking": 1.0}))
    head.add_part(Organ("Tongue", hp / 8, capacities={"Talking": 1.0}, is_external=True))
    return head


def create_torso(hp: float) -> BodyPart:
    torso = BodyPart("Torso", hp, is_vital=True)
    torso.add_part(Organ("Lungs", hp / 2, is_vital=True, capacities={"Breathing": 1.0}))
    torso.add_part(Organ("Heart", hp / 2, is_vital=True, capacities={"BloodPumping": 1.0}))
    torso.add_part(Organ("Stomach", hp / 2, is_vital=True, capacities={"Digestion": 1.0}))
    torso.add_part(Organ("Liver", hp / 2, is_vital=True, capacities={"Digestion": 1.0}))
    for side in ("Left", "Right"):
        torso.add_part(Organ(f"{side} Kidney", hp / 2, is_vital=True, capacities={"BloodFiltration": 1.0}))
    torso.add_part(BodyPart("Spine", hp / 2, capacities={"Moving": 1.0}))
    torso.add_part(BodyPart("Ribcage", hp / 2, capacities={"Breathing": 1.0}))
    torso.add_part(BodyPart("Sternum", hp / 2, capacities={"Breathing": 1.0}))
    torso.add_part(BodyPart("Pelvis", hp / 2, capacities={"Moving": 1.0}))
    return torso


# ----------------------------------------------------------------------
# Limbs


def create_shoulder(hp: float, side: str) -> BodyPart:
    shoulder = BodyPart(f"{side} Shoulder", hp, capacities={"Manipulation": 0.5})
    shoulder.add_part(BodyPart(f"{side} Clavicle", hp / 2, capacities={"Manipulation": 1.0}))
    shoulder.add_part(create_arm(hp / 2, side))
    return shoulder


def create_arm(hp: float, side: str) -> BodyPart:
    arm = BodyPart(f"{side} Arm", hp, capacities={"Manipulation": 1.0})
    arm.add_part(create_hand(hp / 2, side))
    arm.add_part(BodyPart(f"{side} Humerus", hp / 2, capacities={"Manipulation": 0.5}))
    arm.add_part(BodyPart(f"{side} Radius", hp / 2, capacities={"Manipulation": 0.5}))
    return arm


def create_hand(hp: float, side: str) -> BodyPart:
    hand = BodyPart(f"{side} Hand", hp, capacities={"Manipulation": 1.0})
    for finger in FINGERS:
        hand.add_part(BodyPart(f"{side} {finger}", hp / 5, capacities={"Manipulation": 0.08}))
    return hand


def create_leg(hp: float, name: str) -> BodyPart:
    leg = BodyPart(name, hp, capacities={"Moving": 1.0})
    prefix = name[: -len("Leg")].strip()
    leg.add_part(create_foot(hp / 2, prefix))
    leg.add_part(BodyPart(f"{prefix} Femur", hp / 2, capacities={"Moving": 0.5}))
    leg.add_part(BodyPart(f"{prefix} Tibia", hp / 2, capacities={"Moving": 0.5}))
    return leg


def create_foot(hp: float, prefix: str) -> BodyPart:
    foot = BodyPart(f"{prefix} Foot", hp, capacities={"Moving": 0.5})
    for toe in TOES:
        foot.add_part(BodyPart(f"{prefix} {toe}", hp / 5, capacities={"Moving": 0.04}))
    return foot


# ----------------------------------------------------------------------
# Whole bodies


def create_human_body(hp: float = DEFAULT_BODY_HEALTH) -> BodyPart:
    body = BodyPart("Body", hp, is_vital=True)
    body.add_part(create_head(hp / 4))
    body.add_part(create_torso(hp / 2))
    body.add_part(create_shoulder(hp / 4, "Left"))
    body.add_part(create_shoulder(hp / 4, "Right"))
    body.add_part(create_leg(hp / 3, "Left Leg"))
    body.add_part(create_leg(hp / 3, "Right Leg"))
    return body


def create_quadruped_body(hp: float = DEFAULT_BODY_HEALTH) -> BodyPart:
    body = BodyPart("Body", hp, is_vital=True)
    body.add_part(create_head(hp / 4))
    body.add_part(create_torso(hp / 2))
    for name in ("Front Left Leg", "Front Right Leg", "Rear Left Leg", "Rear Right Leg"):
        body.add_part(create_leg(hp / 3, name))
    return body


def create_biped_body(hp: float = DEFAULT_BODY_HEALTH) -> BodyPart:
    body = BodyPart("Body", hp, is_vital=True)
    body.add_part(create_head(hp / 4))
    body.add_part(create_torso(hp / 2))
    body.add_part(create_leg(hp / 3, "Left Leg"))
    body.add_part(create_leg(hp / 3, "Right Leg"))
    return body


def create_generic_body(hp: float = DEFAULT_BODY_HEALTH) -> BodyPart:
    return BodyPart("Body", hp, is_vital=True)


_BUILDERS: Dict[BodyType, Callable[[float], BodyPart]] = {
    BodyType.HUMAN: create_human_body,
    BodyType.QUADRUPED: create_quadruped_body,
    BodyType.BIPED: create_biped_body,
    BodyType.GENERIC: create_generic_body,
}


def create_body(info: BodyCreationInfo = BASELINE_HUMAN, hp: float = DEFAULT_BODY_HEALTH) -> Body:
    """Build a complete :class:`Body` from ``info``."""
    info.validate()
    try:
        body_type = BodyType(info.type)
    except ValueError as error:
        raise BodyConstructionError(f"Unknown body type: {info.type}") from error
    root = _BUILDERS[body_type](hp)
    return Body(
        root,
        body_type=body_type.value,
        weight=info.overall_weight,
        fat_fraction=info.fat_percent,
        muscle_fraction=info.muscle_percent,
        is_player=info.is_player,
    )


__all__ = [
    "BASELINE_HUMAN",
    "BASELINE_PLAYER",
    "BodyCreationInfo",
    "BodyType",
    "DEFAULT_BODY_HEALTH",
    "create_biped_body",
    "create_body",
    "create_generic_body",
    "create_human_body",
    "create_quadruped_body",
]
