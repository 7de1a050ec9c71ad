"""Catalogue of effect kinds and constructors for live instances."""

from __future__ import annotations

from typing import Optional

from ..physiology.data import SurvivalStatsDelta
from .effect import Effect, EffectTemplate, StackingPolicy, ThresholdMessage

# ----------------------------------------------------------------------
# Temperature

SHIVERING = EffectTemplate(
    kind="Shivering",
    survival_stats=SurvivalStatsDelta(temperature=3.0 / 60.0),
    capacity_modifiers={"Manipulation": -0.2},
    hourly_severity_change=-2.0,
    stacking=StackingPolicy.REPLACE,
    apply_message="You're shivering.",
    remove_message="You've stopped shivering.",
)

HYPOTHERMIA = EffectTemplate(
    kind="Hypothermia",
    capacity_modifiers={"Moving": -0.3, "Manipulation": -0.3, "Consciousness": -0.5, "BloodPumping": -0.2},
    hourly_severity_change=-0.5,
    stacking=StackingPolicy.REPLACE,
    apply_message="You are getting dangerously cold...",
    remove_message="You are warming up, the hypothermia has passed.",
    threshold_messages=(
        ThresholdMessage(0.33, "The cold is getting dangerous. Your movements are sluggish."),
        ThresholdMessage(0.67, "Severe hypothermia setting in. You need warmth NOW."),
    ),
)

FROSTBITE = EffectTemplate(
    kind="Frostbite",
    capacity_modifiers={"Manipulation": -0.5, "Moving": -0.5, "BloodPumping": -0.2},
    hourly_severity_change=-0.02,
    stacking=StackingPolicy.KEEP_MAX,
    requires_treatment=True,
    apply_message="Your {part} is developing frostbite!",
    remove_message="The feeling is returning to your {part}.",
)

HYPERTHERMIA = EffectTemplate(
    kind="Hyperthermia",
    capacity_modifiers={"Consciousness": -0.5, "Moving": -0.3, "BloodPumping": -0.2},
    hourly_severity_change=-0.5,
    stacking=StackingPolicy.REPLACE,
    apply_message="You are overheating!",
    remove_message="You have cooled down, the overheating has passed.",
)

SWEATING = EffectTemplate(
    kind="Sweating",
    survival_stats=SurvivalStatsDelta(hydration=-1000.0 / 60.0),
    stacking=StackingPolicy.REPLACE,
    apply_message="You're sweating heavily.",
    remove_message="You've stopped sweating.",
)

# ----------------------------------------------------------------------
# Hunger

STARVATION = EffectTemplate(
    kind="Starvation",
    capacity_modifiers={"Moving": -0.2, "Manipulation": -0.2, "Consciousness": -0.1},
    hourly_severity_change=-0.1,
    stacking=StackingPolicy.REPLACE,
    apply_message="Hunger gnaws at your strength.",
    remove_message="Your strength is returning.",
)

# ----------------------------------------------------------------------
# Injuries and conditions

SPRAINED_ANKLE = EffectTemplate(
    kind="Sprained Ankle",
    capacity_modifiers={"Moving": -0.4},
    hourly_severity_change=-0.01,
    stacking=StackingPolicy.KEEP_MAX,
    requires_treatment=True,
    apply_message="You've twisted your ankle.",
    remove_message="Your ankle feels stable again.",
)

FEAR = EffectTemplate(
    kind="Fear",
    capacity_modifiers={"Manipulation": -0.15},
    hourly_severity_change=-0.1,
    stacking=StackingPolicy.KEEP_MAX,
    apply_message="Fear grips you.",
)

SHAKEN = EffectTemplate(
    kind="Shaken",
    capacity_modifiers={"Manipulation": -0.1},
    hourly_severity_change=-0.2,
    stacking=StackingPolicy.KEEP_MAX,
    apply_message="Your hands are trembling.",
)

COUGHING = EffectTemplate(
    kind="Coughing",
    capacity_modifiers={"Breathing": -0.25},
    hourly_severity_change=-0.1,
    stacking=StackingPolicy.KEEP_MAX,
    apply_message="You can't stop coughing.",
)

BLEEDING = EffectTemplate(
    kind="Bleeding",
    capacity_modifiers={"BloodPumping": -0.2, "Consciousness": -0.1},
    hourly_severity_change=-0.1,
    stacking=StackingPolicy.ADDITIVE,
    requires_treatment=True,
    apply_message="You're bleeding.",
    remove_message="The bleeding has stopped.",
)

PAIN = EffectTemplate(
    kind="Pain",
    capacity_modifiers={"Manipulation": -0.25, "Consciousness": -0.15, "Sight": -0.15, "Hearing": -0.10},
    hourly_severity_change=-0.15,
    stacking=StackingPolicy.KEEP_MAX,
    apply_message="You're in pain.",
    remove_message="The pain has subsided.",
    threshold_messages=(
        ThresholdMessage(0.5, "The pain is intense, making it hard to focus."),
        ThresholdMessage(0.75, "Agonizing pain threatens to overwhelm you."),
    ),
)

# Nausea from bad food or water gets worse before it gets better.
CONTAMINATION_NAUSEA_HOURLY_CHANGE = 0.05
NAUSEA_SEVERE_THRESHOLD = 0.5


def shivering(severity: float) -> Effect:
    return Effect(SHIVERING, severity, source="Cold")


def hypothermia(severity: float) -> Effect:
    return Effect(HYPOTHERMIA, severity, source="Cold")


def frostbite(part: str, severity: float) -> Effect:
    return Effect(FROSTBITE, severity, target_part=part, source="Cold")


def hyperthermia(severity: float) -> Effect:
    return Effect(HYPERTHERMIA, severity, source="Heat")


def sweating(severity: float) -> Effect:
    return Effect(SWEATING, severity, source="Heat")


def starvation(severity: float) -> Effect:
    return Effect(STARVATION, severity, source="Starvation")


def sprained_ankle(severity: float = 0.5, part: Optional[str] = None) -> Effect:
    return Effect(SPRAINED_ANKLE, severity, target_part=part)


def fear(severity: float = 0.5, source: Optional[str] = None) -> Effect:
    return Effect(FEAR, severity, source=source)


def shaken(severity: float = 0.5, source: Optional[str] = None) -> Effect:
    return Effect(SHAKEN, severity, source=source)


def coughing(severity: float = 0.5) -> Effect:
    return Effect(COUGHING, severity)


def bleeding(severity: float, part: Optional[str] = None, source: Optional[str] = None) -> Effect:
    return Effect(BLEEDING, severity, target_part=part, source=source)


def pain(severity: float, part: Optional[str] = None, source: Optional[str] = None) -> Effect:
    return Effect(PAIN, severity, target_part=part, source=source)


def temperature_change(degrees_per_hour: float, duration_minutes: float, source: Optional[str] = None) -> Effect:
    """A short-lived push on core temperature, e.g. a hot drink or cold water.

    Severity fades from 1 to 0 over ``duration_minutes``; each drink is its own
    instance.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")
    kind = "Warmed" if degrees_per_hour >= 0 else "Chilled"
    template = EffectTemplate(
        kind=kind,
        survival_stats=SurvivalStatsDelta(temperature=degrees_per_hour / 60.0),
        hourly_severity_change=-60.0 / duration_minutes,
        stacking=StackingPolicy.INDEPENDENT,
        duration_minutes=duration_minutes,
    )
    return Effect(template, 1.0, source=source)


def exhausted(duration_minutes: float, severity: float = 1.0) -> Effect:
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")
    template = EffectTemplate(
        kind="Exhausted",
        capacity_modifiers={"Moving": -0.2, "Manipulation": -0.1},
        hourly_severity_change=-60.0 / duration_minutes,
        stacking=StackingPolicy.KEEP_MAX,
        duration_minutes=duration_minutes,
        apply_message="You're exhausted.",
    )
    return Effect(template, severity)


def nauseous(severity: float, duration_minutes: float = 60.0, from_contamination: bool = False) -> Effect:
    """Nausea that fades over ``duration_minutes``.

    Contaminated food or water instead makes it worsen until treated, as does
    any nausea above half severity. Severe nausea also drains hydration
    through vomiting.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")
    if from_contamination:
        hourly = CONTAMINATION_NAUSEA_HOURLY_CHANGE
        apply_message = "Your stomach lurches. Something you ate is fighting back."
    else:
        hourly = -60.0 / duration_minutes
        apply_message = "You feel sick to your stomach."
    severe = severity > NAUSEA_SEVERE_THRESHOLD
    template = EffectTemplate(
        kind="Nauseous",
        survival_stats=SurvivalStatsDelta(hydration=-300.0 / 60.0 if severe else 0.0),
        capacity_modifiers={"Digestion": -0.3, "Consciousness": -0.1, "Moving": -0.15},
        hourly_severity_change=hourly,
        stacking=StackingPolicy.KEEP_MAX,
        requires_treatment=from_contamination or severe,
        apply_message=apply_message,
        remove_message="The nausea has passed.",
        threshold_messages=(
            ThresholdMessage(0.5, "The nausea is getting worse. Your stomach cramps."),
            ThresholdMessage(0.7, "You can barely keep anything down. You need to rest."),
        ),
    )
    return Effect(template, severity, source="Contamination" if from_contamination else None)


def gut_sickness(severity: float) -> Effect:
    return nauseous(severity, from_contamination=True)


__all__ = [
    "BLEEDING",
    "COUGHING",
    "FEAR",
    "FROSTBITE",
    "HYPERTHERMIA",
    "HYPOTHERMIA",
    "PAIN",
    "SHAKEN",
    "SHIVERING",
    "SPRAINED_ANKLE",
    "STARVATION",
    "SWEATING",
    "bleeding",
    "coughing",
    "exhausted",
    "fear",
    "frostbite",
    "gut_sickness",
    "hyperthermia",
    "hypothermia",
    "nauseous",
    "pain",
    "shaken",
    "shivering",
    "sprained_ankle",
    "starvation",
    "sweating",
    "temperature_change",
]
