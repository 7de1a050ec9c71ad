"""Value types consumed and produced by the survival processor."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, List, Tuple

from ..body.damage import DamageInfo, HealingInfo
from ..config.constants import BASE_BODY_TEMPERATURE

if TYPE_CHECKING:
    from ..effects.effect import Effect

DEFAULT_EXTREMITIES: Tuple[str, ...] = ("Left Arm", "Right Arm", "Left Leg", "Right Leg")


@dataclass(frozen=True)
class SurvivalStatsDelta:
    """Change in calories, hydration (ml), temperature (°F) and energy (minutes)."""

    calories: float = 0.0
    hydration: float = 0.0
    temperature: float = 0.0
    energy: float = 0.0

    def __add__(self, other: "SurvivalStatsDelta") -> "SurvivalStatsDelta":
        return SurvivalStatsDelta(
            calories=self.calories + other.calories,
            hydration=self.hydration + other.hydration,
            temperature=self.temperature + other.temperature,
            energy=self.energy + other.energy,
        )

    def __mul__(self, factor: float) -> "SurvivalStatsDelta":
        return SurvivalStatsDelta(
            calories=self.calories * factor,
            hydration=self.hydration * factor,
            temperature=self.temperature * factor,
            energy=self.energy * factor,
        )

    __rmul__ = __mul__

    @property
    def is_zero(self) -> bool:
        return not (self.calories or self.hydration or self.temperature or self.energy)


@dataclass
class SurvivalData:
    """Snapshot of an actor's physiological state.

    Weights are kilograms, ``energy`` is minutes of wakefulness banked and
    ``temperature``/``environmental_temp`` are °F.
    """

    calories: float = 1500.0
    hydration: float = 3000.0
    energy: float = 800.0
    temperature: float = BASE_BODY_TEMPERATURE
    cold_resistance: float = 0.5
    body_weight: float = 75.0
    muscle_weight: float = 22.5
    fat_weight: float = 11.25
    health_percent: float = 1.0
    equipment_insulation: float = 0.0
    environmental_temp: float = 70.0
    activity_level: float = 1.0
    is_player: bool = False
    extremities: Tuple[str, ...] = DEFAULT_EXTREMITIES

    def __post_init__(self) -> None:
        for name in ("calories", "hydration", "energy"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if self.body_weight <= 0:
            raise ValueError("body_weight must be positive")
        if self.muscle_weight < 0 or self.fat_weight < 0:
            raise ValueError("muscle_weight and fat_weight cannot be negative")
        if self.fat_weight + self.muscle_weight > self.body_weight:
            raise ValueError("fat_weight + muscle_weight cannot exceed body_weight")
        self.extremities = tuple(self.extremities)

    def copy(self) -> "SurvivalData":
        return replace(self)


@dataclass
class SurvivalProcessorResult:
    """Everything a processor call produced.

    ``damage_events`` and ``healing_events`` are for the owner to apply to its
    body; the processor never touches a body itself.
    """

    data: SurvivalData
    effects: List["Effect"] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    stats_delta: SurvivalStatsDelta = field(default_factory=SurvivalStatsDelta)
    calorie_deficit: float = 0.0
    damage_events: List[DamageInfo] = field(default_factory=list)
    healing_events: List[HealingInfo] = field(default_factory=list)

    @property
    def is_starving(self) -> bool:
        return self.calorie_deficit > 0


__all__ = [
    "DEFAULT_EXTREMITIES",
    "SurvivalData",
    "SurvivalProcessorResult",
    "SurvivalStatsDelta",
]
