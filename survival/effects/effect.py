"""Effect templates and live effect instances."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from ..physiology.data import SurvivalStatsDelta
from ..utils.math_utils import clamp


class StackingPolicy(str, Enum):
    """What happens when an effect is added while one with the same key is active.

    ``REPLACE``: the active effect takes the incoming severity.
    ``KEEP_MAX``: the active effect keeps the larger of both severities.
    ``ADDITIVE``: severities add, capped at 1.
    ``INDEPENDENT``: every add becomes its own instance.
    """

    REPLACE = "replace"
    KEEP_MAX = "keep_max"
    ADDITIVE = "additive"
    INDEPENDENT = "independent"


@dataclass(frozen=True)
class ThresholdMessage:
    threshold: float
    message: str
    when_rising: bool = True


@dataclass(frozen=True)
class EffectTemplate:
    """Immutable description of an effect kind.

    ``survival_stats`` is a per-minute delta and ``capacity_modifiers`` are
    additive; both are scaled by the live effect's severity.
    """

    kind: str
    survival_stats: SurvivalStatsDelta = field(default_factory=SurvivalStatsDelta)
    capacity_modifiers: Mapping[str, float] = field(default_factory=dict)
    hourly_severity_change: float = 0.0
    stacking: StackingPolicy = StackingPolicy.REPLACE
    requires_treatment: bool = False
    duration_minutes: Optional[float] = None
    apply_message: Optional[str] = None
    remove_message: Optional[str] = None
    threshold_messages: Tuple[ThresholdMessage, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "capacity_modifiers", MappingProxyType(dict(self.capacity_modifiers)))
        object.__setattr__(self, "threshold_messages", tuple(self.threshold_messages))

    @property
    def allow_multiple(self) -> bool:
        return self.stacking is StackingPolicy.INDEPENDENT


def describe_severity(severity: float) -> str:
    if severity < 0.3:
        return "Minor"
    if severity < 0.7:
        return "Moderate"
    if severity < 0.9:
        return "Severe"
    return "Critical"


@dataclass
class Effect:
    """A live effect owned by one actor's registry."""

    template: EffectTemplate
    severity: float = 1.0
    target_part: Optional[str] = None
    source: Optional[str] = None
    elapsed_minutes: float = 0.0
    is_active: bool = True
    treated: bool = False

    def __post_init__(self) -> None:
        self.severity = clamp(self.severity, 0.0, 1.0)

    def __repr__(self) -> str:
        where = f" on {self.target_part}" if self.target_part else ""
        return f"Effect({self.kind!r}{where}, severity={self.severity:.2f})"

    @property
    def kind(self) -> str:
        return self.template.kind

    @property
    def key(self) -> Tuple[str, Optional[str]]:
        return self.kind, self.target_part

    @property
    def stacking(self) -> StackingPolicy:
        return self.template.stacking

    @property
    def requires_treatment(self) -> bool:
        return self.template.requires_treatment and not self.treated

    @property
    def severity_description(self) -> str:
        return describe_severity(self.severity)

    @property
    def is_expired(self) -> bool:
        duration = self.template.duration_minutes
        return duration is not None and self.elapsed_minutes >= duration

    def format_message(self, message: Optional[str]) -> Optional[str]:
        if message is None:
            return None
        return message.replace("{part}", self.target_part or "body")

    @property
    def apply_message(self) -> Optional[str]:
        return self.format_message(self.template.apply_message)

    @property
    def remove_message(self) -> Optional[str]:
        return self.format_message(self.template.remove_message)

    def survival_delta(self) -> SurvivalStatsDelta:
        """Per-minute survival delta at the current severity."""
        return self.template.survival_stats * self.severity

    def capacity_modifiers(self) -> Dict[str, float]:
        return {name: value * self.severity for name, value in self.template.capacity_modifiers.items()}

    def set_severity(self, value: float) -> List[str]:
        """Change severity and return any threshold messages crossed on the way."""
        old = self.severity
        self.severity = clamp(value, 0.0, 1.0)
        if self.severity <= 0:
            self.is_active = False
        message = self._threshold_crossed(old, self.severity)
        return [message] if message else []

    def update(self, minutes: float) -> List[str]:
        """Advance the effect by ``minutes``.

        The hourly change is pro-rated; an effect awaiting treatment only ever
        worsens.
        """
        if not self.is_active or minutes <= 0:
            return []
        self.elapsed_minutes += minutes
        messages: List[str] = []
        change = self.template.hourly_severity_change / 60.0 * minutes
        if change and (not self.requires_treatment or change > 0):
            messages = self.set_severity(self.severity + change)
        if self.is_expired:
            self.is_active = False
        return messages

    def _threshold_crossed(self, old: float, new: float) -> Optional[str]:
        if new > old:
            crossed = [t for t in self.template.threshold_messages if t.when_rising and old < t.threshold <= new]
            if crossed:
                return self.format_message(max(crossed, key=lambda t: t.threshold).message)
        elif new < old:
            crossed = [t for t in self.template.threshold_messages if not t.when_rising and new <= t.threshold < old]
            if crossed:
                return self.format_message(min(crossed, key=lambda t: t.threshold).message)
        return None


__all__ = [
    "Effect",
    "EffectTemplate",
    "StackingPolicy",
    "ThresholdMessage",
    "describe_severity",
]
