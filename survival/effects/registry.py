"""Per-actor registry of active effects."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Union

from ..physiology.data import SurvivalStatsDelta
from .effect import Effect, StackingPolicy

logger = logging.getLogger("survival.effects")


class EffectRegistry:
    """Owns the active effects of one actor and applies the stacking policy.

    Effects with the same ``(kind, target_part)`` key are merged according to
    their template's :class:`StackingPolicy`; ``INDEPENDENT`` effects are
    always added as new instances.
    """

    def __init__(self) -> None:
        self._effects: List[Effect] = []

    def __len__(self) -> int:
        return len(self._effects)

    def __iter__(self) -> Iterator[Effect]:
        return iter(list(self._effects))

    def __contains__(self, kind: object) -> bool:
        return any(effect.kind == kind for effect in self._effects)

    @property
    def active_effects(self) -> List[Effect]:
        return list(self._effects)

    def get(self, kind: str, target_part: Optional[str] = None) -> Optional[Effect]:
        for effect in self._effects:
            if effect.kind == kind and (target_part is None or effect.target_part == target_part):
                return effect
        return None

    def get_all(self, kind: str) -> List[Effect]:
        return [effect for effect in self._effects if effect.kind == kind]

    # ------------------------------------------------------------------
    # Mutation

    def add_effect(self, effect: Effect) -> List[str]:
        if effect.severity <= 0:
            logger.debug("Ignoring %s with zero severity", effect.kind)
            return []

        if effect.stacking is not StackingPolicy.INDEPENDENT:
            existing = self._find(effect)
            if existing is not None:
                return self._merge(existing, effect)

        effect.is_active = True
        self._effects.append(effect)
        logger.debug("Added %r", effect)
        message = effect.apply_message
        return [message] if message else []

    def _find(self, effect: Effect) -> Optional[Effect]:
        for candidate in self._effects:
            if candidate.key == effect.key:
                return candidate
        return None

    def _merge(self, existing: Effect, incoming: Effect) -> List[str]:
        """Fold ``incoming`` into ``existing``.

        Whenever the incoming effect wins, the active one takes its template
        and its timer restarts.
        """
        policy = existing.stacking
        if policy is StackingPolicy.KEEP_MAX and incoming.severity <= existing.severity:
            return []
        existing.template = incoming.template
        existing.elapsed_minutes = 0.0
        if policy is StackingPolicy.ADDITIVE:
            messages = existing.set_severity(existing.severity + incoming.severity)
        else:
            messages = existing.set_severity(incoming.severity)
        logger.debug("Merged %s into %r (%s)", incoming.kind, existing, policy.value)
        return messages

    def remove_effect(self, effect: Union[Effect, str]) -> List[str]:
        """Remove an instance, or every instance of a kind.

        Removing something that is not active is logged and ignored.
        """
        if isinstance(effect, str):
            targets = self.get_all(effect)
            label = effect
        else:
            targets = [candidate for candidate in self._effects if candidate is effect]
            label = effect.kind
        if not targets:
            logger.info("Tried to remove %s but it is not active", label)
            return []
        return [message for target in targets for message in self._detach(target)]

    def _detach(self, effect: Effect) -> List[str]:
        self._effects = [candidate for candidate in self._effects if candidate is not effect]
        effect.is_active = False
        logger.debug("Removed %r", effect)
        message = effect.remove_message
        return [message] if message else []

    def update(self, minutes: float) -> List[str]:
        """Advance every effect and drop the ones that ran out."""
        messages: List[str] = []
        for effect in list(self._effects):
            messages.extend(effect.update(minutes))
            if not effect.is_active:
                messages.extend(self._detach(effect))
        return messages

    def treat(self, kind: str, target_part: Optional[str] = None) -> List[str]:
        """Mark effects of ``kind`` as treated so they can start to heal."""
        treated = [
            effect
            for effect in self._effects
            if effect.kind == kind
            and (target_part is None or effect.target_part == target_part)
            and effect.requires_treatment
        ]
        if not treated:
            logger.info("Nothing to treat for %s", kind)
            return []
        for effect in treated:
            effect.treated = True
        return [f"You treat the {kind.lower()}."]

    def clear(self) -> None:
        self._effects.clear()

    # ------------------------------------------------------------------
    # Aggregates

    def get_survival_delta(self) -> SurvivalStatsDelta:
        """Per-minute survival delta summed across active effects."""
        total = SurvivalStatsDelta()
        for effect in self._effects:
            total = total + effect.survival_delta()
        return total

    def get_capacity_modifiers(self) -> Dict[str, float]:
        modifiers: Dict[str, float] = {}
        for effect in self._effects:
            for name, value in effect.capacity_modifiers().items():
                modifiers[name] = modifiers.get(name, 0.0) + value
        return modifiers

    def describe(self) -> List[str]:
        lines = []
        for effect in self._effects:
            where = f" ({effect.target_part})" if effect.target_part else ""
            lines.append(f"{effect.severity_description} {effect.kind}{where}: {effect.severity:.0%}")
        return lines


__all__ = ["EffectRegistry"]
