"""Effects: templates, live instances and the per-actor registry."""

from .effect import Effect, EffectTemplate, StackingPolicy, ThresholdMessage
from .registry import EffectRegistry

__all__ = [
    "Effect",
    "EffectRegistry",
    "EffectTemplate",
    "StackingPolicy",
    "ThresholdMessage",
]
