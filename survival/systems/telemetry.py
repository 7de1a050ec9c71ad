"""Runtime telemetry for survival runs."""

from __future__ import annotations

import json
import os
import threading
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ..config import settings


@dataclass(slots=True)
class SurvivalSample:
    minute: int
    owner: str
    calories: float
    hydration: float
    energy: float
    temperature: float
    environment_temp: float
    health_percent: float
    weight: float
    fat_fraction: float
    muscle_fraction: float
    effects: dict[str, float]
    message_count: int


@dataclass(slots=True)
class DamageSample:
    minute: int
    owner: str
    source: str
    target: Optional[str]
    amount: float
    health_percent: float


class TelemetrySink:
    """Buffered JSONL telemetry writer."""

    def __init__(self, kind: str, *, directory: Optional[Path] = None, flush_interval: int = 32) -> None:
        base = directory or Path(settings.LOG_DIRECTORY) / "telemetry"
        base.mkdir(parents=True, exist_ok=True)
        timestamp = int(time.time())
        self.path = base / f"{kind}_{timestamp}.jsonl"
        self._buffer: list[dict] = []
        self._lock = threading.Lock()
        self._flush_interval = max(1, flush_interval)
        self._counter = 0

    def write(self, payload: SurvivalSample | DamageSample) -> None:
        with self._lock:
            self._buffer.append(asdict(payload))
            self._counter += 1
            if self._counter >= self._flush_interval:
                self._flush_locked()

    def flush(self) -> None:
        with self._lock:
            self._flush_locked()

    def _flush_locked(self) -> None:
        if not self._buffer:
            self._counter = 0
            return
        with self.path.open("a", encoding="utf-8") as handle:
            for row in self._buffer:
                handle.write(json.dumps(row, ensure_ascii=False) + os.linesep)
        self._buffer.clear()
        self._counter = 0


class TelemetryRecorder:
    """Survival and damage sinks for one run.

    Survivors are handed a recorder explicitly; without one they record
    nothing.
    """

    def __init__(
        self,
        kind: str = "all",
        *,
        directory: Optional[Path] = None,
        flush_interval: int = 32,
    ) -> None:
        if kind not in ("survival", "damage", "all"):
            raise ValueError(f"Unknown telemetry kind {kind!r}")
        self.survival_sink: Optional[TelemetrySink] = None
        self.damage_sink: Optional[TelemetrySink] = None
        if kind in ("survival", "all"):
            self.survival_sink = TelemetrySink("survival", directory=directory, flush_interval=flush_interval)
        if kind in ("damage", "all"):
            self.damage_sink = TelemetrySink("damage", directory=directory, flush_interval=flush_interval)

    def survival_sample(self, *, minute: int, survivor, message_count: int = 0) -> None:
        if self.survival_sink is None:
            return
        body = survivor.body
        sample = SurvivalSample(
            minute=minute,
            owner=survivor.name,
            calories=survivor.calories,
            hydration=survivor.hydration,
            energy=survivor.energy,
            temperature=survivor.temperature,
            environment_temp=survivor.environment_temp,
            health_percent=body.health_percent,
            weight=body.weight,
            fat_fraction=body.fat_fraction,
            muscle_fraction=body.muscle_fraction,
            effects={_effect_label(effect): effect.severity for effect in survivor.effects},
            message_count=message_count,
        )
        self.survival_sink.write(sample)

    def damage_sample(self, *, minute: int, survivor, damage) -> None:
        if self.damage_sink is None:
            return
        sample = DamageSample(
            minute=minute,
            owner=survivor.name,
            source=str(damage.source or damage.type),
            target=damage.target_part,
            amount=damage.amount,
            health_percent=survivor.body.health_percent,
        )
        self.damage_sink.write(sample)

    def flush(self) -> None:
        if self.survival_sink:
            self.survival_sink.flush()
        if self.damage_sink:
            self.damage_sink.flush()


def _effect_label(effect) -> str:
    if effect.target_part:
        return f"{effect.kind}:{effect.target_part}"
    return effect.kind


__all__ = [
    "DamageSample",
    "SurvivalSample",
    "TelemetryRecorder",
    "TelemetrySink",
]
