"""Exposure scenario runner and logging bootstrap."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import settings
from .entities.survivor import Survivor
from .systems import telemetry


@dataclass(frozen=True)
class ExposureScenario:
    """A survivor left in a fixed environment for ``hours``."""

    hours: float = 6.0
    environment_temp: float = 32.0
    insulation: float = 0.0
    activity: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.hours < 0:
            raise ValueError("hours cannot be negative")
        if not 0.0 <= self.insulation <= 0.95:
            raise ValueError("insulation must be between 0 and 0.95")
        if self.activity < 0:
            raise ValueError("activity cannot be negative")


def _initialise_logger() -> logging.Logger:
    log_dir = settings.LOG_DIRECTORY
    if not isinstance(log_dir, Path):
        log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / settings.DEBUG_LOG_FILE

    logger = logging.getLogger("survival")
    if logger.handlers:
        return logger

    level_name = str(settings.DEBUG_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.propagate = False

    logger.info("Debug logging initialised at %s", log_path)
    return logger


def run(runtime_settings: settings.SurvivalSettings, scenario: ExposureScenario) -> Survivor:
    """Run ``scenario`` tick by tick and return the survivor in its final state."""
    logger = _initialise_logger()
    recorder = None
    if runtime_settings.TELEMETRY_ENABLED:
        recorder = telemetry.TelemetryRecorder(directory=Path(runtime_settings.LOG_DIRECTORY) / "telemetry")

    rng = random.Random(scenario.seed)
    survivor = Survivor(rng=rng, telemetry=recorder)
    tick = runtime_settings.TICK_MINUTES
    total_minutes = int(round(scenario.hours * 60))
    logger.info(
        "Exposure run: %.1f h at %.1f°F, insulation %.2f, activity %.2f, tick %d min",
        scenario.hours,
        scenario.environment_temp,
        scenario.insulation,
        scenario.activity,
        tick,
    )

    elapsed = 0
    while elapsed < total_minutes and survivor.is_alive:
        step = min(tick, total_minutes - elapsed)
        survivor.update(
            step,
            environment_temp=scenario.environment_temp,
            insulation=scenario.insulation,
            activity=scenario.activity,
        )
        elapsed += step

    if recorder is not None:
        recorder.flush()
    logger.info("Run finished after %d minutes: %r", elapsed, survivor)
    return survivor


__all__ = ["ExposureScenario", "run"]
