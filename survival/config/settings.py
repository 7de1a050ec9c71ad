"""Configuration constants for the survival simulation."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

import yaml

from .constants import DEFAULTS

_PATH_FIELDS = {"LOG_DIRECTORY"}
_STRING_FIELDS = {"DEBUG_LOG_FILE", "DEBUG_LOG_LEVEL"}
_BOOL_FIELDS = {"TELEMETRY_ENABLED"}
_INT_FIELDS = {"TICK_MINUTES"}
_FLOAT_FIELDS = {
    "MAX_CALORIES",
    "MAX_HYDRATION",
    "MAX_ENERGY_MINUTES",
    "BASE_EXHAUSTION_RATE",
    "BASE_DEHYDRATION_RATE",
    "NOTIFY_EXISTING_STATUS_CHANCE",
}

MAX_CALORIES = float(os.getenv("SURVIVAL_MAX_CALORIES", str(DEFAULTS["MAX_CALORIES"])))
MAX_HYDRATION = float(os.getenv("SURVIVAL_MAX_HYDRATION", str(DEFAULTS["MAX_HYDRATION"])))
MAX_ENERGY_MINUTES = float(os.getenv("SURVIVAL_MAX_ENERGY_MINUTES", str(DEFAULTS["MAX_ENERGY_MINUTES"])))
BASE_EXHAUSTION_RATE = DEFAULTS["BASE_EXHAUSTION_RATE"]
BASE_DEHYDRATION_RATE = DEFAULTS["BASE_DEHYDRATION_RATE"]

# Chance per tick to repeat a "still cold" / "still hot" / "still starving" notice.
NOTIFY_EXISTING_STATUS_CHANCE = 0.1
TICK_MINUTES = 1

CONFIG_ENV_VAR = "SURVIVAL_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("configs/default.yaml")
LOG_DIRECTORY = Path(os.getenv("SURVIVAL_LOG_DIR", "logs"))
DEBUG_LOG_FILE = os.getenv("SURVIVAL_DEBUG_LOG", "survival_debug.log")
DEBUG_LOG_LEVEL = os.getenv("SURVIVAL_DEBUG_LOG_LEVEL", "INFO")
TELEMETRY_ENABLED = os.getenv("SURVIVAL_TELEMETRY", "0") in {"1", "true", "True"}


@dataclass(frozen=True)
class SurvivalSettings:
    MAX_CALORIES: float = MAX_CALORIES
    MAX_HYDRATION: float = MAX_HYDRATION
    MAX_ENERGY_MINUTES: float = MAX_ENERGY_MINUTES
    BASE_EXHAUSTION_RATE: float = BASE_EXHAUSTION_RATE
    BASE_DEHYDRATION_RATE: float = BASE_DEHYDRATION_RATE
    NOTIFY_EXISTING_STATUS_CHANCE: float = NOTIFY_EXISTING_STATUS_CHANCE
    TICK_MINUTES: int = TICK_MINUTES
    LOG_DIRECTORY: Path = LOG_DIRECTORY
    DEBUG_LOG_FILE: str = DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL: str = DEBUG_LOG_LEVEL
    TELEMETRY_ENABLED: bool = TELEMETRY_ENABLED

    def with_updates(self, overrides: Dict[str, Any]) -> "SurvivalSettings":
        merged = asdict(self)
        merged.update(overrides)
        _validate_settings_dict(merged)
        return SurvivalSettings(**merged)


_ACTIVE_SETTINGS = SurvivalSettings()
_ENV_VARS: Dict[str, str] = {
    "MAX_CALORIES": "SURVIVAL_MAX_CALORIES",
    "MAX_HYDRATION": "SURVIVAL_MAX_HYDRATION",
    "MAX_ENERGY_MINUTES": "SURVIVAL_MAX_ENERGY_MINUTES",
    "BASE_EXHAUSTION_RATE": "SURVIVAL_BASE_EXHAUSTION_RATE",
    "BASE_DEHYDRATION_RATE": "SURVIVAL_BASE_DEHYDRATION_RATE",
    "NOTIFY_EXISTING_STATUS_CHANCE": "SURVIVAL_NOTIFY_CHANCE",
    "TICK_MINUTES": "SURVIVAL_TICK_MINUTES",
    "TELEMETRY_ENABLED": "SURVIVAL_TELEMETRY",
}


def _coerce(value: str, field: str) -> Any:
    if field in _PATH_FIELDS:
        return Path(value)
    if field in _STRING_FIELDS:
        return value
    if field in _BOOL_FIELDS:
        return value in {"1", "true", "True"}
    if field in _FLOAT_FIELDS:
        return float(value)
    return int(value)


def _collect_env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field, env_name in _ENV_VARS.items():
        raw = env.get(env_name)
        if raw is not None:
            overrides[field] = _coerce(raw, field)
    return overrides


def _normalize_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value in {"1", "true", "True", "TRUE"}
    if isinstance(value, (int, float)):
        return bool(value)
    raise ValueError("Invalid boolean value in config")


def _normalize_numeric(value: Any, caster: type[float | int]) -> float | int:
    if isinstance(value, (int, float)):
        return caster(value)
    if isinstance(value, str):
        return caster(float(value) if caster is float else int(float(value)))
    raise ValueError("Invalid numeric value in config")


def _normalize_config_value(field: str, value: Any) -> Any:
    if field in _PATH_FIELDS:
        if isinstance(value, Path):
            return value
        if isinstance(value, str):
            return Path(value)
        raise ValueError(f"Field {field} must be a path or string")
    if field in _STRING_FIELDS:
        if isinstance(value, str):
            return value
        raise ValueError(f"Field {field} must be a string")
    if field in _BOOL_FIELDS:
        return _normalize_bool(value)
    if field in _FLOAT_FIELDS:
        return float(_normalize_numeric(value, float))
    return int(_normalize_numeric(value, int))


_NUMERIC_BOUNDS: Dict[str, tuple[float, float]] = {
    "MAX_CALORIES": (100.0, 20000.0),
    "MAX_HYDRATION": (100.0, 20000.0),
    "MAX_ENERGY_MINUTES": (60.0, 4320.0),
    "BASE_EXHAUSTION_RATE": (0.0, 10.0),
    "BASE_DEHYDRATION_RATE": (0.0, 100.0),
    "NOTIFY_EXISTING_STATUS_CHANCE": (0.0, 1.0),
    "TICK_MINUTES": (1, 1440),
}

_CHOICE_FIELDS: Dict[str, set[str]] = {
    "DEBUG_LOG_LEVEL": {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
}


def _validate_settings_dict(values: Dict[str, Any]) -> None:
    for field, (lower, upper) in _NUMERIC_BOUNDS.items():
        current = values.get(field)
        if current is None:
            continue
        if not (lower <= current <= upper):
            raise ValueError(f"{field} must be between {lower} and {upper}, got {current}")
    for field, choices in _CHOICE_FIELDS.items():
        current = values.get(field)
        if current is None:
            continue
        if isinstance(current, str) and current.upper() in choices:
            values[field] = current.upper()
            continue
        raise ValueError(f"{field} must be one of {sorted(choices)} (got {current})")
    _validate_relationships(values)


def _validate_relationships(values: Mapping[str, Any]) -> None:
    tick = values.get("TICK_MINUTES")
    max_energy = values.get("MAX_ENERGY_MINUTES")
    if tick and max_energy and tick > max_energy:
        raise ValueError("TICK_MINUTES cannot exceed MAX_ENERGY_MINUTES")
    exhaustion = values.get("BASE_EXHAUSTION_RATE")
    if exhaustion is not None and max_energy and exhaustion * 60 > max_energy:
        raise ValueError("BASE_EXHAUSTION_RATE drains MAX_ENERGY_MINUTES in under an hour")


def _load_config_overrides(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ValueError(f"Invalid YAML in config file {path}") from error
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must define a mapping")
    valid_fields = set(SurvivalSettings.__dataclass_fields__.keys())
    overrides: Dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).upper()
        if key not in valid_fields:
            raise ValueError(f"Unknown config field: {raw_key}")
        overrides[key] = _normalize_config_value(key, value)
    return overrides


def _resolve_config_path(cli_value: str | None, env: Mapping[str, str]) -> Path | None:
    candidate_strings = [cli_value, env.get(CONFIG_ENV_VAR)]
    for candidate in candidate_strings:
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the survival simulation with runtime overrides")
    parser.add_argument("--config", type=str, help="Path to a YAML config file with runtime settings")
    parser.add_argument("--max-calories", type=float, help="Calorie store capacity")
    parser.add_argument("--max-hydration", type=float, help="Hydration capacity in millilitres")
    parser.add_argument("--max-energy-minutes", type=float, help="Minutes of wakefulness a full rest provides")
    parser.add_argument("--base-exhaustion-rate", type=float, help="Energy minutes lost per waking minute")
    parser.add_argument("--base-dehydration-rate", type=float, help="Millilitres of water lost per minute")
    parser.add_argument("--notify-chance", type=float, help="Chance to repeat an ongoing status message")
    parser.add_argument("--tick-minutes", type=int, help="Simulated minutes per processor call")
    parser.add_argument("--telemetry-enabled", type=int, help="Enable telemetry (1 or 0)")
    parser.add_argument("--log-level", type=str, help="Debug log level")
    # Scenario arguments consumed by main.py; they are not settings.
    parser.add_argument("--hours", type=float, default=6.0, help="Scenario length in hours")
    parser.add_argument("--environment-temp", type=float, default=32.0, help="Ambient temperature in °F")
    parser.add_argument("--insulation", type=float, default=0.0, help="Equipment insulation (0-0.95)")
    parser.add_argument("--activity", type=float, default=1.0, help="Activity level multiplier")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    return parser


def parse_scenario_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    return _build_arg_parser().parse_args(args=args)


def load_runtime_settings(args: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> SurvivalSettings:
    env_mapping = env or os.environ
    parser = _build_arg_parser()
    parsed = parser.parse_args(args=args)
    overrides: Dict[str, Any] = {}
    config_path = _resolve_config_path(parsed.config, env_mapping)
    if config_path is not None:
        overrides.update(_load_config_overrides(config_path))
    overrides.update(_collect_env_overrides(env_mapping))
    cli_mapping = {
        "MAX_CALORIES": parsed.max_calories,
        "MAX_HYDRATION": parsed.max_hydration,
        "MAX_ENERGY_MINUTES": parsed.max_energy_minutes,
        "BASE_EXHAUSTION_RATE": parsed.base_exhaustion_rate,
        "BASE_DEHYDRATION_RATE": parsed.base_dehydration_rate,
        "NOTIFY_EXISTING_STATUS_CHANCE": parsed.notify_chance,
        "TICK_MINUTES": parsed.tick_minutes,
        "TELEMETRY_ENABLED": None if parsed.telemetry_enabled is None else bool(parsed.telemetry_enabled),
        "DEBUG_LOG_LEVEL": parsed.log_level,
    }
    overrides.update({k: v for k, v in cli_mapping.items() if v is not None})
    return _ACTIVE_SETTINGS.with_updates(overrides)


def apply_runtime_settings(new_settings: SurvivalSettings) -> SurvivalSettings:
    global _ACTIVE_SETTINGS
    global MAX_CALORIES, MAX_HYDRATION, MAX_ENERGY_MINUTES
    global BASE_EXHAUSTION_RATE, BASE_DEHYDRATION_RATE
    global NOTIFY_EXISTING_STATUS_CHANCE, TICK_MINUTES
    global LOG_DIRECTORY, DEBUG_LOG_FILE, DEBUG_LOG_LEVEL, TELEMETRY_ENABLED

    _ACTIVE_SETTINGS = new_settings
    MAX_CALORIES = new_settings.MAX_CALORIES
    MAX_HYDRATION = new_settings.MAX_HYDRATION
    MAX_ENERGY_MINUTES = new_settings.MAX_ENERGY_MINUTES
    BASE_EXHAUSTION_RATE = new_settings.BASE_EXHAUSTION_RATE
    BASE_DEHYDRATION_RATE = new_settings.BASE_DEHYDRATION_RATE
    NOTIFY_EXISTING_STATUS_CHANCE = new_settings.NOTIFY_EXISTING_STATUS_CHANCE
    TICK_MINUTES = new_settings.TICK_MINUTES
    LOG_DIRECTORY = new_settings.LOG_DIRECTORY
    DEBUG_LOG_FILE = new_settings.DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL = new_settings.DEBUG_LOG_LEVEL
    TELEMETRY_ENABLED = new_settings.TELEMETRY_ENABLED
    return _ACTIVE_SETTINGS


def current_settings() -> SurvivalSettings:
    return _ACTIVE_SETTINGS
