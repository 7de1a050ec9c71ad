"""Tests for sleep processing."""

from __future__ import annotations

import pytest

from survival.config import settings
from survival.physiology import processor
from survival.physiology.data import SurvivalData


def test_sleep_restores_energy_up_to_capacity():
    result = processor.sleep(SurvivalData(energy=100.0), 480)
    assert result.data.energy == pytest.approx(settings.MAX_ENERGY_MINUTES)
    assert processor.WAKE_MESSAGE in result.messages


def test_partial_sleep_restores_at_double_rate():
    result = processor.sleep(SurvivalData(energy=100.0), 60)
    assert result.data.energy == pytest.approx(220.0)
    assert result.messages == []


def test_sleep_burns_fewer_calories_than_waking(stay_rng):
    data = SurvivalData()
    asleep = processor.sleep(data, 480).data
    awake = processor.process(data, 480, [], stay_rng).data
    assert asleep.calories > awake.calories
    assert data.calories - asleep.calories == pytest.approx(925.4125 * 0.5 / 3.0)


def test_sleep_slows_water_loss():
    result = processor.sleep(SurvivalData(hydration=4000.0), 480)
    assert result.data.hydration == pytest.approx(4000.0 - 4000.0 / 1440.0 * 0.7 * 480)


def test_sleep_never_creates_effects():
    data = SurvivalData(temperature=90.0, environmental_temp=0.0)
    result = processor.sleep(data, 480)
    assert result.effects == []
    assert result.damage_events == []


def test_already_rested_sleeper_gets_no_wake_message():
    result = processor.sleep(SurvivalData(energy=960.0), 30)
    assert result.messages == []


def test_zero_minutes_of_sleep_is_identity():
    data = SurvivalData(energy=100.0)
    result = processor.sleep(data, 0)
    assert result.data == data
    assert result.stats_delta.is_zero


def test_sleep_reports_calorie_deficit():
    result = processor.sleep(SurvivalData(calories=0.0), 60)
    assert result.is_starving
    assert result.data.calories == 0.0


def test_sleep_leaves_temperature_alone():
    data = SurvivalData(temperature=97.0, environmental_temp=20.0)
    result = processor.sleep(data, 480)
    assert result.data.temperature == 97.0
    assert result.stats_delta.temperature == 0.0
