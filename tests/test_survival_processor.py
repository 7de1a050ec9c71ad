"""Tests for the waking survival processor."""

from __future__ import annotations

import pytest

from survival.effects import factory as effect_factory
from survival.effects.effect import Effect, EffectTemplate
from survival.physiology import processor
from survival.physiology.data import SurvivalData, SurvivalStatsDelta
from survival.physiology.temperature import thermal_exchange


def _kinds(result):
    return [effect.kind for effect in result.effects]


class TestBaseNeeds:
    def test_zero_minutes_is_identity(self, stay_rng):
        data = SurvivalData(environmental_temp=32.0)
        result = processor.process(data, 0, [], stay_rng)
        assert result.data == data
        assert result.data is not data
        assert result.effects == []
        assert result.messages == []
        assert result.stats_delta.is_zero

    def test_negative_minutes_is_identity(self, stay_rng):
        data = SurvivalData()
        assert processor.process(data, -5, [], stay_rng).data == data

    def test_input_is_not_mutated(self, stay_rng):
        data = SurvivalData(environmental_temp=32.0)
        processor.process(data, 60, [], stay_rng)
        assert data == SurvivalData(environmental_temp=32.0)

    def test_stores_decrease_monotonically(self, stay_rng):
        data = SurvivalData()
        previous = data
        for minutes in (1, 10, 60, 240):
            current = processor.process(data, minutes, [], stay_rng).data
            assert current.calories <= previous.calories
            assert current.hydration <= previous.hydration
            assert current.energy <= previous.energy
            previous = current

    def test_linear_decay_rates(self, stay_rng):
        result = processor.process(SurvivalData(), 60, [], stay_rng)
        assert result.data.energy == pytest.approx(800.0 - 60.0)
        assert result.data.hydration == pytest.approx(3000.0 - 4000.0 / 24.0)

    def test_metabolism_formula(self):
        assert processor.get_current_metabolism(SurvivalData()) == pytest.approx(925.4125)
        assert processor.get_current_metabolism(SurvivalData(), 0.5) == pytest.approx(925.4125 / 2)
        assert processor.get_current_metabolism(SurvivalData(health_percent=0.0)) == pytest.approx(925.4125 * 0.7)

    def test_calories_burned_per_hour(self, stay_rng):
        result = processor.process(SurvivalData(), 60, [], stay_rng)
        assert result.data.calories == pytest.approx(1500.0 - 925.4125 / 24.0)
        assert result.stats_delta.calories == pytest.approx(-925.4125 / 24.0)

    def test_calorie_deficit_reported(self, stay_rng):
        result = processor.process(SurvivalData(calories=10.0), 60, [], stay_rng)
        assert result.data.calories == 0.0
        assert result.calorie_deficit == pytest.approx(925.4125 / 24.0 - 10.0)
        assert result.is_starving

    def test_no_deficit_when_fed(self, stay_rng):
        assert not processor.process(SurvivalData(), 60, [], stay_rng).is_starving

    def test_invalid_data_rejected(self):
        with pytest.raises(ValueError):
            SurvivalData(calories=-1.0)
        with pytest.raises(ValueError):
            SurvivalData(fat_weight=60.0, muscle_weight=30.0)


class TestColdExposure:
    def test_first_hour_at_freezing_cools_without_hypothermia(self, stay_rng):
        data = SurvivalData(calories=1000.0, hydration=4000.0, environmental_temp=32.0)
        result = processor.process(data, 60, [], stay_rng)
        assert result.data.temperature < 98.6
        assert "Hypothermia" not in _kinds(result)

    def test_hypothermia_appears_below_threshold(self, stay_rng):
        data = SurvivalData(calories=1000.0, hydration=4000.0, environmental_temp=32.0)
        result = processor.process(data, 60, [], stay_rng)
        for _ in range(100):
            if result.data.temperature < 95.0:
                break
            result = processor.process(result.data, 60, [], stay_rng)
        temperature = result.data.temperature
        assert temperature < 95.0
        hypothermia = [effect for effect in result.effects if effect.kind == "Hypothermia"]
        assert len(hypothermia) == 1
        expected = min(1.0, max(0.01, (95.0 - temperature) / 10.0))
        assert hypothermia[0].severity == pytest.approx(expected)

    def test_one_long_call_matches_two_short_calls(self, stay_rng):
        data = SurvivalData(calories=1000.0, hydration=4000.0, environmental_temp=32.0)
        single = processor.process(data, 60, [], stay_rng).data
        half = processor.process(data, 30, [], stay_rng).data
        double = processor.process(half, 30, [], stay_rng).data
        assert double.calories == pytest.approx(single.calories, abs=1e-6)
        assert double.hydration == pytest.approx(single.hydration, abs=1e-9)
        assert double.energy == pytest.approx(single.energy, abs=1e-9)
        # Heat exchange runs once per call, so two calls differ by at most one exchange step.
        assert abs(double.temperature - single.temperature) <= abs(thermal_exchange(data)) + 1e-6

    def test_shivering_without_hypothermia(self, stay_rng):
        result = processor.process(SurvivalData(temperature=96.5), 1, [], stay_rng)
        temperature = result.data.temperature
        assert 95.0 < temperature < 97.0
        assert _kinds(result) == ["Shivering"]
        assert result.effects[0].severity == pytest.approx((97.0 - temperature) / 5.0)

    def test_severe_cold_frostbites_extremities_and_damages_organs(self, stay_rng):
        data = SurvivalData(temperature=85.0, environmental_temp=32.0)
        result = processor.process(data, 60, [], stay_rng)
        frostbite = [effect for effect in result.effects if effect.kind == "Frostbite"]
        assert [effect.target_part for effect in frostbite] == list(data.extremities)
        expected = (89.6 - result.data.temperature) / 10.0
        assert all(effect.severity == pytest.approx(expected) for effect in frostbite)
        assert len(result.damage_events) == 1
        damage = result.damage_events[0]
        assert damage.source == "Hypothermia"
        assert damage.target_part == "Heart"
        assert damage.amount > 0.15
        assert any("dangerously low" in message for message in result.messages)

    def test_no_frostbite_without_extremities(self, stay_rng):
        data = SurvivalData(temperature=85.0, environmental_temp=32.0, extremities=())
        result = processor.process(data, 1, [], stay_rng)
        assert "Frostbite" not in _kinds(result)
        assert "Hypothermia" in _kinds(result)


class TestHeatExposure:
    def test_overheating_generates_hyperthermia_and_sweating(self, stay_rng):
        result = processor.process(SurvivalData(temperature=102.0, environmental_temp=98.0), 1, [], stay_rng)
        temperature = result.data.temperature
        by_kind = {effect.kind: effect for effect in result.effects}
        assert set(by_kind) == {"Hyperthermia", "Sweating"}
        assert by_kind["Hyperthermia"].severity == pytest.approx((temperature - 100.0) / 10.0)
        assert by_kind["Sweating"].severity == pytest.approx((temperature - 99.0) / 4.0)

    def test_metabolism_warms_the_body_in_neutral_air(self, stay_rng):
        data = SurvivalData(temperature=98.6, environmental_temp=98.6 - 8.4)
        assert thermal_exchange(data) == 0.0
        result = processor.process(data, 60, [], stay_rng)
        assert result.data.temperature == pytest.approx(98.6 + 925.4125 / 24.0 / 24000.0)
        assert result.effects == []

    def test_exchange_uses_starting_temperature(self, stay_rng):
        data = SurvivalData(environmental_temp=32.0)
        result = processor.process(data, 60, [], stay_rng)
        heat = 925.4125 / 24.0 / 24000.0
        assert result.data.temperature == pytest.approx(98.6 + thermal_exchange(data) + heat)

    def test_mild_warmth_only_sweats(self, stay_rng):
        result = processor.process(SurvivalData(temperature=99.6, environmental_temp=98.0), 1, [], stay_rng)
        assert _kinds(result) == ["Sweating"]


class TestTemperatureMessages:
    def test_entering_cold_stage_reports_it(self, stay_rng):
        result = processor.process(SurvivalData(temperature=95.1, environmental_temp=0.0), 1, [], stay_rng)
        assert result.data.temperature < 95.0
        assert "You feel cold." in result.messages

    def test_staying_cold_repeats_on_successful_roll(self, descend_rng):
        result = processor.process(SurvivalData(temperature=93.0, environmental_temp=0.0), 1, [], descend_rng)
        assert "You are still cold." in result.messages

    def test_staying_cold_is_quiet_on_failed_roll(self, stay_rng):
        result = processor.process(SurvivalData(temperature=93.0, environmental_temp=0.0), 1, [], stay_rng)
        assert "You are still cold." not in result.messages
        assert "You feel cold." not in result.messages


class TestEffectsAndDamage:
    def test_active_effect_deltas_scale_with_minutes(self, stay_rng):
        data = SurvivalData(hydration=3000.0)
        base = processor.process(data, 10, [], stay_rng).data
        sweating = processor.process(data, 10, [effect_factory.sweating(0.5)], stay_rng).data
        assert sweating.hydration == pytest.approx(base.hydration - 1000.0 / 60.0 * 0.5 * 10)

    def test_inactive_effects_are_ignored(self, stay_rng):
        data = SurvivalData()
        effect = effect_factory.sweating(1.0)
        effect.is_active = False
        assert processor.process(data, 10, [effect], stay_rng).data == processor.process(data, 10, [], stay_rng).data

    def test_stores_are_clamped_to_capacity(self, stay_rng):
        feast = Effect(EffectTemplate(kind="Feast", survival_stats=SurvivalStatsDelta(calories=100.0, energy=50.0)))
        data = SurvivalData(calories=1999.0, energy=950.0)
        result = processor.process(data, 10, [feast], stay_rng)
        assert result.data.calories == 2000.0
        assert result.data.energy == 960.0

    def test_dehydration_damages_an_organ(self, stay_rng):
        result = processor.process(SurvivalData(hydration=10.0), 60, [effect_factory.sweating(1.0)], stay_rng)
        assert result.data.hydration == 0.0
        assert len(result.damage_events) == 1
        damage = result.damage_events[0]
        assert damage.source == "Dehydration"
        assert damage.target_part == "Brain"
        assert damage.amount == pytest.approx(0.2)
        assert "Your organs are failing from dehydration!" in result.messages

    def test_regeneration_when_well_fed_and_rested(self, stay_rng):
        data = SurvivalData(calories=2000.0, hydration=4000.0, energy=960.0, health_percent=0.5)
        result = processor.process(data, 60, [], stay_rng)
        assert len(result.healing_events) == 1
        healing = result.healing_events[0]
        nutrition = result.data.calories / 2000.0
        assert healing.amount == pytest.approx(0.1 * nutrition)
        assert healing.quality == pytest.approx(nutrition)

    def test_no_regeneration_when_tired(self, stay_rng):
        data = SurvivalData(calories=2000.0, hydration=4000.0, energy=100.0, health_percent=0.5)
        assert processor.process(data, 60, [], stay_rng).healing_events == []

    def test_no_regeneration_at_full_health(self, stay_rng):
        data = SurvivalData(calories=2000.0, hydration=4000.0, energy=960.0)
        assert processor.process(data, 60, [], stay_rng).healing_events == []


class TestWarnings:
    def test_player_gets_starvation_warning(self, descend_rng):
        data = SurvivalData(calories=5.0, hydration=4000.0, energy=900.0, is_player=True)
        result = processor.process(data, 1, [], descend_rng)
        assert "You are starving to death!" in result.messages
        assert "You're desperately hungry." not in result.messages

    def test_npc_gets_no_warnings(self, descend_rng):
        data = SurvivalData(calories=5.0, hydration=4000.0, energy=900.0, is_player=False)
        result = processor.process(data, 1, [], descend_rng)
        assert "You are starving to death!" not in result.messages

    def test_failed_roll_stays_quiet(self, stay_rng):
        data = SurvivalData(calories=5.0, hydration=5.0, energy=5.0, is_player=True)
        result = processor.process(data, 1, [], stay_rng)
        assert not any(message.startswith(("You are starving", "You are dying", "You're so")) for message in result.messages)
