"""Tests for capacity aggregation."""

from __future__ import annotations

import pytest

from survival.body.body_part import BodyPart, Organ
from survival.body.capacities import CAPACITY_NAMES, apply_capacity_modifiers, get_capacities, get_capacity


def _part(name: str, health: float, max_health: float = 10.0, **capacities: float) -> BodyPart:
    part = BodyPart(name, max_health, capacities=capacities or None)
    part.health = health
    return part


def test_moving_is_bottlenecked_by_worst_leg():
    parts = [_part("Left Leg", 5), _part("Right Leg", 10), _part("Spine", 10), _part("Pelvis", 10)]
    assert get_capacity(parts, "Moving") == pytest.approx(0.5)


def test_sight_averages_both_eyes():
    parts = [_part("Left Eye", 5), _part("Right Eye", 10)]
    assert get_capacity(parts, "Sight") == pytest.approx(0.75)


def test_single_organ_capacity_uses_exact_name():
    parts = [_part("Brain", 4), _part("Brainstem", 10)]
    assert get_capacity(parts, "Consciousness") == pytest.approx(0.4)


def test_word_prefix_matching_ignores_embedded_fragments():
    heart = Organ("Heart", 10)
    heart.health = 0
    parts = [heart, _part("Left Ear", 10), _part("Right Ear", 10)]
    assert get_capacity(parts, "Hearing") == pytest.approx(1.0)


def test_quadruped_leg_names_match():
    parts = [_part("Front Left Leg", 10), _part("Rear Right Leg", 2)]
    assert get_capacity(parts, "Moving") == pytest.approx(0.2)


def test_fractional_weight_scales_term():
    parts = [_part("Left Leg", 10, Moving=0.5)]
    assert get_capacity(parts, "Moving") == pytest.approx(0.5)


def test_unknown_capacity_defaults_to_one():
    assert get_capacity([_part("Left Leg", 0)], "Telepathy") == 1.0


def test_capacity_without_parts_defaults_to_one():
    assert get_capacity([_part("Left Leg", 0)], "Sight") == 1.0
    assert get_capacity([], "Moving") == 1.0


def test_destroyed_part_counts_as_zero():
    parts = [_part("Left Leg", 0), _part("Right Leg", 10)]
    assert get_capacity(parts, "Moving") == 0.0


def test_get_capacities_reports_every_capacity():
    capacities = get_capacities([_part("Left Eye", 5)])
    assert set(capacities) == set(CAPACITY_NAMES)
    assert capacities["Sight"] == pytest.approx(0.5)
    assert capacities["Moving"] == 1.0


class TestCapacityModifiers:
    def test_modifiers_are_added_and_clamped(self):
        combined = apply_capacity_modifiers({"Moving": 0.5, "Sight": 1.0}, {"Moving": -0.8, "Sight": 0.3})
        assert combined["Moving"] == 0.0
        assert combined["Sight"] == 1.0

    def test_missing_base_starts_from_one(self):
        combined = apply_capacity_modifiers({}, {"Manipulation": -0.25})
        assert combined["Manipulation"] == pytest.approx(0.75)

    def test_base_is_not_mutated(self):
        base = {"Moving": 1.0}
        apply_capacity_modifiers(base, {"Moving": -0.5})
        assert base == {"Moving": 1.0}
