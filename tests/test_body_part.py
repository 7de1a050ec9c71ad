"""Tests for body part damage descent, destruction and healing."""

from __future__ import annotations

import gc

import pytest

from survival.body.body_part import BodyPart, Organ


def _limb() -> BodyPart:
    arm = BodyPart("Arm", 40)
    arm.add_part(BodyPart("Hand", 20))
    arm.add_part(BodyPart("Humerus", 20))
    return arm


def _vital_chain(depth: int) -> list[BodyPart]:
    chain = [BodyPart("Part 0", 10, is_vital=True)]
    for level in range(1, depth):
        chain.append(chain[-1].add_part(BodyPart(f"Part {level}", 10, is_vital=True)))
    return chain


class TestBodyPartStructure:
    def test_non_positive_max_health_rejected(self):
        with pytest.raises(ValueError):
            BodyPart("Ghost", 0)

    def test_add_part_links_parent(self):
        arm = _limb()
        hand = arm.children[0]
        assert hand.parent is arm
        assert arm.parent is None

    def test_part_cannot_have_two_parents(self):
        arm = _limb()
        other = BodyPart("Other Arm", 40)
        with pytest.raises(ValueError, match="already belongs"):
            other.add_part(arm.children[0])

    def test_qualified_name_walks_to_root(self):
        body = BodyPart("Body", 100)
        torso = body.add_part(BodyPart("Torso", 50))
        heart = torso.add_part(Organ("Heart", 25))
        assert heart.qualified_name == "Body's Torso's Heart"

    def test_parent_link_does_not_keep_parent_alive(self):
        body = BodyPart("Body", 100)
        torso = body.add_part(BodyPart("Torso", 50))
        del body
        gc.collect()
        assert torso.parent is None
        assert torso.qualified_name == "Torso"

    def test_capacity_term_defaults_to_full_weight(self):
        leg = BodyPart("Left Leg", 10)
        leg.health = 5
        assert leg.capacity_term("Moving") == pytest.approx(0.5)
        leg.add_capacity("Moving", 0.5)
        assert leg.capacity_term("Moving") == pytest.approx(0.25)


class TestBodyPartDamage:
    def test_leaf_takes_exact_damage(self, stay_rng):
        hand = BodyPart("Hand", 20)
        hand.damage(7.5, stay_rng)
        assert hand.health == pytest.approx(12.5)

    def test_forced_self_branch_keeps_children_intact(self, stay_rng):
        arm = _limb()
        arm.damage(10, stay_rng)
        assert arm.health == pytest.approx(30)
        assert all(child.health == child.max_health for child in arm.children)

    def test_forced_descend_hits_child_only(self, descend_rng):
        arm = _limb()
        arm.damage(5, descend_rng)
        assert arm.health == pytest.approx(40)
        assert arm.children[0].health == pytest.approx(15)
        assert arm.children[1].health == pytest.approx(20)

    def test_random_index_selects_child(self, make_rng):
        arm = _limb()
        arm.damage(5, make_rng(0.0, 1))
        assert arm.children[0].health == pytest.approx(20)
        assert arm.children[1].health == pytest.approx(15)

    def test_damage_message_uses_qualified_name(self, stay_rng):
        arm = _limb()
        messages: list[str] = []
        arm.children[0].damage(3, stay_rng, messages)
        assert messages == ["Arm's Hand has been damaged for 3.0!"]

    def test_zero_damage_is_ignored(self, stay_rng):
        hand = BodyPart("Hand", 20)
        messages: list[str] = []
        hand.damage(0, stay_rng, messages)
        assert hand.health == 20
        assert messages == []

    def test_overkill_is_capped_at_remaining_health(self):
        hand = BodyPart("Hand", 20)
        assert hand.apply_damage(50) == pytest.approx(20)
        assert hand.health == 0


class TestBodyPartDestruction:
    def test_destroyed_part_moves_to_destroyed_parts(self, stay_rng):
        arm = _limb()
        hand = arm.children[0]
        messages: list[str] = []
        hand.damage(20, stay_rng, messages)
        assert hand.is_destroyed
        assert hand not in arm.children
        assert hand in arm.destroyed_parts
        assert "Arm's Hand has been destroyed!" in messages
        assert not arm.is_destroyed

    def test_destroyed_part_is_still_iterated(self):
        arm = _limb()
        arm.children[0].apply_damage(20)
        names = [part.name for part in arm.iter_parts()]
        live = [part.name for part in arm.iter_parts(include_destroyed=False)]
        assert "Hand" in names
        assert "Hand" not in live
        assert arm.find_part("Hand") is None

    def test_destroyed_part_ignores_damage_and_healing(self, stay_rng):
        hand = BodyPart("Hand", 20)
        hand.apply_damage(20)
        messages: list[str] = []
        hand.damage(5, stay_rng, messages)
        hand.heal(5, stay_rng, messages)
        assert hand.health == 0
        assert messages == []

    @pytest.mark.parametrize("depth", [1, 2, 3, 4, 5])
    def test_vital_destruction_cascades_to_root(self, depth):
        chain = _vital_chain(depth)
        leaf = chain[-1]
        leaf.apply_damage(leaf.max_health)
        assert all(part.health == 0 for part in chain)
        assert all(part.is_destroyed for part in chain)

    def test_non_vital_destruction_stops_at_parent(self):
        root = BodyPart("Body", 100, is_vital=True)
        leg = root.add_part(BodyPart("Leg", 30))
        leg.apply_damage(30)
        assert leg.is_destroyed
        assert root.health == 100

    def test_vital_chain_records_each_destruction_once(self):
        chain = _vital_chain(3)
        messages: list[str] = []
        chain[-1].apply_damage(10, messages)
        destroyed = [message for message in messages if message.endswith("destroyed!")]
        assert len(destroyed) == 3


class TestBodyPartHealing:
    def test_heal_is_clamped_at_max(self, stay_rng):
        hand = BodyPart("Hand", 20)
        hand.apply_damage(5)
        hand.heal(50, stay_rng)
        assert hand.health == 20

    def test_heal_descends_like_damage(self, descend_rng):
        arm = _limb()
        arm.children[0].apply_damage(10)
        messages: list[str] = []
        arm.heal(4, descend_rng, messages)
        assert arm.children[0].health == pytest.approx(14)
        assert messages == ["Arm's Hand has been healed for 4.0!"]

    def test_heal_on_full_part_reports_nothing(self):
        hand = BodyPart("Hand", 20)
        messages: list[str] = []
        assert hand.apply_healing(5, messages) == 0
        assert messages == []


class TestOrgan:
    def test_internal_organ_halves_blunt_damage(self):
        heart = Organ("Heart", 25, is_vital=True)
        heart.apply_damage(10, penetrating=False)
        assert heart.health == pytest.approx(20)

    def test_internal_organ_takes_full_penetrating_damage(self):
        heart = Organ("Heart", 25, is_vital=True)
        heart.apply_damage(10, penetrating=True)
        assert heart.health == pytest.approx(15)

    def test_external_organ_takes_full_blunt_damage(self):
        eye = Organ("Left Eye", 4, is_external=True)
        eye.apply_damage(2, penetrating=False)
        assert eye.health == pytest.approx(2)

    def test_environmental_damage_skips_internal_organ(self, descend_rng):
        torso = BodyPart("Torso", 50)
        heart = torso.add_part(Organ("Heart", 25))
        torso.damage(5, descend_rng, environmental=True)
        assert heart.health == 25
        assert torso.health == pytest.approx(45)

    def test_environmental_damage_reaches_external_organ(self, descend_rng):
        head = BodyPart("Head", 25)
        ear = head.add_part(Organ("Left Ear", 3, is_external=True))
        head.damage(1, descend_rng, environmental=True)
        assert ear.health == pytest.approx(2)
        assert head.health == 25
