"""Hierarchical body parts that absorb, propagate and heal damage.

A ``BodyPart`` owns its children. The parent link is a ``weakref`` so a
subtree never keeps its owner alive. Damage and healing descend the tree by a
coin flip: either the part itself takes the amount or it is forwarded to one
uniformly chosen child. The coin and the child choice come from an injectable
random source so callers can force either branch.

Destroying a vital part destroys its parent as well, walking up through any
chain of vital ancestors. A destroyed part leaves its parent's ``children``
list (so it can no longer be hit or healed) but is kept in
``destroyed_parts`` so capacity aggregation still counts it at zero health.
"""

from __future__ import annotations

import random
import weakref
from typing import Dict, Iterator, List, Mapping, Optional, Protocol


class RandomSource(Protocol):
    """Minimal random interface used for damage/heal descent.

    The :mod:`random` module and :class:`random.Random` both satisfy it.
    """

    def random(self) -> float:
        ...

    def randrange(self, stop: int) -> int:
        ...


DESCEND_CHANCE = 0.5
INTERNAL_DAMAGE_FACTOR = 0.5


class BodyPart:
    """A node in an actor's body tree."""

    def __init__(
        self,
        name: str,
        max_health: float,
        is_vital: bool = False,
        capacities: Optional[Mapping[str, float]] = None,
    ) -> None:
        if max_health <= 0:
            raise ValueError(f"Body part '{name}' needs a positive max_health, got {max_health}")
        self.name = name
        self.max_health = float(max_health)
        self.health = float(max_health)
        self.is_vital = is_vital
        self.capacities: Dict[str, float] = dict(capacities or {})
        self.children: List[BodyPart] = []
        self.destroyed_parts: List[BodyPart] = []
        self._parent: Optional[weakref.ReferenceType[BodyPart]] = None
        self._destroyed = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.health:.1f}/{self.max_health:.1f})"

    # ------------------------------------------------------------------
    # Structure

    @property
    def parent(self) -> Optional["BodyPart"]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_destroyed(self) -> bool:
        return self.health <= 0

    @property
    def is_damaged(self) -> bool:
        return self.health < self.max_health

    @property
    def condition(self) -> float:
        return self.health / self.max_health

    @property
    def accepts_environmental(self) -> bool:
        """Whether cold/heat damage can land on this part directly."""
        return True

    def add_part(self, part: "BodyPart") -> "BodyPart":
        if part.parent is not None:
            raise ValueError(f"Body part '{part.name}' already belongs to '{part.parent.name}'")
        part._parent = weakref.ref(self)
        self.children.append(part)
        return part

    def add_capacity(self, capacity: str, weight: float) -> None:
        self.capacities[capacity] = weight

    def capacity_term(self, capacity: str) -> float:
        """Return ``weight * health / max_health`` for ``capacity`` (weight defaults to 1.0)."""
        return self.capacities.get(capacity, 1.0) * self.condition

    @property
    def qualified_name(self) -> str:
        """Root-to-leaf display name, e.g. ``"Body's Torso's Heart"``."""
        names = [self.name]
        parent = self.parent
        while parent is not None:
            names.append(parent.name)
            parent = parent.parent
        return "'s ".join(reversed(names))

    def iter_parts(self, include_destroyed: bool = True) -> Iterator["BodyPart"]:
        """Yield this part and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_parts(include_destroyed)
        if include_destroyed:
            for lost in self.destroyed_parts:
                yield from lost.iter_parts(include_destroyed)

    def find_part(self, name: str) -> Optional["BodyPart"]:
        """Find a live part named ``name`` in this subtree."""
        for part in self.iter_parts(include_destroyed=False):
            if part.name == name:
                return part
        return None

    # ------------------------------------------------------------------
    # Damage

    def damage(
        self,
        amount: float,
        rng: Optional[RandomSource] = None,
        messages: Optional[List[str]] = None,
        *,
        penetrating: bool = True,
        environmental: bool = False,
    ) -> None:
        """Apply ``amount`` damage here or to a randomly chosen descendant."""
        if amount <= 0 or self.is_destroyed:
            return
        rng = rng or random
        if self.children and rng.random() < DESCEND_CHANCE:
            child = self.children[rng.randrange(len(self.children))]
            if not environmental or child.accepts_environmental:
                child.damage(amount, rng, messages, penetrating=penetrating, environmental=environmental)
                return
        self.apply_damage(amount, messages, penetrating=penetrating)

    def apply_damage(self, amount: float, messages: Optional[List[str]] = None, *, penetrating: bool = True) -> float:
        """Subtract damage from this part only. Returns the damage actually taken."""
        if amount <= 0 or self.is_destroyed:
            return 0.0
        taken = min(self._absorb(amount, penetrating), self.health)
        self.health = max(0.0, self.health - taken)
        _emit(messages, f"{self.qualified_name} has been damaged for {taken:.1f}!")
        if self.is_destroyed:
            self.destroy(messages)
        return taken

    def _absorb(self, amount: float, penetrating: bool) -> float:
        return amount

    def destroy(self, messages: Optional[List[str]] = None) -> None:
        """Zero this part, cascade to a vital parent and detach from it."""
        if self._destroyed:
            return
        self._destroyed = True
        self.health = 0.0
        _emit(messages, f"{self.qualified_name} has been destroyed!")
        parent = self.parent
        if parent is None:
            return
        if self.is_vital:
            parent.destroy(messages)
        if self in parent.children:
            parent.children.remove(self)
            parent.destroyed_parts.append(self)

    # ------------------------------------------------------------------
    # Healing

    def heal(
        self,
        amount: float,
        rng: Optional[RandomSource] = None,
        messages: Optional[List[str]] = None,
    ) -> None:
        """Heal this part or a randomly chosen descendant, clamped at ``max_health``."""
        if amount <= 0 or self.is_destroyed:
            return
        rng = rng or random
        if self.children and rng.random() < DESCEND_CHANCE:
            child = self.children[rng.randrange(len(self.children))]
            child.heal(amount, rng, messages)
            return
        self.apply_healing(amount, messages)

    def apply_healing(self, amount: float, messages: Optional[List[str]] = None) -> float:
        if amount <= 0 or self.is_destroyed:
            return 0.0
        before = self.health
        self.health = min(self.max_health, self.health + amount)
        healed = self.health - before
        if healed > 0:
            _emit(messages, f"{self.qualified_name} has been healed for {healed:.1f}!")
        return healed


class Organ(BodyPart):
    """A body part with an external/internal flag.

    Internal organs only take half of a non-penetrating hit and cannot be the
    direct target of environmental damage.
    """

    def __init__(
        self,
        name: str,
        max_health: float,
        is_vital: bool = False,
        capacities: Optional[Mapping[str, float]] = None,
        is_external: bool = False,
    ) -> None:
        super().__init__(name, max_health, is_vital, capacities)
        self.is_external = is_external

    @property
    def accepts_environmental(self) -> bool:
        return self.is_external

    def _absorb(self, amount: float, penetrating: bool) -> float:
        if not self.is_external and not penetrating:
            return amount * INTERNAL_DAMAGE_FACTOR
        return amount


def _emit(messages: Optional[List[str]], message: str) -> None:
    if messages is not None:
        messages.append(message)


__all__ = [
    "BodyPart",
    "Organ",
    "RandomSource",
]
