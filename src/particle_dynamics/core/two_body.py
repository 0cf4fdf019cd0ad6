# MIT License (see LICENSE)
"""
Shared machinery for forces bound to exactly two particles.

A TwoBodyForce computes a ForcePair once per application and adds each half
to its end, skipping ends that are fixed. Most physical interactions are
equal and opposite (Newton's third law); ForcePair.equal_and_opposite()
stores a single vector and hands out its negation for the other end.
Forces that act unevenly can use ForcePair.specify_both().

Writing a custom two-body force only requires force_pair():

    class Tether(TwoBodyForce):
        def force_pair(self):
            pull = Vector3.difference(self.other_end.position, self.one_end.position)
            return ForcePair.equal_and_opposite(pull.scale(0.1))
"""
from __future__ import annotations
from abc import abstractmethod

from ..errors import MissingReferenceError
from ..types import Particle
from ..util import require
from ..vector import Vector3
from .forces import TargetedForce


class ForcePair:
    """
    The two vectors a two-body force contributes to its ends.

    Use the constructors equal_and_opposite() and specify_both(); the
    instance is read through force_on_one_end() and force_on_other_end().
    """

    __slots__ = ("_one", "_other")

    def __init__(self, force_on_one_end: Vector3, force_on_other_end: Vector3 | None) -> None:
        self._one = force_on_one_end
        self._other = force_on_other_end

    @classmethod
    def equal_and_opposite(cls, force_on_one_end: Vector3) -> "ForcePair":
        """Pair where the other end receives -force_on_one_end."""
        return cls(require(force_on_one_end, "force_on_one_end"), None)

    @classmethod
    def specify_both(cls, force_on_one_end: Vector3, force_on_other_end: Vector3) -> "ForcePair":
        """Pair with two independently specified vectors."""
        if force_on_one_end is None and force_on_other_end is None:
            raise MissingReferenceError("Both force vectors are None.")
        require(force_on_one_end, "force_on_one_end")
        require(force_on_other_end, "force_on_other_end")
        return cls(force_on_one_end, force_on_other_end)

    @property
    def is_equal_and_opposite(self) -> bool:
        return self._other is None

    def force_on_one_end(self) -> Vector3:
        return self._one

    def force_on_other_end(self) -> Vector3:
        """For an equal-and-opposite pair, a fresh negated copy on every call."""
        if self._other is None:
            return -self._one
        return self._other


class TwoBodyForce(TargetedForce):
    """
    A targeted force between ``one_end`` and ``other_end``.

    The end references are set once at construction and cannot be changed or
    cleared. They are shared with the owning ParticleSystem, which removes
    the force when either end is removed.
    """

    def __init__(self, one_end: Particle, other_end: Particle) -> None:
        if one_end is None and other_end is None:
            raise MissingReferenceError("Both end particles are None.")
        self._one_end = require(one_end, "one_end")
        self._other_end = require(other_end, "other_end")
        super().__init__()

    @property
    def one_end(self) -> Particle:
        return self._one_end

    @property
    def other_end(self) -> Particle:
        return self._other_end

    def references(self, particle: Particle) -> bool:
        """True if particle is one of the two ends."""
        return particle is self._one_end or particle is self._other_end

    @abstractmethod
    def force_pair(self) -> ForcePair:
        """Compute the forces on the two ends from their current state."""

    def apply(self) -> "TwoBodyForce":
        """
        Add the force pair to the free ends.

        No-op if the force is off or both ends are fixed. The pair is
        computed once per call.
        """
        one, other = self._one_end, self._other_end
        if self.is_on and (one.is_free or other.is_free):
            pair = self.force_pair()
            if one.is_free:
                one.add_force(pair.force_on_one_end())
            if other.is_free:
                other.add_force(pair.force_on_other_end())
        return self
