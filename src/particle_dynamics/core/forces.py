# MIT License (see LICENSE)
"""
Force abstractions and the universal force generators.

A force comes in one of two shapes:

- TargetedForce: bound to specific particles when it is built and applied
  with ``apply()``. Springs and attractions (see two_body.py and
  interactions.py) are targeted forces; so is any custom force registered
  with ParticleSystem.add_custom_force().
- UniversalForce: not bound to anything; the caller applies it to one
  particle at a time with ``apply_to(particle)``. Gravity and Drag below are
  universal forces.

Both shapes share the on/off switch defined by Force. A force that is off
contributes nothing.

The container's own global gravity and drag go through the plain functions
apply_gravity() and apply_linear_drag(), which modify particle.force in place
during the force accumulation pass.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

from ..constants import DEFAULT_DRAG_COEFFICIENT, DEFAULT_GRAVITY
from ..types import Particle
from ..util import require, require_finite
from ..vector import Vector3


def apply_gravity(particle: Particle, g: Vector3) -> None:
    """
    Add the gravity vector g to the particle's force accumulator.

    The vector is added as a force, not scaled by mass, so heavier particles
    accelerate more slowly under the same g. Applied to free and fixed
    particles alike.
    """
    particle.force.add(g)


def apply_linear_drag(particle: Particle, c: float) -> None:
    """
    Apply linear drag F = -c * v.

    Has no effect if c == 0.
    """
    if c != 0.0:
        particle.force.add(Vector3.scaled(particle.velocity, -c))


class Force(ABC):
    """
    On/off bookkeeping shared by every force.

    Mutators return self so calls chain: ``spring.turn_off().turn_on()``.
    """

    def __init__(self, on: bool = True) -> None:
        self._on = bool(on)

    def turn_on(self, on: bool = True) -> "Force":
        self._on = bool(on)
        return self

    def turn_off(self) -> "Force":
        return self.turn_on(False)

    @property
    def is_on(self) -> bool:
        return self._on

    @property
    def is_off(self) -> bool:
        return not self._on


class TargetedForce(Force):
    """A force whose subject particles were fixed when it was built."""

    @abstractmethod
    def apply(self) -> "TargetedForce":
        """Add this force's contribution to its particles' accumulators."""


class UniversalForce(Force):
    """
    A force the caller applies to arbitrary particles.

    Subclasses implement force_on(); apply_to() handles the on/off switch.
    """

    @abstractmethod
    def force_on(self, particle: Particle) -> Vector3:
        """Return the force this generator exerts on particle (a new vector)."""

    def apply_to(self, particle: Particle) -> Particle:
        """Accumulate force_on(particle) into particle.force; returns particle."""
        require(particle, "particle")
        if self._on:
            particle.add_force(self.force_on(particle))
        return particle


class Gravity(UniversalForce):
    """
    Constant force added to each particle it is applied to.

    ``Gravity(g)`` points along y; ``Gravity(gx, gy, gz)`` sets all three.
    """

    def __init__(self, x: float | Vector3 = DEFAULT_GRAVITY, y: float | None = None, z: float | None = None) -> None:
        super().__init__()
        self._gravity = Vector3()
        self.set_gravity(x, y, z)

    @property
    def gravity(self) -> Vector3:
        """A copy of the gravity vector."""
        return self._gravity.copy()

    def set_gravity(self, x: float | Vector3, y: float | None = None, z: float | None = None) -> "Gravity":
        if isinstance(x, Vector3):
            self._gravity.set(x)
        elif y is None and z is None:
            self._gravity.set_components(0.0, require_finite(x, "g"), 0.0)
        else:
            self._gravity.set_components(
                require_finite(x, "x"),
                require_finite(0.0 if y is None else y, "y"),
                require_finite(0.0 if z is None else z, "z"),
            )
        return self

    def force_on(self, particle: Particle) -> Vector3:
        return self._gravity.copy()


class Drag(UniversalForce):
    """Linear drag: F = -coefficient * velocity."""

    def __init__(self, coefficient: float = DEFAULT_DRAG_COEFFICIENT) -> None:
        super().__init__()
        self._coefficient = require_finite(coefficient, "coefficient")

    @property
    def coefficient(self) -> float:
        return self._coefficient

    def set_coefficient(self, coefficient: float) -> "Drag":
        self._coefficient = require_finite(coefficient, "coefficient")
        return self

    def force_on(self, particle: Particle) -> Vector3:
        return Vector3.scaled(particle.velocity, -self._coefficient)
