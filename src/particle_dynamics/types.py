# MIT License (see LICENSE)
"""
Core type definitions for the particle simulation.

Defines Particle, the point mass every force and integrator operates on.
Equations of motion for a free particle:
  dx/dt = v
  dv/dt = F/m
A fixed particle ignores forces and never moves.
"""
from __future__ import annotations
from typing import Sequence

from .constants import DEFAULT_MASS
from .util import require, require_positive
from .vector import Vector3


class Particle:
    """
    A point mass with position, velocity and a force accumulator.

    The three vectors are owned by the particle. Assigning to ``position``
    or ``velocity`` copies the components into the owned vector, so a
    reference obtained earlier stays valid.

    Attributes:
        age: Simulated time this particle has been advanced by the
             Runge-Kutta integrators.
        slow_steps: Consecutive steps the settling integrator has seen this
                    particle below its speed threshold.
        dead: Free-form liveness flag for host applications; cleared by reset().
        id: Identifier assigned by ParticleSystem.add_particle() (-1 if unregistered).
    """

    def __init__(
        self,
        mass: float = DEFAULT_MASS,
        position: Vector3 | Sequence[float] = (0.0, 0.0, 0.0),
        velocity: Vector3 | Sequence[float] = (0.0, 0.0, 0.0),
        fixed: bool = False,
    ) -> None:
        self._mass = require_positive(mass, "mass")
        self._position = Vector3.coerce(position)
        self._velocity = Vector3.coerce(velocity)
        self._force = Vector3()
        self._fixed = False
        self.age = 0.0
        self.slow_steps = 0
        self.dead = False
        self.id = -1
        self.fixed = fixed

    # -- kinematic state -------------------------------------------------

    @property
    def position(self) -> Vector3:
        return self._position

    @position.setter
    def position(self, value: Vector3 | Sequence[float]) -> None:
        self._position.set(Vector3.coerce(value))

    @property
    def velocity(self) -> Vector3:
        return self._velocity

    @velocity.setter
    def velocity(self, value: Vector3 | Sequence[float]) -> None:
        self._velocity.set(Vector3.coerce(value))

    @property
    def force(self) -> Vector3:
        """Accumulated force; cleared at the start of every integration stage."""
        return self._force

    # -- mass ------------------------------------------------------------

    @property
    def mass(self) -> float:
        return self._mass

    @mass.setter
    def mass(self, value: float) -> None:
        self._mass = require_positive(value, "mass")

    def set_mass(self, value: float) -> "Particle":
        self.mass = value
        return self

    # -- fixed / free ----------------------------------------------------

    @property
    def fixed(self) -> bool:
        return self._fixed

    @fixed.setter
    def fixed(self, value: bool) -> None:
        self._fixed = bool(value)
        if self._fixed:
            self._velocity.clear()

    @property
    def is_fixed(self) -> bool:
        return self._fixed

    @property
    def is_free(self) -> bool:
        return not self._fixed

    def make_fixed(self) -> "Particle":
        """Pin the particle in place (zeroes its velocity)."""
        self.fixed = True
        return self

    def make_free(self) -> "Particle":
        self.fixed = False
        return self

    # -- forces ----------------------------------------------------------

    def add_force(self, f: Vector3) -> "Particle":
        """Accumulate f into the force vector."""
        self._force.add(require(f, "f"))
        return self

    def clear_force(self) -> "Particle":
        self._force.clear()
        return self

    def distance_to(self, other: "Particle") -> float:
        """Distance between the positions of this particle and other."""
        return self._position.distance_to(require(other, "other")._position)

    def reset(self) -> "Particle":
        """Restore defaults: age 0, zero vectors, default mass, alive. Fixed state is kept."""
        self.age = 0.0
        self.slow_steps = 0
        self.dead = False
        self._position.clear()
        self._velocity.clear()
        self._force.clear()
        self._mass = DEFAULT_MASS
        return self

    def __repr__(self) -> str:
        state = "fixed" if self._fixed else "free"
        return (
            f"Particle(id={self.id}, mass={self._mass!r}, position={self._position!r}, "
            f"velocity={self._velocity!r}, {state})"
        )
