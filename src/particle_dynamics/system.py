# MIT License (see LICENSE)
"""
The particle system: world container and simulation controller.

ParticleSystem manages:
- The particle list and the three force lists (springs, attractions,
  custom targeted forces).
- Global parameters: gravity vector, drag coefficient, default step size.
- The active integrator, which can be swapped at any time between steps.

One force accumulation pass (run once per integrator stage):
    1. Clear every particle's force accumulator.
    2. Add gravity and -drag * velocity to every particle (free or fixed).
    3. Apply every spring, then every attraction, then every custom force.

Structure:
    - User creates a ParticleSystem.
    - User creates particles and forces with the make_* factories (or
      registers pre-built ones with the add_* methods).
    - User calls system.tick() once per frame and reads particle positions.

Removing a particle also removes every spring, attraction and custom
two-body force attached to it, so no registered force ever refers to a
particle outside the system.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from typing import Sequence, TypeVar

from .config import SimulationConfig
from .constants import DEFAULT_DELTA_T, DEFAULT_DRAG, DEFAULT_MASS, DEFAULT_SETTLING_AGE
from .core.forces import TargetedForce, apply_gravity, apply_linear_drag
from .core.integrators import Integrator, IntegratorMethod
from .core.interactions import Attraction, Spring
from .core.two_body import TwoBodyForce
from .errors import InvalidArgumentError
from .profiler import Profiler
from .types import Particle
from .util import gravity_components, require, require_finite, require_non_negative_int, require_positive
from .vector import Vector3

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=TargetedForce)


class ParticleSystem:
    """
    Particle simulation world.

    Args:
        gravity: Scalar g (meaning (0, g, 0)) or a 3-sequence / Vector3.
                 Added unscaled to every particle's force each stage.
        drag: Global linear drag coefficient (default 0.001).
        delta_t: Step size used by tick() without an argument (default 1.0).
        integrator: IntegratorMethod (or its string value) to start with.
        settling_age: Default threshold for the settling Runge-Kutta integrator.
        profiler: Optional Profiler recording "step" and "forces" timings.

    Attributes:
        time: Total simulated time advanced by tick().
    """

    def __init__(
        self,
        gravity: float | Sequence[float] | Vector3 = 0.0,
        drag: float = DEFAULT_DRAG,
        *,
        delta_t: float = DEFAULT_DELTA_T,
        integrator: IntegratorMethod | str = IntegratorMethod.RUNGE_KUTTA,
        settling_age: int = DEFAULT_SETTLING_AGE,
        profiler: Profiler | None = None,
    ) -> None:
        self._gravity = Vector3(*gravity_components(gravity))
        self._drag = require_finite(drag, "drag")
        self._delta_t = require_positive(delta_t, "delta_t")
        self._settling_age = require_non_negative_int(settling_age, "settling_age")
        self.profiler = profiler
        self.time = 0.0

        self._particles: list[Particle] = []
        self._registered: set[Particle] = set()
        self._springs: list[Spring] = []
        self._attractions: list[Attraction] = []
        self._custom_forces: list[TargetedForce] = []
        self._next_id = 1

        self._integrator: Integrator = IntegratorMethod.parse(integrator).create(self, self._settling_age)

    @classmethod
    def from_config(cls, config: SimulationConfig, profiler: Profiler | None = None) -> "ParticleSystem":
        """Build a system from a validated SimulationConfig."""
        require(config, "config")
        return cls(
            config.gravity,
            config.drag,
            delta_t=config.delta_t,
            integrator=config.integrator,
            settling_age=config.settling_age,
            profiler=profiler,
        )

    # ------------------------------------------------------------------
    # Time and integration
    # ------------------------------------------------------------------

    @property
    def delta_t(self) -> float:
        return self._delta_t

    @delta_t.setter
    def delta_t(self, value: float) -> None:
        self._delta_t = require_positive(value, "delta_t")

    def set_delta_t(self, value: float) -> "ParticleSystem":
        self.delta_t = value
        return self

    @property
    def integrator(self) -> Integrator:
        return self._integrator

    def set_integrator(
        self,
        integrator: Integrator | IntegratorMethod | str,
        settling_age: int | None = None,
    ) -> "ParticleSystem":
        """
        Replace the active integrator.

        Accepts an IntegratorMethod (or its string value), in which case a
        fresh integrator is built, or an Integrator already bound to this
        system. The previous integrator and its stage buffers are dropped,
        so only call this between ticks.
        """
        require(integrator, "integrator")
        if isinstance(integrator, Integrator):
            if integrator.system is not self:
                raise InvalidArgumentError("Integrator is bound to a different ParticleSystem.")
            replacement = integrator
        else:
            age = self._settling_age if settling_age is None else settling_age
            replacement = IntegratorMethod.parse(integrator).create(self, age)

        logger.debug("Replacing integrator %r with %r", self._integrator, replacement)
        self._integrator = replacement
        return self

    def tick(self, dt: float | None = None) -> "ParticleSystem":
        """
        Advance the simulation by dt (default: delta_t).

        Raises:
            InvalidArgumentError: if dt <= 0.
        """
        dt = self._delta_t if dt is None else require_positive(dt, "dt")
        with self._section("step"):
            self._integrator.step(dt)
        self.time += dt
        return self

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler is not None else nullcontext()

    # ------------------------------------------------------------------
    # Force accumulation
    # ------------------------------------------------------------------

    def clear_forces(self) -> None:
        """Zero the force accumulator of every particle."""
        for p in self._particles:
            p.clear_force()

    def apply_forces(self) -> None:
        """Add gravity, drag, springs, attractions and custom forces to the accumulators."""
        gravity = None if self._gravity.is_zero() else self._gravity
        for p in self._particles:
            if gravity is not None:
                apply_gravity(p, gravity)
            apply_linear_drag(p, self._drag)

        for s in self._springs:
            s.apply()
        for a in self._attractions:
            a.apply()
        for f in self._custom_forces:
            f.apply()

    def accumulate_forces(self) -> None:
        """One full force pass: clear, then apply. Integrators call this once per stage."""
        with self._section("forces"):
            self.clear_forces()
            self.apply_forces()

    # ------------------------------------------------------------------
    # Gravity and drag
    # ------------------------------------------------------------------

    @property
    def gravity(self) -> Vector3:
        """A copy of the global gravity vector."""
        return self._gravity.copy()

    def set_gravity(self, x, y: float | None = None, z: float | None = None) -> "ParticleSystem":
        """
        Set global gravity.

        ``set_gravity(g)`` means (0, g, 0); ``set_gravity(gx, gy, gz)`` sets
        all three; a 3-sequence or Vector3 is also accepted.
        """
        if y is None and z is None:
            components = gravity_components(x)
        else:
            components = gravity_components((x, 0.0 if y is None else y, 0.0 if z is None else z))
        self._gravity.set_components(*components)
        return self

    @property
    def drag(self) -> float:
        return self._drag

    @drag.setter
    def drag(self, value: float) -> None:
        self._drag = require_finite(value, "drag")

    def set_drag(self, value: float) -> "ParticleSystem":
        self.drag = value
        return self

    # ------------------------------------------------------------------
    # Particles
    # ------------------------------------------------------------------

    def make_particle(
        self,
        mass: float = DEFAULT_MASS,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
    ) -> Particle:
        """Create a free particle at (x, y, z) and register it."""
        return self.add_particle(Particle(mass, position=(x, y, z)))

    def add_particle(self, particle: Particle) -> Particle:
        """
        Register a pre-built particle and assign it an id.

        Raises:
            InvalidArgumentError: if the particle is already registered here.
        """
        require(particle, "particle")
        if particle in self._registered:
            raise InvalidArgumentError(f"Particle {particle.id} is already in this system.")
        particle.id = self._next_id
        self._next_id += 1
        self._particles.append(particle)
        self._registered.add(particle)
        return particle

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    def number_of_particles(self) -> int:
        return len(self._particles)

    def get_particle(self, i: int) -> Particle:
        return self._particles[i]

    def contains(self, particle: Particle) -> bool:
        return particle in self._registered

    def forces_on(self, particle: Particle) -> list[TwoBodyForce]:
        """Every registered two-body force with particle at one of its ends."""
        return [f for f in self._two_body_forces() if f.references(particle)]

    def remove_particle(self, particle: Particle | int) -> Particle | None:
        """
        Remove a particle (by object or index) and every force attached to it.

        Returns the removed particle, or None if the object was not registered.
        Raises IndexError for an out-of-range index.
        """
        if isinstance(particle, int):
            removed = self._particles.pop(particle)
        else:
            require(particle, "particle")
            if particle not in self._registered:
                return None
            self._particles.remove(particle)
            removed = particle
        self._registered.discard(removed)

        before = len(self._springs) + len(self._attractions) + len(self._custom_forces)
        self._springs = [s for s in self._springs if not s.references(removed)]
        self._attractions = [a for a in self._attractions if not a.references(removed)]
        self._custom_forces = [
            f for f in self._custom_forces
            if not (isinstance(f, TwoBodyForce) and f.references(removed))
        ]
        dropped = before - (len(self._springs) + len(self._attractions) + len(self._custom_forces))
        if dropped:
            logger.debug("Removed particle %s and %d attached force(s)", removed.id, dropped)
        return removed

    # ------------------------------------------------------------------
    # Springs
    # ------------------------------------------------------------------

    def make_spring(
        self,
        a: Particle,
        b: Particle,
        strength: float,
        damping: float,
        rest_length: float,
    ) -> Spring:
        """Create and register a spring between two registered particles."""
        self._check_ends(a, b)
        spring = Spring(a, b, strength, damping, rest_length)
        self._springs.append(spring)
        return spring

    def add_spring(self, spring: Spring) -> Spring:
        return self._register(self._springs, require(spring, "spring"))

    @property
    def springs(self) -> tuple[Spring, ...]:
        return tuple(self._springs)

    def number_of_springs(self) -> int:
        return len(self._springs)

    def get_spring(self, i: int) -> Spring:
        return self._springs[i]

    def remove_spring(self, spring: Spring | int) -> Spring | None:
        return self._remove(self._springs, spring)

    # ------------------------------------------------------------------
    # Attractions
    # ------------------------------------------------------------------

    def make_attraction(
        self,
        a: Particle,
        b: Particle,
        strength: float,
        minimum_distance: float,
    ) -> Attraction:
        """Create and register an attraction (k > 0) or repulsion (k < 0)."""
        self._check_ends(a, b)
        attraction = Attraction(a, b, strength, minimum_distance)
        self._attractions.append(attraction)
        return attraction

    def add_attraction(self, attraction: Attraction) -> Attraction:
        return self._register(self._attractions, require(attraction, "attraction"))

    @property
    def attractions(self) -> tuple[Attraction, ...]:
        return tuple(self._attractions)

    def number_of_attractions(self) -> int:
        return len(self._attractions)

    def get_attraction(self, i: int) -> Attraction:
        return self._attractions[i]

    def remove_attraction(self, attraction: Attraction | int) -> Attraction | None:
        return self._remove(self._attractions, attraction)

    # ------------------------------------------------------------------
    # Custom forces
    # ------------------------------------------------------------------

    def add_custom_force(self, force: TargetedForce) -> TargetedForce:
        """
        Register a user-defined targeted force; applied after attractions.

        Universal forces (Gravity, Drag) are rejected: apply them yourself
        with ``force.apply_to(particle)``.
        """
        require(force, "force")
        if not isinstance(force, TargetedForce):
            raise InvalidArgumentError(
                f"Custom forces must be TargetedForce instances, got {type(force).__name__}."
            )
        return self._register(self._custom_forces, force)

    @property
    def custom_forces(self) -> tuple[TargetedForce, ...]:
        return tuple(self._custom_forces)

    def number_of_custom_forces(self) -> int:
        return len(self._custom_forces)

    def get_custom_force(self, i: int) -> TargetedForce:
        return self._custom_forces[i]

    def remove_custom_force(self, force: TargetedForce | int) -> TargetedForce | None:
        return self._remove(self._custom_forces, force)

    # ------------------------------------------------------------------
    # Bulk operations and helpers
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Remove every particle and every force."""
        self._particles.clear()
        self._registered.clear()
        self._springs.clear()
        self._attractions.clear()
        self._custom_forces.clear()

    def _two_body_forces(self):
        yield from self._springs
        yield from self._attractions
        for f in self._custom_forces:
            if isinstance(f, TwoBodyForce):
                yield f

    def _check_ends(self, a: Particle, b: Particle) -> None:
        require(a, "a")
        require(b, "b")
        for end in (a, b):
            if end not in self._registered:
                raise InvalidArgumentError(f"Particle {end.id} is not registered in this system.")

    def _register(self, collection: list[F], force: F) -> F:
        if isinstance(force, TwoBodyForce):
            self._check_ends(force.one_end, force.other_end)
        if any(f is force for f in collection):
            raise InvalidArgumentError(f"{force!r} is already registered.")
        collection.append(force)
        return force

    @staticmethod
    def _remove(collection: list[F], item: F | int) -> F | None:
        if isinstance(item, int):
            return collection.pop(item)
        require(item, "force")
        for i, f in enumerate(collection):
            if f is item:
                return collection.pop(i)
        return None

    def __repr__(self) -> str:
        return (
            f"ParticleSystem(particles={len(self._particles)}, springs={len(self._springs)}, "
            f"attractions={len(self._attractions)}, custom={len(self._custom_forces)}, "
            f"integrator={self._integrator!r}, time={self.time!r})"
        )
