# MIT License (see LICENSE)
"""
Numerical integrators for particle dynamics.

Every integrator solves the equations of motion
    dx/dt = v,     dv/dt = F(x, v) / m
for the free particles of one ParticleSystem. Forces are re-evaluated by the
system (ParticleSystem.accumulate_forces) once per stage; fixed particles
still receive force contributions but are never moved.

Available integrators:
- ForwardEulerIntegrator: symplectic Euler, position first.
- BackwardEulerIntegrator: symplectic Euler, velocity first.
- ModifiedEulerIntegrator: second-order Taylor step with constant acceleration.
- RungeKuttaIntegrator: classical 4th-order Runge-Kutta (4 force evaluations).
- SettlingRungeKuttaIntegrator: RK4 that fixes particles which stay
  (almost) still for too many consecutive steps.

An integrator is bound to one system and owns its own stage buffers; they are
rebuilt on every step and dropped with the integrator when the system
switches to another one.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
import enum
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

import numpy as np

from ..constants import DEFAULT_SETTLING_AGE, SETTLING_EPSILON
from ..errors import InvalidArgumentError
from ..types import Particle
from ..util import require, require_non_negative_int, require_positive
from ..vector import Vector3

if TYPE_CHECKING:
    from ..system import ParticleSystem

logger = logging.getLogger(__name__)


def _gather(particles: Sequence[Particle], attr: str) -> np.ndarray:
    """Stack one vector attribute of every particle into an (N, 3) array."""
    return np.array(
        [getattr(p, attr).to_array() for p in particles], dtype=np.float64
    ).reshape(-1, 3)


def _scatter(particles: Sequence[Particle], x: np.ndarray, v: np.ndarray) -> None:
    """Write (N, 3) position and velocity arrays back into the particles."""
    for p, xi, vi in zip(particles, x, v):
        p.position.set_array(xi)
        p.velocity.set_array(vi)


class Integrator(ABC):
    """
    Base class for time-stepping strategies.

    Subclasses implement _advance(dt); step() validates dt first.
    """

    def __init__(self, system: "ParticleSystem") -> None:
        self.system = require(system, "system")

    @property
    @abstractmethod
    def method(self) -> "IntegratorMethod":
        """The IntegratorMethod this class implements."""

    def step(self, dt: float) -> "Integrator":
        """Advance every free particle of the system by dt (> 0)."""
        self._advance(require_positive(dt, "dt"))
        return self

    @abstractmethod
    def _advance(self, dt: float) -> None:
        ...

    def _free_particles(self) -> list[Particle]:
        return [p for p in self.system.particles if p.is_free]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ForwardEulerIntegrator(Integrator):
    """
    Symplectic Euler, position first:
        x += v * dt
        v += (F / m) * dt
    """

    @property
    def method(self) -> "IntegratorMethod":
        return IntegratorMethod.FORWARD_EULER

    def _advance(self, dt: float) -> None:
        self.system.accumulate_forces()
        for p in self._free_particles():
            p.position.add(Vector3.scaled(p.velocity, dt))
            p.velocity.add(Vector3.scaled(p.force, dt / p.mass))


class BackwardEulerIntegrator(Integrator):
    """
    Symplectic Euler, velocity first:
        v += (F / m) * dt
        x += v * dt        (with the updated velocity)
    """

    @property
    def method(self) -> "IntegratorMethod":
        return IntegratorMethod.BACKWARD_EULER

    def _advance(self, dt: float) -> None:
        self.system.accumulate_forces()
        for p in self._free_particles():
            p.velocity.add(Vector3.scaled(p.force, dt / p.mass))
            p.position.add(Vector3.scaled(p.velocity, dt))


class ModifiedEulerIntegrator(Integrator):
    """
    Second-order Taylor step, acceleration held constant over dt:
        a  = F / m
        x += v * dt + 0.5 * a * dt^2
        v += a * dt
    """

    @property
    def method(self) -> "IntegratorMethod":
        return IntegratorMethod.MODIFIED_EULER

    def _advance(self, dt: float) -> None:
        self.system.accumulate_forces()
        half_dt2 = 0.5 * dt * dt
        for p in self._free_particles():
            a = Vector3.scaled(p.force, 1.0 / p.mass)
            p.position.add(Vector3.scaled(p.velocity, dt)).add(Vector3.scaled(a, half_dt2))
            p.velocity.add(a.scale(dt))


class RungeKuttaIntegrator(Integrator):
    """
    Classical 4th-order Runge-Kutta over the whole particle system.

    Every stage moves all free particles to the intermediate state and asks
    the system for fresh forces:

        k1 = f(x0,                v0)
        k2 = f(x0 + dt/2 * k1.v,  v0 + dt/2 * k1.F/m)
        k3 = f(x0 + dt/2 * k2.v,  v0 + dt/2 * k2.F/m)
        k4 = f(x0 + dt   * k3.v,  v0 + dt   * k3.F/m)

        x = x0 + dt/6       * (k1.v + 2 k2.v + 2 k3.v + k4.v)
        v = v0 + dt/(6 m)   * (k1.F + 2 k2.F + 2 k3.F + k4.F)

    Each free particle's ``age`` grows by dt per completed step. Forces are
    cleared after every stage is captured.
    """

    def __init__(self, system: "ParticleSystem") -> None:
        super().__init__(system)
        self._free: list[Particle] = []
        self._x0 = np.empty((0, 3))
        self._v0 = np.empty((0, 3))
        self._kf = np.empty((4, 0, 3))
        self._kv = np.empty((4, 0, 3))

    @property
    def method(self) -> "IntegratorMethod":
        return IntegratorMethod.RUNGE_KUTTA

    def _capture(self, stage: int) -> None:
        """Evaluate forces at the current state and store them as stage k."""
        self.system.accumulate_forces()
        self._kf[stage] = _gather(self._free, "force")
        self._kv[stage] = _gather(self._free, "velocity")
        self.system.clear_forces()

    def _advance(self, dt: float) -> None:
        free = self._free = self._free_particles()
        n = len(free)
        inv_m = np.array([1.0 / p.mass for p in free], dtype=np.float64).reshape(n, 1)

        self._x0 = _gather(free, "position")
        self._v0 = _gather(free, "velocity")
        self._kf = np.zeros((4, n, 3), dtype=np.float64)
        self._kv = np.zeros((4, n, 3), dtype=np.float64)
        x0, v0, kf, kv = self._x0, self._v0, self._kf, self._kv

        self._capture(0)
        for stage, h in ((1, 0.5 * dt), (2, 0.5 * dt), (3, dt)):
            prev = stage - 1
            _scatter(free, x0 + h * kv[prev], v0 + h * kf[prev] * inv_m)
            self._capture(stage)

        x = x0 + (dt / 6.0) * (kv[0] + 2.0 * kv[1] + 2.0 * kv[2] + kv[3])
        v = v0 + (dt / 6.0) * inv_m * (kf[0] + 2.0 * kf[1] + 2.0 * kf[2] + kf[3])
        _scatter(free, x, v)

        for p in free:
            p.age += dt
            self._after_update(p)

    def _after_update(self, particle: Particle) -> None:
        """Hook run for each free particle once its new state is written."""


class SettlingRungeKuttaIntegrator(RungeKuttaIntegrator):
    """
    RK4 that puts near-static particles to rest permanently.

    After each step a particle slower than SETTLING_EPSILON increments its
    ``slow_steps`` counter; a faster one resets it to 0. Once the counter
    exceeds ``settling_age`` the particle is fixed.

    The counter is separate from ``age``, which keeps accumulating simulated
    time exactly as with the plain RK4 integrator.
    """

    def __init__(self, system: "ParticleSystem", settling_age: int = DEFAULT_SETTLING_AGE) -> None:
        super().__init__(system)
        self._settling_age = require_non_negative_int(settling_age, "settling_age")

    @property
    def method(self) -> "IntegratorMethod":
        return IntegratorMethod.SETTLING_RUNGE_KUTTA

    @property
    def settling_age(self) -> int:
        return self._settling_age

    def _after_update(self, particle: Particle) -> None:
        if particle.velocity.length() < SETTLING_EPSILON:
            particle.slow_steps += 1
        else:
            particle.slow_steps = 0

        if particle.slow_steps > self._settling_age:
            particle.make_fixed()
            logger.debug("Particle %s settled after %d slow steps", particle.id, particle.slow_steps)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(settling_age={self._settling_age})"


class IntegratorMethod(str, enum.Enum):
    """Closed set of integration schemes a ParticleSystem can select."""

    FORWARD_EULER = "forward_euler"
    BACKWARD_EULER = "backward_euler"
    MODIFIED_EULER = "modified_euler"
    RUNGE_KUTTA = "runge_kutta"
    SETTLING_RUNGE_KUTTA = "settling_runge_kutta"

    @classmethod
    def parse(cls, value: "IntegratorMethod | str") -> "IntegratorMethod":
        """Accept a member or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Unknown integrator: {value!r}") from None

    def create(self, system: "ParticleSystem", settling_age: int | None = None) -> Integrator:
        """Build a fresh integrator of this kind bound to system."""
        if self is IntegratorMethod.SETTLING_RUNGE_KUTTA:
            age = DEFAULT_SETTLING_AGE if settling_age is None else settling_age
            return SettlingRungeKuttaIntegrator(system, age)
        return _INTEGRATOR_CLASSES[self](system)


_INTEGRATOR_CLASSES: dict[IntegratorMethod, type[Integrator]] = {
    IntegratorMethod.FORWARD_EULER: ForwardEulerIntegrator,
    IntegratorMethod.BACKWARD_EULER: BackwardEulerIntegrator,
    IntegratorMethod.MODIFIED_EULER: ModifiedEulerIntegrator,
    IntegratorMethod.RUNGE_KUTTA: RungeKuttaIntegrator,
}
