# MIT License (see LICENSE)
"""
particle_dynamics - A 3D particle system physics engine.

Point masses connected by damped springs and inverse-square attractions,
advanced through time by a selectable integrator under optional uniform
gravity and linear drag.

Main entry points:
    - ParticleSystem: The simulation container and controller.
    - Particle: A point mass with position, velocity and force accumulator.
    - Spring, Attraction: Built-in two-body forces.
    - IntegratorMethod: Selects the integration scheme.
    - SimulationConfig: Global parameters from code, dicts or environment.

Submodules:
    - core: Forces, two-body protocol, integrators and invariants.
    - vector: Mutable 3-component vector.
    - config: SimulationConfig.
    - errors: Exception hierarchy.
    - profiler: Optional per-section timing.

Example:
    from particle_dynamics import ParticleSystem

    system = ParticleSystem(gravity=-9.81, drag=0.0, delta_t=1/60)
    anchor = system.make_particle(1.0, 0.0, 0.0, 0.0).make_fixed()
    bob = system.make_particle(1.0, 0.0, -1.5, 0.0)
    system.make_spring(anchor, bob, strength=20.0, damping=0.5, rest_length=1.0)
    system.tick()
"""
from .vector import Vector3
from .types import Particle
from .core.forces import Drag, Force, Gravity, TargetedForce, UniversalForce
from .core.two_body import ForcePair, TwoBodyForce
from .core.interactions import Attraction, Spring
from .core.integrators import Integrator, IntegratorMethod
from .system import ParticleSystem
from .config import SimulationConfig
from .profiler import Profiler
from .errors import (
    DegenerateVectorError,
    InvalidArgumentError,
    MissingReferenceError,
    ParticleDynamicsError,
)

__all__ = [
    # Core simulation
    "ParticleSystem",
    "Particle",
    "Vector3",
    # Forces
    "Force",
    "TargetedForce",
    "UniversalForce",
    "Gravity",
    "Drag",
    "ForcePair",
    "TwoBodyForce",
    "Spring",
    "Attraction",
    # Integrators
    "Integrator",
    "IntegratorMethod",
    # Configuration and tooling
    "SimulationConfig",
    "Profiler",
    # Errors
    "ParticleDynamicsError",
    "InvalidArgumentError",
    "MissingReferenceError",
    "DegenerateVectorError",
]
