# MIT License (see LICENSE)
"""
Core particle dynamics components.

This subpackage provides:
    - Force abstractions: Force, TargetedForce, UniversalForce, Gravity, Drag.
    - Two-body forces: ForcePair, TwoBodyForce, Spring, Attraction.
    - Integrators: Euler variants, RK4, settling RK4.
    - Invariants: kinetic energy, momentum, spring potential energy.

Typical usage:
    from particle_dynamics.core import Spring, IntegratorMethod

    spring = Spring(a, b, strength=1.0, damping=0.1, rest_length=1.0)
    spring.apply()
"""
from .forces import (
    Drag,
    Force,
    Gravity,
    TargetedForce,
    UniversalForce,
    apply_gravity,
    apply_linear_drag,
)
from .two_body import ForcePair, TwoBodyForce
from .interactions import Attraction, Spring
from .integrators import (
    BackwardEulerIntegrator,
    ForwardEulerIntegrator,
    Integrator,
    IntegratorMethod,
    ModifiedEulerIntegrator,
    RungeKuttaIntegrator,
    SettlingRungeKuttaIntegrator,
)
from .invariants import kinetic_energy, linear_momentum, spring_potential_energy

__all__ = [
    # Forces
    "Force",
    "TargetedForce",
    "UniversalForce",
    "Gravity",
    "Drag",
    "apply_gravity",
    "apply_linear_drag",
    # Two-body forces
    "ForcePair",
    "TwoBodyForce",
    "Spring",
    "Attraction",
    # Integrators
    "Integrator",
    "IntegratorMethod",
    "ForwardEulerIntegrator",
    "BackwardEulerIntegrator",
    "ModifiedEulerIntegrator",
    "RungeKuttaIntegrator",
    "SettlingRungeKuttaIntegrator",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "spring_potential_energy",
]
