# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying integrator behaviour in tests and for debugging unstable
setups. With no drag, no external gravity and undamped springs, total energy
should stay close to constant and linear momentum should be conserved
(within integration and rounding error).
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import Particle
from .interactions import Spring


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total kinetic energy T = sum(0.5 * m * v^2).

    Fixed particles have zero velocity and contribute nothing.
    """
    ke = 0.0
    for p in particles:
        ke += 0.5 * p.mass * p.velocity.length_squared()
    return ke


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Total linear momentum P = sum(m * v) as a float64 array [Px, Py, Pz].
    """
    total = np.zeros(3, dtype=np.float64)
    for p in particles:
        total += p.mass * p.velocity.to_array()
    return total


def spring_potential_energy(springs: Iterable[Spring]) -> float:
    """
    Elastic energy stored in springs: sum(0.5 * ks * (|r| - L)^2).

    Springs that are switched off are skipped.
    """
    pe = 0.0
    for s in springs:
        if s.is_off:
            continue
        stretch = s.current_length() - s.rest_length
        pe += 0.5 * s.strength * stretch * stretch
    return pe
