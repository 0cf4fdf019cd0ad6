# MIT License (see LICENSE)
"""
Exception types raised by the particle engine.

All validation is fail-fast: constructors and setters raise before any state
is mutated. The hierarchy mixes in the matching builtin so callers can catch
either the engine-specific class or the usual ValueError/TypeError.
"""
from __future__ import annotations


class ParticleDynamicsError(Exception):
    """Base class for every error raised by particle_dynamics."""


class InvalidArgumentError(ParticleDynamicsError, ValueError):
    """A parameter violates an invariant (e.g. mass <= 0, damping < 0)."""


class MissingReferenceError(InvalidArgumentError, TypeError):
    """A required particle, vector or integrator argument was None."""


class DegenerateVectorError(ParticleDynamicsError, ZeroDivisionError):
    """Operation needs a direction but the vector has zero length."""
