# MIT License (see LICENSE)
"""
Springs and inverse-square attractions between pairs of particles.

Both forces are computed along the separation vector

    r = one_end.position - other_end.position

and applied equal and opposite.

Spring (Hooke's law with damping along the spring axis):
    F_one = -ks * (|r| - L) * r_hat - d * proj_r(v_one - v_other)

Attraction (gravity-like, softened by a minimum distance):
    r' = r floored to length distance_min
    F_one = -k * m_one * m_other / |r'|^2 * r_hat

Positive k pulls the ends together, negative k pushes them apart.

When both ends sit at the same point the direction is undefined and the
force pair is zero.
"""
from __future__ import annotations

from ..types import Particle
from ..util import require_finite, require_non_negative, require_positive
from ..vector import Vector3
from .two_body import ForcePair, TwoBodyForce


class Spring(TwoBodyForce):
    """
    Damped spring between two particles.

    Attributes:
        strength: Spring constant ks (> 0).
        damping: Damping coefficient d (>= 0).
        rest_length: Length L at which the spring exerts no elastic force (> 0).
    """

    def __init__(
        self,
        one_end: Particle,
        other_end: Particle,
        strength: float,
        damping: float,
        rest_length: float,
    ) -> None:
        super().__init__(one_end, other_end)
        self._strength = require_positive(strength, "strength")
        self._damping = require_non_negative(damping, "damping")
        self._rest_length = require_positive(rest_length, "rest_length")

    def current_length(self) -> float:
        """Live distance between the two ends."""
        return self.one_end.position.distance_to(self.other_end.position)

    @property
    def strength(self) -> float:
        return self._strength

    @strength.setter
    def strength(self, value: float) -> None:
        self._strength = require_positive(value, "strength")

    @property
    def damping(self) -> float:
        return self._damping

    @damping.setter
    def damping(self, value: float) -> None:
        self._damping = require_non_negative(value, "damping")

    @property
    def rest_length(self) -> float:
        return self._rest_length

    @rest_length.setter
    def rest_length(self, value: float) -> None:
        self._rest_length = require_positive(value, "rest_length")

    def force_pair(self) -> ForcePair:
        axis = Vector3.difference(self.one_end.position, self.other_end.position)
        length = axis.length()
        if length == 0.0:
            return ForcePair.equal_and_opposite(Vector3())

        spring_force = axis.copy().set_length(-(length - self._rest_length)).scale(self._strength)

        if self._damping != 0.0:
            damping_force = (
                Vector3.difference(self.one_end.velocity, self.other_end.velocity)
                .project_onto(axis)
                .scale(-self._damping)
            )
            spring_force.add(damping_force)

        return ForcePair.equal_and_opposite(spring_force)

    def __repr__(self) -> str:
        return (
            f"Spring(ks={self._strength!r}, d={self._damping!r}, rest={self._rest_length!r}, "
            f"ends=({self.one_end.id}, {self.other_end.id}), on={self.is_on})"
        )


class Attraction(TwoBodyForce):
    """
    Inverse-square attraction (k > 0) or repulsion (k < 0).

    Attributes:
        strength: Coupling constant k; any finite value.
        minimum_distance: Separations shorter than this are treated as this
                          distance, capping the force (> 0).
    """

    def __init__(
        self,
        one_end: Particle,
        other_end: Particle,
        strength: float,
        minimum_distance: float,
    ) -> None:
        super().__init__(one_end, other_end)
        self._strength = require_finite(strength, "strength")
        self._minimum_distance = require_positive(minimum_distance, "minimum_distance")

    @property
    def strength(self) -> float:
        return self._strength

    @strength.setter
    def strength(self, value: float) -> None:
        self._strength = require_finite(value, "strength")

    @property
    def minimum_distance(self) -> float:
        return self._minimum_distance

    @minimum_distance.setter
    def minimum_distance(self, value: float) -> None:
        self._minimum_distance = require_positive(value, "minimum_distance")

    def force_pair(self) -> ForcePair:
        r = Vector3.difference(self.one_end.position, self.other_end.position)
        if r.is_zero():
            return ForcePair.equal_and_opposite(r)

        r.floor(self._minimum_distance)
        magnitude = -self._strength * self.one_end.mass * self.other_end.mass / r.length_squared()
        return ForcePair.equal_and_opposite(r.set_length(magnitude))

    def __repr__(self) -> str:
        return (
            f"Attraction(k={self._strength!r}, min={self._minimum_distance!r}, "
            f"ends=({self.one_end.id}, {self.other_end.id}), on={self.is_on})"
        )
