# MIT License (see LICENSE)
"""
Mutable 3D vector used for particle state and force accumulation.

Two families of operations are provided and named so they cannot be
confused:

In-place (mutate the receiver and return it, so calls chain):
    set, set_components, add, add_components, subtract, subtract_components,
    scale, set_length, normalize, limit, floor, project_onto, clear,
    and the augmented operators +=, -=, *=.

Allocating / explicit target (never mutate their operands):
    Vector3.sum(a, b, target=None)
    Vector3.difference(a, b, target=None)
    Vector3.scaled(v, f, target=None)
    cross(other), copy(), and the binary operators +, -, * and unary -.

When a target is supplied the result is written into it and the target is
returned; the target may alias one of the operands (``Vector3.sum(a, b, a)``
is the same as ``a.add(b)``). Integrators rely on this to reuse scratch
vectors.

Example:
    v = Vector3(1, 2, 3)
    v.add_components(3, 2, 1).scale(2)        # v is now (8, 8, 8)
    w = Vector3.difference(v, Vector3(1, 1, 1))  # new vector, v untouched
"""
from __future__ import annotations
import math
from typing import Iterator, Sequence

import numpy as np

from .errors import DegenerateVectorError, InvalidArgumentError, MissingReferenceError
from .util import f64


def _vec(value: "Vector3 | None", name: str) -> "Vector3":
    if value is None:
        raise MissingReferenceError(f"Argument {name} is None.")
    if not isinstance(value, Vector3):
        raise InvalidArgumentError(f"Argument {name} must be a Vector3, got {type(value).__name__}.")
    return value


class Vector3:
    """
    A 3-component float64 vector with chainable in-place operations.

    Equality is exact component equality (no tolerance). Instances are
    mutable and therefore unhashable.
    """

    __slots__ = ("_xyz",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._xyz = np.array((x, y, z), dtype=np.float64)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "Vector3":
        """Chaining-friendly constructor: ``Vector3.of(1, 0, 0).scale(2)``."""
        return cls(x, y, z)

    @classmethod
    def from_array(cls, a) -> "Vector3":
        """Build a vector from any array-like of length 3."""
        arr = f64(a)
        if arr.shape != (3,):
            raise InvalidArgumentError(f"Expected 3 components, got shape {arr.shape}.")
        v = cls()
        v._xyz[:] = arr
        return v

    @classmethod
    def coerce(cls, value: "Vector3 | Sequence[float]") -> "Vector3":
        """Return a new Vector3 copied from a Vector3 or a 3-sequence."""
        if value is None:
            raise MissingReferenceError("Argument value is None.")
        if isinstance(value, Vector3):
            return value.copy()
        return cls.from_array(value)

    def copy(self) -> "Vector3":
        """Return an independent copy of this vector."""
        v = Vector3.__new__(Vector3)
        v._xyz = self._xyz.copy()
        return v

    def to_array(self) -> np.ndarray:
        """Return the components as a new float64 array of shape (3,)."""
        return self._xyz.copy()

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def x(self) -> float:
        return float(self._xyz[0])

    @x.setter
    def x(self, value: float) -> None:
        self._xyz[0] = value

    @property
    def y(self) -> float:
        return float(self._xyz[1])

    @y.setter
    def y(self, value: float) -> None:
        self._xyz[1] = value

    @property
    def z(self) -> float:
        return float(self._xyz[2])

    @z.setter
    def z(self, value: float) -> None:
        self._xyz[2] = value

    def set(self, other: "Vector3") -> "Vector3":
        """Copy the components of other into this vector."""
        self._xyz[:] = _vec(other, "other")._xyz
        return self

    def set_components(self, x: float, y: float, z: float) -> "Vector3":
        self._xyz[0] = x
        self._xyz[1] = y
        self._xyz[2] = z
        return self

    def set_array(self, a: np.ndarray) -> "Vector3":
        """Copy a length-3 array into this vector (used by integrators)."""
        self._xyz[:] = a
        return self

    # ------------------------------------------------------------------
    # In-place arithmetic
    # ------------------------------------------------------------------

    def add(self, other: "Vector3") -> "Vector3":
        self._xyz += _vec(other, "other")._xyz
        return self

    def add_components(self, x: float, y: float, z: float) -> "Vector3":
        self._xyz[0] += x
        self._xyz[1] += y
        self._xyz[2] += z
        return self

    def subtract(self, other: "Vector3") -> "Vector3":
        self._xyz -= _vec(other, "other")._xyz
        return self

    def subtract_components(self, x: float, y: float, z: float) -> "Vector3":
        self._xyz[0] -= x
        self._xyz[1] -= y
        self._xyz[2] -= z
        return self

    def scale(self, f: float) -> "Vector3":
        """Multiply every component by f."""
        self._xyz *= f
        return self

    def set_length(self, f: float) -> "Vector3":
        """
        Rescale to length f, keeping the direction.

        A negative f yields length |f| pointing the opposite way, which the
        spring and attraction forces use to flip the separation vector.

        Raises:
            DegenerateVectorError: if this is the zero vector.
        """
        n = self.length()
        if n == 0.0:
            raise DegenerateVectorError("Cannot set the length of a zero vector.")
        self._xyz *= f / n
        return self

    def normalize(self) -> "Vector3":
        """
        Scale to unit length.

        Raises:
            DegenerateVectorError: if this is the zero vector.
        """
        n = self.length()
        if n == 0.0:
            raise DegenerateVectorError("Cannot normalize a zero vector.")
        self._xyz /= n
        return self

    def limit(self, f: float) -> "Vector3":
        """Clamp the length to at most f. A bound f <= 0 zeroes the vector."""
        if f <= 0:
            return self.clear()
        return self.set_length(f) if self.length() > f else self

    def floor(self, f: float) -> "Vector3":
        """
        Clamp the length to at least f. A bound f <= 0 is a no-op.

        Raises:
            DegenerateVectorError: if f > 0 and this is the zero vector.
        """
        if f > 0 and self.length() < f:
            return self.set_length(f)
        return self

    def project_onto(self, other: "Vector3") -> "Vector3":
        """
        Replace this vector by its projection onto other.

            this <- other * (other . this) / |other|^2

        Raises:
            DegenerateVectorError: if other is the zero vector.
        """
        o = _vec(other, "other")._xyz
        n2 = float(np.dot(o, o))
        if n2 == 0.0:
            raise DegenerateVectorError("Cannot project onto a zero vector.")
        self._xyz[:] = o * (float(np.dot(o, self._xyz)) / n2)
        return self

    def clear(self) -> "Vector3":
        """Set all components to zero."""
        self._xyz.fill(0.0)
        return self

    # ------------------------------------------------------------------
    # Allocating / explicit-target operations
    # ------------------------------------------------------------------

    @staticmethod
    def sum(a: "Vector3", b: "Vector3", target: "Vector3 | None" = None) -> "Vector3":
        """Return a + b in target (may alias a or b), or in a new vector."""
        result = _vec(a, "a")._xyz + _vec(b, "b")._xyz
        return Vector3.from_array(result) if target is None else target.set_array(result)

    @staticmethod
    def difference(a: "Vector3", b: "Vector3", target: "Vector3 | None" = None) -> "Vector3":
        """Return a - b in target (may alias a or b), or in a new vector."""
        result = _vec(a, "a")._xyz - _vec(b, "b")._xyz
        return Vector3.from_array(result) if target is None else target.set_array(result)

    @staticmethod
    def scaled(v: "Vector3", f: float, target: "Vector3 | None" = None) -> "Vector3":
        """Return v * f in target (may alias v), or in a new vector."""
        result = _vec(v, "v")._xyz * f
        return Vector3.from_array(result) if target is None else target.set_array(result)

    def cross(self, other: "Vector3") -> "Vector3":
        """Return a new vector, self x other."""
        return Vector3.from_array(np.cross(self._xyz, _vec(other, "other")._xyz))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def dot(self, other: "Vector3") -> float:
        return float(np.dot(self._xyz, _vec(other, "other")._xyz))

    def length_squared(self) -> float:
        return float(np.dot(self._xyz, self._xyz))

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def distance_squared_to(self, other: "Vector3") -> float:
        d = self._xyz - _vec(other, "other")._xyz
        return float(np.dot(d, d))

    def distance_to(self, other: "Vector3") -> float:
        return math.sqrt(self.distance_squared_to(other))

    def distance_to_point(self, x: float, y: float, z: float) -> float:
        """Distance from the tip of this vector to the point (x, y, z)."""
        dx = self._xyz[0] - x
        dy = self._xyz[1] - y
        dz = self._xyz[2] - z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def is_zero(self) -> bool:
        return not self._xyz.any()

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __add__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.sum(self, other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.difference(self, other)

    def __mul__(self, f: float) -> "Vector3":
        if isinstance(f, Vector3):
            return NotImplemented
        return Vector3.scaled(self, f)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3.scaled(self, -1.0)

    def __iadd__(self, other: "Vector3") -> "Vector3":
        return self.add(other)

    def __isub__(self, other: "Vector3") -> "Vector3":
        return self.subtract(other)

    def __imul__(self, f: float) -> "Vector3":
        if isinstance(f, Vector3):
            return NotImplemented
        return self.scale(f)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self is other or bool(np.array_equal(self._xyz, other._xyz))

    __hash__ = None  # mutable

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __len__(self) -> int:
        return 3

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"
