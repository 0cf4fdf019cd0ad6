# MIT License (see LICENSE)
"""
Numeric conversion and argument validation helpers.

The validators raise the engine's own exception types so that every
constructor and setter reports invariant violations the same way.
"""
from __future__ import annotations
import math

import numpy as np

from .errors import InvalidArgumentError, MissingReferenceError


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for positions, velocities and gravity.
    """
    return np.array(x, dtype=np.float64)


def gravity_components(value) -> tuple[float, float, float]:
    """
    Normalize a gravity specification to (gx, gy, gz).

    A scalar (or a one-element sequence) means (0, g, 0). Strings such as
    "0,-9.8,0" are split on commas.
    """
    if value is None:
        raise MissingReferenceError("Argument gravity is None.")
    try:
        if isinstance(value, str):
            value = [float(part) for part in value.split(",") if part.strip()]
        elif hasattr(value, "to_array"):
            value = value.to_array()
        arr = f64(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"gravity is not numeric: {value!r}") from None
    if arr.shape in ((), (1,)):
        return (0.0, require_finite(arr.reshape(-1)[0], "gravity"), 0.0)
    if arr.shape != (3,):
        raise InvalidArgumentError(f"gravity needs 1 or 3 components, got shape {arr.shape}.")
    return (
        require_finite(arr[0], "gravity"),
        require_finite(arr[1], "gravity"),
        require_finite(arr[2], "gravity"),
    )


def require(value, name: str):
    """Return value, raising MissingReferenceError if it is None."""
    if value is None:
        raise MissingReferenceError(f"Argument {name} is None.")
    return value


def require_positive(value: float, name: str) -> float:
    """Return value as float if it is finite and > 0."""
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"Argument {name} is {value}; {name} must be > 0.")
    return value


def require_non_negative(value: float, name: str) -> float:
    """Return value as float if it is finite and >= 0."""
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidArgumentError(f"Argument {name} is {value}; {name} must be >= 0.")
    return value


def require_non_negative_int(value: int, name: str) -> int:
    """Return value as int if it is an integral number >= 0 (bools rejected)."""
    message = f"Argument {name} is {value!r}; {name} must be a non-negative integer."
    if isinstance(value, bool):
        raise InvalidArgumentError(message)
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(message) from None
    if as_int != value or as_int < 0:
        raise InvalidArgumentError(message)
    return as_int


def require_finite(value: float, name: str) -> float:
    """Return value as float, rejecting NaN and infinities."""
    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Argument {name} is {value}; {name} must be finite.")
    return value
