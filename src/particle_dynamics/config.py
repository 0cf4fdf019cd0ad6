# MIT License (see LICENSE)
"""
Simulation configuration.

SimulationConfig gathers the global parameters of a ParticleSystem so they
can be built once (in code, from a plain mapping, or from environment
variables) and handed to ParticleSystem.from_config().

Environment variables read by SimulationConfig.from_env():
    PARTICLE_DYNAMICS_GRAVITY        "gx,gy,gz" or a single y value
    PARTICLE_DYNAMICS_DRAG           float
    PARTICLE_DYNAMICS_DELTA_T        float > 0
    PARTICLE_DYNAMICS_INTEGRATOR     one of IntegratorMethod's values
    PARTICLE_DYNAMICS_SETTLING_AGE   int >= 0
"""
from __future__ import annotations
import os
from dataclasses import dataclass, fields
from typing import Any, Mapping

from .constants import DEFAULT_DELTA_T, DEFAULT_DRAG, DEFAULT_SETTLING_AGE
from .core.integrators import IntegratorMethod
from .errors import InvalidArgumentError
from .util import gravity_components, require_finite, require_non_negative_int, require_positive

ENV_PREFIX = "PARTICLE_DYNAMICS_"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Global parameters of a ParticleSystem.

    Attributes:
        gravity: Constant force added to every particle each stage (gx, gy, gz).
        drag: Global linear drag coefficient (force -drag * v on every particle).
        delta_t: Step size used by tick() when none is given (> 0).
        integrator: Integration scheme; strings are parsed into IntegratorMethod.
        settling_age: Slow steps tolerated by the settling integrator (>= 0).
    """
    gravity: tuple[float, float, float] = (0.0, 0.0, 0.0)
    drag: float = DEFAULT_DRAG
    delta_t: float = DEFAULT_DELTA_T
    integrator: IntegratorMethod = IntegratorMethod.RUNGE_KUTTA
    settling_age: int = DEFAULT_SETTLING_AGE

    def __post_init__(self) -> None:
        object.__setattr__(self, "gravity", gravity_components(self.gravity))
        object.__setattr__(self, "drag", require_finite(self.drag, "drag"))
        object.__setattr__(self, "delta_t", require_positive(self.delta_t, "delta_t"))
        object.__setattr__(self, "integrator", IntegratorMethod.parse(self.integrator))
        object.__setattr__(self, "settling_age", require_non_negative_int(self.settling_age, "settling_age"))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """
        Build a config from a plain dict (e.g. parsed by the host application).

        Raises:
            InvalidArgumentError: on unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SimulationConfig":
        """Build a config from PARTICLE_DYNAMICS_* variables; unset ones keep defaults."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            if f.name in ("drag", "delta_t"):
                data[f.name] = _parse_number(raw, f.name, float)
            elif f.name == "settling_age":
                data[f.name] = _parse_number(raw, f.name, int)
            else:
                data[f.name] = raw
        return cls(**data)


def _parse_number(raw: str, name: str, kind: type):
    try:
        return kind(raw.strip())
    except ValueError:
        raise InvalidArgumentError(f"{ENV_PREFIX}{name.upper()} is not a valid {kind.__name__}: {raw!r}") from None
