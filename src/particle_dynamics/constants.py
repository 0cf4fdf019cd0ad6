# MIT License (see LICENSE)
"""
Default values and thresholds used throughout the engine.

Units are whatever the host application chooses; the engine only assumes
they are consistent (a step of 1.0 is "one frame" in the default setup).
"""
from __future__ import annotations

# Mass given to particles created without an explicit mass.
DEFAULT_MASS: float = 1.0

# Global linear drag coefficient of a freshly built ParticleSystem.
DEFAULT_DRAG: float = 0.001

# Default step size used by ParticleSystem.tick() when none is supplied.
DEFAULT_DELTA_T: float = 1.0

# Default magnitude of the stand-alone Gravity helper (applied along +y).
DEFAULT_GRAVITY: float = 0.0

# Default coefficient of the stand-alone Drag helper.
DEFAULT_DRAG_COEFFICIENT: float = 0.01

# Settling integrator: consecutive slow steps tolerated before a particle is fixed.
DEFAULT_SETTLING_AGE: int = 50

# Settling integrator: speed below which a step counts as "slow".
SETTLING_EPSILON: float = 1e-4
