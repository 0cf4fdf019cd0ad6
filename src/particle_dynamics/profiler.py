# MIT License (see LICENSE)
"""
Lightweight timing of simulation phases.

A ParticleSystem built with a Profiler records two sections:
    "step"   - one sample per tick()
    "forces" - one sample per force accumulation pass (four per RK4 step)

Example:
    profiler = Profiler()
    system = ParticleSystem(profiler=profiler)
    ...
    system.tick()
    print(profiler.stats.summary()["step"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def count(self, name: str) -> int:
        """Number of samples recorded for name (0 if never timed)."""
        return len(self.samples.get(name, ()))

    def reset(self) -> None:
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to a dict with keys 'n', 'total_ms',
            'mean_ms' and 'max_ms'.
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "total_ms": 1e3 * total,
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under name."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
