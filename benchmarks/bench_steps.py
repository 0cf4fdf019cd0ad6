"""
Microbenchmark: time per tick vs number of particles.
Particles form a square cloth: a grid with springs to the right and below,
the top row pinned.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from particle_dynamics import ParticleSystem, Profiler

def run(n: int, steps: int = 300, integrator: str = "runge_kutta"):
    prof = Profiler()
    system = ParticleSystem(
        gravity=-9.81,
        drag=0.01,
        delta_t=1/240,
        integrator=integrator,
        profiler=prof,
    )

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # spawn particles in a grid with small random jitter
    side = int(np.ceil(np.sqrt(n)))
    grid = {}
    for iy in range(side):
        for ix in range(side):
            if len(grid) >= n:
                break
            x = 0.1 * ix + 0.001 * float(rng.normal())
            y = -0.1 * iy + 0.001 * float(rng.normal())
            p = system.make_particle(0.1, x, y, 0.0)
            if iy == 0:
                p.make_fixed()
            grid[ix, iy] = p

    for (ix, iy), p in grid.items():
        for nb in ((ix + 1, iy), (ix, iy + 1)):
            if nb in grid:
                system.make_spring(p, grid[nb], strength=50.0, damping=0.5, rest_length=0.1)

    # warmup
    for _ in range(30):
        system.tick()
    prof.stats.reset()

    t0 = time.perf_counter()
    for _ in range(steps):
        system.tick()
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for n in [10, 50, 100, 250, 500]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        # print top sections
        for k in ["step", "forces"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
