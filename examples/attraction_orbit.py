from particle_dynamics import ParticleSystem
from particle_dynamics.core.invariants import linear_momentum

system = ParticleSystem(gravity=0.0, drag=0.0, delta_t=1/200, integrator="runge_kutta")

# Two equal masses one unit apart; k m^2 / d^2 = m v^2 / r gives v = 0.6 for k = 0.72
a = system.make_particle(1.0, -0.5, 0.0, 0.0)
b = system.make_particle(1.0, +0.5, 0.0, 0.0)
a.velocity = (0.0, 0.6, 0.0)
b.velocity = (0.0, -0.6, 0.0)
system.make_attraction(a, b, strength=0.72, minimum_distance=0.05)

for _ in range(2000):
    system.tick()

print("t:", system.time)
print("a pos", a.position, "v", a.velocity)
print("b pos", b.position, "v", b.velocity)
print("separation:", a.distance_to(b), "momentum:", linear_momentum(system.particles))
