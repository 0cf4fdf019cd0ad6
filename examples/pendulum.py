from particle_dynamics import ParticleSystem
from particle_dynamics.core.invariants import kinetic_energy, spring_potential_energy

system = ParticleSystem(gravity=-9.81, drag=0.0, delta_t=1/240, integrator="runge_kutta")

anchor = system.make_particle(1.0, 0.0, 0.0, 0.0).make_fixed()
bob = system.make_particle(1.0, 0.2, -1.0, 0.0)

# A stiff spring stands in for a rigid rod
L = 1.0
system.make_spring(anchor, bob, strength=2000.0, damping=2.0, rest_length=L)

for _ in range(240):
    system.tick()

print("bob position:", bob.position, "distance:", bob.distance_to(anchor))
print("kinetic:", kinetic_energy(system.particles), "elastic:", spring_potential_energy(system.springs))
