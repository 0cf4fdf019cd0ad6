# examples/minimal_freefall.py
from particle_dynamics import ParticleSystem

system = ParticleSystem(gravity=-9.81, drag=0.0, delta_t=1/240, integrator="runge_kutta")

ball = system.make_particle(1.0, 0.0, 10.0, 0.0)

t_end = 1.0
while system.time < t_end - 1e-12:
    system.tick(min(system.delta_t, t_end - system.time))

print("t:", system.time)
print("pos:", system.particles[0].position)
print("vel:", system.particles[0].velocity)
