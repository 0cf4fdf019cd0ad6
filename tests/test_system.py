import logging

import numpy as np
import pytest

from particle_dynamics import (
    Gravity,
    IntegratorMethod,
    InvalidArgumentError,
    MissingReferenceError,
    Particle,
    ParticleSystem,
    Profiler,
    SimulationConfig,
    Vector3,
)
from particle_dynamics.core.integrators import ForwardEulerIntegrator, RungeKuttaIntegrator
from particle_dynamics.core.two_body import ForcePair, TwoBodyForce


class Tether(TwoBodyForce):
    """Constant unit pull of one end toward the other."""

    def force_pair(self):
        pull = Vector3.difference(self.other_end.position, self.one_end.position)
        return ForcePair.equal_and_opposite(pull.normalize())


def test_defaults():
    system = ParticleSystem()
    assert system.gravity.is_zero()
    assert system.drag == 0.001
    assert system.delta_t == 1.0
    assert system.time == 0.0
    assert isinstance(system.integrator, RungeKuttaIntegrator)
    assert system.integrator.method is IntegratorMethod.RUNGE_KUTTA


def test_make_particle_assigns_ids_and_registers():
    system = ParticleSystem()
    a = system.make_particle(2.0, 1.0, 2.0, 3.0)
    b = system.make_particle()
    assert (a.id, b.id) == (1, 2)
    assert a.mass == 2.0
    assert a.position == Vector3(1, 2, 3)
    assert system.number_of_particles() == 2
    assert system.get_particle(1) is b
    assert system.particles == (a, b)
    assert system.contains(a)


def test_add_particle_rejects_duplicates():
    system = ParticleSystem()
    p = system.add_particle(Particle(3.0))
    with pytest.raises(InvalidArgumentError):
        system.add_particle(p)
    with pytest.raises(MissingReferenceError):
        system.add_particle(None)


def test_collections_are_read_only_snapshots():
    system = ParticleSystem()
    a, b = system.make_particle(), system.make_particle(1.0, 1.0)
    system.make_spring(a, b, 1.0, 0.0, 1.0)
    assert isinstance(system.particles, tuple)
    assert isinstance(system.springs, tuple)
    assert isinstance(system.attractions, tuple)
    assert isinstance(system.custom_forces, tuple)


def test_forces_between_foreign_particles_rejected():
    system = ParticleSystem()
    a = system.make_particle()
    stranger = Particle(position=(1, 0, 0))
    with pytest.raises(InvalidArgumentError):
        system.make_spring(a, stranger, 1.0, 0.0, 1.0)
    with pytest.raises(InvalidArgumentError):
        system.make_attraction(stranger, a, 1.0, 1.0)
    with pytest.raises(InvalidArgumentError):
        system.add_custom_force(Tether(a, stranger))
    assert system.number_of_springs() == 0
    assert system.number_of_custom_forces() == 0


def test_make_spring_validates_parameters():
    system = ParticleSystem()
    a, b = system.make_particle(), system.make_particle(1.0, 1.0)
    with pytest.raises(InvalidArgumentError):
        system.make_spring(a, b, 1.0, 0.0, 0.0)
    with pytest.raises(InvalidArgumentError):
        system.make_attraction(a, b, 1.0, 0.0)
    assert system.number_of_springs() == 0
    assert system.number_of_attractions() == 0


def test_universal_forces_cannot_be_registered_as_custom():
    system = ParticleSystem()
    with pytest.raises(InvalidArgumentError):
        system.add_custom_force(Gravity(-1.0))


def test_removing_particle_removes_attached_forces(caplog):
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle(1.0, 1.0)
    c = system.make_particle(1.0, 2.0)
    spring_ab = system.make_spring(a, b, 1.0, 0.0, 1.0)
    att_bc = system.make_attraction(b, c, 1.0, 0.5)
    tether_ac = system.add_custom_force(Tether(a, c))

    assert set(map(id, system.forces_on(b))) == {id(spring_ab), id(att_bc)}

    with caplog.at_level(logging.DEBUG, logger="particle_dynamics.system"):
        removed = system.remove_particle(b)

    assert removed is b
    assert not system.contains(b)
    assert system.particles == (a, c)
    assert system.springs == ()
    assert system.attractions == ()
    assert system.custom_forces == (tether_ac,)
    assert "2 attached force" in caplog.text

    assert system.remove_particle(b) is None


def test_remove_particle_by_index():
    system = ParticleSystem()
    a, b = system.make_particle(), system.make_particle()
    assert system.remove_particle(0) is a
    assert system.particles == (b,)
    with pytest.raises(IndexError):
        system.remove_particle(5)


def test_remove_forces_by_object_and_index():
    system = ParticleSystem()
    a, b = system.make_particle(), system.make_particle(1.0, 1.0)
    s1 = system.make_spring(a, b, 1.0, 0.0, 1.0)
    s2 = system.make_spring(a, b, 2.0, 0.0, 1.0)
    att = system.make_attraction(a, b, 1.0, 1.0)

    assert system.remove_spring(s1) is s1
    assert system.remove_spring(s1) is None
    assert system.remove_spring(0) is s2
    assert system.remove_attraction(att) is att
    assert system.number_of_springs() == 0
    assert system.number_of_attractions() == 0


def test_add_prebuilt_forces():
    from particle_dynamics import Attraction, Spring

    system = ParticleSystem()
    a, b = system.make_particle(), system.make_particle(1.0, 2.0)
    s = system.add_spring(Spring(a, b, 1.0, 0.0, 1.0))
    att = system.add_attraction(Attraction(a, b, 1.0, 1.0))
    assert system.get_spring(0) is s
    assert system.get_attraction(0) is att
    with pytest.raises(InvalidArgumentError):
        system.add_spring(s)


def test_accumulate_forces_adds_gravity_and_drag_to_every_particle():
    system = ParticleSystem(gravity=(0.0, -2.0, 0.0), drag=0.5)
    free = system.make_particle(3.0)
    free.velocity = (2, 0, 0)
    fixed = system.make_particle().make_fixed()

    system.accumulate_forces()
    # gravity is not scaled by mass
    assert np.allclose(free.force.to_array(), [-1.0, -2.0, 0.0])
    assert np.allclose(fixed.force.to_array(), [0.0, -2.0, 0.0])

    system.clear_forces()
    assert free.force.is_zero() and fixed.force.is_zero()


def test_accumulate_forces_starts_from_zero_each_pass():
    system = ParticleSystem(gravity=-1.0, drag=0.0)
    p = system.make_particle()
    p.add_force(Vector3(100, 0, 0))
    system.accumulate_forces()
    system.accumulate_forces()
    assert p.force == Vector3(0, -1, 0)


def test_custom_forces_are_applied_each_pass():
    system = ParticleSystem(drag=0.0)
    a, b = system.make_particle(), system.make_particle(1.0, 3.0)
    system.add_custom_force(Tether(a, b))
    system.accumulate_forces()
    assert a.force == Vector3(1, 0, 0)
    assert b.force == Vector3(-1, 0, 0)


def test_gravity_and_drag_setters():
    system = ParticleSystem(gravity=-9.8)
    assert system.gravity == Vector3(0, -9.8, 0)

    system.set_gravity(1, 2, 3)
    assert system.gravity == Vector3(1, 2, 3)
    system.set_gravity(-1.0)
    assert system.gravity == Vector3(0, -1, 0)

    copy = system.gravity
    copy.scale(10)
    assert system.gravity == Vector3(0, -1, 0)

    system.drag = 0.2
    assert system.set_drag(0.3).drag == 0.3
    with pytest.raises(InvalidArgumentError):
        system.drag = float("inf")


def test_tick_advances_time_and_validates_dt():
    system = ParticleSystem(delta_t=0.25)
    system.tick().tick(0.5)
    assert system.time == pytest.approx(0.75)

    with pytest.raises(InvalidArgumentError):
        system.tick(0.0)
    with pytest.raises(InvalidArgumentError):
        system.tick(-1.0)
    with pytest.raises(InvalidArgumentError):
        system.delta_t = 0.0
    with pytest.raises(InvalidArgumentError):
        ParticleSystem(delta_t=-1.0)


def test_set_integrator():
    system = ParticleSystem()
    system.set_integrator("forward_euler")
    assert isinstance(system.integrator, ForwardEulerIntegrator)

    system.set_integrator(IntegratorMethod.SETTLING_RUNGE_KUTTA, settling_age=3)
    assert system.integrator.settling_age == 3

    mine = RungeKuttaIntegrator(system)
    assert system.set_integrator(mine).integrator is mine

    with pytest.raises(InvalidArgumentError):
        system.set_integrator("leapfrog")
    with pytest.raises(InvalidArgumentError):
        system.set_integrator(RungeKuttaIntegrator(ParticleSystem()))
    with pytest.raises(MissingReferenceError):
        system.set_integrator(None)
    assert system.integrator is mine


@pytest.mark.parametrize("method, passes", [
    ("forward_euler", 1),
    ("modified_euler", 1),
    ("runge_kutta", 4),
])
def test_profiler_records_step_and_force_passes(method, passes):
    profiler = Profiler()
    system = ParticleSystem(integrator=method, profiler=profiler)
    system.make_particle()
    system.tick().tick()
    assert profiler.stats.count("step") == 2
    assert profiler.stats.count("forces") == 2 * passes
    summary = profiler.stats.summary()
    assert summary["step"]["n"] == 2
    assert summary["step"]["max_ms"] >= 0.0


def test_from_config():
    config = SimulationConfig(gravity=(0, -9.81, 0), drag=0.0, delta_t=0.01, integrator="modified_euler")
    system = ParticleSystem.from_config(config)
    assert system.gravity == Vector3(0, -9.81, 0)
    assert system.drag == 0.0
    assert system.delta_t == 0.01
    assert system.integrator.method is IntegratorMethod.MODIFIED_EULER


def test_clear():
    system = ParticleSystem()
    a, b = system.make_particle(), system.make_particle(1.0, 1.0)
    system.make_spring(a, b, 1.0, 0.0, 1.0)
    system.make_attraction(a, b, 1.0, 1.0)
    system.add_custom_force(Tether(a, b))
    system.clear()
    assert system.number_of_particles() == 0
    assert system.number_of_springs() == 0
    assert system.number_of_attractions() == 0
    assert system.number_of_custom_forces() == 0
    # ticking an empty system is fine
    system.tick()
