import math

import pygame
import pytest

from motion.particle_emitter import (
    EmissionPattern,
    EmitterConfig,
    EmitterState,
    ParticleEmitter,
    SizeRange,
    VectorRange,
)
from motion.services import build_context
from motion.vector import Vector2
from motion.visuals import StarVisual, TriangleVisual

DT = 1 / 60


def make_emitter(ctx, **options):
    return ParticleEmitter(EmitterConfig(**options), context=ctx)


def test_burst_emits_once(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.BURST, particle_count=5)
    assert e.state is EmitterState.ACTIVE_EMITTING
    e.update(DT)
    assert e.get_particle_count() == 5
    assert e.is_active is False
    e.update(DT)
    assert e.get_particle_count() == 5
    assert e.particles_emitted == 5


def test_continuous_rate_over_one_second(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.CONTINUOUS, emission_rate=10, particle_count=100)
    for _ in range(60):
        e.update(DT)
        assert e.get_particle_count() <= 100
    assert 9 <= e.particles_emitted <= 11
    assert e.get_particle_count() == e.particles_emitted
    assert e.is_active is True


def test_continuous_stops_at_quota(ctx):
    e = make_emitter(ctx, pattern="continuous", emission_rate=1000, particle_count=5)
    e.update(1.0)
    assert e.get_particle_count() == 5
    assert e.is_active is False
    e.update(1.0)
    assert e.particles_emitted == 5


def test_zero_rate_emits_nothing(ctx):
    e = make_emitter(ctx, emission_rate=0, particle_count=5)
    for _ in range(120):
        e.update(DT)
    assert e.get_particle_count() == 0
    assert e.is_active is True


def test_wave_batches(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.WAVE, particle_count=25, particle_lifespan=10_000)
    e.update(0.5)
    assert e.get_particle_count() == 0
    e.update(0.5)
    assert e.get_particle_count() == 10
    e.update(1.0)
    assert e.get_particle_count() == 20
    e.update(1.0)
    assert e.get_particle_count() == 25
    assert e.is_active is False


def test_dead_particles_recycled_in_place(ctx):
    e = make_emitter(
        ctx,
        pattern=EmissionPattern.CONTINUOUS,
        emission_rate=10,
        particle_count=100,
        particle_lifespan=6,
    )
    while e.get_particle_count() == 0:
        e.update(DT)
    first = e.particles[0]
    before_velocity = first.velocity

    counts = [e.get_particle_count()]
    recycled = False
    for _ in range(10):
        previous = first.lifespan
        e.update(DT)
        counts.append(e.get_particle_count())
        if first.lifespan > previous:
            recycled = True
            break

    assert recycled
    assert any(p is first for p in e.particles)
    assert first.is_dead is False
    assert first.lifespan == 6
    assert first.position == e.position
    assert first.velocity != before_velocity
    assert counts == sorted(counts)


def test_inactive_emitter_drops_dead_particles(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.BURST, particle_count=3, particle_lifespan=2)
    e.update(DT)
    assert e.get_particle_count() == 3
    assert e.is_finished() is False
    assert e.state is EmitterState.INACTIVE
    e.update(DT)
    assert e.get_particle_count() == 0
    assert e.is_finished() is True
    assert e.state is EmitterState.FINISHED


def test_not_finished_while_active(ctx):
    e = make_emitter(ctx, emission_rate=10, particle_count=100)
    e.update(DT)
    assert e.get_particle_count() == 0
    assert e.is_finished() is False


def test_emitter_lifespan_deactivates(ctx):
    e = make_emitter(ctx, lifespan=30, emission_rate=10, particle_count=1000)
    for _ in range(29):
        e.update(DT)
    assert e.is_active is True
    e.update(DT)
    assert e.is_active is False


def test_gravity_applied_before_integration(ctx):
    e = make_emitter(
        ctx,
        pattern=EmissionPattern.BURST,
        particle_count=1,
        direction=Vector2.zero(),
        velocity_range=VectorRange(Vector2.zero(), Vector2.zero()),
        gravity=Vector2(0, 100),
    )
    e.update(0.1)
    p = e.particles[0]
    assert p.velocity.y == pytest.approx(10)
    assert p.position.y == pytest.approx(1.0)


def test_directional_sampling(ctx):
    e = make_emitter(
        ctx,
        pattern=EmissionPattern.BURST,
        particle_count=20,
        direction=Vector2(1, 0),
        spread=0,
        velocity_range=VectorRange(Vector2(0, 30), Vector2(30, 0)),
    )
    e.update(1e-9)
    for p in e.particles:
        assert p.velocity.x == pytest.approx(30)
        assert p.velocity.y == pytest.approx(0, abs=1e-9)


def test_spread_bounds_angles(ctx):
    spread = math.pi / 3
    e = make_emitter(ctx, pattern=EmissionPattern.BURST, particle_count=50, direction=Vector2.up(), spread=spread)
    e.update(1e-9)
    for p in e.particles:
        assert p.velocity.angle_to(Vector2.up()) <= spread / 2 + 1e-9


def test_per_axis_sampling_without_direction(ctx):
    e = make_emitter(
        ctx,
        pattern=EmissionPattern.BURST,
        particle_count=50,
        direction=Vector2.zero(),
        velocity_range=VectorRange(Vector2(-5, 10), Vector2(5, 20)),
        acceleration_range=VectorRange(Vector2(1, 1), Vector2(2, 2)),
    )
    # Sample without integrating so velocities stay as drawn
    for _ in range(50):
        v = e._sample_velocity()
        a = e._sample_acceleration()
        assert -5 <= v.x <= 5 and 10 <= v.y <= 20
        assert 1 <= a.x <= 2 and 1 <= a.y <= 2


def test_visual_pools(ctx):
    e = make_emitter(
        ctx,
        pattern=EmissionPattern.BURST,
        particle_count=30,
        colors=["#123456", "#654321"],
        size_range=SizeRange(2, 3),
        friction=0.25,
    )
    e.update(DT)
    for p in e.particles:
        assert p.color in ("#123456", "#654321")
        assert 2 <= p.size <= 3
        assert p.friction == 0.25
        assert p.max_lifespan == 120


def test_setters_apply_to_new_particles_only(ctx):
    e = make_emitter(ctx, emission_rate=60, particle_count=100, colors=["#aaaaaa"])
    for _ in range(5):
        e.update(DT)
    old = list(e.particles)
    assert old
    e.set_colors(["#000000"])
    e.set_size_range(SizeRange(9, 9))
    for _ in range(5):
        e.update(DT)
    assert all(p.color == "#aaaaaa" for p in old)
    new = [p for p in e.particles if p not in old]
    assert new and all(p.color == "#000000" and p.size == 9 for p in new)


def test_motion_setters_leave_live_particles_alone(ctx):
    e = make_emitter(
        ctx,
        emission_rate=60,
        particle_count=100,
        direction=Vector2.up(),
        spread=0,
        velocity_range=VectorRange(Vector2(0, 10), Vector2(0, 10)),
    )
    for _ in range(5):
        e.update(DT)
    old = list(e.particles)
    assert old
    snapshot = {id(p): (p.velocity, p.position) for p in old}

    e.set_position(Vector2(200, 100))
    e.set_direction(Vector2.zero())
    e.set_velocity_range(VectorRange(Vector2(5, 5), Vector2(5, 5)))
    e.set_acceleration_range(VectorRange(Vector2(60, 0), Vector2(60, 0)))
    for _ in range(3):
        e.update(DT)

    for p in old:
        velocity, position = snapshot[id(p)]
        assert p.velocity == velocity
        assert p.position.x == pytest.approx(position.x + velocity.x * 3 * DT)
        assert p.position.y == pytest.approx(position.y + velocity.y * 3 * DT)

    new = [p for p in e.particles if p not in old]
    assert len(new) == 3
    for p in new:
        # One tick of the sampled acceleration is integrated at creation.
        assert p.velocity.x == pytest.approx(6)
        assert p.velocity.y == pytest.approx(5)
        assert p.position.x == pytest.approx(200, abs=1)
        assert p.position.y == pytest.approx(100, abs=1)


def test_direction_and_spread_setters_steer_sampling(ctx):
    e = make_emitter(ctx, velocity_range=VectorRange(Vector2(0, 20), Vector2(0, 20)))
    e.set_direction(Vector2(1, 0))
    e.set_spread(0)
    for _ in range(10):
        v = e._sample_velocity()
        assert v.x == pytest.approx(20)
        assert v.y == pytest.approx(0, abs=1e-9)


def test_set_friction_reaches_recycled_particles(ctx):
    e = make_emitter(ctx, emission_rate=60, particle_count=3, particle_lifespan=0.5)
    e.update(DT)
    first = e.particles[0]
    assert first.friction == 0.0

    e.set_friction(0.5)
    e.update(DT)
    assert e.particles[0] is first
    assert first.is_dead is False
    assert first.friction == 0.5
    assert all(p.friction == 0.5 for p in e.particles)

    e.set_friction(1.5)
    assert e.config.friction == 1.0


def test_set_gravity_changes_next_tick(ctx):
    e = make_emitter(
        ctx,
        pattern=EmissionPattern.BURST,
        particle_count=1,
        direction=Vector2.zero(),
        velocity_range=VectorRange(Vector2.zero(), Vector2.zero()),
    )
    e.update(0.1)
    p = e.particles[0]
    assert p.velocity == Vector2.zero()

    e.set_gravity(Vector2(0, 100))
    e.update(0.1)
    assert p.velocity.y == pytest.approx(10)
    assert p.velocity.x == pytest.approx(0)


def test_set_emission_count_restarts_burst(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.BURST, particle_count=3)
    e.update(DT)
    assert e.get_particle_count() == 3
    e.set_emission_count(5)
    assert e.get_particle_count() == 5
    assert e.is_active is False
    e.set_emission_count(5)
    assert e.get_particle_count() == 5


def test_reset_returns_to_emitting(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.BURST, particle_count=2, particle_lifespan=1)
    e.update(DT)
    e.update(DT)
    assert e.is_finished()
    e.reset()
    assert e.state is EmitterState.ACTIVE_EMITTING
    assert e.get_particle_count() == 0
    e.set_particle_lifespan(100)
    e.update(DT)
    assert e.get_particle_count() == 2
    assert e.particles_emitted == 2


def test_caller_config_not_aliased(ctx):
    cfg = EmitterConfig(colors=["#ffffff"])
    e = ParticleEmitter(cfg, context=ctx)
    e.set_colors(["#000000"])
    e.set_emission_rate(3)
    assert cfg.colors == ["#ffffff"]
    assert cfg.emission_rate == 10


def test_seeded_contexts_reproduce_emission():
    def run(seed):
        e = ParticleEmitter(EmitterConfig(pattern=EmissionPattern.BURST, particle_count=10), context=build_context(seed))
        e.update(DT)
        return [(p.velocity, p.color, p.size) for p in e.particles]

    assert run(42) == run(42)
    assert run(42) != run(43)


@pytest.mark.parametrize(
    "options",
    [
        {"particle_count": -1},
        {"emission_rate": -0.5},
        {"colors": []},
        {"size_range": SizeRange(5, 1)},
        {"lifespan": 0},
        {"friction": 1.5},
        {"pattern": "spiral"},
    ],
)
def test_invalid_config_rejected(options):
    with pytest.raises(ValueError):
        EmitterConfig(**options)


def test_presets(ctx):
    fireworks = ParticleEmitter.create_fireworks(Vector2(100, 100), context=ctx)
    fireworks.update(DT)
    assert fireworks.get_particle_count() == 30
    assert all(isinstance(p.visual, StarVisual) for p in fireworks.particles)
    assert fireworks.is_active is False

    magic = ParticleEmitter.create_magic(Vector2(0, 0), context=ctx)
    for _ in range(60):
        magic.update(DT)
    assert magic.particles and all(isinstance(p.visual, TriangleVisual) for p in magic.particles)
    # Emitted upward on screen
    assert all(p.velocity.y < 0 for p in magic.particles)

    smoke = ParticleEmitter.create_smoke(Vector2(0, 0), context=ctx)
    assert smoke.config.pattern is EmissionPattern.CONTINUOUS


def test_draw_commands_and_draw(ctx):
    e = make_emitter(ctx, pattern=EmissionPattern.BURST, particle_count=4, position=Vector2(20, 20))
    e.update(DT)
    commands = e.get_draw_commands()
    assert len(commands) == 4
    for cmd, p in zip(commands, e.particles):
        assert (cmd.x, cmd.y) == (p.position.x, p.position.y)
        assert cmd.alpha == p.get_alpha()
        assert cmd.color == p.color

    surface = pygame.Surface((40, 40))
    e.draw(surface)
