"""Comet orbit and particle trail lifecycle."""

import numpy as np
import pytest

from comet import ParticleTrail, comet_position


# =============================================================================
# ORBIT
# =============================================================================

def test_comet_starts_at_top():
    np.testing.assert_allclose(comet_position(0.0), [0.0, -260.0], atol=1e-9)


def test_comet_half_minute_is_opposite():
    np.testing.assert_allclose(comet_position(30.0), -comet_position(0.0), atol=1e-9)


def test_comet_quarter_minute_is_right():
    np.testing.assert_allclose(comet_position(15.0), [260.0, 0.0], atol=1e-9)


def test_comet_continuous_across_wrap():
    before = comet_position(59.999)
    after = comet_position(0.0)
    assert np.linalg.norm(before - after) < 0.05


def test_comet_stays_on_orbit():
    for seconds in np.linspace(0.0, 59.99, 97):
        assert np.linalg.norm(comet_position(seconds)) == pytest.approx(260.0)


# =============================================================================
# PARTICLES
# =============================================================================

def test_spawn_sets_initial_state(rng):
    trail = ParticleTrail(rng)
    trail.spawn((10.0, -5.0))
    assert len(trail) == 1
    np.testing.assert_array_equal(trail.positions[0], [10.0, -5.0])
    assert trail.lives[0] == 100.0
    assert trail.hues[0] == 50.0
    assert 2.0 <= trail.sizes[0] <= 6.0


def test_life_drops_by_two_and_particle_dies_after_fifty_ticks(rng):
    trail = ParticleTrail(rng)
    trail.spawn((0.0, 0.0))
    for tick in range(1, 50):
        trail.tick()
        assert len(trail) == 1
        assert trail.lives[0] == 100.0 - 2.0 * tick
    removed = trail.tick()
    assert removed == 1
    assert len(trail) == 0


def test_jitter_is_bounded(rng):
    trail = ParticleTrail(rng)
    for k in range(20):
        trail.spawn((float(k), 0.0))
    before = trail.positions.copy()
    trail.tick()
    assert np.all(np.abs(trail.positions - before) <= 1.0)


def test_steady_state_population(rng):
    trail = ParticleTrail(rng)
    peak = 0
    for _ in range(300):
        trail.spawn(comet_position(0.0))
        peak = max(peak, len(trail))
        trail.tick()
    assert peak == 50
    assert len(trail) == 49
    assert np.all(trail.lives > 0)


def test_tick_on_empty_trail(rng):
    trail = ParticleTrail(rng)
    assert trail.tick() == 0
    assert len(trail) == 0
