# comet.py

import logging
import numpy as np
import constants

logger = logging.getLogger("constellation_clock")

SECONDS_PER_TURN = 60.0

def comet_position(smooth_seconds: float,
                   orbit_radius: float = constants.ANCHOR_RADIUS + constants.COMET_ORBIT_MARGIN) -> np.ndarray:
    """
    Position of the comet head for a fractional second count in [0, 60).

    Seconds map linearly onto one full turn starting at -90 degrees (the top),
    so 60 and 0 land on the same point.
    """
    angle = np.radians(-90.0 + smooth_seconds / SECONDS_PER_TURN * 360.0)
    return np.array([np.cos(angle), np.sin(angle)]) * orbit_radius


class ParticleTrail:
    """
    The live particle set behind the comet, as NumPy arrays (Structure of Arrays).

    Data Contract:
    - Inputs:
        - rng (np.random.Generator): Source of particle sizes and jitter.
    - Outputs: None. spawn() and tick() modify the internal arrays.
    - Invariants:
        - All arrays have the same length (the live particle count).
        - Every live particle has life > 0 after tick().
        - There is no explicit cap: with one spawn per tick and a lifetime of
          PARTICLE_INITIAL_LIFE / PARTICLE_DECAY ticks (50), the live set never
          holds more than 50 particles.
    """
    def __init__(self, rng: np.random.Generator):
        self.rng = rng
        self.positions = np.zeros((0, 2), dtype=float)
        self.lives = np.zeros(0, dtype=float)
        self.hues = np.zeros(0, dtype=float)
        self.sizes = np.zeros(0, dtype=float)

    def __len__(self):
        return len(self.lives)

    def spawn(self, position):
        """Adds one particle at the given position."""
        size = self.rng.uniform(constants.PARTICLE_MIN_SIZE, constants.PARTICLE_MAX_SIZE)
        self.positions = np.vstack((self.positions, np.asarray(position, dtype=float).reshape(1, 2)))
        self.lives = np.append(self.lives, constants.PARTICLE_INITIAL_LIFE)
        self.hues = np.append(self.hues, constants.PARTICLE_HUE)
        self.sizes = np.append(self.sizes, size)

    def tick(self):
        """
        Ages every particle, jitters its position and removes the dead ones.
        Returns the number of particles removed.
        """
        if len(self) == 0:
            return 0
        self.lives -= constants.PARTICLE_DECAY
        jitter = constants.PARTICLE_JITTER
        self.positions += self.rng.uniform(-jitter, jitter, self.positions.shape)

        alive = self.lives > 0
        removed = int(np.count_nonzero(~alive))
        if removed:
            self.positions = self.positions[alive]
            self.lives = self.lives[alive]
            self.hues = self.hues[alive]
            self.sizes = self.sizes[alive]
        return removed
