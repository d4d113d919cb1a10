# animation_state.py

import logging
import numpy as np
from anchor_layout import AnchorLayout
from comet import ParticleTrail
from connection_scheduler import build_schedule
from noise_field import NoiseField

logger = logging.getLogger("constellation_clock")

class AnimationState:
    """
    Everything that outlives a single frame: the anchor layout, the fixed
    connection schedule, the live particle trail and the frame counter.

    Data Contract:
    - Inputs:
        - rng (np.random.Generator): The master seeded random number generator.
          The noise permutation and the particle randomness are drawn from it.
    - Side Effects: None at construction beyond logging.
    - Invariants: `schedule` and the anchor base positions are built once and
      never recomputed, including on window resize.
    """
    def __init__(self, rng: np.random.Generator):
        self.rng = rng
        self.noise = NoiseField(rng)
        self.anchors = AnchorLayout()
        self.schedule = build_schedule(self.anchors.angles)
        self.trail = ParticleTrail(rng)
        self.frame_count = 0
        self.last_minute = None

    def advance_frame(self) -> int:
        """Starts a new frame and returns its 1-based number."""
        self.frame_count += 1
        return self.frame_count
