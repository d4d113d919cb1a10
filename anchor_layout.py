# anchor_layout.py

import logging
import numpy as np
import constants
from noise_field import NoiseField

logger = logging.getLogger("constellation_clock")

class AnchorLayout:
    """
    Holds the twelve hour anchors as NumPy arrays (Structure of Arrays).

    Anchor i sits at angle map(i, 0, count, -90, 270) degrees on a circle of
    the given radius, so index 0 is at the top and indices proceed clockwise
    in screen coordinates (y grows downward).

    Data Contract:
    - Inputs:
        - count (int): Number of anchors.
        - radius (float): Radius of the anchor circle in pixels.
    - Outputs: None. update_drift() modifies `positions` in place.
    - Invariants:
        - `angles` and `base_positions` never change after construction.
        - `positions` = `base_positions` + an offset bounded by
          DRIFT_RANGE / 2 on each axis.
    """
    def __init__(self, count: int = constants.ANCHOR_COUNT, radius: float = constants.ANCHOR_RADIUS):
        self.count = count
        self.radius = radius

        indices = np.arange(count, dtype=float)
        span = constants.ANCHOR_END_ANGLE - constants.ANCHOR_START_ANGLE
        self.angles = constants.ANCHOR_START_ANGLE + indices * (span / count)
        radians = np.radians(self.angles)
        self.base_positions = np.column_stack((np.cos(radians), np.sin(radians))) * radius
        self.base_positions.setflags(write=False)
        self.angles.setflags(write=False)
        self.positions = self.base_positions.copy()

        # Per-anchor noise x-coordinates, spaced apart to decorrelate anchors.
        self._noise_x = constants.DRIFT_ANCHOR_PHASE + indices * constants.DRIFT_ANCHOR_SPACING
        self._noise_x_for_y = self._noise_x + constants.DRIFT_Y_OFFSET

        logger.info(f"AnchorLayout created: {count} anchors on radius {radius}.")

    def drift_offsets(self, frame_count: int, noise: NoiseField) -> np.ndarray:
        """
        Returns the (count, 2) drift offsets for a frame. Pure function of the
        frame count and the noise field.
        """
        t = np.full(self.count, frame_count * constants.DRIFT_TIME_STEP)
        samples = np.column_stack((
            noise.sample_many(self._noise_x, t),
            noise.sample_many(self._noise_x_for_y, t),
        ))
        stretched = np.clip((samples - 0.5) * constants.DRIFT_GAIN, -0.5, 0.5)
        return stretched * constants.DRIFT_RANGE

    def update_drift(self, frame_count: int, noise: NoiseField):
        """Recomputes every anchor's current position for this frame."""
        self.positions = self.base_positions + self.drift_offsets(frame_count, noise)
        return self.positions
