# constants.py

"""
Application Constants

This module defines the fixed design values of the clock face. None of these
are read from config.json; the visual design is not meant to be tuned per run.

Data Contract:
- All values are immutable constants.
- Angles are in degrees, lengths in pixels, colors are HSBA tuples in the
  (360, 100, 100, 100) model unless noted otherwise.
"""

# Screen dimensions (initial; the window is resizable)
WIDTH = 1200  # Pixels
HEIGHT = 900  # Pixels

# Framerate
FPS = 60  # Frames per second

# Window Title
TITLE = "Constellation Clock"

# --- Anchor Layout ---
ANCHOR_COUNT = 12
ANCHOR_RADIUS = 200.0  # Radius of the 12-hour circle
ANCHOR_START_ANGLE = -90.0  # Index 0 sits at the top
ANCHOR_END_ANGLE = 270.0

# Drift: offset = clip((noise - 0.5) * DRIFT_GAIN, -0.5, 0.5) * DRIFT_RANGE on each axis
DRIFT_RANGE = 15.0
DRIFT_GAIN = 1.8  # Stretch around 0.5 before clipping
DRIFT_TIME_STEP = 0.01  # Noise time coordinate advanced per frame
# Noise x-coordinates stay off the integer lattice at every octave, where
# gradient noise is pinned to 0.5.
DRIFT_ANCHOR_PHASE = 0.31
DRIFT_ANCHOR_SPACING = 10.37  # Noise x-coordinate distance between anchors
DRIFT_Y_OFFSET = 100.53  # Decorrelates the y offset from the x offset

# Noise field
NOISE_OCTAVES = 4
NOISE_FALLOFF = 0.5

# --- Connection Scheduler ---
CONNECTION_COUNT = ANCHOR_COUNT * (ANCHOR_COUNT - 1) // 2  # 66
INNER_PER_EVEN_SLOT = 4
INNER_PER_ODD_SLOT = 5
LAST_MINUTE = 59

# --- Comet / Particles ---
COMET_ORBIT_MARGIN = 60.0  # Orbit radius = ANCHOR_RADIUS + margin
COMET_HEAD_SIZE = 15
COMET_HEAD_COLOR = (50, 80, 100, 100)
COMET_GLOW = 30
COMET_GLOW_COLOR = (50, 100, 100, 100)

PARTICLE_INITIAL_LIFE = 100.0
PARTICLE_DECAY = 2.0  # Life lost per tick -> 50 tick lifetime
PARTICLE_HUE = 50.0
PARTICLE_MIN_SIZE = 2.0
PARTICLE_MAX_SIZE = 6.0
PARTICLE_JITTER = 1.0  # Uniform positional jitter per axis per tick
PARTICLE_SATURATION = 50
PARTICLE_BRIGHTNESS = 100

# --- Background ---
BACKGROUND_HUE_MIN = 220.0  # Hue at 00:xx
BACKGROUND_HUE_MAX = 300.0  # Hue at 23:xx
BACKGROUND_SATURATION = 80
BACKGROUND_BRIGHTNESS = 5

# --- Minute Web ---
WEB_COLOR = (200, 30, 90, 80)
WEB_WIDTH = 1
WEB_RECENT_COLOR = (200, 60, 100, 80)
WEB_RECENT_WIDTH = 2
WEB_RECENT_GLOW = 15
WEB_RECENT_GLOW_COLOR = (200, 60, 100, 100)

# --- Anchor Stars ---
PULSE_RATE = 0.05  # Radians per frame
ANCHOR_SIZE = 5
ANCHOR_GLOW = 5
ANCHOR_COLOR = (200, 10, 40, 100)
ANCHOR_GLOW_COLOR = (200, 20, 50, 100)
CURRENT_ANCHOR_BASE_SIZE = 10
CURRENT_ANCHOR_PULSE = 5
CURRENT_ANCHOR_BASE_GLOW = 25
CURRENT_ANCHOR_GLOW_PULSE = 10
CURRENT_ANCHOR_COLOR = (200, 30, 100, 100)
CURRENT_ANCHOR_GLOW_COLOR = (200, 40, 100, 100)

# Bloom effect settings
BLOOM_RADIUS = 8 # Downscale factor of the glow pass. Larger is more diffuse.
BLOOM_INTENSITY = 200 # The brightness of the glow (0-255).
GLOW_HALO_ALPHA = 60 # Alpha (0-100) of the halo drawn for glowing shapes.

# Diagnostics
DIAGNOSTICS_INTERVAL = 300  # Frames between debug log lines
