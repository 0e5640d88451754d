"""Motion and emitter tuning constants.

Centralizes the numeric defaults shared by movers, particles and emitters
so presets and tests agree on a single source of truth.
"""

import math

# Timing
FRAME_RATE_BASELINE = 60  # lifespans count down in ticks at this rate
DEFAULT_DT = 1 / 60  # seconds per tick when the caller passes nothing

# Physics
DEFAULT_GRAVITY = 9.8  # magnitude used by Mover.apply_gravity()
DEFAULT_MAX_FORCE = 0.1  # steering clamp for seek / flee
ATTRACT_MIN_DISTANCE = 10  # separation clamp preventing force blow-up
ATTRACT_MAX_DISTANCE = 100  # beyond this attract() is a no-op
NOISE_OFFSET_RANGE = 1000  # per-mover noise phase sampled in [0, this)
NOISE_OCTAVES = 4
NOISE_PERSISTENCE = 0.5
NOISE_Y_PHASE = 1000  # decorrelates the y-axis noise sample
DEFAULT_RESTITUTION = 0.8  # bounce energy retention for collisions / bounds

# Particles
DEFAULT_PARTICLE_LIFESPAN = 60  # ticks (one second at the baseline)

# Emitters
EMITTER_PARTICLE_COUNT = 50
EMITTER_EMISSION_RATE = 10  # particles per second (continuous pattern)
EMITTER_PARTICLE_LIFESPAN = 120  # ticks
EMITTER_VELOCITY_MIN = (-50.0, -50.0)
EMITTER_VELOCITY_MAX = (50.0, 50.0)
EMITTER_SIZE_MIN = 2.0
EMITTER_SIZE_MAX = 8.0
EMITTER_SPREAD = math.pi / 4  # radians
WAVE_BATCH_SIZE = 10  # particles per wave
WAVE_INTERVAL = 1.0  # seconds between waves
DEFAULT_PALETTE = ("#ff6b6b", "#4ecdc4", "#45b7d1", "#ffa726", "#9c27b0")

# Visual variants: (default size, default color)
DOT_DEFAULTS = (3.0, "#ff6b6b")
SQUARE_DEFAULTS = (6.0, "#4ecdc4")
TRIANGLE_DEFAULTS = (6.0, "#45b7d1")
STAR_DEFAULTS = (8.0, "#ffa726")
STAR_SPIKES = 5
STAR_INNER_RATIO = 0.4

__all__ = [name for name in globals().keys() if name.isupper()]
