#!/usr/bin/env python3
"""
Shared constants for the Bezier Rope Simulator (screen pixels and frames).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physics defaults (per-frame units, tuned for a 60 Hz tick)
DEFAULT_SPRING_STIFFNESS = 0.15  # k
DEFAULT_DAMPING = 0.85  # c
STIFFNESS_RANGE = (0.01, 0.5)  # recommended; outside this the curve may explode
DAMPING_RANGE = (0.5, 0.99)
NORMALIZE_EPSILON = 1e-10

# Fixed-rate stepping
FRAME_RATE = 60
FRAME_DT = 1.0 / FRAME_RATE  # seconds of wall time per physics update
MAX_STEPS_PER_FRAME = 5  # cap catch-up after a stall

# Chain layout
DEFAULT_SEGMENT_COUNT = 3
P1_FRACTION = 0.33  # p1 sits at 33% of a segment's horizontal span
P2_FRACTION = 0.67

# Sampling / tangents
DEFAULT_CURVE_SAMPLES = 100
DEFAULT_TANGENT_COUNT = 10
DEFAULT_TANGENT_LENGTH = 40.0  # px

# Pointer mapping
POINTER_X_GAIN = 0.3
POINTER_Y_GAIN = 0.5
P1_Y_WEIGHT = 0.8
P2_Y_WEIGHT = 1.2

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 700
BACKGROUND_COLOR = (15, 17, 26)
CURVE_COLOR = (255, 255, 255)
GRADIENT_STOPS = ((255, 107, 107), (78, 205, 196), (69, 183, 209))  # #ff6b6b #4ecdc4 #45b7d1
GLOW_COLOR = (78, 205, 196)
FIXED_POINT_COLOR = (255, 255, 255)
CONTROL_POINT_COLOR = (255, 107, 107)
JUNCTION_POINT_COLOR = (78, 205, 196)
CONTROL_POLYGON_COLOR = (70, 72, 84)
HUD_COLOR = (200, 200, 200)
CURVE_WIDTH = 4
ARROW_HEAD_SIZE = 8

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
