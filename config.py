"""
config.py — EVERGREEN Central Configuration
=============================================
Single source of truth for all constants.
"""

import math

# ─── Tree Modes ───
MODE_FORMED = "formed"
MODE_CHAOS = "chaos"

# ─── Mode Gestures ───
GESTURE_OPEN_PALM = "OPEN_PALM"
GESTURE_FIST = "FIST"
GESTURE_NONE = "NONE"

# ─── Perception ───
CONF_THRESH = 0.6
EMA_ALPHA = 0.4
HAND_MARGIN = 30           # px padding around detected hand bbox
HAND_LOST_THRESHOLD = 15   # consecutive empty frames before "hand lost"
SMOOTHER_BUFFER = 5
SMOOTHER_COOLDOWN = 0.8    # seconds between stable gesture changes
HAND_SCALE_GAIN = 3.0      # pinch spread / palm size → hand scale

# ─── Hand Scale ───
HAND_SCALE_MIN = 0.3
HAND_SCALE_MAX = 2.5
HAND_SCALE_DEFAULT = 1.0

# ─── Orbit Camera ───
CAMERA_TARGET_Y = 4.0
CAMERA_START_DISTANCE = 20.0
AZIMUTH_RANGE = 3.0        # × π over the full x sweep
POLAR_OFFSET = 0.2
POLAR_SENSITIVITY = 2.0
MIN_POLAR = math.pi / 4
MAX_POLAR = math.pi / 1.8
MIN_DISTANCE = 8.0
MAX_DISTANCE = 30.0
ANGLE_LERP_SPEED = 8.0
DISTANCE_LERP_SPEED = 5.0

# ─── Placement ───
TREE_HEIGHT = 9.0
TREE_MAX_RADIUS = 5.0
PLACARD_RADIUS_OFFSET = 0.8
GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))   # ≈ 2.399963
CHAOS_BASE_Y = 5.0
CHAOS_BASE_Z = 16.0        # camera z (20) pulled 4 units toward the tree
CHAOS_DISTANCE = (3.0, 7.0)
CHAOS_HEIGHT_SPREAD = 8.0
CHAOS_X_STRETCH = 1.2
CHAOS_Z_SQUASH = 0.5
SPEED_RANGE = (0.8, 2.3)

# ─── Placard Animation ───
SCENE_OFFSET = (0.0, -4.0, 0.0)   # tree group translation in world space
FORMED_TURN_SPEED = 2.0
CHAOS_TURN_SPEED = 3.0
PHASE_RANGE = 100.0
PLACARD_SCALE_MIN = 0.8
PLACARD_SCALE_MAX = 2.0
SWAY_FREQ, SWAY_AMP = 2.0, 0.05
TILT_FREQ, TILT_AMP = 1.5, 0.03
WOBBLE_X_FREQ, WOBBLE_X_AMP = 1.5, 0.03
WOBBLE_Z_FREQ, WOBBLE_Z_AMP = 1.2, 0.03

# ─── Particles ───
FOLIAGE_COUNT = 1500
FOLIAGE_CHAOS_RADIUS = 15.0
FOLIAGE_SPEED_RANGE = (0.5, 1.5)
ORNAMENT_COUNT = 120
ORNAMENT_CHAOS_RADIUS = 12.0
ORNAMENT_SPEED_RANGE = (0.6, 1.8)

# ─── Photos ───
PHOTO_DIR = "photos"
MAX_PHOTOS = 32
PHOTO_THUMB = 128          # px, square thumbnail edge

# ─── Renderer ───
WIN_W, WIN_H = 960, 720
FPS = 60
FOV_DEG = 45.0
NEAR_PLANE = 0.1
