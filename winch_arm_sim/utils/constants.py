"""
Shared constants for the winch_arm_sim package.

Holds the default arm geometry, travel limits, encoder offset and the
numeric tolerances used by the unit conversions.  Rotation limits are
expressed the way the absolute encoder reports them: as offset rotation
fractions in [0, 1).
"""

from __future__ import annotations

from typing import Tuple

# ---------------------------------------------------------------------------
# Numeric tolerances
# ---------------------------------------------------------------------------
DOUBLE_EPSILON: float = 1e-6

# ---------------------------------------------------------------------------
# Default arm geometry (metres)
# ---------------------------------------------------------------------------
HEIGHT_FROM_WINCH_TO_PIVOT_POINT: float = 0.8
ARM_LENGTH_FROM_EDGE_TO_PIVOT: float = 0.35
ARM_LENGTH_FROM_EDGE_TO_PIVOT_MIN: float = 0.1

# ---------------------------------------------------------------------------
# Default travel limits (offset encoder rotations)
# ---------------------------------------------------------------------------
ENCODER_ROTATIONS_OFFSET: float = 0.1
TOP_ROTATIONS_LIMIT: float = 0.225
BOTTOM_ROTATIONS_LIMIT: float = 0.975
DELTA_ROTATIONS_BEFORE_BROKEN: float = 0.005
GRABBER_BREAKS_IF_OPEN_BELOW_THIS_LIMIT: float = 0.045

# ---------------------------------------------------------------------------
# Default winch drum
# ---------------------------------------------------------------------------
WINCH_DRUM_DIAMETER: float = 0.02
WINCH_STRING_LEN_MIN: float = 0.0
WINCH_STRING_LEN_MAX: float = 2.0

# ---------------------------------------------------------------------------
# Default environment timing
# ---------------------------------------------------------------------------
DEFAULT_FPS: int = 50
DEFAULT_RENDER_WIDTH: int = 256
DEFAULT_RENDER_HEIGHT: int = 256

# ---------------------------------------------------------------------------
# Color palette (RGB 0-255) used by the side-view renderer
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (240, 240, 240)
COLOR_ARM: Tuple[int, int, int] = (66, 133, 244)
COLOR_STRING: Tuple[int, int, int] = (50, 50, 50)
COLOR_TARGET: Tuple[int, int, int] = (219, 68, 55)
COLOR_WINCH: Tuple[int, int, int] = (244, 180, 0)
COLOR_BROKEN: Tuple[int, int, int] = (200, 0, 0)
