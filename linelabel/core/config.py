"""
Central configuration for line label placement.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import math
import os

# ----- Paths (repo-relative) -----
DEFAULT_GEOMETRY_PATH: str = "docs/assets/lines/line.wkt"
REPORTS_DIR: str = "reports"

# ----- Collision boxes -----
EPSILON: float = 0.9999
"""Multiplicative slack on box sizes so perfectly adjacent labels do not collide."""

# ----- Articulated (corner) labels -----
MAX_CORNER_ANGLE: float = math.pi / 2
"""Sharpest bend (radians) a two-part label may follow."""

DEFAULT_SPREAD_FACTOR: float = 0.5
"""Fraction of the label height used to open the gap at a kink."""

# ----- Layout defaults -----
DEFAULT_LINE_EXCEED: float = 80.0
"""Percentage a label may overrun its supporting segment. Must be in [0, 100)."""

DEFAULT_UNITS_PER_PIXEL: float = 1.0
"""Map units per label pixel."""

# ----- Multi-label along one line -----
COLLISION_MAX_AREA: float = 0.0
"""Max allowed intersection area (map units²) with occupied geometry; above this a candidate is pruned."""

MAX_LABELS_PER_LINE: int | None = None
"""Cap on successive placements along one line; None for no cap."""

# ----- Text measurement (CLI) -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_FONT_SIZE_PT: float = 12.0

# ----- Rendering -----
RENDER_WIDTH_PX: int = 800
RENDER_HEIGHT_PX: int = 600

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for the CLI. Set env LOG_LEVEL=DEBUG to trace rejected segments."""
