"""
Dataclasses for layout configuration, placement state, label candidates
and line placements.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from shapely.geometry import Polygon

from linelabel.core.config import (
    DEFAULT_LINE_EXCEED,
    DEFAULT_SPREAD_FACTOR,
    DEFAULT_UNITS_PER_PIXEL,
)

Point2 = tuple[float, float]
Polyline = tuple[Point2, ...]
Extent = tuple[float, float, float, float]


class PlacementMode(enum.Enum):
    """Where on the line a label is anchored."""
    MID_POINT = 0
    CORNER = 1


@dataclass(frozen=True)
class LayoutConfig:
    """
    Layout options for one line label. Copied by value (dataclasses.replace)
    when advancing to the next placement.
    """
    placement: PlacementMode = PlacementMode.MID_POINT
    segment_size: tuple[float, ...] = ()
    spread_factor: float = DEFAULT_SPREAD_FACTOR
    articulated: bool = True
    segment_index: int = 0
    segment_start: int = 0
    segment_end: int | None = None
    line_exceed: float = DEFAULT_LINE_EXCEED
    units_per_pixel: float = DEFAULT_UNITS_PER_PIXEL
    buffer: Point2 = (0.0, 0.0)
    offset: Point2 = (0.0, 0.0)
    tile_bounds: Extent | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.line_exceed < 100.0:
            raise ValueError(f"line_exceed must be in [0, 100), got {self.line_exceed}")
        if not self.units_per_pixel > 0:
            raise ValueError(f"units_per_pixel must be positive, got {self.units_per_pixel}")
        if self.segment_index < 0 or self.segment_start < 0:
            raise ValueError("segment_index and segment_start must be non-negative")
        if self.segment_end is not None and self.segment_end < 0:
            raise ValueError("segment_end must be non-negative")
        if any(w <= 0 for w in self.segment_size):
            raise ValueError("segment_size widths must be positive")
        if len(self.buffer) != 2 or len(self.offset) != 2:
            raise ValueError("buffer and offset must be 2-vectors")
        # Accept ints and lists from callers; keep the record hashable and immutable.
        object.__setattr__(self, "placement", PlacementMode(self.placement))
        object.__setattr__(self, "segment_size", tuple(float(w) for w in self.segment_size))
        object.__setattr__(self, "buffer", (float(self.buffer[0]), float(self.buffer[1])))
        object.__setattr__(self, "offset", (float(self.offset[0]), float(self.offset[1])))

    @property
    def first_index(self) -> int:
        """Starting segment index: segment_index if set, else segment_start."""
        return self.segment_index or self.segment_start

    def last_index(self, n_points: int) -> int:
        """Exclusive upper point index, clamped to the polyline length."""
        if self.segment_end is None or self.segment_end <= 0:
            return n_points
        return min(self.segment_end, n_points)

    @property
    def can_articulate(self) -> bool:
        return self.articulated and len(self.segment_size) > 1


@dataclass(frozen=True)
class PlacementState:
    """Per-attempt record threaded through cursor -> fit -> angles -> boxes."""
    segment_index: int
    placement_mode: PlacementMode
    kink_index: int = 0
    collapsed_size: tuple[float, float] = (0.0, 0.0)
    angle: tuple[float, ...] = ()
    position: Point2 | None = None
    is_articulated: bool = False
    throw_away: bool = False


@dataclass(frozen=True)
class LabelCandidate:
    """One rigid label part ready for collision tests."""
    size: Point2  # (width_px, height_px)
    position: Point2
    angle: float
    obb: Polygon
    aabb: Extent
    offset: Point2


@dataclass(frozen=True)
class LinePlacement:
    """
    A placement attempt along a polyline. Either fully populated
    (one candidate for straight, two for corner) or discarded.
    """
    size: Point2
    lines: Polyline
    layout: LayoutConfig
    state: PlacementState
    candidates: tuple[LabelCandidate, ...] = ()
    reason: str = ""

    @property
    def throw_away(self) -> bool:
        return self.state.throw_away

    @property
    def angle(self) -> tuple[float, ...]:
        return self.state.angle

    @property
    def position(self) -> Point2 | None:
        return self.state.position

    @property
    def is_articulated(self) -> bool:
        return self.state.is_articulated


@dataclass
class LineLayoutSummary:
    """Result of placing successive labels along one line."""
    placements: list[LinePlacement]
    accepted: list[LabelCandidate]
    attempts: int
    pruned_count: int
    warnings: list[str] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.placements)
