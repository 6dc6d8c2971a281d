"""
Segment cursor: extracts the current segment of a polyline and advances
through it, alternating between straight (mid-point) and corner placements.
All functions are pure; advancing returns a fresh PlacementState
with no derived (angle, position, kink) fields set.
"""

from __future__ import annotations

from linelabel.core.types import LayoutConfig, PlacementMode, PlacementState, Point2, Polyline


def initial_state(layout: LayoutConfig) -> PlacementState:
    """Seed state from the layout's starting index and placement mode."""
    return PlacementState(
        segment_index=layout.first_index,
        placement_mode=layout.placement,
    )


def current_segment(
    state: PlacementState,
    lines: Polyline,
    layout: LayoutConfig,
) -> tuple[Point2, ...] | None:
    """
    Points of the current segment: 2 for straight, 3 for corner.
    None when the segment would reach outside [segment_start, segment_end).
    """
    i = state.segment_index
    lo = layout.segment_start
    hi = layout.last_index(len(lines))
    if state.placement_mode is PlacementMode.CORNER:
        if i - 1 < lo or i + 1 >= hi:
            return None
        return (lines[i - 1], lines[i], lines[i + 1])
    if i < lo or i + 1 >= hi:
        return None
    return (lines[i], lines[i + 1])


def advance(
    state: PlacementState,
    lines: Polyline,
    layout: LayoutConfig,
) -> PlacementState | None:
    """
    Next logical step along the line, or None when the line is exhausted.

    A corner attempt falls back to the straight segment at the same index.
    A straight attempt moves on one index, trying the corner there first
    when articulation is possible.
    """
    if state.placement_mode is PlacementMode.CORNER:
        return PlacementState(state.segment_index, PlacementMode.MID_POINT)

    if state.segment_index >= layout.last_index(len(lines)) - 2:
        return None
    mode = PlacementMode.CORNER if layout.can_articulate else PlacementMode.MID_POINT
    return PlacementState(state.segment_index + 1, mode)
