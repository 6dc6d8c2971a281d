"""
Line label placement: find the first segment of a polyline the label fits,
populate angle, anchor and boxes, and step to further placements along the
same line.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterator, Sequence

from linelabel.core.angles import in_angle_bounds, placement_angles
from linelabel.core.bboxes import corner_candidates, straight_candidates
from linelabel.core.cursor import advance, current_segment, initial_state
from linelabel.core.error_codes import LINE_EXHAUSTED, NO_FITTING_SEGMENT, OUT_OF_TILE
from linelabel.core.fit import fit_kinked, fits_straight
from linelabel.core.geometry import extent_within, midpoint
from linelabel.core.types import (
    LabelCandidate,
    LayoutConfig,
    LinePlacement,
    PlacementMode,
    PlacementState,
    Point2,
    Polyline,
)

logger = logging.getLogger(__name__)


def _as_polyline(lines: Sequence[Sequence[float]]) -> Polyline:
    return tuple((float(p[0]), float(p[1])) for p in lines)


def _evaluate(
    size: Point2,
    lines: Polyline,
    layout: LayoutConfig,
    state: PlacementState,
) -> tuple[PlacementState | None, tuple[LabelCandidate, ...], str]:
    """
    Try the cursor's current segment. Returns (populated state, candidates, "")
    on success or (None, (), reason) when the segment is rejected.
    """
    segment = current_segment(state, lines, layout)
    if segment is None:
        return None, (), NO_FITTING_SEGMENT

    mode = state.placement_mode
    kink_index = 0
    collapsed = (0.0, 0.0)
    if mode is PlacementMode.CORNER:
        kink = fit_kinked(segment, size[0], layout)
        if kink is None:
            return None, (), NO_FITTING_SEGMENT
        kink_index, collapsed = kink.kink_index, kink.collapsed_size
    elif not fits_straight(segment, size[0], layout):
        return None, (), NO_FITTING_SEGMENT

    angles = placement_angles(mode, segment)
    if not in_angle_bounds(mode, angles):
        return None, (), NO_FITTING_SEGMENT

    is_corner = mode is PlacementMode.CORNER
    populated = PlacementState(
        segment_index=state.segment_index,
        placement_mode=mode,
        kink_index=kink_index,
        collapsed_size=collapsed,
        angle=angles,
        position=segment[1] if is_corner else midpoint(segment[0], segment[1]),
        is_articulated=is_corner,
    )
    if is_corner:
        candidates = corner_candidates(size, populated, layout)
    else:
        candidates = straight_candidates(size, populated, layout)

    if layout.tile_bounds is not None:
        if not all(extent_within(c.aabb, layout.tile_bounds) for c in candidates):
            return None, (), OUT_OF_TILE
    return populated, candidates, ""


def place_label_line(
    size: Sequence[float],
    lines: Sequence[Sequence[float]],
    layout: LayoutConfig | None = None,
) -> LinePlacement:
    """
    First valid placement of a label of pixel size (w, h) along lines,
    starting from the layout's seeded segment index and mode.
    The result is discarded (throw_away) when no segment in range fits; its
    reason is that of the last rejected segment.
    """
    layout = layout if layout is not None else LayoutConfig()
    size = (float(size[0]), float(size[1]))
    polyline = _as_polyline(lines)

    state: PlacementState | None = initial_state(layout)
    reason = NO_FITTING_SEGMENT
    # Each index is visited at most twice (corner, then straight).
    max_steps = 2 * len(polyline) + 2
    for _ in range(max_steps):
        if state is None:
            break
        populated, candidates, rejected = _evaluate(size, polyline, layout, state)
        if populated is not None:
            return LinePlacement(size, polyline, layout, populated, candidates)
        logger.debug(
            "Rejected segment %d (%s): %s",
            state.segment_index, state.placement_mode.name, rejected,
        )
        reason = rejected
        state = advance(state, polyline, layout)

    logger.debug("No placement for label %s on %d-point line: %s", size, len(polyline), reason)
    discarded = PlacementState(
        segment_index=layout.first_index,
        placement_mode=layout.placement,
        throw_away=True,
    )
    return LinePlacement(size, polyline, layout, discarded, (), reason)


def next_placement(placement: LinePlacement) -> LinePlacement | None:
    """
    Next placement along the same line after a valid one, seeded at the
    following segment with a copy of the layout. None when the line is
    exhausted or nothing further fits.
    """
    if placement.throw_away:
        return None
    nxt = advance(placement.state, placement.lines, placement.layout)
    if nxt is None:
        logger.debug("%s after segment %d", LINE_EXHAUSTED, placement.state.segment_index)
        return None

    layout = replace(
        placement.layout,
        segment_index=nxt.segment_index,
        placement=nxt.placement_mode,
    )
    result = place_label_line(placement.size, placement.lines, layout)
    return None if result.throw_away else result


def iter_placements(
    size: Sequence[float],
    lines: Sequence[Sequence[float]],
    layout: LayoutConfig | None = None,
) -> Iterator[LinePlacement]:
    """Yield every successive valid placement along the line."""
    placement: LinePlacement | None = place_label_line(size, lines, layout)
    if placement.throw_away:
        return
    while placement is not None:
        yield placement
        placement = next_placement(placement)
