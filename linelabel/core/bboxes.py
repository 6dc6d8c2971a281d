"""
Bounding boxes for placed line labels: one oriented box per rigid label
part plus its axis-aligned extent. Tile coordinates are y-down, so box
rotation and the vertical offset are sign-inverted relative to the label
angle.
"""

from __future__ import annotations

import math

from shapely.geometry import Polygon

from linelabel.core.angles import corner_spread
from linelabel.core.config import EPSILON
from linelabel.core.geometry import box_extent, oriented_box, vec_add, vec_rotate
from linelabel.core.types import LabelCandidate, LayoutConfig, PlacementState, Point2


def label_obb(
    position: Point2,
    width: float,
    height: float,
    angle: float,
    offset: Point2,
    units_per_pixel: float,
) -> Polygon:
    """Oriented box for a label part at position, shifted by its pixel offset."""
    x, y = position
    # offset: x positive right, y pointing down
    if offset[0] != 0 or offset[1] != 0:
        rotated = vec_rotate(offset, angle)
        x += rotated[0] * units_per_pixel
        y -= rotated[1] * units_per_pixel
    return oriented_box(x, y, width, height, -angle)


def box_height(size: Point2, layout: LayoutConfig) -> float:
    return (size[1] + layout.buffer[1] * 2) * layout.units_per_pixel * EPSILON


def straight_candidates(
    size: Point2,
    state: PlacementState,
    layout: LayoutConfig,
) -> tuple[LabelCandidate, ...]:
    upp = layout.units_per_pixel
    width = (size[0] + layout.buffer[0] * 2) * upp * EPSILON
    angle = state.angle[0]
    obb = label_obb(state.position, width, box_height(size, layout), angle, layout.offset, upp)
    return (
        LabelCandidate(
            size=(size[0], size[1]),
            position=state.position,
            angle=angle,
            obb=obb,
            aabb=box_extent(obb),
            offset=layout.offset,
        ),
    )


def kink_gap(size: Point2, angles: tuple[float, ...], spread_factor: float) -> float:
    """Distance each half is pushed away from the kink vertex, in pixels."""
    theta = math.pi - corner_spread(angles)
    return spread_factor * abs(size[1] / math.tan(0.5 * theta))


def corner_candidates(
    size: Point2,
    state: PlacementState,
    layout: LayoutConfig,
) -> tuple[LabelCandidate, ...]:
    """
    Two label parts sharing the kink vertex as anchor. Each box is rotated
    by its own angle and pushed outward from the vertex along it; the
    per-part offset carries the same push in pixels and is applied to the
    box as well.
    """
    upp = layout.units_per_pixel
    height = box_height(size, layout)
    dx = kink_gap(size, state.angle, layout.spread_factor)

    out: list[LabelCandidate] = []
    for i in range(2):
        width_px = state.collapsed_size[i]
        angle = state.angle[i]
        width = width_px * upp * EPSILON

        direction = -1 if i == 0 else 1
        nudge = direction * (width / 2 + dx)
        center = vec_add(state.position, vec_rotate((nudge, 0.0), -angle))
        offset = (
            layout.offset[0] + direction * (width_px / 2 + dx),
            layout.offset[1],
        )
        obb = label_obb(center, width, height, angle, offset, upp)
        out.append(
            LabelCandidate(
                size=(width_px, size[1]),
                position=state.position,
                angle=angle,
                obb=obb,
                aabb=box_extent(obb),
                offset=offset,
            )
        )
    return tuple(out)
