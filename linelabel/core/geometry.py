"""
Geometry helpers: 2D vector primitives, oriented box construction and
extent query. Boxes are shapely polygons so collision tests can use
intersects/intersection directly.
"""

from __future__ import annotations

import math

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from linelabel.core.types import Extent, Point2


def vec_sub(a: Point2, b: Point2) -> Point2:
    return (a[0] - b[0], a[1] - b[1])


def vec_add(a: Point2, b: Point2) -> Point2:
    return (a[0] + b[0], a[1] + b[1])


def vec_length(v: Point2) -> float:
    return math.hypot(v[0], v[1])


def vec_rotate(v: Point2, angle: float) -> Point2:
    """Rotate v by angle (radians), counter-clockwise in a y-up frame."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (v[0] * c - v[1] * s, v[0] * s + v[1] * c)


def midpoint(a: Point2, b: Point2) -> Point2:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def oriented_box(
    cx: float, cy: float, width: float, height: float, angle: float
) -> Polygon:
    """
    Rectangle centered at (cx, cy) with given width/height,
    rotated by angle (radians) around its center.
    """
    hw = width / 2.0
    hh = height / 2.0
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    corners = [
        (-hw, -hh),
        (hw, -hh),
        (hw, hh),
        (-hw, hh),
    ]
    rotated = [
        (cx + x * cos_a - y * sin_a, cy + x * sin_a + y * cos_a)
        for x, y in corners
    ]
    return Polygon(rotated)


def box_extent(geom: BaseGeometry) -> Extent:
    """Return (minx, miny, maxx, maxy)."""
    if geom is None or geom.is_empty:
        return (0.0, 0.0, 0.0, 0.0)
    b = geom.bounds
    return (b[0], b[1], b[2], b[3])


def extent_within(inner: Extent, outer: Extent) -> bool:
    """True if the inner extent lies inside the outer one (edges inclusive)."""
    return (
        inner[0] >= outer[0]
        and inner[1] >= outer[1]
        and inner[2] <= outer[2]
        and inner[3] <= outer[3]
    )
