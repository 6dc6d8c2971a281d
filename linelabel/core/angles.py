"""
Label orientation along a segment. Angles are measured so that text stays
upright, and are always normalized into [0, 2π).
"""

from __future__ import annotations

import math

from linelabel.core.config import MAX_CORNER_ANGLE
from linelabel.core.geometry import vec_sub
from linelabel.core.types import PlacementMode, Point2

TWO_PI = 2 * math.pi


def normalize_angle(theta: float) -> float:
    """Map a single negative wrap back into [0, 2π)."""
    if theta < 0:
        theta = (theta + TWO_PI) % TWO_PI
    return theta


def segment_angle(pt1: Point2, pt2: Point2) -> float:
    """
    Directional angle of pt1 -> pt2 for an upright label.
    x and y are swapped in atan2 so the angle is taken from the vertical.
    """
    d = vec_sub(pt1, pt2)
    theta = math.atan2(d[0], d[1]) + math.pi / 2

    if theta >= math.pi / 2:
        # 2nd quadrant: flip to the 4th so the text is not upside down
        theta += math.pi
        theta %= TWO_PI
    elif theta < 0:
        # tiny negatives round up to exactly 2π
        theta = (theta + TWO_PI) % TWO_PI
    return theta


def placement_angles(mode: PlacementMode, segment: tuple[Point2, ...]) -> tuple[float, ...]:
    """One angle for a straight segment; two, ordered left-to-right, for a corner."""
    if mode is PlacementMode.CORNER:
        theta1 = segment_angle(segment[0], segment[1])
        theta2 = segment_angle(segment[1], segment[2])
        p0p1 = vec_sub(segment[0], segment[1])
        p1p2 = vec_sub(segment[1], segment[2])
        if p0p1[0] >= 0 and p1p2[0] >= 0:
            return (theta2, theta1)
        return (theta1, theta2)
    return (segment_angle(segment[0], segment[1]),)


def corner_spread(angles: tuple[float, ...]) -> float:
    """Absolute difference between the two corner angles."""
    return abs(normalize_angle(angles[1]) - normalize_angle(angles[0]))


def in_angle_bounds(mode: PlacementMode, angles: tuple[float, ...]) -> bool:
    """Corners bending more than MAX_CORNER_ANGLE are rejected; straight always passes."""
    if mode is not PlacementMode.CORNER:
        return True
    theta = corner_spread(angles)
    theta = min(TWO_PI - theta, theta)
    return theta <= MAX_CORNER_ANGLE
