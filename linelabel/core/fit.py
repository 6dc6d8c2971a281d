"""
Fit evaluator: does the label fit a straight segment, and can it be split
into two parts that fit either side of a corner?
"""

from __future__ import annotations

from dataclasses import dataclass

from linelabel.core.geometry import vec_length, vec_sub
from linelabel.core.types import LayoutConfig, Point2


@dataclass(frozen=True)
class KinkFit:
    """Outcome of a successful split-point search."""
    kink_index: int
    collapsed_size: tuple[float, float]


def excess_ratio(line_exceed: float) -> float:
    """How many times its segment length a label may span."""
    return 100.0 / (100.0 - line_exceed)


def fits_straight(segment: tuple[Point2, ...], width_px: float, layout: LayoutConfig) -> bool:
    """True if the label length stays under the allowed overrun of the segment."""
    line_length = vec_length(vec_sub(segment[0], segment[1]))
    label_length = width_px * layout.units_per_pixel
    return label_length < excess_ratio(layout.line_exceed) * line_length


def is_upside_down_kink(p0p1: Point2, p1p2: Point2) -> bool:
    """Sub-segments that flip on x while agreeing on y would turn the label over."""
    return p0p1[0] * p1p2[0] < 0 and p0p1[1] * p1p2[1] > 0


def fit_kinked(
    segment: tuple[Point2, ...],
    width_px: float,
    layout: LayoutConfig,
) -> KinkFit | None:
    """
    Greedy search for a split point in layout.segment_size.

    Starts with the whole label on the first sub-segment and moves one piece
    at a time (from the end) onto the second, until both sides fit or no
    pieces are left to move. Returns None when no split fits.
    """
    pieces = layout.segment_size
    excess = excess_ratio(layout.line_exceed)
    upp = layout.units_per_pixel

    p0p1 = vec_sub(segment[0], segment[1])
    p1p2 = vec_sub(segment[1], segment[2])
    if is_upside_down_kink(p0p1, p1p2):
        return None

    line_length1 = vec_length(p0p1)
    line_length2 = vec_length(p1p2)

    label_length1 = width_px
    label_length2 = 0.0
    kink_index = len(pieces) - 1
    while kink_index > 0:
        width = pieces[kink_index]
        label_length1 -= width
        label_length2 += width
        if upp * label_length1 < excess * line_length1 and upp * label_length2 < excess * line_length2:
            break
        kink_index -= 1
    else:
        return None

    collapsed = (float(sum(pieces[:kink_index])), float(sum(pieces[kink_index:])))
    return KinkFit(kink_index=kink_index, collapsed_size=collapsed)
