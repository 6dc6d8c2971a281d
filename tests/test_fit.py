"""
Fit evaluator: straight excess rule and the greedy split-point search for
kinked labels.
"""

from __future__ import annotations

import pytest

from linelabel.core.fit import excess_ratio, fit_kinked, fits_straight, is_upside_down_kink
from linelabel.core.types import LayoutConfig

SEG_100 = ((0.0, 0.0), (100.0, 0.0))


def test_excess_ratio() -> None:
    assert excess_ratio(0.0) == 1.0
    assert excess_ratio(50.0) == 2.0
    assert excess_ratio(80.0) == pytest.approx(5.0)


def test_fits_straight_strict_bound() -> None:
    layout = LayoutConfig(line_exceed=0.0)
    assert fits_straight(SEG_100, 10.0, layout) is True
    assert fits_straight(SEG_100, 99.9, layout) is True
    assert fits_straight(SEG_100, 100.0, layout) is False
    assert fits_straight(SEG_100, 200.0, layout) is False


def test_fits_straight_with_exceed_and_units() -> None:
    assert fits_straight(SEG_100, 150.0, LayoutConfig(line_exceed=50.0)) is True
    assert fits_straight(SEG_100, 250.0, LayoutConfig(line_exceed=50.0)) is False
    # 60 px at 2 units/px is 120 units
    assert fits_straight(SEG_100, 60.0, LayoutConfig(line_exceed=0.0, units_per_pixel=2.0)) is False
    assert fits_straight(SEG_100, 40.0, LayoutConfig(line_exceed=0.0, units_per_pixel=2.0)) is True


def test_zero_length_segment_never_fits() -> None:
    assert fits_straight(((5.0, 5.0), (5.0, 5.0)), 1.0, LayoutConfig()) is False


def test_upside_down_kink_detection() -> None:
    assert is_upside_down_kink((-10.0, -10.0), (10.0, -10.0)) is True
    assert is_upside_down_kink((-10.0, 0.0), (0.0, -10.0)) is False
    assert is_upside_down_kink((-10.0, -10.0), (-10.0, 10.0)) is False


def test_kinked_rejects_upside_down() -> None:
    layout = LayoutConfig(segment_size=(5, 5), line_exceed=99.0)
    seg = ((0.0, 0.0), (10.0, 10.0), (0.0, 20.0))
    assert fit_kinked(seg, 10.0, layout) is None


def test_kinked_even_split() -> None:
    layout = LayoutConfig(segment_size=(5, 5), line_exceed=0.0)
    seg = ((0.0, 0.0), (8.0, 0.0), (8.0, 8.0))
    kink = fit_kinked(seg, 10.0, layout)
    assert kink is not None
    assert kink.kink_index == 1
    assert kink.collapsed_size == (5.0, 5.0)


def test_kinked_greedy_moves_pieces_until_both_fit() -> None:
    layout = LayoutConfig(segment_size=(4, 3, 3), line_exceed=0.0)
    # first leg 5 long, second 7 long
    seg = ((0.0, 0.0), (5.0, 0.0), (5.0, 7.0))
    kink = fit_kinked(seg, 10.0, layout)
    assert kink is not None
    assert kink.kink_index == 1
    assert kink.collapsed_size == (4.0, 6.0)
    assert sum(kink.collapsed_size) == sum(layout.segment_size)


def test_kinked_prefers_latest_split() -> None:
    layout = LayoutConfig(segment_size=(4, 3, 3), line_exceed=0.0)
    seg = ((0.0, 0.0), (50.0, 0.0), (50.0, 50.0))
    kink = fit_kinked(seg, 10.0, layout)
    assert kink is not None
    assert kink.kink_index == 2
    assert kink.collapsed_size == (7.0, 3.0)


def test_kinked_no_split_fits() -> None:
    layout = LayoutConfig(segment_size=(5, 5), line_exceed=0.0)
    seg = ((0.0, 0.0), (2.0, 0.0), (2.0, 2.0))
    assert fit_kinked(seg, 10.0, layout) is None


def test_kinked_needs_two_pieces() -> None:
    seg = ((0.0, 0.0), (50.0, 0.0), (50.0, 50.0))
    assert fit_kinked(seg, 10.0, LayoutConfig(segment_size=(10,))) is None
    assert fit_kinked(seg, 10.0, LayoutConfig()) is None


def test_kinked_units_per_pixel_scales_both_sides() -> None:
    seg = ((0.0, 0.0), (8.0, 0.0), (8.0, 8.0))
    assert fit_kinked(seg, 10.0, LayoutConfig(segment_size=(5, 5), line_exceed=0.0, units_per_pixel=2.0)) is None
    assert fit_kinked(seg, 10.0, LayoutConfig(segment_size=(5, 5), line_exceed=0.0, units_per_pixel=1.5)) is not None
