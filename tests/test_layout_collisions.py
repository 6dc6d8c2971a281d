"""
Multi-label layout along a line: the acceptance rule keeps or drops all
parts of a placement; later placements avoid earlier accepted boxes.
"""

from __future__ import annotations

import math

from shapely.geometry import Polygon

from linelabel.core.layout import (
    LabelGroup,
    default_rule,
    place_labels_along_line,
    prune_colliding,
    run_line_layout,
)
from linelabel.core.placement import place_label_line
from linelabel.core.types import LayoutConfig

LINE = [(float(i * 20), 0.0) for i in range(6)]
EXACT = LayoutConfig(line_exceed=0.0)


def test_default_rule_all_or_nothing() -> None:
    labels = {0: "a", 1: "b"}
    assert default_rule(labels, {}) == labels
    assert default_rule(labels, {1: "b"}) == {}


def test_prune_colliding_without_obstacles() -> None:
    p = place_label_line((10, 4), LINE, EXACT)
    labels = dict(enumerate(p.candidates))
    assert prune_colliding(labels, None) == {}
    assert prune_colliding(labels, Polygon()) == {}


def test_prune_colliding_broad_and_precise_phase() -> None:
    # 45 degree line: the label box is rotated, its extent is not
    line = [(0.0, 0.0), (100.0, 100.0)]
    p = place_label_line((40, 4), line, EXACT)
    labels = dict(enumerate(p.candidates))
    minx, miny, maxx, maxy = p.candidates[0].aabb
    # inside the extent's corner but away from the rotated box
    corner = Polygon([(minx, maxy - 2), (minx + 2, maxy - 2), (minx + 2, maxy), (minx, maxy)])
    assert prune_colliding(labels, corner) == {}
    # on the anchor
    cx, cy = p.position
    hit = Polygon([(cx - 1, cy - 1), (cx + 1, cy - 1), (cx + 1, cy + 1), (cx - 1, cy + 1)])
    assert set(prune_colliding(labels, hit)) == {0}


def test_label_group_drops_whole_corner_label() -> None:
    bend = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]
    p = place_label_line((10, 4), bend, LayoutConfig(line_exceed=0.0, segment_size=(5, 5)))
    assert p.is_articulated
    # obstacle touching only the first part
    left = p.candidates[0].obb
    kept = LabelGroup().resolve(p, left.buffer(0.1))
    assert kept == {}
    keep_unpruned = LabelGroup(rule=lambda labels, pruned: {k: v for k, v in labels.items() if k not in pruned})
    assert set(keep_unpruned.resolve(p, left.buffer(-0.5))) == {1}


def test_short_labels_all_placed() -> None:
    summary = place_labels_along_line((10, 4), LINE, EXACT)
    assert summary.success_count == 5
    assert summary.attempts == 5
    assert summary.pruned_count == 0
    assert len(summary.accepted) == 5
    assert summary.warnings == []


def test_long_labels_skip_overlapping_neighbours() -> None:
    layout = LayoutConfig(line_exceed=50.0)
    summary = place_labels_along_line((30, 4), LINE, layout)
    assert [p.state.segment_index for p in summary.placements] == [0, 2, 4]
    assert summary.attempts == 5
    assert summary.pruned_count == 2
    for a in range(len(summary.accepted)):
        for b in range(a + 1, len(summary.accepted)):
            inter = summary.accepted[a].obb.intersection(summary.accepted[b].obb)
            assert inter.is_empty or inter.area == 0


def test_custom_rule_keeps_everything() -> None:
    layout = LayoutConfig(line_exceed=50.0)
    summary = place_labels_along_line((30, 4), LINE, layout, rule=lambda labels, pruned: labels)
    assert summary.success_count == 5


def test_max_labels_caps_placements() -> None:
    summary = place_labels_along_line((10, 4), LINE, EXACT, max_labels=2)
    assert summary.success_count == 2


def test_existing_obstacle_blocks_line() -> None:
    blocker = Polygon([(-10, -10), (200, -10), (200, 10), (-10, 10)])
    obstacles = [blocker]
    summary = place_labels_along_line((10, 4), LINE, EXACT, existing_obstacles=obstacles)
    assert summary.success_count == 0
    assert summary.pruned_count == 5
    assert len(summary.warnings) == 1
    assert obstacles == [blocker]


def test_accepted_boxes_extend_obstacles() -> None:
    obstacles: list = []
    summary = place_labels_along_line((10, 4), LINE, EXACT, existing_obstacles=obstacles)
    assert len(obstacles) == summary.success_count


def test_empty_and_unfit_lines_warn() -> None:
    assert place_labels_along_line((10, 4), [(0.0, 0.0)], EXACT).warnings
    summary = place_labels_along_line((500, 4), LINE, EXACT)
    assert summary.success_count == 0
    assert summary.attempts == 0
    assert summary.warnings


def test_run_line_layout_shares_obstacles() -> None:
    other = [(0.0, 200.0), (0.0 + 100 * math.cos(0.3), 200.0 + 100 * math.sin(0.3))]
    summaries = run_line_layout((10, 4), [LINE, LINE, other], EXACT)
    assert summaries[0].success_count == 5
    assert summaries[1].success_count == 0
    assert summaries[2].success_count == 1
