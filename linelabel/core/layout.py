"""
Label groups and multi-label layout along lines.
A placement's parts are kept or dropped together by a pluggable acceptance
rule; accepted boxes become obstacles for the following placements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from shapely.geometry import box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from linelabel.core.config import COLLISION_MAX_AREA, MAX_LABELS_PER_LINE
from linelabel.core.error_codes import EMPTY_LINE, NO_FITTING_SEGMENT, PRUNED_BY_COLLISION, user_message
from linelabel.core.placement import iter_placements
from linelabel.core.types import LabelCandidate, LayoutConfig, LineLayoutSummary, LinePlacement

Labels = dict[int, LabelCandidate]
AcceptanceRule = Callable[[Labels, Labels], Labels]


def default_rule(labels: Labels, pruned: Labels) -> Labels:
    """Keep all parts unless any part was pruned, in which case keep none."""
    return {} if pruned else labels


def prune_colliding(
    labels: Labels,
    occupied: BaseGeometry | None,
    collision_max_area: float = COLLISION_MAX_AREA,
) -> Labels:
    """Parts whose oriented box overlaps occupied by more than collision_max_area."""
    pruned: Labels = {}
    if occupied is None or occupied.is_empty:
        return pruned
    for i, label in labels.items():
        # broad phase on the extent, then the rotated box
        if not box(*label.aabb).intersects(occupied):
            continue
        inter = label.obb.intersection(occupied)
        if not inter.is_empty and inter.area > collision_max_area:
            pruned[i] = label
    return pruned


@dataclass
class LabelGroup:
    """Applies an acceptance rule to the parts of one placement."""
    rule: AcceptanceRule = default_rule
    collision_max_area: float = COLLISION_MAX_AREA

    def resolve(self, placement: LinePlacement, occupied: BaseGeometry | None) -> Labels:
        labels = dict(enumerate(placement.candidates))
        pruned = prune_colliding(labels, occupied, self.collision_max_area)
        return self.rule(labels, pruned)


def place_labels_along_line(
    size: Sequence[float],
    lines: Sequence[Sequence[float]],
    layout: LayoutConfig | None = None,
    existing_obstacles: list[BaseGeometry] | None = None,
    rule: AcceptanceRule = default_rule,
    collision_max_area: float = COLLISION_MAX_AREA,
    max_labels: int | None = MAX_LABELS_PER_LINE,
) -> LineLayoutSummary:
    """
    Walk every placement along one line; keep those the group accepts
    against existing obstacles and previously accepted labels.
    existing_obstacles is extended in place with accepted boxes.
    """
    group = LabelGroup(rule=rule, collision_max_area=collision_max_area)
    obstacles = existing_obstacles if existing_obstacles is not None else []
    placements: list[LinePlacement] = []
    accepted: list[LabelCandidate] = []
    attempts = 0
    pruned_count = 0
    warnings: list[str] = []

    if len(lines) < 2:
        warnings.append(user_message(EMPTY_LINE))
        return LineLayoutSummary(placements, accepted, attempts, pruned_count, warnings)

    for placement in iter_placements(size, lines, layout):
        if max_labels is not None and len(placements) >= max_labels:
            break
        attempts += 1
        occupied = unary_union(obstacles) if obstacles else None
        kept = group.resolve(placement, occupied)
        if not kept:
            pruned_count += 1
            continue
        placements.append(placement)
        for label in kept.values():
            accepted.append(label)
            obstacles.append(label.obb)

    if attempts == 0:
        warnings.append(user_message(NO_FITTING_SEGMENT))
    elif not placements:
        warnings.append(user_message(PRUNED_BY_COLLISION))
    return LineLayoutSummary(placements, accepted, attempts, pruned_count, warnings)


def run_line_layout(
    size: Sequence[float],
    lines_list: list[Sequence[Sequence[float]]],
    layout: LayoutConfig | None = None,
    rule: AcceptanceRule = default_rule,
    collision_max_area: float = COLLISION_MAX_AREA,
    max_labels: int | None = MAX_LABELS_PER_LINE,
) -> list[LineLayoutSummary]:
    """Place labels along several lines sharing one set of obstacles."""
    obstacles: list[BaseGeometry] = []
    return [
        place_labels_along_line(
            size,
            lines,
            layout,
            existing_obstacles=obstacles,
            rule=rule,
            collision_max_area=collision_max_area,
            max_labels=max_labels,
        )
        for lines in lines_list
    ]
