"""
Create reports/<run_name>/ and write placements.json and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from linelabel.core.config import (
    COLLISION_MAX_AREA,
    EPSILON,
    MAX_CORNER_ANGLE,
    REPORTS_DIR,
)
from linelabel.core.types import LabelCandidate, LayoutConfig, LineLayoutSummary, LinePlacement

SCHEMA_VERSION = "1.0"


def _point(p: tuple[float, float]) -> dict:
    return {"x": float(p[0]), "y": float(p[1])}


def candidate_to_dict(candidate: LabelCandidate) -> dict:
    """One label part: size in px, geometry in map units."""
    return {
        "size_px": {"width": candidate.size[0], "height": candidate.size[1]},
        "position": _point(candidate.position),
        "angle_rad": candidate.angle,
        "obb": [_point(p) for p in list(candidate.obb.exterior.coords)[:4]],
        "aabb": list(candidate.aabb),
        "offset_px": _point(candidate.offset),
    }


def placement_to_dict(placement: LinePlacement) -> dict:
    state = placement.state
    out = {
        "segment_index": state.segment_index,
        "placement": state.placement_mode.name.lower(),
        "is_articulated": state.is_articulated,
        "throw_away": state.throw_away,
        "angle_rad": list(state.angle),
        "position": _point(state.position) if state.position is not None else None,
        "labels": [candidate_to_dict(c) for c in placement.candidates],
    }
    if state.is_articulated:
        out["kink_index"] = state.kink_index
        out["collapsed_size_px"] = list(state.collapsed_size)
    if placement.reason:
        out["reason"] = placement.reason
    return out


def layout_to_dict(layout: LayoutConfig) -> dict:
    return {
        "placement": layout.placement.name.lower(),
        "segment_size": list(layout.segment_size),
        "spread_factor": layout.spread_factor,
        "articulated": layout.articulated,
        "segment_start": layout.segment_start,
        "segment_end": layout.segment_end,
        "line_exceed": layout.line_exceed,
        "units_per_pixel": layout.units_per_pixel,
        "buffer": list(layout.buffer),
        "offset": list(layout.offset),
        "tile_bounds": list(layout.tile_bounds) if layout.tile_bounds is not None else None,
    }


def summaries_to_dict(
    summaries: list[LineLayoutSummary],
    size: tuple[float, float],
    layout: LayoutConfig,
    geometry_source: str,
) -> dict:
    """Exact structure for placements.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "input": {
            "geometry_source": geometry_source,
            "label_size_px": {"width": size[0], "height": size[1]},
            "layout": layout_to_dict(layout),
        },
        "lines": [
            {
                "line_index": i,
                "placements": [placement_to_dict(p) for p in s.placements],
                "summary": {
                    "success_count": s.success_count,
                    "attempts": s.attempts,
                    "pruned_count": s.pruned_count,
                },
                "warnings": s.warnings,
            }
            for i, s in enumerate(summaries)
        ],
    }


def run_metadata_dict(
    run_name: str,
    geometry_path: str,
    label_text: str | None,
    size: tuple[float, float],
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "geometry_path": geometry_path,
        "label_text": label_text,
        "label_size_px": list(size),
        "config": {
            "EPSILON": EPSILON,
            "MAX_CORNER_ANGLE": MAX_CORNER_ANGLE,
            "COLLISION_MAX_AREA": COLLISION_MAX_AREA,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_placements_json(
    report_dir: Path,
    summaries: list[LineLayoutSummary],
    size: tuple[float, float],
    layout: LayoutConfig,
    geometry_source: str,
) -> Path:
    """Write placements.json to report_dir. Returns path to file."""
    path = report_dir / "placements.json"
    data = summaries_to_dict(summaries, size, layout, geometry_source)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    geometry_path: str,
    label_text: str | None,
    size: tuple[float, float],
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, geometry_path, label_text, size)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
