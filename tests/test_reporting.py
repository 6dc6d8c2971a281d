"""
placements.json shape, run metadata, and the CLI writing its report files.
Deterministic, no dependency on docs/assets.
"""

from __future__ import annotations

import json

from linelabel.core.layout import place_labels_along_line
from linelabel.core.render import render_debug
from linelabel.core.reporting import (
    SCHEMA_VERSION,
    placement_to_dict,
    summaries_to_dict,
    write_placements_json,
    write_run_metadata_json,
)
from linelabel.core.runner import main
from linelabel.core.placement import place_label_line
from linelabel.core.types import LayoutConfig

BEND = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]
LAYOUT = LayoutConfig(line_exceed=0.0, segment_size=(5, 5))


def test_corner_placement_to_dict() -> None:
    data = placement_to_dict(place_label_line((10, 4), BEND, LAYOUT))
    assert data["placement"] == "corner"
    assert data["is_articulated"] is True
    assert data["kink_index"] == 1
    assert data["collapsed_size_px"] == [5.0, 5.0]
    assert data["position"] == {"x": 10.0, "y": 0.0}
    assert len(data["labels"]) == 2
    assert len(data["labels"][0]["obb"]) == 4
    assert len(data["labels"][0]["aabb"]) == 4


def test_discarded_placement_to_dict() -> None:
    data = placement_to_dict(place_label_line((100, 4), BEND, LAYOUT))
    assert data["throw_away"] is True
    assert data["labels"] == []
    assert data["position"] is None
    assert data["reason"] == "no_fitting_segment"


def test_summaries_json_roundtrip() -> None:
    summary = place_labels_along_line((10, 4), BEND, LAYOUT)
    data = summaries_to_dict([summary], (10.0, 4.0), LAYOUT, "test")
    loaded = json.loads(json.dumps(data))
    assert loaded["schema_version"] == SCHEMA_VERSION
    assert loaded["input"]["layout"]["segment_size"] == [5.0, 5.0]
    assert loaded["lines"][0]["summary"]["success_count"] == summary.success_count


def test_write_report_files(tmp_path) -> None:
    summary = place_labels_along_line((10, 4), BEND, LAYOUT)
    p1 = write_placements_json(tmp_path, [summary], (10.0, 4.0), LAYOUT, "test")
    p2 = write_run_metadata_json(tmp_path, "run", "test", None, (10.0, 4.0))
    assert json.loads(p1.read_text(encoding="utf-8"))["lines"]
    assert json.loads(p2.read_text(encoding="utf-8"))["run_name"] == "run"


def test_render_debug_writes_png(tmp_path) -> None:
    summary = place_labels_along_line((10, 4), BEND, LAYOUT)
    out = tmp_path / "debug.png"
    render_debug([tuple(BEND)], [summary], out)
    assert out.exists() and out.stat().st_size > 0


def test_cli_writes_reports(tmp_path, capsys) -> None:
    (tmp_path / "line.wkt").write_text("LINESTRING (0 0, 40 0, 80 0, 120 0)", encoding="utf-8")
    main([
        "--geometry", "line.wkt",
        "--width-px", "10",
        "--height-px", "4",
        "--line-exceed", "0",
        "--repo-root", str(tmp_path),
        "--run-name", "cli",
        "--no-render",
    ])
    report_dir = tmp_path / "reports" / "cli"
    data = json.loads((report_dir / "placements.json").read_text(encoding="utf-8"))
    assert data["lines"][0]["summary"]["success_count"] == 3
    assert (report_dir / "run_metadata.json").exists()
    assert "Labels placed: 3" in capsys.readouterr().out
