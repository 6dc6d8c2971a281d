"""
CLI entrypoint: load line WKT, measure label, place labels along each line,
export placements.json, run_metadata.json and debug.png.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from linelabel.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PT,
    DEFAULT_GEOMETRY_PATH,
    DEFAULT_LINE_EXCEED,
    DEFAULT_SPREAD_FACTOR,
    DEFAULT_UNITS_PER_PIXEL,
    LOG_LEVEL,
)
from linelabel.core.io import load_polylines
from linelabel.core.layout import run_line_layout
from linelabel.core.reporting import (
    ensure_report_dir,
    write_placements_json,
    write_run_metadata_json,
)
from linelabel.core.types import LayoutConfig, PlacementMode

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Place labels along line features.")
    p.add_argument("--geometry", type=str, default=DEFAULT_GEOMETRY_PATH, help="Line WKT path (repo-relative)")
    p.add_argument("--text", type=str, default=None, help="Label text (measured with Pillow)")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family", help="Font for measuring --text")
    p.add_argument("--font-size-pt", type=float, default=DEFAULT_FONT_SIZE_PT, dest="font_size_pt", help="Font size (pt)")
    p.add_argument("--width-px", type=float, default=None, dest="width_px", help="Label width (px); overrides --text")
    p.add_argument("--height-px", type=float, default=None, dest="height_px", help="Label height (px)")
    p.add_argument("--segment-size", type=str, default="", dest="segment_size", help="Piece widths (px) e.g. '30,25,40'")
    p.add_argument("--units-per-pixel", type=float, default=DEFAULT_UNITS_PER_PIXEL, dest="units_per_pixel", help="Map units per pixel")
    p.add_argument("--line-exceed", type=float, default=DEFAULT_LINE_EXCEED, dest="line_exceed", help="Allowed overrun (%%)")
    p.add_argument("--spread-factor", type=float, default=DEFAULT_SPREAD_FACTOR, dest="spread_factor", help="Gap at kinks")
    p.add_argument("--buffer-px", type=float, nargs=2, default=(0.0, 0.0), dest="buffer_px", help="Box padding (px) x y")
    p.add_argument("--offset-px", type=float, nargs=2, default=(0.0, 0.0), dest="offset_px", help="Label offset (px) x y")
    p.add_argument("--corner", action="store_true", help="Start with corner placement")
    p.add_argument("--no-articulated", action="store_false", dest="articulated", help="Never split labels at kinks")
    p.add_argument("--max-labels", type=int, default=None, dest="max_labels", help="Max labels per line")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default="reports", dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-render", action="store_false", dest="render", help="Skip debug.png")
    return p.parse_args(argv)


def _parse_segment_size(s: str) -> tuple[float, ...]:
    """Parse comma-separated piece widths, e.g. '30,25,40'."""
    out: list[float] = []
    for part in (s or "").split(","):
        part = part.strip()
        if part:
            out.append(float(part))
    return tuple(out)


def _label_size(args: argparse.Namespace) -> tuple[tuple[float, float], tuple[float, ...]]:
    """Label (width, height) in px and its piece widths, from explicit sizes or measured text."""
    segments = _parse_segment_size(args.segment_size)
    if args.width_px is not None:
        height = args.height_px if args.height_px is not None else args.font_size_pt
        return (args.width_px, height), segments
    if not args.text:
        raise ValueError("Either --text or --width-px is required.")

    from linelabel.core.text_metrics import measure_segments_px, measure_text_px

    width, height = measure_text_px(args.text, args.font_family, args.font_size_pt)
    if not segments:
        segments = measure_segments_px(args.text, args.font_family, args.font_size_pt)
    if segments:
        width = sum(segments)
    if args.height_px is not None:
        height = args.height_px
    return (width, height), segments


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    lines_list = load_polylines(args.geometry, repo_root=repo_root)
    size, segments = _label_size(args)
    layout = LayoutConfig(
        placement=PlacementMode.CORNER if args.corner else PlacementMode.MID_POINT,
        segment_size=segments,
        spread_factor=args.spread_factor,
        articulated=args.articulated,
        line_exceed=args.line_exceed,
        units_per_pixel=args.units_per_pixel,
        buffer=tuple(args.buffer_px),
        offset=tuple(args.offset_px),
    )
    logger.info("Placing %.1fx%.1f px label on %d line(s)", size[0], size[1], len(lines_list))

    summaries = run_line_layout(size, lines_list, layout, max_labels=args.max_labels)
    for i, summary in enumerate(summaries):
        for w in summary.warnings:
            logger.warning("Line %d: %s", i, w)

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    paths = [
        write_placements_json(report_dir, summaries, size, layout, args.geometry),
        write_run_metadata_json(report_dir, args.run_name, args.geometry, args.text, size),
    ]
    if args.render:
        from linelabel.core.render import render_debug
        debug_path = report_dir / "debug.png"
        render_debug(lines_list, summaries, debug_path)
        paths.append(debug_path)

    for p in paths:
        print(p)
    print("Labels placed:", sum(s.success_count for s in summaries))


if __name__ == "__main__":
    main()
