"""
Matplotlib PNG rendering of lines with their placed label boxes (debug.png).
Tile coordinates are y-down, so the y axis is inverted.
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from linelabel.core.config import RENDER_HEIGHT_PX, RENDER_WIDTH_PX
from linelabel.core.types import LineLayoutSummary, Polyline


def set_axes_to_lines(ax: plt.Axes, lines_list: list[Polyline], pad_frac: float = 0.05) -> None:
    """Set xlim/ylim from line bounds with margin; equal aspect; y down; hide axes."""
    pts = [p for line in lines_list for p in line]
    if not pts:
        return
    xy = np.array(pts)
    minx, miny = xy.min(axis=0)
    maxx, maxy = xy.max(axis=0)
    dx = max(1.0, (maxx - minx) * pad_frac)
    dy = max(1.0, (maxy - miny) * pad_frac)
    ax.set_xlim(minx - dx, maxx + dx)
    ax.set_ylim(maxy + dy, miny - dy)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")


def render_debug(
    lines_list: list[Polyline],
    summaries: list[LineLayoutSummary],
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    scale: int = 1,
) -> None:
    """Render lines, label anchors, oriented boxes and extents. scale multiplies output resolution."""
    w, h = width_px * scale, height_px * scale
    fig = plt.figure(figsize=(w / 100.0, h / 100.0), dpi=100, constrained_layout=False)
    # Leave bottom margin so legend does not overlap the image
    ax = fig.add_axes([0.05, 0.08, 0.9, 0.88])
    ax.axis("off")

    for i, line in enumerate(lines_list):
        xy = np.array(line)
        ax.plot(xy[:, 0], xy[:, 1], color="navy", linewidth=1.5, label="line" if i == 0 else None)

    first_obb = first_aabb = first_anchor = True
    for summary in summaries:
        for placement in summary.placements:
            if placement.position is not None:
                ax.scatter(
                    [placement.position[0]], [placement.position[1]],
                    s=12, color="red", zorder=6,
                    label="anchor" if first_anchor else None,
                )
                first_anchor = False
            for label in placement.candidates:
                obb = np.array(label.obb.exterior.coords)
                ax.plot(
                    obb[:, 0], obb[:, 1], color="black", linewidth=1.5, zorder=5,
                    label="obb" if first_obb else None,
                )
                first_obb = False
                minx, miny, maxx, maxy = label.aabb
                ax.plot(
                    [minx, maxx, maxx, minx, minx], [miny, miny, maxy, maxy, miny],
                    color="orange", linestyle="--", linewidth=1, zorder=4,
                    label="aabb" if first_aabb else None,
                )
                first_aabb = False

    set_axes_to_lines(ax, lines_list, pad_frac=0.05)
    leg = ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.08), ncol=4, fontsize=8)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white", bbox_inches="tight", bbox_extra_artists=[leg])
    plt.close(fig)
