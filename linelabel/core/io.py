"""
Load and validate line geometry from WKT or coordinate lists.
Supports LineString, MultiLineString and GeometryCollection (lines extracted).
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from shapely import wkt
from shapely.geometry import GeometryCollection, LineString, MultiLineString
from shapely.geometry.base import BaseGeometry

from linelabel.core.types import Polyline


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def load_wkt(path: str | Path, repo_root: Path | None = None) -> str:
    """Read WKT string from a file."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Geometry file not found: {resolved}")
    return resolved.read_text(encoding="utf-8").strip()


def parse_wkt(wkt_string: str) -> BaseGeometry:
    """Parse WKT string into a Shapely geometry."""
    return wkt.loads(wkt_string.strip())


def _extract_lines(geom: BaseGeometry) -> list[LineString]:
    """Extract LineString(s) from any supported geometry type."""
    if geom.is_empty:
        return []
    if isinstance(geom, LineString):
        return [geom]
    if isinstance(geom, MultiLineString):
        return list(geom.geoms)
    if isinstance(geom, GeometryCollection):
        out: list[LineString] = []
        for g in geom.geoms:
            out.extend(_extract_lines(g))
        return out
    return []


def to_polyline(coords: Sequence[Sequence[float]]) -> Polyline:
    """
    Coordinates as an immutable tuple of (x, y) floats.
    Drops z values; raises ValueError on non-finite coordinates.
    """
    arr = np.asarray(coords, dtype=float)
    if arr.size == 0:
        return ()
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"Expected (N, 2) coordinates, got shape {arr.shape}")
    xy = arr[:, :2]
    if not np.isfinite(xy).all():
        raise ValueError("Line has non-finite coordinates")
    return tuple((float(x), float(y)) for x, y in xy)


def geometry_to_polylines(geom: BaseGeometry) -> list[Polyline]:
    """
    Validate geometry and return one polyline per line part.
    Parts with fewer than two points are skipped.
    """
    if geom is None or geom.is_empty:
        raise ValueError("Geometry is empty or None")
    lines = _extract_lines(geom)
    if not lines:
        raise ValueError(f"No line(s) found in geometry of type {geom.geom_type}")
    polylines = [to_polyline(line.coords) for line in lines]
    polylines = [p for p in polylines if len(p) >= 2]
    if not polylines:
        raise ValueError("Geometry has no line with at least two points")
    return polylines


def load_polylines(path: str | Path, repo_root: Path | None = None) -> list[Polyline]:
    """
    Load line WKT from file and return validated polylines.
    Raises FileNotFoundError if path is missing, ValueError if geometry is invalid.
    """
    return geometry_to_polylines(parse_wkt(load_wkt(path, repo_root)))
