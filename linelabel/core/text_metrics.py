"""
Measure label text in pixels using Pillow: the whole label and the
per-word pieces an articulated label may be split between.
"""

from __future__ import annotations

import warnings

_font_warning_emitted: set[str] = set()


def _load_font(font_family: str, font_size_pt: float):
    """Load PIL ImageFont; fallback with warning if font not found."""
    from PIL import ImageFont

    size = max(1, int(round(font_size_pt)))
    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default()


def measure_text_px(text: str, font_family: str, font_size_pt: float) -> tuple[float, float]:
    """Return (width_px, height_px) of text at 72 DPI (1 pt = 1 px)."""
    font = _load_font(font_family, font_size_pt)
    left, top, right, bottom = font.getbbox(text)
    return (float(right - left), float(bottom - top))


def measure_segments_px(text: str, font_family: str, font_size_pt: float) -> tuple[float, ...]:
    """
    Advance widths of the words of text, each but the last carrying its
    trailing space, so the pieces add up to the label advance width.
    """
    words = text.split()
    if not words:
        return ()
    font = _load_font(font_family, font_size_pt)
    pieces = [w + " " for w in words[:-1]] + [words[-1]]
    return tuple(float(font.getlength(p)) for p in pieces)
