# layout/bar.py
"""
Proportional bar showing where a section sits inside its memory region.

    [      ████████                  ]

The bar has `width` cells between the brackets. A section too small to
cover a whole cell at this scale is drawn as a single thin marker so it
never disappears from the picture.
"""
from __future__ import annotations

FULL = "\u2588"  # █
THIN = "\u258f"  # ▏
BLANK = " "
OPEN, CLOSE = "[", "]"


def bar_cells(region_start: int, region_end: int, section_start: int, section_size: int,
              width: int) -> tuple[int, int, bool]:
    """Return (offset, fill, thin) in cells; offset + fill never exceeds width."""
    width = max(1, width)
    span = region_end - region_start
    if span <= 0:
        return 0, 1, True

    # integer math: a section filling its region gets exactly `width` cells
    offset = max(0, width * (section_start - region_start) // span)
    fill = max(0, width * section_size // span)

    thin = fill == 0
    if thin:
        fill = 1
    fill = min(fill, width)
    offset = min(offset, width - fill)
    return offset, fill, thin


def render_bar(region_start: int, region_end: int, section_start: int, section_size: int,
               width: int) -> str:
    width = max(1, width)
    offset, fill, thin = bar_cells(region_start, region_end, section_start, section_size, width)
    pad = max(0, width - offset - fill)
    glyph = THIN if thin else FULL
    return OPEN + BLANK * offset + glyph * fill + BLANK * pad + CLOSE
