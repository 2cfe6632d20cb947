# report.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .chips.catalog import Chip
from .config import DEFAULT_WIDTH
from .layout.bar import render_bar
from .layout.resolve import resolve_region

logger = logging.getLogger(__name__)

ADDR_WIDTH = 8
SIZE_WIDTH = 7
# historical fixed name column, used when names are truncated
LEGACY_NAME_WIDTH = 12


@dataclass(frozen=True)
class Section:
    name: str
    address: int
    size: int

    @property
    def end(self) -> int:
        return self.address + self.size


@dataclass
class Report:
    lines: List[str] = field(default_factory=list)
    shown: int = 0
    unmapped: int = 0

    def text(self) -> str:
        return "\n".join(self.lines)


def loaded_sections(sections: Iterable[Section]) -> List[Section]:
    """
    Drop sections that take no space in the target's memory (address or
    size of zero: symbol tables, debug info, comments) and order the rest
    by address. The sort is stable, so equal addresses keep file order.
    """
    kept = []
    for s in sections:
        if s.address == 0 or s.size == 0:
            logger.debug("Skipping %s (addr=0x%x, size=%d)", s.name, s.address, s.size)
            continue
        kept.append(s)
    return sorted(kept, key=lambda s: s.address)


def bar_width(width: int, name_width: int, region_width: int) -> int:
    """Cells left for the bar once the text columns and brackets are laid out."""
    # name addr size region [bar]
    overhead = name_width + 1 + ADDR_WIDTH + 1 + SIZE_WIDTH + 1 + region_width + 1 + 2
    return max(1, width - overhead)


def format_line(section: Section, name_width: int) -> str:
    return f"{section.name:<{name_width}.{name_width}} {section.address:{ADDR_WIDTH}x} {section.size:{SIZE_WIDTH}}"


def build_report(
    sections: Iterable[Section],
    chip: Chip,
    flash_size: Optional[int] = None,
    width: int = DEFAULT_WIDTH,
    name_width: Optional[int] = None,
) -> Report:
    """
    Lay out every loaded section against the chip's memory map.

    A blank line is emitted whenever the next mapped section lands in a
    different region than the previous mapped one. Sections outside all
    regions are listed without a region or bar and do not affect grouping.
    """
    report = Report()
    ordered = loaded_sections(sections)
    if not ordered:
        return report

    if name_width is None:
        name_width = max(len(s.name) for s in ordered)
    name_width = max(1, name_width)
    region_width = max(len(r.name) for r in chip.regions)
    cells = bar_width(width, name_width, region_width)

    last_region = None
    for section in ordered:
        region = resolve_region(chip.regions, section.address, section.size, flash_size)
        line = format_line(section, name_width)

        if region is None:
            logger.debug("%s 0x%x..0x%x is outside every %s region",
                         section.name, section.address, section.end, chip.name)
            report.unmapped += 1
        else:
            if region.id != last_region:
                report.lines.append("")
                last_region = region.id
            bar = render_bar(region.start, region.end(flash_size), section.address, section.size, cells)
            line += f" {region.name:<{region_width}} {bar}"

        report.lines.append(line)
        report.shown += 1

    return report
