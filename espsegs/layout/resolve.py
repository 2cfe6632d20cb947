# layout/resolve.py
from __future__ import annotations
from typing import Iterable, Optional

from ..chips.catalog import Region


def contains(region: Region, address: int, size: int, flash_size: Optional[int] = None) -> bool:
    return region.start <= address and region.end(flash_size) >= address + size


def resolve_region(
    regions: Iterable[Region],
    address: int,
    size: int,
    flash_size: Optional[int] = None,
) -> Optional[Region]:
    """
    Find the region that holds the whole [address, address + size) range.

    Regions are tried in catalog order and the first hit wins. A section
    that straddles two regions, or lies outside every region, gives None.
    """
    for region in regions:
        if contains(region, address, size, flash_size):
            return region
    return None
