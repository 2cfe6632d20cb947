# chips/catalog.py
from __future__ import annotations
import json
import logging
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..config import CATALOGS

logger = logging.getLogger(__name__)

# catalog files are package resources; works both from sources and a frozen bundle
PKG_ROOT = Path(__file__).resolve().parents[1]
BASE_RES = Path(getattr(sys, "_MEIPASS", PKG_ROOT))
CATALOG_DIR = BASE_RES / "chips"


class CatalogError(ValueError):
    """A chip catalog is missing, unknown or malformed."""


class UnknownChipError(LookupError):
    """No chip in the catalog matches the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown chip: {name}")
        self.name = name


@dataclass(frozen=True)
class Region:
    id: int
    name: str
    start: int
    length: int

    @property
    def is_rom(self) -> bool:
        """ROM-class regions map external flash; their size follows the flash chip."""
        return self.name.endswith("ROM")

    def effective_length(self, flash_size: Optional[int] = None) -> int:
        if flash_size is not None and self.is_rom:
            return flash_size
        return self.length

    def end(self, flash_size: Optional[int] = None) -> int:
        return self.start + self.effective_length(flash_size)


@dataclass(frozen=True)
class Chip:
    name: str
    regions: tuple[Region, ...]

    @property
    def key(self) -> str:
        return normalize_chip_name(self.name)


def normalize_chip_name(name: str) -> str:
    return name.replace("-", "").casefold()


def _parse_int(value, what: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError:
            pass
    raise CatalogError(f"Invalid {what}: {value!r}")


def _parse_region(chip_name: str, raw: dict) -> Region:
    try:
        rid, name, start, length = raw["id"], raw["name"], raw["start"], raw["length"]
    except (KeyError, TypeError) as e:
        raise CatalogError(f"{chip_name}: region entry is missing {e}") from e

    region = Region(
        id=_parse_int(rid, f"{chip_name} region id"),
        name=str(name),
        start=_parse_int(start, f"{chip_name}/{name} start"),
        length=_parse_int(length, f"{chip_name}/{name} length"),
    )
    if region.id < 0 or not region.name:
        raise CatalogError(f"{chip_name}: bad region {raw!r}")
    if region.start < 0 or region.length <= 0:
        raise CatalogError(f"{chip_name}/{region.name}: start must be >= 0 and length > 0")
    return region


def parse_catalog(data: dict) -> tuple[Chip, ...]:
    """Turn a decoded catalog document into immutable Chip records."""
    chips = []
    try:
        entries = data["chips"]
    except (KeyError, TypeError) as e:
        raise CatalogError("Catalog has no 'chips' list") from e
    if not isinstance(entries, list):
        raise CatalogError(f"'chips' must be a list, got {type(entries).__name__}")

    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name:
            raise CatalogError(f"Chip entry without a name: {entry!r}")
        raw_regions = entry.get("regions")
        if not isinstance(raw_regions, list) or not raw_regions:
            raise CatalogError(f"{name}: no memory regions")
        regions = tuple(_parse_region(name, r) for r in raw_regions)
        ids = [r.id for r in regions]
        if len(set(ids)) != len(ids):
            raise CatalogError(f"{name}: duplicate region ids {ids}")
        chips.append(Chip(name=name, regions=regions))
    return tuple(chips)


def read_catalog_file(path: Path) -> tuple[Chip, ...]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e
    return parse_catalog(data)


@lru_cache(maxsize=None)
def load_catalog(catalog: str = "basic") -> tuple[Chip, ...]:
    if catalog not in CATALOGS:
        raise CatalogError(f"Unknown catalog '{catalog}', expected one of {', '.join(CATALOGS)}")

    path = CATALOG_DIR / f"{catalog}.json"
    chips = read_catalog_file(path)
    logger.debug("Loaded %d chips from %s", len(chips), path)
    return chips


def list_chips(catalog: str = "basic") -> tuple[Chip, ...]:
    return load_catalog(catalog)


def find_chip(name: str, catalog: str = "basic") -> Chip:
    """
    Look up a chip by name. Hyphens and letter case are ignored,
    so "esp32-s3", "ESP32S3" and "Esp32-S3" are the same chip.
    """
    key = normalize_chip_name(name)
    for chip in load_catalog(catalog):
        if chip.key == key:
            return chip
    raise UnknownChipError(name)
