# elf/sections.py
from __future__ import annotations
from pathlib import Path
from typing import List

from elftools.elf.elffile import ELFFile

from ..report import Section


def read_sections(path: Path) -> List[Section]:
    """
    Return every section header of an ELF image as (name, address, size),
    in file order. Filtering and sorting are left to the report.

    Raises OSError if the file can't be read and ELFError if it isn't a
    valid ELF image.
    """
    path = Path(path)
    with path.open("rb") as f:
        elf = ELFFile(f)
        return [
            Section(name=section.name, address=section["sh_addr"], size=section["sh_size"])
            for section in elf.iter_sections()
        ]
