from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from elftools.common.exceptions import ELFError
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .chips.catalog import UnknownChipError, find_chip, list_chips
from .config import APP_NAME, DEFAULT_WIDTH, FLASH_SIZES, LOG_FILE
from .elf.sections import read_sections
from .logs import log_event, setup_logging
from .report import build_report

app = typer.Typer(add_completion=False, help="Show where the sections of an ESP firmware ELF land in the chip's memory.")
err = Console(stderr=True)


# --flash-size choices, one per entry of FLASH_SIZES
FlashSize = Enum("FlashSize", {label: label for label in FLASH_SIZES}, type=str)


def _catalog(expert: bool) -> str:
    return "expert" if expert else "basic"


def _version(value: bool):
    if value:
        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def cli(
    version: bool = typer.Option(False, "--version", callback=_version, is_eager=True,
                                 help="Print the version and exit."),
):
    """ESP firmware section layout viewer."""


@app.command()
def show(
    file: Path = typer.Argument(..., help="Firmware ELF file"),
    chip: str = typer.Option(..., "--chip", "-c", help="Target chip, e.g. esp32 or esp32-s3"),
    flash_size: Optional[FlashSize] = typer.Option(None, "--flash-size", "-f",
                                                   help="Flash capacity; resizes the IROM/DROM regions"),
    width: int = typer.Option(DEFAULT_WIDTH, "--width", "-w", min=1, help="Total line width"),
    name_width: Optional[int] = typer.Option(None, "--name-width", min=1,
                                             help="Fixed, truncating name column (classic layout: 12)"),
    expert: bool = typer.Option(False, "--expert", help="Use the fine-grained region catalog"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug output on stderr"),
):
    """Print every loaded section with its region and a placement bar."""
    setup_logging(verbose)
    catalog = _catalog(expert)

    try:
        target = find_chip(chip, catalog)
    except UnknownChipError:
        print("[red]Unknown chip[/]")
        raise typer.Exit(code=1)

    try:
        sections = read_sections(file)
    except (OSError, ELFError) as e:
        err.print(f"[red]Cannot read {escape(str(file))}:[/] {escape(str(e))}")
        raise typer.Exit(code=1)

    capacity = FLASH_SIZES[flash_size.value] if flash_size is not None else None
    report = build_report(sections, target, flash_size=capacity, width=width, name_width=name_width)
    for line in report.lines:
        typer.echo(line)

    log_event(LOG_FILE, "show", {
        "file": str(file),
        "chip": target.name,
        "catalog": catalog,
        "flash_size": flash_size.value if flash_size is not None else None,
        "sections": len(sections),
        "shown": report.shown,
        "unmapped": report.unmapped,
    })


@app.command()
def chips(
    expert: bool = typer.Option(False, "--expert", help="Use the fine-grained region catalog"),
):
    """List the known chips and their memory regions."""
    table = Table(title=f"{_catalog(expert)} catalog")
    table.add_column("Chip", style="cyan")
    table.add_column("Region")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Flash")

    for c in list_chips(_catalog(expert)):
        for i, region in enumerate(c.regions):
            table.add_row(
                c.name if i == 0 else "",
                region.name,
                f"0x{region.start:08X}",
                f"0x{region.end():08X}",
                f"0x{region.length:X}",
                "yes" if region.is_rom else "",
            )
        table.add_section()
    print(table)


if __name__ == "__main__":
    app()
