# logs.py
from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Diagnostics go to stderr through rich; stdout stays reserved for the report."""
    root = logging.getLogger("espsegs")
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    return root


def log_event(log_file: Path, kind: str, payload: dict) -> None:
    """Append one JSON record to the session log."""
    record = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "kind": kind,
        "payload": payload,
    }
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError as e:
        logger.warning("Could not write session log %s: %s", log_file, e)
