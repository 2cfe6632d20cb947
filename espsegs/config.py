import os
from pathlib import Path

APP_NAME = "espsegs"

# total line width of a report, in character columns
DEFAULT_WIDTH = 120

LOG_DIR = Path(os.environ.get("ESPSEGS_LOG_DIR", Path.home() / ".espsegs" / "logs"))
LOG_FILE = LOG_DIR / "session.jsonl"

CATALOGS = ("basic", "expert")

KB = 1024
MB = 1024 * KB

# standard SPI flash capacities accepted by --flash-size
FLASH_SIZES = {
    "256KB": 256 * KB,
    "512KB": 512 * KB,
    "1MB": 1 * MB,
    "2MB": 2 * MB,
    "4MB": 4 * MB,
    "8MB": 8 * MB,
    "16MB": 16 * MB,
    "32MB": 32 * MB,
    "64MB": 64 * MB,
    "128MB": 128 * MB,
    "256MB": 256 * MB,
}
