"""
Reading the brokerage CSV export from disk.
"""
import csv
import logging
from pathlib import Path
from typing import List

__all__ = ["read_rows"]

log = logging.getLogger(__name__)


# impure
def read_rows(csv_path: Path) -> List[List[str]]:
    """
    Reads every row of a CSV file. Rows may have differing numbers of fields.

    The whole file is read before returning so that a framing error surfaces
    before any row is processed.
    #impure: Reads from the filesystem.

    Raises:
        OSError: If the file cannot be opened or read.
        csv.Error: If the file is not valid CSV.
    """
    # utf-8-sig drops the byte order mark some brokers prepend.
    with csv_path.open("r", encoding="utf-8-sig", newline="") as f:
        log.info(f"Opened {csv_path}")
        rows = list(csv.reader(f, strict=True))

    log.debug(f"Read {len(rows)} rows from {csv_path}")
    return rows
