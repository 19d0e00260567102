"""
CSV report storage on the local filesystem.
"""

import csv
import logging
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


class CsvReportWriter:
    """Implements IReportWriter writing UTF-8 CSV files under ``base_dir``."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def write(self, file_name: str, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
        # Only the bare name is honoured; callers never choose the directory
        target = self.base_dir / Path(file_name).name
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            writer.writerows(rows)
        logger.debug(f"CSV written: {target}")
        return target
