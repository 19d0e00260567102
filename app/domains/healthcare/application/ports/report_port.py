"""
Report Ports

Storage of generated CSV reports.
"""

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class IReportWriter(Protocol):
    """Writes tabular reports to durable storage."""

    def write(self, file_name: str, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
        """
        Write one CSV report.

        Returns:
            Location of the written file
        """
        ...
