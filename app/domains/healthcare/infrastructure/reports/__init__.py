"""
Report generation infrastructure: CSV storage and the in-memory job registry.
"""

from .csv_writer import CsvReportWriter
from .job_registry import ReportJob, ReportJobRegistry, ReportJobStatus
from .runner import ReportJobRunner

__all__ = ["CsvReportWriter", "ReportJob", "ReportJobRegistry", "ReportJobStatus", "ReportJobRunner"]
