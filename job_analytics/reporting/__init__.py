"""Report execution and export."""

from .export import ROW_TYPES, export_results, rows_to_records
from .models import QueryRunStats, ReportRunResult
from .runner import ReportRunner

__all__ = [
    "ReportRunner",
    "ReportRunResult",
    "QueryRunStats",
    "export_results",
    "rows_to_records",
    "ROW_TYPES",
]
