"""Bookkeeping for report runs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from job_analytics.domain.models import ReportRow


@dataclass
class QueryRunStats:
    """
    Outcome of a single report within a run.

    Attributes:
        report: Report name
        row_count: Number of rows produced
        duration_seconds: Time spent computing the report
        had_errors: Whether the report failed
        error_type: Exception class name when the report failed
        error_message: Exception message when the report failed
    """

    report: str
    row_count: int = 0
    duration_seconds: float = 0.0
    had_errors: bool = False
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class ReportRunResult:
    """
    Results and statistics of a run over one snapshot.

    Attributes:
        run_id: Identifier shared by every log line of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        backend: "memory" or "sql"
        results: Report rows keyed by report name, in requested order.
            Failed reports are absent.
        query_stats: Per-report statistics, in requested order
        total_duration_seconds: Wall time of the run
        had_errors: Whether any report failed
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    backend: str = "memory"
    results: Dict[str, List[ReportRow]] = field(default_factory=dict)
    query_stats: List[QueryRunStats] = field(default_factory=list)
    total_duration_seconds: float = 0.0
    had_errors: bool = False

    def __post_init__(self):
        if self.query_stats and not self.had_errors:
            self.had_errors = any(s.had_errors for s in self.query_stats)

        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def total_rows(self) -> int:
        return sum(s.row_count for s in self.query_stats)

    @property
    def failed_reports(self) -> List[str]:
        return [s.report for s in self.query_stats if s.had_errors]
