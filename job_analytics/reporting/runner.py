"""Run a set of reports against one snapshot."""

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Iterable, List, Optional, Tuple, Union
from uuid import uuid4

from job_analytics.analysis.queries import REPORTS
from job_analytics.config.models import ReportConfig
from job_analytics.domain.exceptions import AnalyticsError
from job_analytics.domain.models import ReportRow
from job_analytics.logging import get_logger
from job_analytics.logging.context import log_context
from job_analytics.persistence.exceptions import PersistenceError
from job_analytics.persistence.sql_backend import SqlQueryBackend
from job_analytics.store.relation_store import RelationStore

from .models import QueryRunStats, ReportRunResult

logger = get_logger(__name__, component="reporting")

ReportSource = Union[RelationStore, SqlQueryBackend]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportRunner:
    """
    Executes reports against a RelationStore or a SqlQueryBackend.

    Reports are independent: a failing report is recorded in its
    QueryRunStats and the remaining reports still run. Against an in-memory
    store the reports can run on a thread pool since the store is never
    mutated. Database-backed runs are always sequential because they share
    one session.
    """

    def __init__(self, source: ReportSource, report_config: Optional[ReportConfig] = None):
        """
        Args:
            source: Snapshot or database backend to query
            report_config: Report parameters; defaults reproduce the
                canonical data analyst reports
        """
        self.source = source
        self.report_config = report_config or ReportConfig()

    @property
    def backend(self) -> str:
        return "memory" if isinstance(self.source, RelationStore) else "sql"

    def _resolve(self, report: str) -> Callable[[], List[ReportRow]]:
        if report not in REPORTS:
            raise KeyError(f"Unknown report: {report}")
        params = self.report_config.parameters_for(report)
        if isinstance(self.source, RelationStore):
            return partial(REPORTS[report], self.source, **params)
        return partial(getattr(self.source, report), **params)

    def run(self, reports: Optional[Iterable[str]] = None, max_workers: int = 1) -> ReportRunResult:
        """
        Compute the requested reports.

        Args:
            reports: Report names; defaults to the configured enabled list
            max_workers: Thread pool size for in-memory runs

        Returns:
            ReportRunResult with rows and per-report statistics

        Raises:
            KeyError: If a report name is unknown
        """
        names = list(reports) if reports is not None else list(self.report_config.enabled)
        for name in names:
            if name not in REPORTS:
                raise KeyError(f"Unknown report: {name}")

        run_id = uuid4().hex
        run_started_at = utc_now()

        with log_context(run_id=run_id, backend=self.backend):
            logger.info(
                f"Report run started: {len(names)} report(s)",
                extra={
                    "event": "report.run.started",
                    "reports": names,
                    "max_workers": max_workers,
                },
            )

            if max_workers > 1 and self.backend == "memory" and len(names) > 1:
                outcomes = self._run_parallel(names, max_workers)
            else:
                if max_workers > 1 and self.backend == "sql":
                    logger.warning(
                        "Parallel execution is not supported for the sql backend; running sequentially",
                        extra={"event": "report.run.sequential_fallback"},
                    )
                outcomes = [self._run_one(name) for name in names]

            results = {}
            stats = []
            for name, rows, stat in outcomes:
                stats.append(stat)
                if rows is not None:
                    results[name] = rows

            result = ReportRunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                backend=self.backend,
                results=results,
                query_stats=stats,
            )

            logger.info(
                "Report run completed",
                extra={
                    "event": "report.run.completed",
                    "duration_ms": int(result.total_duration_seconds * 1000),
                    "total_rows": result.total_rows,
                    "failed_reports": result.failed_reports,
                    "had_errors": result.had_errors,
                },
            )

        return result

    def _run_parallel(
        self, names: List[str], max_workers: int
    ) -> List[Tuple[str, Optional[List[ReportRow]], QueryRunStats]]:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="report") as pool:
            # Each task runs in a copy of the current context so run_id reaches worker logs
            futures = [
                pool.submit(contextvars.copy_context().run, self._run_one, name)
                for name in names
            ]
            return [future.result() for future in futures]

    def _run_one(self, report: str) -> Tuple[str, Optional[List[ReportRow]], QueryRunStats]:
        stats = QueryRunStats(report=report)
        started = time.perf_counter()

        with log_context(report=report):
            logger.debug("Report started", extra={"event": "report.query.started"})
            try:
                rows = self._resolve(report)()
            except (AnalyticsError, PersistenceError) as e:
                stats.duration_seconds = time.perf_counter() - started
                stats.had_errors = True
                stats.error_type = type(e).__name__
                stats.error_message = str(e)
                logger.error(
                    f"Report {report} failed: {e}",
                    extra={
                        "event": "report.query.failed",
                        "error_type": stats.error_type,
                        "duration_ms": int(stats.duration_seconds * 1000),
                    },
                    exc_info=True,
                )
                return report, None, stats

            stats.duration_seconds = time.perf_counter() - started
            stats.row_count = len(rows)
            logger.info(
                f"Report {report} produced {len(rows)} row(s)",
                extra={
                    "event": "report.query.completed",
                    "row_count": stats.row_count,
                    "duration_ms": int(stats.duration_seconds * 1000),
                },
            )
            if not rows:
                logger.info(
                    f"Report {report} matched no postings",
                    extra={"event": "report.query.empty"},
                )

        return report, rows, stats
