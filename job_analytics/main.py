"""Command line entry point: import data, run reports, export results."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from job_analytics.analysis.queries import REPORTS
from job_analytics.config.exceptions import ConfigurationError
from job_analytics.config.loader import load_config
from job_analytics.config.models import AppConfig
from job_analytics.domain.exceptions import AnalyticsError
from job_analytics.logging import get_logger
from job_analytics.logging.config import configure_logging
from job_analytics.persistence import (
    SqlQueryBackend,
    close_database,
    get_session,
    import_csv_directory,
    init_database,
    load_relation_store,
)
from job_analytics.persistence.exceptions import PersistenceError
from job_analytics.reporting import ReportRunner, export_results
from job_analytics.reporting.models import ReportRunResult

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Job Market Analytics - top paying roles, skill demand and skill salaries"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--import-csv",
        type=Path,
        default=None,
        metavar="DIR",
        help="Import company_dim/skills_dim/job_postings_fact/skills_job_dim CSVs before reporting",
    )
    parser.add_argument(
        "--report",
        action="append",
        choices=sorted(REPORTS),
        default=None,
        help="Report to run (repeatable, default: reports enabled in config)",
    )
    parser.add_argument(
        "--backend",
        choices=["memory", "sql"],
        default="memory",
        help="Compute reports in memory or inside the database (default: memory)",
    )
    parser.add_argument("--output-dir", type=Path, default=None, help="Export directory")
    parser.add_argument("--format", choices=["json", "csv"], default=None, help="Export format")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used to compute in-memory reports (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def run_reports(
    app_config: AppConfig,
    backend: str,
    reports: Optional[List[str]] = None,
    workers: int = 1,
) -> ReportRunResult:
    """Open a session, build the requested source, and run the reports."""
    with get_session() as session:
        if backend == "sql":
            source = SqlQueryBackend(session)
        else:
            source = load_relation_store(session)
        runner = ReportRunner(source, app_config.reports)
        return runner.run(reports, max_workers=workers)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Exit code: 0 on success, 1 on configuration, database or report errors
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_config(args.config)
        if args.log_level:
            app_config.logging.level = args.log_level
        if args.output_dir:
            app_config.output.directory = str(args.output_dir)
        if args.format:
            app_config.output.format = args.format

        configure_logging(
            level=app_config.logging.level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Job Market Analytics starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "backend": args.backend,
                "log_level": app_config.logging.level,
            },
        )

        init_database(app_config.database.url)

        if args.import_csv:
            with get_session() as session:
                counts = import_csv_directory(session, args.import_csv)
            logger.info(
                "CSV import completed",
                extra={"event": "import.completed", "directory": str(args.import_csv), **counts},
            )

        result = run_reports(app_config, args.backend, args.report, args.workers)
        written = export_results(result, app_config.output.directory, app_config.output.format)

        logger.info(
            f"Exported {len(written)} report(s) to {app_config.output.directory}",
            extra={
                "event": "service.completed",
                "had_errors": result.had_errors,
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 1 if result.had_errors else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except (PersistenceError, AnalyticsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(
            f"Run aborted: {e}",
            extra={"event": "service.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 130
    finally:
        close_database()


if __name__ == "__main__":
    sys.exit(main())
