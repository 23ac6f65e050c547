"""Write report rows to JSON or CSV for charting tools.

Columns always follow the row type's FIELDS order. Dates are written as
ISO 8601. Missing values are null in JSON and empty cells in CSV.
"""

import csv
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence, Type, Union

from job_analytics.domain.models import (
    OptimalSkill,
    ReportRow,
    SkillDemand,
    SkillSalary,
    TopPayingJob,
    TopPayingJobSkill,
)
from job_analytics.logging import get_logger

from .models import ReportRunResult

logger = get_logger(__name__, component="export")

SUPPORTED_FORMATS = ("json", "csv")

ROW_TYPES: Dict[str, Type[ReportRow]] = {
    "top_paying_jobs": TopPayingJob,
    "top_paying_job_skills": TopPayingJobSkill,
    "top_demanded_skills": SkillDemand,
    "top_paying_skills": SkillSalary,
    "optimal_skills": OptimalSkill,
}


def _serialise(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def rows_to_records(rows: Sequence[ReportRow]) -> List[Dict[str, Any]]:
    """Convert rows to ordered, JSON-safe dicts."""
    return [
        {key: _serialise(value) for key, value in row.as_dict().items()} for row in rows
    ]


def write_json(path: Path, report: str, rows: Sequence[ReportRow]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(rows_to_records(rows), f, indent=2, ensure_ascii=False)
        f.write("\n")


def write_csv(path: Path, report: str, rows: Sequence[ReportRow]) -> None:
    fields = ROW_TYPES[report].FIELDS
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(fields)
        for row in rows:
            writer.writerow(
                "" if value is None else _serialise(value) for value in row.as_row()
            )


def export_results(
    result: ReportRunResult,
    output_dir: Union[str, Path],
    fmt: str = "json",
) -> List[Path]:
    """
    Write every successful report of a run to output_dir.

    One file per report, named <report>.<fmt>. Empty reports still produce a
    file (an empty JSON list, or a CSV with only the header).

    Args:
        result: Completed report run
        output_dir: Target directory, created if missing
        fmt: 'json' or 'csv'

    Returns:
        Paths of the written files, in report order

    Raises:
        ValueError: If fmt is not supported
    """
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}. Use one of {SUPPORTED_FORMATS}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    writer = write_json if fmt == "json" else write_csv

    written = []
    for report, rows in result.results.items():
        path = output_dir / f"{report}.{fmt}"
        writer(path, report, rows)
        written.append(path)
        logger.info(
            f"Exported {report} to {path}",
            extra={"event": "export.file.written", "report": report, "rows": len(rows), "path": str(path)},
        )

    return written
