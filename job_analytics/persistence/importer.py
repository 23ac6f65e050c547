"""Bulk import of the dataset's CSV exports.

Expects one file per table in a directory:
company_dim.csv, skills_dim.csv, job_postings_fact.csv, skills_job_dim.csv.
"""

import math
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import pandas as pd
from pydantic import ValidationError
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from job_analytics.domain.models import Company, JobPosting, JobSkillLink, Skill
from job_analytics.logging import get_logger

from .exceptions import DataImportError, DataIntegrityError, PersistenceError
from .schema import CompanyModel, JobPostingModel, SkillJobModel, SkillModel

logger = get_logger(__name__, component="importer")

# Parents before children so foreign keys resolve
IMPORT_ORDER = (
    ("company_dim", CompanyModel, Company.model_validate),
    ("skills_dim", SkillModel, Skill.model_validate),
    ("job_postings_fact", JobPostingModel, JobPosting.from_record),
    ("skills_job_dim", SkillJobModel, JobSkillLink.model_validate),
)

BATCH_SIZE = 5000


def read_csv_records(path: Path) -> List[Dict[str, Any]]:
    """Read a CSV file into a list of plain-Python records.

    Empty cells become None and numpy scalars are unwrapped so the records
    can be validated by the domain models. Only empty cells are treated as
    missing; text such as "NA" or "null" is kept as written.

    Raises:
        DataImportError: If the file is missing or cannot be parsed
    """
    if not path.exists():
        raise DataImportError(f"CSV file not found: {path}", path=path)

    try:
        frame = pd.read_csv(path, encoding="utf-8", keep_default_na=False, na_values=[""])
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataImportError(f"Failed to parse {path}: {e}", path=path) from e

    if "job_posted_date" in frame.columns:
        frame["job_posted_date"] = pd.to_datetime(frame["job_posted_date"], errors="coerce")

    return [
        {key: _to_python(value) for key, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]


def _to_python(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def import_csv_directory(session: Session, directory: Union[str, Path]) -> Dict[str, int]:
    """Validate and insert every CSV of the dataset found in directory.

    All four files must be present. Each row is validated against its domain
    model before insertion, so malformed work-from-home flags surface as
    TypeCoercionError.

    Args:
        session: Open database session (committed by the caller)
        directory: Directory holding the four CSV files

    Returns:
        Mapping of table name to number of inserted rows

    Raises:
        DataImportError: If a file is missing, unparsable, or a row is invalid
        DataIntegrityError: If rows violate a database constraint
        TypeCoercionError: If a posting has a malformed work-from-home flag
    """
    directory = Path(directory)
    missing = [name for name, _, _ in IMPORT_ORDER if not (directory / f"{name}.csv").exists()]
    if missing:
        raise DataImportError(
            f"Missing CSV files in {directory}: {', '.join(f'{m}.csv' for m in missing)}",
            path=directory,
        )

    counts: Dict[str, int] = {}
    for table_name, model, build in IMPORT_ORDER:
        path = directory / f"{table_name}.csv"
        records = read_csv_records(path)
        counts[table_name] = _insert_records(session, table_name, model, build, records)
        logger.info(
            f"Imported {counts[table_name]} rows into {table_name}",
            extra={"event": "import.table.completed", "table": table_name, "rows": counts[table_name]},
        )

    return counts


def _insert_records(
    session: Session,
    table_name: str,
    model,
    build: Callable[[Dict[str, Any]], Any],
    records: List[Dict[str, Any]],
) -> int:
    columns = {column.name for column in model.__table__.columns}
    rows = []
    for line, record in enumerate(records, start=2):
        try:
            entity = build({k: v for k, v in record.items() if k in columns})
        except ValidationError as e:
            raise DataImportError(f"{table_name}.csv line {line}: {e}") from e
        rows.append(entity.model_dump())

    try:
        for start in range(0, len(rows), BATCH_SIZE):
            batch = rows[start:start + BATCH_SIZE]
            if batch:
                session.execute(insert(model), batch)
        session.flush()
    except IntegrityError as e:
        logger.error(f"Integrity error importing {table_name}: {e}", exc_info=True)
        raise DataIntegrityError(f"Failed to import {table_name}: {e.orig}") from e
    except SQLAlchemyError as e:
        logger.error(f"Error importing {table_name}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to import {table_name}: {e}") from e

    return len(rows)


def insert_entities(session: Session, entities: Dict[str, List[Any]]) -> Dict[str, int]:
    """Insert already validated domain objects, keyed by table name.

    Used to seed databases from in-memory fixtures.
    """
    counts: Dict[str, int] = {}
    for table_name, model, _ in IMPORT_ORDER:
        objects = entities.get(table_name, [])
        try:
            session.add_all(model.from_domain(entity) for entity in objects)
            session.flush()
        except IntegrityError as e:
            raise DataIntegrityError(f"Failed to insert into {table_name}: {e.orig}") from e
        counts[table_name] = len(objects)
    return counts
