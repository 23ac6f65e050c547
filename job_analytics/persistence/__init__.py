"""Persistence layer for the job postings database.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Data loading
    - load_relation_store(session) -> RelationStore
    - import_csv_directory(session, directory) -> Dict[str, int]

    # In-database reports
    - SqlQueryBackend

Example usage:
    >>> from job_analytics.persistence import init_database, get_session, load_relation_store
    >>> init_database("sqlite:///./data/job_postings.db")
    >>> with get_session() as session:
    ...     store = load_relation_store(session)
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataImportError,
    DataIntegrityError,
    PersistenceError,
)
from .importer import import_csv_directory, insert_entities, read_csv_records
from .loader import load_relation_store
from .sql_backend import SqlQueryBackend

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Loading
    "load_relation_store",
    "import_csv_directory",
    "insert_entities",
    "read_csv_records",
    # Reports
    "SqlQueryBackend",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
    "DataImportError",
]
