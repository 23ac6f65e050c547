"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError.
"""


class PersistenceError(Exception):
    """Base exception for database and data loading failures."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the database cannot be initialised or reached.

    Examples:
    - Empty or malformed database URL
    - Database file not accessible
    - init_database() was never called
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when stored rows violate a constraint.

    Examples:
    - Duplicate job_id on import
    - skills_job_dim row pointing at a missing skill (foreign keys are enforced)
    """

    pass


class DataImportError(PersistenceError):
    """Raised when source files are missing or cannot be parsed."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)
