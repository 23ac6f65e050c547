"""Domain exceptions for relation data and report computation.

All analytics exceptions inherit from AnalyticsError so a caller can handle
every failure of a single report invocation with one except clause.
"""

from typing import Any, Optional


class AnalyticsError(Exception):
    """Base exception for all analytics errors."""

    pass


class SchemaViolationError(AnalyticsError):
    """Raised when relation data breaks referential or uniqueness rules.

    Examples:
    - Two job postings share the same job_id
    - A job-skill link names a skill_id that does not exist
    - A job-skill link names a job_id that does not exist
    """

    def __init__(
        self,
        message: str,
        relation: Optional[str] = None,
        key: Optional[Any] = None,
    ):
        self.relation = relation
        self.key = key
        super().__init__(message)


class TypeCoercionError(AnalyticsError, ValueError):
    """Raised when a raw value cannot be coerced to the expected type.

    Subclasses ValueError so pydantic validators report it as a normal
    validation failure.
    """

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(
            f"Cannot coerce {field}={value!r} ({type(value).__name__}) to boolean"
        )


class EmptyGroupError(AnalyticsError):
    """Raised when an aggregation is asked to summarise an empty group."""

    pass
