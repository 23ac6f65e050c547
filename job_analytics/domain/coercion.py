"""Normalisation of loosely typed source values."""

from typing import Any

from .exceptions import TypeCoercionError

_TRUE_STRINGS = {"true", "t", "1"}
_FALSE_STRINGS = {"false", "f", "0"}


def coerce_remote_flag(value: Any, field: str = "job_work_from_home") -> bool:
    """Coerce a work-from-home flag to a definite boolean.

    Accepts booleans, the integers 0 and 1, and the string spellings that
    PostgreSQL CSV exports use ("t"/"f", "true"/"false", "1"/"0").

    Args:
        value: Raw flag value
        field: Field name used in the error message

    Returns:
        True or False

    Raises:
        TypeCoercionError: For any other value, including None
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        if value in (0, 1):
            return value == 1
        raise TypeCoercionError(field, value)

    if isinstance(value, float) and value in (0.0, 1.0):
        return value == 1.0

    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False

    raise TypeCoercionError(field, value)
