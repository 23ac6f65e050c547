"""Posting filters shared by the reports.

Fully-remote-location filtering (job_location == "Anywhere") and
remote-capable filtering (job_work_from_home is true) are distinct tests and
are not interchangeable.
"""

from typing import Callable

from job_analytics.domain.coercion import coerce_remote_flag
from job_analytics.domain.models import JobPosting

DATA_ANALYST_TITLE = "Data Analyst"
FULLY_REMOTE_LOCATION = "Anywhere"

PostingPredicate = Callable[[JobPosting], bool]


def is_data_analyst_role(posting: JobPosting, title: str = DATA_ANALYST_TITLE) -> bool:
    """
    Check whether a posting is for the given role.

    Args:
        posting: Posting to test
        title: Exact job_title_short to match

    Returns:
        True if job_title_short equals title
    """
    return posting.job_title_short == title


def is_fully_remote_location(
    posting: JobPosting, location: str = FULLY_REMOTE_LOCATION
) -> bool:
    """
    Check whether a posting is advertised at the fully remote location marker.

    Args:
        posting: Posting to test
        location: Location text that marks a fully remote job

    Returns:
        True if job_location equals location
    """
    return posting.job_location == location


def is_remote_capable(posting: JobPosting) -> bool:
    """True when the posting is flagged as allowing work from home.

    Raises:
        TypeCoercionError: If the flag is not a recognised boolean
    """
    return coerce_remote_flag(posting.job_work_from_home)


def has_known_salary(posting: JobPosting) -> bool:
    """True when salary_year_avg is present."""
    return posting.salary_year_avg is not None


def all_of(*predicates: PostingPredicate) -> PostingPredicate:
    """Combine predicates with logical AND, short-circuiting in order."""

    def combined(posting: JobPosting) -> bool:
        return all(predicate(posting) for predicate in predicates)

    return combined
