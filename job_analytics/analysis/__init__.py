"""Filters, aggregations, and the five job market reports."""

from .aggregation import (
    SkillPair,
    average_salary_per_skill,
    count_jobs_per_skill,
    group_by_skill,
    round_half_up,
)
from .predicates import (
    all_of,
    has_known_salary,
    is_data_analyst_role,
    is_fully_remote_location,
    is_remote_capable,
)
from .queries import (
    REPORTS,
    join_postings_to_skills,
    optimal_skills,
    top_demanded_skills,
    top_paying_job_skills,
    top_paying_jobs,
    top_paying_skills,
)

__all__ = [
    # Predicates
    "is_data_analyst_role",
    "is_fully_remote_location",
    "is_remote_capable",
    "has_known_salary",
    "all_of",
    # Aggregation
    "SkillPair",
    "group_by_skill",
    "count_jobs_per_skill",
    "average_salary_per_skill",
    "round_half_up",
    # Reports
    "REPORTS",
    "join_postings_to_skills",
    "top_paying_jobs",
    "top_paying_job_skills",
    "top_demanded_skills",
    "top_paying_skills",
    "optimal_skills",
]
