"""Domain models and errors for job market analytics."""

from .coercion import coerce_remote_flag
from .exceptions import (
    AnalyticsError,
    EmptyGroupError,
    SchemaViolationError,
    TypeCoercionError,
)
from .models import (
    Company,
    JobPosting,
    JobSkillLink,
    OptimalSkill,
    ReportRow,
    Skill,
    SkillDemand,
    SkillSalary,
    TopPayingJob,
    TopPayingJobSkill,
)

__all__ = [
    "JobPosting",
    "Company",
    "Skill",
    "JobSkillLink",
    "ReportRow",
    "TopPayingJob",
    "TopPayingJobSkill",
    "SkillDemand",
    "SkillSalary",
    "OptimalSkill",
    "coerce_remote_flag",
    "AnalyticsError",
    "SchemaViolationError",
    "TypeCoercionError",
    "EmptyGroupError",
]
