"""Core domain models for the job postings dataset and report rows.

This module defines the data structures used throughout the application:
- JobPosting, Company, Skill, JobSkillLink: the four read-only source relations
- TopPayingJob, TopPayingJobSkill: row-level report rows (queries 1 and 2)
- SkillDemand, SkillSalary, OptimalSkill: per-skill aggregate rows (queries 3-5)

Every model is frozen. Report rows expose FIELDS, the stable column order
consumed by exporters and charting tools.
"""

from datetime import datetime
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from .coercion import coerce_remote_flag


class JobPosting(BaseModel):
    """A single job posting (row of job_postings_fact)."""

    job_id: int = Field(..., description="Unique posting identifier")
    company_id: Optional[int] = Field(None, description="Owning company, if known")
    job_title_short: str = Field(..., description="Normalised role title, e.g. 'Data Analyst'")
    job_title: Optional[str] = Field(None, description="Title as advertised")
    job_location: Optional[str] = Field(None, description="Location text, 'Anywhere' for fully remote")
    job_via: Optional[str] = Field(None, description="Board the posting was found on")
    job_schedule_type: Optional[str] = Field(None, description="Full-time, Contractor, ...")
    job_work_from_home: bool = Field(False, description="Posting allows work from home")
    search_location: Optional[str] = None
    job_posted_date: Optional[datetime] = Field(None, description="When the job was posted")
    job_no_degree_mention: Optional[bool] = None
    job_health_insurance: Optional[bool] = None
    job_country: Optional[str] = None
    salary_rate: Optional[str] = Field(None, description="year, hour, ...")
    salary_year_avg: Optional[float] = Field(None, ge=0, description="Average yearly salary")
    salary_hour_avg: Optional[float] = Field(None, ge=0, description="Average hourly salary")

    model_config = {"frozen": True}

    @field_validator("job_work_from_home", mode="before")
    @classmethod
    def normalise_remote_flag(cls, v: Any) -> bool:
        """Coerce 0/1 and textual flags to a definite boolean."""
        return coerce_remote_flag(v)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "JobPosting":
        """Build a posting from a raw source record.

        Unlike direct construction, a malformed work-from-home flag raises
        TypeCoercionError instead of a pydantic ValidationError.

        Args:
            record: Mapping of column name to raw value

        Returns:
            JobPosting instance

        Raises:
            TypeCoercionError: If job_work_from_home is not a recognised boolean
            pydantic.ValidationError: For any other invalid field
        """
        data = dict(record)
        if "job_work_from_home" in data:
            data["job_work_from_home"] = coerce_remote_flag(data["job_work_from_home"])
        return cls.model_validate(data)


class Company(BaseModel):
    """A hiring company (row of company_dim)."""

    company_id: int
    name: str
    link: Optional[str] = None
    link_google: Optional[str] = None
    thumbnail: Optional[str] = None

    model_config = {"frozen": True}


class Skill(BaseModel):
    """A skill keyword (row of skills_dim)."""

    skill_id: int
    skills: str = Field(..., description="Skill name, e.g. 'sql'")
    type: Optional[str] = Field(None, description="Skill category, e.g. 'programming'")

    model_config = {"frozen": True}


class JobSkillLink(BaseModel):
    """Association between a posting and a skill (row of skills_job_dim)."""

    job_id: int
    skill_id: int

    model_config = {"frozen": True}


class ReportRow(BaseModel):
    """Base class for report rows with a stable, documented column order."""

    FIELDS: ClassVar[Tuple[str, ...]] = ()

    model_config = {"frozen": True}

    def as_row(self) -> Tuple[Any, ...]:
        """Return the row values in FIELDS order."""
        return tuple(getattr(self, name) for name in self.FIELDS)

    def as_dict(self) -> Dict[str, Any]:
        """Return an insertion-ordered dict keyed by FIELDS."""
        return {name: getattr(self, name) for name in self.FIELDS}


class TopPayingJob(ReportRow):
    """Row of the top-paying roles report."""

    FIELDS: ClassVar[Tuple[str, ...]] = (
        "job_id",
        "job_title",
        "job_location",
        "job_schedule_type",
        "salary_year_avg",
        "job_posted_date",
        "company_name",
    )

    job_id: int
    job_title: Optional[str] = None
    job_location: Optional[str] = None
    job_schedule_type: Optional[str] = None
    salary_year_avg: float
    job_posted_date: Optional[datetime] = None
    company_name: Optional[str] = None


class TopPayingJobSkill(TopPayingJob):
    """One (top-paying job, skill) pair."""

    FIELDS: ClassVar[Tuple[str, ...]] = TopPayingJob.FIELDS + ("skills", "skill_id")

    skills: str
    skill_id: int


class SkillDemand(ReportRow):
    """Number of postings that list a skill."""

    FIELDS: ClassVar[Tuple[str, ...]] = ("skill_id", "skills", "demand_count")

    skill_id: int
    skills: str
    demand_count: int


class SkillSalary(ReportRow):
    """Rounded average yearly salary of postings that list a skill."""

    FIELDS: ClassVar[Tuple[str, ...]] = ("skill_id", "skills", "avg_salary")

    skill_id: int
    skills: str
    avg_salary: int


class OptimalSkill(ReportRow):
    """Skill with both its demand and its average salary."""

    FIELDS: ClassVar[Tuple[str, ...]] = ("skill_id", "skills", "demand_count", "avg_salary")

    skill_id: int
    skills: str
    demand_count: int
    avg_salary: int
