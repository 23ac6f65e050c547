"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from job_analytics.analysis.queries import (
    MIN_DEMAND_COUNT,
    OPTIMAL_SKILLS_LIMIT,
    REPORT_NAMES,
    TOP_DEMANDED_LIMIT,
    TOP_JOBS_LIMIT,
    TOP_PAYING_SKILLS_LIMIT,
)
from job_analytics.analysis.predicates import DATA_ANALYST_TITLE, FULLY_REMOTE_LOCATION


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class OutputFormat(str, Enum):
    """Report export formats."""

    JSON = "json"
    CSV = "csv"


class DatabaseConfig(BaseModel):
    """Where the source relations live."""

    url: str = Field(
        "sqlite:///./data/job_postings.db",
        min_length=1,
        description="SQLAlchemy database URL",
    )

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("url cannot be empty")
        return stripped


class ReportConfig(BaseModel):
    """Parameters of the five reports.

    The defaults reproduce the data analyst reports exactly; change
    role_title to analyse another role.
    """

    role_title: str = Field(DATA_ANALYST_TITLE, min_length=1)
    remote_location: str = Field(FULLY_REMOTE_LOCATION, min_length=1)
    top_jobs_limit: int = Field(TOP_JOBS_LIMIT, ge=1)
    top_demanded_limit: int = Field(TOP_DEMANDED_LIMIT, ge=1)
    top_paying_skills_limit: int = Field(TOP_PAYING_SKILLS_LIMIT, ge=1)
    optimal_skills_limit: int = Field(OPTIMAL_SKILLS_LIMIT, ge=1)
    min_demand_count: int = Field(
        MIN_DEMAND_COUNT, ge=0, description="Skills need strictly more postings than this"
    )
    enabled: List[str] = Field(
        default_factory=lambda: [
            "top_paying_jobs",
            "top_paying_job_skills",
            "top_demanded_skills",
            "top_paying_skills",
            "optimal_skills",
        ],
        description="Reports to run, in order",
    )

    @field_validator("role_title", "remote_location")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("enabled")
    @classmethod
    def validate_report_names(cls, v: List[str]) -> List[str]:
        unknown = [name for name in v if name not in REPORT_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown report(s): {', '.join(unknown)}. "
                f"Valid reports: {', '.join(sorted(REPORT_NAMES))}"
            )
        if len(set(v)) != len(v):
            raise ValueError("Each report may only be listed once")
        if not v:
            raise ValueError("At least one report must be enabled")
        return v

    def parameters_for(self, report: str) -> dict:
        """Keyword arguments for the given report function."""
        if report == "top_paying_jobs" or report == "top_paying_job_skills":
            return {
                "role_title": self.role_title,
                "location": self.remote_location,
                "limit": self.top_jobs_limit,
            }
        if report == "top_demanded_skills":
            return {"role_title": self.role_title, "limit": self.top_demanded_limit}
        if report == "top_paying_skills":
            return {"role_title": self.role_title, "limit": self.top_paying_skills_limit}
        if report == "optimal_skills":
            return {
                "role_title": self.role_title,
                "min_demand_count": self.min_demand_count,
                "limit": self.optimal_skills_limit,
            }
        raise KeyError(report)


class OutputConfig(BaseModel):
    """Where and how report results are exported."""

    directory: str = Field("results", min_length=1)
    format: OutputFormat = Field(OutputFormat.JSON)

    model_config = {"use_enum_values": True, "validate_default": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    reports: ReportConfig = Field(default_factory=ReportConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

