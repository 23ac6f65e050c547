"""Environment variable overrides."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_OUTPUT_FORMATS = ("json", "csv")


class EnvironmentConfig:
    """Settings taken from the process environment (after .env loading)."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
        output_dir: Optional[str] = None,
        output_format: Optional[str] = None,
    ):
        self.database_url = database_url
        self.log_level = log_level
        self.environment = environment or "local"
        self.output_dir = output_dir
        self.output_format = output_format


def load_environment_config() -> EnvironmentConfig:
    """
    Read and validate optional environment overrides.

    Optional environment variables:
    - DATABASE_URL: SQLAlchemy URL of the job postings database
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - ENVIRONMENT: Label attached to every log record (default: local)
    - OUTPUT_DIR: Directory that receives exported reports
    - OUTPUT_FORMAT: json or csv

    Returns:
        EnvironmentConfig with the values that were set

    Raises:
        ConfigurationError: If a variable has an invalid value
    """
    errors = []

    database_url = os.getenv("DATABASE_URL") or None
    log_level = os.getenv("LOG_LEVEL") or None
    environment = os.getenv("ENVIRONMENT") or None
    output_dir = os.getenv("OUTPUT_DIR") or None
    output_format = os.getenv("OUTPUT_FORMAT") or None

    if log_level:
        log_level = log_level.upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if output_format:
        output_format = output_format.lower()
        if output_format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"Invalid OUTPUT_FORMAT: '{output_format}'. Must be one of: "
                f"{', '.join(VALID_OUTPUT_FORMATS)}"
            )

    if database_url and "://" not in database_url:
        errors.append(
            f"Invalid DATABASE_URL: '{database_url}'. Expected a URL such as "
            "sqlite:///./data/job_postings.db"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        database_url=database_url,
        log_level=log_level,
        environment=environment,
        output_dir=output_dir,
        output_format=output_format,
    )
