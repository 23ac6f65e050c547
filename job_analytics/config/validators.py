"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

LARGE_LIMIT = 1000


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration dict for settings that are legal but suspicious.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    messages = []

    reports = config_dict.get("reports", {})
    if not isinstance(reports, dict):
        return messages

    for key in (
        "top_jobs_limit",
        "top_demanded_limit",
        "top_paying_skills_limit",
        "optimal_skills_limit",
    ):
        value = reports.get(key)
        if isinstance(value, int) and value > LARGE_LIMIT:
            messages.append(f"Large {key} ({value}) produces very long reports")

    min_demand = reports.get("min_demand_count")
    if isinstance(min_demand, int) and min_demand == 0:
        messages.append(
            "min_demand_count is 0; optimal_skills will include every skill seen at least once"
        )

    role_title = reports.get("role_title")
    if isinstance(role_title, str) and role_title != role_title.strip():
        messages.append("role_title has surrounding whitespace, which will be stripped")

    enabled = reports.get("enabled")
    if (
        isinstance(enabled, list)
        and "top_paying_job_skills" in enabled
        and "top_paying_jobs" not in enabled
    ):
        messages.append(
            "top_paying_job_skills is enabled without top_paying_jobs; "
            "the job list it is based on will not be exported"
        )

    return messages


def emit_warnings(messages: List[str]) -> None:
    """Emit each message through the warnings module."""
    for message in messages:
        warnings.warn(message, UserWarning, stacklevel=2)
