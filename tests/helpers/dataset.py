"""Fixture datasets for deterministic report tests.

Datasets are YAML files with one list of records per source table
(company_dim, skills_dim, job_postings_fact, skills_job_dim).
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from job_analytics.domain.models import Company, JobPosting, JobSkillLink, Skill
from job_analytics.store.relation_store import RelationStore

SAMPLE_DATASET = Path(__file__).parent.parent / "fixtures" / "sample_dataset.yaml"


def load_dataset(fixture_path: Path = SAMPLE_DATASET) -> Dict[str, List[Any]]:
    """Load a YAML dataset into domain objects keyed by table name.

    Raises:
        FileNotFoundError: If the fixture file doesn't exist
    """
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_path}")

    with open(fixture_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return {
        "company_dim": [Company.model_validate(r) for r in data.get("company_dim", [])],
        "skills_dim": [Skill.model_validate(r) for r in data.get("skills_dim", [])],
        "job_postings_fact": [
            JobPosting.from_record(r) for r in data.get("job_postings_fact", [])
        ],
        "skills_job_dim": [
            JobSkillLink.model_validate(r) for r in data.get("skills_job_dim", [])
        ],
    }


def build_store(dataset: Dict[str, List[Any]]) -> RelationStore:
    return RelationStore(
        job_postings=dataset.get("job_postings_fact", []),
        companies=dataset.get("company_dim", []),
        skills=dataset.get("skills_dim", []),
        job_skills=dataset.get("skills_job_dim", []),
    )


def make_posting(job_id: int, **overrides) -> JobPosting:
    """Build a remote-capable, fully remote Data Analyst posting."""
    fields = {
        "job_id": job_id,
        "company_id": None,
        "job_title_short": "Data Analyst",
        "job_title": f"Data Analyst {job_id}",
        "job_location": "Anywhere",
        "job_schedule_type": "Full-time",
        "job_work_from_home": True,
        "salary_year_avg": 100000,
    }
    fields.update(overrides)
    return JobPosting.from_record(fields)
