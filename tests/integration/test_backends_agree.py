"""Integration tests: the in-memory and SQL backends produce identical reports.

A seeded pseudo-random dataset exercises ties, null salaries, missing
companies, both remote flags, and several role titles.
"""

import random
from datetime import datetime, timedelta

import pytest

from job_analytics.analysis.queries import REPORTS
from job_analytics.config import ReportConfig
from job_analytics.domain import Company, JobPosting, JobSkillLink, Skill
from job_analytics.persistence import (
    SqlQueryBackend,
    get_session,
    insert_entities,
    load_relation_store,
)
from job_analytics.reporting import ReportRunner

TITLES = ["Data Analyst", "Data Analyst", "Data Analyst", "Data Scientist", "Data Engineer"]
LOCATIONS = ["Anywhere", "Anywhere", "New York, NY", "Austin, TX"]
SALARIES = [None, 60000, 75000, 90000, 90000, 100000, 115000, 150000]


def generate_dataset(seed: int = 7, postings: int = 600, skills: int = 30):
    rng = random.Random(seed)
    companies = [Company(company_id=i, name=f"Company {i}") for i in range(1, 21)]
    skill_rows = [Skill(skill_id=i, skills=f"skill_{i}") for i in range(1, skills + 1)]

    posting_rows, links = [], []
    start = datetime(2023, 1, 1)
    for job_id in range(1, postings + 1):
        posting_rows.append(
            JobPosting(
                job_id=job_id,
                # Company ids above 20 have no company_dim row
                company_id=rng.choice([None, rng.randint(1, 25)]),
                job_title_short=rng.choice(TITLES),
                job_title=f"Role {job_id}",
                job_location=rng.choice(LOCATIONS),
                job_schedule_type="Full-time",
                job_work_from_home=rng.random() < 0.5,
                job_posted_date=start + timedelta(hours=job_id),
                salary_year_avg=rng.choice(SALARIES),
            )
        )
        for skill_id in rng.sample(range(1, skills + 1), rng.randint(0, 5)):
            links.append(JobSkillLink(job_id=job_id, skill_id=skill_id))

    return {
        "company_dim": companies,
        "skills_dim": skill_rows,
        "job_postings_fact": posting_rows,
        "skills_job_dim": links,
    }


@pytest.fixture
def generated_database(memory_database):
    with get_session() as session:
        insert_entities(session, generate_dataset())
    yield


@pytest.mark.parametrize("role_title", ["Data Analyst", "Data Scientist", "Nonexistent Role"])
@pytest.mark.parametrize("min_demand_count", [0, 10, 25])
def test_backends_agree(generated_database, role_title, min_demand_count):
    """Test every report is identical across backends."""
    config = ReportConfig(role_title=role_title, min_demand_count=min_demand_count)

    with get_session() as session:
        store = load_relation_store(session)
        memory = ReportRunner(store, config).run()
        sql = ReportRunner(SqlQueryBackend(session), config).run()

    assert not memory.had_errors and not sql.had_errors
    for name in REPORTS:
        assert [r.as_row() for r in sql.results[name]] == [
            r.as_row() for r in memory.results[name]
        ], name


def test_role_filtered_snapshot_agrees(generated_database):
    """Test loading only one role's postings does not change its reports."""
    config = ReportConfig(role_title="Data Scientist", min_demand_count=0)

    with get_session() as session:
        full = ReportRunner(load_relation_store(session), config).run()
        partial = ReportRunner(
            load_relation_store(session, title_short="Data Scientist"), config
        ).run()

    for name in REPORTS:
        assert partial.results[name] == full.results[name], name


def test_generated_dataset_exercises_thresholds(generated_database):
    """Test the generated data is rich enough for the comparisons to mean something."""
    with get_session() as session:
        store = load_relation_store(session)

    memory = ReportRunner(store, ReportConfig(min_demand_count=10)).run()

    assert len(memory.results["top_paying_jobs"]) == 10
    assert len(memory.results["top_demanded_skills"]) == 5
    assert memory.results["optimal_skills"]
