"""Tests for the reports evaluated inside the database."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from job_analytics.domain import JobSkillLink, Skill
from job_analytics.persistence import (
    PersistenceError,
    SqlQueryBackend,
    get_session,
    insert_entities,
)
from tests.helpers import make_posting


@pytest.fixture
def sql_backend(seeded_database):
    """SqlQueryBackend over the seeded sample dataset."""
    with get_session() as session:
        yield SqlQueryBackend(session)


def seed(postings, skills=(), links=()):
    with get_session() as session:
        insert_entities(
            session,
            {
                "job_postings_fact": list(postings),
                "skills_dim": list(skills),
                "skills_job_dim": list(links),
            },
        )


class TestSqlReports:
    """Test each report against hand-computed results."""

    def test_top_paying_jobs(self, sql_backend):
        rows = sql_backend.top_paying_jobs()

        assert [r.job_id for r in rows] == [101, 104, 102, 107]
        assert rows[0].company_name == "Acme Analytics"
        assert rows[1].company_name is None

    def test_top_paying_job_skills(self, sql_backend):
        rows = sql_backend.top_paying_job_skills()

        assert [(r.job_id, r.skill_id) for r in rows] == [
            (101, 1),
            (101, 2),
            (101, 4),
            (104, 1),
            (104, 5),
            (102, 1),
            (102, 3),
            (107, 3),
        ]

    def test_top_demanded_skills(self, sql_backend):
        rows = sql_backend.top_demanded_skills()

        assert [(r.skills, r.demand_count) for r in rows] == [
            ("sql", 5),
            ("python", 2),
            ("excel", 2),
            ("tableau", 2),
        ]

    def test_top_paying_skills(self, sql_backend):
        rows = sql_backend.top_paying_skills()

        assert [(r.skills, r.avg_salary) for r in rows] == [
            ("python", 175000),
            ("sql", 135000),
            ("tableau", 120000),
            ("excel", 100000),
        ]
        assert all(isinstance(r.avg_salary, int) for r in rows)

    def test_optimal_skills_default_threshold(self, sql_backend):
        assert sql_backend.optimal_skills() == []

    def test_optimal_skills_low_threshold(self, sql_backend):
        rows = sql_backend.optimal_skills(min_demand_count=1)

        assert [(r.skills, r.demand_count, r.avg_salary) for r in rows] == [
            ("sql", 4, 135000),
            ("python", 2, 175000),
            ("tableau", 2, 120000),
        ]

    def test_limit_none_returns_all(self, sql_backend):
        assert len(sql_backend.top_demanded_skills(limit=None)) == 4


class TestSqlEdgeCases:
    """Edge cases on purpose-built data."""

    def test_sql_included_excel_excluded(self, memory_database):
        postings, links = [], []
        salaries = {1: [90000, 100000] * 6, 2: [70000] * 8}
        job_id = 0
        for skill_id, values in salaries.items():
            for salary in values:
                job_id += 1
                postings.append(make_posting(job_id, salary_year_avg=salary))
                links.append(JobSkillLink(job_id=job_id, skill_id=skill_id))
        seed(
            postings,
            [Skill(skill_id=1, skills="sql"), Skill(skill_id=2, skills="excel")],
            links,
        )

        with get_session() as session:
            rows = SqlQueryBackend(session).optimal_skills()

        assert [(r.skills, r.demand_count, r.avg_salary) for r in rows] == [("sql", 12, 95000)]

    def test_average_rounds_half_up(self, memory_database):
        seed(
            [make_posting(1, salary_year_avg=100000), make_posting(2, salary_year_avg=100001)],
            [Skill(skill_id=1, skills="sql")],
            [JobSkillLink(job_id=1, skill_id=1), JobSkillLink(job_id=2, skill_id=1)],
        )

        with get_session() as session:
            rows = SqlQueryBackend(session).top_paying_skills()

        assert rows[0].avg_salary == 100001

    def test_empty_database(self, memory_database):
        with get_session() as session:
            backend = SqlQueryBackend(session)

            assert backend.top_paying_jobs() == []
            assert backend.top_paying_job_skills() == []
            assert backend.top_demanded_skills() == []
            assert backend.top_paying_skills() == []
            assert backend.optimal_skills() == []

    def test_query_failure_wrapped(self, memory_database):
        with get_session() as session:
            backend = SqlQueryBackend(session)
            session.execute = _raise_sqlalchemy_error

            with pytest.raises(PersistenceError, match="top_paying_jobs"):
                backend.top_paying_jobs()


def _raise_sqlalchemy_error(*args, **kwargs):
    raise SQLAlchemyError("connection lost")
