"""Read-only, indexed snapshot of the four source relations."""

import logging
from collections import defaultdict
from typing import Dict, Iterable, Optional, Tuple, TypeVar

from job_analytics.domain.exceptions import SchemaViolationError
from job_analytics.domain.models import Company, JobPosting, JobSkillLink, Skill

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RelationStore:
    """Immutable snapshot of postings, companies, skills, and job-skill links.

    The store is loaded once per reporting run and read many times. It keeps
    each relation as a tuple in source order and builds hash indexes on the
    primary keys so that joins are dictionary lookups.

    Raises:
        SchemaViolationError: If a primary key appears more than once
    """

    def __init__(
        self,
        job_postings: Iterable[JobPosting] = (),
        companies: Iterable[Company] = (),
        skills: Iterable[Skill] = (),
        job_skills: Iterable[JobSkillLink] = (),
    ):
        self._job_postings: Tuple[JobPosting, ...] = tuple(job_postings)
        self._companies: Tuple[Company, ...] = tuple(companies)
        self._skills: Tuple[Skill, ...] = tuple(skills)
        self._job_skills: Tuple[JobSkillLink, ...] = tuple(job_skills)

        self._postings_by_id = _unique_index(
            self._job_postings, lambda p: p.job_id, "job_postings_fact"
        )
        self._companies_by_id = _unique_index(
            self._companies, lambda c: c.company_id, "company_dim"
        )
        self._skills_by_id = _unique_index(self._skills, lambda s: s.skill_id, "skills_dim")

        links_by_job: Dict[int, list] = defaultdict(list)
        for link in self._job_skills:
            links_by_job[link.job_id].append(link)
        self._links_by_job: Dict[int, Tuple[JobSkillLink, ...]] = {
            job_id: tuple(links) for job_id, links in links_by_job.items()
        }
        self._references_checked = False

        logger.debug("Relation store built", extra={"event": "store.built", **self.summary()})

    @property
    def job_postings(self) -> Tuple[JobPosting, ...]:
        """All postings, in source order."""
        return self._job_postings

    @property
    def companies(self) -> Tuple[Company, ...]:
        """All companies, in source order."""
        return self._companies

    @property
    def skills(self) -> Tuple[Skill, ...]:
        """All skills, in source order."""
        return self._skills

    @property
    def job_skills(self) -> Tuple[JobSkillLink, ...]:
        """All job-skill links, in source order."""
        return self._job_skills

    def get_posting(self, job_id: int) -> Optional[JobPosting]:
        """
        Look up a posting by job_id.

        Returns:
            JobPosting if found, None otherwise
        """
        return self._postings_by_id.get(job_id)

    def get_company(self, company_id: Optional[int]) -> Optional[Company]:
        """
        Look up a company by company_id.

        Args:
            company_id: Company key; None (posting without company) is allowed

        Returns:
            Company if found, None otherwise
        """
        if company_id is None:
            return None
        return self._companies_by_id.get(company_id)

    def get_skill(self, skill_id: int) -> Optional[Skill]:
        """
        Look up a skill by skill_id.

        Returns:
            Skill if found, None otherwise
        """
        return self._skills_by_id.get(skill_id)

    def skills_for_job(self, job_id: int) -> Tuple[JobSkillLink, ...]:
        """Return the job-skill links of a posting in source order."""
        return self._links_by_job.get(job_id, ())

    def validate_references(self) -> None:
        """Check that every job-skill link names an existing posting and skill.

        Inner-join reports call this before aggregating; a dangling link
        would otherwise silently change demand counts. The check runs once
        per store.

        Raises:
            SchemaViolationError: On the first dangling reference
        """
        if self._references_checked:
            return

        for link in self._job_skills:
            if link.job_id not in self._postings_by_id:
                raise SchemaViolationError(
                    f"skills_job_dim references unknown job_id {link.job_id}",
                    relation="skills_job_dim",
                    key=link.job_id,
                )
            if link.skill_id not in self._skills_by_id:
                raise SchemaViolationError(
                    f"skills_job_dim references unknown skill_id {link.skill_id}",
                    relation="skills_job_dim",
                    key=link.skill_id,
                )

        self._references_checked = True

    def summary(self) -> Dict[str, int]:
        """Row counts per relation, for logging."""
        return {
            "job_postings": len(self._job_postings),
            "companies": len(self._companies),
            "skills": len(self._skills),
            "job_skills": len(self._job_skills),
        }

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={count}" for name, count in self.summary().items())
        return f"<RelationStore {counts}>"


def _unique_index(rows: Tuple[T, ...], key, relation: str) -> Dict[int, T]:
    index: Dict[int, T] = {}
    for row in rows:
        row_key = key(row)
        if row_key in index:
            raise SchemaViolationError(
                f"Duplicate primary key {row_key} in {relation}",
                relation=relation,
                key=row_key,
            )
        index[row_key] = row
    return index
