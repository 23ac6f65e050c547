"""The five job market reports, computed over a RelationStore.

Each report is a pure function of the store and its keyword parameters.
Defaults reproduce the canonical data analyst reports:

1. top_paying_jobs: best paid fully remote data analyst postings
2. top_paying_job_skills: the skills those postings ask for
3. top_demanded_skills: skills most often requested by remote-capable postings
4. top_paying_skills: skills with the highest average salary
5. optimal_skills: skills that are both in demand and well paid

Ties on the sort keys are broken by ascending job_id / skill_id so repeated
runs produce identical output.
"""

from typing import Callable, Dict, Iterable, List, Optional, Set

from job_analytics.domain.models import (
    JobPosting,
    OptimalSkill,
    ReportRow,
    SkillDemand,
    SkillSalary,
    TopPayingJob,
    TopPayingJobSkill,
)
from job_analytics.store.relation_store import RelationStore

from .aggregation import SkillPair, average_salary_per_skill, count_jobs_per_skill
from .predicates import (
    DATA_ANALYST_TITLE,
    FULLY_REMOTE_LOCATION,
    PostingPredicate,
    all_of,
    has_known_salary,
    is_data_analyst_role,
    is_fully_remote_location,
    is_remote_capable,
)

TOP_JOBS_LIMIT = 10
TOP_DEMANDED_LIMIT = 5
TOP_PAYING_SKILLS_LIMIT = 25
OPTIMAL_SKILLS_LIMIT = 25
MIN_DEMAND_COUNT = 10


def _role(title: str) -> PostingPredicate:
    return lambda posting: is_data_analyst_role(posting, title)


def _location(location: str) -> PostingPredicate:
    return lambda posting: is_fully_remote_location(posting, location)


def filter_postings(store: RelationStore, predicate: PostingPredicate) -> List[JobPosting]:
    """Return the postings matching predicate, in source order."""
    return [posting for posting in store.job_postings if predicate(posting)]


def join_postings_to_skills(
    store: RelationStore, postings: Iterable[JobPosting]
) -> List[SkillPair]:
    """Inner-join postings to their skills through the link index.

    Postings without any skill link drop out, as in an inner join.

    Raises:
        SchemaViolationError: If any link names an unknown posting or skill
    """
    store.validate_references()

    pairs: List[SkillPair] = []
    for posting in postings:
        for link in store.skills_for_job(posting.job_id):
            pairs.append(SkillPair(posting=posting, skill=store.get_skill(link.skill_id)))
    return pairs


def top_paying_jobs(
    store: RelationStore,
    role_title: str = DATA_ANALYST_TITLE,
    location: str = FULLY_REMOTE_LOCATION,
    limit: Optional[int] = TOP_JOBS_LIMIT,
) -> List[TopPayingJob]:
    """Highest paid postings for a role at a fully remote location.

    Postings without a salary are excluded. Postings whose company is
    missing are kept with company_name set to None.
    """
    postings = filter_postings(
        store, all_of(_role(role_title), _location(location), has_known_salary)
    )
    postings.sort(key=lambda p: (-p.salary_year_avg, p.job_id))
    if limit is not None:
        postings = postings[:limit]

    rows = []
    for posting in postings:
        company = store.get_company(posting.company_id)
        rows.append(
            TopPayingJob(
                job_id=posting.job_id,
                job_title=posting.job_title,
                job_location=posting.job_location,
                job_schedule_type=posting.job_schedule_type,
                salary_year_avg=posting.salary_year_avg,
                job_posted_date=posting.job_posted_date,
                company_name=company.name if company else None,
            )
        )
    return rows


def top_paying_job_skills(
    store: RelationStore,
    role_title: str = DATA_ANALYST_TITLE,
    location: str = FULLY_REMOTE_LOCATION,
    limit: Optional[int] = TOP_JOBS_LIMIT,
) -> List[TopPayingJobSkill]:
    """Skills required by the postings returned from top_paying_jobs.

    One row per (job, skill) link. Jobs without skills do not appear.
    """
    top_jobs = top_paying_jobs(store, role_title=role_title, location=location, limit=limit)

    store.validate_references()

    rows = []
    for job in top_jobs:
        for link in store.skills_for_job(job.job_id):
            skill = store.get_skill(link.skill_id)
            rows.append(
                TopPayingJobSkill(
                    **job.model_dump(),
                    skills=skill.skills,
                    skill_id=skill.skill_id,
                )
            )

    rows.sort(key=lambda r: (-r.salary_year_avg, r.job_id, r.skill_id))
    return rows


def _remote_skill_pairs(
    store: RelationStore, role_title: str, require_salary: bool
) -> List[SkillPair]:
    predicates = [_role(role_title), is_remote_capable]
    if require_salary:
        predicates.append(has_known_salary)
    return join_postings_to_skills(store, filter_postings(store, all_of(*predicates)))


def top_demanded_skills(
    store: RelationStore,
    role_title: str = DATA_ANALYST_TITLE,
    limit: Optional[int] = TOP_DEMANDED_LIMIT,
) -> List[SkillDemand]:
    """Skills most often listed by remote-capable postings for a role."""
    pairs = _remote_skill_pairs(store, role_title, require_salary=False)
    counts = count_jobs_per_skill(pairs)

    rows = [
        SkillDemand(
            skill_id=skill_id,
            skills=store.get_skill(skill_id).skills,
            demand_count=count,
        )
        for skill_id, count in counts.items()
    ]
    rows.sort(key=lambda r: (-r.demand_count, r.skill_id))
    return rows[:limit] if limit is not None else rows


def top_paying_skills(
    store: RelationStore,
    role_title: str = DATA_ANALYST_TITLE,
    limit: Optional[int] = TOP_PAYING_SKILLS_LIMIT,
) -> List[SkillSalary]:
    """Skills ranked by the average salary of remote-capable postings."""
    pairs = _remote_skill_pairs(store, role_title, require_salary=True)
    averages = average_salary_per_skill(pairs)

    rows = [
        SkillSalary(
            skill_id=skill_id,
            skills=store.get_skill(skill_id).skills,
            avg_salary=average,
        )
        for skill_id, average in averages.items()
    ]
    rows.sort(key=lambda r: (-r.avg_salary, r.skill_id))
    return rows[:limit] if limit is not None else rows


def optimal_skills(
    store: RelationStore,
    role_title: str = DATA_ANALYST_TITLE,
    min_demand_count: int = MIN_DEMAND_COUNT,
    limit: Optional[int] = OPTIMAL_SKILLS_LIMIT,
) -> List[OptimalSkill]:
    """Skills with demand strictly above min_demand_count, with their salary.

    Demand and average salary are computed separately over the same
    salaried, remote-capable postings and merged on skill_id.
    """
    pairs = _remote_skill_pairs(store, role_title, require_salary=True)
    demand = count_jobs_per_skill(pairs)
    salary = average_salary_per_skill(pairs)

    rows = [
        OptimalSkill(
            skill_id=skill_id,
            skills=store.get_skill(skill_id).skills,
            demand_count=count,
            avg_salary=salary[skill_id],
        )
        for skill_id, count in demand.items()
        if skill_id in salary and count > min_demand_count
    ]
    rows.sort(key=lambda r: (-r.demand_count, -r.avg_salary, r.skill_id))
    return rows[:limit] if limit is not None else rows


ReportFunction = Callable[..., List[ReportRow]]

REPORTS: Dict[str, ReportFunction] = {
    "top_paying_jobs": top_paying_jobs,
    "top_paying_job_skills": top_paying_job_skills,
    "top_demanded_skills": top_demanded_skills,
    "top_paying_skills": top_paying_skills,
    "optimal_skills": optimal_skills,
}

REPORT_NAMES: Set[str] = set(REPORTS)
