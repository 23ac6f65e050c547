"""The five reports evaluated inside the database.

SqlQueryBackend mirrors job_analytics.analysis.queries with SQLAlchemy
select() statements: same filters, same joins, same tie-breaks, same row
types. It avoids materialising the whole dataset when only the report rows
are needed.
"""

from typing import List, Optional

from sqlalchemy import Numeric, cast, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from job_analytics.analysis.aggregation import round_half_up
from job_analytics.analysis.predicates import DATA_ANALYST_TITLE, FULLY_REMOTE_LOCATION
from job_analytics.analysis.queries import (
    MIN_DEMAND_COUNT,
    OPTIMAL_SKILLS_LIMIT,
    TOP_DEMANDED_LIMIT,
    TOP_JOBS_LIMIT,
    TOP_PAYING_SKILLS_LIMIT,
)
from job_analytics.domain.models import (
    OptimalSkill,
    SkillDemand,
    SkillSalary,
    TopPayingJob,
    TopPayingJobSkill,
)
from job_analytics.logging import get_logger

from .exceptions import PersistenceError
from .schema import CompanyModel as C
from .schema import JobPostingModel as J
from .schema import SkillJobModel as SJ
from .schema import SkillModel as S

logger = get_logger(__name__, component="sql_backend")


class SqlQueryBackend:
    """Report functions bound to a database session.

    Method names match the keys of job_analytics.analysis.queries.REPORTS,
    so ReportRunner can drive either implementation.
    """

    def __init__(self, session: Session):
        self.session = session

    def _top_jobs_select(self, role_title: str, location: str, limit: Optional[int]):
        return (
            select(
                J.job_id,
                J.job_title,
                J.job_location,
                J.job_schedule_type,
                J.salary_year_avg,
                J.job_posted_date,
                C.name.label("company_name"),
            )
            .select_from(J)
            .outerjoin(C, J.company_id == C.company_id)
            .where(
                J.job_title_short == role_title,
                J.job_location == location,
                J.salary_year_avg.is_not(None),
            )
            .order_by(J.salary_year_avg.desc(), J.job_id.asc())
            .limit(limit)
        )

    def _remote_skills_filter(self, role_title: str, require_salary: bool):
        conditions = [J.job_title_short == role_title, J.job_work_from_home.is_(True)]
        if require_salary:
            conditions.append(J.salary_year_avg.is_not(None))
        return conditions

    @staticmethod
    def _avg_salary_column():
        return func.round(cast(func.avg(J.salary_year_avg), Numeric(asdecimal=False)), 0)

    def _execute(self, stmt, report: str):
        try:
            return self.session.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            logger.error(
                f"Error executing {report}: {e}",
                extra={"event": "report.sql.failed", "report": report},
                exc_info=True,
            )
            raise PersistenceError(f"Failed to execute {report}: {e}") from e

    def top_paying_jobs(
        self,
        role_title: str = DATA_ANALYST_TITLE,
        location: str = FULLY_REMOTE_LOCATION,
        limit: Optional[int] = TOP_JOBS_LIMIT,
    ) -> List[TopPayingJob]:
        stmt = self._top_jobs_select(role_title, location, limit)
        return [TopPayingJob(**row) for row in self._execute(stmt, "top_paying_jobs")]

    def top_paying_job_skills(
        self,
        role_title: str = DATA_ANALYST_TITLE,
        location: str = FULLY_REMOTE_LOCATION,
        limit: Optional[int] = TOP_JOBS_LIMIT,
    ) -> List[TopPayingJobSkill]:
        top_jobs = self._top_jobs_select(role_title, location, limit).cte("top_paying_jobs")
        stmt = (
            select(
                top_jobs.c.job_id,
                top_jobs.c.job_title,
                top_jobs.c.job_location,
                top_jobs.c.job_schedule_type,
                top_jobs.c.salary_year_avg,
                top_jobs.c.job_posted_date,
                top_jobs.c.company_name,
                S.skills,
                S.skill_id,
            )
            .select_from(top_jobs)
            .join(SJ, SJ.job_id == top_jobs.c.job_id)
            .join(S, S.skill_id == SJ.skill_id)
            .order_by(top_jobs.c.salary_year_avg.desc(), top_jobs.c.job_id, S.skill_id)
        )
        return [TopPayingJobSkill(**row) for row in self._execute(stmt, "top_paying_job_skills")]

    def top_demanded_skills(
        self,
        role_title: str = DATA_ANALYST_TITLE,
        limit: Optional[int] = TOP_DEMANDED_LIMIT,
    ) -> List[SkillDemand]:
        demand_count = func.count(SJ.job_id).label("demand_count")
        stmt = (
            select(S.skill_id, S.skills, demand_count)
            .select_from(J)
            .join(SJ, SJ.job_id == J.job_id)
            .join(S, S.skill_id == SJ.skill_id)
            .where(*self._remote_skills_filter(role_title, require_salary=False))
            .group_by(S.skill_id, S.skills)
            .order_by(demand_count.desc(), S.skill_id)
            .limit(limit)
        )
        return [SkillDemand(**row) for row in self._execute(stmt, "top_demanded_skills")]

    def top_paying_skills(
        self,
        role_title: str = DATA_ANALYST_TITLE,
        limit: Optional[int] = TOP_PAYING_SKILLS_LIMIT,
    ) -> List[SkillSalary]:
        avg_salary = self._avg_salary_column().label("avg_salary")
        stmt = (
            select(S.skill_id, S.skills, avg_salary)
            .select_from(J)
            .join(SJ, SJ.job_id == J.job_id)
            .join(S, S.skill_id == SJ.skill_id)
            .where(*self._remote_skills_filter(role_title, require_salary=True))
            .group_by(S.skill_id, S.skills)
            .order_by(avg_salary.desc(), S.skill_id)
            .limit(limit)
        )
        return [
            SkillSalary(
                skill_id=row["skill_id"],
                skills=row["skills"],
                avg_salary=round_half_up(row["avg_salary"]),
            )
            for row in self._execute(stmt, "top_paying_skills")
        ]

    def optimal_skills(
        self,
        role_title: str = DATA_ANALYST_TITLE,
        min_demand_count: int = MIN_DEMAND_COUNT,
        limit: Optional[int] = OPTIMAL_SKILLS_LIMIT,
    ) -> List[OptimalSkill]:
        conditions = self._remote_skills_filter(role_title, require_salary=True)

        skills_demand = (
            select(S.skill_id, S.skills, func.count(SJ.job_id).label("demand_count"))
            .select_from(J)
            .join(SJ, SJ.job_id == J.job_id)
            .join(S, S.skill_id == SJ.skill_id)
            .where(*conditions)
            .group_by(S.skill_id, S.skills)
            .cte("skills_demand")
        )
        average_salary = (
            select(SJ.skill_id, self._avg_salary_column().label("avg_salary"))
            .select_from(J)
            .join(SJ, SJ.job_id == J.job_id)
            .where(*conditions)
            .group_by(SJ.skill_id)
            .cte("average_salary")
        )

        stmt = (
            select(
                skills_demand.c.skill_id,
                skills_demand.c.skills,
                skills_demand.c.demand_count,
                average_salary.c.avg_salary,
            )
            .select_from(skills_demand)
            .join(average_salary, average_salary.c.skill_id == skills_demand.c.skill_id)
            .where(skills_demand.c.demand_count > min_demand_count)
            .order_by(
                skills_demand.c.demand_count.desc(),
                average_salary.c.avg_salary.desc(),
                skills_demand.c.skill_id,
            )
            .limit(limit)
        )
        return [
            OptimalSkill(
                skill_id=row["skill_id"],
                skills=row["skills"],
                demand_count=row["demand_count"],
                avg_salary=round_half_up(row["avg_salary"]),
            )
            for row in self._execute(stmt, "optimal_skills")
        ]
