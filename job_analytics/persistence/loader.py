"""Load the source tables into an in-memory RelationStore."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from job_analytics.logging import get_logger
from job_analytics.store.relation_store import RelationStore

from .exceptions import PersistenceError
from .schema import CompanyModel, JobPostingModel, SkillJobModel, SkillModel

logger = get_logger(__name__, component="loader")


def load_relation_store(session: Session, title_short: Optional[str] = None) -> RelationStore:
    """Read the four tables into a RelationStore snapshot.

    Args:
        session: Open database session
        title_short: When given, only postings with this job_title_short (and
            their skill links) are loaded. Reports filtered on the same role
            produce the same output from the smaller snapshot.

    Returns:
        RelationStore holding every loaded row

    Raises:
        PersistenceError: If a query fails
        TypeCoercionError: If a stored work-from-home flag is malformed
    """
    try:
        posting_stmt = select(JobPostingModel).order_by(JobPostingModel.job_id)
        link_stmt = select(SkillJobModel).order_by(SkillJobModel.job_id, SkillJobModel.skill_id)
        if title_short is not None:
            posting_stmt = posting_stmt.where(JobPostingModel.job_title_short == title_short)
            link_stmt = link_stmt.join(
                JobPostingModel, JobPostingModel.job_id == SkillJobModel.job_id
            ).where(JobPostingModel.job_title_short == title_short)

        postings = [row.to_domain() for row in session.execute(posting_stmt).scalars()]
        companies = [
            row.to_domain()
            for row in session.execute(
                select(CompanyModel).order_by(CompanyModel.company_id)
            ).scalars()
        ]
        skills = [
            row.to_domain()
            for row in session.execute(select(SkillModel).order_by(SkillModel.skill_id)).scalars()
        ]
        links = [row.to_domain() for row in session.execute(link_stmt).scalars()]
    except SQLAlchemyError as e:
        logger.error(f"Error loading relations: {e}", exc_info=True)
        raise PersistenceError(f"Failed to load relations: {e}") from e

    store = RelationStore(
        job_postings=postings, companies=companies, skills=skills, job_skills=links
    )
    logger.info(
        "Relation store loaded",
        extra={"event": "store.loaded", "title_short": title_short, **store.summary()},
    )
    return store
