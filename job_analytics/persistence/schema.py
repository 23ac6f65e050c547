"""Database schema for the job postings dataset.

Table and column names follow the public job postings dataset:
job_postings_fact, company_dim, skills_dim, skills_job_dim.
"""

import logging

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    inspect,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from job_analytics.domain.models import Company, JobPosting, JobSkillLink, Skill

logger = logging.getLogger(__name__)

Base = declarative_base()


class CompanyModel(Base):
    """ORM model for company_dim."""

    __tablename__ = "company_dim"

    company_id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(Text, nullable=False)
    link = Column(Text, nullable=True)
    link_google = Column(Text, nullable=True)
    thumbnail = Column(Text, nullable=True)

    def to_domain(self) -> Company:
        return Company(
            company_id=self.company_id,
            name=self.name,
            link=self.link,
            link_google=self.link_google,
            thumbnail=self.thumbnail,
        )

    @classmethod
    def from_domain(cls, company: Company) -> "CompanyModel":
        return cls(**company.model_dump())


class SkillModel(Base):
    """ORM model for skills_dim."""

    __tablename__ = "skills_dim"

    skill_id = Column(Integer, primary_key=True, autoincrement=False)
    skills = Column(Text, nullable=False)
    type = Column(Text, nullable=True)

    def to_domain(self) -> Skill:
        return Skill(skill_id=self.skill_id, skills=self.skills, type=self.type)

    @classmethod
    def from_domain(cls, skill: Skill) -> "SkillModel":
        return cls(**skill.model_dump())


class JobPostingModel(Base):
    """ORM model for job_postings_fact.

    company_id is indexed but not a foreign key: postings of unknown
    companies are kept and reported with a null company name.
    """

    __tablename__ = "job_postings_fact"

    job_id = Column(Integer, primary_key=True, autoincrement=False)
    company_id = Column(Integer, nullable=True)
    job_title_short = Column(Text, nullable=False)
    job_title = Column(Text, nullable=True)
    job_location = Column(Text, nullable=True)
    job_via = Column(Text, nullable=True)
    job_schedule_type = Column(Text, nullable=True)
    job_work_from_home = Column(Boolean, nullable=False, default=False)
    search_location = Column(Text, nullable=True)
    job_posted_date = Column(DateTime, nullable=True)
    job_no_degree_mention = Column(Boolean, nullable=True)
    job_health_insurance = Column(Boolean, nullable=True)
    job_country = Column(Text, nullable=True)
    salary_rate = Column(Text, nullable=True)
    salary_year_avg = Column(Float, nullable=True)
    salary_hour_avg = Column(Float, nullable=True)

    __table_args__ = (
        Index("idx_job_postings_company", "company_id"),
        Index("idx_job_postings_title_short", "job_title_short"),
    )

    def to_domain(self) -> JobPosting:
        """Convert to a domain posting, normalising the remote flag.

        Raises:
            TypeCoercionError: If job_work_from_home holds an unexpected value
        """
        return JobPosting.from_record(
            {column.name: getattr(self, column.name) for column in self.__table__.columns}
        )

    @classmethod
    def from_domain(cls, posting: JobPosting) -> "JobPostingModel":
        return cls(**posting.model_dump())


class SkillJobModel(Base):
    """ORM model for skills_job_dim."""

    __tablename__ = "skills_job_dim"

    job_id = Column(
        Integer, ForeignKey("job_postings_fact.job_id"), primary_key=True, autoincrement=False
    )
    skill_id = Column(
        Integer, ForeignKey("skills_dim.skill_id"), primary_key=True, autoincrement=False
    )

    __table_args__ = (Index("idx_skills_job_skill", "skill_id"),)

    def to_domain(self) -> JobSkillLink:
        return JobSkillLink(job_id=self.job_id, skill_id=self.skill_id)

    @classmethod
    def from_domain(cls, link: JobSkillLink) -> "SkillJobModel":
        return cls(job_id=link.job_id, skill_id=link.skill_id)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes that do not exist yet (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise

    tables = inspect(engine).get_table_names()
    logger.info(f"Database schema ready. Tables: {', '.join(sorted(tables))}")
