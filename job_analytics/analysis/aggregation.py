"""Group-by aggregation of (posting, skill) pairs.

Groups are keyed by skill_id. Counting works on link rows rather than on
distinct job_ids, so duplicated links count twice, exactly as a SQL join
followed by COUNT would.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import Dict, Iterable, List

from job_analytics.domain.exceptions import EmptyGroupError
from job_analytics.domain.models import JobPosting, Skill


@dataclass(frozen=True)
class SkillPair:
    """A posting joined to one of its skills."""

    posting: JobPosting
    skill: Skill

    @property
    def skill_id(self) -> int:
        return self.skill.skill_id


def group_by_skill(pairs: Iterable[SkillPair]) -> Dict[int, List[SkillPair]]:
    """Group pairs by skill_id, preserving first-seen order of skills."""
    groups: Dict[int, List[SkillPair]] = {}
    for pair in pairs:
        groups.setdefault(pair.skill_id, []).append(pair)
    return groups


def count_jobs_per_skill(pairs: Iterable[SkillPair]) -> Dict[int, int]:
    """Count job-skill rows per skill_id.

    Args:
        pairs: Joined (posting, skill) pairs

    Returns:
        Mapping of skill_id to row count

    Raises:
        EmptyGroupError: If a group is empty
    """
    counts: Dict[int, int] = {}
    for skill_id, group in group_by_skill(pairs).items():
        if not group:
            raise EmptyGroupError(f"No rows for skill_id {skill_id}")
        counts[skill_id] = len(group)
    return counts


def average_salary_per_skill(pairs: Iterable[SkillPair]) -> Dict[int, int]:
    """Average salary_year_avg per skill_id, rounded half up to an integer.

    The mean is computed exactly before rounding, so 94999.5 rounds to 95000.
    Pairs must already be restricted to postings with a known salary.

    Args:
        pairs: Joined (posting, skill) pairs with non-null salaries

    Returns:
        Mapping of skill_id to rounded average salary

    Raises:
        EmptyGroupError: If a group is empty
        ValueError: If a posting in a group has no salary
    """
    averages: Dict[int, int] = {}
    for skill_id, group in group_by_skill(pairs).items():
        if not group:
            raise EmptyGroupError(f"No rows for skill_id {skill_id}")

        total = Fraction(0)
        for pair in group:
            salary = pair.posting.salary_year_avg
            if salary is None:
                raise ValueError(
                    f"Posting {pair.posting.job_id} has no salary_year_avg; "
                    "filter with has_known_salary before averaging"
                )
            total += Fraction(salary)

        averages[skill_id] = round_half_up(total / len(group))
    return averages


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero.

    Accepts int, float, Fraction or Decimal.
    """
    if isinstance(value, Fraction):
        exact = Decimal(value.numerator) / Decimal(value.denominator)
    else:
        exact = Decimal(value)
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
