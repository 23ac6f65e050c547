"""Unit tests for posting predicates."""

from job_analytics.analysis.predicates import (
    all_of,
    has_known_salary,
    is_data_analyst_role,
    is_fully_remote_location,
    is_remote_capable,
)
from tests.helpers import make_posting


class TestPredicates:
    """Tests for the individual predicates."""

    def test_is_data_analyst_role(self):
        assert is_data_analyst_role(make_posting(1))
        assert not is_data_analyst_role(make_posting(2, job_title_short="Data Scientist"))
        assert not is_data_analyst_role(make_posting(3, job_title_short="data analyst"))

    def test_is_data_analyst_role_with_custom_title(self):
        posting = make_posting(1, job_title_short="Data Engineer")

        assert is_data_analyst_role(posting, "Data Engineer")

    def test_is_fully_remote_location(self):
        assert is_fully_remote_location(make_posting(1))
        assert not is_fully_remote_location(make_posting(2, job_location="Anywhere, USA"))
        assert not is_fully_remote_location(make_posting(3, job_location=None))

    def test_is_remote_capable_accepts_integer_flags(self):
        assert is_remote_capable(make_posting(1, job_work_from_home=1))
        assert not is_remote_capable(make_posting(2, job_work_from_home=0))

    def test_remote_capable_is_independent_of_location(self):
        in_office_flagged = make_posting(1, job_location="Austin, TX", job_work_from_home=True)
        anywhere_unflagged = make_posting(2, job_location="Anywhere", job_work_from_home=False)

        assert is_remote_capable(in_office_flagged)
        assert not is_fully_remote_location(in_office_flagged)
        assert is_fully_remote_location(anywhere_unflagged)
        assert not is_remote_capable(anywhere_unflagged)

    def test_has_known_salary(self):
        assert has_known_salary(make_posting(1, salary_year_avg=0))
        assert not has_known_salary(make_posting(2, salary_year_avg=None))


class TestAllOf:
    """Tests for predicate composition."""

    def test_all_must_hold(self):
        predicate = all_of(is_data_analyst_role, has_known_salary)

        assert predicate(make_posting(1))
        assert not predicate(make_posting(2, salary_year_avg=None))

    def test_short_circuits(self):
        calls = []

        def recording(posting):
            calls.append(posting.job_id)
            return True

        predicate = all_of(lambda p: False, recording)

        assert not predicate(make_posting(1))
        assert calls == []

    def test_empty_combination_is_true(self):
        assert all_of()(make_posting(1))
