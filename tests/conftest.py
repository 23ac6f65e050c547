"""Shared pytest fixtures."""

import pytest

from job_analytics.persistence import close_database, get_session, init_database, insert_entities
from tests.helpers import build_store, load_dataset

ENV_VARS = ("DATABASE_URL", "LOG_LEVEL", "ENVIRONMENT", "OUTPUT_DIR", "OUTPUT_FORMAT")


@pytest.fixture
def sample_dataset():
    """Domain objects of tests/fixtures/sample_dataset.yaml."""
    return load_dataset()


@pytest.fixture
def sample_store(sample_dataset):
    """RelationStore over the sample dataset."""
    return build_store(sample_dataset)


@pytest.fixture
def memory_database():
    """Empty in-memory database."""
    init_database("sqlite:///:memory:")
    yield
    close_database()


@pytest.fixture
def seeded_database(memory_database, sample_dataset):
    """In-memory database holding the sample dataset."""
    with get_session() as session:
        insert_entities(session, sample_dataset)
    yield


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment override the application reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
