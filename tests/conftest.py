"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; keep tests on the in-memory store
os.environ.setdefault("ENV", "test")
os.environ.setdefault("PERFORMANCE_STORE", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest

from examprep.catalog.repository import QuestionRepository
from examprep.catalog.schemas import Question
from examprep.learning_engine.selection.sampler import create_seeded_rng
from examprep.learning_engine.selection.service import QuestionSelector
from tests.helpers.factories import SpyStore, make_catalog

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

LEARNER = "learner-1"


@pytest.fixture
def questions() -> list[Question]:
    """40 questions: 10 each in four registered topics."""
    return make_catalog({"cloud_computing": 10, "iam": 10, "ec2": 10, "s3": 10})


@pytest.fixture
def repository(questions: list[Question]) -> QuestionRepository:
    return QuestionRepository.from_questions(questions)


@pytest.fixture
def spy_store() -> SpyStore:
    return SpyStore()


@pytest.fixture
def selector(repository: QuestionRepository, spy_store: SpyStore) -> QuestionSelector:
    return QuestionSelector(repository, spy_store, rng=create_seeded_rng("selector-tests"))
