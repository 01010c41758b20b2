"""Tests for the in-memory performance store."""

import pytest

from examprep.progress.memory import InMemoryPerformanceStore, RecordedAnswer
from examprep.progress.store import GLOBAL_SCOPE, LearnerScope, PerformanceStore, TopicStat

ALICE = LearnerScope.of("alice")
BOB = LearnerScope.of("bob")


@pytest.fixture
def store() -> InMemoryPerformanceStore:
    store = InMemoryPerformanceStore()
    store.record_session(
        [
            RecordedAnswer("ec2-000", "ec2", True),
            RecordedAnswer("ec2-001", "ec2", False),
            RecordedAnswer("s3-000", "s3", True),
        ],
        learner_id="alice",
    )
    store.record_session([RecordedAnswer("ec2-000", "ec2", False)], learner_id="alice")
    store.record_session([RecordedAnswer("iam-000", "iam", False)], learner_id="bob")
    store.record_session([RecordedAnswer("s3-000", None, False)])
    return store


def test_satisfies_protocol(store):
    assert isinstance(store, PerformanceStore)


def test_scope_of():
    assert LearnerScope.of(None) is GLOBAL_SCOPE
    assert LearnerScope.of("") is GLOBAL_SCOPE
    assert LearnerScope.of("alice") == ALICE
    assert str(ALICE) == "learner:alice"
    assert str(GLOBAL_SCOPE) == "global"


def test_topic_stat_accuracy():
    assert TopicStat(total=4, correct=3).accuracy == 0.75
    assert TopicStat().accuracy is None


def test_record_session_returns_increasing_ids():
    store = InMemoryPerformanceStore()
    first = store.record_session([RecordedAnswer("q1", "ec2", True)])
    second = store.record_attempt("q2", "ec2", False)
    assert second > first


@pytest.mark.asyncio
async def test_topic_stats_per_learner(store):
    assert await store.topic_stats(ALICE) == {
        "ec2": TopicStat(total=3, correct=1),
        "s3": TopicStat(total=1, correct=1),
    }
    assert await store.topic_stats(BOB) == {"iam": TopicStat(total=1, correct=0)}
    assert await store.topic_stats(LearnerScope.of("nobody")) == {}


@pytest.mark.asyncio
async def test_topic_stats_global_skips_untagged_rows(store):
    stats = await store.topic_stats(GLOBAL_SCOPE)
    assert stats["s3"] == TopicStat(total=1, correct=1)
    assert stats["iam"] == TopicStat(total=1, correct=0)


@pytest.mark.asyncio
async def test_question_history_most_recent_first(store):
    history = await store.question_history("ec2-000", ALICE)
    assert [a.is_correct for a in history] == [False, True]

    limited = await store.question_history("ec2-000", ALICE, limit=1)
    assert [a.is_correct for a in limited] == [False]

    assert await store.question_history("ec2-000", BOB) == []


@pytest.mark.asyncio
async def test_missed_and_answered_ids(store):
    assert await store.missed_question_ids(ALICE) == {"ec2-000", "ec2-001"}
    assert await store.answered_question_ids(ALICE) == {"ec2-000", "ec2-001", "s3-000"}
    assert await store.missed_question_ids(GLOBAL_SCOPE) == {"ec2-000", "ec2-001", "iam-000", "s3-000"}


@pytest.mark.asyncio
async def test_session_count(store):
    assert await store.session_count(ALICE) == 2
    assert await store.session_count(BOB) == 1
    assert await store.session_count(GLOBAL_SCOPE) == 4


@pytest.mark.asyncio
async def test_answer_totals_include_untagged_rows(store):
    assert await store.answer_totals(ALICE) == TopicStat(total=4, correct=2)
    assert await store.answer_totals(GLOBAL_SCOPE) == TopicStat(total=6, correct=2)
    assert await store.answer_totals(LearnerScope.of("nobody")) == TopicStat()
