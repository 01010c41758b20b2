"""Tests for topic and question weighting."""

import pytest

from examprep.catalog.topics import topic_ids
from examprep.learning_engine.selection.weights import (
    compute_question_weight,
    compute_topic_weights,
    recent_attempt_multiplier,
    topic_accuracy,
    topic_weight,
)
from examprep.progress.store import Attempt, TopicStat
from tests.helpers.factories import make_question


def attempts(*outcomes: bool) -> list[Attempt]:
    """Attempts, most recent first."""
    return [Attempt(is_correct=o) for o in outcomes]


class TestTopicWeight:
    def test_perfect_accuracy(self):
        assert topic_weight(TopicStat(total=10, correct=10)) == pytest.approx(0.3)

    def test_zero_accuracy(self):
        assert topic_weight(TopicStat(total=10, correct=0)) == pytest.approx(1.3)

    def test_unattempted_topic_is_neutral(self):
        assert topic_weight(None) == pytest.approx(0.8)
        assert topic_weight(TopicStat(total=0, correct=0)) == pytest.approx(0.8)

    def test_partial_accuracy(self):
        assert topic_accuracy(TopicStat(total=4, correct=1)) == pytest.approx(0.25)
        assert topic_weight(TopicStat(total=4, correct=1)) == pytest.approx(1.05)

    def test_weights_cover_every_registered_topic(self):
        weights = compute_topic_weights({"s3": TopicStat(total=2, correct=2)})

        assert list(weights) == list(topic_ids())
        assert weights["s3"] == pytest.approx(0.3)
        assert weights["vpc"] == pytest.approx(0.8)

    def test_stats_outside_domain_are_ignored(self):
        weights = compute_topic_weights(
            {"route_53": TopicStat(total=1, correct=0)}, topics=["ec2"]
        )
        assert weights == {"ec2": pytest.approx(0.8)}


class TestRecentAttempts:
    def test_all_wrong_boosts(self):
        assert recent_attempt_multiplier(attempts(False, False, False)) == pytest.approx(1.5)

    def test_all_right_damps(self):
        assert recent_attempt_multiplier(attempts(True, True)) == pytest.approx(0.7)

    def test_mixed_is_neutral(self):
        assert recent_attempt_multiplier(attempts(True, False, True)) == pytest.approx(1.0)

    def test_no_history_is_neutral(self):
        assert recent_attempt_multiplier([]) == pytest.approx(1.0)

    def test_only_last_three_attempts_count(self):
        # Three recent misses after an older correct answer
        assert recent_attempt_multiplier(attempts(False, False, False, True)) == pytest.approx(1.5)
        assert recent_attempt_multiplier(attempts(True, True, True, False, False)) == pytest.approx(0.7)


class TestQuestionWeight:
    def test_base_is_topic_weight(self):
        question = make_question("q1", subtopic="ec2")
        assert compute_question_weight(question, {"ec2": 1.05}) == pytest.approx(1.05)

    def test_unknown_topic_defaults_to_one(self):
        question = make_question("q1", subtopic="route_53")
        assert compute_question_weight(question, {"ec2": 0.3}) == pytest.approx(1.0)

    def test_history_adjusts_base(self):
        question = make_question("q1", subtopic="ec2")
        weights = {"ec2": 0.8}

        assert compute_question_weight(question, weights, attempts(False)) == pytest.approx(1.2)
        assert compute_question_weight(question, weights, attempts(True, True, True)) == pytest.approx(0.56)
        assert compute_question_weight(question, weights, attempts(True, False)) == pytest.approx(0.8)

    def test_empty_history_keeps_base(self):
        question = make_question("q1", subtopic="ec2")
        assert compute_question_weight(question, {"ec2": 1.3}, []) == pytest.approx(1.3)
