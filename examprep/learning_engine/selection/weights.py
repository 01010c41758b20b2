"""
Topic and question weights for adaptive selection.

Topic weight:    w_t = 1 - accuracy_t + 0.3          (accuracy 0.5 when unattempted)
Question weight: w_q = w_t * 1.5  if the recent attempts were all wrong
                       w_t * 0.7  if they were all right
                       w_t        otherwise (mixed or no attempts)
"""

from collections.abc import Iterable, Mapping, Sequence

from examprep.catalog.schemas import Question
from examprep.catalog.topics import topic_ids
from examprep.learning_engine.config import (
    CORRECT_DAMPING,
    MISSED_BOOST,
    NEUTRAL_TOPIC_ACCURACY,
    RECENT_ATTEMPT_WINDOW,
    TOPIC_WEIGHT_OFFSET,
    UNKNOWN_TOPIC_WEIGHT,
)
from examprep.progress.store import Attempt, TopicStat


def topic_accuracy(stat: TopicStat | None) -> float:
    """Accuracy in [0, 1], or the neutral default when there is no data."""
    if stat is None or stat.accuracy is None:
        return NEUTRAL_TOPIC_ACCURACY.value
    return stat.accuracy


def topic_weight(stat: TopicStat | None) -> float:
    """
    Weight for one topic: lower accuracy, higher weight.

    Range: 0.3 (100% accuracy) to 1.3 (0% accuracy); 0.8 when unattempted.
    """
    return 1.0 - topic_accuracy(stat) + TOPIC_WEIGHT_OFFSET.value


def compute_topic_weights(
    stats: Mapping[str, TopicStat],
    topics: Iterable[str] | None = None,
) -> dict[str, float]:
    """
    Weight every registered topic from aggregate stats.

    Args:
        stats: Topic id -> aggregate attempts (topics may be missing)
        topics: Topic domain to weight (defaults to the registry)

    Returns:
        Topic id -> weight, one entry per topic in the domain
    """
    domain = topic_ids() if topics is None else tuple(topics)
    return {topic: topic_weight(stats.get(topic)) for topic in domain}


def recent_attempt_multiplier(history: Sequence[Attempt]) -> float:
    """
    Multiplier from the most recent attempts on a question.

    Args:
        history: Attempts, most recent first

    Returns:
        1.5 when all recent attempts are wrong, 0.7 when all are right, else 1.0
    """
    recent = history[: RECENT_ATTEMPT_WINDOW.value]
    if not recent:
        return 1.0

    correct = sum(1 for attempt in recent if attempt.is_correct)
    if correct == 0:
        return MISSED_BOOST.value
    if correct == len(recent):
        return CORRECT_DAMPING.value
    return 1.0


def compute_question_weight(
    question: Question,
    topic_weights: Mapping[str, float],
    history: Sequence[Attempt] | None = None,
) -> float:
    """
    Final selection weight for one question.

    Args:
        question: Candidate question
        topic_weights: Output of compute_topic_weights
        history: This question's attempts (most recent first), or None when
            per-question history does not apply (no learner, or no history)

    Returns:
        Positive weight
    """
    base = topic_weights.get(question.subtopic, UNKNOWN_TOPIC_WEIGHT.value)
    if not history:
        return base
    return base * recent_attempt_multiplier(history)
