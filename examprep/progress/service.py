"""Learner progress summary: per-topic mastery bands and exam readiness."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

from examprep.catalog.topics import SUBTOPICS, get_topic_display_name
from examprep.progress.store import LearnerScope, PerformanceStore, TopicStat

logger = logging.getLogger(__name__)

# Readiness = coverage share + accuracy share
READINESS_COVERAGE_WEIGHT = 0.4
READINESS_ACCURACY_WEIGHT = 0.6


class MasteryLevel(str, Enum):
    """Mastery band for one topic."""

    NOT_STARTED = "not_started"
    NEEDS_WORK = "needs_work"
    LEARNING = "learning"
    PROFICIENT = "proficient"
    MASTERED = "mastered"


@dataclass
class TopicProgress:
    """Progress on one registered topic."""

    subtopic: str
    display_name: str
    total: int
    correct: int
    accuracy: float  # percent, 0 when unattempted
    mastery: MasteryLevel


@dataclass
class ProgressSummary:
    """Overall progress for a scope."""

    total_questions_answered: int
    total_correct: int
    overall_accuracy: float
    sessions_completed: int
    exam_readiness: float
    topics: list[TopicProgress] = field(default_factory=list)


def mastery_level(total: int, accuracy_pct: float) -> MasteryLevel:
    """
    Band a topic by attempts and accuracy percent.

    Args:
        total: Attempts on the topic
        accuracy_pct: Accuracy in [0, 100]

    Returns:
        MasteryLevel
    """
    if total == 0:
        return MasteryLevel.NOT_STARTED
    if accuracy_pct >= 90:
        return MasteryLevel.MASTERED
    if accuracy_pct >= 80:
        return MasteryLevel.PROFICIENT
    if accuracy_pct >= 70:
        return MasteryLevel.LEARNING
    return MasteryLevel.NEEDS_WORK


def build_topic_progress(stats: dict[str, TopicStat]) -> list[TopicProgress]:
    """One entry per registered topic, in registry order."""
    progress = []
    for subtopic in SUBTOPICS:
        stat = stats.get(subtopic) or TopicStat()
        accuracy = (stat.correct / stat.total) * 100 if stat.total > 0 else 0.0
        progress.append(
            TopicProgress(
                subtopic=subtopic,
                display_name=get_topic_display_name(subtopic),
                total=stat.total,
                correct=stat.correct,
                accuracy=accuracy,
                mastery=mastery_level(stat.total, accuracy),
            )
        )
    return progress


def exam_readiness(topics: list[TopicProgress]) -> float:
    """40% topic coverage + 60% mean accuracy of studied topics."""
    if not topics:
        return 0.0
    studied = [t for t in topics if t.total > 0]
    coverage = (len(studied) / len(topics)) * 100
    avg_accuracy = sum(t.accuracy for t in studied) / len(studied) if studied else 0.0
    return coverage * READINESS_COVERAGE_WEIGHT + avg_accuracy * READINESS_ACCURACY_WEIGHT


async def get_topic_progress(store: PerformanceStore, learner_id: str | None = None) -> list[TopicProgress]:
    stats = await store.topic_stats(LearnerScope.of(learner_id))
    return build_topic_progress(stats)


async def get_progress_summary(store: PerformanceStore, learner_id: str | None = None) -> ProgressSummary:
    """
    Summarize a learner's (or everyone's) progress.

    Args:
        store: Performance store
        learner_id: Learner, or None for the global scope

    Returns:
        ProgressSummary
    """
    scope = LearnerScope.of(learner_id)
    stats, totals, answered_ids, sessions = await asyncio.gather(
        store.topic_stats(scope),
        store.answer_totals(scope),
        store.answered_question_ids(scope),
        store.session_count(scope),
    )

    topics = build_topic_progress(stats)
    summary = ProgressSummary(
        total_questions_answered=len(answered_ids),
        total_correct=totals.correct,
        overall_accuracy=(totals.accuracy or 0.0) * 100,
        sessions_completed=sessions,
        exam_readiness=exam_readiness(topics),
        topics=topics,
    )
    logger.debug(
        f"Progress summary for {scope}: answered={summary.total_questions_answered} "
        f"readiness={summary.exam_readiness:.1f}"
    )
    return summary
