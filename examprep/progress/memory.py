"""In-process performance store for tests and local development."""

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from examprep.progress.store import Attempt, LearnerScope, TopicStat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedAnswer:
    """One answered question inside a submitted session."""

    question_id: str
    subtopic: str | None
    is_correct: bool


@dataclass
class _ResultRow:
    learner_id: str | None
    question_id: str
    subtopic: str | None
    is_correct: bool


@dataclass
class _SessionRow:
    id: int
    learner_id: str | None


class InMemoryPerformanceStore:
    """
    PerformanceStore over lists held in memory.

    Results are kept in insertion order; "most recent" means last recorded.
    The global scope sees every learner's rows.
    """

    def __init__(self) -> None:
        self._sessions: list[_SessionRow] = []
        self._results: list[_ResultRow] = []
        self._session_ids = itertools.count(1)

    # =========================================================================
    # Recording
    # =========================================================================

    def record_session(
        self,
        answers: Iterable[RecordedAnswer],
        learner_id: str | None = None,
    ) -> int:
        """
        Record a submitted session and its answers.

        Returns:
            The new session id
        """
        answers = list(answers)
        correct = sum(1 for a in answers if a.is_correct)
        session = _SessionRow(id=next(self._session_ids), learner_id=learner_id)
        for answer in answers:
            row = _ResultRow(
                learner_id=learner_id,
                question_id=answer.question_id,
                subtopic=answer.subtopic,
                is_correct=answer.is_correct,
            )
            self._results.append(row)
        self._sessions.append(session)

        logger.debug(f"Recorded session {session.id}: {correct}/{len(answers)} for {learner_id}")
        return session.id

    def record_attempt(
        self,
        question_id: str,
        subtopic: str | None,
        is_correct: bool,
        learner_id: str | None = None,
    ) -> int:
        """Record a single-answer session (convenience for seeding history)."""
        return self.record_session(
            [RecordedAnswer(question_id=question_id, subtopic=subtopic, is_correct=is_correct)],
            learner_id=learner_id,
        )

    # =========================================================================
    # PerformanceStore queries
    # =========================================================================

    def _rows(self, scope: LearnerScope) -> list[_ResultRow]:
        if scope.is_global:
            return list(self._results)
        return [r for r in self._results if r.learner_id == scope.learner_id]

    async def topic_stats(self, scope: LearnerScope) -> dict[str, TopicStat]:
        totals: dict[str, list[int]] = {}
        for row in self._rows(scope):
            if row.subtopic is None:
                continue
            bucket = totals.setdefault(row.subtopic, [0, 0])
            bucket[0] += 1
            bucket[1] += int(row.is_correct)
        return {topic: TopicStat(total=t, correct=c) for topic, (t, c) in totals.items()}

    async def answer_totals(self, scope: LearnerScope) -> TopicStat:
        rows = self._rows(scope)
        return TopicStat(total=len(rows), correct=sum(1 for row in rows if row.is_correct))

    async def question_history(
        self,
        question_id: str,
        scope: LearnerScope,
        limit: int | None = None,
    ) -> list[Attempt]:
        history = [
            Attempt(is_correct=row.is_correct)
            for row in reversed(self._rows(scope))
            if row.question_id == question_id
        ]
        return history if limit is None else history[:limit]

    async def missed_question_ids(self, scope: LearnerScope) -> set[str]:
        return {row.question_id for row in self._rows(scope) if not row.is_correct}

    async def answered_question_ids(self, scope: LearnerScope) -> set[str]:
        return {row.question_id for row in self._rows(scope)}

    async def session_count(self, scope: LearnerScope) -> int:
        if scope.is_global:
            return len(self._sessions)
        return sum(1 for s in self._sessions if s.learner_id == scope.learner_id)
