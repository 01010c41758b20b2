"""
SQL performance store.

Read-only async queries over exam_sessions / question_results.
Each query opens its own AsyncSession, so callers may run many
queries concurrently (e.g. per-question history with asyncio.gather).
"""

import logging

from sqlalchemy import Select, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from examprep.core.errors import PerformanceStoreError
from examprep.models.progress import ExamSession, QuestionResult
from examprep.progress.store import Attempt, LearnerScope, TopicStat

logger = logging.getLogger(__name__)


def _scoped(stmt: Select, column, scope: LearnerScope) -> Select:
    """Restrict a statement to one learner unless the scope is global."""
    if scope.is_global:
        return stmt
    return stmt.where(column == scope.learner_id)


class SqlPerformanceStore:
    """PerformanceStore backed by SQLAlchemy (async)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _all(self, stmt: Select, query_name: str) -> list:
        try:
            async with self._session_factory() as db:
                result = await db.execute(stmt)
                return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Performance store query {query_name} failed: {e}")
            raise PerformanceStoreError(
                f"Performance store query failed: {query_name}", {"query": query_name}
            ) from e

    async def topic_stats(self, scope: LearnerScope) -> dict[str, TopicStat]:
        stmt = (
            select(
                QuestionResult.subtopic,
                func.count().label("total"),
                func.sum(case((QuestionResult.is_correct.is_(True), 1), else_=0)).label("correct"),
            )
            .where(QuestionResult.subtopic.isnot(None))
            .group_by(QuestionResult.subtopic)
        )
        stmt = _scoped(stmt, QuestionResult.user_id, scope)

        rows = await self._all(stmt, "topic_stats")
        return {
            row.subtopic: TopicStat(total=int(row.total), correct=int(row.correct or 0))
            for row in rows
        }

    async def answer_totals(self, scope: LearnerScope) -> TopicStat:
        stmt = select(
            func.count(QuestionResult.id).label("total"),
            func.sum(case((QuestionResult.is_correct.is_(True), 1), else_=0)).label("correct"),
        )
        stmt = _scoped(stmt, QuestionResult.user_id, scope)

        rows = await self._all(stmt, "answer_totals")
        if not rows:
            return TopicStat()
        return TopicStat(total=int(rows[0].total or 0), correct=int(rows[0].correct or 0))

    async def question_history(
        self,
        question_id: str,
        scope: LearnerScope,
        limit: int | None = None,
    ) -> list[Attempt]:
        stmt = (
            select(QuestionResult.is_correct)
            .where(QuestionResult.question_id == question_id)
            .order_by(QuestionResult.id.desc())
        )
        stmt = _scoped(stmt, QuestionResult.user_id, scope)
        if limit is not None:
            stmt = stmt.limit(limit)

        rows = await self._all(stmt, "question_history")
        return [Attempt(is_correct=bool(row.is_correct)) for row in rows]

    async def missed_question_ids(self, scope: LearnerScope) -> set[str]:
        stmt = select(QuestionResult.question_id.distinct()).where(
            QuestionResult.is_correct.is_(False)
        )
        stmt = _scoped(stmt, QuestionResult.user_id, scope)

        rows = await self._all(stmt, "missed_question_ids")
        return {row[0] for row in rows}

    async def answered_question_ids(self, scope: LearnerScope) -> set[str]:
        stmt = select(QuestionResult.question_id.distinct())
        stmt = _scoped(stmt, QuestionResult.user_id, scope)

        rows = await self._all(stmt, "answered_question_ids")
        return {row[0] for row in rows}

    async def session_count(self, scope: LearnerScope) -> int:
        stmt = select(func.count(ExamSession.id))
        stmt = _scoped(stmt, ExamSession.user_id, scope)

        rows = await self._all(stmt, "session_count")
        return int(rows[0][0]) if rows else 0
