"""
Performance store contract.

The selection engine reads learner history through four queries (plus a
session count and answer totals used by progress summaries). Every query takes an explicit
LearnerScope: either the global/anonymous scope or one learner.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class LearnerScope:
    """Whose history a query reads: everyone's (global) or one learner's."""

    learner_id: str | None = None

    @classmethod
    def of(cls, learner_id: str | None) -> "LearnerScope":
        """Scope for an optional learner id (None -> global)."""
        if learner_id is None or learner_id == "":
            return GLOBAL_SCOPE
        return cls(learner_id=str(learner_id))

    @property
    def is_global(self) -> bool:
        return self.learner_id is None

    def __str__(self) -> str:
        return "global" if self.is_global else f"learner:{self.learner_id}"


GLOBAL_SCOPE = LearnerScope()


@dataclass(frozen=True)
class TopicStat:
    """Aggregate attempts on one topic."""

    total: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float | None:
        """Fraction correct, or None when the topic was never attempted."""
        if self.total <= 0:
            return None
        return self.correct / self.total


@dataclass(frozen=True)
class Attempt:
    """One recorded answer to a question."""

    is_correct: bool


@runtime_checkable
class PerformanceStore(Protocol):
    """Read-only view of learner answer history."""

    async def topic_stats(self, scope: LearnerScope) -> dict[str, TopicStat]:
        """Topic id -> aggregate attempts for the scope."""
        ...

    async def answer_totals(self, scope: LearnerScope) -> TopicStat:
        """Attempts and correct answers over every result, tagged with a topic or not."""
        ...

    async def question_history(
        self,
        question_id: str,
        scope: LearnerScope,
        limit: int | None = None,
    ) -> list[Attempt]:
        """Attempts on one question, most recent first (at most `limit`)."""
        ...

    async def missed_question_ids(self, scope: LearnerScope) -> set[str]:
        """Ids answered incorrectly at least once."""
        ...

    async def answered_question_ids(self, scope: LearnerScope) -> set[str]:
        """Ids answered at least once, regardless of correctness."""
        ...

    async def session_count(self, scope: LearnerScope) -> int:
        """Number of completed exam sessions."""
        ...
