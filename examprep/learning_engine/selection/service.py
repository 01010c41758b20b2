"""
Adaptive question selection.

Modes:
- random:   uniform shuffle of the (topic-filtered) catalog
- weak:     weighted sample over topics below 70% accuracy
- missed:   weighted sample over questions answered wrong before
- new:      uniform shuffle over questions never answered
- adaptive: weighted sample over the whole pool (uniform for new learners)

A mode that narrows the pool to nothing falls back to a uniform shuffle of
the topic-filtered catalog. An explicit topic filter that matches nothing
returns an empty selection.

The selector is stateless apart from the shared read-only catalog; every call
reads fresh history from the performance store and never writes to it.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from examprep.catalog.repository import QuestionRepository
from examprep.catalog.schemas import Question
from examprep.core.errors import InvalidSelectionModeError
from examprep.learning_engine.config import RECENT_ATTEMPT_WINDOW, WEAK_TOPIC_ACCURACY_THRESHOLD
from examprep.learning_engine.selection.sampler import create_seeded_rng, shuffle_take, weighted_sample
from examprep.learning_engine.selection.weights import compute_question_weight, compute_topic_weights
from examprep.progress.store import Attempt, LearnerScope, PerformanceStore, TopicStat

logger = logging.getLogger(__name__)

# Upper bound on concurrent per-question history queries
DEFAULT_HISTORY_CONCURRENCY = 10


class SelectionMode(str, Enum):
    """Named selection strategies."""

    ADAPTIVE = "adaptive"
    RANDOM = "random"
    WEAK = "weak"
    MISSED = "missed"
    NEW = "new"

    @classmethod
    def parse(cls, value: "str | SelectionMode | None") -> "SelectionMode":
        """Mode from a request value; None means adaptive."""
        if value is None:
            return cls.ADAPTIVE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidSelectionModeError(
                f"Unknown selection mode: {value}",
                {"allowed": [m.value for m in cls]},
            ) from None


class Strategy(str, Enum):
    """How the final questions were drawn."""

    NONE = "none"
    UNIFORM = "uniform"
    WEIGHTED = "weighted"


@dataclass
class SelectionOutcome:
    """Selected questions plus how they were chosen."""

    mode: SelectionMode
    questions: list[Question] = field(default_factory=list)
    strategy: Strategy = Strategy.NONE
    fallback: bool = False
    pool_size: int = 0

    @property
    def question_ids(self) -> list[str]:
        return [q.id for q in self.questions]

    def to_dict(self) -> dict:
        """Convert to dict for logging."""
        return {
            "mode": self.mode.value,
            "strategy": self.strategy.value,
            "fallback": self.fallback,
            "pool_size": self.pool_size,
            "selected_count": len(self.questions),
        }


class QuestionSelector:
    """
    Selection orchestrator.

    Usage::

        selector = QuestionSelector(repository, store)
        questions = await selector.select_questions(20, "weak", learner_id="u-1")
    """

    def __init__(
        self,
        repository: QuestionRepository,
        store: PerformanceStore,
        rng: random.Random | None = None,
        history_concurrency: int = DEFAULT_HISTORY_CONCURRENCY,
    ):
        self._repository = repository
        self._store = store
        self._rng = rng or create_seeded_rng()
        self._history_concurrency = max(1, history_concurrency)
        self._handlers: dict[
            SelectionMode,
            Callable[[int, list[Question], LearnerScope], Awaitable[SelectionOutcome]],
        ] = {
            SelectionMode.RANDOM: self._select_random,
            SelectionMode.WEAK: self._select_weak,
            SelectionMode.MISSED: self._select_missed,
            SelectionMode.NEW: self._select_new,
            SelectionMode.ADAPTIVE: self._select_adaptive,
        }

    # =========================================================================
    # Public API
    # =========================================================================

    async def select_questions(
        self,
        count: int,
        mode: SelectionMode | str | None = SelectionMode.ADAPTIVE,
        topic: str | None = None,
        learner_id: str | None = None,
    ) -> list[Question]:
        """
        Select up to `count` questions.

        Args:
            count: Number of questions wanted (<= 0 returns [])
            mode: Selection mode (default adaptive)
            topic: Optional topic filter ("" means no filter)
            learner_id: Optional learner; None reads global history

        Returns:
            Questions in draw order, len == min(count, available)

        Raises:
            InvalidSelectionModeError: unknown mode name
            PerformanceStoreError: a store query failed
        """
        outcome = await self.select(count, mode, topic=topic, learner_id=learner_id)
        return outcome.questions

    async def select(
        self,
        count: int,
        mode: SelectionMode | str | None = SelectionMode.ADAPTIVE,
        topic: str | None = None,
        learner_id: str | None = None,
    ) -> SelectionOutcome:
        """Same as select_questions, returning the selection details."""
        mode = SelectionMode.parse(mode)
        scope = LearnerScope.of(learner_id)
        # An empty topic means no filter, like an empty learner id
        topic = topic or None
        logger.debug(f"Selecting questions: count={count} mode={mode.value} topic={topic} scope={scope}")

        if count <= 0:
            return SelectionOutcome(mode=mode)

        pool = self._repository.pool(topic)
        if not pool:
            logger.info(f"No questions match topic filter {topic!r}")
            return SelectionOutcome(mode=mode)

        outcome = await self._handlers[mode](count, pool, scope)
        logger.debug(f"Selection complete: {outcome.to_dict()}")
        return outcome

    # =========================================================================
    # Mode handlers
    # =========================================================================

    async def _select_random(self, count: int, pool: list[Question], scope: LearnerScope) -> SelectionOutcome:
        return self._uniform(SelectionMode.RANDOM, pool, count)

    async def _select_weak(self, count: int, pool: list[Question], scope: LearnerScope) -> SelectionOutcome:
        stats = await self._store.topic_stats(scope)
        weak_topics = weak_topic_ids(stats)
        logger.debug(f"Weak topics identified: {sorted(weak_topics)}")

        narrowed = [q for q in pool if q.subtopic in weak_topics]
        if not narrowed:
            return self._fallback(SelectionMode.WEAK, pool, count, "no weak topics")

        # Weak topics imply recorded attempts, so history exists
        questions = await self._weighted(narrowed, count, scope, stats=stats, has_history=True)
        return self._outcome(SelectionMode.WEAK, questions, Strategy.WEIGHTED, narrowed)

    async def _select_missed(self, count: int, pool: list[Question], scope: LearnerScope) -> SelectionOutcome:
        missed_ids = await self._store.missed_question_ids(scope)
        logger.debug(f"Missed questions found: {len(missed_ids)}")

        narrowed = [q for q in pool if q.id in missed_ids]
        if not narrowed:
            return self._fallback(SelectionMode.MISSED, pool, count, "no missed questions")

        questions = await self._weighted(narrowed, count, scope, has_history=True)
        return self._outcome(SelectionMode.MISSED, questions, Strategy.WEIGHTED, narrowed)

    async def _select_new(self, count: int, pool: list[Question], scope: LearnerScope) -> SelectionOutcome:
        answered_ids = await self._store.answered_question_ids(scope)

        narrowed = [q for q in pool if q.id not in answered_ids]
        logger.debug(f"New questions available: {len(narrowed)}")
        if not narrowed:
            return self._fallback(SelectionMode.NEW, pool, count, "all questions answered")

        return self._uniform(SelectionMode.NEW, narrowed, count)

    async def _select_adaptive(self, count: int, pool: list[Question], scope: LearnerScope) -> SelectionOutcome:
        has_history: bool | None = None
        if not scope.is_global:
            has_history = bool(await self._store.answered_question_ids(scope))
            if not has_history:
                # Every topic would get the neutral weight: same distribution as uniform
                logger.info("New learner detected, using random selection for adaptive mode")
                return self._uniform(SelectionMode.ADAPTIVE, pool, count)

        questions = await self._weighted(pool, count, scope, has_history=has_history)
        return self._outcome(SelectionMode.ADAPTIVE, questions, Strategy.WEIGHTED, pool)

    # =========================================================================
    # Strategies
    # =========================================================================

    def _uniform(self, mode: SelectionMode, pool: Sequence[Question], count: int) -> SelectionOutcome:
        return self._outcome(mode, shuffle_take(pool, count, self._rng), Strategy.UNIFORM, pool)

    def _fallback(self, mode: SelectionMode, pool: Sequence[Question], count: int, reason: str) -> SelectionOutcome:
        logger.info(f"{mode.value} mode: {reason}, falling back to random selection")
        outcome = self._uniform(mode, pool, count)
        outcome.fallback = True
        return outcome

    async def _weighted(
        self,
        candidates: list[Question],
        count: int,
        scope: LearnerScope,
        stats: dict[str, TopicStat] | None = None,
        has_history: bool | None = None,
    ) -> list[Question]:
        """
        Weight candidates and sample without replacement.

        Per-question history is only read for a learner scope with history;
        the lookups are independent and run concurrently.
        """
        if stats is None:
            stats = await self._store.topic_stats(scope)
        topic_weights = compute_topic_weights(stats)
        logger.debug(f"Topic weights calculated: {topic_weights}")

        if scope.is_global:
            use_history = False
        elif has_history is None:
            use_history = bool(await self._store.answered_question_ids(scope))
        else:
            use_history = has_history

        if use_history:
            gate = asyncio.Semaphore(self._history_concurrency)
            histories = await asyncio.gather(
                *(self._recent_history(q.id, scope, gate) for q in candidates)
            )
        else:
            histories = [None] * len(candidates)

        weighted = [
            (question, compute_question_weight(question, topic_weights, history))
            for question, history in zip(candidates, histories)
        ]
        logger.debug(f"Starting weighted selection: candidates={len(weighted)} requested={count}")
        return weighted_sample(weighted, count, self._rng)

    async def _recent_history(
        self, question_id: str, scope: LearnerScope, gate: asyncio.Semaphore
    ) -> list[Attempt]:
        async with gate:
            return await self._store.question_history(
                question_id, scope, limit=RECENT_ATTEMPT_WINDOW.value
            )

    @staticmethod
    def _outcome(
        mode: SelectionMode,
        questions: list[Question],
        strategy: Strategy,
        pool: Sequence[Question],
    ) -> SelectionOutcome:
        return SelectionOutcome(mode=mode, questions=questions, strategy=strategy, pool_size=len(pool))


def weak_topic_ids(stats: dict[str, TopicStat]) -> set[str]:
    """Topics with attempts and accuracy strictly below the weak threshold."""
    threshold = WEAK_TOPIC_ACCURACY_THRESHOLD.value
    return {
        topic
        for topic, stat in stats.items()
        if stat.accuracy is not None and stat.accuracy < threshold
    }
