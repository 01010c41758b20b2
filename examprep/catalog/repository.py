"""
Question repository - the read-only in-memory question catalog.

Constructed explicitly at startup and shared by every selection call.
The catalog is parsed at most once per repository; concurrent first loads
are serialized so no caller ever observes a partial catalog.
"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from examprep.catalog.schemas import Question, QuestionCatalog
from examprep.catalog.topics import is_known_topic
from examprep.core.errors import CatalogLoadError

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Immutable question catalog with lookup by id and by topic."""

    def __init__(self, path: str | Path | None = None, questions: Iterable[Question] | None = None):
        """
        Create a repository backed by a catalog file or an explicit question list.

        Args:
            path: JSON catalog file ({"questions": [...]}), parsed on first load_all()
            questions: Pre-built questions (no file is read)
        """
        if path is None and questions is None:
            raise ValueError("QuestionRepository needs a catalog path or a question list")
        self._path = Path(path) if path is not None else None
        self._lock = threading.Lock()
        self._questions: tuple[Question, ...] | None = None
        self._by_id: dict[str, Question] = {}
        self.parse_count = 0

        if questions is not None:
            self._install(tuple(questions))

    @classmethod
    def from_questions(cls, questions: Iterable[Question]) -> "QuestionRepository":
        return cls(questions=questions)

    # =========================================================================
    # Loading
    # =========================================================================

    def load_all(self) -> tuple[Question, ...]:
        """
        Return the full catalog, parsing the source on the first call only.

        Raises:
            CatalogLoadError: catalog missing, unreadable or malformed
        """
        if self._questions is not None:
            return self._questions

        with self._lock:
            if self._questions is None:
                self._install(self._parse())
        return self._questions

    def _parse(self) -> tuple[Question, ...]:
        assert self._path is not None
        self.parse_count += 1
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Question catalog unreadable at {self._path}: {e}")
            raise CatalogLoadError(
                f"Cannot read question catalog {self._path}", {"path": str(self._path)}
            ) from e

        try:
            catalog = QuestionCatalog.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Question catalog {self._path} is malformed: {e.error_count()} errors")
            raise CatalogLoadError(
                f"Malformed question catalog {self._path}",
                e.errors(include_url=False, include_context=False),
            ) from e

        return tuple(catalog.questions)

    def _install(self, questions: tuple[Question, ...]) -> None:
        by_id: dict[str, Question] = {}
        for question in questions:
            if question.id in by_id:
                raise CatalogLoadError(f"Duplicate question id {question.id}", {"id": question.id})
            by_id[question.id] = question

        unknown_topics = sorted({q.subtopic for q in questions if not is_known_topic(q.subtopic)})
        if unknown_topics:
            logger.warning(f"Questions reference unregistered topics: {unknown_topics}")

        self._by_id = by_id
        self._questions = questions
        logger.info(f"Question catalog loaded: {len(questions)} questions")

    # =========================================================================
    # Lookups
    # =========================================================================

    def all(self) -> tuple[Question, ...]:
        return self.load_all()

    def by_id(self, question_id: str) -> Question | None:
        """Return the question with this id, or None when absent."""
        self.load_all()
        return self._by_id.get(question_id)

    def by_topic(self, topic_id: str) -> list[Question]:
        """All questions of a topic, in catalog order (empty if none)."""
        return [q for q in self.load_all() if q.subtopic == topic_id]

    def pool(self, topic_id: str | None = None) -> list[Question]:
        """Full catalog, narrowed to one topic when given."""
        if topic_id is None:
            return list(self.load_all())
        return self.by_topic(topic_id)

    def __len__(self) -> int:
        return len(self.load_all())

    def __contains__(self, question_id: object) -> bool:
        return isinstance(question_id, str) and self.by_id(question_id) is not None


def load_question_repository(path: str | Path) -> QuestionRepository:
    """Build a repository and load it eagerly (startup helper)."""
    repository = QuestionRepository(path)
    repository.load_all()
    return repository

