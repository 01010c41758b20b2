"""
Application wiring.

Builds the shared catalog, the configured performance store and the
selector once at startup. A catalog failure is fatal: it is logged and
re-raised so the process does not start.
"""

import logging

from examprep.catalog.repository import QuestionRepository
from examprep.core.config import Settings, settings as default_settings
from examprep.core.errors import CatalogLoadError
from examprep.db.engine import create_db_engine, create_session_factory
from examprep.learning_engine.selection.service import QuestionSelector
from examprep.progress.memory import InMemoryPerformanceStore
from examprep.progress.repo import SqlPerformanceStore
from examprep.progress.store import PerformanceStore

logger = logging.getLogger(__name__)


def build_performance_store(settings: Settings) -> PerformanceStore:
    """Store selected by PERFORMANCE_STORE."""
    if settings.PERFORMANCE_STORE == "sql":
        engine = create_db_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        return SqlPerformanceStore(create_session_factory(engine))
    return InMemoryPerformanceStore()


def load_catalog(settings: Settings) -> QuestionRepository:
    """Load the question catalog eagerly; raise CatalogLoadError on failure."""
    repository = QuestionRepository(settings.QUESTIONS_PATH)
    try:
        repository.load_all()
    except CatalogLoadError as e:
        logger.error(f"Startup aborted, question catalog unavailable: {e.message}")
        raise
    return repository


def build_question_selector(
    settings: Settings | None = None,
    store: PerformanceStore | None = None,
) -> QuestionSelector:
    """
    Build the selector for the application.

    Args:
        settings: Settings (defaults to the global instance)
        store: Explicit store (defaults to the configured one)

    Returns:
        QuestionSelector sharing one loaded catalog
    """
    settings = settings or default_settings
    repository = load_catalog(settings)
    store = store or build_performance_store(settings)
    logger.info(
        f"Question selector ready: {len(repository)} questions, store={type(store).__name__}"
    )
    return QuestionSelector(repository, store)


def initialize(settings: Settings | None = None) -> QuestionSelector:
    """Process startup: configure logging, then build the selector."""
    from examprep.core.logging import setup_logging

    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)
    return build_question_selector(settings)
