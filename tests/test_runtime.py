"""Tests for startup wiring and logging setup."""

import json
import logging

import pytest

from examprep.core.config import Settings
from examprep.core.errors import CatalogLoadError
from examprep.core.logging import get_logger, setup_logging
from examprep.progress.memory import InMemoryPerformanceStore
from examprep.progress.repo import SqlPerformanceStore
from examprep.runtime import build_performance_store, build_question_selector, initialize
from tests.helpers.factories import make_catalog, write_catalog


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    path = write_catalog(tmp_path / "questions.json", make_catalog({"ec2": 5, "s3": 5}))
    return Settings(_env_file=None, QUESTIONS_PATH=str(path), PERFORMANCE_STORE="memory")


def test_memory_store_selected(app_settings):
    assert isinstance(build_performance_store(app_settings), InMemoryPerformanceStore)


def test_sql_store_selected(tmp_path):
    settings = Settings(
        _env_file=None,
        PERFORMANCE_STORE="sql",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path}/exam.db",
    )
    assert isinstance(build_performance_store(settings), SqlPerformanceStore)


@pytest.mark.asyncio
async def test_selector_shares_loaded_catalog(app_settings):
    store = InMemoryPerformanceStore()
    store.record_attempt("s3-000", "s3", False, learner_id="alice")
    selector = build_question_selector(app_settings, store=store)

    result = await selector.select_questions(3, "missed", learner_id="alice")

    assert [q.id for q in result] == ["s3-000"]


def test_missing_catalog_is_fatal(tmp_path, caplog):
    settings = Settings(_env_file=None, QUESTIONS_PATH=str(tmp_path / "missing.json"))

    with pytest.raises(CatalogLoadError):
        build_question_selector(settings)

    assert "Startup aborted" in caplog.text


@pytest.mark.usefixtures("restore_root_logger")
def test_initialize_configures_logging(app_settings):
    selector = initialize(app_settings)

    assert selector is not None
    assert logging.getLogger().level == logging.getLevelName(app_settings.LOG_LEVEL)


@pytest.mark.usefixtures("restore_root_logger")
def test_json_log_lines(capsys):
    setup_logging("INFO")
    get_logger("examprep.test").info("catalog ready")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)

    assert record["message"] == "catalog ready"
    assert record["level"] == "INFO"
    assert record["logger"] == "examprep.test"
    assert "timestamp" in record
    assert "asctime" not in record
