"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from examprep.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("ENV", "LOG_LEVEL", "PERFORMANCE_STORE", "DATABASE_URL", "QUESTIONS_PATH"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.ENV == "dev"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.PERFORMANCE_STORE == "memory"
    assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PERFORMANCE_STORE", "sql")
    monkeypatch.setenv("QUESTIONS_PATH", "/srv/questions.json")

    settings = Settings(_env_file=None)

    assert settings.PERFORMANCE_STORE == "sql"
    assert settings.QUESTIONS_PATH == "/srv/questions.json"


def test_log_level_is_normalized():
    assert Settings(_env_file=None, LOG_LEVEL=" debug ").LOG_LEVEL == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LOG_LEVEL="chatty")


def test_unknown_store_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, PERFORMANCE_STORE="redis")


def test_production_requires_sql_store():
    with pytest.raises(ValueError):
        Settings(_env_file=None, ENV="prod", PERFORMANCE_STORE="memory")

    assert Settings(_env_file=None, ENV="prod", PERFORMANCE_STORE="sql").ENV == "prod"
