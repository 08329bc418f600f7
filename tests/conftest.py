"""Pytest configuration shared by the unit and integration suites."""

from __future__ import annotations

from typing import Generator

import pytest
import sqlalchemy as sa

from dynamic_sql.config import get_settings
from tests.fixtures.people import Person, PersonTable

_SETTINGS_ENV_VARS = (
    "DATABASE_URL",
    "LOG_LEVEL",
    "DSQL_DIALECT",
    "DSQL_LOG_STATEMENTS",
    "DSQL_SQL_ECHO",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Render with default settings regardless of the developer's environment."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person() -> PersonTable:
    return PersonTable()


@pytest.fixture
def people() -> list[Person]:
    return [
        Person(1, "Fred", "Flintstone", "Brontosaurus Operator"),
        Person(2, "Wilma", "Flintstone", "Accountant"),
        Person(3, "Pebbles", "Flintstone"),
    ]


@pytest.fixture
def sqlite_engine() -> Generator[sa.engine.Engine, None, None]:
    """In-memory SQLite engine; the pool hands every checkout the same database."""
    engine = sa.create_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()
