"""Unit tests for the structured logging setup.

Tests cover:
- get_logger returns a structlog logger with its name preserved
- JSON output with ISO timestamps, level, logger and event
- Sanitization of sensitive fields
- Optional file output settings
- Context binding
"""

import json
import logging
from pathlib import Path

import pytest
import structlog

from dynamic_sql.utils import logging as dsql_logging
from dynamic_sql.utils.logging import (
    bind_context,
    get_logger,
    sanitize_for_logging,
)


@pytest.mark.unit
def test_get_logger_name_preserved(caplog: pytest.LogCaptureFixture) -> None:
    """The logger name appears in the JSON output."""
    caplog.set_level(logging.INFO)

    logger = get_logger("my_test_logger")
    logger.info("test_event")

    assert len(caplog.records) >= 1
    log_data = json.loads(caplog.records[-1].message)
    assert log_data.get("logger") == "my_test_logger"


@pytest.mark.unit
@pytest.mark.parametrize(
    "key",
    ["password", "access_token", "api_key", "client_secret", "DATABASE_URL", "DSQL_HASH_SALT"],
)
def test_sanitize_for_logging_redacts_sensitive_keys(key: str) -> None:
    sanitized = sanitize_for_logging({key: "value", "user": "admin"})

    assert sanitized[key] == "[REDACTED]"
    assert sanitized["user"] == "admin"


@pytest.mark.unit
def test_sanitize_for_logging_keeps_similar_names() -> None:
    data = {"database_name": "mydb", "DSQL_DIALECT": "generic", "sql": "SELECT 1"}
    assert sanitize_for_logging(data) == data


@pytest.mark.unit
def test_sanitize_for_logging_handles_nested_dicts() -> None:
    data = {
        "user": "admin",
        "auth": {"password": "secret123", "token": "abc123"},
    }
    sanitized = sanitize_for_logging(data)

    assert sanitized["user"] == "admin"
    assert sanitized["auth"]["password"] == "[REDACTED]"
    assert sanitized["auth"]["token"] == "[REDACTED]"


@pytest.mark.unit
def test_sanitize_for_logging_case_insensitive() -> None:
    sanitized = sanitize_for_logging({"PASSWORD": "x", "Token": "y", "API_KEY": "z"})
    assert set(sanitized.values()) == {"[REDACTED]"}


@pytest.mark.unit
def test_json_output_structure(caplog: pytest.LogCaptureFixture) -> None:
    """JSON output contains timestamp, level, logger and event."""
    caplog.set_level(logging.INFO)

    logger = get_logger("test_logger")
    logger.info("statement_executed", row_count=3)

    log_data = json.loads(caplog.records[-1].message)

    assert log_data["event"] == "statement_executed"
    assert log_data["level"] == "info"
    assert log_data["logger"] == "test_logger"
    assert log_data["row_count"] == 3
    assert "T" in log_data["timestamp"]


@pytest.mark.unit
def test_sanitization_in_logged_output(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    logger = get_logger("test_logger")
    logger.info("engine_created", DATABASE_URL="postgresql://u:p@host/db", dialect="postgresql")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data.get("DATABASE_URL") == "[REDACTED]"
    assert log_data.get("dialect") == "postgresql"


@pytest.mark.unit
def test_context_binding_persists(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    logger = bind_context(statement_kind="insert_batch", table="person")
    logger.info("first_event", row_id=1)
    logger.info("second_event", row_id=2)

    records = [json.loads(r.message) for r in caplog.records[-2:]]
    assert [r["event"] for r in records] == ["first_event", "second_event"]
    for record in records:
        assert record.get("statement_kind") == "insert_batch"
        assert record.get("table") == "person"


@pytest.mark.unit
def test_bind_context_returns_bound_logger() -> None:
    logger = bind_context(statement_kind="select")
    assert isinstance(logger, structlog.stdlib.BoundLogger)


@pytest.mark.unit
@pytest.mark.parametrize("value, expected", [("1", True), ("yes", True), ("TRUE", True), ("0", False), ("", False)])
def test_should_log_to_file(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("LOG_TO_FILE", value)
    assert dsql_logging._should_log_to_file() is expected


@pytest.mark.unit
def test_log_file_path_uses_configured_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("LOG_FILE_DIR", str(log_dir))

    path = dsql_logging._get_log_file_path()

    assert path.parent == log_dir
    assert log_dir.is_dir()
    assert path.name.startswith("dynamic-sql-") and path.suffix == ".log"


@pytest.mark.unit
def test_log_level_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert dsql_logging._get_log_level() == logging.DEBUG


@pytest.mark.unit
def test_invalid_settings_fall_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """A malformed DSQL_* value must not break logging setup."""
    monkeypatch.setenv("DSQL_DIALECT", "oracle")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert dsql_logging._get_log_level() == logging.WARNING


@pytest.mark.unit
def test_configure_is_idempotent() -> None:
    handlers_before = list(logging.root.handlers)
    dsql_logging._configure_structlog()
    assert logging.root.handlers == handlers_before
