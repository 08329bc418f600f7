"""
Integration tests for StatementExecutor and BatchStatementExecutor on an
in-memory SQLite database.
"""

import json
import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError

from dynamic_sql.infrastructure.sql import (
    ExecutionError,
    SqlTable,
    count_all_from,
    delete_from,
    insert,
    insert_into,
    insert_multiple,
    is_equal_to,
    is_like,
    mapper_support,
    select,
    update,
)
from dynamic_sql.io import BATCH_UPDATE_RETURN_VALUE, BatchStatementExecutor, StatementExecutor

from tests.fixtures.people import Person

CREATE_PERSON = """
CREATE TABLE person (
    id INTEGER PRIMARY KEY,
    first_name VARCHAR(30) NOT NULL,
    last_name VARCHAR(30) NOT NULL,
    occupation VARCHAR(30)
)
"""

requires_returning = pytest.mark.skipif(
    sqlite3.sqlite_version_info < (3, 35, 0), reason="SQLite RETURNING requires 3.35+"
)


@pytest.fixture
def conn(sqlite_engine):
    with sqlite_engine.begin() as connection:
        connection.execute(sa.text(CREATE_PERSON))
        yield connection


@pytest.fixture
def executor(conn, person, people):
    executor = StatementExecutor(conn)
    for row in people:
        executor.insert(insert(row).into(person.table).render())
    return executor


@pytest.mark.integration
class TestStatementExecutor:
    """Tests for immediate execution."""

    def test_count(self, executor, person):
        assert executor.count(count_all_from(person.table).render()) == 3

    def test_select_many_returns_dicts_by_default(self, executor, person):
        rows = executor.select_many(
            select(person.id, person.first_name).from_(person.table).order_by(person.id).render()
        )
        assert rows == [
            {"id": 1, "first_name": "Fred"},
            {"id": 2, "first_name": "Wilma"},
            {"id": 3, "first_name": "Pebbles"},
        ]

    def test_select_many_with_row_mapper(self, executor, person, people):
        stmt = (
            select(person.id, person.first_name, person.last_name, person.occupation)
            .from_(person.table)
            .order_by(person.id)
            .render()
        )
        assert executor.select_many(stmt, row_mapper=lambda row: Person(**row)) == people

    def test_select_one(self, executor, person):
        stmt = select(person.first_name).from_(person.table).where(person.id, is_equal_to(2)).render()
        assert executor.select_one(stmt) == {"first_name": "Wilma"}

    def test_select_one_without_match(self, executor, person):
        stmt = select(person.id).from_(person.table).where(person.id, is_equal_to(99)).render()
        assert executor.select_one(stmt) is None

    def test_select_one_with_many_matches(self, executor, person):
        stmt = select(person.id).from_(person.table).render()
        with pytest.raises(ExecutionError):
            executor.select_one(stmt)

    def test_update_and_delete_row_counts(self, executor, person):
        updated = executor.update(
            update(person.table)
            .set(person.occupation).equal_to("Homemaker")
            .where(person.last_name, is_equal_to("Flintstone"))
            .render()
        )
        deleted = executor.delete(
            delete_from(person.table).where(person.first_name, is_like("P%")).render()
        )
        assert (updated, deleted) == (3, 1)

    def test_general_insert_and_multi_row_insert(self, conn, person):
        executor = StatementExecutor(conn)
        general = executor.general_insert(
            insert_into(person.table)
            .set(person.id).to_value(10)
            .set(person.first_name).to_value("Barney")
            .set(person.last_name).to_string_constant("Rubble")
            .render()
        )
        multiple = executor.insert_multiple(
            insert_multiple([Person(11, "Betty", "Rubble"), Person(12, "Bamm-Bamm", "Rubble")])
            .into(person.table)
            .render()
        )
        assert (general, multiple) == (1, 2)
        assert executor.count(count_all_from(person.table).render()) == 3

    def test_sqlalchemy_errors_become_execution_errors(self, conn, caplog):
        caplog.set_level(logging.ERROR)
        executor = StatementExecutor(conn)
        missing = SqlTable("missing")
        stmt = select(missing.column("id")).from_(missing).render()

        with pytest.raises(ExecutionError) as exc_info:
            executor.select_many(stmt)

        assert exc_info.value.sql == "SELECT id FROM missing"
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
        events = [json.loads(r.message) for r in caplog.records if "statement_failed" in r.message]
        assert events and events[-1]["sql"] == "SELECT id FROM missing"


@dataclass
class Item:
    description: str
    id: Optional[int] = None


@pytest.mark.integration
@requires_returning
def test_generated_keys_written_back(sqlite_engine) -> None:
    item = SqlTable("item")
    description = item.column("description")

    with sqlite_engine.begin() as conn:
        conn.execute(
            sa.text("CREATE TABLE item (id INTEGER PRIMARY KEY AUTOINCREMENT, description TEXT)")
        )
        executor = StatementExecutor(conn)
        records = [Item("Helmet"), Item("Helmet Strap")]

        inserted = mapper_support.insert_multiple_with_generated_keys(
            executor.generated_keys_mapper("id", "id"),
            records,
            item,
            lambda c: c.map(description).to_property("description"),
        )

    assert inserted == 2
    assert {record.id for record in records} == {1, 2}


@pytest.mark.integration
@requires_returning
def test_generated_keys_matched_by_natural_column(sqlite_engine) -> None:
    item = SqlTable("item")
    description = item.column("description")

    with sqlite_engine.begin() as conn:
        conn.execute(
            sa.text("CREATE TABLE item (id INTEGER PRIMARY KEY AUTOINCREMENT, description TEXT)")
        )
        executor = StatementExecutor(conn)
        records = [Item("Helmet"), Item("Helmet Strap"), Item("Gloves")]

        inserted = mapper_support.insert_multiple_with_generated_keys(
            executor.generated_keys_mapper("id", "id", match_column="description"),
            records,
            item,
            lambda c: c.map(description).to_property("description"),
        )
        stored = dict(conn.execute(sa.text("SELECT description, id FROM item")).all())

    assert inserted == 3
    assert {record.description: record.id for record in records} == stored


@pytest.mark.integration
class TestBatchStatementExecutor:
    """Tests for batch-mode execution."""

    def test_insert_batch_returns_sentinels_until_flush(self, conn, person, people):
        batch = BatchStatementExecutor(conn)

        results = mapper_support.insert_batch(batch.insert, people, person.table, lambda c: None)

        assert results == [BATCH_UPDATE_RETURN_VALUE] * 3
        assert batch.pending_count == 3
        assert batch.count(count_all_from(person.table).render()) == 0
        assert batch.flush_statements() == [3]
        assert batch.pending_count == 0
        assert batch.count(count_all_from(person.table).render()) == 3

    def test_flush_groups_consecutive_identical_sql(self, conn, person, people):
        batch = BatchStatementExecutor(conn)
        batch.insert(insert(people[0]).into(person.table).render())
        batch.insert(insert(people[1]).into(person.table).render())
        batch.update(
            update(person.table).set(person.occupation).equal_to(None).where(person.id, is_equal_to(1)).render()
        )
        batch.insert(insert(people[2]).into(person.table).render())

        assert batch.flush_statements() == [2, 1, 1]

    def test_failed_flush_empties_queue(self, conn, people):
        batch = BatchStatementExecutor(conn)
        missing = SqlTable("missing")
        batch.insert(insert(people[0]).into(missing).render())

        with pytest.raises(ExecutionError):
            batch.flush_statements()
        assert batch.pending_count == 0
