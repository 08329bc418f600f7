"""
Statement execution on SQLAlchemy connections.

``StatementExecutor`` exposes one method per statement kind; each method is
a mapper usable with :mod:`dynamic_sql.infrastructure.sql.mapper_support`.
The executor borrows the caller's connection: it never commits, rolls back
or closes it, so transaction scoping stays with the caller.

Usage:
    executor = StatementExecutor(conn)

    # Count rows
    total = mapper_support.count_from(executor.count, person, lambda c: None)

    # Rows as dicts, or mapped to objects
    people = mapper_support.select_list(
        lambda s: executor.select_many(s, row_mapper=lambda r: Person(**r)),
        [person_id, first_name],
        person,
        lambda c: c.order_by(person_id),
    )

Every SQLAlchemy error is re-raised as ExecutionError with the original
error chained.
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

import sqlalchemy as sa
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from dynamic_sql.infrastructure.sql.core.exceptions import ExecutionError
from dynamic_sql.infrastructure.sql.core.parameters import (
    bind_record_parameters,
    set_property,
)
from dynamic_sql.infrastructure.sql.operations.mappings import read_property
from dynamic_sql.infrastructure.sql.statements import RenderedStatement
from dynamic_sql.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RowMapper = Callable[[Mapping[str, Any]], T]

# Returned for every statement queued by a batch executor; real counts come
# from flush_statements().
BATCH_UPDATE_RETURN_VALUE = -2147482646


class StatementExecutor:
    """
    Executes rendered statements immediately.

    Args:
        conn: SQLAlchemy connection (transaction managed by the caller)
    """

    def __init__(self, conn: Connection):
        self.conn = conn

    def _execute(
        self,
        sql: str,
        parameters: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]],
        consume: Callable[[CursorResult], T],
    ) -> T:
        try:
            result = self.conn.execute(sa.text(sql), parameters)
            return consume(result)
        except SQLAlchemyError as exc:
            error = ExecutionError(
                f"Statement execution failed: {exc}", sql=sql, original_error=exc
            )
            logger.error("statement_failed", **error.to_dict())
            raise error from exc

    def count(self, statement: RenderedStatement) -> int:
        return int(
            self._execute(statement.sql, dict(statement.parameters), lambda r: r.scalar_one())
        )

    def select_many(
        self, statement: RenderedStatement, row_mapper: Optional[RowMapper] = None
    ) -> List[Any]:
        """Return every row, as dicts unless ``row_mapper`` converts them."""
        convert = row_mapper or dict
        return self._execute(
            statement.sql,
            dict(statement.parameters),
            lambda r: [convert(row) for row in r.mappings()],
        )

    def select_one(
        self, statement: RenderedStatement, row_mapper: Optional[RowMapper] = None
    ) -> Optional[Any]:
        """
        Return the single matching row, or None when nothing matches.

        Raises:
            ExecutionError: If more than one row matches
        """
        row = self._execute(
            statement.sql, dict(statement.parameters), lambda r: r.mappings().one_or_none()
        )
        if row is None:
            return None
        return (row_mapper or dict)(row)

    def execute(self, statement: RenderedStatement) -> int:
        """Run a data-changing statement and return its row count."""
        return self._execute(statement.sql, dict(statement.parameters), lambda r: r.rowcount)

    def update(self, statement: RenderedStatement) -> int:
        return self.execute(statement)

    def delete(self, statement: RenderedStatement) -> int:
        return self.execute(statement)

    def insert(self, statement: RenderedStatement) -> int:
        return self.execute(statement)

    def general_insert(self, statement: RenderedStatement) -> int:
        return self.execute(statement)

    def insert_multiple(self, statement: RenderedStatement) -> int:
        return self.execute(statement)

    def insert_select(self, statement: RenderedStatement) -> int:
        return self.execute(statement)

    def generated_keys_mapper(
        self,
        key_column: str,
        key_property: str,
        match_column: Optional[str] = None,
        match_property: Optional[str] = None,
    ) -> Callable[[str, List[Any]], int]:
        """
        Build a mapper for ``insert_multiple_with_generated_keys``.

        The mapper appends ``RETURNING key_column`` to the statement and writes
        each generated key into ``key_property`` of a record. The database must
        support RETURNING (PostgreSQL, SQLite 3.35+).

        Without ``match_column`` keys are paired with records by position, which
        relies on the database returning rows in VALUES order. PostgreSQL does
        so for a plain ``INSERT ... VALUES``; SQLite leaves RETURNING row order
        unspecified. Pass ``match_column`` (a column whose values are unique
        within the batch) to pair each key with the record carrying the same
        value in ``match_property`` instead.

        Args:
            key_column: Generated key column
            key_property: Record property receiving the key
            match_column: Column identifying the record of a returned row
            match_property: Record property holding the ``match_column`` value,
                defaults to ``match_column``

        Returns:
            Callable taking the SQL text and the records, returning the number
            of inserted rows
        """
        returning = key_column if match_column is None else f"{key_column}, {match_column}"
        record_property = match_property or match_column

        def mapper(sql: str, records: List[Any]) -> int:
            def assign_keys(result: CursorResult) -> int:
                if match_column is None:
                    keys = result.scalars().all()
                    for record, key in zip(records, keys):
                        set_property(record, key_property, key)
                    return len(keys)
                rows = result.all()
                keys_by_value = {row[1]: row[0] for row in rows}
                for record in records:
                    value = read_property(record, record_property, "insert_multiple")
                    if value in keys_by_value:
                        set_property(record, key_property, keys_by_value[value])
                return len(rows)

            return self._execute(
                f"{sql} RETURNING {returning}",
                bind_record_parameters(sql, records),
                assign_keys,
            )

        return mapper


class BatchStatementExecutor(StatementExecutor):
    """
    Queues data-changing statements and runs them on flush.

    ``insert``/``update``/``delete``/``general_insert`` return
    BATCH_UPDATE_RETURN_VALUE instead of a row count. ``flush_statements``
    runs the queue, grouping consecutive statements with identical SQL into
    one executemany call, and returns one row count per group. Selects,
    counts and multi-row inserts still execute immediately.
    """

    def __init__(self, conn: Connection):
        super().__init__(conn)
        self._pending: List[Tuple[str, Dict[str, Any]]] = []

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _queue(self, statement: RenderedStatement) -> int:
        self._pending.append((statement.sql, dict(statement.parameters)))
        return BATCH_UPDATE_RETURN_VALUE

    def update(self, statement: RenderedStatement) -> int:
        return self._queue(statement)

    def delete(self, statement: RenderedStatement) -> int:
        return self._queue(statement)

    def insert(self, statement: RenderedStatement) -> int:
        return self._queue(statement)

    def general_insert(self, statement: RenderedStatement) -> int:
        return self._queue(statement)

    def flush_statements(self) -> List[int]:
        """Execute every queued statement; the queue is emptied even on failure."""
        pending, self._pending = self._pending, []
        counts: List[int] = []
        for sql, group in itertools.groupby(pending, key=lambda item: item[0]):
            parameters = [params for _, params in group]
            counts.append(self._execute(sql, parameters, lambda r: r.rowcount))
        logger.info(
            "batch_flushed", statement_count=len(pending), group_count=len(counts)
        )
        return counts
