"""
Mapper support functions.

One function per statement kind. Each builds a statement seeded with the
table and column list (or records), lets the caller's completer add clauses,
renders it and passes the rendered statement to the caller's mapper, whose
result is returned unchanged. Nothing here performs I/O, catches errors or
retries: build errors (StatementBuildError) and mapper errors propagate as
raised.

Usage:
    >>> from dynamic_sql.infrastructure.sql import SqlTable, is_equal_to, mapper_support
    >>> from dynamic_sql.io import StatementExecutor
    >>> with engine.begin() as conn:
    ...     executor = StatementExecutor(conn)
    ...     rows = mapper_support.select_list(
    ...         executor.select_many,
    ...         [person_id, first_name],
    ...         person,
    ...         lambda c: c.where(occupation, is_equal_to("Developer")).order_by(person_id),
    ...     )
"""

from typing import Any, Callable, Collection, List, Optional, Sequence, TypeVar

from dynamic_sql.config import get_settings
from dynamic_sql.utils.logging import get_logger

from .core.table import BasicColumn, SqlTable
from .operations import delete as delete_ops
from .operations import insert as insert_ops
from .operations import select as select_ops
from .operations import update as update_ops
from .operations.delete import DeleteDSL
from .operations.insert import (
    BatchInsertDSL,
    GeneralInsertDSL,
    InsertDSL,
    InsertSelectDSL,
    MultiRowInsertDSL,
)
from .operations.select import QueryExpressionDSL
from .operations.update import UpdateDSL
from .statements import (
    DeleteStatement,
    GeneralInsertStatement,
    InsertSelectStatement,
    InsertStatement,
    MultiRowInsertStatement,
    SelectStatement,
    UpdateStatement,
)

logger = get_logger(__name__)

T = TypeVar("T")

CountCompleter = Callable[[QueryExpressionDSL], Any]
SelectCompleter = Callable[[QueryExpressionDSL], Any]
DeleteCompleter = Callable[[DeleteDSL], Any]
UpdateCompleter = Callable[[UpdateDSL], Any]
InsertCompleter = Callable[[InsertDSL], Any]
BatchInsertCompleter = Callable[[BatchInsertDSL], Any]
MultiRowInsertCompleter = Callable[[MultiRowInsertDSL], Any]
GeneralInsertCompleter = Callable[[GeneralInsertDSL], Any]
InsertSelectCompleter = Callable[[InsertSelectDSL], Any]


def _rendered(kind: str, statement: T) -> T:
    if get_settings().log_statements:
        logger.debug(
            "statement_rendered",
            statement_kind=kind,
            sql=getattr(statement, "sql", None),
            parameter_count=len(getattr(statement, "parameters", ())),
        )
    return statement


def count(
    mapper: Callable[[SelectStatement], int],
    column: BasicColumn,
    table: SqlTable,
    completer: CountCompleter,
) -> int:
    """Run ``SELECT COUNT(column) FROM table ...`` through ``mapper``."""
    builder = select_ops.count_column(column).from_(table)
    completer(builder)
    return mapper(_rendered("count", builder.render()))


def count_distinct(
    mapper: Callable[[SelectStatement], int],
    column: BasicColumn,
    table: SqlTable,
    completer: CountCompleter,
) -> int:
    """Run ``SELECT COUNT(DISTINCT column) FROM table ...`` through ``mapper``."""
    builder = select_ops.count_distinct_column(column).from_(table)
    completer(builder)
    return mapper(_rendered("count_distinct", builder.render()))


def count_from(
    mapper: Callable[[SelectStatement], int],
    table: SqlTable,
    completer: CountCompleter,
) -> int:
    """Run ``SELECT COUNT(*) FROM table ...`` through ``mapper``."""
    builder = select_ops.count_all_from(table)
    completer(builder)
    return mapper(_rendered("count_from", builder.render()))


def delete_from(
    mapper: Callable[[DeleteStatement], int],
    table: SqlTable,
    completer: DeleteCompleter,
) -> int:
    builder = delete_ops.delete_from(table)
    completer(builder)
    return mapper(_rendered("delete", builder.render()))


def insert(
    mapper: Callable[[InsertStatement], int],
    row: Any,
    table: SqlTable,
    completer: InsertCompleter,
) -> int:
    """
    Insert one row.

    Without column mappings from the completer, the columns are inferred
    from the row's declared fields.
    """
    builder = insert_ops.insert(row).into(table)
    completer(builder)
    return mapper(_rendered("insert", builder.render()))


def insert_batch(
    mapper: Callable[[InsertStatement], int],
    records: Collection[Any],
    table: SqlTable,
    completer: BatchInsertCompleter,
) -> List[int]:
    """
    Insert every record with its own single-row statement.

    ``mapper`` is called once per record, in input order, and the per-record
    results are returned. Batch-mode execution engines may return a
    placeholder count for every entry (see
    :data:`dynamic_sql.io.executor.BATCH_UPDATE_RETURN_VALUE`); real counts
    are then available from the engine's flush.
    """
    builder = insert_ops.insert_batch(records).into(table)
    completer(builder)
    batch = _rendered("insert_batch", builder.render())
    return [mapper(statement) for statement in batch.insert_statements()]


def insert_into(
    mapper: Callable[[GeneralInsertStatement], int],
    table: SqlTable,
    completer: GeneralInsertCompleter,
) -> int:
    """General insert; values are supplied by the completer via ``set(...)``."""
    builder = insert_ops.insert_into(table)
    completer(builder)
    return mapper(_rendered("insert_into", builder.render()))


def insert_multiple(
    mapper: Callable[[MultiRowInsertStatement], int],
    records: Collection[Any],
    table: SqlTable,
    completer: MultiRowInsertCompleter,
) -> int:
    """Insert every record with ONE multi-row statement."""
    builder = insert_ops.insert_multiple(records).into(table)
    completer(builder)
    return mapper(_rendered("insert_multiple", builder.render()))


def insert_multiple_with_generated_keys(
    mapper: Callable[[str, List[Any]], int],
    records: Collection[Any],
    table: SqlTable,
    completer: MultiRowInsertCompleter,
) -> int:
    """
    Multi-row insert for mappers that retrieve generated keys.

    The mapper receives the SQL text and the records in input order, so it
    can bind the parameters and write generated keys back into the records.
    """
    builder = insert_ops.insert_multiple(records).into(table)
    completer(builder)
    statement = _rendered("insert_multiple", builder.render())
    return mapper(statement.sql, list(statement.records))


def insert_select(
    mapper: Callable[[InsertSelectStatement], int],
    table: SqlTable,
    completer: InsertSelectCompleter,
) -> int:
    builder = insert_ops.insert_select(table)
    completer(builder)
    return mapper(_rendered("insert_select", builder.render()))


def select_distinct(
    mapper: Callable[[SelectStatement], List[T]],
    select_list: Sequence[BasicColumn],
    table: SqlTable,
    completer: SelectCompleter,
) -> List[T]:
    builder = select_ops.select_distinct(*select_list).from_(table)
    completer(builder)
    return mapper(_rendered("select_distinct", builder.render()))


def select_list(
    mapper: Callable[[SelectStatement], List[T]],
    select_list: Sequence[BasicColumn],
    table: SqlTable,
    completer: SelectCompleter,
) -> List[T]:
    builder = select_ops.select(*select_list).from_(table)
    completer(builder)
    return mapper(_rendered("select", builder.render()))


def select_one(
    mapper: Callable[[SelectStatement], Optional[T]],
    select_list: Sequence[BasicColumn],
    table: SqlTable,
    completer: SelectCompleter,
) -> Optional[T]:
    """Select a single row; ``None`` when nothing matches."""
    builder = select_ops.select(*select_list).from_(table)
    completer(builder)
    return mapper(_rendered("select", builder.render()))


def update(
    mapper: Callable[[UpdateStatement], int],
    table: SqlTable,
    completer: UpdateCompleter,
) -> int:
    builder = update_ops.update(table)
    completer(builder)
    return mapper(_rendered("update", builder.render()))
