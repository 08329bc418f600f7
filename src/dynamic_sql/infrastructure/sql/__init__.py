"""
SQL module for dynamic statement building.

Statements are composed from tables, columns, conditions and functions,
rendered through a dialect into immutable statements (SQL text plus named
bind parameters) and handed to a caller-supplied mapper for execution.

Typical use goes through :mod:`dynamic_sql.infrastructure.sql.mapper_support`:

    >>> from dynamic_sql.infrastructure.sql import SqlTable, is_equal_to, mapper_support
    >>> users = SqlTable("users")
    >>> active = users.column("active")
    >>> mapper_support.count_from(
    ...     executor.count, users, lambda c: c.where(active, is_equal_to(True))
    ... )
    3
"""

from .core.exceptions import DynamicSqlError, ExecutionError, StatementBuildError
from .core.identifier import qualify_table, quote_identifier
from .core.table import AllColumns, BasicColumn, SqlColumn, SqlTable
from .dialects import GenericDialect, MySQLDialect, PostgreSQLDialect, get_dialect
from .operations.delete import DeleteDSL, delete_from
from .operations.insert import (
    BatchInsertDSL,
    GeneralInsertDSL,
    InsertDSL,
    InsertSelectDSL,
    MultiRowInsertDSL,
    insert,
    insert_batch,
    insert_into,
    insert_multiple,
    insert_select,
)
from .operations.select import (
    QueryExpressionDSL,
    count_all_from,
    count_column,
    count_distinct_column,
    select,
    select_distinct,
)
from .operations.update import UpdateDSL, update
from .select.functions import (
    avg,
    count,
    count_all,
    count_distinct,
    lower,
    max_,
    min_,
    substring,
    sum_,
    upper,
)
from .statements import (
    BatchInsert,
    DeleteStatement,
    GeneralInsertStatement,
    InsertSelectStatement,
    InsertStatement,
    MultiRowInsertStatement,
    RenderedStatement,
    SelectStatement,
    UpdateStatement,
)
from .where import (
    and_,
    equal_to,
    is_between,
    is_equal_to,
    is_equal_to_when_present,
    is_greater_than,
    is_greater_than_or_equal_to,
    is_greater_than_when_present,
    is_in,
    is_less_than,
    is_less_than_or_equal_to,
    is_less_than_when_present,
    is_like,
    is_like_when_present,
    is_not_between,
    is_not_equal_to,
    is_not_equal_to_when_present,
    is_not_in,
    is_not_like,
    is_not_null,
    is_null,
    or_,
)
from . import mapper_support

__all__ = [
    # core
    "SqlTable",
    "SqlColumn",
    "BasicColumn",
    "AllColumns",
    "quote_identifier",
    "qualify_table",
    "DynamicSqlError",
    "StatementBuildError",
    "ExecutionError",
    # dialects
    "GenericDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "get_dialect",
    # builders
    "QueryExpressionDSL",
    "select",
    "select_distinct",
    "count_column",
    "count_distinct_column",
    "count_all_from",
    "DeleteDSL",
    "delete_from",
    "UpdateDSL",
    "update",
    "InsertDSL",
    "BatchInsertDSL",
    "MultiRowInsertDSL",
    "GeneralInsertDSL",
    "InsertSelectDSL",
    "insert",
    "insert_batch",
    "insert_multiple",
    "insert_into",
    "insert_select",
    # rendered statements
    "RenderedStatement",
    "SelectStatement",
    "DeleteStatement",
    "UpdateStatement",
    "InsertStatement",
    "BatchInsert",
    "MultiRowInsertStatement",
    "GeneralInsertStatement",
    "InsertSelectStatement",
    # functions
    "avg",
    "count",
    "count_all",
    "count_distinct",
    "lower",
    "max_",
    "min_",
    "substring",
    "sum_",
    "upper",
    # conditions
    "and_",
    "or_",
    "equal_to",
    "is_between",
    "is_equal_to",
    "is_equal_to_when_present",
    "is_greater_than",
    "is_greater_than_or_equal_to",
    "is_greater_than_when_present",
    "is_in",
    "is_less_than",
    "is_less_than_or_equal_to",
    "is_less_than_when_present",
    "is_like",
    "is_like_when_present",
    "is_not_between",
    "is_not_equal_to",
    "is_not_equal_to_when_present",
    "is_not_in",
    "is_not_like",
    "is_not_null",
    "is_null",
    # facade
    "mapper_support",
]
