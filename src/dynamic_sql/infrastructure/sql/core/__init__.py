"""Core SQL utilities package."""

from .exceptions import DynamicSqlError, ExecutionError, StatementBuildError
from .identifier import qualify_column, qualify_table, quote_identifier
from .parameters import (
    ParameterNamer,
    bind_record_parameters,
    get_property,
    record_properties,
)
from .rendering import RenderingContext
from .table import AllColumns, BasicColumn, SqlColumn, SqlTable

__all__ = [
    "quote_identifier",
    "qualify_table",
    "qualify_column",
    "ParameterNamer",
    "bind_record_parameters",
    "get_property",
    "record_properties",
    "RenderingContext",
    "BasicColumn",
    "SqlColumn",
    "SqlTable",
    "AllColumns",
    "DynamicSqlError",
    "StatementBuildError",
    "ExecutionError",
]
