"""
Column mappings for insert and update statements.

A mapping says where the value for one column comes from: a record
property, a bound value, a literal constant, NULL, or another column.
Not every statement supports every mapping; property mappings only make
sense for row-based inserts and column-to-column mappings only for updates.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import StatementBuildError
from ..core.parameters import get_property, multi_row_placeholder, row_placeholder
from ..core.table import BasicColumn, SqlColumn


@dataclass(frozen=True)
class ColumnMapping:
    column: SqlColumn


@dataclass(frozen=True)
class NullMapping(ColumnMapping):
    pass


@dataclass(frozen=True)
class ConstantMapping(ColumnMapping):
    """Literal SQL rendered verbatim (e.g. ``CURRENT_TIMESTAMP`` or ``1``)."""

    constant: str


@dataclass(frozen=True)
class StringConstantMapping(ColumnMapping):
    """String literal rendered in single quotes."""

    constant: str

    def rendered(self) -> str:
        escaped = self.constant.replace("'", "''")
        return f"'{escaped}'"


@dataclass(frozen=True)
class PropertyMapping(ColumnMapping):
    property: str


@dataclass(frozen=True)
class PropertyWhenPresentMapping(PropertyMapping):
    pass


@dataclass(frozen=True)
class ValueMapping(ColumnMapping):
    value: Any


@dataclass(frozen=True)
class ValueWhenPresentMapping(ValueMapping):
    pass


@dataclass(frozen=True)
class ColumnToColumnMapping(ColumnMapping):
    right: BasicColumn


def read_property(record: Any, name: str, statement_kind: str = "insert") -> Any:
    """
    Read one mapped property of a record.

    Raises:
        StatementBuildError: If the record has no such property
    """
    try:
        return get_property(record, name)
    except (KeyError, AttributeError) as exc:
        raise StatementBuildError(f"Record has no property '{name}'", statement_kind) from exc


def bind_row(
    record: Any,
    bindings: Sequence[PropertyMapping],
    index: Optional[int] = None,
    statement_kind: str = "insert",
) -> Dict[str, Any]:
    """
    Read the bind parameters of one record.

    Args:
        record: Record to read
        bindings: Property mappings bound by the statement
        index: Record position for multi-row inserts (None for single-row)
        statement_kind: Name used in build error messages

    Returns:
        Mapping of placeholder name to converted value

    Raises:
        StatementBuildError: If the record lacks a mapped property
    """
    params: Dict[str, Any] = {}
    for binding in bindings:
        name = (
            row_placeholder(binding.property)
            if index is None
            else multi_row_placeholder(index, binding.property)
        )
        value = read_property(record, binding.property, statement_kind)
        params[name] = binding.column.convert_parameter_type(value)
    return params
