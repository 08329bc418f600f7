"""
UPDATE statement builder.

Example:
    >>> stmt = (
    ...     update(person)
    ...     .set(first_name).equal_to("Fred")
    ...     .set(occupation).equal_to_null()
    ...     .where(person_id, is_equal_to(3))
    ...     .render()
    ... )
    >>> stmt.sql
    'UPDATE person SET first_name = :p1, occupation = NULL WHERE id = :p2'
"""

from typing import Any, List, Optional, Union

from ..core.exceptions import StatementBuildError
from ..core.rendering import RenderingContext
from ..core.table import BasicColumn, SqlColumn, SqlTable
from ..dialects import GenericDialect, get_dialect
from ..statements import UpdateStatement
from ..where.criteria import WhereDSL
from .mappings import (
    ColumnMapping,
    ColumnToColumnMapping,
    ConstantMapping,
    NullMapping,
    StringConstantMapping,
    ValueMapping,
    ValueWhenPresentMapping,
)


class SetClauseDSL:
    """Second half of ``set(column)``; every method returns the update builder."""

    def __init__(self, builder: "UpdateDSL", column: SqlColumn):
        self._builder = builder
        self._column = column

    def equal_to(self, value: Any) -> "UpdateDSL":
        """Set to a bound value, or to another column when given a column."""
        if isinstance(value, BasicColumn):
            return self._builder._add(ColumnToColumnMapping(self._column, value))
        return self._builder._add(ValueMapping(self._column, value))

    def equal_to_when_present(self, value: Any) -> "UpdateDSL":
        return self._builder._add(ValueWhenPresentMapping(self._column, value))

    def equal_to_null(self) -> "UpdateDSL":
        return self._builder._add(NullMapping(self._column))

    def equal_to_constant(self, constant: str) -> "UpdateDSL":
        return self._builder._add(ConstantMapping(self._column, constant))

    def equal_to_string_constant(self, constant: str) -> "UpdateDSL":
        return self._builder._add(StringConstantMapping(self._column, constant))


class UpdateDSL(WhereDSL):
    """Builder for UPDATE statements."""

    def __init__(self, table: SqlTable):
        super().__init__()
        self._table = table
        self._mappings: List[ColumnMapping] = []

    def set(self, column: SqlColumn) -> SetClauseDSL:
        return SetClauseDSL(self, column)

    def _add(self, mapping: ColumnMapping) -> "UpdateDSL":
        self._mappings.append(mapping)
        return self

    def render(self, dialect: Union[str, GenericDialect, None] = None) -> UpdateStatement:
        context = RenderingContext(get_dialect(dialect))
        assignments = [
            fragment
            for fragment in (self._render_set(m, context) for m in self._mappings)
            if fragment is not None
        ]
        if not assignments:
            raise StatementBuildError("UPDATE requires at least one SET clause", "update")
        sql = (
            f"UPDATE {context.table_name(self._table)} SET {', '.join(assignments)}"
            + self._render_where(context)
        )
        return UpdateStatement(sql=sql, parameters=context.parameters)

    @staticmethod
    def _render_set(mapping: ColumnMapping, context: RenderingContext) -> Optional[str]:
        column = mapping.column
        if isinstance(mapping, ValueWhenPresentMapping) and mapping.value is None:
            return None
        if isinstance(mapping, ValueMapping):
            value = context.bind(column.convert_parameter_type(mapping.value))
        elif isinstance(mapping, NullMapping):
            value = "NULL"
        elif isinstance(mapping, StringConstantMapping):
            value = mapping.rendered()
        elif isinstance(mapping, ConstantMapping):
            value = mapping.constant
        elif isinstance(mapping, ColumnToColumnMapping):
            value = mapping.right.render(context)
        else:
            raise StatementBuildError(
                f"Unsupported mapping for UPDATE: {type(mapping).__name__}", "update"
            )
        return f"{context.dialect.quote(column.name)} = {value}"


def update(table: SqlTable) -> UpdateDSL:
    return UpdateDSL(table)
