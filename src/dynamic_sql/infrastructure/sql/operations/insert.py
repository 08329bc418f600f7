"""
SQL INSERT statement builders.

Provides builders for every insert flavour:

- ``insert(row)``: one row, parameters bound from the row's properties
- ``insert_batch(records)``: one single-row INSERT text executed per record
- ``insert_multiple(records)``: one INSERT with a VALUES tuple per record
- ``insert_into(table)``: general insert with values supplied directly
- ``insert_select(table)``: insert whose source is a select statement

Row-based builders map columns to record properties. When no mapping is
given, every declared column of the table whose name is a property of the
(first) record is mapped to that property; a table with no declared columns
maps every record property to a column of the same name.

Example:
    >>> from dynamic_sql.infrastructure.sql import SqlTable
    >>> person = SqlTable("person")
    >>> person_id, first_name = person.column("id"), person.column("first_name")
    >>> stmt = (
    ...     insert({"id": 1, "first_name": "Fred"})
    ...     .into(person)
    ...     .map(person_id).to_property("id")
    ...     .map(first_name).to_property("first_name")
    ...     .render()
    ... )
    >>> print(stmt.sql)
    INSERT INTO person (id, first_name) VALUES (:id, :first_name)
"""

from typing import Any, Collection, List, Optional, Tuple, Union

from ..core.exceptions import StatementBuildError
from ..core.parameters import (
    multi_row_placeholder,
    record_properties,
    row_placeholder,
)
from ..core.rendering import RenderingContext
from ..core.table import SqlColumn, SqlTable
from ..dialects import GenericDialect, get_dialect
from ..statements import (
    BatchInsert,
    GeneralInsertStatement,
    InsertSelectStatement,
    InsertStatement,
    MultiRowInsertStatement,
)
from .mappings import (
    ColumnMapping,
    ConstantMapping,
    NullMapping,
    PropertyMapping,
    PropertyWhenPresentMapping,
    StringConstantMapping,
    ValueMapping,
    ValueWhenPresentMapping,
    bind_row,
    read_property,
)
from .select import QueryExpressionDSL

DialectArg = Union[str, GenericDialect, None]


class ColumnMappingDSL:
    """Second half of ``map(column)``; every method returns the insert builder."""

    def __init__(self, builder: "AbstractRowInsertDSL", column: SqlColumn):
        self._builder = builder
        self._column = column

    def to_property(self, property_name: str) -> Any:
        return self._builder._add(PropertyMapping(self._column, property_name))

    def to_property_when_present(self, property_name: str) -> Any:
        """Map to a property; the column is omitted when the row value is None."""
        if not self._builder.supports_when_present:
            raise StatementBuildError(
                "to_property_when_present is only supported for single-row inserts",
                self._builder.statement_kind,
            )
        return self._builder._add(PropertyWhenPresentMapping(self._column, property_name))

    def to_null(self) -> Any:
        return self._builder._add(NullMapping(self._column))

    def to_constant(self, constant: str) -> Any:
        return self._builder._add(ConstantMapping(self._column, constant))

    def to_string_constant(self, constant: str) -> Any:
        return self._builder._add(StringConstantMapping(self._column, constant))


class AbstractRowInsertDSL:
    """Shared table and column-mapping handling of the row-based builders."""

    statement_kind = "insert"
    supports_when_present = False

    def __init__(self) -> None:
        self._table: Optional[SqlTable] = None
        self._mappings: List[ColumnMapping] = []

    def into(self, table: SqlTable):
        self._table = table
        return self

    def map(self, column: SqlColumn) -> ColumnMappingDSL:
        return ColumnMappingDSL(self, column)

    def _add(self, mapping: ColumnMapping):
        self._mappings.append(mapping)
        return self

    def _resolve_mappings(self, sample: Any) -> List[ColumnMapping]:
        if self._table is None:
            raise StatementBuildError("INSERT requires a target table", self.statement_kind)
        if self._mappings:
            mappings = list(self._mappings)
        else:
            properties = record_properties(sample)
            declared = self._table.columns
            if declared:
                mappings = [PropertyMapping(c, c.name) for c in declared if c.name in properties]
            else:
                mappings = [PropertyMapping(SqlColumn(p, self._table), p) for p in properties]
        if not mappings:
            raise StatementBuildError("INSERT has no mapped columns", self.statement_kind)
        for mapping in mappings:
            if isinstance(mapping, ValueMapping):
                raise StatementBuildError(
                    "Value mappings are not supported for row inserts", self.statement_kind
                )
            if isinstance(mapping, PropertyMapping) and not mapping.property.isidentifier():
                raise StatementBuildError(
                    f"Property '{mapping.property}' is not a valid bind parameter name",
                    self.statement_kind,
                )
        return mappings

    @staticmethod
    def _literal(mapping: ColumnMapping) -> str:
        if isinstance(mapping, NullMapping):
            return "NULL"
        if isinstance(mapping, StringConstantMapping):
            return mapping.rendered()
        if isinstance(mapping, ConstantMapping):
            return mapping.constant
        raise TypeError(f"Not a literal mapping: {type(mapping).__name__}")

    @classmethod
    def _value_expression(cls, mapping: ColumnMapping, index: Optional[int] = None) -> str:
        if isinstance(mapping, PropertyMapping):
            if index is None:
                return f":{row_placeholder(mapping.property)}"
            return f":{multi_row_placeholder(index, mapping.property)}"
        return cls._literal(mapping)


class InsertDSL(AbstractRowInsertDSL):
    """Builder for a single-row insert."""

    supports_when_present = True

    def __init__(self, row: Any):
        super().__init__()
        self._row = row

    def render(self, dialect: DialectArg = None) -> InsertStatement:
        resolved = get_dialect(dialect)
        mappings = [
            m
            for m in self._resolve_mappings(self._row)
            if not (
                isinstance(m, PropertyWhenPresentMapping)
                and read_property(self._row, m.property, self.statement_kind) is None
            )
        ]
        if not mappings:
            raise StatementBuildError("INSERT has no column to render", self.statement_kind)
        sql = resolved.build_insert(
            self._table.name,
            [m.column.name for m in mappings],
            [self._value_expression(m) for m in mappings],
            self._table.schema,
        )
        bindings = [m for m in mappings if isinstance(m, PropertyMapping)]
        return InsertStatement(sql=sql, parameters=bind_row(self._row, bindings), row=self._row)


class BatchInsertDSL(AbstractRowInsertDSL):
    """Builder for a batch insert: one INSERT text executed once per record."""

    statement_kind = "insert_batch"

    def __init__(self, records: Collection[Any]):
        super().__init__()
        self._records: Tuple[Any, ...] = tuple(records)

    def render(self, dialect: DialectArg = None) -> BatchInsert:
        if not self._records:
            if self._table is None:
                raise StatementBuildError("INSERT requires a target table", self.statement_kind)
            # nothing to execute, so no statement text
            return BatchInsert(sql="", records=())
        resolved = get_dialect(dialect)
        mappings = self._resolve_mappings(self._records[0])
        sql = resolved.build_insert(
            self._table.name,
            [m.column.name for m in mappings],
            [self._value_expression(m) for m in mappings],
            self._table.schema,
        )
        bindings = tuple(m for m in mappings if isinstance(m, PropertyMapping))
        return BatchInsert(sql=sql, records=self._records, bindings=bindings)


class MultiRowInsertDSL(AbstractRowInsertDSL):
    """Builder for one INSERT statement covering every record."""

    statement_kind = "insert_multiple"

    def __init__(self, records: Collection[Any]):
        super().__init__()
        self._records: Tuple[Any, ...] = tuple(records)

    def render(self, dialect: DialectArg = None) -> MultiRowInsertStatement:
        if not self._records:
            raise StatementBuildError("Multi-row insert requires at least one record", self.statement_kind)
        resolved = get_dialect(dialect)
        mappings = self._resolve_mappings(self._records[0])
        rows = [
            [self._value_expression(m, index) for m in mappings]
            for index in range(len(self._records))
        ]
        sql = resolved.build_multi_row_insert(
            self._table.name,
            [m.column.name for m in mappings],
            rows,
            self._table.schema,
        )
        bindings = [m for m in mappings if isinstance(m, PropertyMapping)]
        parameters = {}
        for index, record in enumerate(self._records):
            parameters.update(bind_row(record, bindings, index, self.statement_kind))
        return MultiRowInsertStatement(sql=sql, parameters=parameters, records=self._records)


class ValueMappingDSL:
    """Second half of ``set(column)`` for general inserts."""

    def __init__(self, builder: "GeneralInsertDSL", column: SqlColumn):
        self._builder = builder
        self._column = column

    def to_value(self, value: Any) -> "GeneralInsertDSL":
        return self._builder._add(ValueMapping(self._column, value))

    def to_value_when_present(self, value: Any) -> "GeneralInsertDSL":
        return self._builder._add(ValueWhenPresentMapping(self._column, value))

    def to_null(self) -> "GeneralInsertDSL":
        return self._builder._add(NullMapping(self._column))

    def to_constant(self, constant: str) -> "GeneralInsertDSL":
        return self._builder._add(ConstantMapping(self._column, constant))

    def to_string_constant(self, constant: str) -> "GeneralInsertDSL":
        return self._builder._add(StringConstantMapping(self._column, constant))


class GeneralInsertDSL:
    """Builder for inserts whose values are supplied directly, not from a row."""

    def __init__(self, table: SqlTable):
        self._table = table
        self._mappings: List[ColumnMapping] = []

    def set(self, column: SqlColumn) -> ValueMappingDSL:
        return ValueMappingDSL(self, column)

    def _add(self, mapping: ColumnMapping) -> "GeneralInsertDSL":
        self._mappings.append(mapping)
        return self

    def render(self, dialect: DialectArg = None) -> GeneralInsertStatement:
        context = RenderingContext(get_dialect(dialect))
        columns: List[str] = []
        values: List[str] = []
        for mapping in self._mappings:
            if isinstance(mapping, ValueWhenPresentMapping) and mapping.value is None:
                continue
            if isinstance(mapping, ValueMapping):
                values.append(context.bind(mapping.column.convert_parameter_type(mapping.value)))
            else:
                values.append(AbstractRowInsertDSL._literal(mapping))
            columns.append(mapping.column.name)
        if not columns:
            raise StatementBuildError("INSERT has no column to render", "insert_into")
        sql = context.dialect.build_insert(self._table.name, columns, values, self._table.schema)
        return GeneralInsertStatement(sql=sql, parameters=context.parameters)


class InsertSelectDSL:
    """
    Builder for INSERT ... SELECT.

    ``select`` returns the select builder, which the caller completes with
    ``from_``/``where``/... clauses.
    """

    def __init__(self, table: SqlTable):
        self._table = table
        self._columns: List[SqlColumn] = []
        self._select: Optional[QueryExpressionDSL] = None

    def columns(self, *columns: SqlColumn) -> "InsertSelectDSL":
        self._columns.extend(columns)
        return self

    def select(self, *columns: Any) -> QueryExpressionDSL:
        self._select = QueryExpressionDSL(columns, statement_kind="insert_select")
        return self._select

    def render(self, dialect: DialectArg = None) -> InsertSelectStatement:
        if self._select is None:
            raise StatementBuildError("INSERT ... SELECT requires a select statement", "insert_select")
        context = RenderingContext(get_dialect(dialect))
        select_sql = self._select.render_fragment(context.child())
        sql = context.dialect.build_insert_select(
            self._table.name,
            [c.name for c in self._columns],
            select_sql,
            self._table.schema,
        )
        return InsertSelectStatement(sql=sql, parameters=context.parameters)


def insert(row: Any) -> InsertDSL:
    return InsertDSL(row)


def insert_batch(records: Collection[Any]) -> BatchInsertDSL:
    return BatchInsertDSL(records)


def insert_multiple(records: Collection[Any]) -> MultiRowInsertDSL:
    return MultiRowInsertDSL(records)


def insert_into(table: SqlTable) -> GeneralInsertDSL:
    return GeneralInsertDSL(table)


def insert_select(table: SqlTable) -> InsertSelectDSL:
    return InsertSelectDSL(table)
