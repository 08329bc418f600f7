"""
Table and column model for the statement builders.

Tables are plain named references that remember the columns declared on
them. Columns are immutable; every ``with``/``as_`` style operation returns
a modified copy.

Usage:
    >>> users = SqlTable("users")
    >>> user_id = users.column("id")
    >>> active = users.column("active")
"""

import dataclasses
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from .exceptions import StatementBuildError

if TYPE_CHECKING:
    from .rendering import RenderingContext


def to_camel_case(name: str) -> str:
    """
    Convert a column name to camel case.

    Examples:
        >>> to_camel_case("first_name")
        'firstName'
        >>> to_camel_case("ORDER_ID")
        'orderId'
    """
    words = [w for w in re.split(r"[^0-9A-Za-z]+", name) if w]
    if not words:
        return name
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


class BasicColumn:
    """Anything that can appear in a select list."""

    alias: Optional[str] = None
    is_descending = False

    def render(self, context: "RenderingContext") -> str:
        raise NotImplementedError

    def convert_parameter_type(self, value: Any) -> Any:
        return value

    def as_(self, alias: str) -> "BasicColumn":
        return dataclasses.replace(self, alias=alias)  # type: ignore[type-var]

    def order_by_name(self) -> str:
        """Expressions can only be sorted by their select-list alias."""
        if self.alias:
            return self.alias
        raise StatementBuildError(
            "ORDER BY requires a column or an aliased expression", "select"
        )


@dataclass(frozen=True)
class SqlColumn(BasicColumn):
    """
    A column of a table.

    Attributes:
        name: Column name as known to the database
        table: Owning table
        alias: Select-list alias (rendered ``AS alias``)
        is_descending: Sort direction when used in ORDER BY
        table_qualifier: Explicit qualifier overriding the table alias
        parameter_type_converter: Applied to every value bound for the column
    """

    name: str
    table: "SqlTable"
    alias: Optional[str] = None
    is_descending: bool = False
    table_qualifier: Optional[str] = None
    parameter_type_converter: Optional[Callable[[Any], Any]] = None

    def render(self, context: "RenderingContext") -> str:
        return context.column_name(self)

    def convert_parameter_type(self, value: Any) -> Any:
        if self.parameter_type_converter is None or value is None:
            return value
        return self.parameter_type_converter(value)

    def descending(self) -> "SqlColumn":
        return dataclasses.replace(self, is_descending=True)

    def qualified_with(self, table_qualifier: str) -> "SqlColumn":
        """
        Override the calculated table qualifier.

        Useful for columns of subqueries joined under an alias.
        """
        return dataclasses.replace(self, table_qualifier=table_qualifier)

    def as_camel_case(self) -> "SqlColumn":
        """Alias the column with a quoted camel case version of its name."""
        return dataclasses.replace(self, alias=f'"{to_camel_case(self.name)}"')

    def with_parameter_type_converter(
        self, converter: Callable[[Any], Any]
    ) -> "SqlColumn":
        return dataclasses.replace(self, parameter_type_converter=converter)

    def order_by_name(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True)
class AllColumns(BasicColumn):
    """The ``*`` projection of a table."""

    table: "SqlTable"

    def render(self, context: "RenderingContext") -> str:
        return "*"

    def as_(self, alias: str) -> "AllColumns":
        raise ValueError("'*' cannot be aliased")


class SqlTable:
    """
    A named database table.

    Args:
        name: Table name
        schema: Optional schema name
    """

    def __init__(self, name: str, schema: Optional[str] = None):
        if not name:
            raise ValueError("Table name must not be empty")
        self.name = name
        self.schema = schema
        self._columns: List[SqlColumn] = []

    def column(
        self,
        name: str,
        parameter_type_converter: Optional[Callable[[Any], Any]] = None,
    ) -> SqlColumn:
        """
        Declare a column on this table and return it.

        Declaring a name twice keeps a single entry in :attr:`columns`. A
        repeated declaration without a converter returns the existing column;
        one with a converter replaces the registered column in place.
        """
        for index, existing in enumerate(self._columns):
            if existing.name != name:
                continue
            if parameter_type_converter is None:
                return existing
            column = existing.with_parameter_type_converter(parameter_type_converter)
            self._columns[index] = column
            return column
        column = SqlColumn(
            name=name,
            table=self,
            parameter_type_converter=parameter_type_converter,
        )
        self._columns.append(column)
        return column

    @property
    def columns(self) -> Tuple[SqlColumn, ...]:
        """Declared columns, in declaration order."""
        return tuple(self._columns)

    def all_columns(self) -> AllColumns:
        return AllColumns(self)

    def __repr__(self) -> str:
        if self.schema:
            return f"SqlTable({self.schema}.{self.name})"
        return f"SqlTable({self.name})"
