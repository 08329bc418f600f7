"""
Rendering context shared by every fragment of one statement.

The context owns the dialect, the parameter namer, the accumulated bind
parameters and the table alias map of the statement being rendered.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from .parameters import ParameterNamer

if TYPE_CHECKING:
    from ..dialects import GenericDialect
    from .table import SqlColumn, SqlTable


class RenderingContext:
    """
    Mutable state for rendering a single statement.

    Subqueries render through a child context that shares the namer and the
    parameter mapping but has its own table aliases.
    """

    def __init__(
        self,
        dialect: "GenericDialect",
        namer: Optional[ParameterNamer] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ):
        self.dialect = dialect
        self.namer = namer or ParameterNamer()
        self.parameters: Dict[str, Any] = parameters if parameters is not None else {}
        self._table_aliases: Dict[int, str] = {}

    def child(self) -> "RenderingContext":
        return RenderingContext(self.dialect, self.namer, self.parameters)

    def register_alias(self, table: "SqlTable", alias: Optional[str]) -> None:
        if alias:
            self._table_aliases[id(table)] = alias

    def table_alias(self, table: "SqlTable") -> Optional[str]:
        return self._table_aliases.get(id(table))

    def bind(self, value: Any) -> str:
        """Register a bind value and return its placeholder."""
        name = self.namer.next_name()
        self.parameters[name] = value
        return f":{name}"

    def table_name(self, table: "SqlTable") -> str:
        return self.dialect.qualify(table.name, table.schema)

    def column_name(self, column: "SqlColumn") -> str:
        """Render a column, qualified by an explicit qualifier or its table alias."""
        qualifier = column.table_qualifier or self.table_alias(column.table)
        return self.dialect.qualify_column(column.name, qualifier)
