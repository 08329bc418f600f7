"""
Generic SQL dialect implementation.

Renders identifiers verbatim and provides the INSERT statement skeletons
shared by every dialect. Dialect subclasses only change identifier quoting.
"""

from typing import List, Optional, Sequence

from ..core.identifier import qualify_column, qualify_table, quote_identifier


class GenericDialect:
    """Dialect that renders identifiers without quoting."""

    name = "generic"

    def quote(self, identifier: str) -> str:
        """Quote an identifier for this dialect."""
        return quote_identifier(identifier, dialect=self.name)

    def qualify(self, table: str, schema: Optional[str] = None) -> str:
        """Create a fully qualified table reference."""
        return qualify_table(table, schema, dialect=self.name)

    def qualify_column(self, name: str, qualifier: Optional[str] = None) -> str:
        """Render a column name with an optional table alias prefix."""
        return qualify_column(name, qualifier, dialect=self.name)

    def build_insert(
        self,
        table: str,
        columns: List[str],
        placeholders: List[str],
        schema: Optional[str] = None,
    ) -> str:
        """
        Build a single-row INSERT statement.

        Args:
            table: Table name
            columns: List of column names
            placeholders: Value expressions, one per column
            schema: Optional schema name

        Returns:
            INSERT SQL statement
        """
        qualified_table = self.qualify(table, schema)
        quoted_cols = ", ".join(self.quote(c) for c in columns)
        values = ", ".join(placeholders)
        return f"INSERT INTO {qualified_table} ({quoted_cols}) VALUES ({values})"

    def build_multi_row_insert(
        self,
        table: str,
        columns: List[str],
        rows: Sequence[List[str]],
        schema: Optional[str] = None,
    ) -> str:
        """
        Build a multi-row INSERT statement.

        Args:
            table: Table name
            columns: List of column names
            rows: Value expressions per row, each in column order
            schema: Optional schema name

        Returns:
            INSERT SQL statement with one VALUES tuple per row
        """
        qualified_table = self.qualify(table, schema)
        quoted_cols = ", ".join(self.quote(c) for c in columns)
        values = ", ".join(f"({', '.join(row)})" for row in rows)
        return f"INSERT INTO {qualified_table} ({quoted_cols}) VALUES {values}"

    def build_insert_select(
        self,
        table: str,
        columns: List[str],
        select_sql: str,
        schema: Optional[str] = None,
    ) -> str:
        """Build an INSERT ... SELECT statement (column list optional)."""
        qualified_table = self.qualify(table, schema)
        if columns:
            quoted_cols = ", ".join(self.quote(c) for c in columns)
            return f"INSERT INTO {qualified_table} ({quoted_cols}) {select_sql}"
        return f"INSERT INTO {qualified_table} {select_sql}"
