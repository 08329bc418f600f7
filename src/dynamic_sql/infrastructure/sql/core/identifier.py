"""
SQL identifier handling utilities.

Provides functions for dialect-aware quoting and qualification of SQL
identifiers (table names, column names, aliases).
"""

from typing import Optional

SUPPORTED_DIALECTS = ("generic", "postgresql", "mysql")


def quote_identifier(name: str, dialect: str = "generic") -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        dialect: Database dialect ("generic", "postgresql", "mysql")

    Returns:
        Identifier rendered for the dialect. The generic dialect renders
        identifiers verbatim.

    Examples:
        >>> quote_identifier("order_id")
        'order_id'
        >>> quote_identifier("order_id", dialect="postgresql")
        '"order_id"'
        >>> quote_identifier("table", dialect="mysql")
        '`table`'
    """
    if dialect == "mysql":
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
    if dialect == "postgresql":
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
    return name


def qualify_table(
    table: str, schema: Optional[str] = None, dialect: str = "generic"
) -> str:
    """
    Create a fully qualified table name with optional schema prefix.

    Args:
        table: Table name
        schema: Optional schema name
        dialect: Database dialect

    Returns:
        Qualified table name

    Examples:
        >>> qualify_table("OrderMaster")
        'OrderMaster'
        >>> qualify_table("users", schema="public", dialect="postgresql")
        'public."users"'
    """
    quoted_table = quote_identifier(table, dialect)
    if schema:
        return f"{schema}.{quoted_table}"
    return quoted_table


def qualify_column(
    name: str, qualifier: Optional[str] = None, dialect: str = "generic"
) -> str:
    """
    Render a column name, prefixed with a table alias when one applies.

    Examples:
        >>> qualify_column("order_id", "om")
        'om.order_id'
        >>> qualify_column("order_id")
        'order_id'
    """
    quoted = quote_identifier(name, dialect)
    if qualifier:
        return f"{qualifier}.{quoted}"
    return quoted
