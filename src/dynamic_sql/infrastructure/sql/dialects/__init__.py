"""
SQL dialects.

A dialect decides how identifiers are quoted and provides the INSERT
statement skeletons used by the insert builders.
"""

from typing import Dict, Optional, Type, Union

from .generic import GenericDialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect

DIALECTS: Dict[str, Type[GenericDialect]] = {
    GenericDialect.name: GenericDialect,
    PostgreSQLDialect.name: PostgreSQLDialect,
    MySQLDialect.name: MySQLDialect,
}


def get_dialect(dialect: Optional[Union[str, GenericDialect]] = None) -> GenericDialect:
    """
    Resolve a dialect instance.

    Args:
        dialect: Dialect instance, dialect name, or None for the configured
            default (``DSQL_DIALECT``)

    Returns:
        Dialect instance

    Raises:
        ValueError: If the dialect name is unknown
    """
    if isinstance(dialect, GenericDialect):
        return dialect
    if dialect is None:
        from dynamic_sql.config import get_settings

        dialect = get_settings().dialect
    try:
        return DIALECTS[dialect]()
    except KeyError:
        raise ValueError(
            f"Unknown SQL dialect '{dialect}'. Supported: {sorted(DIALECTS)}"
        ) from None


__all__ = [
    "GenericDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "DIALECTS",
    "get_dialect",
]
