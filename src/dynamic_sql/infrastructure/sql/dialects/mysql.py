"""MySQL-specific SQL dialect implementation (backtick quoting)."""

from .generic import GenericDialect


class MySQLDialect(GenericDialect):
    """MySQL SQL dialect implementation."""

    name = "mysql"
