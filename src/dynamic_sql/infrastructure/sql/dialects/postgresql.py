"""
PostgreSQL-specific SQL dialect implementation.

Quotes identifiers with double quotes so mixed-case and non-ASCII table and
column names survive rendering.
"""

from .generic import GenericDialect


class PostgreSQLDialect(GenericDialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"
