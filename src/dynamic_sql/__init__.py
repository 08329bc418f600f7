"""
dynamic_sql - Dynamic SQL statements with mapper support functions.

Statements are built from tables, columns and completer callables, rendered
to SQL text plus named parameters, and executed by caller-supplied mappers.
"""

__version__ = "0.1.0"
