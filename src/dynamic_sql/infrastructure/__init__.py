"""
Infrastructure Layer

Components:
- sql: statement builders, dialects, rendered statements and the
  mapper-support functions

Usage:
    from dynamic_sql.infrastructure.sql import SqlTable, mapper_support
"""

__all__: list[str] = []
