"""Execution engine: runs rendered statements on SQLAlchemy connections."""

from .connection import create_engine_from_settings
from .executor import BATCH_UPDATE_RETURN_VALUE, BatchStatementExecutor, StatementExecutor

__all__ = [
    "BATCH_UPDATE_RETURN_VALUE",
    "BatchStatementExecutor",
    "StatementExecutor",
    "create_engine_from_settings",
]
