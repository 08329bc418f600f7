"""
Exception hierarchy for statement building and execution.

Build-phase failures are raised by the statement builders when a completer
leaves a statement malformed. Execution-phase failures are raised by the
execution engine; the mapper-support functions propagate both unchanged.
"""

from typing import Any, Dict, Optional


class DynamicSqlError(Exception):
    """Base exception for all dynamic SQL errors."""

    pass


class StatementBuildError(DynamicSqlError):
    """
    Raised when a statement cannot be rendered.

    Typical causes are an empty projection, a missing FROM clause, a join
    without ON criteria or an insert without any mapped column.

    Args:
        message: Error description
        statement_kind: Kind of statement being built (optional)
    """

    def __init__(self, message: str, statement_kind: Optional[str] = None):
        self.statement_kind = statement_kind
        if statement_kind:
            message = f"{message} (statement='{statement_kind}')"
        super().__init__(message)


class ExecutionError(DynamicSqlError):
    """
    Raised when the execution engine fails to run a rendered statement.

    Args:
        message: Error description
        sql: SQL text that failed (optional)
        original_error: Underlying driver or SQLAlchemy error (optional)
    """

    def __init__(
        self,
        message: str,
        sql: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.sql = sql
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "message": str(self),
            "sql": self.sql,
            "original_error_type": (
                type(self.original_error).__name__ if self.original_error else None
            ),
            "original_error_message": (
                str(self.original_error) if self.original_error else None
            ),
        }
