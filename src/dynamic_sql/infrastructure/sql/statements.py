"""
Rendered statements.

Every builder renders to one of these immutable values: the SQL text with
``:name`` placeholders plus a read-only mapping of bind parameters. Row-based
insert statements also carry the record(s) they were rendered from.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Tuple

from .operations.mappings import PropertyMapping, bind_row


@dataclass(frozen=True)
class RenderedStatement:
    """
    Base for all rendered statements.

    Attributes:
        sql: Statement text with named placeholders (``:p1``)
        parameters: Bind values keyed by placeholder name (read-only)
    """

    sql: str
    parameters: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))


@dataclass(frozen=True)
class SelectStatement(RenderedStatement):
    pass


@dataclass(frozen=True)
class DeleteStatement(RenderedStatement):
    pass


@dataclass(frozen=True)
class UpdateStatement(RenderedStatement):
    pass


@dataclass(frozen=True)
class GeneralInsertStatement(RenderedStatement):
    pass


@dataclass(frozen=True)
class InsertSelectStatement(RenderedStatement):
    pass


@dataclass(frozen=True)
class InsertStatement(RenderedStatement):
    """Single-row insert. ``row`` is the record the parameters were read from."""

    row: Any = field(default=None, hash=False)


@dataclass(frozen=True)
class MultiRowInsertStatement(RenderedStatement):
    """One INSERT statement with a VALUES tuple per record."""

    records: Tuple[Any, ...] = field(default=(), hash=False)


@dataclass(frozen=True)
class BatchInsert:
    """
    A single-row INSERT text to be executed once per record.

    Attributes:
        sql: Statement text shared by every record
        records: Records in input order
        bindings: Property mappings bound by the statement
    """

    sql: str
    records: Tuple[Any, ...] = field(default=(), hash=False)
    bindings: Tuple[PropertyMapping, ...] = ()

    def insert_statements(self) -> List[InsertStatement]:
        """Expand into one InsertStatement per record, preserving order."""
        return [
            InsertStatement(
                sql=self.sql,
                parameters=bind_row(record, self.bindings, statement_kind="insert_batch"),
                row=record,
            )
            for record in self.records
        ]
