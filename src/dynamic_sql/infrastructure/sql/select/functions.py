"""
SQL functions usable in select lists and where clauses.

Functions wrap a column and render a function call around it. Like columns
they are immutable and accept an alias through ``as_``.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ..core.table import BasicColumn

if TYPE_CHECKING:
    from ..core.rendering import RenderingContext


@dataclass(frozen=True)
class UniFunction(BasicColumn):
    """A single-argument function such as UPPER(col) or MAX(col)."""

    function_name: str
    column: BasicColumn
    alias: Optional[str] = None

    def render(self, context: "RenderingContext") -> str:
        return f"{self.function_name}({self.column.render(context)})"

    def convert_parameter_type(self, value: Any) -> Any:
        return self.column.convert_parameter_type(value)


@dataclass(frozen=True)
class Substring(BasicColumn):
    column: BasicColumn
    offset: int
    length: int
    alias: Optional[str] = None

    def render(self, context: "RenderingContext") -> str:
        return f"SUBSTRING({self.column.render(context)}, {self.offset}, {self.length})"

    def convert_parameter_type(self, value: Any) -> Any:
        return self.column.convert_parameter_type(value)


@dataclass(frozen=True)
class Count(BasicColumn):
    column: BasicColumn
    distinct: bool = False
    alias: Optional[str] = None

    def render(self, context: "RenderingContext") -> str:
        rendered = self.column.render(context)
        if self.distinct:
            return f"COUNT(DISTINCT {rendered})"
        return f"COUNT({rendered})"


@dataclass(frozen=True)
class CountAll(BasicColumn):
    alias: Optional[str] = None

    def render(self, context: "RenderingContext") -> str:
        return "COUNT(*)"


def substring(column: BasicColumn, offset: int, length: int) -> Substring:
    return Substring(column, offset, length)


def upper(column: BasicColumn) -> UniFunction:
    return UniFunction("UPPER", column)


def lower(column: BasicColumn) -> UniFunction:
    return UniFunction("LOWER", column)


def max_(column: BasicColumn) -> UniFunction:
    return UniFunction("MAX", column)


def min_(column: BasicColumn) -> UniFunction:
    return UniFunction("MIN", column)


def avg(column: BasicColumn) -> UniFunction:
    return UniFunction("AVG", column)


def sum_(column: BasicColumn) -> UniFunction:
    return UniFunction("SUM", column)


def count(column: BasicColumn) -> Count:
    return Count(column)


def count_distinct(column: BasicColumn) -> Count:
    return Count(column, distinct=True)


def count_all() -> CountAll:
    return CountAll()
