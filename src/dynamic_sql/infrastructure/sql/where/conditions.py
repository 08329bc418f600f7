"""
Where-clause conditions.

A condition renders the right-hand side of a criterion for a given column.
Conditions that decline to render (``should_render() is False``) are dropped
from the clause, which is how ``*_when_present`` variants and empty IN lists
behave.

Usage:
    >>> from dynamic_sql.infrastructure.sql import is_equal_to, is_in
    >>> cond = is_in(1, None, 3).filter(lambda v: v is not None)
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Tuple

if TYPE_CHECKING:
    from ..core.rendering import RenderingContext
    from ..core.table import BasicColumn


class Condition:
    """Base class for all conditions."""

    def should_render(self) -> bool:
        return True

    def render(self, column: "BasicColumn", context: "RenderingContext") -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class NoValueCondition(Condition):
    operator: str

    def render(self, column: "BasicColumn", context: "RenderingContext") -> str:
        return f"{column.render(context)} {self.operator}"


@dataclass(frozen=True)
class SingleValueCondition(Condition):
    operator: str
    value: Any
    when_present: bool = False

    def should_render(self) -> bool:
        return not (self.when_present and self.value is None)

    def render(self, column: "BasicColumn", context: "RenderingContext") -> str:
        placeholder = context.bind(column.convert_parameter_type(self.value))
        return f"{column.render(context)} {self.operator} {placeholder}"


@dataclass(frozen=True)
class TwoValueCondition(Condition):
    operator: str
    value1: Any
    value2: Any

    def render(self, column: "BasicColumn", context: "RenderingContext") -> str:
        first = context.bind(column.convert_parameter_type(self.value1))
        second = context.bind(column.convert_parameter_type(self.value2))
        return f"{column.render(context)} {self.operator} {first} AND {second}"


@dataclass(frozen=True)
class ListValueCondition(Condition):
    """IN / NOT IN condition. Does not render when the value list is empty."""

    operator: str
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def should_render(self) -> bool:
        return len(self.values) > 0

    def filter(self, predicate: Callable[[Any], bool]) -> "ListValueCondition":
        """Return a condition holding only the values accepted by ``predicate``."""
        return ListValueCondition(
            self.operator, tuple(v for v in self.values if predicate(v))
        )

    def map(self, mapper: Callable[[Any], Any]) -> "ListValueCondition":
        """Return a condition with ``mapper`` applied to every value."""
        return ListValueCondition(self.operator, tuple(mapper(v) for v in self.values))

    def render(self, column: "BasicColumn", context: "RenderingContext") -> str:
        placeholders = ",".join(
            context.bind(column.convert_parameter_type(v)) for v in self.values
        )
        return f"{column.render(context)} {self.operator} ({placeholders})"


@dataclass(frozen=True)
class ColumnComparisonCondition(Condition):
    """Compares a column with another column (join criteria)."""

    operator: str
    right: "BasicColumn"

    def render(self, column: "BasicColumn", context: "RenderingContext") -> str:
        return f"{column.render(context)} {self.operator} {self.right.render(context)}"


def _values(values: Tuple[Any, ...]) -> Tuple[Any, ...]:
    if len(values) == 1 and isinstance(values[0], (list, tuple, set, frozenset)):
        return tuple(values[0])
    return tuple(values)


def is_null() -> NoValueCondition:
    return NoValueCondition("IS NULL")


def is_not_null() -> NoValueCondition:
    return NoValueCondition("IS NOT NULL")


def is_equal_to(value: Any) -> SingleValueCondition:
    return SingleValueCondition("=", value)


def is_equal_to_when_present(value: Any) -> SingleValueCondition:
    return SingleValueCondition("=", value, when_present=True)


def is_not_equal_to(value: Any) -> SingleValueCondition:
    return SingleValueCondition("<>", value)


def is_not_equal_to_when_present(value: Any) -> SingleValueCondition:
    return SingleValueCondition("<>", value, when_present=True)


def is_greater_than(value: Any) -> SingleValueCondition:
    return SingleValueCondition(">", value)


def is_greater_than_when_present(value: Any) -> SingleValueCondition:
    return SingleValueCondition(">", value, when_present=True)


def is_greater_than_or_equal_to(value: Any) -> SingleValueCondition:
    return SingleValueCondition(">=", value)


def is_less_than(value: Any) -> SingleValueCondition:
    return SingleValueCondition("<", value)


def is_less_than_when_present(value: Any) -> SingleValueCondition:
    return SingleValueCondition("<", value, when_present=True)


def is_less_than_or_equal_to(value: Any) -> SingleValueCondition:
    return SingleValueCondition("<=", value)


def is_like(value: Any) -> SingleValueCondition:
    return SingleValueCondition("LIKE", value)


def is_like_when_present(value: Any) -> SingleValueCondition:
    return SingleValueCondition("LIKE", value, when_present=True)


def is_not_like(value: Any) -> SingleValueCondition:
    return SingleValueCondition("NOT LIKE", value)


def is_between(value1: Any, value2: Any) -> TwoValueCondition:
    return TwoValueCondition("BETWEEN", value1, value2)


def is_not_between(value1: Any, value2: Any) -> TwoValueCondition:
    return TwoValueCondition("NOT BETWEEN", value1, value2)


def is_in(*values: Any) -> ListValueCondition:
    """IN condition; accepts varargs or a single list, tuple or set."""
    return ListValueCondition("IN", _values(values))


def is_not_in(*values: Any) -> ListValueCondition:
    """NOT IN condition; accepts varargs or a single list, tuple or set."""
    return ListValueCondition("NOT IN", _values(values))


def equal_to(column: "BasicColumn") -> ColumnComparisonCondition:
    """Column-to-column equality, used for join criteria."""
    return ColumnComparisonCondition("=", column)
