"""Where-clause conditions and criteria."""

from .conditions import (
    ColumnComparisonCondition,
    Condition,
    ListValueCondition,
    NoValueCondition,
    SingleValueCondition,
    TwoValueCondition,
    equal_to,
    is_between,
    is_equal_to,
    is_equal_to_when_present,
    is_greater_than,
    is_greater_than_or_equal_to,
    is_greater_than_when_present,
    is_in,
    is_less_than,
    is_less_than_or_equal_to,
    is_less_than_when_present,
    is_like,
    is_like_when_present,
    is_not_between,
    is_not_equal_to,
    is_not_equal_to_when_present,
    is_not_in,
    is_not_like,
    is_not_null,
    is_null,
)
from .criteria import SqlCriterion, WhereDSL, and_, or_, render_criteria

__all__ = [
    "Condition",
    "NoValueCondition",
    "SingleValueCondition",
    "TwoValueCondition",
    "ListValueCondition",
    "ColumnComparisonCondition",
    "SqlCriterion",
    "WhereDSL",
    "and_",
    "or_",
    "render_criteria",
    "equal_to",
    "is_between",
    "is_equal_to",
    "is_equal_to_when_present",
    "is_greater_than",
    "is_greater_than_or_equal_to",
    "is_greater_than_when_present",
    "is_in",
    "is_less_than",
    "is_less_than_or_equal_to",
    "is_less_than_when_present",
    "is_like",
    "is_like_when_present",
    "is_not_between",
    "is_not_equal_to",
    "is_not_equal_to_when_present",
    "is_not_in",
    "is_not_like",
    "is_not_null",
    "is_null",
]
