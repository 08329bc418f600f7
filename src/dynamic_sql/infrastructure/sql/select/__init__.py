"""Select-list functions."""

from .functions import (
    Count,
    CountAll,
    Substring,
    UniFunction,
    avg,
    count,
    count_all,
    count_distinct,
    lower,
    max_,
    min_,
    substring,
    sum_,
    upper,
)

__all__ = [
    "Count",
    "CountAll",
    "Substring",
    "UniFunction",
    "avg",
    "count",
    "count_all",
    "count_distinct",
    "lower",
    "max_",
    "min_",
    "substring",
    "sum_",
    "upper",
]
