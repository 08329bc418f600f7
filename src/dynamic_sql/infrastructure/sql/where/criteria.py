"""
Where-clause criteria and the shared where DSL.

A criterion pairs a column with a condition and optional sub-criteria that
render as a parenthesised group. Criteria whose condition declines to render
are skipped; a WHERE clause with nothing left to render is omitted.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from .conditions import Condition

if TYPE_CHECKING:
    from ..core.rendering import RenderingContext
    from ..core.table import BasicColumn


@dataclass(frozen=True)
class SqlCriterion:
    connector: str
    column: "BasicColumn"
    condition: Condition
    sub_criteria: Tuple["SqlCriterion", ...] = ()


def and_(
    column: "BasicColumn", condition: Condition, *sub_criteria: SqlCriterion
) -> SqlCriterion:
    """Build an AND sub-criterion for use inside ``where``/``and_``/``or_``."""
    return SqlCriterion("AND", column, condition, tuple(sub_criteria))


def or_(
    column: "BasicColumn", condition: Condition, *sub_criteria: SqlCriterion
) -> SqlCriterion:
    """Build an OR sub-criterion for use inside ``where``/``and_``/``or_``."""
    return SqlCriterion("OR", column, condition, tuple(sub_criteria))


def _render_criterion(
    criterion: SqlCriterion, context: "RenderingContext"
) -> Optional[str]:
    initial = None
    if criterion.condition.should_render():
        initial = criterion.condition.render(criterion.column, context)
    if not criterion.sub_criteria:
        return initial

    fragments = [initial] if initial else []
    for sub in criterion.sub_criteria:
        rendered = _render_criterion(sub, context)
        if rendered is None:
            continue
        fragments.append(f"{sub.connector} {rendered}" if fragments else rendered)
    if not fragments:
        return None
    if len(fragments) == 1:
        return fragments[0]
    return f"({' '.join(fragments)})"


def render_criteria(
    criteria: List[SqlCriterion], context: "RenderingContext"
) -> Optional[str]:
    """Render a list of criteria joined by their connectors, or None."""
    fragments: List[str] = []
    for criterion in criteria:
        rendered = _render_criterion(criterion, context)
        if rendered is None:
            continue
        fragments.append(
            f"{criterion.connector} {rendered}" if fragments else rendered
        )
    return " ".join(fragments) if fragments else None


class WhereDSL:
    """Mixin adding where/and_/or_ clauses to a statement builder."""

    def __init__(self) -> None:
        self._criteria: List[SqlCriterion] = []

    def where(
        self, column: "BasicColumn", condition: Condition, *sub_criteria: SqlCriterion
    ):
        self._criteria.append(and_(column, condition, *sub_criteria))
        return self

    def and_(
        self, column: "BasicColumn", condition: Condition, *sub_criteria: SqlCriterion
    ):
        self._criteria.append(and_(column, condition, *sub_criteria))
        return self

    def or_(
        self, column: "BasicColumn", condition: Condition, *sub_criteria: SqlCriterion
    ):
        self._criteria.append(or_(column, condition, *sub_criteria))
        return self

    def _render_where(self, context: "RenderingContext") -> str:
        rendered = render_criteria(self._criteria, context)
        return f" WHERE {rendered}" if rendered else ""
