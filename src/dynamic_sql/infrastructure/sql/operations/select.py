"""
SELECT and COUNT statement builders.

Example:
    >>> from dynamic_sql.infrastructure.sql import SqlTable, is_equal_to
    >>> from dynamic_sql.infrastructure.sql.operations.select import select
    >>> users = SqlTable("users")
    >>> user_id, active = users.column("id"), users.column("active")
    >>> stmt = select(user_id).from_(users).where(active, is_equal_to(True)).render()
    >>> stmt.sql
    'SELECT id FROM users WHERE active = :p1'
"""

from typing import List, Optional, Sequence, Union

from ..core.exceptions import StatementBuildError
from ..core.rendering import RenderingContext
from ..core.table import BasicColumn, SqlTable
from ..dialects import GenericDialect, get_dialect
from ..select.functions import Count, CountAll
from ..statements import SelectStatement
from ..where.conditions import Condition
from ..where.criteria import SqlCriterion, WhereDSL, render_criteria

TableSource = Union[SqlTable, "QueryExpressionDSL"]


class JoinSpecification:
    """
    One JOIN clause: join type, joined table or subquery, and ON criteria.

    ``on``/``and_`` add join criteria. The remaining builder methods are
    forwarded to the owning select builder so clauses can keep chaining
    after a join.
    """

    def __init__(
        self,
        builder: "QueryExpressionDSL",
        join_type: str,
        source: TableSource,
        alias: Optional[str] = None,
    ):
        self._builder = builder
        self.join_type = join_type
        self.source = source
        self.alias = alias
        self.criteria: List[SqlCriterion] = []

    def on(self, column: BasicColumn, condition: Condition) -> "JoinSpecification":
        self.criteria.append(SqlCriterion("AND", column, condition))
        return self

    def and_(self, column: BasicColumn, condition: Condition) -> "JoinSpecification":
        self.criteria.append(SqlCriterion("AND", column, condition))
        return self

    def join(self, source: TableSource, alias: Optional[str] = None) -> "JoinSpecification":
        return self._builder.join(source, alias)

    def left_join(self, source: TableSource, alias: Optional[str] = None) -> "JoinSpecification":
        return self._builder.left_join(source, alias)

    def right_join(self, source: TableSource, alias: Optional[str] = None) -> "JoinSpecification":
        return self._builder.right_join(source, alias)

    def full_join(self, source: TableSource, alias: Optional[str] = None) -> "JoinSpecification":
        return self._builder.full_join(source, alias)

    def where(self, column: BasicColumn, condition: Condition, *sub_criteria: SqlCriterion):
        return self._builder.where(column, condition, *sub_criteria)

    def group_by(self, *columns: BasicColumn) -> "QueryExpressionDSL":
        return self._builder.group_by(*columns)

    def order_by(self, *columns: BasicColumn) -> "QueryExpressionDSL":
        return self._builder.order_by(*columns)

    def limit(self, limit: int) -> "QueryExpressionDSL":
        return self._builder.limit(limit)

    def offset(self, offset: int) -> "QueryExpressionDSL":
        return self._builder.offset(offset)

    def render(self, dialect: Union[str, GenericDialect, None] = None) -> SelectStatement:
        return self._builder.render(dialect)


class QueryExpressionDSL(WhereDSL):
    """
    Builder for SELECT statements (also used for the COUNT variants).

    Args:
        columns: Select list, in output order
        distinct: Render SELECT DISTINCT
        statement_kind: Name used in build error messages
    """

    def __init__(
        self,
        columns: Sequence[BasicColumn],
        distinct: bool = False,
        statement_kind: str = "select",
    ):
        super().__init__()
        self._columns = list(columns)
        self._distinct = distinct
        self._statement_kind = statement_kind
        self._from: Optional[TableSource] = None
        self._from_alias: Optional[str] = None
        self._joins: List[JoinSpecification] = []
        self._group_by: List[BasicColumn] = []
        self._order_by: List[BasicColumn] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

    def from_(self, source: TableSource, alias: Optional[str] = None) -> "QueryExpressionDSL":
        self._from = source
        self._from_alias = alias
        return self

    def _add_join(self, join_type: str, source: TableSource, alias: Optional[str]) -> JoinSpecification:
        join = JoinSpecification(self, join_type, source, alias)
        self._joins.append(join)
        return join

    def join(self, source: TableSource, alias: Optional[str] = None) -> JoinSpecification:
        return self._add_join("JOIN", source, alias)

    def left_join(self, source: TableSource, alias: Optional[str] = None) -> JoinSpecification:
        return self._add_join("LEFT JOIN", source, alias)

    def right_join(self, source: TableSource, alias: Optional[str] = None) -> JoinSpecification:
        return self._add_join("RIGHT JOIN", source, alias)

    def full_join(self, source: TableSource, alias: Optional[str] = None) -> JoinSpecification:
        return self._add_join("FULL JOIN", source, alias)

    def group_by(self, *columns: BasicColumn) -> "QueryExpressionDSL":
        self._group_by.extend(columns)
        return self

    def order_by(self, *columns: BasicColumn) -> "QueryExpressionDSL":
        self._order_by.extend(columns)
        return self

    def limit(self, limit: int) -> "QueryExpressionDSL":
        self._limit = limit
        return self

    def offset(self, offset: int) -> "QueryExpressionDSL":
        self._offset = offset
        return self

    def render(self, dialect: Union[str, GenericDialect, None] = None) -> SelectStatement:
        """Render to an immutable SelectStatement."""
        context = RenderingContext(get_dialect(dialect))
        sql = self.render_fragment(context)
        return SelectStatement(sql=sql, parameters=context.parameters)

    def render_fragment(self, context: RenderingContext) -> str:
        """Render the statement text into ``context`` (used for subqueries)."""
        self._validate()
        self._register_aliases(context)

        select_list = ", ".join(self._render_select_column(c, context) for c in self._columns)
        keyword = "SELECT DISTINCT" if self._distinct else "SELECT"
        parts = [f"{keyword} {select_list} FROM {self._render_source(self._from, self._from_alias, context)}"]
        for join in self._joins:
            parts.append(self._render_join(join, context))
        sql = " ".join(parts) + self._render_where(context)

        if self._group_by:
            sql += " GROUP BY " + ", ".join(c.render(context) for c in self._group_by)
        if self._order_by:
            sql += " ORDER BY " + ", ".join(self._render_order_by(c) for c in self._order_by)
        if self._limit is not None:
            sql += f" LIMIT {context.bind(self._limit)}"
        if self._offset is not None:
            sql += f" OFFSET {context.bind(self._offset)}"
        return sql

    def _validate(self) -> None:
        if not self._columns:
            raise StatementBuildError("Select list must not be empty", self._statement_kind)
        if self._from is None:
            raise StatementBuildError("FROM clause is required", self._statement_kind)
        for join in self._joins:
            if not join.criteria:
                raise StatementBuildError("JOIN requires at least one ON criterion", self._statement_kind)
            if isinstance(join.source, QueryExpressionDSL) and not join.alias:
                raise StatementBuildError("Joined subquery requires an alias", self._statement_kind)
        if self._limit is not None and self._limit < 0:
            raise StatementBuildError("LIMIT must not be negative", self._statement_kind)
        if self._offset is not None and self._offset < 0:
            raise StatementBuildError("OFFSET must not be negative", self._statement_kind)

    def _register_aliases(self, context: RenderingContext) -> None:
        if isinstance(self._from, SqlTable):
            context.register_alias(self._from, self._from_alias)
        for join in self._joins:
            if isinstance(join.source, SqlTable):
                context.register_alias(join.source, join.alias)

    def _render_source(self, source: TableSource, alias: Optional[str], context: RenderingContext) -> str:
        if isinstance(source, QueryExpressionDSL):
            rendered = f"({source.render_fragment(context.child())})"
        else:
            rendered = context.table_name(source)
        return f"{rendered} {alias}" if alias else rendered

    def _render_join(self, join: JoinSpecification, context: RenderingContext) -> str:
        source = self._render_source(join.source, join.alias, context)
        criteria = render_criteria(join.criteria, context)
        return f"{join.join_type} {source} ON {criteria}"

    @staticmethod
    def _render_select_column(column: BasicColumn, context: RenderingContext) -> str:
        rendered = column.render(context)
        if column.alias:
            return f"{rendered} AS {column.alias}"
        return rendered

    @staticmethod
    def _render_order_by(column: BasicColumn) -> str:
        name = column.order_by_name()
        return f"{name} DESC" if column.is_descending else name


def select(*columns: BasicColumn) -> QueryExpressionDSL:
    return QueryExpressionDSL(columns)


def select_distinct(*columns: BasicColumn) -> QueryExpressionDSL:
    return QueryExpressionDSL(columns, distinct=True, statement_kind="select_distinct")


def count_column(column: BasicColumn) -> QueryExpressionDSL:
    """SELECT COUNT(column) builder."""
    return QueryExpressionDSL([Count(column)], statement_kind="count")


def count_distinct_column(column: BasicColumn) -> QueryExpressionDSL:
    """SELECT COUNT(DISTINCT column) builder."""
    return QueryExpressionDSL([Count(column, distinct=True)], statement_kind="count_distinct")


def count_all_from(table: SqlTable) -> QueryExpressionDSL:
    """SELECT COUNT(*) FROM table builder."""
    return QueryExpressionDSL([CountAll()], statement_kind="count_from").from_(table)
