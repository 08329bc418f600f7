"""DELETE statement builder."""

from typing import Union

from ..core.rendering import RenderingContext
from ..core.table import SqlTable
from ..dialects import GenericDialect, get_dialect
from ..statements import DeleteStatement
from ..where.criteria import WhereDSL


class DeleteDSL(WhereDSL):
    """
    Builder for DELETE statements.

    A delete without where criteria removes every row of the table.
    """

    def __init__(self, table: SqlTable):
        super().__init__()
        self._table = table

    def render(self, dialect: Union[str, GenericDialect, None] = None) -> DeleteStatement:
        context = RenderingContext(get_dialect(dialect))
        sql = f"DELETE FROM {context.table_name(self._table)}" + self._render_where(context)
        return DeleteStatement(sql=sql, parameters=context.parameters)


def delete_from(table: SqlTable) -> DeleteDSL:
    return DeleteDSL(table)
