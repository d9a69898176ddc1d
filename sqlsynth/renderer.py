"""
=========================================
Request dispatch to the statement renderers.
=========================================

StatementRenderer turns a TableStatementRequest into SQL text by picking the
rendering function for ``request.operation``. SELECT requests pick their
variant from the request's fields: a join spec wins, then an aggregate
function, then ORDER BY, then the plain/DISTINCT form.

Example:
    >>> from sqlsynth.models import TableStatementRequest
    >>> from sqlsynth.renderer import StatementRenderer
    >>> from sqlsynth.vocabulary import QueryType
    >>>
    >>> request = TableStatementRequest(QueryType.DELETE, table='t')
    >>> StatementRenderer().render(request).sql
    'DELETE FROM t;'
"""

import logging
from typing import Callable, Dict, List

from sqlsynth import ddl, dml, query_builder
from sqlsynth.errors import (
    FailureReason,
    RenderResult,
    SqlSynthesisError,
    UnsupportedFeatureError,
)
from sqlsynth.models import ColumnDefinition, TableStatementRequest
from sqlsynth.validator import columns_from_lists
from sqlsynth.vocabulary import QueryType

logger = logging.getLogger(__name__)


def _ddl_columns(request: TableStatementRequest) -> List[ColumnDefinition]:
    """ColumnDefinitions of the request, built from the parallel lists when needed."""
    if request.columns:
        return list(request.columns)
    return columns_from_lists(request.column_names, request.data_types, request.column_constraints)


def _render_select(request: TableStatementRequest) -> RenderResult:
    if request.join is not None:
        return query_builder.join_builder(
            request.join, request.column_names, request.where, request.order_by, request.distinct
        )
    if request.aggregate is not None:
        return query_builder.aggregate_builder(
            request.table, request.aggregate, request.column_names, request.where, request.distinct
        )
    if request.order_by is not None:
        return query_builder.order_by_builder(
            request.table, request.column_names, request.order_by, request.where, request.distinct
        )
    return query_builder.select_builder(
        request.table, request.column_names, request.where, request.distinct
    )


_HANDLERS: Dict[QueryType, Callable[[TableStatementRequest], RenderResult]] = {
    QueryType.SELECT: _render_select,
    QueryType.INSERT: lambda r: dml.insert(r.table, r.values, r.column_names),
    QueryType.UPDATE: lambda r: dml.update(r.table, r.column_names, r.values, r.where),
    QueryType.DELETE: lambda r: dml.delete(r.table, r.where),
    QueryType.CREATE_DATABASE: lambda r: ddl.create_database(r.database),
    QueryType.DROP_DATABASE: lambda r: ddl.drop_database(r.database),
    QueryType.CREATE_TABLE: lambda r: ddl.create_table(r.table, _ddl_columns(r)),
    QueryType.DROP_TABLE: lambda r: ddl.drop_table(r.table),
    QueryType.TRUNCATE_TABLE: lambda r: ddl.truncate_table(r.table),
    QueryType.ALTER_TABLE_ADD: lambda r: ddl.alter_table_add_columns(r.table, _ddl_columns(r)),
    QueryType.ALTER_TABLE_ADD_CONSTRAINTS: lambda r: ddl.alter_table_add_constraints(r.table, _ddl_columns(r)),
    QueryType.ALTER_TABLE_DROP: lambda r: ddl.alter_table_drop_columns(r.table, r.column_names),
    QueryType.ALTER_TABLE_MODIFY: lambda r: ddl.alter_table_modify_columns(r.table, _ddl_columns(r)),
    QueryType.ALTER_TABLE_DROP_UNIQUE: lambda r: ddl.drop_unique_constraint(r.table),
    QueryType.ALTER_TABLE_DROP_PRIMARY_KEY: lambda r: ddl.drop_primary_key(r.table),
    QueryType.ALTER_TABLE_DROP_FOREIGN_KEY: lambda r: ddl.drop_foreign_key(r.table),
    QueryType.ALTER_TABLE_DROP_CHECK: lambda r: ddl.drop_check_constraint(r.table),
}


class StatementRenderer:
    """Render TableStatementRequests.

    Stateless; one instance can be shared across threads.
    """

    def render(self, request: TableStatementRequest) -> RenderResult:
        """Render one request.

        Args:
            request: The request to render

        Returns:
            RenderResult with the statement text, or a failure such as
            UNSUPPORTED_OPERATION when the operation has no renderer
        """
        operation = getattr(request.operation, 'name', str(request.operation)).lower()
        handler = _HANDLERS.get(request.operation)
        if handler is None:
            error = UnsupportedFeatureError(
                FailureReason.UNSUPPORTED_OPERATION,
                f"No renderer for operation {request.operation!r}"
            )
            logger.error(error.message)
            return RenderResult.failed(error, operation=operation)

        try:
            result = handler(request)
        except SqlSynthesisError as e:
            # Raised while building columns from parallel lists
            logger.error(f"Failed to render {operation}: {e.message}")
            return RenderResult.failed(e, operation=operation)

        if result.ok:
            logger.info(f"Rendered {operation} for '{request.table or request.database}'")
        return result
