"""
============================
SELECT statement builders.
============================

Low-level builders for the SELECT variants. All builders follow the
_builder naming convention and return a RenderResult.

Query Builders:
- select_builder: Plain or DISTINCT SELECT, optional WHERE and ORDER BY
- aggregate_builder: MIN/MAX/AVG/SUM/COUNT over exactly one column
- order_by_builder: SELECT with a mandatory ORDER BY
- join_builder: SELECT over a left-deep multi-way join

Clause Helpers:
- column_list: Comma-joined column list or ``*``
- order_by_clause: ``ORDER BY name ASC,age DESC`` text

Usage:
    from sqlsynth.models import OrderBySpec, PredicateChain
    from sqlsynth.query_builder import select_builder, order_by_builder

    select_builder('users', ['name'], where=PredicateChain().where('age', '>=', 18)).sql
    # SELECT name FROM users WHERE age>=18;

    order_by_builder('users', ['name'], OrderBySpec.from_pairs([('name', 'asc')])).sql
    # SELECT name FROM users ORDER BY name ASC;
"""

from typing import Optional, Sequence, Union

from sqlsynth.dml import where_clause
from sqlsynth.errors import FailureReason, ValidationError, rendering
from sqlsynth.models import JoinSpec, OrderBySpec, PredicateChain
from sqlsynth.predicates import predicate_renderer
from sqlsynth.validator import (
    require_column_names,
    require_table_name,
    validate_aggregate_target,
    validate_order_by,
)
from sqlsynth.vocabulary import (
    DISTINCT,
    FROM,
    ORDER_BY,
    STAR,
    STATEMENT_TERMINATOR,
    AggregateFunction,
    QueryType,
)


def column_list(column_names: Optional[Sequence[str]]) -> str:
    """Comma-join column names, or ``*`` when none are given.

    Raises:
        ValidationError: If a given name is empty
    """
    if not column_names:
        return STAR
    require_column_names(column_names)
    return ",".join(column_names)


def order_by_clause(order_by: Optional[OrderBySpec]) -> str:
    """Render `` ORDER BY name ASC,age DESC``; directions are upper-cased.

    Raises:
        ValidationError: EMPTY_ORDER_BY or INVALID_ORDER_DIRECTION
    """
    validate_order_by(order_by)
    items = ",".join(
        f"{item.column} {item.direction.strip().upper()}" for item in order_by
    )
    return f" {ORDER_BY} {items}"


def _select_keyword(distinct: bool) -> str:
    if distinct:
        return f"{QueryType.SELECT.keyword} {DISTINCT}"
    return QueryType.SELECT.keyword


@rendering
def select_builder(
    table: str,
    column_names: Optional[Sequence[str]] = None,
    where: Optional[PredicateChain] = None,
    distinct: bool = False,
    order_by: Optional[OrderBySpec] = None
) -> str:
    """
    Build a plain or DISTINCT SELECT.

    Args:
        table: Table name
        column_names: Columns to select; ``*`` when empty
        where: Optional WHERE chain; empty chains add no WHERE
        distinct: Use SELECT DISTINCT
        order_by: Optional ORDER BY specification

    Returns:
        RenderResult with e.g. ``SELECT DISTINCT a,b FROM t;``
    """
    require_table_name(table)
    sql = f"{_select_keyword(distinct)} {column_list(column_names)} {FROM} {table}{where_clause(where)}"
    if order_by is not None:
        sql += order_by_clause(order_by)
    return sql + STATEMENT_TERMINATOR


@rendering
def aggregate_builder(
    table: str,
    function: Union[AggregateFunction, str],
    column_names: Sequence[str],
    where: Optional[PredicateChain] = None,
    distinct: bool = False
) -> str:
    """
    Build an aggregate SELECT over exactly one column.

    Returns:
        RenderResult with ``SELECT COUNT(a) FROM t;`` or, with ``distinct``,
        ``SELECT COUNT(DISTINCT a) FROM t;``
    """
    require_table_name(table)
    validate_aggregate_target(column_names)
    if isinstance(function, str):
        try:
            function = AggregateFunction(function.strip().upper())
        except ValueError:
            raise ValidationError(
                FailureReason.UNSUPPORTED_OPERATION,
                f"Unknown aggregate function: {function!r}"
            )
    target = f"{DISTINCT} {column_names[0]}" if distinct else column_names[0]
    return (
        f"{QueryType.SELECT.keyword} {function.value}({target}) {FROM} {table}"
        f"{where_clause(where)}{STATEMENT_TERMINATOR}"
    )


@rendering
def order_by_builder(
    table: str,
    column_names: Optional[Sequence[str]],
    order_by: OrderBySpec,
    where: Optional[PredicateChain] = None,
    distinct: bool = False
) -> str:
    """
    Build a SELECT whose ORDER BY is required.

    Returns:
        RenderResult with e.g. ``SELECT a FROM t ORDER BY name ASC,age DESC;``
    """
    require_table_name(table)
    return (
        f"{_select_keyword(distinct)} {column_list(column_names)} {FROM} {table}"
        f"{where_clause(where)}{order_by_clause(order_by)}{STATEMENT_TERMINATOR}"
    )


@rendering
def join_builder(
    join: JoinSpec,
    column_names: Optional[Sequence[str]] = None,
    where: Optional[PredicateChain] = None,
    order_by: Optional[OrderBySpec] = None,
    distinct: bool = False
) -> str:
    """
    Build a SELECT over a multi-way join.

    Returns:
        RenderResult with e.g.
        ``SELECT a,b FROM ((A INNER JOIN B ON p0) LEFT JOIN C ON p1);``
    """
    source = predicate_renderer.render_join(join)
    sql = f"{_select_keyword(distinct)} {column_list(column_names)} {FROM} {source}{where_clause(where)}"
    if order_by is not None:
        sql += order_by_clause(order_by)
    return sql + STATEMENT_TERMINATOR
