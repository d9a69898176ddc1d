"""
===========================================
Data Manipulation Language (DML) rendering.
===========================================

INSERT, UPDATE and DELETE statements. Values are tagged with
``SqlLiteral.of`` (or passed as SqlLiterals): strings are single-quoted,
numbers and booleans are not, and None becomes NULL.

Functions:
    insert: INSERT INTO with or without an explicit column list
    update: UPDATE ... SET for all rows or WHERE-filtered rows
    delete: DELETE FROM for all rows or WHERE-filtered rows

Usage:
    from sqlsynth.dml import insert, update
    from sqlsynth.models import PredicateChain

    insert('t', ['x', 5], column_names=['c1', 'c2']).sql
    # INSERT INTO t ( c1,c2 ) VALUES ('x',5 );

    update('t', ['a'], ['x'], where=PredicateChain().where('id', '=', 1)).sql
    # UPDATE t SET a = 'x' WHERE id=1;
"""

from typing import Any, Optional, Sequence

from sqlsynth.errors import rendering
from sqlsynth.models import PredicateChain, SqlLiteral
from sqlsynth.predicates import predicate_renderer
from sqlsynth.validator import (
    require_column_names,
    require_same_length,
    require_table_name,
    require_values,
)
from sqlsynth.vocabulary import (
    FROM,
    SET,
    STATEMENT_TERMINATOR,
    VALUES,
    WHERE,
    LiteralKind,
    PredicateMode,
    QueryType,
)


def render_value(value: Any) -> str:
    """Render one INSERT/UPDATE value.

    Unlike predicate values, an empty string is kept as ``''``.
    """
    literal = SqlLiteral.of(value)
    if literal.kind is LiteralKind.STRING and not literal.text:
        return "''"
    return literal.render()


def where_clause(where: Optional[PredicateChain]) -> str:
    """Return `` WHERE <predicate>`` or ``""`` for a missing or empty chain."""
    text = predicate_renderer.render(where, PredicateMode.WHERE).rstrip()
    if not text:
        return ""
    return f" {WHERE} {text}"


@rendering
def insert(
    table: str,
    values: Sequence[Any],
    column_names: Optional[Sequence[str]] = None
) -> str:
    """Render INSERT INTO.

    Args:
        table: Target table
        values: Values in column order
        column_names: Optional explicit column list; must match ``values`` in length

    Returns:
        RenderResult with ``INSERT INTO t ( c1,c2 ) VALUES ('x',5 );`` or,
        without column names, ``INSERT INTO t VALUES ('x',5 );``
    """
    require_table_name(table)
    require_values(values)
    value_text = ",".join(render_value(value) for value in values)

    if column_names:
        require_column_names(column_names)
        require_same_length(column_names, values, "columns", "values")
        return (
            f"{QueryType.INSERT.keyword} {table} ( {','.join(column_names)} ) "
            f"{VALUES} ({value_text} ){STATEMENT_TERMINATOR}"
        )
    return f"{QueryType.INSERT.keyword} {table} {VALUES} ({value_text} ){STATEMENT_TERMINATOR}"


@rendering
def update(
    table: str,
    column_names: Sequence[str],
    values: Sequence[Any],
    where: Optional[PredicateChain] = None
) -> str:
    """Render UPDATE ... SET.

    An empty or missing ``where`` updates all rows.

    Example:
        ``UPDATE t SET a = 'x',b = 5;``
    """
    require_table_name(table)
    require_column_names(column_names)
    require_values(values)
    require_same_length(column_names, values, "columns", "values")

    assignments = ",".join(
        f"{name} = {render_value(value)}"
        for name, value in zip(column_names, values)
    )
    return f"{QueryType.UPDATE.keyword} {table} {SET} {assignments}{where_clause(where)}{STATEMENT_TERMINATOR}"


@rendering
def delete(table: str, where: Optional[PredicateChain] = None) -> str:
    """Render ``DELETE FROM t;`` or ``DELETE FROM t WHERE id=1;``."""
    require_table_name(table)
    return f"{QueryType.DELETE.keyword} {FROM} {table}{where_clause(where)}{STATEMENT_TERMINATOR}"
