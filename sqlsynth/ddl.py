"""
=======================================================================
Data Definition Language (DDL) rendering for tables and databases.
=======================================================================

One function per DDL operation. Each validates its input first and returns
a RenderResult: the statement text on success, or a RenderFailure with no
partial SQL.

Functions:
    create_table: CREATE TABLE from ColumnDefinitions
    create_table_from_lists: CREATE TABLE from parallel name/type/constraint lists
    alter_table_add_columns: ALTER TABLE ... ADD columns
    alter_table_add_constraints: ALTER TABLE ... ADD aggregate constraints of existing columns
    alter_table_drop_columns: ALTER TABLE ... DROP COLUMN
    alter_table_modify_columns: ALTER TABLE ... MODIFY COLUMN
    drop_unique_constraint: ALTER TABLE ... DROP INDEX UC_<table>
    drop_primary_key: ALTER TABLE ... DROP PRIMARY KEY
    drop_foreign_key: ALTER TABLE ... DROP FOREIGN KEY FK_<table>
    drop_check_constraint: ALTER TABLE ... DROP CHECK CHK_<table>
    drop_table: DROP TABLE
    truncate_table: TRUNCATE TABLE
    create_database: CREATE DATABASE
    drop_database: DROP DATABASE

Example:
    >>> from sqlsynth.ddl import create_table
    >>> from sqlsynth.models import ColumnDataType, ColumnDefinition, ConstraintChain
    >>> from sqlsynth.vocabulary import SqlDataType
    >>>
    >>> result = create_table('t', [
    ...     ColumnDefinition('id', ColumnDataType(SqlDataType.INT), ConstraintChain().primary_key()),
    ...     ColumnDefinition('name', ColumnDataType(SqlDataType.VARCHAR, 255), ConstraintChain().not_null()),
    ... ])
    >>> print(result.sql)
    CREATE TABLE t (id INT , name VARCHAR(255) NOT NULL , PRIMARY KEY(id));
"""

from typing import List, Optional, Sequence

from sqlsynth.constraints import ConstraintAggregator
from sqlsynth.errors import FailureReason, ValidationError, rendering
from sqlsynth.models import ColumnDataType, ColumnDefinition, ConstraintChain
from sqlsynth.validator import (
    columns_from_lists,
    require_column_definitions,
    require_column_names,
    require_database_name,
    require_table_name,
)
from sqlsynth.vocabulary import (
    ADD,
    CHECK_PREFIX,
    DROP_CHECK,
    DROP_COLUMN,
    DROP_FOREIGN_KEY,
    DROP_INDEX,
    DROP_PRIMARY_KEY,
    FOREIGN_KEY_PREFIX,
    MODIFY_COLUMN,
    STATEMENT_TERMINATOR,
    UNIQUE_PREFIX,
    QueryType,
)

_aggregator = ConstraintAggregator()


def column_text(column: ColumnDefinition, inline: str) -> str:
    """Render ``name type `` plus ``inline `` when the column has inline constraints."""
    text = f"{column.name} {column.data_type.render()} "
    if inline:
        text += f"{inline} "
    return text


def _create_table_sql(table: str, columns: Sequence[ColumnDefinition]) -> str:
    aggregated = _aggregator.aggregate(columns, table)
    body = ", ".join(
        column_text(column, inline)
        for column, inline in zip(columns, aggregated.inline)
    )
    if aggregated.has_clauses:
        body += ", " + ", ".join(aggregated.clauses)
    return f"{QueryType.CREATE_TABLE.keyword} {table} ({body}){STATEMENT_TERMINATOR}"


def _alter(table: str, actions: List[str]) -> str:
    return f"{QueryType.ALTER_TABLE_ADD.keyword} {table} {', '.join(actions)}{STATEMENT_TERMINATOR}"


# ============================================================================
# CREATE TABLE
# ============================================================================

@rendering
def create_table(table: str, columns: Sequence[Optional[ColumnDefinition]]) -> str:
    """Render CREATE TABLE.

    Args:
        table: Table name
        columns: Column definitions in table order

    Returns:
        RenderResult with e.g.
        ``CREATE TABLE t (id INT , name VARCHAR(255) NOT NULL , PRIMARY KEY(id));``
    """
    require_table_name(table)
    require_column_definitions(columns)
    return _create_table_sql(table, columns)


@rendering
def create_table_from_lists(
    table: str,
    column_names: Sequence[str],
    data_types: Sequence[ColumnDataType],
    constraints: Optional[Sequence[Optional[ConstraintChain]]] = None
) -> str:
    """Render CREATE TABLE from parallel lists.

    ``constraints`` may be omitted or hold None for unconstrained columns;
    otherwise all three lists must have the same length.
    """
    require_table_name(table)
    columns = columns_from_lists(column_names, data_types, constraints)
    return _create_table_sql(table, columns)


# ============================================================================
# ALTER TABLE
# ============================================================================

@rendering
def alter_table_add_columns(table: str, columns: Sequence[Optional[ColumnDefinition]]) -> str:
    """Render ALTER TABLE ... ADD for new columns.

    Aggregate constraints of the new columns (UNIQUE, PRIMARY KEY, ...) are
    added after the columns.

    Example:
        ``ALTER TABLE t ADD email VARCHAR(255) NOT NULL, ADD UNIQUE(email);``
    """
    require_table_name(table)
    require_column_definitions(columns)
    aggregated = _aggregator.aggregate(columns, table)
    actions = [
        f"{ADD} {column_text(column, inline).rstrip()}"
        for column, inline in zip(columns, aggregated.inline)
    ]
    actions.extend(f"{ADD} {clause}" for clause in aggregated.clauses)
    return _alter(table, actions)


@rendering
def alter_table_add_constraints(table: str, columns: Sequence[Optional[ColumnDefinition]]) -> str:
    """Render ALTER TABLE ... ADD for the aggregate constraints of existing columns.

    Raises (as a failed result):
        NO_TABLE_CONSTRAINTS: If none of the columns carries an aggregate constraint
    """
    require_table_name(table)
    require_column_definitions(columns)
    aggregated = _aggregator.aggregate(columns, table)
    if not aggregated.has_clauses:
        raise ValidationError(
            FailureReason.NO_TABLE_CONSTRAINTS,
            f"No UNIQUE, PRIMARY KEY, FOREIGN KEY or CHECK constraint to add to '{table}'"
        )
    return _alter(table, [f"{ADD} {clause}" for clause in aggregated.clauses])


@rendering
def alter_table_drop_columns(table: str, column_names: Sequence[str]) -> str:
    """Render ``ALTER TABLE t DROP COLUMN a, DROP COLUMN b;``."""
    require_table_name(table)
    require_column_names(column_names)
    return _alter(table, [f"{DROP_COLUMN} {name}" for name in column_names])


@rendering
def alter_table_modify_columns(table: str, columns: Sequence[Optional[ColumnDefinition]]) -> str:
    """Render ``ALTER TABLE t MODIFY COLUMN a VARCHAR(100), MODIFY COLUMN b INT;``.

    Only names and data types are used; constraints are ignored.
    """
    require_table_name(table)
    require_column_definitions(columns)
    return _alter(table, [
        f"{MODIFY_COLUMN} {column.name} {column.data_type.render()}"
        for column in columns
    ])


@rendering
def drop_unique_constraint(table: str) -> str:
    """Drop the named multi-column UNIQUE constraint ``UC_<table>``."""
    require_table_name(table)
    return _alter(table, [f"{DROP_INDEX} {UNIQUE_PREFIX}{table}"])


@rendering
def drop_primary_key(table: str) -> str:
    require_table_name(table)
    return _alter(table, [DROP_PRIMARY_KEY])


@rendering
def drop_foreign_key(table: str) -> str:
    require_table_name(table)
    return _alter(table, [f"{DROP_FOREIGN_KEY} {FOREIGN_KEY_PREFIX}{table}"])


@rendering
def drop_check_constraint(table: str) -> str:
    require_table_name(table)
    return _alter(table, [f"{DROP_CHECK} {CHECK_PREFIX}{table}"])


# ============================================================================
# TABLE AND DATABASE LIFECYCLE
# ============================================================================

@rendering
def drop_table(table: str) -> str:
    require_table_name(table)
    return f"{QueryType.DROP_TABLE.keyword} {table}{STATEMENT_TERMINATOR}"


@rendering
def truncate_table(table: str) -> str:
    require_table_name(table)
    return f"{QueryType.TRUNCATE_TABLE.keyword} {table}{STATEMENT_TERMINATOR}"


@rendering
def create_database(database: str) -> str:
    require_database_name(database)
    return f"{QueryType.CREATE_DATABASE.keyword} {database}{STATEMENT_TERMINATOR}"


@rendering
def drop_database(database: str) -> str:
    require_database_name(database)
    return f"{QueryType.DROP_DATABASE.keyword} {database}{STATEMENT_TERMINATOR}"
