"""
=====================================
Structural checks run before render.
=====================================

Stateless check functions shared by every renderer. Each raises a
ValidationError carrying its own FailureReason at the first problem found;
renderers call them before assembling any text, so a failure never leaves
half a statement behind.

Functions:
    require_table_name: Non-empty table name
    require_database_name: Non-empty database name
    require_column_names: Non-empty list of non-empty names
    require_values: Non-empty value list
    require_same_length: Parallel lists of equal length
    require_column_definitions: Non-empty list without missing definitions
    columns_from_lists: Parallel-list DDL form to ColumnDefinitions
    validate_order_by: ORDER BY items and directions
    validate_join: Join arity
    validate_aggregate_target: Exactly one aggregate column
"""

from typing import List, Optional, Sequence

from sqlsynth.errors import FailureReason, ValidationError
from sqlsynth.models import (
    ColumnDataType,
    ColumnDefinition,
    ConstraintChain,
    JoinSpec,
    OrderBySpec,
)
from sqlsynth.vocabulary import SortDirection

VALID_DIRECTIONS = frozenset(direction.value for direction in SortDirection)


def _is_blank(name: Optional[str]) -> bool:
    return name is None or not str(name).strip()


def require_table_name(table: Optional[str]) -> None:
    if _is_blank(table):
        raise ValidationError(FailureReason.EMPTY_TABLE_NAME, "Table name must not be empty")


def require_database_name(database: Optional[str]) -> None:
    if _is_blank(database):
        raise ValidationError(FailureReason.EMPTY_DATABASE_NAME, "Database name must not be empty")


def require_column_names(names: Optional[Sequence[str]]) -> None:
    """Check that at least one column is named and no name is empty."""
    if not names:
        raise ValidationError(FailureReason.EMPTY_COLUMNS, "At least one column is required")
    for position, name in enumerate(names):
        if _is_blank(name):
            raise ValidationError(
                FailureReason.EMPTY_COLUMN_NAME,
                f"Column name at position {position} is empty"
            )


def require_values(values: Optional[Sequence]) -> None:
    if not values:
        raise ValidationError(FailureReason.EMPTY_VALUES, "At least one value is required")


def require_same_length(
    left: Sequence,
    right: Sequence,
    left_name: str,
    right_name: str
) -> None:
    """Check that two parallel lists have the same length.

    Raises:
        ValidationError: LENGTH_MISMATCH naming both lists and their sizes
    """
    if len(left) != len(right):
        raise ValidationError(
            FailureReason.LENGTH_MISMATCH,
            f"{left_name} has {len(left)} entries but {right_name} has {len(right)}"
        )


def require_column_definitions(columns: Optional[Sequence[Optional[ColumnDefinition]]]) -> None:
    """Check a DDL column list.

    The list must be non-empty, hold no None entries, and every column needs
    a name and a data type.
    """
    if not columns:
        raise ValidationError(FailureReason.EMPTY_COLUMNS, "At least one column definition is required")
    for position, column in enumerate(columns):
        if column is None:
            raise ValidationError(
                FailureReason.MISSING_COLUMN_DEFINITION,
                f"Column definition at position {position} is missing"
            )
        if _is_blank(column.name):
            raise ValidationError(
                FailureReason.EMPTY_COLUMN_NAME,
                f"Column definition at position {position} has an empty name"
            )
        if column.data_type is None:
            raise ValidationError(
                FailureReason.MISSING_DATA_TYPE,
                f"Column '{column.name}' has no data type"
            )


def columns_from_lists(
    names: Sequence[str],
    data_types: Sequence[ColumnDataType],
    constraints: Optional[Sequence[Optional[ConstraintChain]]] = None
) -> List[ColumnDefinition]:
    """Zip the parallel-list DDL form into ColumnDefinitions.

    The constraint list may be empty/None or as long as the name list; None
    entries become empty chains.

    Raises:
        ValidationError: On empty names or mismatched lengths
    """
    require_column_names(names)
    require_same_length(names, data_types, "column names", "data types")
    constraints = list(constraints or [])
    if constraints:
        require_same_length(names, constraints, "column names", "constraints")
    else:
        constraints = [None] * len(names)

    columns = [
        ColumnDefinition(name, data_type, chain if chain is not None else ConstraintChain())
        for name, data_type, chain in zip(names, data_types, constraints)
    ]
    require_column_definitions(columns)
    return columns


def validate_order_by(order_by: Optional[OrderBySpec]) -> None:
    """Check that ORDER BY has items and each direction is ASC or DESC, in any case."""
    if order_by is None or not order_by.items:
        raise ValidationError(FailureReason.EMPTY_ORDER_BY, "ORDER BY needs at least one column")
    for item in order_by:
        if _is_blank(item.column):
            raise ValidationError(FailureReason.EMPTY_COLUMN_NAME, "ORDER BY column name is empty")
        direction = item.direction.strip().upper() if isinstance(item.direction, str) else None
        if direction not in VALID_DIRECTIONS:
            raise ValidationError(
                FailureReason.INVALID_ORDER_DIRECTION,
                f"Invalid ORDER BY direction {item.direction!r} for column '{item.column}'; "
                f"expected ASC or DESC"
            )


def validate_join(join: Optional[JoinSpec]) -> None:
    """Check ``len(tables) == len(conditions) + 1 == len(kinds) + 1`` with at least one join."""
    if join is None:
        raise ValidationError(FailureReason.JOIN_ARITY_MISMATCH, "No join specification given")
    tables, kinds, conditions = len(join.tables), len(join.kinds), len(join.conditions)
    if tables < 2 or tables != conditions + 1 or tables != kinds + 1:
        raise ValidationError(
            FailureReason.JOIN_ARITY_MISMATCH,
            f"Join needs one more table than join kinds and conditions; "
            f"got {tables} tables, {kinds} kinds, {conditions} conditions"
        )
    for table in join.tables:
        require_table_name(table)


def validate_aggregate_target(column_names: Optional[Sequence[str]]) -> None:
    if not column_names or len(column_names) != 1 or _is_blank(column_names[0]):
        count = len(column_names) if column_names else 0
        raise ValidationError(
            FailureReason.AGGREGATE_TARGET,
            f"Aggregate functions need exactly one target column; got {count}"
        )
