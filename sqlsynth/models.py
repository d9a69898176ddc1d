"""
================================================
Request data model for the SQL synthesis engine.
================================================

Typed, immutable building blocks a caller assembles into a
TableStatementRequest: column data types, per-column constraint chains,
tagged literals, predicate chains, join and ordering specifications.

Everything except TableStatementRequest is a frozen dataclass holding
tuples, so a value can be shared and rendered any number of times with the
same result.

Classes:
    ColumnDataType: Data type keyword with optional range/decimal
    NotNull, AutoIncrement, Unique, PrimaryKey, ForeignKey, Check: Constraint facts
    ConstraintChain: Ordered constraint facts of one column
    SqlLiteral: Value tagged with its quoting kind
    PredicateCondition: One prefix/field/operator/value condition
    PredicateChain: Ordered predicate conditions
    JoinSpec: Tables, join kinds and ON conditions of a multi-way join
    OrderByItem, OrderBySpec: ORDER BY items
    ColumnDefinition: Column name, type and constraints
    TableStatementRequest: Everything needed to render one statement

Example:
    >>> from sqlsynth.models import ColumnDataType, ColumnDefinition, ConstraintChain
    >>> from sqlsynth.vocabulary import SqlDataType
    >>>
    >>> name = ColumnDefinition(
    ...     'name',
    ...     ColumnDataType(SqlDataType.VARCHAR, 255),
    ...     ConstraintChain().not_null()
    ... )
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar, Iterator, List, Optional, Sequence, Tuple, Union

from sqlsynth.errors import FailureReason, ValidationError
from sqlsynth.vocabulary import (
    AggregateFunction,
    ConditionPrefix,
    ConstraintKind,
    JoinKind,
    LiteralKind,
    QueryType,
    SqlDataType,
)

logger = logging.getLogger(__name__)


# ============================================================================
# DATA TYPES
# ============================================================================

@dataclass(frozen=True)
class ColumnDataType:
    """Column data type.

    Attributes:
        kind: SqlDataType keyword
        range: Optional length/precision, rendered in parentheses
        decimal: Optional scale, rendered after the range
    """

    kind: SqlDataType
    range: Optional[int] = None
    decimal: Optional[int] = None

    def render(self) -> str:
        """Render the type, e.g. ``INT``, ``VARCHAR(255)`` or ``DECIMAL(10, 2)``."""
        if self.range is None:
            return self.kind.value
        if self.decimal is None:
            return f"{self.kind.value}({self.range})"
        return f"{self.kind.value}({self.range}, {self.decimal})"

    def __str__(self) -> str:
        return self.render()


# ============================================================================
# LITERALS AND PREDICATES
# ============================================================================

@dataclass(frozen=True)
class SqlLiteral:
    """A value tagged once with how it must appear in SQL text.

    Use ``SqlLiteral.of`` for Python values and ``SqlLiteral.raw`` for
    column references or expressions that must never be quoted.
    """

    kind: LiteralKind
    text: str

    @classmethod
    def of(cls, value: Any) -> "SqlLiteral":
        """Tag a Python value.

        None becomes NULL, bool becomes BOOLEAN, int/float/Decimal become
        NUMBER and everything else is a STRING of its ``str()``.
        """
        if isinstance(value, SqlLiteral):
            return value
        if value is None:
            return cls(LiteralKind.NULL, "NULL")
        if isinstance(value, bool):
            return cls(LiteralKind.BOOLEAN, "TRUE" if value else "FALSE")
        if isinstance(value, (int, float, Decimal)):
            return cls(LiteralKind.NUMBER, str(value))
        return cls(LiteralKind.STRING, str(value))

    @classmethod
    def raw(cls, text: str) -> "SqlLiteral":
        return cls(LiteralKind.RAW, text)

    def render(self) -> str:
        """Render the literal; strings are single-quoted with quotes doubled."""
        if self.kind is LiteralKind.STRING:
            if not self.text:
                return ""
            escaped = self.text.replace("'", "''")
            return f"'{escaped}'"
        return self.text


@dataclass(frozen=True)
class PredicateCondition:
    """One condition of a predicate chain.

    Missing (None) field, operator or value are replaced with empty text and
    logged at DEBUG; the condition then renders with an empty token.

    Attributes:
        prefix: ConditionPrefix placed before the condition
        field: Left-hand side (column or expression)
        operator: Comparison operator (=, >=, LIKE, ...)
        value: Right-hand side as a SqlLiteral
    """

    prefix: ConditionPrefix
    field: str
    operator: str
    value: SqlLiteral

    def __post_init__(self):
        object.__setattr__(self, 'prefix', ConditionPrefix.parse(self.prefix))
        if self.field is None:
            logger.debug("Predicate condition has no field; using empty text")
            object.__setattr__(self, 'field', "")
        if self.operator is None:
            logger.debug(f"Predicate condition on '{self.field}' has no operator; using empty text")
            object.__setattr__(self, 'operator', "")
        if self.value is None:
            logger.debug(f"Predicate condition on '{self.field}' has no value; using empty text")
            object.__setattr__(self, 'value', SqlLiteral(LiteralKind.STRING, ""))
        elif not isinstance(self.value, SqlLiteral):
            object.__setattr__(self, 'value', SqlLiteral.of(self.value))


@dataclass(frozen=True)
class PredicateChain:
    """Ordered, immutable chain of predicate conditions.

    Example:
        >>> chain = PredicateChain().where('age', '>=', 18).and_('city', '=', 'Sandnes')
    """

    conditions: Tuple[PredicateCondition, ...] = ()

    @classmethod
    def of(cls, *conditions: Union[PredicateCondition, Sequence[Any]]) -> "PredicateChain":
        """Build a chain from conditions or (prefix, field, operator, value) tuples."""
        chain = cls()
        for condition in conditions:
            if isinstance(condition, PredicateCondition):
                chain = chain.add(condition)
            else:
                chain = chain.add(PredicateCondition(*condition))
        return chain

    def add(self, condition: PredicateCondition) -> "PredicateChain":
        return PredicateChain(self.conditions + (condition,))

    def where(self, field: str, operator: str, value: Any) -> "PredicateChain":
        return self.add(PredicateCondition(ConditionPrefix.NONE, field, operator, value))

    def and_(self, field: str, operator: str, value: Any) -> "PredicateChain":
        return self.add(PredicateCondition(ConditionPrefix.AND, field, operator, value))

    def or_(self, field: str, operator: str, value: Any) -> "PredicateChain":
        return self.add(PredicateCondition(ConditionPrefix.OR, field, operator, value))

    def not_(self, field: str, operator: str, value: Any) -> "PredicateChain":
        return self.add(PredicateCondition(ConditionPrefix.NOT, field, operator, value))

    def is_empty(self) -> bool:
        return not self.conditions

    def __iter__(self) -> Iterator[PredicateCondition]:
        return iter(self.conditions)

    def __len__(self) -> int:
        return len(self.conditions)


# ============================================================================
# CONSTRAINTS
# ============================================================================

@dataclass(frozen=True)
class NotNull:
    kind: ClassVar[ConstraintKind] = ConstraintKind.NOT_NULL


@dataclass(frozen=True)
class AutoIncrement:
    start_value: int = 1
    kind: ClassVar[ConstraintKind] = ConstraintKind.AUTO_INCREMENT


@dataclass(frozen=True)
class Unique:
    kind: ClassVar[ConstraintKind] = ConstraintKind.UNIQUE


@dataclass(frozen=True)
class PrimaryKey:
    kind: ClassVar[ConstraintKind] = ConstraintKind.PRIMARY_KEY


@dataclass(frozen=True)
class ForeignKey:
    """Reference from the owning column to ``referenced_table(referenced_column)``."""

    referenced_table: str
    referenced_column: str
    kind: ClassVar[ConstraintKind] = ConstraintKind.FOREIGN_KEY


@dataclass(frozen=True)
class Check:
    """CHECK constraint; the predicate is rendered in CHECK mode."""

    predicate: PredicateChain
    kind: ClassVar[ConstraintKind] = ConstraintKind.CHECK


Constraint = Union[NotNull, AutoIncrement, Unique, PrimaryKey, ForeignKey, Check]


@dataclass(frozen=True)
class ConstraintChain:
    """Ordered constraint facts of one column.

    Builders return a new chain, so a chain can be shared between columns.
    Insertion order is the inline render order.

    Example:
        >>> ConstraintChain().not_null().auto_increment(100).primary_key()
    """

    items: Tuple[Constraint, ...] = ()

    def _with(self, constraint: Constraint) -> "ConstraintChain":
        return ConstraintChain(self.items + (constraint,))

    def not_null(self) -> "ConstraintChain":
        return self._with(NotNull())

    def auto_increment(self, start_value: int = 1) -> "ConstraintChain":
        """Add AUTO_INCREMENT; a start value below 1 is replaced by 1."""
        if start_value < 1:
            logger.warning(
                f"AUTO_INCREMENT start value {start_value} is below 1; using 1"
            )
            start_value = 1
        return self._with(AutoIncrement(start_value))

    def unique(self) -> "ConstraintChain":
        return self._with(Unique())

    def primary_key(self) -> "ConstraintChain":
        return self._with(PrimaryKey())

    def foreign_key(self, referenced_table: str, referenced_column: str) -> "ConstraintChain":
        return self._with(ForeignKey(referenced_table, referenced_column))

    def check(self, predicate: PredicateChain) -> "ConstraintChain":
        return self._with(Check(predicate))

    def contains(self, kind: ConstraintKind) -> bool:
        return any(item.kind is kind for item in self.items)

    def of_kind(self, kind: ConstraintKind) -> Tuple[Constraint, ...]:
        return tuple(item for item in self.items if item.kind is kind)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


# ============================================================================
# JOIN AND ORDER BY
# ============================================================================

def _coerce_join_kind(kind: Union[JoinKind, str]) -> JoinKind:
    if isinstance(kind, JoinKind):
        return kind
    token = str(kind).strip().upper()
    for candidate in JoinKind:
        if token in (candidate.name, candidate.value):
            return candidate
    raise ValidationError(FailureReason.INVALID_JOIN_KIND, f"Unknown join kind: {kind!r}")


@dataclass(frozen=True)
class JoinSpec:
    """Left-deep multi-way join.

    ``kinds[i]`` and ``conditions[i]`` join ``tables[i + 1]`` onto the group
    built from the tables before it. Arity is checked by the validator, not
    here, so parallel lists of any length can be carried to it.

    Join kinds may be given as JoinKind members, names or keywords, and
    conditions as PredicateCondition or ``(prefix, field, operator, value)``
    tuples; both are normalised on construction.

    Raises:
        ValidationError: INVALID_JOIN_KIND for an unknown join kind
    """

    tables: Tuple[str, ...]
    kinds: Tuple[JoinKind, ...] = ()
    conditions: Tuple[PredicateCondition, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'tables', tuple(self.tables))
        object.__setattr__(self, 'kinds', tuple(_coerce_join_kind(kind) for kind in self.kinds))
        object.__setattr__(self, 'conditions', tuple(
            c if isinstance(c, PredicateCondition) else PredicateCondition(*c)
            for c in self.conditions
        ))

    @classmethod
    def from_lists(
        cls,
        tables: Sequence[str],
        kinds: Sequence[Union[JoinKind, str]],
        conditions: Sequence[Union[PredicateCondition, Sequence[Any]]]
    ) -> "JoinSpec":
        """Build from independently supplied parallel lists.

        Raises:
            ValidationError: If a join kind name is unknown
        """
        return cls(tables=tuple(tables), kinds=tuple(kinds), conditions=tuple(conditions))

    @classmethod
    def start(cls, table: str) -> "JoinSpec":
        return cls(tables=(table,))

    def join(self, kind: Union[JoinKind, str], table: str, condition: PredicateCondition) -> "JoinSpec":
        return JoinSpec(
            tables=self.tables + (table,),
            kinds=self.kinds + (kind,),
            conditions=self.conditions + (condition,),
        )


@dataclass(frozen=True)
class OrderByItem:
    """ORDER BY column and direction.

    The direction is kept as given; the validator checks it and the
    renderer upper-cases it.
    """

    column: str
    direction: str = "ASC"

    def __post_init__(self):
        if hasattr(self.direction, 'value'):
            object.__setattr__(self, 'direction', self.direction.value)


@dataclass(frozen=True)
class OrderBySpec:
    items: Tuple[OrderByItem, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Sequence[Sequence[str]]) -> "OrderBySpec":
        """Build from (column, direction) pairs, e.g. ``[('name', 'asc')]``."""
        return cls(tuple(OrderByItem(column, direction) for column, direction in pairs))

    def then(self, column: str, direction: str = "ASC") -> "OrderBySpec":
        return OrderBySpec(self.items + (OrderByItem(column, direction),))

    def __iter__(self) -> Iterator[OrderByItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


# ============================================================================
# COLUMNS AND REQUESTS
# ============================================================================

@dataclass(frozen=True)
class ColumnDefinition:
    """Column name, data type and constraint chain.

    Attributes:
        name: Column name
        data_type: ColumnDataType of the column
        constraints: ConstraintChain of the column
    """

    name: str
    data_type: ColumnDataType
    constraints: ConstraintChain = field(default_factory=ConstraintChain)


@dataclass
class TableStatementRequest:
    """Everything needed to render one statement.

    Columns for DDL can be given as ColumnDefinitions (``columns``) or as the
    parallel lists ``column_names``, ``data_types`` and
    ``column_constraints``. DML and SELECT use ``column_names`` and
    ``values``. Each request owns its lists.

    Attributes:
        operation: QueryType to render
        table: Target table name
        columns: ColumnDefinitions for DDL operations
        column_names: Column names (DML/SELECT, or DDL parallel-list form)
        data_types: Data types of the DDL parallel-list form
        column_constraints: Constraint chains of the DDL parallel-list form
        values: Values for INSERT/UPDATE
        where: WHERE predicate chain; empty means no WHERE clause
        order_by: Optional ORDER BY specification
        join: Optional join specification for SELECT
        distinct: SELECT DISTINCT
        aggregate: Optional aggregate function for SELECT
        database: Database name for CREATE/DROP DATABASE
    """

    operation: QueryType
    table: str = ""
    columns: List[ColumnDefinition] = field(default_factory=list)
    column_names: List[str] = field(default_factory=list)
    data_types: List[ColumnDataType] = field(default_factory=list)
    column_constraints: List[Optional[ConstraintChain]] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)
    where: PredicateChain = field(default_factory=PredicateChain)
    order_by: Optional[OrderBySpec] = None
    join: Optional[JoinSpec] = None
    distinct: bool = False
    aggregate: Optional[AggregateFunction] = None
    database: str = ""
