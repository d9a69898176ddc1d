"""
=====================================
Column constraint aggregation.
=====================================

Turns the constraint chains of a table's columns into the two kinds of
text a DDL statement needs:

- inline text per column: NOT NULL and AUTO_INCREMENT=n, in chain order;
- aggregate clauses: UNIQUE, PRIMARY KEY, FOREIGN KEY and CHECK, which are
  never inlined.

An aggregate with one participating column is rendered bare
(``UNIQUE(email)``); with several it becomes a named constraint
(``CONSTRAINT UC_users UNIQUE(email,phone)``). Clauses are ordered Unique,
PrimaryKey, ForeignKey, Check. Only one foreign key per table is supported.

Example:
    >>> from sqlsynth.constraints import ConstraintAggregator
    >>> result = ConstraintAggregator().aggregate(columns, 'users')
    >>> result.clauses
    ('PRIMARY KEY(id)',)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sqlsynth.errors import FailureReason, UnsupportedFeatureError, ValidationError
from sqlsynth.models import AutoIncrement, ColumnDefinition, NotNull
from sqlsynth.predicates import PredicateRenderer
from sqlsynth.vocabulary import (
    AUTO_INCREMENT,
    CHECK,
    CHECK_PREFIX,
    CONSTRAINT,
    FOREIGN_KEY,
    NOT_NULL,
    PRIMARY_KEY,
    PRIMARY_KEY_PREFIX,
    REFERENCES,
    UNIQUE,
    UNIQUE_PREFIX,
    ConstraintKind,
    PredicateMode,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatedConstraints:
    """Result of aggregating a table's constraints.

    Attributes:
        inline: Inline constraint text per column, in column order ('' for none)
        clauses: Aggregate clauses in Unique, PrimaryKey, ForeignKey, Check order
    """

    inline: Tuple[str, ...] = ()
    clauses: Tuple[str, ...] = ()

    @property
    def has_clauses(self) -> bool:
        return bool(self.clauses)


def render_inline(column: ColumnDefinition) -> str:
    """Render the inline constraints (NOT NULL, AUTO_INCREMENT=n) of one column."""
    parts = []
    for constraint in column.constraints:
        if isinstance(constraint, NotNull):
            parts.append(NOT_NULL)
        elif isinstance(constraint, AutoIncrement):
            parts.append(f"{AUTO_INCREMENT}={constraint.start_value}")
    return " ".join(parts)


class ConstraintAggregator:
    """Pure aggregation of column constraints into DDL text."""

    def __init__(self, predicate_renderer: Optional[PredicateRenderer] = None):
        self.predicate_renderer = predicate_renderer or PredicateRenderer()

    def _named_clause(self, keyword: str, prefix: str, table: str, names: List[str]) -> Optional[str]:
        if not names:
            return None
        if len(names) == 1:
            return f"{keyword}({names[0]})"
        if not table or not table.strip():
            raise ValidationError(
                FailureReason.EMPTY_TABLE_NAME,
                f"A table name is required to name the multi-column {keyword} constraint"
            )
        return f"{CONSTRAINT} {prefix}{table} {keyword}({','.join(names)})"

    def _foreign_key_clause(self, columns: Sequence[ColumnDefinition]) -> Optional[str]:
        bearers = [
            (column.name, fk)
            for column in columns
            for fk in column.constraints.of_kind(ConstraintKind.FOREIGN_KEY)
        ]
        if not bearers:
            return None
        if len(bearers) > 1:
            raise UnsupportedFeatureError(
                FailureReason.MULTIPLE_FOREIGN_KEYS,
                "Only one foreign key per table is supported; found it on "
                + ", ".join(name for name, _ in bearers)
            )
        name, fk = bearers[0]
        return f"{FOREIGN_KEY}({name}) {REFERENCES} {fk.referenced_table}({fk.referenced_column})"

    def _check_clause(self, columns: Sequence[ColumnDefinition], table: str) -> Optional[str]:
        # Predicates grouped per column; the naming rule counts columns
        per_column = []
        for column in columns:
            texts = []
            for check in column.constraints.of_kind(ConstraintKind.CHECK):
                text = self.predicate_renderer.render(check.predicate, PredicateMode.CHECK)
                if text:
                    texts.append(text)
                else:
                    logger.debug(f"Skipping empty CHECK predicate on column '{column.name}'")
            if texts:
                per_column.append(texts)
        if not per_column:
            return None
        predicates = [text for texts in per_column for text in texts]
        if len(per_column) == 1:
            return f"{CHECK}({' AND '.join(predicates)})"
        if not table or not table.strip():
            raise ValidationError(
                FailureReason.EMPTY_TABLE_NAME,
                "A table name is required to name the multi-column CHECK constraint"
            )
        return f"{CONSTRAINT} {CHECK_PREFIX}{table} {CHECK}({' AND '.join(predicates)})"

    def aggregate(self, columns: Sequence[Optional[ColumnDefinition]], table: str) -> AggregatedConstraints:
        """Aggregate the constraints of ``columns`` for ``table``.

        Args:
            columns: Column definitions in table order
            table: Table name, used to name multi-column constraints

        Returns:
            AggregatedConstraints with inline text and aggregate clauses

        Raises:
            ValidationError: MISSING_COLUMN_DEFINITION for a None column, or
                EMPTY_TABLE_NAME when a named constraint needs a table name
            UnsupportedFeatureError: MULTIPLE_FOREIGN_KEYS for a second foreign key
        """
        for position, column in enumerate(columns):
            if column is None:
                raise ValidationError(
                    FailureReason.MISSING_COLUMN_DEFINITION,
                    f"Column definition at position {position} is missing"
                )

        unique = [c.name for c in columns if c.constraints.contains(ConstraintKind.UNIQUE)]
        primary = [c.name for c in columns if c.constraints.contains(ConstraintKind.PRIMARY_KEY)]

        clauses = [
            self._named_clause(UNIQUE, UNIQUE_PREFIX, table, unique),
            self._named_clause(PRIMARY_KEY, PRIMARY_KEY_PREFIX, table, primary),
            self._foreign_key_clause(columns),
            self._check_clause(columns, table),
        ]

        result = AggregatedConstraints(
            inline=tuple(render_inline(column) for column in columns),
            clauses=tuple(clause for clause in clauses if clause),
        )
        logger.debug(f"Aggregated constraints for '{table}': {result.clauses}")
        return result
