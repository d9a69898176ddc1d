"""
===========================================
Predicate and join rendering.
===========================================

Renders PredicateChains for WHERE clauses, CHECK constraints and JOIN ON
conditions, and nests JoinSpecs into left-deep join groups.

Each condition renders as ``[prefix ]field<operator>value `` with a
trailing space. Symbolic operators (=, >=, <>) are glued to their operands;
word operators (LIKE, IN, BETWEEN, IS NULL) are padded with single spaces.
WHERE text keeps the trailing space; CHECK and ON text is trimmed.

Example:
    >>> from sqlsynth.models import PredicateChain
    >>> from sqlsynth.predicates import PredicateRenderer
    >>> from sqlsynth.vocabulary import PredicateMode
    >>>
    >>> renderer = PredicateRenderer()
    >>> renderer.render(PredicateChain().where('age', '>=', 18), PredicateMode.WHERE)
    'age>=18 '
"""

import logging
from typing import Optional

from sqlsynth.models import JoinSpec, PredicateChain, PredicateCondition
from sqlsynth.validator import validate_join
from sqlsynth.vocabulary import ON, ConditionPrefix, PredicateMode

logger = logging.getLogger(__name__)


def _is_word_operator(operator: str) -> bool:
    return any(ch.isalpha() for ch in operator)


class PredicateRenderer:
    """Stateless renderer for predicate chains and joins."""

    def render_condition(self, condition: PredicateCondition) -> str:
        """Render one condition, including its prefix and trailing space."""
        parts = []
        if condition.prefix is not ConditionPrefix.NONE:
            parts.append(f"{condition.prefix.value} ")

        value = condition.value.render()
        operator = condition.operator.strip()
        if _is_word_operator(operator):
            parts.append(f"{condition.field} {operator}")
            if value:
                parts.append(f" {value}")
        else:
            parts.append(f"{condition.field}{operator}{value}")

        parts.append(" ")
        return "".join(parts)

    def render(self, chain: Optional[PredicateChain], mode: PredicateMode = PredicateMode.WHERE) -> str:
        """Render a chain in the given mode.

        Args:
            chain: Conditions to render; None or empty renders ``""``
            mode: WHERE keeps the trailing space, CHECK and JOIN_ON trim it

        Returns:
            Predicate text without the WHERE/CHECK/ON keyword
        """
        if chain is None or chain.is_empty():
            return ""
        text = "".join(self.render_condition(condition) for condition in chain)
        if mode is not PredicateMode.WHERE:
            text = text.strip()
        logger.debug(f"Rendered {mode.name} predicate: {text!r}")
        return text

    def render_join(self, join: JoinSpec) -> str:
        """Nest a join spec left-deep.

        ``tables=[A, B, C]`` with kinds ``[INNER, LEFT]`` renders
        ``((A INNER JOIN B ON p0) LEFT JOIN C ON p1)``.

        Raises:
            ValidationError: If the join arity is inconsistent
        """
        validate_join(join)
        group = join.tables[0]
        for table, kind, condition in zip(join.tables[1:], join.kinds, join.conditions):
            on_text = self.render(PredicateChain((condition,)), PredicateMode.JOIN_ON)
            group = f"({group} {kind.value} {table} {ON} {on_text})"
        return group


# Module-level renderer; it holds no state
predicate_renderer = PredicateRenderer()
